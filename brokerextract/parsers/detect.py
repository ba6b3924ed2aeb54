import os

from brokerextract.parsers_core.autodiscover import autodiscover_parsers
from brokerextract.parsers_core.errors import DocumentReadError
from brokerextract.parsers_core.registry import ParserRegistry
from brokerextract.utils.pdf_utils import extract_pages


def detect_parser_for_file(file_path):
    """
    Given a file path, return the name of the first parser whose can_parse returns True
    for the first page. Returns None if no parser matches or the file cannot be read.
    """
    try:
        pages = extract_pages(file_path)
    except DocumentReadError:
        return None
    return ParserRegistry.detect_parser_for_lines(pages[0] if pages else [])


def batch_detect_parsers(file_paths):
    """
    Given a list of file paths, return a dict mapping each file to the detected parser name (or None).
    """
    autodiscover_parsers()
    return {fp: detect_parser_for_file(fp) for fp in file_paths}


if __name__ == "__main__":
    import argparse

    from brokerextract.utils.normalize_api import find_pdf_files

    parser = argparse.ArgumentParser(description="Detect the correct parser for files.")
    parser.add_argument("path", help="File or directory to scan")
    args = parser.parse_args()
    path = args.path
    if os.path.isdir(path):
        files = find_pdf_files(path)
    else:
        files = [path]
    results = batch_detect_parsers(files)
    for fp, parser_name in results.items():
        print(f"{fp}: {parser_name}")
