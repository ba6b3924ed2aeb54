"""
Parser Autodiscovery Utility

This module provides autodiscover_parsers(), which imports all modules in
brokerextract.parsers, ensuring all register_parser calls are executed and the parser
registry is fully populated. Use this in the CLI, tests, or any integration to
discover all available broker parsers.

Usage:
    from brokerextract.parsers_core.autodiscover import autodiscover_parsers
    autodiscover_parsers()  # Populates ParserRegistry

    from brokerextract.parsers_core.registry import ParserRegistry
    print(ParserRegistry.list_parsers())
"""

import importlib
import logging
import pathlib

from brokerextract.parsers_core.registry import ParserRegistry

logger = logging.getLogger(__name__)


def autodiscover_parsers():
    """
    Import every *_parser.py module in brokerextract.parsers.
    Returns the parser registry dict for inspection.
    """
    import brokerextract.parsers

    package = brokerextract.parsers
    package_dir = pathlib.Path(package.__path__[0])
    for pyfile in sorted(package_dir.glob("*_parser.py")):
        modname = f"{package.__name__}.{pyfile.stem}"
        logger.debug(f"Importing parser module: {modname}")
        importlib.import_module(modname)
    logger.debug(f"Registered parsers: {ParserRegistry.list_parsers()}")
    return ParserRegistry.get_all_parsers()
