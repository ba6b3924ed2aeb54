"""
Broker parsers. Each *_parser.py module registers its parser class with the
ParserRegistry at import time; use autodiscover_parsers() to load them all.
"""
