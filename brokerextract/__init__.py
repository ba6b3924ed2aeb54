"""
brokerextract: turns the text of broker transaction PDFs into normalized activity records.
"""

__version__ = "0.1.0"
