import logging
import sys


def configure_logging(level=None):
    """
    Configure logging for the application.
    Reduces verbose output from PyPDF2, which warns on every odd PDF object.
    """
    if level is None:
        from brokerextract.utils.config import get_config

        level = get_config()["log_level"]

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    logging.getLogger("PyPDF2").setLevel(logging.WARNING)
    logging.getLogger("brokerextract").setLevel(level)

    return logging.getLogger(__name__)
