import logging
import sys


logger = logging.getLogger("modcache")


def configure_logging(debug: bool):
    """
    Route the modcache loggers to stderr, at DEBUG with --debug and INFO otherwise.

    stdout is left to command output (e.g. module source printed by fetch).
    """
    log_level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(log_level)

    if not logger.hasHandlers():
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
