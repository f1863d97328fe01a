import logging
import sys

_configured_loggers: set[str] = set()


def setup_logger(name: str = "retail_analysis", level: str | int = logging.INFO) -> logging.Logger:
    """
    Configure and return a logger instance for the analysis run.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
        logger.addHandler(handler)

    _configured_loggers.add(name)
    return logger


def set_log_level(level: str | int) -> None:
    """
    Apply the configured level to every logger created by setup_logger.
    """
    for name in _configured_loggers:
        logging.getLogger(name).setLevel(level)
