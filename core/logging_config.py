"""Logging setup.

The MCP server speaks its protocol over stdout, so every log line goes to stderr.
"""

import logging
import sys

LOGGER_NAME = 'hue_mcp'
LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def setup_logging(level: str = 'INFO') -> logging.Logger:
    """Configure the hue_mcp logger hierarchy and return its root."""
    lvl = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(lvl)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(lvl)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.handlers = [handler]
    logger.propagate = False
    return logger


def get_logger(module_name: str) -> logging.Logger:
    """Return a child of the hue_mcp logger named after a module."""
    return logging.getLogger(f"{LOGGER_NAME}.{module_name}")
