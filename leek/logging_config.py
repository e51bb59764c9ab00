"""Logger setup for the leek packages.

Handlers write to stderr (or LEEK_LOG_FILE): stdout carries the language
server transport and must stay clean.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from leek import config

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(name: str = 'leek', level: Optional[int] = None,
                 format_string: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(level if level is not None else config.get_log_level())

    log_file = config.get_log_file()
    if log_file is not None:
        handler: logging.Handler = logging.FileHandler(log_file, encoding='utf-8')
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logger.level)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def set_verbose_logging(verbose: bool = False) -> None:
    target_level = logging.DEBUG if verbose else config.get_log_level()
    for name in ('leek', 'leek_lsp'):
        logger = logging.getLogger(name)
        logger.setLevel(target_level)
        for handler in logger.handlers:
            handler.setLevel(target_level)
