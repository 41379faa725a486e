"""Project-wide logging utilities that honour the runtime log level."""

import logging
from typing import Optional

from . import config as pt_config


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger configured according to ``PURETREELIB_LOG_LEVEL``."""

    logger_name = "puretreelib" if name is None else f"puretreelib.{name}"
    logger = logging.getLogger(logger_name)
    logger.setLevel(pt_config.runtime_log_level())
    return logger
