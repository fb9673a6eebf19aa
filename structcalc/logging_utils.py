"""
Logging setup.

Library modules log through ``loguru.logger`` and never add sinks on import.
The package disables its own records on import; applications call
configure_logging() once at startup to re-enable them.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger


def configure_logging(level: str = "INFO", log_path: Optional[Union[str, Path]] = None) -> None:
    logger.remove()
    logger.enable("structcalc")
    if log_path is not None:
        logger.add(str(log_path), level="DEBUG", rotation="5 MB", retention=10,
                   enqueue=True, backtrace=False, diagnose=False)
    logger.add(sys.stderr, level=level)  # console
