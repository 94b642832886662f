"""Loguru sinks for omnibox.

Every module logs through ``get_logger("<area>")`` so that the ``name`` field
in each line identifies the component (controller, providers.search, ...).
"""

import os
import sys
from typing import Optional

from loguru import logger

from omnibox.utils import get_project_root

_CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[name]}:{function}:{line} - {message}"

_log_file_path: Optional[str] = None


def _resolve_log_file(log_file: Optional[str]) -> str:
    global _log_file_path

    if log_file is not None:
        _log_file_path = log_file if os.path.isabs(log_file) else os.path.join(get_project_root(), log_file)
    elif _log_file_path is None:
        _log_file_path = os.getenv("OMNIBOX_LOG_FILE") or os.path.join(get_project_root(), "omnibox.log")
    return _log_file_path


def setup_logger(
    log_file: Optional[str] = None,
    log_level: str = "INFO",
    rotation: str = "10 MB",
    retention: str = "7 days",
    compression: str = "zip",
    console_output: bool = False,
) -> None:
    """
    Replace all sinks with a rotating file sink and, optionally, stderr.

    The file defaults to ``OMNIBOX_LOG_FILE`` or ``omnibox.log`` in the project
    root; once chosen, later calls without ``log_file`` keep writing there.
    """
    logger.remove()

    if console_output:
        logger.add(sys.stderr, level=log_level, format=_CONSOLE_FORMAT, colorize=True)

    logger.add(
        _resolve_log_file(log_file),
        level=log_level,
        format=_FILE_FORMAT,
        rotation=rotation,
        retention=retention,
        compression=compression,
        encoding="utf-8",
    )


def get_logger(name: Optional[str] = None):
    return logger.bind(name=name or "omnibox")


logger.configure(extra={"name": "omnibox"})
setup_logger()
