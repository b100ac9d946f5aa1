"""Routes tiercache log records for a host application.

Library modules only create `logging.getLogger(__name__)` loggers and never
attach handlers. Programs that want to see cache hits, misses and I/O
failures call `setup_logging` once at startup.
"""

import logging
import sys
from typing import List, Optional, Union

from tiercache.infrastructure.config.settings import get_log_level

DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _resolve_level(level: Optional[Union[int, str]]) -> int:
    """Turns a level name or number (or None for the setting) into a logging level."""
    if level is None:
        level = get_log_level()
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(
    log_level: Optional[Union[int, str]] = None,
    log_format: str = DEFAULT_LOG_FORMAT,
    log_file: Optional[str] = None
) -> None:
    """Replaces the root logger's handlers with a stdout handler and an optional file handler.

    Args:
        log_level: Level as an int or name ('DEBUG'). None reads 'logging.level'.
        log_format: Format string shared by every handler.
        log_file: Also append records to this file when given.
    """
    level = _resolve_level(log_level)
    formatter = logging.Formatter(log_format)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
        except OSError as e:
            logging.error(f"Cannot open log file {log_file}: {e}", exc_info=True)

    root = logging.getLogger()
    root.setLevel(level)
    for old in root.handlers[:]:
        root.removeHandler(old)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    logging.getLogger(__name__).info(
        f"tiercache logging at {logging.getLevelName(level)}"
        + (f", also writing to {log_file}" if len(handlers) > 1 else "")
    )
