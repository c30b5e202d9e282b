import logging
import sys
from typing import TextIO

from jobboard.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
# Chatty at INFO; request and SQL logging come from our own modules
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "multipart", "python_multipart")


class _JobboardHandler(logging.StreamHandler):
    """Marker type so repeated setup replaces only our own handler."""


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        level = settings.log_level
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        return resolved if isinstance(resolved, int) else logging.INFO
    return level


def setup_logging(level: int | str | None = None, stream: TextIO | None = None) -> None:
    """Send app logs to stdout at the configured level. Safe to call more than once."""
    root = logging.getLogger()
    root.setLevel(_resolve_level(level))
    for handler in [h for h in root.handlers if isinstance(h, _JobboardHandler)]:
        root.removeHandler(handler)
    handler = _JobboardHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
