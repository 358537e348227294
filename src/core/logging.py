import logging
from logging import Logger
from logging.handlers import RotatingFileHandler
import os
import re

from .config_models import LoggingConfig

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
DEFAULT_MAX_HISTORY = 30
_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_SIZE_UNITS = {"": 1, "B": 1, "KB": 1024, "MB": 1024**2, "GB": 1024**3}
_SIZE_PATTERN = re.compile(r"^\s*(\d+)\s*([KMG]?B?)\s*$", re.IGNORECASE)


def resolve_level(config: LoggingConfig | None) -> int:
    """Map a LoggingConfig level name to a logging level, INFO when unset or unknown."""
    level_name = ((config.level if config else None) or "INFO").upper()
    if level_name not in _LEVELS:
        return logging.INFO
    return getattr(logging, level_name)


def parse_file_size(value: str | None) -> int:
    """Parse sizes such as ``10MB``, ``512KB`` or ``2048`` into bytes."""
    if not value:
        return DEFAULT_MAX_FILE_SIZE
    match = _SIZE_PATTERN.match(value)
    if match is None:
        raise ValueError(f"Invalid log file size: {value!r}")
    number, unit = match.groups()
    unit = unit.upper()
    if unit and not unit.endswith("B"):
        unit += "B"
    return int(number) * _SIZE_UNITS[unit]


def _attach_file_handler(root: logging.Logger, config: LoggingConfig, level: int) -> None:
    path = config.file
    for handler in root.handlers:
        if isinstance(handler, RotatingFileHandler) and handler.baseFilename == os.path.abspath(path):
            handler.setLevel(level)
            return

    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    handler = RotatingFileHandler(
        path,
        maxBytes=parse_file_size(config.max_file_size),
        backupCount=config.max_history if config.max_history is not None else DEFAULT_MAX_HISTORY,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    root.addHandler(handler)


def setup_logging(config: LoggingConfig | None = None) -> None:
    """
    Configure root logging from the application's LoggingConfig.

    - Sets root level according to config.level
    - Applies DEFAULT_FORMAT
    - Writes to config.file through a size-rotated handler when set
    - Avoids reconfiguration if handlers already exist (idempotent)
    """
    level = resolve_level(config)
    root = logging.getLogger()

    if root.handlers:
        root.setLevel(level)
    else:
        logging.basicConfig(level=level, format=DEFAULT_FORMAT)
        for noisy in ("uvicorn.access", "sqlalchemy.engine"):
            logging.getLogger(noisy).setLevel(logging.INFO)

    if config is not None and config.file:
        _attach_file_handler(root, config, level)


__all__ = ["setup_logging", "resolve_level", "parse_file_size", "Logger"]
