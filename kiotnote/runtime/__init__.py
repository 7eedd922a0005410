"""Runtime infrastructure for kiotnote.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Path resolution via get_paths(), ProjectPaths
- Parser keyword loading via load_parser_keywords()
- JSON record storage via JsonRecordStore

Usage:
    from kiotnote.runtime import get_logger, get_paths

    logger = get_logger(__name__)
    paths = get_paths()
    print(paths.root, paths.data)
"""

from kiotnote.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    set_log_level,
)
from kiotnote.runtime.parser_keywords import load_parser_keywords
from kiotnote.runtime.paths import ProjectPaths, get_paths, reset_paths
from kiotnote.runtime.record_storage import JsonRecordStore, RecordStoreError

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
    # Config
    "load_parser_keywords",
    # Paths
    "get_paths",
    "reset_paths",
    "ProjectPaths",
    # Storage
    "JsonRecordStore",
    "RecordStoreError",
]
