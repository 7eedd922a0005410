"""Runtime loader for parser keyword layers."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from kiotnote.parser.common import ParserKeywords, build_parser_keywords
from kiotnote.runtime.logging import get_logger
from kiotnote.runtime.paths import get_paths

logger = get_logger(__name__)


def _load_toml(path: Path) -> dict[str, Any]:
    """Load TOML file and return parsed dict; missing files map to empty dict."""
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib  # type: ignore[no-redef]

    if not path.exists():
        return {}

    with open(path, "rb") as f:
        data = tomllib.load(f)
    return data if isinstance(data, dict) else {}


@lru_cache(maxsize=8)
def load_parser_keywords(paths: tuple[str, ...] | None = None) -> ParserKeywords:
    """Load keyword layers from TOML files on top of the built-in tables.

    Args:
        paths: Explicit TOML files, applied in order. Defaults to the
               project-level config/parser_keywords.toml.
    """
    if paths is None:
        files = [get_paths().parser_keywords]
    else:
        files = [Path(path) for path in paths]
        for missing in (path for path in files if not path.exists()):
            logger.warning("Parser keyword file not found: %s", missing)

    configs = tuple(_load_toml(path) for path in files)
    return build_parser_keywords(configs)
