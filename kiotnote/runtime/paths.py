"""Centralized path management for kiotnote.

This module provides a single source of truth for the project paths used by
the CLI and the JSON record store. The core parser and aggregator never touch
the filesystem.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _get_project_root() -> Path:
    """Determine the project root directory (KIOTNOTE_HOME or the cwd)."""
    home = os.environ.get("KIOTNOTE_HOME")
    if home:
        return Path(home).expanduser()
    return Path.cwd()


@dataclass
class ProjectPaths:
    """Container for all project-related paths.

    All paths are computed relative to the project root, ensuring consistency
    across all modules regardless of the current working directory.
    """

    root: Path = field(default_factory=_get_project_root)

    def __post_init__(self) -> None:
        self.root = self.root.resolve()

    # --- Configuration paths ---
    @property
    def config(self) -> Path:
        """Configuration directory (config/)."""
        return self.root / "config"

    @property
    def parser_keywords(self) -> Path:
        """Project-level parser keyword TOML file."""
        return self.config / "parser_keywords.toml"

    # --- Record paths ---
    @property
    def data(self) -> Path:
        """Directory holding JSON record files."""
        return self.root / "data"

    @property
    def orders(self) -> Path:
        return self.data / "orders.json"

    @property
    def expenses(self) -> Path:
        return self.data / "expenses.json"

    @property
    def restocks(self) -> Path:
        return self.data / "restocks.json"

    @property
    def catalog(self) -> Path:
        """Product catalog snapshot."""
        return self.data / "catalog.json"

    @property
    def price_history(self) -> Path:
        """Last known unit price per lowercased product name."""
        return self.data / "price_history.json"

    # --- Export paths ---
    @property
    def exports(self) -> Path:
        """Default directory for CSV report exports."""
        return self.root / "exports"


_paths: ProjectPaths | None = None


def get_paths() -> ProjectPaths:
    """Get the singleton ProjectPaths instance."""
    global _paths
    if _paths is None:
        _paths = ProjectPaths()
    return _paths


def reset_paths() -> None:
    """Forget the cached ProjectPaths so KIOTNOTE_HOME is read again."""
    global _paths
    _paths = None
