"""Workspace settings, with optional overrides from a TOML file."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import toml

from . import config

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    workspace_root: Path
    roots: List[Path] = field(default_factory=list)
    exclude_patterns: List[str] = field(default_factory=list)
    extensions: Tuple[str, ...] = config.SUPPORTED_EXTENSIONS


def config_path(workspace_root: Path) -> Path:
    return workspace_root / config.CONFIG_FILENAME


def load_config(workspace_root: Path) -> Dict[str, Any]:
    """Load the ``[index]`` table of the workspace TOML file.

    Returns:
        The table as a dictionary, or an empty dictionary when the file is
        missing, unreadable or malformed.
    """
    path = config_path(workspace_root)
    if not path.is_file():
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = toml.load(f)
    except (OSError, UnicodeDecodeError, toml.TomlDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return {}

    section = data.get("index", {})
    if not isinstance(section, dict):
        logger.warning("Ignoring config %s: [index] must be a table", path)
        return {}
    return section


def _string_list(value: Any, key: str) -> Optional[List[str]]:
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        logger.warning("Config key '%s' must be a list of strings; ignoring it", key)
        return None
    return list(value)


def load_settings(workspace_root: Optional[Path] = None) -> Settings:
    """Resolve the effective indexing settings for a workspace.

    Defaults come from :mod:`notesearch.config`. A ``.notesearch.toml`` at
    the workspace root may set:

    - ``roots``: directories to scan, relative to the workspace
    - ``exclude``: extra exclusion substrings, added to the defaults
    - ``extensions``: recognised document suffixes, replacing the defaults

    An empty list leaves the defaults for that key in place.
    """
    root = (workspace_root or config.WORKSPACE_ROOT).expanduser().resolve()
    section = load_config(root)

    roots = config.default_roots(root)
    custom_roots = _string_list(section.get("roots"), "roots")
    if custom_roots:
        roots = [root / r for r in custom_roots]

    excludes = list(config.DEFAULT_EXCLUDES)
    extra = _string_list(section.get("exclude"), "exclude")
    if extra:
        excludes.extend(p for p in extra if p and p not in excludes)

    extensions = config.SUPPORTED_EXTENSIONS
    custom_ext = _string_list(section.get("extensions"), "extensions")
    if custom_ext:
        extensions = tuple(custom_ext)

    return Settings(
        workspace_root=root,
        roots=roots,
        exclude_patterns=excludes,
        extensions=extensions,
    )
