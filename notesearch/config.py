"""Default locations and indexing rules for the notes workspace."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Tuple

WORKSPACE_ROOT = Path(os.path.expanduser(os.environ.get("NOTESEARCH_WORKSPACE", "~/clawd")))
NOTES_DIRNAME = "memory"
CONFIG_FILENAME = ".notesearch.toml"

# Substrings matched against workspace-relative paths. Keep the tool's own
# source tree out of the index so it never searches itself.
DEFAULT_EXCLUDES: List[str] = ["node_modules", ".git", "skills/notesearch"]
SUPPORTED_EXTENSIONS: Tuple[str, ...] = (".md", ".qmd")

DEFAULT_LIMIT = 10
CONTEXT_RADIUS = 2
MIN_TOKEN_LENGTH = 3


def default_roots(workspace_root: Path) -> List[Path]:
    """Notes directory first, then the workspace itself for top-level docs."""
    return [workspace_root / NOTES_DIRNAME, workspace_root]
