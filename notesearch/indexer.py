"""Corpus indexer: walks the workspace roots and loads notes line by line.

The whole corpus is re-read on every run. Each root is walked depth-first
with directory entries in name order, so an unchanged filesystem always
produces the same index order. Paths are keyed relative to the workspace
root using forward slashes.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from . import config
from .models import IndexedCorpus

logger = logging.getLogger(__name__)


def relative_key(path: Union[str, os.PathLike], workspace_root: Union[str, os.PathLike]) -> str:
    """Return *path* relative to *workspace_root* as a forward-slash string."""
    rel = os.path.relpath(os.path.abspath(path), os.path.abspath(workspace_root))
    return Path(rel).as_posix()


def is_excluded(rel_path: str, exclude_patterns: Iterable[str]) -> bool:
    return any(pattern in rel_path for pattern in exclude_patterns)


def read_lines(file_path: Path) -> Optional[List[str]]:
    """Read a note and split it on ``"\\n"``.

    Bytes are decoded as strict UTF-8 without newline translation, so ``\\r``
    characters survive and a trailing newline yields a final empty line.

    Returns:
        The lines, or None when the file cannot be read or decoded.
    """
    try:
        content = file_path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Skipping unreadable file %s: %s", file_path, exc)
        return None
    return content.split("\n")


class CorpusIndexer:
    """Collects notes under a set of roots into an :class:`IndexedCorpus`."""

    def __init__(
        self,
        workspace_root: Path,
        exclude_patterns: Optional[Sequence[str]] = None,
        extensions: Sequence[str] = config.SUPPORTED_EXTENSIONS,
    ) -> None:
        self.workspace_root = Path(workspace_root)
        self.exclude_patterns: Tuple[str, ...] = tuple(
            config.DEFAULT_EXCLUDES if exclude_patterns is None else exclude_patterns
        )
        self.extensions: Tuple[str, ...] = tuple(extensions)
        self._entries: Dict[str, Tuple[str, ...]] = {}
        self.skipped_files = 0

    def build(self, roots: Iterable[Path]) -> IndexedCorpus:
        self._entries = {}
        self.skipped_files = 0

        for root in roots:
            root = Path(root)
            if not root.is_dir():
                logger.debug("Root %s does not exist; skipping", root)
                continue
            self._index_directory(root)

        corpus = IndexedCorpus(workspace_root=self.workspace_root, entries=self._entries)
        logger.info(
            "Indexed %d files (%d lines) under %s",
            len(corpus), corpus.line_count, self.workspace_root,
        )
        if self.skipped_files:
            logger.info("Skipped %d unreadable files", self.skipped_files)
        return corpus

    def _index_directory(self, directory: Path) -> None:
        try:
            with os.scandir(directory) as it:
                items = sorted(it, key=lambda e: e.name)
        except OSError as exc:
            logger.debug("Cannot list directory %s: %s", directory, exc)
            return

        for item in items:
            rel_path = relative_key(item.path, self.workspace_root)
            if is_excluded(rel_path, self.exclude_patterns):
                continue

            if item.is_dir(follow_symlinks=False):
                self._index_directory(Path(item.path))
            elif item.name.endswith(self.extensions):
                self._index_file(Path(item.path), rel_path)

    def _index_file(self, file_path: Path, rel_path: str) -> None:
        lines = read_lines(file_path)
        if lines is None:
            self.skipped_files += 1
            return
        self._entries[rel_path] = tuple(lines)


def build_index(
    roots: Iterable[Path],
    exclude_patterns: Optional[Sequence[str]] = None,
    workspace_root: Optional[Path] = None,
    extensions: Sequence[str] = config.SUPPORTED_EXTENSIONS,
) -> IndexedCorpus:
    """Scan *roots* and return the immutable corpus for this run.

    Args:
        roots: Directories to walk, in order. Overlapping roots are allowed;
            files seen twice simply overwrite their own entry.
        exclude_patterns: Substrings that drop any workspace-relative path
            containing them, including everything below an excluded
            directory. Defaults to :data:`notesearch.config.DEFAULT_EXCLUDES`.
        workspace_root: Base for relative keys. Defaults to the configured
            workspace.
        extensions: File name suffixes that mark a note.
    """
    indexer = CorpusIndexer(
        workspace_root or config.WORKSPACE_ROOT,
        exclude_patterns=exclude_patterns,
        extensions=extensions,
    )
    return indexer.build(roots)
