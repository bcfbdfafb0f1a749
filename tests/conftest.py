"""Pytest configuration and fixtures for notesearch tests."""

import shutil
import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest

from notesearch.config import default_roots
from notesearch.indexer import build_index
from notesearch.models import IndexedCorpus


SAMPLE_NOTES = {
    "memory/daily.md": (
        "# Daily log\n"
        "Met with the team about the garden project.\n"
        "Planted tomato seedlings today.\n"
        "Need more compost for the garden beds.\n"
    ),
    "memory/recipes.md": "apple pie\nbanana bread\napple banana smoothie",
    "SOUL.md": "# Soul\nI care about gardens and tomatoes.\n",
    # Everything below must stay out of the index.
    "memory/archive/.git/HEAD.md": "zebra at depth",
    ".git/notes.md": "zebra in git metadata",
    "node_modules/pkg/README.md": "zebra package readme",
    "skills/notesearch/src/notes.md": "zebra tool source",
    "memory/todo.txt": "zebra plain text",
}


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def write_note() -> Callable[[Path, str, str], Path]:
    """Return a helper that writes a file below a root, creating parents."""

    def _write(root: Path, rel_path: str, content: str) -> Path:
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode("utf-8"))
        return path

    return _write


@pytest.fixture
def workspace(temp_dir: Path, write_note) -> Path:
    """A small notes workspace with a few files that must be excluded."""
    root = temp_dir / "workspace"
    for rel_path, content in SAMPLE_NOTES.items():
        write_note(root, rel_path, content)
    return root


@pytest.fixture
def corpus(workspace: Path) -> IndexedCorpus:
    """Index of the sample workspace using the default roots and rules."""
    return build_index(default_roots(workspace), workspace_root=workspace)


@pytest.fixture
def make_corpus(temp_dir: Path) -> Callable[..., IndexedCorpus]:
    """Build an in-memory corpus directly from ``{path: [lines]}``."""

    def _make(entries) -> IndexedCorpus:
        return IndexedCorpus(workspace_root=temp_dir, entries=entries)

    return _make


@pytest.fixture
def sample_notes() -> dict:
    """Raw contents of the sample workspace, keyed by relative path."""
    return dict(SAMPLE_NOTES)
