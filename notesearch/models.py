"""Core data models shared by the indexer, the search engine and the CLI."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Sequence, Tuple


@dataclass(frozen=True)
class IndexedCorpus:
    """Read-only mapping of workspace-relative file paths to their lines.

    Lines are the exact ``"\\n"`` split of each file, so a file ending in a
    newline carries a trailing empty line.
    """

    workspace_root: Path
    entries: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen = {path: tuple(lines) for path, lines in self.entries.items()}
        object.__setattr__(self, "entries", MappingProxyType(frozen))

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, path: object) -> bool:
        return path in self.entries

    def files(self) -> Tuple[str, ...]:
        return tuple(self.entries)

    def lines(self, path: str) -> Optional[Sequence[str]]:
        return self.entries.get(path)

    @property
    def line_count(self) -> int:
        return sum(len(lines) for lines in self.entries.values())

    def iter_lines(self) -> Iterator[Tuple[str, int, str]]:
        """Yield ``(file, line_index, line)`` in file order, then line order."""
        for path, lines in self.entries.items():
            for index, line in enumerate(lines):
                yield path, index, line


@dataclass
class SearchResult:
    file: str
    line_number: int
    snippet: str
    context: str
    relevance: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
