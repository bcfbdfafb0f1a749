"""Line-level keyword relevance search over an :class:`IndexedCorpus`.

Scoring is linear in term matches:

- each query token found anywhere in a line adds 1, or 2 when it stands
  on its own (surrounded by spaces, or at the start or end of the line);
- a coverage bonus of ``matched_tokens / total_tokens`` is added on top.

Results carry a small window of surrounding lines for display.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, List, Sequence, Tuple, Union

from . import config
from .indexer import relative_key
from .models import IndexedCorpus, SearchResult

logger = logging.getLogger(__name__)


def tokenize_query(query: str) -> List[str]:
    """Lower-case *query*, split on whitespace and drop tokens under 3 chars."""
    return [t for t in query.lower().split() if len(t) >= config.MIN_TOKEN_LENGTH]


def score_line(line: str, tokens: Sequence[str]) -> Tuple[int, float]:
    """Return ``(matched_tokens, relevance)`` for one line.

    The relevance returned here excludes the coverage bonus.
    """
    line_lower = line.lower()
    matches = 0
    relevance = 0.0

    for token in tokens:
        if token not in line_lower:
            continue
        matches += 1
        if (
            f" {token} " in line_lower
            or line_lower.startswith(token)
            or line_lower.endswith(token)
        ):
            relevance += 2
        else:
            relevance += 1

    return matches, relevance


def extract_context(lines: Sequence[str], index: int, radius: int = config.CONTEXT_RADIUS) -> str:
    """Join up to *radius* lines either side of *index*, clipped to the file."""
    start = max(0, index - radius)
    end = min(len(lines), index + radius + 1)
    return "\n".join(lines[start:end])


def normalize_limit(limit: Any) -> int:
    """Coerce a caller-supplied limit to a non-negative int.

    Non-integers fall back to the default; negative values clamp to zero.
    """
    if isinstance(limit, bool) or not isinstance(limit, int):
        logger.warning("Invalid result limit %r; using %d", limit, config.DEFAULT_LIMIT)
        return config.DEFAULT_LIMIT
    return max(limit, 0)


def search(corpus: IndexedCorpus, query: str, limit: Any = config.DEFAULT_LIMIT) -> List[SearchResult]:
    """Rank every matching line in *corpus* and return the best *limit*.

    Ties keep scan order (file order, then line order), so repeated runs
    over the same corpus give the same sequence.
    """
    limit = normalize_limit(limit)
    tokens = tokenize_query(query)
    if not tokens or limit == 0:
        return []

    results: List[SearchResult] = []
    for file, index, line in corpus.iter_lines():
        matches, relevance = score_line(line, tokens)
        if matches == 0:
            continue

        results.append(SearchResult(
            file=file,
            line_number=index + 1,
            snippet=line.strip(),
            context=extract_context(corpus.entries[file], index),
            relevance=relevance + matches / len(tokens),
        ))

    logger.debug("Query %r (tokens=%s) matched %d lines", query, tokens, len(results))
    results.sort(key=lambda r: r.relevance, reverse=True)
    return results[:limit]


def resolve_key(corpus: IndexedCorpus, file_path: Union[str, os.PathLike]) -> str:
    """Map a user-supplied path to the corpus key it refers to.

    Relative paths are taken from the current directory, like any shell
    argument. Symlinks in the parent directories are resolved when the
    plain path misses. When that still does not land on an indexed file but
    the path as given is already a corpus key, the given path wins.
    """
    key = relative_key(file_path, corpus.workspace_root)
    if key in corpus:
        return key

    # The workspace root is stored symlink-free; resolve only the parent so a
    # symlinked note keeps its own key.
    absolute = os.path.abspath(file_path)
    real_dir = os.path.realpath(os.path.dirname(absolute))
    real_key = relative_key(os.path.join(real_dir, os.path.basename(absolute)), corpus.workspace_root)
    if real_key in corpus:
        return real_key

    given = Path(os.path.normpath(file_path)).as_posix()
    if not os.path.isabs(file_path) and given in corpus:
        return given
    return key


def search_in_file(corpus: IndexedCorpus, file_path: Union[str, os.PathLike], query: str) -> List[SearchResult]:
    """Search the whole corpus, then keep only hits from *file_path*.

    The default limit is applied before filtering, so a file only shows the
    hits that made the corpus-wide top results.
    """
    key = resolve_key(corpus, file_path)
    if key not in corpus:
        logger.debug("File %s (key %s) is not indexed", file_path, key)
        return []

    return [r for r in search(corpus, query) if r.file == key]
