"""PathCache: LRU-backed memo of parsed path strings.

Form rendering resolves every bound path on every incremental update, and
the same handful of paths is written over and over while a user types.
``PathCache`` keeps the parsed segment tuples so each path string is parsed
once.  LRU eviction occurs silently when ``max_size`` is exceeded.

Each ``PathCache`` instance maintains its own ``LRUCache``; there is no
class-level shared state, so two managers never interfere with each other.

Example::

    from docsync.cache import PathCache

    paths = PathCache(max_size=256)
    paths.parse("items[0].title")   # ("items", 0, "title"), parsed
    paths.parse("items[0].title")   # served from memory
"""

from __future__ import annotations

from cachetools import LRUCache

from docsync.tree.paths import Path, parse_path


class PathCache:
    """LRU-backed proxy around ``parse_path``.

    Parsed tuples are immutable, so handing the cached object to several
    callers is safe.  Malformed paths are never cached: ``parse`` re-raises
    ``PathSyntaxError`` on every call.

    Args:
        max_size: Maximum number of parsed paths held in memory.  Defaults
            to 1024.
    """

    def __init__(self, max_size: int = 1024) -> None:
        self._cache: LRUCache[str, Path] = LRUCache(maxsize=max_size)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of entries this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of entries stored in the cache."""
        return int(self._cache.currsize)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def parse(self, path: str | Path) -> Path:
        """Return the segment tuple for ``path``, parsing it on a miss.

        An already parsed tuple is returned unchanged and never cached.

        Raises:
            PathSyntaxError: If ``path`` is malformed.
        """
        if isinstance(path, tuple):
            return path
        try:
            return self._cache[path]
        except KeyError:
            pass
        segments = parse_path(path)
        self._cache[path] = segments
        return segments

    def clear(self) -> None:
        """Drop every cached entry."""
        self._cache.clear()
