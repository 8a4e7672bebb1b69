"""Process-wide cache of TMDB genre names and ids."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

GenreLoader = Callable[[str], Awaitable[list[dict[str, Any]] | None]]

# Analyzer tags whose name differs from the TMDB genre name. Without these,
# "sci-fi" (movies) and "action"/"fantasy" (TV) would silently drop out of
# the discover filter.
GENRE_ALIASES: dict[str, dict[str, str]] = {
    "movie": {"sci-fi": "science fiction"},
    "tv": {
        "sci-fi": "sci-fi & fantasy",
        "fantasy": "sci-fi & fantasy",
        "action": "action & adventure",
    },
}


class GenreCache:
    """Lazily populated genre maps, one per catalog type.

    Each catalog type is loaded at most once at a time: concurrent first
    callers wait on a per-type lock and re-check before loading. A failed
    load is not cached. The id -> name map is shared across catalog types
    and only ever grows.
    """

    def __init__(self) -> None:
        self._name_to_id: dict[str, dict[str, int]] = {}
        self._id_to_name: dict[int, str] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def _lock_for(self, catalog_type: str) -> asyncio.Lock:
        lock = self._locks.get(catalog_type)
        if lock is None:
            lock = self._locks.setdefault(catalog_type, asyncio.Lock())
        return lock

    def is_loaded(self, catalog_type: str) -> bool:
        return catalog_type in self._name_to_id

    @property
    def id_to_name(self) -> dict[int, str]:
        return dict(self._id_to_name)

    async def get_map(self, catalog_type: str, loader: GenreLoader) -> dict[str, int] | None:
        """Return the lower-cased name -> id map for a catalog type.

        Returns None when the map is not cached and the loader fails.
        """
        cached = self._name_to_id.get(catalog_type)
        if cached is not None:
            return cached

        async with self._lock_for(catalog_type):
            cached = self._name_to_id.get(catalog_type)
            if cached is not None:
                return cached

            genres = await loader(catalog_type)
            if genres is None:
                return None

            name_to_id = {g["name"].lower(): g["id"] for g in genres if "name" in g and "id" in g}
            self._name_to_id[catalog_type] = name_to_id
            self._id_to_name.update({g["id"]: g["name"] for g in genres if "name" in g and "id" in g})
            return name_to_id

    def resolve_ids(self, catalog_type: str, tags: list[str] | frozenset[str]) -> list[int]:
        """Map analyzer genre tags to ids using an already loaded map.

        Unknown tags are dropped; the result keeps the input order without
        duplicates.
        """
        name_to_id = self._name_to_id.get(catalog_type, {})
        aliases = GENRE_ALIASES.get(catalog_type, {})
        ids: list[int] = []
        for tag in tags:
            key = tag.lower()
            genre_id = name_to_id.get(key)
            if genre_id is None:
                genre_id = name_to_id.get(aliases.get(key, ""))
            if genre_id is not None and genre_id not in ids:
                ids.append(genre_id)
        return ids

    def names_for(self, genre_ids: list[int] | tuple[int, ...]) -> list[str]:
        return [self._id_to_name[g] for g in genre_ids if g in self._id_to_name]

    def clear(self) -> None:
        self._name_to_id.clear()
        self._id_to_name.clear()


genre_cache = GenreCache()
