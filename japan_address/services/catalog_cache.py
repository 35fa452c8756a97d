"""
Administrative catalog cache.

Holds the prefecture catalog and memoizes compiled patterns:
- prefecture list, prefecture patterns, collision patterns: loaded once
- city patterns: once per prefecture
- raw town lists: once per (prefecture, city), never evicted
- town patterns: per (prefecture, city) in an LRU cache with a 7-day expiry

Concurrent first access to the same key waits on a per-key lock, so the
source is asked once per key.
"""

import asyncio
import time
from collections.abc import Callable

import structlog

from japan_address.clients.catalog_source import AbstractCatalogSource
from japan_address.config import settings
from japan_address.models.address import CompiledPattern, Prefecture, Town, TownPattern
from japan_address.services import pattern_compiler
from japan_address.utils.lru_cache import LRUCache

logger = structlog.get_logger()

TOWN_PATTERN_TTL_SECONDS = 60 * 60 * 24 * 7


class CatalogCache:
    """Shared catalog state for one parsing pipeline."""

    def __init__(
        self,
        source: AbstractCatalogSource,
        town_cache_size: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.source = source
        self._prefectures: list[Prefecture] | None = None
        self._prefecture_patterns: list[CompiledPattern] | None = None
        self._collision_patterns: list[CompiledPattern] | None = None
        self._city_patterns: dict[str, list[CompiledPattern]] = {}
        self._towns: dict[tuple[str, str], list[Town]] = {}
        self._town_patterns = LRUCache(
            max_size=town_cache_size if town_cache_size is not None else settings.town_cache_size,
            ttl=TOWN_PATTERN_TTL_SECONDS,
            clock=clock,
        )
        self._catalog_lock = asyncio.Lock()
        self._town_list_locks: dict[tuple[str, str], asyncio.Lock] = {}
        self._town_pattern_locks: dict[tuple[str, str], asyncio.Lock] = {}

    async def prefectures(self) -> list[Prefecture]:
        if self._prefectures is not None:
            return self._prefectures

        async with self._catalog_lock:
            if self._prefectures is None:
                catalog = await self.source.fetch_prefecture_catalog()
                self._prefectures = [
                    Prefecture(name=name, cities=tuple(cities)) for name, cities in catalog.items()
                ]
                logger.info("Catalog loaded", prefectures=len(self._prefectures))
        return self._prefectures

    async def get_prefecture(self, name: str) -> Prefecture | None:
        for prefecture in await self.prefectures():
            if prefecture.name == name:
                return prefecture
        return None

    async def prefecture_patterns(self) -> list[CompiledPattern]:
        if self._prefecture_patterns is None:
            self._prefecture_patterns = [
                pattern_compiler.compile_prefecture_pattern(p.name) for p in await self.prefectures()
            ]
        return self._prefecture_patterns

    async def collision_patterns(self) -> list[CompiledPattern]:
        """Patterns for cities whose name starts with their own prefecture's stem (千葉市)."""
        if self._collision_patterns is None:
            patterns = []
            for prefecture in await self.prefectures():
                stem = pattern_compiler.prefecture_stem(prefecture.name)
                for city in prefecture.cities:
                    if city.startswith(stem):
                        patterns.append(pattern_compiler.compile_collision_pattern(prefecture.name, city))
            self._collision_patterns = patterns
        return self._collision_patterns

    async def city_patterns(self, prefecture: str) -> list[CompiledPattern]:
        """City patterns of one prefecture, longest name first. Empty for unknown names."""
        if prefecture in self._city_patterns:
            return self._city_patterns[prefecture]

        found = await self.get_prefecture(prefecture)
        if found is None:
            logger.debug("Unknown prefecture", prefecture=prefecture)
            return []

        cities = sorted(found.cities, key=len, reverse=True)
        patterns = [pattern_compiler.compile_city_pattern(city) for city in cities]
        self._city_patterns[prefecture] = patterns
        return patterns

    async def towns(self, prefecture: str, city: str) -> list[Town]:
        key = (prefecture, city)
        if key in self._towns:
            return self._towns[key]

        async with _lock_for(self._town_list_locks, key):
            if key not in self._towns:
                self._towns[key] = await self.source.fetch_town_list(prefecture, city)
        return self._towns[key]

    async def town_patterns(self, prefecture: str, city: str) -> list[TownPattern]:
        """Compiled town patterns for a city. Empty when the pair is not in the catalog."""
        key = (prefecture, city)
        cached = self._town_patterns.get(key)
        if cached is not None:
            return cached

        found = await self.get_prefecture(prefecture)
        if found is None or city not in found.cities:
            logger.debug("Unknown city", prefecture=prefecture, city=city)
            return []

        async with _lock_for(self._town_pattern_locks, key):
            patterns = self._town_patterns.get(key)
            if patterns is None:
                towns = await self.towns(prefecture, city)
                patterns = pattern_compiler.compile_town_pattern_set(prefecture, city, towns)
                evicted = self._town_patterns.put(key, patterns)
                if evicted is not None:
                    logger.debug("Evicted town patterns", prefecture=evicted[0], city=evicted[1])
        return patterns


def _lock_for(locks: dict[tuple[str, str], asyncio.Lock], key: tuple[str, str]) -> asyncio.Lock:
    lock = locks.get(key)
    if lock is None:
        lock = locks[key] = asyncio.Lock()
    return lock
