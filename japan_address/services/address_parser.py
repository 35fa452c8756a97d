"""Hierarchical address decomposition: prefecture -> city -> town."""

import structlog

from japan_address.models.address import (
    CityMatch,
    NormalizeResult,
    PrefectureMatch,
    TownMatch,
)
from japan_address.services.catalog_cache import CatalogCache
from japan_address.utils.japanese_address import clean_address, normalize_block_number

logger = structlog.get_logger()

OAZA_PREFIX = "大字"


class AddressParser:
    """Splits Japanese addresses using the patterns held by one CatalogCache."""

    def __init__(self, cache: CatalogCache):
        self.cache = cache

    async def detect_prefecture(self, address: str) -> PrefectureMatch | None:
        """
        Find the prefecture an address belongs to.

        Stages:
        1. Rewrite a leading city that restates its prefecture (千葉市 -> 千葉県千葉市)
        2. Match prefecture names, with or without the 都/道/府/県 suffix
        3. When no prefecture is written, infer it from the city name; if the
           city exists in several prefectures, use the town to pick one

        The remainder is the text after the prefecture name, which still
        contains the city when the prefecture was inferred.
        """
        addr = address.strip()

        for pattern in await self.cache.collision_patterns():
            matched = pattern.match(addr)
            if matched is not None:
                addr = pattern.key + addr[len(matched):]
                break

        for pattern in await self.cache.prefecture_patterns():
            matched = pattern.match(addr)
            if matched is not None:
                return PrefectureMatch(prefecture=pattern.key, remainder=addr[len(matched):])

        candidates: list[tuple[str, CityMatch]] = []
        for prefecture in await self.cache.prefectures():
            city = await self.detect_city(addr, prefecture.name)
            if city is not None:
                candidates.append((prefecture.name, city))

        if not candidates:
            return None

        if len(candidates) == 1:
            return PrefectureMatch(prefecture=candidates[0][0], remainder=addr)

        resolved = [
            prefecture
            for prefecture, city in candidates
            if await self.detect_town(city.remainder, prefecture, city.city) is not None
        ]
        if not resolved:
            logger.debug(
                "Ambiguous city without town match",
                candidates=[p for p, _ in candidates],
            )
            return None

        if len(resolved) > 1:
            logger.warning("Ambiguous prefecture, using last candidate", candidates=resolved)
        # Last resolved candidate in catalog order wins
        return PrefectureMatch(prefecture=resolved[-1], remainder=addr)

    async def detect_city(self, address: str, prefecture: str) -> CityMatch | None:
        addr = address.strip()
        for pattern in await self.cache.city_patterns(prefecture):
            matched = pattern.match(addr)
            if matched is not None:
                return CityMatch(city=pattern.key, remainder=addr[len(matched):])
        return None

    async def detect_town(self, address: str, prefecture: str, city: str) -> TownMatch | None:
        addr = address.strip()
        if addr.startswith(OAZA_PREFIX):
            addr = addr[len(OAZA_PREFIX):]

        for pattern in await self.cache.town_patterns(prefecture, city):
            matched = pattern.match(addr)
            if matched is not None:
                return TownMatch(
                    town=pattern.canonical_name,
                    remainder=addr[len(matched):],
                    lat=pattern.lat,
                    lng=pattern.lng,
                )
        return None

    async def normalize(self, address: str, level: int = 3) -> NormalizeResult:
        """
        Decompose an address down to `level` (1 prefecture, 2 city, 3 town).

        Never raises on unmatched input; `result.level` tells how far the
        decomposition got. Block numbers in the remainder are normalized only
        when the town matched.
        """
        if level not in (1, 2, 3):
            raise ValueError(f"level must be 1, 2 or 3, got {level}")

        addr = clean_address(address)
        result = NormalizeResult(remainder=addr)

        prefecture = await self.detect_prefecture(addr)
        if prefecture is None:
            return result
        result.prefecture = prefecture.prefecture
        result.remainder = prefecture.remainder
        result.level = 1
        if level < 2:
            return result

        city = await self.detect_city(prefecture.remainder, prefecture.prefecture)
        if city is None:
            return result
        result.city = city.city
        result.remainder = city.remainder
        result.level = 2
        if level < 3:
            return result

        town = await self.detect_town(city.remainder, prefecture.prefecture, city.city)
        if town is not None:
            result.town = town.town
            result.remainder = normalize_block_number(town.remainder)
            result.lat = town.lat
            result.lng = town.lng
            result.level = 3
        return result
