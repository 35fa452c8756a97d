"""Tests for the catalog cache: memoization, LRU bound, expiry and fetch coordination."""

import asyncio

import pytest

from japan_address.clients.catalog_source import DataSourceError
from japan_address.services import pattern_compiler
from japan_address.services.catalog_cache import TOWN_PATTERN_TTL_SECONDS, CatalogCache

from conftest import FakeCatalogSource


class FailingSource(FakeCatalogSource):
    def __init__(self, fail_times=1):
        super().__init__()
        self.fail_times = fail_times

    async def fetch_prefecture_catalog(self):
        if self.fail_times > 0:
            self.fail_times -= 1
            self.catalog_calls += 1
            raise DataSourceError("catalog unavailable")
        return await super().fetch_prefecture_catalog()


@pytest.fixture
def compile_calls(monkeypatch):
    calls = []
    original = pattern_compiler.compile_town_pattern_set

    def counting(prefecture, city, towns):
        calls.append((prefecture, city))
        return original(prefecture, city, towns)

    monkeypatch.setattr(pattern_compiler, "compile_town_pattern_set", counting)
    return calls


class TestPrefectureCatalog:
    def test_loaded_once(self, cache, source):
        async def scenario():
            first = await cache.prefectures()
            second = await cache.prefectures()
            return first, second

        first, second = asyncio.run(scenario())
        assert first is second
        assert [p.name for p in first] == list(source.catalog)
        assert source.catalog_calls == 1

    def test_concurrent_first_access_fetches_once(self, cache, source):
        async def scenario():
            return await asyncio.gather(*(cache.prefectures() for _ in range(5)))

        results = asyncio.run(scenario())
        assert source.catalog_calls == 1
        assert all(r is results[0] for r in results)

    def test_failure_is_not_memoized(self):
        source = FailingSource(fail_times=1)
        cache = CatalogCache(source, town_cache_size=10)

        async def scenario():
            with pytest.raises(DataSourceError):
                await cache.prefectures()
            return await cache.prefectures()

        prefectures = asyncio.run(scenario())
        assert len(prefectures) == len(source.catalog)
        assert source.catalog_calls == 2

    def test_prefecture_patterns_in_catalog_order(self, cache, source):
        patterns = asyncio.run(cache.prefecture_patterns())
        assert [p.key for p in patterns] == list(source.catalog)

    def test_collision_patterns(self, cache):
        patterns = asyncio.run(cache.collision_patterns())
        assert [p.key for p in patterns] == [
            "千葉県千葉市中央区",
            "京都府京都市中京区",
            "広島県広島市中区",
        ]


class TestCityPatterns:
    def test_longest_first(self, cache):
        patterns = asyncio.run(cache.city_patterns("東京都"))
        assert [p.key for p in patterns] == ["西多摩郡奥多摩町", "千代田区", "府中市"]

    def test_memoized(self, cache):
        async def scenario():
            return await cache.city_patterns("東京都"), await cache.city_patterns("東京都")

        first, second = asyncio.run(scenario())
        assert first is second

    def test_unknown_prefecture(self, cache):
        assert asyncio.run(cache.city_patterns("架空県")) == []


class TestTownPatterns:
    def test_raw_towns_fetched_once(self, cache, source):
        async def scenario():
            await cache.town_patterns("東京都", "千代田区")
            await cache.town_patterns("東京都", "千代田区")
            await cache.towns("東京都", "千代田区")

        asyncio.run(scenario())
        assert source.town_calls == [("東京都", "千代田区")]

    def test_concurrent_first_access_fetches_once(self, cache, source, compile_calls):
        async def scenario():
            return await asyncio.gather(
                *(cache.town_patterns("東京都", "千代田区") for _ in range(5))
            )

        results = asyncio.run(scenario())
        assert source.town_calls == [("東京都", "千代田区")]
        assert compile_calls == [("東京都", "千代田区")]
        assert all(r is results[0] for r in results)

    def test_unknown_city_does_not_fetch(self, cache, source):
        assert asyncio.run(cache.town_patterns("東京都", "架空市")) == []
        assert source.town_calls == []

    def test_lru_eviction_recompiles_without_refetch(self, source, compile_calls):
        cache = CatalogCache(source, town_cache_size=2)
        chiyoda = ("東京都", "千代田区")
        tokyo_fuchu = ("東京都", "府中市")
        hiroshima_fuchu = ("広島県", "府中市")

        async def scenario():
            await cache.town_patterns(*chiyoda)
            await cache.town_patterns(*tokyo_fuchu)
            await cache.town_patterns(*chiyoda)  # tokyo_fuchu is now least recent
            await cache.town_patterns(*hiroshima_fuchu)
            await cache.town_patterns(*chiyoda)
            await cache.town_patterns(*tokyo_fuchu)

        asyncio.run(scenario())
        assert compile_calls == [chiyoda, tokyo_fuchu, hiroshima_fuchu, tokyo_fuchu]
        assert sorted(source.town_calls) == sorted([chiyoda, tokyo_fuchu, hiroshima_fuchu])

    def test_entries_expire_after_seven_days(self, source, compile_calls):
        now = [0.0]
        cache = CatalogCache(source, town_cache_size=10, clock=lambda: now[0])

        async def scenario():
            await cache.town_patterns("東京都", "千代田区")
            now[0] = TOWN_PATTERN_TTL_SECONDS - 1
            await cache.town_patterns("東京都", "千代田区")
            now[0] = TOWN_PATTERN_TTL_SECONDS + 1
            await cache.town_patterns("東京都", "千代田区")

        asyncio.run(scenario())
        assert len(compile_calls) == 2
        assert source.town_calls == [("東京都", "千代田区")]

    def test_town_fetch_failure_propagates(self, source):
        async def broken(prefecture, city):
            raise DataSourceError("town list unavailable")

        source.fetch_town_list = broken
        cache = CatalogCache(source, town_cache_size=10)

        with pytest.raises(DataSourceError):
            asyncio.run(cache.town_patterns("東京都", "千代田区"))


class TestConfiguration:
    def test_invalid_capacity(self, source):
        with pytest.raises(ValueError):
            CatalogCache(source, town_cache_size=0)

    def test_settings_reject_invalid_capacity(self):
        from pydantic import ValidationError
        from japan_address.config import Settings

        with pytest.raises(ValidationError):
            Settings(town_cache_size=0)
