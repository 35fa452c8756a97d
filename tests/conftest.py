"""Test configuration and fixtures."""

import asyncio

import pytest

from japan_address.clients.catalog_source import AbstractCatalogSource, parse_town_list


PREFECTURE_CATALOG = {
    "北海道": ["札幌市中央区"],
    "東京都": ["千代田区", "府中市", "西多摩郡奥多摩町"],
    "千葉県": ["千葉市中央区", "船橋市"],
    "京都府": ["京都市中京区"],
    "広島県": ["広島市中区", "府中市"],
}

TOWN_LISTS = {
    ("北海道", "札幌市中央区"): [
        {"town": "北一条西一丁目", "koaza": "", "lat": 43.062, "lng": 141.354},
    ],
    ("東京都", "千代田区"): [
        {"town": "丸の内一丁目", "koaza": "", "lat": 35.681, "lng": 139.766},
        {"town": "丸の内二丁目", "koaza": "", "lat": 35.680, "lng": 139.763},
        {"town": "丸の内五丁目", "koaza": "", "lat": 35.679, "lng": 139.762},
        {"town": "神田神保町一丁目", "koaza": "", "lat": 35.696, "lng": 139.758},
        {"town": "壱番町", "koaza": "", "lat": 35.688, "lng": 139.740},
        {"town": "千代田", "koaza": "", "lat": 35.684, "lng": 139.754},
    ],
    ("東京都", "府中市"): [
        {"town": "寿町一丁目", "koaza": "", "lat": 35.672, "lng": 139.479},
        {"town": "府川町", "koaza": "", "lat": 35.670, "lng": 139.470},
    ],
    ("東京都", "西多摩郡奥多摩町"): [
        {"town": "大字小丹波", "koaza": "", "lat": 35.797, "lng": 139.130},
        {"town": "小丹波南", "koaza": "", "lat": 35.795, "lng": 139.131},
        {"town": "大字氷川", "koaza": "", "lat": 35.809, "lng": 139.097},
    ],
    ("千葉県", "千葉市中央区"): [
        {"town": "中央一丁目", "koaza": "", "lat": 35.609, "lng": 140.115},
    ],
    ("千葉県", "船橋市"): [
        {"town": "本町一丁目", "koaza": "", "lat": 35.699, "lng": 139.985},
    ],
    ("京都府", "京都市中京区"): [
        {"town": "上本能寺前町", "koaza": "", "lat": 35.011, "lng": 135.767},
        {"town": "山本町", "koaza": "", "lat": 35.008, "lng": 135.765},
    ],
    ("広島県", "広島市中区"): [
        {"town": "基町", "koaza": "", "lat": 34.399, "lng": 132.457},
    ],
    ("広島県", "府中市"): [
        {"town": "鵜飼町", "koaza": "", "lat": 34.569, "lng": 133.237},
        {"town": "府川町", "koaza": "", "lat": 34.566, "lng": 133.244},
    ],
}


class FakeCatalogSource(AbstractCatalogSource):
    """In-memory catalog that records every fetch."""

    def __init__(self, catalog=None, towns=None):
        self.catalog = catalog if catalog is not None else PREFECTURE_CATALOG
        self.towns = towns if towns is not None else TOWN_LISTS
        self.catalog_calls = 0
        self.town_calls: list[tuple[str, str]] = []

    async def fetch_prefecture_catalog(self):
        self.catalog_calls += 1
        await asyncio.sleep(0)
        return {name: list(cities) for name, cities in self.catalog.items()}

    async def fetch_town_list(self, prefecture, city):
        self.town_calls.append((prefecture, city))
        await asyncio.sleep(0)
        return parse_town_list(self.towns.get((prefecture, city), []), prefecture, city)


@pytest.fixture
def source():
    return FakeCatalogSource()


@pytest.fixture
def cache(source):
    from japan_address.services.catalog_cache import CatalogCache
    return CatalogCache(source, town_cache_size=100)


@pytest.fixture
def parser(cache):
    from japan_address.services.address_parser import AddressParser
    return AddressParser(cache)
