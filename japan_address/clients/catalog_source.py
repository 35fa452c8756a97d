"""
Catalog data source interface.

A source serves the two documents the parser needs:
- the prefecture catalog: {prefecture name: [city name, ...]}
- the town list of one (prefecture, city) pair: [{town, koaza, lat, lng}, ...]
"""

from abc import ABC, abstractmethod
from typing import Any

from japan_address.models.address import Town


class AddressCatalogError(Exception):
    """Base error for catalog problems."""


class DataSourceError(AddressCatalogError):
    """The catalog source failed or returned malformed data."""


class AbstractCatalogSource(ABC):
    """
    Base class for catalog sources.

    Subclasses must implement:
    - fetch_prefecture_catalog(): prefecture name -> ordered city names
    - fetch_town_list(): towns of one city, in published order
    """

    @abstractmethod
    async def fetch_prefecture_catalog(self) -> dict[str, list[str]]:
        ...

    @abstractmethod
    async def fetch_town_list(self, prefecture: str, city: str) -> list[Town]:
        ...

    async def close(self):
        """Release any held resources."""


def parse_prefecture_catalog(data: Any) -> dict[str, list[str]]:
    """Validate a raw prefecture catalog document."""
    if not isinstance(data, dict):
        raise DataSourceError(f"Prefecture catalog must be an object, got {type(data).__name__}")

    catalog: dict[str, list[str]] = {}
    for prefecture, cities in data.items():
        if not isinstance(cities, list) or not all(isinstance(c, str) for c in cities):
            raise DataSourceError(f"Malformed city list for prefecture: {prefecture}")
        catalog[prefecture] = list(cities)
    return catalog


def parse_town_list(data: Any, prefecture: str, city: str) -> list[Town]:
    """Validate raw town rows. Rows may name the town as `town` or `name`."""
    if not isinstance(data, list):
        raise DataSourceError(f"Town list for {prefecture}{city} must be an array")

    towns = []
    for row in data:
        if not isinstance(row, dict):
            raise DataSourceError(f"Malformed town row for {prefecture}{city}: {row!r}")
        name = row.get("town", row.get("name"))
        if not isinstance(name, str):
            raise DataSourceError(f"Town row without a name for {prefecture}{city}: {row!r}")
        try:
            lat = float(row["lat"]) if row.get("lat") is not None else None
            lng = float(row["lng"]) if row.get("lng") is not None else None
        except (TypeError, ValueError) as e:
            raise DataSourceError(f"Bad coordinates for {prefecture}{city}{name}: {e}") from e
        towns.append(Town(name=name, koaza=row.get("koaza") or "", lat=lat, lng=lng))
    return towns
