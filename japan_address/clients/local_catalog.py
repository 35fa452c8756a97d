"""Catalog source reading the published layout from a local directory."""

import asyncio
import json
from pathlib import Path

import structlog

from japan_address.clients.catalog_source import (
    AbstractCatalogSource,
    DataSourceError,
    parse_prefecture_catalog,
    parse_town_list,
)
from japan_address.models.address import Town

logger = structlog.get_logger()


class LocalCatalogSource(AbstractCatalogSource):
    """
    Reads `ja.json` and `ja/{prefecture}/{city}.json` below `root`.
    """

    def __init__(self, root: str | Path):
        self.root = Path(root)

    async def fetch_prefecture_catalog(self) -> dict[str, list[str]]:
        data = await self._load(self.root / "ja.json")
        return parse_prefecture_catalog(data)

    async def fetch_town_list(self, prefecture: str, city: str) -> list[Town]:
        data = await self._load(self.root / "ja" / prefecture / f"{city}.json")
        return parse_town_list(data, prefecture, city)

    async def _load(self, path: Path):
        try:
            text = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except OSError as e:
            raise DataSourceError(f"Cannot read catalog file: {path}: {e}") from e

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise DataSourceError(f"Catalog file is not valid JSON: {path}") from e
