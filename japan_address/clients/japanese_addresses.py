"""
Japanese addresses catalog API client.

Serves the published catalog layout:
- ja.json: prefecture name -> list of city names
- ja/{prefecture}/{city}.json: town rows with town, koaza, lat, lng
"""

import httpx
import structlog

from japan_address.clients.base_client import BaseAPIClient
from japan_address.clients.catalog_source import (
    AbstractCatalogSource,
    DataSourceError,
    parse_prefecture_catalog,
    parse_town_list,
)
from japan_address.config import settings
from japan_address.models.address import Town

logger = structlog.get_logger()


class JapaneseAddressesClient(BaseAPIClient, AbstractCatalogSource):
    """Remote catalog source over HTTP."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(
            base_url=base_url or settings.catalog_api_url,
            timeout=timeout if timeout is not None else settings.catalog_timeout,
            transport=transport,
        )

    async def fetch_prefecture_catalog(self) -> dict[str, list[str]]:
        data = await self._get_json("ja.json")
        catalog = parse_prefecture_catalog(data)
        logger.info("Fetched prefecture catalog", prefectures=len(catalog))
        return catalog

    async def fetch_town_list(self, prefecture: str, city: str) -> list[Town]:
        data = await self._get_json(f"ja/{prefecture}/{city}.json")
        towns = parse_town_list(data, prefecture, city)
        logger.debug("Fetched town list", prefecture=prefecture, city=city, towns=len(towns))
        return towns

    async def _get_json(self, path: str):
        try:
            return await self.get(path)
        except httpx.HTTPStatusError as e:
            raise DataSourceError(
                f"Catalog request failed: {path} ({e.response.status_code})"
            ) from e
        except httpx.HTTPError as e:
            raise DataSourceError(f"Catalog request failed: {path}: {e}") from e
        except ValueError as e:
            raise DataSourceError(f"Catalog response is not JSON: {path}") from e
