"""Decompose Japanese addresses into prefecture, city and town."""

from japan_address.clients.catalog_source import (
    AbstractCatalogSource,
    AddressCatalogError,
    DataSourceError,
)
from japan_address.services.address_parser import AddressParser
from japan_address.services.catalog_cache import CatalogCache

__all__ = [
    "AbstractCatalogSource",
    "AddressCatalogError",
    "AddressParser",
    "CatalogCache",
    "DataSourceError",
]
