"""Normalize addresses read one per line from a file (or stdin) and print JSON lines.

Usage: python scripts/normalize_addresses.py [addresses.txt]
"""
import asyncio
import json
import sys
from dataclasses import asdict

from japan_address.main import build_catalog_source
from japan_address.services.address_parser import AddressParser
from japan_address.services.catalog_cache import CatalogCache


async def main(lines):
    source = build_catalog_source()
    parser = AddressParser(CatalogCache(source))
    counts = [0, 0, 0, 0]

    try:
        for line in lines:
            address = line.strip()
            if not address:
                continue
            result = await parser.normalize(address)
            counts[result.level] += 1
            print(json.dumps({"input": address, **asdict(result)}, ensure_ascii=False))
    finally:
        await source.close()

    print(
        f"Done: {counts[3]} town, {counts[2]} city, {counts[1]} prefecture, "
        f"{counts[0]} unmatched",
        file=sys.stderr,
    )


if __name__ == "__main__":
    if len(sys.argv) > 1:
        with open(sys.argv[1], encoding="utf-8") as f:
            asyncio.run(main(f.readlines()))
    else:
        asyncio.run(main(sys.stdin))
