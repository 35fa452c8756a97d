from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Query

from japan_address.api.deps import get_address_parser
from japan_address.services.address_parser import AddressParser

router = APIRouter()


@router.get("/normalize")
async def normalize_address(
    address: str = Query(..., min_length=1),
    level: int = Query(3, ge=1, le=3),
    parser: AddressParser = Depends(get_address_parser),
):
    """Split an address as far as the catalog allows."""
    result = await parser.normalize(address, level=level)
    return asdict(result)


@router.get("/prefecture")
async def detect_prefecture(
    address: str = Query(..., min_length=1),
    parser: AddressParser = Depends(get_address_parser),
):
    match = await parser.detect_prefecture(address)
    if match is None:
        raise HTTPException(status_code=404, detail="No prefecture found")
    return asdict(match)


@router.get("/city")
async def detect_city(
    address: str = Query(..., min_length=1),
    prefecture: str = Query(...),
    parser: AddressParser = Depends(get_address_parser),
):
    match = await parser.detect_city(address, prefecture)
    if match is None:
        raise HTTPException(status_code=404, detail="No city found")
    return asdict(match)


@router.get("/town")
async def detect_town(
    address: str = Query(..., min_length=1),
    prefecture: str = Query(...),
    city: str = Query(...),
    parser: AddressParser = Depends(get_address_parser),
):
    match = await parser.detect_town(address, prefecture, city)
    if match is None:
        raise HTTPException(status_code=404, detail="No town found")
    return asdict(match)
