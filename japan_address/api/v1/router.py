from fastapi import APIRouter

from japan_address.api.v1 import addresses

api_router = APIRouter()

api_router.include_router(addresses.router, prefix="/addresses", tags=["addresses"])
