from fastapi import Request

from japan_address.services.address_parser import AddressParser


def get_address_parser(request: Request) -> AddressParser:
    return request.app.state.address_parser
