from japan_address.models.address import (
    CityMatch,
    CompiledPattern,
    NormalizeResult,
    Prefecture,
    PrefectureMatch,
    Town,
    TownMatch,
    TownPattern,
)

__all__ = [
    "Prefecture",
    "Town",
    "CompiledPattern",
    "TownPattern",
    "PrefectureMatch",
    "CityMatch",
    "TownMatch",
    "NormalizeResult",
]
