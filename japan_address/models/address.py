import re
from dataclasses import dataclass


@dataclass(frozen=True)
class Prefecture:
    """Top-level division with its cities in catalog order."""

    name: str
    cities: tuple[str, ...]


@dataclass(frozen=True)
class Town:
    """Finest catalog division within a city."""

    name: str
    koaza: str = ""
    lat: float | None = None
    lng: float | None = None


@dataclass(frozen=True)
class CompiledPattern:
    """A catalog name paired with the compiled regex that recognizes it."""

    key: str
    regex: re.Pattern

    def match(self, text: str) -> str | None:
        """Return the matched span at the start of text, or None."""
        m = self.regex.match(text)
        return m.group(0) if m else None


@dataclass(frozen=True)
class TownPattern(CompiledPattern):
    """Town-level pattern. Aliases point back at the canonical name."""

    name: str
    koaza: str = ""
    lat: float | None = None
    lng: float | None = None
    original_town: str | None = None

    @property
    def canonical_name(self) -> str:
        return self.original_town or self.name


@dataclass
class PrefectureMatch:
    prefecture: str
    remainder: str


@dataclass
class CityMatch:
    city: str
    remainder: str


@dataclass
class TownMatch:
    town: str
    remainder: str
    lat: float | None = None
    lng: float | None = None


@dataclass
class NormalizeResult:
    """Decomposition of one address. `level` is the deepest stage reached (0-3)."""

    prefecture: str | None = None
    city: str | None = None
    town: str | None = None
    remainder: str = ""
    lat: float | None = None
    lng: float | None = None
    level: int = 0
