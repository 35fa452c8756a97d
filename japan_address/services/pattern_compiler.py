"""
Builds the regex patterns the address parser matches against.

Prefecture patterns tolerate a missing 都/道/府/県 suffix, city patterns
tolerate a missing county (郡), and town patterns accept the usual spellings
of numbered sections (五丁目 / 5丁目 / 5-) plus 町-less aliases.
"""

import re

import structlog

from japan_address.models.address import CompiledPattern, Town, TownPattern
from japan_address.utils.kanji_numerals import find_kanji_numerals, to_arabic
from japan_address.utils.pattern_dict import to_regex_pattern

logger = structlog.get_logger()

PREFECTURE_SUFFIX = re.compile(r"(都|道|府|県)$")

DASH_CHARS = "-－﹣−‐⁃‑‒–—﹘―⎯⏤ーｰ─━"
DASH_CLASS = f"[{re.escape(DASH_CHARS)}]"

OAZA_PREFIX = "大字"

# Counters as written in the catalog, and what input may use in their place
CATALOG_COUNTER = r"丁目?|番(?:町|丁)|条|軒|線|[のノ]町|地割|号"
INPUT_COUNTER = rf"(?:(?:丁|町)目?|番(?:町|丁)|条|軒|線|[のノ]町?|地割|号|{DASH_CLASS})"

TOWN_TOKEN = re.compile(
    rf"(?P<numeral>[壱一二三四五六七八九十]+)(?P<counter>{CATALOG_COUNTER})"
    rf"|(?P<oaza>大?字)"
    rf"|(?P<dash>{DASH_CLASS})"
)

KANJI_NUMERAL_CHO = re.compile(r".町")


def prefecture_stem(name: str) -> str:
    return PREFECTURE_SUFFIX.sub("", name)


def compile_prefecture_pattern(name: str) -> CompiledPattern:
    """`東京` matches `東京都`; any of the four suffixes is accepted."""
    regex = re.compile(f"^{re.escape(prefecture_stem(name))}(?:都|道|府|県)?")
    return CompiledPattern(key=name, regex=regex)


def compile_collision_pattern(prefecture: str, city: str) -> CompiledPattern:
    """Exact city name at the start of text, keyed with its prefecture prepended."""
    return CompiledPattern(key=f"{prefecture}{city}", regex=re.compile(f"^{re.escape(city)}"))


def compile_city_pattern(city: str) -> CompiledPattern:
    if re.search(r"(町|村)$", city) and "郡" in city:
        # Addresses often leave out the county
        county, rest = city.split("郡", 1)
        pattern = f"^(?:{to_regex_pattern(county)}郡)?{to_regex_pattern(rest)}"
    else:
        pattern = f"^{to_regex_pattern(city)}"
    return CompiledPattern(key=city, regex=re.compile(pattern))


def _numeral_alternatives(numeral: str) -> list[str]:
    alternatives = [numeral]
    if numeral.startswith("壱"):
        alternatives += ["一", "1", "１"]
    else:
        alternatives.append(to_arabic(numeral))
    return alternatives


def town_pattern_text(name: str) -> str:
    """Regex source for a catalog town name (not anchored)."""
    parts = []
    pos = 0
    for m in TOWN_TOKEN.finditer(name):
        parts.append(to_regex_pattern(name[pos:m.start()]))
        if m.group("numeral"):
            alternatives = "|".join(re.escape(a) for a in _numeral_alternatives(m.group("numeral")))
            parts.append(f"(?:{alternatives}){INPUT_COUNTER}")
        elif m.group("oaza"):
            parts.append("(?:大?字)?")
        else:
            parts.append(DASH_CLASS)
        pos = m.end()
    parts.append(to_regex_pattern(name[pos:]))
    return "".join(parts)


def _has_kanji_numeral_before_cho(name: str) -> bool:
    # 十六町 and the like: dropping 町 would break section number matching
    return any(find_kanji_numerals(chunk) for chunk in KANJI_NUMERAL_CHO.findall(name))


def _abbreviate(name: str) -> str:
    # A leading 町 is part of the name itself and stays
    return name[:1] + name[1:].replace("町", "")


def _with_aliases(towns: list[Town]) -> list[tuple[Town, str, str | None]]:
    names = {town.name for town in towns}
    entries: list[tuple[Town, str, str | None]] = []

    for town in towns:
        entries.append((town, town.name, None))

        if "町" not in town.name[1:]:
            continue
        abbr = _abbreviate(town.name)
        if (
            abbr
            and abbr not in names
            and f"{OAZA_PREFIX}{abbr}" not in names
            and not _has_kanji_numeral_before_cho(town.name)
        ):
            entries.append((town, abbr, town.name))

    return entries


def _priority(name: str) -> int:
    # 大字XX ranks below XXYY so the more specific name is tried first
    length = len(name)
    if name.startswith(OAZA_PREFIX):
        length -= 2
    return length


def compile_town_pattern_set(prefecture: str, city: str, towns: list[Town]) -> list[TownPattern]:
    """
    Compile the ordered town patterns for one city.

    Entries are sorted longest name first. Aliases (町 removed) report the
    canonical town name through `original_town`. Cities of Kyoto (京都市)
    get unanchored patterns because street directions precede the town.
    """
    entries = sorted(_with_aliases(towns), key=lambda e: _priority(e[1]), reverse=True)
    prefix = ".*" if city.startswith("京都市") else "^"

    logger.debug(
        "Compiling town patterns",
        prefecture=prefecture,
        city=city,
        towns=len(towns),
        aliases=len(entries) - len(towns),
    )

    return [
        TownPattern(
            key=original or name,
            regex=re.compile(prefix + town_pattern_text(name)),
            name=name,
            koaza=town.koaza,
            lat=town.lat,
            lng=town.lng,
            original_town=original,
        )
        for town, name, original in entries
    ]
