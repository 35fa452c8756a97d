"""
Kanji numeral utilities used when building town patterns.

Handles:
- Plain digits (〇 一 二 ... 九) and the formal forms 壱 弐 参
- Compound numbers with 十 / 百 / 千 (二十三 -> 23)
- 万 groups (一万二千 -> 12000)
- Positional runs without units (二〇二三 -> 2023)
"""

import re

KANJI_DIGITS = {
    "〇": 0, "一": 1, "二": 2, "三": 3, "四": 4,
    "五": 5, "六": 6, "七": 7, "八": 8, "九": 9,
    "壱": 1, "弐": 2, "参": 3,
}
SMALL_UNITS = {"十": 10, "百": 100, "千": 1000}
LARGE_UNITS = {"万": 10_000}

KANJI_NUMERAL_PATTERN = re.compile(r"[〇一二三四五六七八九十百千万壱弐参]+")


def to_arabic(text: str) -> str:
    """Convert a kanji numeral run to an Arabic digit string."""
    if all(char in KANJI_DIGITS for char in text):
        return "".join(str(KANJI_DIGITS[char]) for char in text)

    total = 0
    section = 0
    current = 0

    for char in text:
        if char in KANJI_DIGITS:
            current = KANJI_DIGITS[char]
        elif char in SMALL_UNITS:
            section += (current or 1) * SMALL_UNITS[char]
            current = 0
        elif char in LARGE_UNITS:
            total += ((section + current) or 1) * LARGE_UNITS[char]
            section = 0
            current = 0
        else:
            break

    return str(total + section + current)


def find_kanji_numerals(text: str) -> list[str]:
    """Return every kanji numeral run in text, in order of appearance."""
    return KANJI_NUMERAL_PATTERN.findall(text)
