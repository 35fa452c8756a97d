"""
Japanese address input clean-up.

Handles:
- Full-width / half-width character conversion
- Whitespace removal
- Dash variants after digits
- Block number normalization (1番地2号 -> 1-2)
"""

import re
import unicodedata

from japan_address.utils.kanji_numerals import to_arabic

DASH_AFTER_DIGIT = re.compile(r"(?<=[0-9])[-－﹣−‐⁃‑‒–—﹘―⎯⏤ーｰ─━]")
# Only numerals that open the block part or follow a digit, dash, 番 or 番地
KANJI_BLOCK_NUMBER = re.compile(
    r"(?:^|(?<=[0-9-])|(?<=番)|(?<=番地))([〇一二三四五六七八九十百千]+)(?=番地?|号|-|$)"
)


def normalize_width(text: str) -> str:
    """Convert full-width characters to half-width."""
    return unicodedata.normalize("NFKC", text)


def clean_address(address: str) -> str:
    """Width-normalize, drop whitespace and unify dashes that follow digits."""
    if not address:
        return ""

    text = normalize_width(address)
    text = re.sub(r"\s+", "", text)
    return DASH_AFTER_DIGIT.sub("-", text)


def normalize_block_number(text: str) -> str:
    """
    Normalize the part of an address that follows the town name.

    Kanji block numbers become Arabic, and "1番地2号" / "1番2" become "1-2".
    """
    if not text:
        return ""

    text = KANJI_BLOCK_NUMBER.sub(lambda m: to_arabic(m.group(1)), text)
    text = re.sub(r"^-", "", text)
    text = re.sub(r"(\d+)番地?(\d+)号?", r"\1-\2", text)
    text = re.sub(r"(\d+)-(\d+)号", r"\1-\2", text)
    text = re.sub(r"(\d+)番地?$", r"\1", text)
    return text
