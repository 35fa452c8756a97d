"""
Character variant table for catalog name patterns.

Catalog names and user input often disagree on kana particles (の / ノ),
small kana (ヶ / ケ) and old or simplified kanji forms (條 / 条). Every
character in a group matches every other character in the same group.
"""

import re

VARIANT_GROUPS = [
    "之ノの",
    "ヶケが",
    "ヵカか力",
    "ッツっつ",
    "ニ二",
    "ハ八",
    "條条",
    "釜竈",
    "狛拍",
    "藪薮",
    "渕淵",
    "エヱえ",
    "曾曽",
    "舟船",
    "莵菟",
    "市巿",
    "竜龍",
    "桧檜",
    "沢澤",
    "浜濱",
    "斉斎",
    "辺邊邉",
    "崎﨑",
    "高髙",
    "富冨",
]

_VARIANT_CLASSES: dict[str, str] = {}
for _group in VARIANT_GROUPS:
    for _char in _group:
        _VARIANT_CLASSES[_char] = f"[{_group}]"


def to_regex_pattern(text: str) -> str:
    """Escape literal catalog text, widening variant characters to classes."""
    return "".join(_VARIANT_CLASSES.get(char) or re.escape(char) for char in text)
