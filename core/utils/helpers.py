"""
BestEats utility functions
"""

from __future__ import annotations
import unicodedata
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional


# Text utilities

def fold_text(s: str) -> str:
    """
    Normalize text for user-facing "contains" matching.

    Width variants (full-width latin, half-width kana) are unified, diacritics
    are removed and case is folded. Precomposed Hangul syllables survive the
    round trip, so a query never matches half a syllable.
    """
    decomposed = unicodedata.normalize("NFKD", s)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return unicodedata.normalize("NFC", stripped).casefold()


def standard_contains(text: str, query: str) -> bool:
    """Case-, diacritic- and width-insensitive substring test"""
    return fold_text(query) in fold_text(text)


def is_blank(s: Optional[str]) -> bool:
    return s is None or not s.strip()


# Distance formatting

def format_distance(meters: Decimal | float | int) -> str:
    """850 -> '850m', 1234 -> '1.2km'"""
    value = Decimal(str(meters))
    if value < 1000:
        return f"{int(value)}m"
    km = (value / Decimal(1000)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{km}km"
