"""Text, rank and price normalisation helpers."""

from __future__ import annotations

import copy
import re

from bs4 import Tag

_DIGITS_PATTERN = re.compile(r"\d+")
_NON_DIGIT_PATTERN = re.compile(r"[^0-9]")


def clean_text(node: Tag | None) -> str:
    """Return the node's text without embedded style/script content.

    Works on a copy so the parsed document is left untouched.
    """
    if node is None:
        return ""
    clone = copy.copy(node)
    for noise in clone.find_all(["style", "script"]):
        noise.decompose()
    return clone.get_text().strip()


def extract_rank(text: str) -> int:
    """Return the first run of digits in text as an int, 0 if there is none."""
    match = _DIGITS_PATTERN.search(text or "")
    if not match:
        return 0
    return int(match.group(0))


def title_case(text: str) -> str:
    """Lower-case then title-case, e.g. "PERAWATAN kulit" -> "Perawatan Kulit"."""
    return (text or "").lower().title()


def format_rupiah(raw_price) -> str:
    """Format a loosely-typed price as an Indonesian Rupiah display string.

    Args:
        raw_price: int, float, numeric string or None (as found in JSON-LD
            ``offers.lowPrice``).

    Returns:
        e.g. "Rp 1.234.567". "" for None, unsupported types, or input
        without any digit.
    """
    # bool is an int subclass but never a price
    if raw_price is None or isinstance(raw_price, bool):
        return ""
    if isinstance(raw_price, int):
        price_str = str(raw_price)
    elif isinstance(raw_price, float):
        price_str = f"{raw_price:.0f}"
    elif isinstance(raw_price, str):
        price_str = raw_price
    else:
        return ""

    digits = _NON_DIGIT_PATTERN.sub("", price_str)
    if not digits:
        return ""
    return "Rp " + f"{int(digits):,}".replace(",", ".")
