"""Merchant description normalization used to group related transactions"""

import re

_DIGITS = re.compile(r"\d+")
_NON_LETTERS = re.compile(r"[^a-z\s]")

KEY_TOKEN_COUNT = 3


def normalize_description(description: str) -> str:
    """
    Canonicalize a merchant description into a grouping key.

    Lower-cases, drops digits and anything that is not a letter or whitespace,
    then keeps the first three words. "Starbucks #1234" and "STARBUCKS #5678"
    both become "starbucks". Unrelated merchants sharing a three-word prefix
    collide; that is accepted.
    """
    cleaned = _NON_LETTERS.sub("", _DIGITS.sub("", description.lower())).strip()
    return " ".join(cleaned.split()[:KEY_TOKEN_COUNT])
