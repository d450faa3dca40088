# utils/normalize.py
from typing import Any, Optional


def clean(value: Optional[Any]) -> str:
    """Trim surrounding whitespace; None becomes an empty string."""
    if value is None:
        return ""
    return str(value).strip()


def normalize_key(value: Optional[Any]) -> str:
    """
    Lookup key used for case-insensitive exact matching.

    Plain ``lower()`` rather than ``casefold()``: "Straße" and "STRASSE"
    stay different keys. Keys are compared with equality, so characters
    such as ``.``, ``+`` or ``*`` in user input are always taken literally.
    """
    return clean(value).lower()
