from __future__ import annotations

import re
import unicodedata

_WORD_START = re.compile(r"\b\w")


def normalize_login(value: str) -> str:
    """Lower-case login name; an email address collapses to its local part."""

    normalized = unicodedata.normalize("NFKC", value).strip().lower()
    if "@" in normalized:
        normalized = normalized.split("@", 1)[0]
    return normalized


def title_case(value: str) -> str:
    """``"DADRA-NAGAR HAVELI"`` -> ``"Dadra-Nagar Haveli"``."""

    return _WORD_START.sub(lambda match: match.group(0).upper(), value.lower())
