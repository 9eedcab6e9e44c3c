"""Supported languages and a cheap script-based language detector."""

from __future__ import annotations

import re
from enum import StrEnum

from mailtasks.exceptions import InvalidInputError


class Language(StrEnum):
    """Languages the pipeline can prompt and parse in."""

    HE = "he"
    EN = "en"


_HEBREW_CHARS = re.compile(r"[\u0590-\u05FF]")


def detect_language(text: str) -> Language:
    """Return Hebrew if the text contains any Hebrew letter, else English."""
    return Language.HE if _HEBREW_CHARS.search(text or "") else Language.EN


def coerce_language(value: str | Language) -> Language:
    """Normalise a caller-supplied language tag.

    Raises:
        InvalidInputError: If the tag is not ``"he"`` or ``"en"``.
    """
    if isinstance(value, Language):
        return value
    try:
        return Language(str(value).strip().lower())
    except ValueError as exc:
        raise InvalidInputError(f"Unsupported language: {value!r}") from exc
