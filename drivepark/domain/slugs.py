"""Domain helpers for listing slug validation and generation."""
from __future__ import annotations

import re
import unicodedata

SLUG_PATTERN = re.compile(r"[a-z0-9](?:[a-z0-9-]{1,78})[a-z0-9]")
# Segments that would shadow fixed routes under /{locale}/listings/...
RESERVED_SLUGS = {
    "new",
    "checkout",
    "location",
    "chauffeur",
    "experience",
    "static",
}


def is_valid_slug(value: str | None) -> bool:
    """Return True when slug matches allowed pattern and is not reserved."""
    if not value:
        return False
    return bool(SLUG_PATTERN.fullmatch(value)) and value not in RESERVED_SLUGS


def slugify(value: str | None) -> str:
    """Lowercase, strip accents, and collapse everything else into single dashes."""
    if not value:
        return ""
    text = unicodedata.normalize("NFD", value.strip().lower())
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    text = re.sub(r"[\s_]+", "-", text)
    text = re.sub(r"[^a-z0-9-]", "", text)
    text = re.sub(r"-+", "-", text)
    return text.strip("-")
