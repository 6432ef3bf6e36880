"""Catalogue of section variants."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class SectionVariant(str, Enum):
    """Closed set of section kinds a page can be composed from."""
    HERO = "hero"
    TEXT = "text"
    PRICE = "price"
    CAROUSEL = "carousel"
    FAQ = "faq"


def parse_variant(value: Any) -> Optional[SectionVariant]:
    """Map a stored variant string to the enum, or None when unrecognised."""
    if isinstance(value, SectionVariant):
        return value
    try:
        return SectionVariant(value)
    except (TypeError, ValueError):
        return None
