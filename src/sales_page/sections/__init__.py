# Section Schema: variant catalogue, typed content records, defaults
"""
Section content model shared by the renderer and the editor form.
"""

from .defaults import SECTION_LABELS, default_content, display_text
from .models import (
    CONTENT_MODELS,
    CarouselContent,
    CarouselImage,
    FAQContent,
    FAQItem,
    HeroContent,
    Page,
    PageMeta,
    Persisted,
    PriceButton,
    PriceContent,
    Section,
    SectionContent,
    SectionId,
    TextContent,
    UnknownContent,
    Unsaved,
    parse_content,
    sort_sections,
)
from .variants import SectionVariant, parse_variant

__all__ = [
    "CONTENT_MODELS",
    "CarouselContent",
    "CarouselImage",
    "FAQContent",
    "FAQItem",
    "HeroContent",
    "Page",
    "PageMeta",
    "Persisted",
    "PriceButton",
    "PriceContent",
    "SECTION_LABELS",
    "Section",
    "SectionContent",
    "SectionId",
    "SectionVariant",
    "TextContent",
    "UnknownContent",
    "Unsaved",
    "default_content",
    "display_text",
    "parse_content",
    "parse_variant",
    "sort_sections",
]
