"""Data models for the template engine."""

from __future__ import annotations

from dataclasses import dataclass, field

from src.common.config import settings


@dataclass(frozen=True)
class RenderOptions:
    """Parameters threaded through every render call."""
    is_preview: bool = False
    theme_color: str = field(default_factory=lambda: settings.render.default_theme_color)


@dataclass
class SEOMetaTags:
    """Document head metadata for a rendered page."""
    title: str = ""
    description: str = ""
    og_title: str = ""
    og_description: str = ""
    og_type: str = "website"

    @classmethod
    def for_page(cls, title: str) -> SEOMetaTags:
        description = f"{title} - Página de vendas"
        return cls(
            title=title,
            description=description,
            og_title=title,
            og_description=description,
        )

    def to_template_context(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "og_title": self.og_title,
            "og_description": self.og_description,
            "og_type": self.og_type,
        }
