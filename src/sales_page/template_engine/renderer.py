"""
Template Renderer for sales pages.
Handles Jinja2 template loading and rendering of sections and whole pages.

The same section data feeds the authoring preview and the public page; the
only differences are the `is_preview` flag and the theme color, both passed
in explicitly through RenderOptions.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Iterable, Optional
from urllib.parse import quote, urlsplit

from jinja2 import Environment, FileSystemLoader, select_autoescape

from src.common.config import RenderSettings, settings
from src.sales_page.sections import Section, SectionVariant, sort_sections
from src.sales_page.sections.defaults import (
    EMPTY_PAGE_MESSAGE,
    NO_IMAGES_MESSAGE,
    NO_QUESTIONS_MESSAGE,
    PAGE_TITLE_FALLBACK,
    PREVIEW_BANNER,
)

from .models import RenderOptions, SEOMetaTags

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"

SECTION_TEMPLATES: dict[SectionVariant, str] = {
    SectionVariant.HERO: "sections/hero.html.jinja2",
    SectionVariant.TEXT: "sections/text.html.jinja2",
    SectionVariant.PRICE: "sections/price.html.jinja2",
    SectionVariant.CAROUSEL: "sections/carousel.html.jinja2",
    SectionVariant.FAQ: "sections/faq.html.jinja2",
}

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_SAFE_SCHEMES = {"", "http", "https", "mailto", "tel"}


def safe_url(value: Optional[str], fallback: str = "#") -> str:
    """Drop URLs with script-capable schemes (javascript:, data:, ...)."""
    if not value:
        return fallback
    value = value.strip()
    try:
        scheme = urlsplit(value).scheme.lower()
    except ValueError:
        return fallback
    return value if scheme in _SAFE_SCHEMES else fallback


def css_url(value: Optional[str]) -> str:
    """Quote a URL for use inside CSS `url('...')`."""
    return quote(safe_url(value, ""), safe=":/?#[]@!$&*+,;=%~-._")


def normalize_theme_color(color: Optional[str], default: str) -> str:
    """Accept #rgb / #rrggbb (with optional alpha); anything else uses the default."""
    if color and _HEX_COLOR.match(color.strip()):
        return color.strip()
    if color:
        logger.warning("Ignoring invalid theme color %r, using %s", color, default)
    return default


def create_environment(templates_dir: Path) -> Environment:
    """Jinja2 environment with HTML autoescaping and the URL filters."""
    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(["html", "xml", "jinja2"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=False,
    )
    env.filters["safe_url"] = safe_url
    env.filters["css_url"] = css_url
    return env


class TemplateRenderer:
    """
    Renders sections and sales pages using Jinja2 templates.

    Usage:
        renderer = TemplateRenderer()
        html = renderer.render_page("Meu E-book", sections, RenderOptions(is_preview=True))
    """

    def __init__(
        self,
        templates_dir: Optional[Path] = None,
        render_settings: Optional[RenderSettings] = None,
    ):
        """
        Initialize the template renderer.

        Args:
            templates_dir: Path to templates directory.
                          Defaults to ./templates relative to this file.
            render_settings: Placeholder asset, footer text and default theme.
                          Defaults to the project settings.
        """
        self.templates_dir = templates_dir or TEMPLATES_DIR
        self.settings = render_settings or settings.render
        self.env = create_environment(self.templates_dir)

    def _theme(self, options: RenderOptions) -> str:
        return normalize_theme_color(options.theme_color, self.settings.default_theme_color)

    def render_section(
        self,
        section: Section,
        options: Optional[RenderOptions] = None,
        anchor: str = "section",
    ) -> str:
        """
        Render one section to an HTML fragment.

        Args:
            section: Section to render
            options: Preview flag and theme color
            anchor: Prefix for element ids inside the fragment

        Returns:
            HTML string, empty for a variant outside the catalogue
        """
        options = options or RenderOptions()
        variant = section.known_variant
        template_name = SECTION_TEMPLATES.get(variant) if variant else None
        if template_name is None:
            # Unknown variants are skipped, not reported as errors
            logger.debug("Skipping section %s with unknown variant %r", section.key, section.variant)
            return ""

        template = self.env.get_template(template_name)
        return template.render(
            section=section.content.to_template_context(),
            variant=variant.value,
            anchor=anchor,
            is_preview=options.is_preview,
            theme_color=self._theme(options),
            placeholder_image=self.settings.placeholder_image,
            no_images_message=NO_IMAGES_MESSAGE,
            no_questions_message=NO_QUESTIONS_MESSAGE,
        )

    def render_sections(
        self,
        sections: Iterable[Section],
        options: Optional[RenderOptions] = None,
    ) -> list[str]:
        """Render sections in display order, dropping empty fragments."""
        options = options or RenderOptions()
        fragments = []
        for position, section in enumerate(sort_sections(list(sections))):
            html = self.render_section(section, options, anchor=f"section-{position}")
            if html:
                fragments.append(html)
        return fragments

    def render_page(
        self,
        title: str,
        sections: Iterable[Section],
        options: Optional[RenderOptions] = None,
    ) -> str:
        """
        Render a complete HTML document for a page.

        An empty section list shows the page title and an invitation to add
        sections instead of the section list.
        """
        options = options or RenderOptions()
        sections = list(sections)
        template = self.env.get_template("page.html.jinja2")
        return template.render(**self.page_context(title, sections, options))

    def page_context(
        self,
        title: str,
        sections: list[Section],
        options: RenderOptions,
    ) -> dict[str, Any]:
        """Build the Jinja2 context for the page wrapper."""
        return {
            "meta": SEOMetaTags.for_page(title or PAGE_TITLE_FALLBACK).to_template_context(),
            "title": title or PAGE_TITLE_FALLBACK,
            "fragments": self.render_sections(sections, options),
            "has_sections": len(sections) > 0,
            "is_preview": options.is_preview,
            "theme_color": self._theme(options),
            "preview_banner": PREVIEW_BANNER,
            "empty_message": EMPTY_PAGE_MESSAGE,
            "footer_text": self.settings.footer_text,
        }


def render_section(
    section: Section,
    is_preview: bool = False,
    theme_color: Optional[str] = None,
) -> str:
    """
    Convenience function to render a single section.

    Args:
        section: Section to render
        is_preview: Disable outbound navigation from call-to-action buttons
        theme_color: Accent color for headings, price and buttons

    Returns:
        HTML fragment
    """
    options = RenderOptions(
        is_preview=is_preview,
        theme_color=theme_color or settings.render.default_theme_color,
    )
    return TemplateRenderer().render_section(section, options)


def render_page(
    title: str,
    sections: Iterable[Section],
    is_preview: bool = False,
    theme_color: Optional[str] = None,
) -> str:
    """Convenience function to render a complete page document."""
    options = RenderOptions(
        is_preview=is_preview,
        theme_color=theme_color or settings.render.default_theme_color,
    )
    return TemplateRenderer().render_page(title, sections, options)
