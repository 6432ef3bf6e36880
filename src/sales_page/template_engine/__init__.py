# Template Engine Module
# Jinja2 section and page templates shared by preview and public view

from .models import RenderOptions, SEOMetaTags
from .renderer import (
    SECTION_TEMPLATES,
    TemplateRenderer,
    create_environment,
    css_url,
    normalize_theme_color,
    render_page,
    render_section,
    safe_url,
)

__all__ = [
    "RenderOptions",
    "SECTION_TEMPLATES",
    "SEOMetaTags",
    "TemplateRenderer",
    "create_environment",
    "css_url",
    "normalize_theme_color",
    "render_page",
    "render_section",
    "safe_url",
]
