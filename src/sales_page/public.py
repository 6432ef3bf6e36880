"""Public read path: resolve a published page by slug and render it."""

from __future__ import annotations

import logging
from typing import Optional

from src.sales_page.publisher import SupabasePageRepository
from src.sales_page.template_engine import RenderOptions, TemplateRenderer

logger = logging.getLogger(__name__)


def render_public_page(
    repository: SupabasePageRepository,
    slug: str,
    renderer: Optional[TemplateRenderer] = None,
) -> Optional[str]:
    """HTML for the published page at `slug`, or None for "not found".

    Unpublished pages and unknown slugs are both "not found"; a backend error
    propagates as BackendError.
    """
    page = repository.load_page_by_slug(slug)
    if page is None:
        return None
    renderer = renderer or TemplateRenderer()
    options = RenderOptions(is_preview=False, theme_color=page.meta.theme_color)
    return renderer.render_page(page.meta.title, page.sections, options)
