"""CLI entry point for exporting sales pages as static HTML.

Usage:
    python -m src.sales_page.main export --slug anatomia-muscular --out page.html
    python -m src.sales_page.main preview --page-id 4f1c... --out preview.html
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from src.common.config import DATA_EXPORTS_DIR
from src.common.logging import setup_logging

from .errors import BackendError
from .public import render_public_page
from .publisher import SupabasePageRepository
from .template_engine import RenderOptions, TemplateRenderer

logger = logging.getLogger(__name__)


def _write(html: str, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(html)
    logger.info("Page written to: %s", output_path)


def export_published(repository: SupabasePageRepository, slug: str, output_path: Path) -> int:
    html = render_public_page(repository, slug)
    if html is None:
        logger.error("No published page with slug %r", slug)
        return 1
    _write(html, output_path)
    return 0


def export_preview(repository: SupabasePageRepository, page_id: str, output_path: Path) -> int:
    page = repository.load_page(page_id)
    if page is None:
        logger.error("Page %s not found", page_id)
        return 1
    options = RenderOptions(is_preview=True, theme_color=page.meta.theme_color)
    html = TemplateRenderer().render_page(page.meta.title, page.sections, options)
    _write(html, output_path)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Sales page export")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    export_parser = subparsers.add_parser("export", help="Render a published page by slug")
    export_parser.add_argument("--slug", required=True, help="Public slug of the page")
    export_parser.add_argument("--out", type=Path, help="Output HTML path")

    preview_parser = subparsers.add_parser("preview", help="Render any page by id in preview mode")
    preview_parser.add_argument("--page-id", required=True, help="Page id")
    preview_parser.add_argument("--out", type=Path, help="Output HTML path")

    args = parser.parse_args(argv)

    # Module loggers live under "src.sales_page"
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, module_name="src.sales_page")

    repository = SupabasePageRepository()
    try:
        if args.command == "export":
            out = args.out or DATA_EXPORTS_DIR / f"{args.slug}.html"
            return export_published(repository, args.slug, out)
        out = args.out or DATA_EXPORTS_DIR / f"preview_{args.page_id}.html"
        return export_preview(repository, args.page_id, out)
    except (BackendError, ValueError) as e:
        logger.error("Export failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
