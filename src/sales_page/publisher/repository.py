"""Supabase Page Repository: load and save sales pages on the hosted backend.

Pages live in the `sales_pages` table and their sections in `page_sections`
(foreign-keyed by `page_id`). Row-level security on the backend decides who
may read or write which rows; this module only issues the calls.

Saving is not transactional: if one section write fails, the writes that
already succeeded stay in place and BackendError is raised.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from typing import Any, Iterable, Optional

from src.common.config import SupabaseSettings, get_supabase_key, get_supabase_url, settings
from src.sales_page.errors import BackendError, PageValidationError
from src.sales_page.sections import (
    Page,
    PageMeta,
    Section,
    Unsaved,
    sort_sections,
)

from .models import PageRow, SaveResult, SectionRow

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Slug Helpers
# ---------------------------------------------------------------------------

def generate_slug(title: str) -> str:
    """Derive a URL slug from a page title.

    Accents are stripped, anything outside [a-z0-9 -] is dropped and runs of
    whitespace/hyphens collapse to a single hyphen.
    Example: "E-book Anatomia Músculo" -> "e-book-anatomia-musculo"
    """
    text = unicodedata.normalize("NFD", title.lower())
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    text = re.sub(r"[^a-z0-9\s-]", "", text)
    text = re.sub(r"\s+", "-", text)
    text = re.sub(r"-+", "-", text)
    return text.strip("-")


def validate_page_meta(meta: PageMeta) -> None:
    """Title and slug are required before anything is written."""
    if not meta.title.strip() or not meta.slug.strip():
        raise PageValidationError("Título e slug são obrigatórios.")


class SupabasePageRepository:
    """Loads and saves pages with their sections through the Supabase client."""

    def __init__(
        self,
        supabase_url: Optional[str] = None,
        supabase_key: Optional[str] = None,
        supabase_settings: Optional[SupabaseSettings] = None,
        client=None,
    ):
        self.settings = supabase_settings or settings.supabase
        self._supabase_url = supabase_url if supabase_url is not None else get_supabase_url()
        self._supabase_key = supabase_key if supabase_key is not None else get_supabase_key()
        self._client = client  # Lazy init when None

    def _get_client(self):
        """Lazy-initialize Supabase client (only when a call is made)."""
        if self._client is not None:
            return self._client
        if not self._supabase_url or not self._supabase_key:
            raise ValueError(
                "SUPABASE_URL / SUPABASE_SERVICE_KEY must be set in .env. "
                "See config/.env.example."
            )
        from supabase import create_client

        self._client = create_client(self._supabase_url, self._supabase_key)
        logger.info("Connected to Supabase: %s", self._supabase_url)
        return self._client

    def _pages(self):
        return self._get_client().table(self.settings.pages_table)

    def _sections(self):
        return self._get_client().table(self.settings.sections_table)

    @staticmethod
    def _execute(query, action: str) -> list[dict[str, Any]]:
        """Run a query builder and return its rows, wrapping backend failures."""
        try:
            result = query.execute()
        except Exception as e:
            logger.error("Supabase %s failed: %s", action, e)
            raise BackendError(f"{action} failed: {e}") from e
        return list(result.data or [])

    # --- Loading ---

    def _load_sections(self, page_id: str) -> list[Section]:
        rows = self._execute(
            self._sections().select("*").eq("page_id", page_id).order("order_index"),
            f"load sections of page {page_id}",
        )
        return sort_sections([SectionRow.from_supabase(r).to_section() for r in rows])

    def _page_from_rows(self, rows: list[dict]) -> Optional[Page]:
        if not rows:
            return None
        meta = PageRow.model_validate(rows[0]).to_meta()
        return Page(meta=meta, sections=self._load_sections(meta.id))

    def load_page(self, page_id: str) -> Optional[Page]:
        """Load a page by id (published or not). None when it does not exist."""
        rows = self._execute(
            self._pages().select("*").eq("id", page_id).limit(1),
            f"load page {page_id}",
        )
        page = self._page_from_rows(rows)
        if page is None:
            logger.info("Page not found: %s", page_id)
        return page

    def load_page_by_slug(self, slug: str) -> Optional[Page]:
        """Resolve a public page. Unpublished or unknown slugs give None."""
        rows = self._execute(
            self._pages().select("*").eq("slug", slug).eq("is_published", True).limit(1),
            f"load page /{slug}",
        )
        page = self._page_from_rows(rows)
        if page is None:
            logger.info("No published page for slug: %s", slug)
        return page

    # --- Saving ---

    def _save_meta(self, meta: PageMeta, user_id: Optional[str]) -> tuple[str, bool]:
        row = PageRow.from_meta(meta, user_id=user_id)
        if meta.id is None:
            data = row.to_supabase_dict()
            data.pop("id", None)
            data["is_published"] = False
            rows = self._execute(self._pages().insert(data), "create page")
            if not rows or rows[0].get("id") is None:
                raise BackendError("create page returned no id")
            page_id = str(rows[0]["id"])
            logger.info("Created page %s (/%s)", page_id, row.slug)
            return page_id, True

        self._execute(
            self._pages()
            .update({"title": row.title, "slug": row.slug, "primary_color": row.primary_color})
            .eq("id", meta.id),
            f"update page {meta.id}",
        )
        return meta.id, False

    def save_page(
        self,
        meta: PageMeta,
        sections: Iterable[Section],
        user_id: Optional[str] = None,
        removed_ids: Iterable[str] = (),
    ) -> SaveResult:
        """Create or update a page and write each of its sections.

        Unsaved sections are inserted and persisted ones updated in place, so
        row ids never change. `removed_ids` are section rows the user deleted
        in the editor; they are deleted by id.

        Raises:
            PageValidationError: title or slug missing (nothing written).
            BackendError: a backend call failed (earlier writes are kept).
        """
        validate_page_meta(meta)
        sections = list(sections)

        page_id, created = self._save_meta(meta, user_id)
        result = SaveResult(page_id=page_id, created_page=created)
        try:
            self._save_sections(page_id, sections, removed_ids, result)
        except BackendError as e:
            # The page row exists even though the save did not finish
            e.page_id = page_id
            e.inserted = dict(result.inserted)
            raise

        logger.info(
            "Saved page %s: %d inserted, %d updated, %d deleted",
            page_id, len(result.inserted), len(result.updated), len(result.deleted),
        )
        return result

    def _save_sections(
        self,
        page_id: str,
        sections: list[Section],
        removed_ids: Iterable[str],
        result: SaveResult,
    ) -> None:
        """Insert unsaved sections, update persisted ones, delete removed ids."""
        for section in sections:
            row = SectionRow.from_section(section, page_id)
            if isinstance(section.id, Unsaved):
                rows = self._execute(
                    self._sections().insert(row.to_insert_dict()),
                    f"insert {row.section_type} section",
                )
                if rows and rows[0].get("id") is not None:
                    result.inserted[section.id.key] = str(rows[0]["id"])
            else:
                self._execute(
                    self._sections().update(row.to_update_dict()).eq("id", section.id.id),
                    f"update section {section.id.id}",
                )
                result.updated.append(section.id.id)

        for section_id in removed_ids:
            self._execute(
                self._sections().delete().eq("id", section_id),
                f"delete section {section_id}",
            )
            result.deleted.append(section_id)

    # --- Admin operations ---

    def set_published(self, page_id: str, published: bool) -> None:
        self._execute(
            self._pages().update({"is_published": published}).eq("id", page_id),
            f"{'publish' if published else 'unpublish'} page {page_id}",
        )
        logger.info("Page %s %s", page_id, "published" if published else "unpublished")

    def delete_page(self, page_id: str) -> None:
        """Delete a page together with all of its sections."""
        self._execute(
            self._sections().delete().eq("page_id", page_id),
            f"delete sections of page {page_id}",
        )
        self._execute(
            self._pages().delete().eq("id", page_id),
            f"delete page {page_id}",
        )
        logger.info("Deleted page %s", page_id)
