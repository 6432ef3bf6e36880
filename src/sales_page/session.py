"""Page editing session: the authoring workflow around one page.

Orchestrates the complete flow:
load page → edit sections in the store → preview → validated save

Backend and validation failures become notifications. A save that fails part
way keeps the page id and section ids already written; nothing else changes.

Usage:
    session = PageEditorSession(SupabasePageRepository(), user_id=user.id)
    session.set_title("E-book Anatomia Muscular")
    hero = session.add_section(SectionVariant.HERO)
    session.editor_for(hero.key).set_field("subtitle", "Guia ilustrado")
    session.save()
"""

from __future__ import annotations

import logging
from typing import Optional

from src.sales_page.editor import SectionEditorForm, render_editor
from src.sales_page.errors import BackendError, PageValidationError
from src.sales_page.notifications import Notifier
from src.sales_page.publisher import (
    SaveResult,
    SupabasePageRepository,
    SupabaseStorage,
    generate_slug,
)
from src.sales_page.sections import PageMeta, Section, SectionVariant
from src.sales_page.store import SectionStore
from src.sales_page.template_engine import RenderOptions, TemplateRenderer

logger = logging.getLogger(__name__)


class PageEditorSession:
    """State of one page being authored: metadata plus its section store."""

    def __init__(
        self,
        repository: SupabasePageRepository,
        storage: Optional[SupabaseStorage] = None,
        renderer: Optional[TemplateRenderer] = None,
        notifier: Optional[Notifier] = None,
        user_id: Optional[str] = None,
    ):
        self.repository = repository
        self.storage = storage
        self.renderer = renderer or TemplateRenderer()
        self.notifier = notifier or Notifier()
        self.user_id = user_id
        self.meta = PageMeta()
        self.store = SectionStore()

    @property
    def is_create(self) -> bool:
        return self.meta.id is None

    # --- loading ---

    def open(self, page_id: str) -> bool:
        """Load an existing page into the session. False when it could not be loaded."""
        try:
            page = self.repository.load_page(page_id)
        except BackendError:
            logger.exception("Error fetching page %s", page_id)
            self.notifier.error("Não foi possível carregar a página.")
            return False
        if page is None:
            self.notifier.error("Não foi possível carregar a página.")
            return False
        self.meta = page.meta
        self.store = SectionStore(page.sections)
        return True

    # --- page settings ---

    def set_title(self, title: str) -> None:
        """Update the title; new pages derive their slug from it."""
        self.meta.title = title
        if self.is_create:
            self.meta.slug = generate_slug(title)

    def set_slug(self, slug: str) -> None:
        self.meta.slug = slug

    def set_theme_color(self, color: str) -> None:
        self.meta.theme_color = color

    # --- sections ---

    def add_section(self, variant: SectionVariant) -> Section:
        return self.store.add(variant)

    def editor_for(self, key: str) -> SectionEditorForm:
        section = self.store.get(key)
        return render_editor(
            section,
            on_update=lambda content: self.store.update(key, content),
            on_remove=lambda: self.store.remove(key),
            storage=self.storage,
            notifier=self.notifier,
        )

    def editors(self) -> list[SectionEditorForm]:
        return [self.editor_for(s.key) for s in self.store]

    # --- preview ---

    def preview_html(self) -> str:
        options = RenderOptions(is_preview=True, theme_color=self.meta.theme_color)
        return self.renderer.render_page(self.meta.title, self.store.sections, options)

    # --- persistence ---

    def save(self) -> Optional[SaveResult]:
        """Save page and sections. Returns None (with an error notification) on failure."""
        try:
            result = self.repository.save_page(
                self.meta,
                self.store.sections,
                user_id=self.user_id,
                removed_ids=self.store.removed_ids,
            )
        except PageValidationError as e:
            self.notifier.error(str(e))
            return None
        except BackendError as e:
            logger.exception("Error saving page")
            # Keep whatever was written so a retry updates instead of inserting again
            if e.page_id is not None:
                self.meta.id = e.page_id
            self._mark_inserted(e.inserted)
            self.notifier.error("Não foi possível salvar a página.")
            return None

        self.meta.id = result.page_id
        self._mark_inserted(result.inserted)
        self.store.clear_removed()
        self.notifier.success("Página salva com sucesso!")
        return result

    def _mark_inserted(self, inserted: dict[str, str]) -> None:
        for key, section_id in inserted.items():
            self.store.mark_persisted(key, section_id)

    def toggle_published(self) -> bool:
        """Flip the publish flag of a saved page."""
        if self.meta.id is None:
            self.notifier.error("Salve a página antes de publicá-la.")
            return False
        published = not self.meta.published
        try:
            self.repository.set_published(self.meta.id, published)
        except BackendError:
            logger.exception("Error toggling publish status")
            self.notifier.error("Não foi possível alterar o status da página.")
            return False
        self.meta.published = published
        if published:
            self.notifier.success("Sua página agora está visível publicamente.", title="Página publicada")
        else:
            self.notifier.success("Sua página foi movida para rascunho.", title="Página despublicada")
        return True

    def delete(self) -> bool:
        if self.meta.id is None:
            return False
        try:
            self.repository.delete_page(self.meta.id)
        except BackendError:
            logger.exception("Error deleting page")
            self.notifier.error("Não foi possível excluir a página.")
            return False
        self.notifier.success("A página foi excluída com sucesso.", title="Página excluída")
        self.meta = PageMeta()
        self.store = SectionStore()
        return True
