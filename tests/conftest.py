"""Shared test fixtures for the sales page builder."""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Ensure src is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.sales_page.notifications import Notifier
from src.sales_page.sections import Persisted, Section, SectionVariant
from src.sales_page.template_engine import TemplateRenderer


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def notifier() -> Notifier:
    return Notifier()


@pytest.fixture
def sample_sections() -> list[Section]:
    """A typical e-book sales page, already saved."""
    return [
        Section(
            id=Persisted(id="s-hero"),
            variant=SectionVariant.HERO,
            content={"title": "Anatomia Muscular", "subtitle": "Guia ilustrado para estudantes"},
            order=0,
        ),
        Section(
            id=Persisted(id="s-text"),
            variant=SectionVariant.TEXT,
            content={"title": "Sobre o e-book", "content": "Mais de 200 ilustrações.\nAcesso vitalício."},
            order=1,
        ),
        Section(
            id=Persisted(id="s-price"),
            variant=SectionVariant.PRICE,
            content={
                "title": "Oferta Especial!",
                "price": "R$ 47,00",
                "buttons": [{"text": "Comprar", "link": "https://pay.example.com/checkout"}],
            },
            order=2,
        ),
        Section(
            id=Persisted(id="s-faq"),
            variant=SectionVariant.FAQ,
            content={
                "title": "Perguntas Frequentes",
                "items": [{"question": "Recebo na hora?", "answer": "Sim, por e-mail."}],
            },
            order=3,
        ),
    ]


@pytest.fixture
def page_row() -> dict:
    """A `sales_pages` row as returned by Supabase."""
    return {
        "id": "page-1",
        "title": "Anatomia Muscular",
        "slug": "anatomia-muscular",
        "is_published": True,
        "primary_color": "#16a34a",
        "user_id": "user-1",
        "created_at": "2024-05-01T12:00:00+00:00",
    }


@pytest.fixture
def section_rows() -> list[dict]:
    """`page_sections` rows as returned by Supabase, deliberately out of order."""
    return [
        {
            "id": "s-2",
            "page_id": "page-1",
            "section_type": "price",
            "content": {"price": "R$ 47,00", "buttons": [{"text": "Comprar", "link": "https://pay.example.com"}]},
            "order_index": 1,
        },
        {
            "id": "s-1",
            "page_id": "page-1",
            "section_type": "hero",
            "content": {"title": "Anatomia Muscular"},
            "order_index": 0,
        },
    ]


def make_supabase_client(
    page_rows: list[dict] | None = None,
    section_rows: list[dict] | None = None,
    inserted_page_id: str = "page-new",
    inserted_section_ids: list[str] | None = None,
) -> tuple[MagicMock, MagicMock, MagicMock]:
    """Build a MagicMock Supabase client with separate table mocks.

    Returns (client, pages_table, sections_table).
    """
    client = MagicMock()
    pages = MagicMock(name="sales_pages")
    sections = MagicMock(name="page_sections")
    client.table.side_effect = lambda name: {"sales_pages": pages, "page_sections": sections}[name]

    page_rows = page_rows or []
    # load_page: select().eq(id).limit(1)
    pages.select.return_value.eq.return_value.limit.return_value.execute.return_value.data = page_rows
    # load_page_by_slug: select().eq(slug).eq(is_published).limit(1)
    pages.select.return_value.eq.return_value.eq.return_value.limit.return_value.execute.return_value.data = page_rows
    pages.insert.return_value.execute.return_value.data = [{"id": inserted_page_id}]
    pages.update.return_value.eq.return_value.execute.return_value.data = []
    pages.delete.return_value.eq.return_value.execute.return_value.data = []

    sections.select.return_value.eq.return_value.order.return_value.execute.return_value.data = (
        section_rows or []
    )
    ids = iter(inserted_section_ids or [f"row-{i}" for i in range(1, 100)])
    sections.insert.return_value.execute.side_effect = lambda: MagicMock(data=[{"id": next(ids)}])
    sections.update.return_value.eq.return_value.execute.return_value.data = []
    sections.delete.return_value.eq.return_value.execute.return_value.data = []
    return client, pages, sections


@pytest.fixture
def supabase_client():
    return make_supabase_client
