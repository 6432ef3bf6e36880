"""Tests for the Supabase page repository (mocked client, no network)."""

from unittest.mock import MagicMock, patch

import pytest

from src.sales_page.errors import BackendError, PageValidationError
from src.sales_page.publisher import (
    PageRow,
    SectionRow,
    SupabasePageRepository,
    generate_slug,
    validate_page_meta,
)
from src.sales_page.sections import PageMeta, Persisted, Section, SectionVariant


def make_repo(client) -> SupabasePageRepository:
    return SupabasePageRepository(supabase_url="https://test.supabase.co", supabase_key="k", client=client)


# --- Slugs and validation ---


class TestSlug:
    @pytest.mark.parametrize("title,expected", [
        ("E-book Anatomia Músculo", "e-book-anatomia-musculo"),
        ("  Guia   Prático  ", "guia-pratico"),
        ("Promoção!!! 50% OFF", "promocao-50-off"),
        ("Ação -- Reação", "acao-reacao"),
        ("", ""),
    ])
    def test_generate_slug(self, title, expected):
        assert generate_slug(title) == expected

    def test_validation_requires_title_and_slug(self):
        with pytest.raises(PageValidationError, match="obrigatórios"):
            validate_page_meta(PageMeta(title="  ", slug="x"))
        with pytest.raises(PageValidationError):
            validate_page_meta(PageMeta(title="T", slug=""))
        validate_page_meta(PageMeta(title="T", slug="t"))


# --- Row mapping ---


class TestRows:
    def test_page_row_round_trip(self, page_row):
        meta = PageRow.model_validate(page_row).to_meta()
        assert meta.id == "page-1"
        assert meta.published is True
        assert meta.theme_color == "#16a34a"

    def test_missing_color_uses_default(self, page_row):
        page_row["primary_color"] = None
        assert PageRow.model_validate(page_row).to_meta().theme_color == "#3b82f6"

    def test_null_columns_use_defaults(self):
        row = PageRow.model_validate({"id": 7, "title": None, "slug": None, "is_published": None, "primary_color": None})
        meta = row.to_meta()
        assert meta.id == "7"
        assert meta.title == ""
        assert meta.slug == ""
        assert meta.published is False

    def test_load_page_with_null_columns(self, supabase_client):
        client, _, _ = supabase_client(page_rows=[{"id": "page-1", "title": None, "is_published": None}])
        page = make_repo(client).load_page("page-1")
        assert page.meta.title == ""
        assert page.meta.published is False

    def test_from_meta_trims(self):
        row = PageRow.from_meta(PageMeta(title="  T ", slug=" t "), user_id="u")
        assert row.title == "T"
        assert row.slug == "t"
        assert row.to_supabase_dict() == {
            "title": "T", "slug": "t", "is_published": False,
            "primary_color": "#3b82f6", "user_id": "u",
        }

    def test_section_row_from_supabase_tolerates_garbage(self):
        row = SectionRow.from_supabase({"id": 5, "page_id": 1, "section_type": "faq", "content": "x", "order_index": None})
        assert row.id == "5"
        assert row.content == {}
        assert row.order_index == 0
        section = row.to_section()
        assert section.id == Persisted(id="5")
        assert section.variant == SectionVariant.FAQ

    def test_section_row_unknown_variant(self):
        section = SectionRow(id="s", section_type="video", content={"src": "y"}).to_section()
        assert section.variant == "video"
        assert section.content.to_blob() == {"src": "y"}

    def test_loaded_content_saved_back_unchanged(self):
        stored = {"items": [{"question": 42, "answer": None}], "legacyColor": "red"}
        section = SectionRow(id="s", section_type="faq", content=stored).to_section()
        assert SectionRow.from_section(section, "page-1").content == stored

    def test_update_dict_has_no_variant(self):
        section = Section(id=Persisted(id="s"), variant="text", content={"title": "A"}, order=2)
        row = SectionRow.from_section(section, "page-1")
        assert row.to_update_dict() == {"content": {"title": "A"}, "order_index": 2}
        assert row.to_insert_dict()["section_type"] == "text"


# --- Loading ---


class TestLoad:
    def test_load_page(self, supabase_client, page_row, section_rows):
        client, pages, sections = supabase_client(page_rows=[page_row], section_rows=section_rows)
        page = make_repo(client).load_page("page-1")

        assert page.meta.title == "Anatomia Muscular"
        assert [s.key for s in page.sections] == ["s-1", "s-2"]
        assert page.sections[1].content.price == "R$ 47,00"
        pages.select.return_value.eq.assert_called_with("id", "page-1")
        sections.select.return_value.eq.assert_called_with("page_id", "page-1")

    def test_load_missing_page(self, supabase_client):
        client, _, sections = supabase_client(page_rows=[])
        assert make_repo(client).load_page("nope") is None
        sections.select.assert_not_called()

    def test_load_by_slug_filters_published(self, supabase_client, page_row):
        client, pages, _ = supabase_client(page_rows=[page_row])
        page = make_repo(client).load_page_by_slug("anatomia-muscular")

        assert page.meta.slug == "anatomia-muscular"
        pages.select.return_value.eq.assert_called_with("slug", "anatomia-muscular")
        pages.select.return_value.eq.return_value.eq.assert_called_with("is_published", True)

    def test_unpublished_slug_is_none(self, supabase_client):
        client, _, _ = supabase_client(page_rows=[])
        assert make_repo(client).load_page_by_slug("rascunho") is None

    def test_backend_failure(self, supabase_client):
        client, pages, _ = supabase_client()
        pages.select.return_value.eq.return_value.limit.return_value.execute.side_effect = RuntimeError("down")
        with pytest.raises(BackendError):
            make_repo(client).load_page("page-1")


# --- Saving ---


class TestSave:
    def test_create_page_and_insert_sections(self, supabase_client):
        client, pages, sections = supabase_client(inserted_page_id="page-9", inserted_section_ids=["r1", "r2"])
        hero = Section(variant="hero", content={"title": "T"}, order=0)
        faq = Section(variant="faq", content={}, order=1)

        result = make_repo(client).save_page(PageMeta(title="T", slug="t"), [hero, faq], user_id="u")

        assert result.page_id == "page-9"
        assert result.created_page
        assert result.inserted == {hero.key: "r1", faq.key: "r2"}
        page_insert = pages.insert.call_args.args[0]
        assert page_insert["is_published"] is False
        assert page_insert["user_id"] == "u"
        assert "id" not in page_insert
        first = sections.insert.call_args_list[0].args[0]
        assert first == {"page_id": "page-9", "section_type": "hero", "content": {"title": "T"}, "order_index": 0}

    def test_mixed_sections_insert_and_update(self, supabase_client):
        client, pages, sections = supabase_client()
        saved = Section(id=Persisted(id="s-1"), variant="text", content={"title": "A"}, order=0)
        new = Section(variant="price", content={"price": "R$ 1,00"}, order=1)

        result = make_repo(client).save_page(PageMeta(id="page-1", title="T", slug="t"), [saved, new])

        assert not result.created_page
        pages.insert.assert_not_called()
        pages.update.assert_called_once_with({"title": "T", "slug": "t", "primary_color": "#3b82f6"})
        sections.update.assert_called_once_with({"content": {"title": "A"}, "order_index": 0})
        sections.update.return_value.eq.assert_called_once_with("id", "s-1")
        assert sections.insert.call_count == 1
        assert sections.insert.call_args.args[0]["section_type"] == "price"
        assert result.updated == ["s-1"]
        assert list(result.inserted) == [new.key]
        sections.delete.assert_not_called()

    def test_removed_ids_deleted(self, supabase_client):
        client, _, sections = supabase_client()
        result = make_repo(client).save_page(PageMeta(id="page-1", title="T", slug="t"), [], removed_ids=["old-1"])
        sections.delete.return_value.eq.assert_called_once_with("id", "old-1")
        assert result.deleted == ["old-1"]

    def test_validation_writes_nothing(self):
        client = MagicMock()
        with pytest.raises(PageValidationError):
            make_repo(client).save_page(PageMeta(title="", slug=""), [Section(variant="hero")])
        client.table.assert_not_called()

    def test_partial_failure_raises(self, supabase_client):
        client, _, sections = supabase_client()
        sections.update.return_value.eq.return_value.execute.side_effect = RuntimeError("rls")
        saved = Section(id=Persisted(id="s-1"), variant="text", order=0)
        with pytest.raises(BackendError):
            make_repo(client).save_page(PageMeta(id="page-1", title="T", slug="t"), [saved])

    def test_failure_after_page_insert_reports_written_rows(self, supabase_client):
        client, _, sections = supabase_client(inserted_page_id="page-9")
        sections.insert.return_value.execute.side_effect = [
            MagicMock(data=[{"id": "r1"}]),
            RuntimeError("insert failed"),
        ]
        hero = Section(variant="hero", order=0)
        faq = Section(variant="faq", order=1)

        with pytest.raises(BackendError) as exc_info:
            make_repo(client).save_page(PageMeta(title="T", slug="t"), [hero, faq])

        assert exc_info.value.page_id == "page-9"
        assert exc_info.value.inserted == {hero.key: "r1"}

    def test_failed_page_insert_has_no_page_id(self, supabase_client):
        client, pages, _ = supabase_client()
        pages.insert.return_value.execute.side_effect = RuntimeError("duplicate slug")
        with pytest.raises(BackendError) as exc_info:
            make_repo(client).save_page(PageMeta(title="T", slug="t"), [])
        assert exc_info.value.page_id is None


# --- Admin operations ---


class TestAdmin:
    def test_set_published(self, supabase_client):
        client, pages, _ = supabase_client()
        make_repo(client).set_published("page-1", True)
        pages.update.assert_called_once_with({"is_published": True})
        pages.update.return_value.eq.assert_called_once_with("id", "page-1")

    def test_delete_page_cascades(self, supabase_client):
        client, pages, sections = supabase_client()
        make_repo(client).delete_page("page-1")
        sections.delete.return_value.eq.assert_called_once_with("page_id", "page-1")
        pages.delete.return_value.eq.assert_called_once_with("id", "page-1")


# --- Credentials ---


class TestCredentials:
    def test_missing_credentials_raise(self):
        repo = SupabasePageRepository(supabase_url="", supabase_key="")
        with pytest.raises(ValueError, match="SUPABASE_URL"):
            repo._get_client()

    @patch("supabase.create_client")
    def test_client_created_lazily(self, mock_create):
        repo = SupabasePageRepository(supabase_url="https://test.supabase.co", supabase_key="k")
        mock_create.assert_not_called()
        assert repo._get_client() is mock_create.return_value
        repo._get_client()
        mock_create.assert_called_once_with("https://test.supabase.co", "k")
