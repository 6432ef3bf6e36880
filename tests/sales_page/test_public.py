"""Tests for the public page view and the export CLI."""

from unittest.mock import MagicMock, patch

from bs4 import BeautifulSoup

from src.sales_page import main as cli
from src.sales_page.errors import BackendError
from src.sales_page.public import render_public_page
from src.sales_page.publisher import SupabasePageRepository
from src.sales_page.sections import Page, PageMeta


def published_page(sections) -> Page:
    return Page(
        meta=PageMeta(id="page-1", title="Anatomia", slug="anatomia", published=True, theme_color="#16a34a"),
        sections=sections,
    )


class TestPublicView:
    def test_renders_published_page(self, sample_sections):
        repository = MagicMock()
        repository.load_page_by_slug.return_value = published_page(sample_sections)

        html = render_public_page(repository, "anatomia")

        doc = BeautifulSoup(html, "lxml")
        assert doc.find(class_="sp-preview-banner") is None
        link = doc.find("a", class_="sp-button")
        assert link["href"] == "https://pay.example.com/checkout"
        assert link["target"] == "_blank"
        assert "--theme-color: #16a34a" in doc.find("section")["style"]

    def test_not_found(self):
        repository = MagicMock()
        repository.load_page_by_slug.return_value = None
        assert render_public_page(repository, "rascunho") is None

    def test_end_to_end_with_mocked_client(self, supabase_client, page_row, section_rows):
        client, _, _ = supabase_client(page_rows=[page_row], section_rows=section_rows)
        repository = SupabasePageRepository(supabase_url="https://x.supabase.co", supabase_key="k", client=client)

        doc = BeautifulSoup(render_public_page(repository, "anatomia-muscular"), "lxml")

        assert [s["data-variant"] for s in doc.find_all("section")] == ["hero", "price"]
        assert doc.find("h1").get_text(strip=True) == "Anatomia Muscular"


class TestCli:
    @patch("src.sales_page.main.SupabasePageRepository")
    def test_export(self, mock_repo_cls, tmp_path, sample_sections):
        mock_repo_cls.return_value.load_page_by_slug.return_value = published_page(sample_sections)
        out = tmp_path / "page.html"

        assert cli.main(["export", "--slug", "anatomia", "--out", str(out)]) == 0
        assert "Anatomia" in out.read_text(encoding="utf-8")

    @patch("src.sales_page.main.SupabasePageRepository")
    def test_export_not_found(self, mock_repo_cls, tmp_path):
        mock_repo_cls.return_value.load_page_by_slug.return_value = None
        out = tmp_path / "page.html"
        assert cli.main(["export", "--slug", "nope", "--out", str(out)]) == 1
        assert not out.exists()

    @patch("src.sales_page.main.SupabasePageRepository")
    def test_preview(self, mock_repo_cls, tmp_path, sample_sections):
        page = published_page(sample_sections)
        mock_repo_cls.return_value.load_page.return_value = page
        out = tmp_path / "preview.html"

        assert cli.main(["preview", "--page-id", "page-1", "--out", str(out)]) == 0
        assert "Modo Preview" in out.read_text(encoding="utf-8")

    @patch("src.sales_page.main.SupabasePageRepository")
    def test_backend_error_exit_code(self, mock_repo_cls, tmp_path):
        mock_repo_cls.return_value.load_page.side_effect = BackendError("down")
        assert cli.main(["preview", "--page-id", "x", "--out", str(tmp_path / "p.html")]) == 1
