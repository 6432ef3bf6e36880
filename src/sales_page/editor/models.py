"""Form layouts for the section editor: which inputs each variant exposes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from src.sales_page.sections import SectionVariant
from src.sales_page.sections.defaults import PLACEHOLDERS, SECTION_LABELS


class Widget(str, Enum):
    """Input kind: single-line for short text, textarea for long text."""
    INPUT = "input"
    TEXTAREA = "textarea"


@dataclass(frozen=True)
class FieldSpec:
    name: str
    label: str
    widget: Widget = Widget.INPUT
    placeholder: str = ""


@dataclass(frozen=True)
class ListFieldSpec:
    """A list-valued content field edited entry by entry."""
    name: str
    label: str
    add_label: str
    entry_fields: tuple[FieldSpec, ...] = ()

    def blank_entry(self) -> dict:
        return {f.name: "" for f in self.entry_fields}


@dataclass(frozen=True)
class EditorLayout:
    heading: str
    fields: tuple[FieldSpec, ...] = ()
    list_field: ListFieldSpec | None = None
    background_upload: bool = False

    def get_field(self, name: str) -> FieldSpec | None:
        return next((f for f in self.fields if f.name == name), None)


def _field(variant: SectionVariant, name: str, label: str, widget: Widget = Widget.INPUT) -> FieldSpec:
    return FieldSpec(name, label, widget, PLACEHOLDERS[variant].get(name, ""))


def _entry(variant: SectionVariant, list_name: str, name: str, label: str,
           widget: Widget = Widget.INPUT) -> FieldSpec:
    return FieldSpec(name, label, widget, PLACEHOLDERS[variant].get(f"{list_name}.{name}", ""))


_HERO = SectionVariant.HERO
_TEXT = SectionVariant.TEXT
_PRICE = SectionVariant.PRICE
_CAROUSEL = SectionVariant.CAROUSEL
_FAQ = SectionVariant.FAQ

EDITOR_LAYOUTS: dict[SectionVariant, EditorLayout] = {
    _HERO: EditorLayout(
        heading=SECTION_LABELS[_HERO],
        fields=(
            _field(_HERO, "title", "Título Principal"),
            _field(_HERO, "subtitle", "Subtítulo", Widget.TEXTAREA),
        ),
        background_upload=True,
    ),
    _TEXT: EditorLayout(
        heading=SECTION_LABELS[_TEXT],
        fields=(
            _field(_TEXT, "title", "Título da Seção"),
            _field(_TEXT, "content", "Conteúdo", Widget.TEXTAREA),
        ),
    ),
    _PRICE: EditorLayout(
        heading=SECTION_LABELS[_PRICE],
        fields=(
            _field(_PRICE, "title", "Título da Seção"),
            _field(_PRICE, "content", "Conteúdo da Seção", Widget.TEXTAREA),
            _field(_PRICE, "price", "Preço"),
            _field(_PRICE, "note", "Observação", Widget.TEXTAREA),
        ),
        list_field=ListFieldSpec(
            name="buttons",
            label="Botões de Compra",
            add_label="Adicionar Botão",
            entry_fields=(
                _entry(_PRICE, "buttons", "text", "Texto do Botão"),
                _entry(_PRICE, "buttons", "link", "Link do Botão"),
            ),
        ),
    ),
    _CAROUSEL: EditorLayout(
        heading=SECTION_LABELS[_CAROUSEL],
        fields=(_field(_CAROUSEL, "title", "Título da Seção"),),
        list_field=ListFieldSpec(
            name="images",
            label="Imagens",
            add_label="Adicionar Imagem",
            entry_fields=(
                _entry(_CAROUSEL, "images", "url", "URL da Imagem"),
                _entry(_CAROUSEL, "images", "title", "Título da Imagem"),
                _entry(_CAROUSEL, "images", "subtitle", "Subtítulo"),
            ),
        ),
    ),
    _FAQ: EditorLayout(
        heading=SECTION_LABELS[_FAQ],
        fields=(_field(_FAQ, "title", "Título da Seção"),),
        list_field=ListFieldSpec(
            name="items",
            label="Perguntas e Respostas",
            add_label="Adicionar Pergunta",
            entry_fields=(
                _entry(_FAQ, "items", "question", "Pergunta"),
                _entry(_FAQ, "items", "answer", "Resposta", Widget.TEXTAREA),
            ),
        ),
    ),
}

UNSUPPORTED_MESSAGE = "Tipo de seção não suportado"
