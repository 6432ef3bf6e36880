"""Per-variant defaults: starting content, display fallbacks, editor hints."""

from __future__ import annotations

import copy

from .variants import SectionVariant

# Content a freshly added section starts from
DEFAULT_CONTENT: dict[SectionVariant, dict] = {
    SectionVariant.HERO: {
        "title": "Título Principal",
        "subtitle": "Subtítulo",
    },
    SectionVariant.TEXT: {
        "title": "Seção de Texto",
        "content": "Conteúdo da seção...",
    },
    SectionVariant.PRICE: {
        "title": "Preço e Compra",
        "price": "R$ 97,00",
        "buttons": [{"text": "Comprar Agora", "link": "#"}],
    },
    SectionVariant.CAROUSEL: {
        "title": "Galeria de Imagens",
        "images": [],
    },
    SectionVariant.FAQ: {
        "title": "Perguntas Frequentes",
        "items": [
            {"question": "Pergunta exemplo?", "answer": "Resposta exemplo."},
        ],
    },
}

# Shown in place of an absent or empty field at render time
HERO_TITLE_FALLBACK = "Título Principal"
HERO_SUBTITLE_FALLBACK = "Subtítulo descritivo"
TEXT_CONTENT_FALLBACK = "Conteúdo da seção..."
PRICE_FALLBACK = "R$ 97,00"
BUTTON_TEXT_FALLBACK = "Comprar Agora"
IMAGE_ALT_FALLBACK = "Imagem"
FAQ_QUESTION_FALLBACK = "Pergunta sem título"
FAQ_ANSWER_FALLBACK = "Resposta não definida"

NO_IMAGES_MESSAGE = "Nenhuma imagem adicionada ainda"
NO_QUESTIONS_MESSAGE = "Nenhuma pergunta adicionada ainda"

PAGE_TITLE_FALLBACK = "Título da Página"
EMPTY_PAGE_MESSAGE = "Adicione seções para construir sua página de vendas"
PREVIEW_BANNER = "Modo Preview - Esta é uma visualização da sua página de vendas"

# Editor headings and input hints
SECTION_LABELS: dict[SectionVariant, str] = {
    SectionVariant.HERO: "Seção Hero",
    SectionVariant.TEXT: "Seção de Texto",
    SectionVariant.PRICE: "Seção de Preço",
    SectionVariant.CAROUSEL: "Carrossel de Imagens",
    SectionVariant.FAQ: "Perguntas Frequentes",
}

PLACEHOLDERS: dict[SectionVariant, dict[str, str]] = {
    SectionVariant.HERO: {
        "title": "Título do seu e-book",
        "subtitle": "Descrição complementar",
    },
    SectionVariant.TEXT: {
        "title": "Título da seção",
        "content": "Escreva o conteúdo da seção...",
    },
    SectionVariant.PRICE: {
        "title": "Oferta Especial!",
        "content": "Descreva os benefícios e o valor da oferta...",
        "price": "R$ 97,00",
        "note": "Oferta válida por tempo limitado...",
        "buttons.text": "COMPRAR AGORA",
        "buttons.link": "Link do botão",
    },
    SectionVariant.CAROUSEL: {
        "title": "Galeria de Imagens",
        "images.url": "https://exemplo.com/imagem.jpg",
        "images.title": "Título da imagem",
        "images.subtitle": "Subtítulo da imagem",
    },
    SectionVariant.FAQ: {
        "title": "Perguntas Frequentes",
        "items.question": "Qual é sua pergunta?",
        "items.answer": "Resposta para a pergunta...",
    },
}


def default_content(variant: SectionVariant) -> dict:
    """Return a fresh copy of the starting content for a new section."""
    return copy.deepcopy(DEFAULT_CONTENT.get(variant, {}))


def display_text(value: str | None, fallback: str) -> str:
    """Resolve a field for display: absent or empty values use the fallback."""
    return value if value else fallback
