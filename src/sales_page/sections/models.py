"""Section and page models.

Content is stored as an open JSON blob on the backend. Each variant gets its
own typed record, parsed leniently: a malformed field is treated as absent and
unknown keys are kept so the blob round-trips unchanged.
"""

from __future__ import annotations

import copy
import uuid
from typing import Any, ClassVar, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.common.config import DEFAULT_THEME_COLOR

from .defaults import (
    BUTTON_TEXT_FALLBACK,
    FAQ_ANSWER_FALLBACK,
    FAQ_QUESTION_FALLBACK,
    HERO_SUBTITLE_FALLBACK,
    HERO_TITLE_FALLBACK,
    IMAGE_ALT_FALLBACK,
    PRICE_FALLBACK,
    TEXT_CONTENT_FALLBACK,
    display_text,
)
from .variants import SectionVariant, parse_variant


def _coerce_text(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _coerce_list(value: Any) -> Optional[list]:
    return list(value) if isinstance(value, list) else None


class LenientModel(BaseModel):
    """Base for content records: never rejects input, keeps unknown keys."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    TEXT_FIELDS: ClassVar[tuple[str, ...]] = ()
    LIST_FIELDS: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="before")
    @classmethod
    def _lenient(cls, data: Any) -> dict:
        if not isinstance(data, dict):
            return {}
        cleaned = {str(k): v for k, v in data.items()}
        for key in cls.TEXT_FIELDS:
            if key in cleaned:
                cleaned[key] = _coerce_text(cleaned[key])
        for key in cls.LIST_FIELDS:
            if key in cleaned:
                cleaned[key] = _coerce_list(cleaned[key])
        return cleaned

    def to_blob(self) -> dict:
        """Serialize for storage, omitting absent fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# List entries
# ---------------------------------------------------------------------------

class PriceButton(LenientModel):
    """A call-to-action button in a price section."""
    TEXT_FIELDS: ClassVar[tuple[str, ...]] = ("text", "link")

    text: Optional[str] = None
    link: Optional[str] = None


class CarouselImage(LenientModel):
    """One card of an image carousel."""
    TEXT_FIELDS: ClassVar[tuple[str, ...]] = ("url", "title", "subtitle")

    url: Optional[str] = None
    title: Optional[str] = None
    subtitle: Optional[str] = None


class FAQItem(LenientModel):
    """A single FAQ question/answer pair."""
    TEXT_FIELDS: ClassVar[tuple[str, ...]] = ("question", "answer")

    question: Optional[str] = None
    answer: Optional[str] = None


# ---------------------------------------------------------------------------
# Variant content records
# ---------------------------------------------------------------------------

class SectionContent(LenientModel):
    """Common base of the per-variant content records."""

    def to_template_context(self) -> dict:
        """Convert to a Jinja2 context with every display fallback resolved."""
        return {}


class HeroContent(SectionContent):
    TEXT_FIELDS: ClassVar[tuple[str, ...]] = ("title", "subtitle", "backgroundImage")

    title: Optional[str] = None
    subtitle: Optional[str] = None
    background_image: Optional[str] = Field(default=None, alias="backgroundImage")

    def to_template_context(self) -> dict:
        return {
            "title": display_text(self.title, HERO_TITLE_FALLBACK),
            "subtitle": display_text(self.subtitle, HERO_SUBTITLE_FALLBACK),
            "background_image": self.background_image or "",
        }


class TextContent(SectionContent):
    TEXT_FIELDS: ClassVar[tuple[str, ...]] = ("title", "content")

    title: Optional[str] = None
    content: Optional[str] = None

    def to_template_context(self) -> dict:
        return {
            "title": self.title or "",
            "content": display_text(self.content, TEXT_CONTENT_FALLBACK),
        }


class PriceContent(SectionContent):
    TEXT_FIELDS: ClassVar[tuple[str, ...]] = ("title", "content", "price", "note")
    LIST_FIELDS: ClassVar[tuple[str, ...]] = ("buttons",)

    title: Optional[str] = None
    content: Optional[str] = None
    price: Optional[str] = None
    note: Optional[str] = None
    buttons: Optional[list[PriceButton]] = None

    def to_template_context(self) -> dict:
        return {
            "title": self.title or "",
            "content": self.content or "",
            "price": display_text(self.price, PRICE_FALLBACK),
            "note": self.note or "",
            "buttons": [
                {
                    "text": display_text(b.text, BUTTON_TEXT_FALLBACK),
                    "link": b.link or "#",
                }
                for b in self.buttons or []
            ],
        }


class CarouselContent(SectionContent):
    TEXT_FIELDS: ClassVar[tuple[str, ...]] = ("title",)
    LIST_FIELDS: ClassVar[tuple[str, ...]] = ("images",)

    title: Optional[str] = None
    images: Optional[list[CarouselImage]] = None

    def to_template_context(self) -> dict:
        return {
            "title": self.title or "",
            "images": [
                {
                    "url": img.url or "",
                    "alt": display_text(img.title, IMAGE_ALT_FALLBACK),
                    "title": img.title or "",
                    "subtitle": img.subtitle or "",
                }
                for img in self.images or []
            ],
        }


class FAQContent(SectionContent):
    TEXT_FIELDS: ClassVar[tuple[str, ...]] = ("title",)
    LIST_FIELDS: ClassVar[tuple[str, ...]] = ("items",)

    title: Optional[str] = None
    items: Optional[list[FAQItem]] = None

    def to_template_context(self) -> dict:
        return {
            "title": self.title or "",
            "items": [
                {
                    "question": display_text(item.question, FAQ_QUESTION_FALLBACK),
                    "answer": display_text(item.answer, FAQ_ANSWER_FALLBACK),
                }
                for item in self.items or []
            ],
        }


class UnknownContent(SectionContent):
    """Content of a stored section whose variant is not in the catalogue."""


CONTENT_MODELS: dict[SectionVariant, type[SectionContent]] = {
    SectionVariant.HERO: HeroContent,
    SectionVariant.TEXT: TextContent,
    SectionVariant.PRICE: PriceContent,
    SectionVariant.CAROUSEL: CarouselContent,
    SectionVariant.FAQ: FAQContent,
}

# Editable list fields and the blank entry appended by the editor
LIST_ENTRY_MODELS: dict[str, type[LenientModel]] = {
    "buttons": PriceButton,
    "images": CarouselImage,
    "items": FAQItem,
}


def parse_content(variant: Union[SectionVariant, str], blob: Any) -> SectionContent:
    """Build the typed content record for a variant. Never raises."""
    if isinstance(blob, SectionContent):
        blob = blob.to_blob()
    model = CONTENT_MODELS.get(parse_variant(variant), UnknownContent)
    return model.model_validate(blob if isinstance(blob, dict) else {})


def _raw_blob(value: Any) -> dict:
    if isinstance(value, SectionContent):
        return value.to_blob()
    return copy.deepcopy(value) if isinstance(value, dict) else {}


# ---------------------------------------------------------------------------
# Section identity
# ---------------------------------------------------------------------------

class Unsaved(BaseModel):
    """Identity of a section that has not been written to the backend yet."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(default_factory=lambda: uuid.uuid4().hex)


class Persisted(BaseModel):
    """Identity of a section row that exists on the backend."""

    model_config = ConfigDict(frozen=True)

    id: str


SectionId = Union[Unsaved, Persisted]


class Section(BaseModel):
    """One displayable/editable block of a page.

    `content` is the typed view used for display; `blob` is the content exactly
    as stored, which edits and saves work on so untouched values survive.
    """

    id: SectionId = Field(default_factory=Unsaved)
    variant: Union[SectionVariant, str]
    content: SectionContent = Field(default_factory=UnknownContent)
    blob: dict[str, Any] = Field(default_factory=dict)
    order: int = 0

    @model_validator(mode="before")
    @classmethod
    def _resolve_content(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        raw_variant = data.get("variant")
        data["variant"] = parse_variant(raw_variant) or str(raw_variant)
        raw = data["content"] if "content" in data else data.get("blob")
        if "blob" not in data:
            data["blob"] = _raw_blob(raw)
        data["content"] = parse_content(data["variant"], raw)
        order = data.get("order", 0)
        data["order"] = order if isinstance(order, int) and not isinstance(order, bool) else 0
        return data

    @property
    def key(self) -> str:
        """Stable string handle for addressing the section in forms and stores."""
        if isinstance(self.id, Persisted):
            return self.id.id
        return self.id.key

    @property
    def is_persisted(self) -> bool:
        return isinstance(self.id, Persisted)

    @property
    def known_variant(self) -> Optional[SectionVariant]:
        return parse_variant(self.variant)

    def with_content(self, blob: Any) -> Section:
        """Return a copy whose content is replaced by `blob`."""
        return self.model_copy(update={
            "content": parse_content(self.variant, blob),
            "blob": _raw_blob(blob),
        })


def sort_sections(sections: list[Section]) -> list[Section]:
    """Sort by `order`; `sorted` is stable so ties keep their input position."""
    return sorted(sections, key=lambda s: s.order)


# ---------------------------------------------------------------------------
# Page aggregate
# ---------------------------------------------------------------------------

class PageMeta(BaseModel):
    """Page-level metadata: identity, slug, publish state and theme."""
    id: Optional[str] = None
    title: str = ""
    slug: str = ""
    published: bool = False
    theme_color: str = DEFAULT_THEME_COLOR


class Page(BaseModel):
    """A page and its sections."""
    meta: PageMeta
    sections: list[Section] = Field(default_factory=list)

    def sorted_sections(self) -> list[Section]:
        return sort_sections(self.sections)
