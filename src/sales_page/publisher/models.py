"""Data models for the publisher module (backend rows and call results)."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from src.common.config import DEFAULT_THEME_COLOR
from src.sales_page.sections import (
    PageMeta,
    Persisted,
    Section,
)


class PageRow(BaseModel):
    """Maps to the `sales_pages` table."""
    id: Optional[str] = None
    title: str = ""
    slug: str = ""
    is_published: bool = False
    primary_color: Optional[str] = None
    user_id: Optional[str] = None

    @field_validator("title", "slug", mode="before")
    @classmethod
    def _null_text(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("is_published", mode="before")
    @classmethod
    def _null_flag(cls, v: Any) -> bool:
        return bool(v)

    @field_validator("id", "user_id", "primary_color", mode="before")
    @classmethod
    def _optional_text(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v)

    @classmethod
    def from_meta(cls, meta: PageMeta, user_id: Optional[str] = None) -> PageRow:
        return cls(
            id=meta.id,
            title=meta.title.strip(),
            slug=meta.slug.strip(),
            is_published=meta.published,
            primary_color=meta.theme_color,
            user_id=user_id,
        )

    def to_meta(self) -> PageMeta:
        return PageMeta(
            id=self.id,
            title=self.title,
            slug=self.slug,
            published=self.is_published,
            theme_color=self.primary_color or DEFAULT_THEME_COLOR,
        )

    def to_supabase_dict(self) -> dict:
        """Serialize for Supabase insert, omitting None values."""
        return {k: v for k, v in self.model_dump().items() if v is not None}


class SectionRow(BaseModel):
    """Maps to the `page_sections` table."""
    id: Optional[str] = None
    page_id: Optional[str] = None
    section_type: str
    content: dict[str, Any] = Field(default_factory=dict)
    order_index: int = 0

    @classmethod
    def from_section(cls, section: Section, page_id: str) -> SectionRow:
        return cls(
            id=section.id.id if isinstance(section.id, Persisted) else None,
            page_id=page_id,
            section_type=str(getattr(section.variant, "value", section.variant)),
            content=copy.deepcopy(section.blob),
            order_index=section.order,
        )

    @classmethod
    def from_supabase(cls, row: dict) -> SectionRow:
        content = row.get("content")
        order = row.get("order_index")
        return cls(
            id=str(row["id"]) if row.get("id") is not None else None,
            page_id=str(row["page_id"]) if row.get("page_id") is not None else None,
            section_type=str(row.get("section_type") or ""),
            content=content if isinstance(content, dict) else {},
            order_index=order if isinstance(order, int) else 0,
        )

    def to_section(self) -> Section:
        fields: dict[str, Any] = {
            "variant": self.section_type,
            "content": self.content,
            "order": self.order_index,
        }
        if self.id:
            fields["id"] = Persisted(id=self.id)
        return Section(**fields)

    def to_insert_dict(self) -> dict:
        return {
            "page_id": self.page_id,
            "section_type": self.section_type,
            "content": self.content,
            "order_index": self.order_index,
        }

    def to_update_dict(self) -> dict:
        # variant is immutable after creation
        return {"content": self.content, "order_index": self.order_index}


@dataclass
class SaveResult:
    """Summary returned after a page save."""
    page_id: str
    created_page: bool = False
    inserted: dict[str, str] = field(default_factory=dict)  # local key -> new row id
    updated: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)


@dataclass
class UploadResult:
    """Result of a single image upload."""

    path: str  # Storage path inside the bucket
    public_url: str
    success: bool
    error: str = ""
