"""Exceptions raised by the sales page builder."""

from __future__ import annotations

from typing import Optional


class SalesPageError(Exception):
    """Base class for sales page errors."""


class PageValidationError(SalesPageError):
    """Page metadata is missing a required field; nothing was saved."""


class BackendError(SalesPageError):
    """A call to the hosted backend failed.

    When a save fails part way, `page_id` is the page row that already exists
    and `inserted` maps local section keys to the rows written before the
    failure, so a retry updates them instead of inserting duplicates.
    """

    def __init__(
        self,
        message: str,
        page_id: Optional[str] = None,
        inserted: Optional[dict[str, str]] = None,
    ):
        super().__init__(message)
        self.page_id = page_id
        self.inserted = dict(inserted or {})


class EditorError(SalesPageError):
    """An edit addressed a field or list entry that does not exist."""
