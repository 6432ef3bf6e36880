# Publisher: Supabase persistence of pages/sections and image storage
"""
Publisher module for the hosted backend.

Loads and saves pages with their sections (insert-or-update per section,
never delete-and-reinsert), resolves published pages by slug, and uploads
images to Supabase Storage.
"""

from .models import PageRow, SaveResult, SectionRow, UploadResult
from .repository import SupabasePageRepository, generate_slug, validate_page_meta
from .storage import SupabaseStorage

__all__ = [
    "PageRow",
    "SaveResult",
    "SectionRow",
    "SupabasePageRepository",
    "SupabaseStorage",
    "UploadResult",
    "generate_slug",
    "validate_page_meta",
]
