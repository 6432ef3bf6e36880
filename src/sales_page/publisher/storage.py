"""Supabase Storage: Upload page images to Supabase Storage.

Uploads hero background images to a public Supabase Storage bucket and
returns public URLs for use in section content.

Prerequisites:
    - Create a 'page-images' bucket in Supabase dashboard (set to public)
    - SUPABASE_URL and SUPABASE_SERVICE_KEY in .env

Usage:
    from src.sales_page.publisher.storage import SupabaseStorage

    storage = SupabaseStorage()
    result = storage.upload(image_bytes, "capa.png")
    print(result.public_url)
"""

from __future__ import annotations

import logging
import mimetypes
import uuid
from typing import Optional

from src.common.config import StorageSettings, get_supabase_key, get_supabase_url, settings

from .models import UploadResult

logger = logging.getLogger(__name__)


class SupabaseStorage:
    """Upload images to Supabase Storage and retrieve public URLs.

    Objects get random names, so an upload never overwrites an earlier one.
    """

    def __init__(
        self,
        supabase_url: Optional[str] = None,
        supabase_key: Optional[str] = None,
        bucket: Optional[str] = None,
        storage_settings: Optional[StorageSettings] = None,
        client=None,
    ):
        self.settings = storage_settings or settings.storage
        self._url = supabase_url if supabase_url is not None else get_supabase_url()
        self._key = supabase_key if supabase_key is not None else get_supabase_key()
        self._bucket = bucket or self.settings.bucket
        self._client = client

    def _get_client(self):
        """Lazy-initialize Supabase client."""
        if self._client is not None:
            return self._client
        if not self._url or not self._key:
            raise ValueError(
                "SUPABASE_URL / SUPABASE_SERVICE_KEY must be set in .env. "
                "See config/.env.example."
            )
        from supabase import create_client

        self._client = create_client(self._url, self._key)
        return self._client

    def get_public_url(self, path: str) -> str:
        """Build the public URL for a storage object.

        Args:
            path: Storage path relative to bucket root.

        Returns:
            Full public URL (e.g. https://xxx.supabase.co/storage/v1/object/public/page-images/...)
        """
        url = self._url.rstrip("/")
        return f"{url}/storage/v1/object/public/{self._bucket}/{path}"

    @staticmethod
    def extension_of(filename: str) -> str:
        return filename.rsplit(".", 1)[-1].lower() if "." in filename else ""

    @classmethod
    def random_filename(cls, filename: str) -> str:
        """`<uuid hex>.<ext>` keeping the original extension."""
        ext = cls.extension_of(filename)
        return f"{uuid.uuid4().hex}.{ext}" if ext else uuid.uuid4().hex

    def validate(self, data: bytes, filename: str) -> Optional[str]:
        """Return a user-facing error message, or None when the file is acceptable."""
        if not data:
            return "O arquivo está vazio."
        if len(data) > self.settings.max_size_mb * 1024 * 1024:
            return f"A imagem é muito grande (máximo {self.settings.max_size_mb}MB)."
        allowed = self.settings.allowed_extensions
        if self.extension_of(filename) not in allowed:
            return f"Tipo de arquivo não permitido. Use {', '.join(e.upper() for e in allowed)}."
        return None

    def upload(
        self,
        data: bytes,
        filename: str,
        content_type: Optional[str] = None,
    ) -> UploadResult:
        """Upload a single image to Supabase Storage.

        Args:
            data: File bytes.
            filename: Original file name; only its extension is kept.
            content_type: MIME type, guessed from the name when omitted.

        Returns:
            UploadResult with public_url on success.
        """
        path = self.random_filename(filename)
        error = self.validate(data, filename)
        if error:
            logger.warning("Rejected upload %s: %s", filename, error)
            return UploadResult(path=path, public_url="", success=False, error=error)

        content_type = content_type or mimetypes.guess_type(filename)[0] or "application/octet-stream"
        try:
            client = self._get_client()
            client.storage.from_(self._bucket).upload(
                path=path,
                file=data,
                file_options={"content-type": content_type, "upsert": "false"},
            )

            public_url = self.get_public_url(path)
            logger.info("Uploaded: %s → %s", filename, public_url)
            return UploadResult(path=path, public_url=public_url, success=True)

        except Exception as e:
            logger.error("Upload failed for %s: %s", filename, e)
            return UploadResult(
                path=path,
                public_url="",
                success=False,
                error=str(e),
            )
