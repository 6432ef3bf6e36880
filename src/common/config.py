"""Project configuration and paths.

Loads settings from config/settings.yaml and environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

# === Paths ===
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"
DATA_DIR = PROJECT_ROOT / "data"
DATA_EXPORTS_DIR = DATA_DIR / "exports"

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")

DEFAULT_THEME_COLOR = "#3b82f6"


class SupabaseSettings(BaseModel):
    """Table names on the hosted backend."""
    pages_table: str = "sales_pages"
    sections_table: str = "page_sections"


class StorageSettings(BaseModel):
    """Object storage settings for uploaded images."""
    bucket: str = "page-images"
    max_size_mb: int = 5
    allowed_extensions: list[str] = Field(
        default_factory=lambda: ["png", "jpg", "jpeg", "gif", "webp", "svg"]
    )


class RenderSettings(BaseModel):
    """Settings for the page renderer."""
    default_theme_color: str = DEFAULT_THEME_COLOR
    placeholder_image: str = "/placeholder.svg"
    footer_text: str = "© 2024 E-book Sales. Todos os direitos reservados."


class Settings(BaseModel):
    """Top-level application settings."""
    supabase: SupabaseSettings = Field(default_factory=SupabaseSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    render: RenderSettings = Field(default_factory=RenderSettings)

    @classmethod
    def load(cls) -> Settings:
        """Load settings from config/settings.yaml, falling back to defaults."""
        settings_path = CONFIG_DIR / "settings.yaml"
        if settings_path.exists():
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            return cls(**data)
        return cls()


def get_supabase_url() -> str:
    """Get the Supabase project URL from environment."""
    return os.getenv("SUPABASE_URL", "")


def get_supabase_key() -> str:
    """Get the Supabase service key from environment."""
    return os.getenv("SUPABASE_SERVICE_KEY", "")


# Singleton settings instance
settings = Settings.load()
