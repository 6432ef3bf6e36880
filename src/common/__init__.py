# Common utilities and shared modules
"""
Shared components:
- Project configuration (YAML + environment)
- Logging configuration
"""

from .config import settings, PROJECT_ROOT, DEFAULT_THEME_COLOR
from .logging import setup_logging

__all__ = [
    "settings",
    "PROJECT_ROOT",
    "DEFAULT_THEME_COLOR",
    "setup_logging",
]
