"""
Core package initialization.
"""

from app.core.config import Settings, get_settings, settings
from app.core.models import AIProvider, BaseSchema, Modality, OcrLanguage

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "settings",
    # Enums
    "AIProvider",
    "Modality",
    "OcrLanguage",
    # Models
    "BaseSchema",
]
