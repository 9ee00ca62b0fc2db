"""
Translation Package

Provides:
- Sarvam AI translation engine
- Multi-language translator with per-language fallback
"""
from .translator import (
    Translator,
    TranslationResult,
    TranslationEngine,
    TranslationError,
    SarvamTranslateEngine,
    fallback_translation,
)

__all__ = [
    "Translator",
    "TranslationResult",
    "TranslationEngine",
    "TranslationError",
    "SarvamTranslateEngine",
    "fallback_translation",
]
