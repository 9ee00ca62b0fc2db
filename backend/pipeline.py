"""
Script Localization Pipeline - Core orchestration module

Flow:
1. Translate the script into every selected language (one fan-out)
2. Generate TTS audio for each translation (one call per language)

Avatar video rendering is handled outside this service.
"""
import asyncio
from dataclasses import dataclass, field
from typing import List, Dict, Any
from loguru import logger

from languages import to_locale
from translation import Translator, TranslationResult
from tts import BaseTTSEngine, TTSResult


@dataclass
class LanguageOutput:
    """Localized script and audio for one language"""
    lang: str
    translation: TranslationResult
    audio: TTSResult

    @property
    def locale(self) -> str:
        return to_locale(self.lang)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "lang": self.lang,
            "locale": self.locale,
            "text": self.translation.translated_text,
            "translated": self.translation.success,
            "audioBase64": self.audio.audio_base64,
            "contentType": self.audio.content_type,
        }
        if self.audio.note:
            data["note"] = self.audio.note
        return data


@dataclass
class LocalizationResult:
    """Result of localizing one script into several languages"""
    source_text: str
    outputs: List[LanguageOutput] = field(default_factory=list)

    @property
    def failed_translations(self) -> List[str]:
        return [o.lang for o in self.outputs if not o.translation.success]

    @property
    def fallback_audio(self) -> List[str]:
        return [o.lang for o in self.outputs if o.audio.is_fallback]

    def to_dict(self) -> Dict[str, Any]:
        return {"results": [o.to_dict() for o in self.outputs]}


class LocalizationPipeline:
    """Translate once, then synthesize speech for every language"""

    def __init__(self, translator: Translator, tts_engine: BaseTTSEngine):
        self.translator = translator
        self.tts_engine = tts_engine

    async def run(self, text: str, languages: List[str]) -> LocalizationResult:
        """
        Localize a script

        Args:
            text: Source script
            languages: Short language codes; duplicates are dropped, order kept

        Returns:
            LocalizationResult with one output per distinct language
        """
        unique_languages = list(dict.fromkeys(languages))
        logger.info(f"Localizing script into {len(unique_languages)} languages: {unique_languages}")

        translations = await self.translator.translate_all(text, unique_languages)

        audios = await asyncio.gather(*[
            self.tts_engine.synthesize(result.translated_text, result.target_lang)
            for result in translations
        ])

        result = LocalizationResult(
            source_text=text,
            outputs=[
                LanguageOutput(lang=t.target_lang, translation=t, audio=a)
                for t, a in zip(translations, audios)
            ],
        )

        if result.failed_translations:
            logger.warning(f"Translation fell back for: {result.failed_translations}")
        if result.fallback_audio:
            logger.warning(f"Placeholder audio used for: {result.fallback_audio}")

        return result
