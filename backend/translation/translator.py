"""
Translation Module

Sarvam AI (Mayura) translation with per-language fallback:
- One outbound call per target language, all issued concurrently
- A failed language never aborts the others; it echoes the source text
"""
import asyncio
from typing import Optional, List, Dict
from dataclasses import dataclass
from abc import ABC, abstractmethod

import httpx
from loguru import logger

from config import Settings
from languages import to_locale
from utils import get_httpx_client_kwargs, sarvam_headers


class TranslationError(Exception):
    """Raised by an engine when the upstream call does not yield a translation"""


@dataclass
class TranslationResult:
    """Translation result"""
    success: bool
    original_text: str
    translated_text: str
    source_lang: str
    target_lang: str
    error: Optional[str] = None


def fallback_translation(text: str, lang: str) -> str:
    """Echo used when a language could not be translated"""
    return f"[{lang}] {text}"


class TranslationEngine(ABC):
    """Abstract base class for translation engines"""

    @abstractmethod
    async def translate(
        self,
        text: str,
        source_lang: str,
        target_lang: str
    ) -> str:
        """Translate text"""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Engine name"""
        pass


class SarvamTranslateEngine(TranslationEngine):
    """Sarvam AI translation engine (API key required)"""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.sarvam.ai",
        mode: str = "formal",
        model: str = "mayura:v1",
        speaker_gender: str = "Female",
        enable_preprocessing: bool = True,
        client_kwargs: Optional[dict] = None,
    ):
        if not api_key:
            raise ValueError("Sarvam API key not configured")
        self.api_key = api_key
        self.endpoint = f"{base_url.rstrip('/')}/translate"
        self.mode = mode
        self.model = model
        self.speaker_gender = speaker_gender
        self.enable_preprocessing = enable_preprocessing
        self.client_kwargs = client_kwargs or {}

    @property
    def name(self) -> str:
        return "sarvam"

    def build_payload(self, text: str, source_lang: str, target_lang: str) -> dict:
        return {
            "input": text,
            "source_language_code": source_lang,
            "target_language_code": target_lang,
            "speaker_gender": self.speaker_gender,
            "mode": self.mode,
            "model": self.model,
            "enable_preprocessing": self.enable_preprocessing,
        }

    async def translate(
        self,
        text: str,
        source_lang: str,
        target_lang: str
    ) -> str:
        async with httpx.AsyncClient(**self.client_kwargs) as client:
            response = await client.post(
                self.endpoint,
                headers=sarvam_headers(self.api_key),
                json=self.build_payload(text, source_lang, target_lang),
            )

        if not response.is_success:
            logger.error(f"Sarvam translate error {response.status_code}: {response.text}")
            raise TranslationError(f"Sarvam API error {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise TranslationError(f"Invalid JSON from Sarvam: {e}")

        translated = data.get("translated_text") if isinstance(data, dict) else None
        if not isinstance(translated, str) or not translated:
            raise TranslationError("Sarvam response has no translated_text")
        return translated


class Translator:
    """
    Multi-language translator

    Fans a single source text out to every requested language and collects
    one TranslationResult per language. Upstream failures are converted to
    fallback results here, so callers always get a complete set.
    """

    def __init__(
        self,
        engine: TranslationEngine,
        source_lang: str = "hi-IN",
        max_concurrency: Optional[int] = None,
    ):
        """
        Initialize translator

        Args:
            engine: Translation engine to use
            source_lang: Source locale sent with every request
            max_concurrency: Cap on simultaneous outbound calls (None = unbounded)
        """
        if max_concurrency is not None and max_concurrency < 1:
            raise ValueError("max_concurrency must be a positive integer")
        self.engine_name = engine.name
        self._engine = engine
        self.source_lang = source_lang
        self.max_concurrency = max_concurrency
        logger.info(f"Initialized Translator with engine: {engine.name}")

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "Translator":
        """Build a Sarvam-backed translator from application settings"""
        engine = SarvamTranslateEngine(
            api_key=settings.SARVAM_API_KEY,
            base_url=settings.SARVAM_BASE_URL,
            mode=settings.TRANSLATE_MODE,
            model=settings.TRANSLATE_MODEL,
            speaker_gender=settings.TRANSLATE_SPEAKER_GENDER,
            enable_preprocessing=settings.TRANSLATE_PREPROCESSING,
            client_kwargs=get_httpx_client_kwargs(
                timeout=settings.HTTP_TIMEOUT,
                proxy_url=settings.PROXY_URL,
                transport=transport,
            ),
        )
        return cls(
            engine,
            source_lang=settings.TRANSLATE_SOURCE_LANG,
            max_concurrency=settings.TRANSLATE_MAX_CONCURRENCY,
        )

    async def translate(self, text: str, target_lang: str) -> TranslationResult:
        """
        Translate text into one language

        Args:
            text: Text to translate
            target_lang: Short language code as selected by the user

        Returns:
            TranslationResult (fallback text on failure, never raises)
        """
        target_locale = to_locale(target_lang)
        try:
            translated = await self._engine.translate(text, self.source_lang, target_locale)
            return TranslationResult(
                success=True,
                original_text=text,
                translated_text=translated,
                source_lang=self.source_lang,
                target_lang=target_lang,
            )
        except Exception as e:
            logger.warning(f"Translation failed ({self.engine_name}, {target_lang}): {e}, using fallback")
            return TranslationResult(
                success=False,
                original_text=text,
                translated_text=fallback_translation(text, target_lang),
                source_lang=self.source_lang,
                target_lang=target_lang,
                error=str(e)
            )

    async def translate_all(self, text: str, target_langs: List[str]) -> List[TranslationResult]:
        """
        Translate text into every target language concurrently

        Waits for every language to settle; one failure does not cancel the rest.

        Returns:
            TranslationResults in the order of target_langs
        """
        if not target_langs:
            return []

        logger.info(f"Using {self.engine_name} parallel translation: {len(target_langs)} languages")

        if self.max_concurrency:
            semaphore = asyncio.Semaphore(self.max_concurrency)

            async def bounded(lang: str) -> TranslationResult:
                async with semaphore:
                    return await self.translate(text, lang)

            return list(await asyncio.gather(*[bounded(lang) for lang in target_langs]))

        return list(await asyncio.gather(*[
            self.translate(text, lang)
            for lang in target_langs
        ]))

    async def translate_to_languages(self, text: str, target_langs: List[str]) -> Dict[str, str]:
        """Translate text and return a language code -> text mapping"""
        results = await self.translate_all(text, target_langs)
        return {result.target_lang: result.translated_text for result in results}
