"""
Base TTS Engine Interface
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FallbackReason(Enum):
    """Why placeholder audio was returned instead of synthesized speech"""
    BEEP = "fallback_beep"  # Upstream returned a non-success status
    SHAPE = "fallback_shape"  # Upstream body had no recognizable audio
    EXCEPTION = "fallback_exception"  # Transport or decoding error


@dataclass
class TTSResult:
    """TTS generation result"""
    audio_base64: str
    content_type: str = "audio/wav"
    fallback_reason: Optional[FallbackReason] = None

    @property
    def is_fallback(self) -> bool:
        return self.fallback_reason is not None

    @property
    def note(self) -> Optional[str]:
        return self.fallback_reason.value if self.fallback_reason else None


class BaseTTSEngine(ABC):
    """Abstract base class for TTS engines"""

    @abstractmethod
    async def synthesize(self, text: str, language: str) -> TTSResult:
        """Synthesize speech from text"""
        pass
