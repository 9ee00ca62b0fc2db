import pytest

from pipeline import LocalizationPipeline
from translation import Translator, TranslationEngine, TranslationError
from tts import BaseTTSEngine, FallbackReason, TTSResult


class EchoEngine(TranslationEngine):
    def __init__(self, fail_for=()):
        self.fail_for = set(fail_for)

    @property
    def name(self) -> str:
        return "echo"

    async def translate(self, text, source_lang, target_lang):
        if target_lang in self.fail_for:
            raise TranslationError("unsupported")
        return f"{text} ({target_lang})"


class RecordingTTS(BaseTTSEngine):
    def __init__(self, beep_for=()):
        self.beep_for = set(beep_for)
        self.calls = []

    async def synthesize(self, text, language):
        self.calls.append((text, language))
        if language in self.beep_for:
            return TTSResult(audio_base64="beep", fallback_reason=FallbackReason.BEEP)
        return TTSResult(audio_base64=f"audio:{language}")


@pytest.mark.asyncio
async def test_pipeline_runs_translation_then_tts():
    tts = RecordingTTS()
    pipeline = LocalizationPipeline(Translator(EchoEngine()), tts)

    result = await pipeline.run("Namaste", ["ta", "bn"])

    assert [o.lang for o in result.outputs] == ["ta", "bn"]
    assert sorted(tts.calls) == [("Namaste (bn-IN)", "bn"), ("Namaste (ta-IN)", "ta")]
    assert result.failed_translations == []
    assert result.fallback_audio == []


@pytest.mark.asyncio
async def test_pipeline_drops_duplicate_languages():
    tts = RecordingTTS()
    pipeline = LocalizationPipeline(Translator(EchoEngine()), tts)

    result = await pipeline.run("Namaste", ["hi", "hi", "mr", "hi"])

    assert [o.lang for o in result.outputs] == ["hi", "mr"]
    assert len(tts.calls) == 2


@pytest.mark.asyncio
async def test_pipeline_tracks_fallbacks():
    pipeline = LocalizationPipeline(
        Translator(EchoEngine(fail_for={"te-IN"})),
        RecordingTTS(beep_for={"kn"}),
    )

    result = await pipeline.run("Namaste", ["te", "kn", "hi"])

    assert result.failed_translations == ["te"]
    assert result.fallback_audio == ["kn"]

    data = result.to_dict()["results"]
    assert data[0]["text"] == "[te] Namaste"
    assert data[0]["translated"] is False
    assert "note" not in data[0]
    assert data[1]["note"] == "fallback_beep"
    assert data[2]["locale"] == "hi-IN"
