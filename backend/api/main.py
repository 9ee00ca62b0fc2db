# -*- coding: utf-8 -*-
"""
FastAPI Backend for Script Localizer

Translation and text-to-speech endpoints for the localization wizard.
Upstream failures never surface as errors: translations fall back to an
echo of the source text and audio falls back to a placeholder beep.
"""
from pathlib import Path
from typing import Optional, List, Dict
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, HTTPException, Request, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field
from loguru import logger
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import settings, get_settings, Settings
from languages import get_supported_languages
from pipeline import LocalizationPipeline
from translation import Translator
from tts import SarvamTTSEngine


# Lifespan context manager for startup/shutdown
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - handle startup and shutdown"""
    logger.info(f"Starting {settings.APP_NAME} API...")
    if not settings.SARVAM_API_KEY:
        logger.warning("SARVAM_API_KEY is not set; translate and TTS requests will be rejected")

    yield

    logger.info(f"Shutting down {settings.APP_NAME} API...")


# Initialize rate limiter
limiter = Limiter(key_func=get_remote_address)

# Initialize FastAPI app with lifespan
app = FastAPI(
    title=f"{settings.APP_NAME} API",
    description="Multi-language script translation and speech synthesis",
    version=settings.APP_VERSION,
    lifespan=lifespan
)

# Attach rate limiter to app
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS for the wizard frontend
CORS_ALLOW_HEADERS = "authorization, x-client-info, apikey, content-type"
CORS_ALLOW_METHODS = "GET, POST, OPTIONS"

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


def preflight_headers(request: Request) -> Dict[str, str]:
    """CORS headers for an OPTIONS response"""
    headers = {
        "Access-Control-Allow-Methods": CORS_ALLOW_METHODS,
        "Access-Control-Allow-Headers": request.headers.get("access-control-request-headers") or CORS_ALLOW_HEADERS,
    }
    origins = settings.cors_origins_list
    origin = request.headers.get("origin")
    if "*" in origins:
        headers["Access-Control-Allow-Origin"] = "*"
    elif origin and origin in origins:
        headers["Access-Control-Allow-Origin"] = origin
        headers["Vary"] = "Origin"
    return headers


# Registered after CORSMiddleware so it runs first
@app.middleware("http")
async def answer_preflight(request: Request, call_next):
    """Every OPTIONS request, bare or CORS pre-flight, gets an empty 200"""
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=preflight_headers(request))
    return await call_next(request)


# Messages for malformed request bodies, keyed by path
VALIDATION_MESSAGES: Dict[str, str] = {
    "/api/translate": "text and target_langs[] required",
    "/api/localize": "text and target_langs[] required",
    "/api/tts": "text and lang required",
}


# === Error Handlers ===

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as {"error": ...}"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies are client errors (400), same as missing fields"""
    logger.warning(f"Rejected request to {request.url.path}: {exc.errors()}")
    message = VALIDATION_MESSAGES.get(request.url.path, "Invalid request body")
    return JSONResponse(status_code=400, content={"error": message})


# === Dependencies ===

def get_http_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Transport for upstream calls (None = real network)"""
    return None


def require_api_key(app_settings: Settings = Depends(get_settings)) -> Settings:
    """
    Reject the request before any upstream call when the credential is missing

    Dependencies resolve before body fields are validated, so a missing key
    is reported even when the body is also malformed.
    """
    if not app_settings.SARVAM_API_KEY:
        logger.error("Missing SARVAM_API_KEY")
        raise HTTPException(status_code=400, detail="Missing SARVAM_API_KEY")
    return app_settings


# === Pydantic Models ===

class TranslateRequest(BaseModel):
    """Request to translate a script into several languages"""
    text: Optional[str] = Field(None, description="Source script text")
    target_langs: Optional[List[str]] = Field(None, description="Target language codes, e.g. ['hi', 'ta']")


class TranslateResponse(BaseModel):
    """Language code -> translated text"""
    translations: Dict[str, str]


class TTSRequest(BaseModel):
    """Request to synthesize speech for one language"""
    text: Optional[str] = Field(None, description="Text to speak")
    lang: Optional[str] = Field(None, description="Language code, e.g. 'hi'")


class TTSResponse(BaseModel):
    """Synthesized (or placeholder) audio"""
    audioBase64: str
    contentType: str = "audio/wav"
    note: Optional[str] = None


class LocalizedLanguage(BaseModel):
    """Localization output for one language"""
    lang: str
    locale: str
    text: str
    translated: bool
    audioBase64: str
    contentType: str
    note: Optional[str] = None


class LocalizeResponse(BaseModel):
    """Localization output for every requested language"""
    results: List[LocalizedLanguage]


class LanguageInfo(BaseModel):
    """Language information"""
    code: str
    name: str
    locale: str


# === API Endpoints ===

@app.get("/")
async def root():
    """Health check"""
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION
    }


@app.get("/api/languages", response_model=List[LanguageInfo])
async def get_languages():
    """Get list of supported languages for translation and TTS"""
    return [LanguageInfo(**lang) for lang in get_supported_languages()]


@app.post("/api/translate", response_model=TranslateResponse)
@limiter.limit(settings.RATE_LIMIT)
async def translate_script(
    request: Request,
    body: TranslateRequest,
    app_settings: Settings = Depends(require_api_key),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_http_transport),
):
    """Translate text into every target language"""
    if not body.text or not body.target_langs:
        raise HTTPException(status_code=400, detail="text and target_langs[] required")

    try:
        translator = Translator.from_settings(app_settings, transport=transport)
        translations = await translator.translate_to_languages(body.text, body.target_langs)
        return TranslateResponse(translations=translations)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Translate request failed: {e}")
        raise HTTPException(status_code=500, detail=str(e) or "Unknown error")


@app.post("/api/tts", response_model=TTSResponse, response_model_exclude_none=True)
@limiter.limit(settings.RATE_LIMIT)
async def text_to_speech(
    request: Request,
    body: TTSRequest,
    app_settings: Settings = Depends(require_api_key),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_http_transport),
):
    """Synthesize speech for one language (placeholder beep on upstream failure)"""
    if not body.text or not body.lang:
        raise HTTPException(status_code=400, detail="text and lang required")

    try:
        engine = SarvamTTSEngine.from_settings(app_settings, transport=transport)
        result = await engine.synthesize(body.text, body.lang)
        return TTSResponse(
            audioBase64=result.audio_base64,
            contentType=result.content_type,
            note=result.note,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"TTS request failed: {e}")
        raise HTTPException(status_code=500, detail=str(e) or "Unknown error")


@app.post("/api/localize", response_model=LocalizeResponse, response_model_exclude_none=True)
@limiter.limit(settings.RATE_LIMIT)
async def localize_script(
    request: Request,
    body: TranslateRequest,
    app_settings: Settings = Depends(require_api_key),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_http_transport),
):
    """Translate a script and synthesize audio for every target language"""
    if not body.text or not body.target_langs:
        raise HTTPException(status_code=400, detail="text and target_langs[] required")

    try:
        pipeline = LocalizationPipeline(
            translator=Translator.from_settings(app_settings, transport=transport),
            tts_engine=SarvamTTSEngine.from_settings(app_settings, transport=transport),
        )
        result = await pipeline.run(body.text, body.target_langs)
        return result.to_dict()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Localize request failed: {e}")
        raise HTTPException(status_code=500, detail=str(e) or "Unknown error")


# Run with: uvicorn api.main:app --reload
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )
