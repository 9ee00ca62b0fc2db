"""
Language code mapping for Sarvam AI

The wizard works with short language codes ("hi"), Sarvam expects
locale tags ("hi-IN"). Codes outside the table pass through unchanged.
"""
from typing import Dict, List

# Short code -> Sarvam locale tag
LOCALE_MAP: Dict[str, str] = {
    "hi": "hi-IN",
    "mr": "mr-IN",
    "te": "te-IN",
    "ta": "ta-IN",
    "kn": "kn-IN",
    "bn": "bn-IN",
    "en": "en-IN",
}

# Languages offered in the wizard's language picker
SUPPORTED_LANGUAGES: Dict[str, str] = {
    "hi": "Hindi",
    "mr": "Marathi",
    "te": "Telugu",
    "kn": "Kannada",
    "ta": "Tamil",
    "bn": "Bengali",
    "en": "English",
}


def to_locale(code: str) -> str:
    """Map a short language code to the provider locale tag"""
    return LOCALE_MAP.get(code, code)


def get_supported_languages() -> List[Dict[str, str]]:
    """Get the language catalogue as code / name / locale records"""
    return [
        {"code": code, "name": name, "locale": to_locale(code)}
        for code, name in SUPPORTED_LANGUAGES.items()
    ]
