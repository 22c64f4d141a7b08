"""
Supported-language catalog and language preference handling
"""
from typing import Dict, Iterable, List, Optional


SUPPORTED_LANGUAGES: List[str] = [
    "af", "ar", "bn", "bs-Latn", "bg", "ca", "zh-CHS", "zh-CHT", "hr", "cs",
    "da", "nl", "en", "et", "fj", "fil", "fi", "fr", "de", "el",
    "ht", "he", "hi", "hu", "id", "it", "ja", "tlh", "ko", "lv",
    "lt", "mg", "ms", "mt", "no", "fa", "pl", "pt", "ro", "ru",
    "sm", "sr-Cyrl", "sr-Latn", "sk", "sl", "es", "sv", "ty", "th", "to",
    "tr", "uk", "ur", "vi", "cy",
]

# Used until the user saves a preference
DEFAULT_LANGUAGES: List[str] = ["en", "es", "fr", "it", "ar"]

LANGUAGE_NAMES: Dict[str, str] = {
    "af": "Afrikaans", "ar": "Arabic", "bn": "Bangla", "bs-Latn": "Bosnian (Latin)",
    "bg": "Bulgarian", "ca": "Catalan", "zh-CHS": "Chinese Simplified",
    "zh-CHT": "Chinese Traditional", "hr": "Croatian", "cs": "Czech", "da": "Danish",
    "nl": "Dutch", "en": "English", "et": "Estonian", "fj": "Fijian", "fil": "Filipino",
    "fi": "Finnish", "fr": "French", "de": "German", "el": "Greek",
    "ht": "Haitian Creole", "he": "Hebrew", "hi": "Hindi", "hu": "Hungarian",
    "id": "Indonesian", "it": "Italian", "ja": "Japanese", "tlh": "Klingon",
    "ko": "Korean", "lv": "Latvian", "lt": "Lithuanian", "mg": "Malagasy", "ms": "Malay",
    "mt": "Maltese", "no": "Norwegian", "fa": "Persian", "pl": "Polish",
    "pt": "Portuguese", "ro": "Romanian", "ru": "Russian", "sm": "Samoan",
    "sr-Cyrl": "Serbian (Cyrillic)", "sr-Latn": "Serbian (Latin)", "sk": "Slovak",
    "sl": "Slovenian", "es": "Spanish", "sv": "Swedish", "ty": "Tahitian", "th": "Thai",
    "to": "Tongan", "tr": "Turkish", "uk": "Ukrainian", "ur": "Urdu",
    "vi": "Vietnamese", "cy": "Welsh",
}

HEBREW_LANGUAGE_NAMES: Dict[str, str] = {
    "af": "אפריקאנס", "ar": "ערבית", "bn": "בנגלית", "bs-Latn": "בוסנית (לטינית)",
    "bg": "בולגרית", "ca": "קטלאנית", "zh-CHS": "סינית פשוטה",
    "zh-CHT": "סינית מסורתית", "hr": "קרואטית", "cs": "צ'כית", "da": "דנית",
    "nl": "הולנדית", "en": "אנגלית", "et": "אסטונית", "fj": "פיג'ית", "fil": "פיליפינית",
    "fi": "פינית", "fr": "צרפתית", "de": "גרמנית", "el": "יוונית",
    "ht": "קריאולית האיטית", "he": "עברית", "hi": "הינדי", "hu": "הונגרית",
    "id": "אינדונזית", "it": "איטלקית", "ja": "יפנית", "tlh": "קלינגונית",
    "ko": "קוריאנית", "lv": "לטבית", "lt": "ליטאית", "mg": "מלגשית", "ms": "מלאית",
    "mt": "מלטית", "no": "נורווגית", "fa": "פרסית", "pl": "פולנית",
    "pt": "פורטוגזית", "ro": "רומנית", "ru": "רוסית", "sm": "סמואית",
    "sr-Cyrl": "סרבית (קירילית)", "sr-Latn": "סרבית (לטינית)", "sk": "סלובקית",
    "sl": "סלובנית", "es": "ספרדית", "sv": "שוודית", "ty": "טהיטית", "th": "תאית",
    "to": "טונגאית", "tr": "טורקית", "uk": "אוקראינית", "ur": "אורדו",
    "vi": "וייטנאמית", "cy": "ולשית",
}

# Display names per UI locale; English is the fallback
LOCALIZED_LANGUAGE_NAMES: Dict[str, Dict[str, str]] = {
    "en": LANGUAGE_NAMES,
    "he": HEBREW_LANGUAGE_NAMES,
}


def get_supported_languages() -> List[str]:
    return list(SUPPORTED_LANGUAGES)


def get_default_languages() -> List[str]:
    return list(DEFAULT_LANGUAGES)


def is_supported(language: Optional[str]) -> bool:
    return language in SUPPORTED_LANGUAGES


def filter_supported(languages: Iterable[str]) -> List[str]:
    """Keep only catalog languages, in the given order, without duplicates"""
    return list(dict.fromkeys(lang for lang in languages if is_supported(lang)))


def parse_language_settings(state: Optional[str]) -> List[str]:
    """
    Parse a comma-separated language list sent back by the settings page.

    Unknown codes are dropped. If nothing valid remains the default
    languages are returned.
    """
    langs = filter_supported(part.strip() for part in (state or "").split(","))
    return langs or get_default_languages()


def get_language_name(language: Optional[str], locale: Optional[str] = None) -> str:
    """
    Display name of a language in the given UI locale.

    Falls back to the English name, then to the code itself.
    """
    if not language:
        return ""
    base = (locale or "en").replace("_", "-").split("-")[0].lower()
    names = LOCALIZED_LANGUAGE_NAMES.get(base, LANGUAGE_NAMES)
    return names.get(language) or LANGUAGE_NAMES.get(language, language)
