"""
Localized strings shown by the translator bot
"""
from typing import Optional

DEFAULT_LOCALE = "en"

STRINGS = {
    "en": {
        "error_translation": "Sorry, I couldn't translate that right now. Please try again later.",
        "error_notext": "Type the text you want to translate.",
        "configure_text": "Choose translation languages",
        "configure_page": "config.html",
        "original_label": "Original",
        "error_search": "Sorry, news search is not available right now. Please try again later.",
    },
    "he": {
        "error_translation": "מצטערים, לא הצלחנו לתרגם כרגע. אנא נסו שוב מאוחר יותר.",
        "error_notext": "הקלידו את הטקסט שברצונכם לתרגם.",
        "configure_text": "בחירת שפות תרגום",
        "configure_page": "config.he.html",
        "original_label": "מקור",
        "error_search": "מצטערים, חיפוש החדשות אינו זמין כרגע. אנא נסו שוב מאוחר יותר.",
    },
}


def normalize_locale(locale: Optional[str]) -> str:
    """'he-IL' -> 'he'; unknown locales fall back to English"""
    if not locale:
        return DEFAULT_LOCALE
    base = locale.replace("_", "-").split("-")[0].lower()
    return base if base in STRINGS else DEFAULT_LOCALE


def gettext(key: str, locale: Optional[str] = None) -> str:
    """Localized string for key, falling back to English, then to the key"""
    table = STRINGS[normalize_locale(locale)]
    return table.get(key) or STRINGS[DEFAULT_LOCALE].get(key, key)
