"""
Shared configuration
"""
import os
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Shared configuration"""

    # Azure Translator (Cognitive Services)
    TRANSLATOR_ACCESS_KEY = os.getenv("TRANSLATOR_ACCESS_KEY")
    TRANSLATOR_TOKEN_URL = os.getenv(
        "TRANSLATOR_TOKEN_URL", "https://api.cognitive.microsoft.com/sts/v1.0/issueToken"
    )
    TRANSLATOR_API_URL = os.getenv(
        "TRANSLATOR_API_URL", "https://api.microsofttranslator.com/v2/http.svc/TranslateArray"
    )
    TRANSLATOR_TIMEOUT_SECONDS = float(os.getenv("TRANSLATOR_TIMEOUT_SECONDS", "10"))

    # Access tokens last 10 minutes; refresh at 90% of that
    TRANSLATOR_TOKEN_LIFETIME_SECONDS = float(os.getenv("TRANSLATOR_TOKEN_LIFETIME_SECONDS", "600"))
    TRANSLATOR_TOKEN_REFRESH_RATIO = float(os.getenv("TRANSLATOR_TOKEN_REFRESH_RATIO", "0.9"))

    # Per-user translation history
    MAX_TRANSLATION_HISTORY = int(os.getenv("MAX_TRANSLATION_HISTORY", "5"))

    # Bing News Search (Cognitive Services)
    BING_SEARCH_ACCESS_KEY = os.getenv("BING_SEARCH_ACCESS_KEY")
    NEWS_SEARCH_URL = os.getenv(
        "NEWS_SEARCH_URL", "https://api.cognitive.microsoft.com/bing/v5.0/news/search"
    )
    NEWS_SEARCH_TIMEOUT_SECONDS = float(os.getenv("NEWS_SEARCH_TIMEOUT_SECONDS", "10"))

    # Redis (session store)
    REDIS_HOST = os.getenv("REDIS_HOST", "redis")
    REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
    SESSION_TTL_SECONDS = int(os.getenv("SESSION_TTL_SECONDS", str(30 * 24 * 3600)))

    # Bot app
    APP_BASE_URI = os.getenv("APP_BASE_URI", "http://localhost:3978")
    ALLOW_CONFIGURATION_VIA_QUERY = _env_flag("ALLOW_CONFIGURATION_VIA_QUERY")
    PORT = int(os.getenv("PORT", "3978"))

    @staticmethod
    def validate_environment() -> List[str]:
        """
        Validate that all required environment variables are set.

        Returns:
            List of missing environment variable names
        """
        required_vars = ["TRANSLATOR_ACCESS_KEY"]
        return [var for var in required_vars if not os.getenv(var)]
