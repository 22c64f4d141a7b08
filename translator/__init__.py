"""
Translation core for the translator bot.

CredentialCache owns the bearer token, TranslationClient makes one
single-target call, FanOutTranslator runs those calls concurrently, and
history_store keeps each user's recent translations. Network state lives
only in the credential cache; history lists are owned by the caller's
session and passed in.
"""
from typing import Optional

import httpx

from shared.config import Config
from .errors import (
    TranslatorError,
    CredentialError,
    TransportError,
    UpstreamError,
    ProtocolError,
)
from .credential_cache import CredentialCache
from .translation_client import TranslationClient
from .fan_out import FanOutTranslator, TranslationOutcome
from .history_store import record_and_get, list_recent
from .languages import (
    get_supported_languages,
    get_default_languages,
    parse_language_settings,
    get_language_name,
)


def create_fan_out_translator(
    http_client: httpx.AsyncClient,
    access_key: Optional[str] = None,
) -> FanOutTranslator:
    """Wire credential cache, client and fan-out around one HTTP client"""
    credentials = CredentialCache(access_key or Config.TRANSLATOR_ACCESS_KEY, http_client)
    return FanOutTranslator(TranslationClient(credentials, http_client))


__all__ = [
    "TranslatorError",
    "CredentialError",
    "TransportError",
    "UpstreamError",
    "ProtocolError",
    "CredentialCache",
    "TranslationClient",
    "FanOutTranslator",
    "TranslationOutcome",
    "record_and_get",
    "list_recent",
    "get_supported_languages",
    "get_default_languages",
    "parse_language_settings",
    "get_language_name",
    "create_fan_out_translator",
]
