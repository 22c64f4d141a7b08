"""
Pytest fixtures and configuration
"""
import os

# Config reads the environment at import time
os.environ.setdefault("TRANSLATOR_ACCESS_KEY", "test-access-key")

import pytest
import httpx

from shared.models import TranslationResult

TOKEN_URL = "https://auth.test/sts/v1.0/issueToken"
API_URL = "https://translator.test/v2/http.svc/TranslateArray"


def translate_array_xml(source_language: str, translated_text: str) -> str:
    """Body of a successful TranslateArray response"""
    return f"""<ArrayOfTranslateArrayResponse xmlns="http://schemas.datacontract.org/2004/07/Microsoft.MT.Web.Service.V2" xmlns:i="http://www.w3.org/2001/XMLSchema-instance">
  <TranslateArrayResponse>
    <From>{source_language}</From>
    <OriginalTextSentenceLengths xmlns:a="http://schemas.microsoft.com/2003/10/Serialization/Arrays"><a:int>7</a:int></OriginalTextSentenceLengths>
    <TranslatedText>{translated_text}</TranslatedText>
    <TranslatedTextSentenceLengths xmlns:a="http://schemas.microsoft.com/2003/10/Serialization/Arrays"><a:int>5</a:int></TranslatedTextSentenceLengths>
  </TranslateArrayResponse>
</ArrayOfTranslateArrayResponse>"""


class FakeClock:
    """Manually advanced monotonic clock"""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class MockRedis:
    """In-memory stand-in for redis.Redis"""

    def __init__(self, *args, **kwargs):
        self.data = {}
        self.ttls = {}

    def ping(self):
        return True

    def get(self, key):
        return self.data.get(key)

    def setex(self, key, ttl, value):
        self.data[key] = value
        self.ttls[key] = ttl
        return True

    def delete(self, key):
        if key in self.data:
            del self.data[key]
        return True


def make_result(source_text: str, translated_text: str, source_language: str = "en", target_language: str = "fr") -> TranslationResult:
    return TranslationResult(
        source_language=source_language,
        target_language=target_language,
        source_text=source_text,
        translated_text=translated_text,
    )


def mock_http_client(handler) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by handler(request)"""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def mock_redis():
    return MockRedis()


@pytest.fixture
def session_store(mock_redis):
    from bot.session_store import SessionStore
    return SessionStore(client=mock_redis)
