"""
Translation Client - One text, one target language, one call to the Translator API
"""
import html
from typing import Optional
from xml.etree import ElementTree

import httpx

from shared.config import Config
from shared.logging_config import get_logger
from shared.models import TranslationResult
from translator.credential_cache import CredentialCache
from translator.errors import ProtocolError, TransportError, UpstreamError

logger = get_logger("translation-client")

ARRAYS_NAMESPACE = "http://schemas.microsoft.com/2003/10/Serialization/Arrays"
RESPONSE_NAMESPACE = "http://schemas.datacontract.org/2004/07/Microsoft.MT.Web.Service.V2"
NAMESPACES = {"mt": RESPONSE_NAMESPACE}

REQUEST_TEMPLATE = """
<TranslateArrayRequest>
  <AppId />
  <From>{source}</From>
  <Texts>
    <string xmlns="{namespace}">{text}</string>
  </Texts>
  <To>{target}</To>
</TranslateArrayRequest>"""


def build_request_body(text: str, target_language: str, source_language: Optional[str] = None) -> str:
    """
    Build the TranslateArray XML payload.

    All three values are escaped; none of them is trusted.
    """
    return REQUEST_TEMPLATE.format(
        source=html.escape(source_language) if source_language else "",
        namespace=ARRAYS_NAMESPACE,
        text=html.escape(text) if text else "",
        target=html.escape(target_language) if target_language else "en",
    )


def parse_response_body(body: str) -> tuple:
    """
    Extract (from, translatedText) for the first text of a TranslateArray response.

    Raises:
        ProtocolError: If the body is not well-formed XML or lacks the expected elements
    """
    if not body or not body.strip():
        raise ProtocolError("Empty translation response")

    try:
        root = ElementTree.fromstring(body)
    except ElementTree.ParseError as e:
        raise ProtocolError(f"Translation response is not well-formed XML: {e}") from e

    if root.tag != f"{{{RESPONSE_NAMESPACE}}}ArrayOfTranslateArrayResponse":
        raise ProtocolError(f"Unexpected translation response root element {root.tag}")

    item = root.find("mt:TranslateArrayResponse", NAMESPACES)
    if item is None:
        raise ProtocolError("Translation response has no TranslateArrayResponse element")

    translated = item.find("mt:TranslatedText", NAMESPACES)
    if translated is None:
        raise ProtocolError("Translation response has no TranslatedText element")

    detected = item.find("mt:From", NAMESPACES)
    source_language = (detected.text or "").strip() if detected is not None else ""
    return source_language or None, translated.text or ""


class TranslationClient:
    """Issues single-target translation calls with a cached bearer token"""

    def __init__(
        self,
        credentials: CredentialCache,
        http_client: httpx.AsyncClient,
        api_url: str = Config.TRANSLATOR_API_URL,
        timeout: float = Config.TRANSLATOR_TIMEOUT_SECONDS,
    ):
        self.credentials = credentials
        self.http_client = http_client
        self.api_url = api_url
        self.timeout = timeout

    async def translate_one(
        self,
        text: str,
        target_language: str,
        source_language: Optional[str] = None,
    ) -> TranslationResult:
        """
        Translate text into a single target language.

        Args:
            text: Text to translate
            target_language: Language code to translate into
            source_language: Source language code, or None to auto-detect

        Returns:
            TranslationResult for target_language

        Raises:
            CredentialError: If no bearer token could be obtained
            TransportError: On network failure or timeout
            UpstreamError: On a non-200 response
            ProtocolError: On a response body that cannot be parsed
        """
        token = await self.credentials.get_valid_token()
        body = build_request_body(text, target_language, source_language)

        try:
            response = await self.http_client.post(
                self.api_url,
                headers={
                    "Content-Type": "application/xml",
                    "Authorization": f"Bearer {token}",
                },
                content=body.encode("utf-8"),
                timeout=self.timeout,
            )
        except httpx.TimeoutException as e:
            logger.warning("translation_timeout", target_language=target_language)
            raise TransportError(f"Translation request timed out: {e}") from e
        except httpx.HTTPError as e:
            logger.warning("translation_transport_failed", target_language=target_language, error=str(e))
            raise TransportError(f"Translation request failed: {e}") from e

        if response.status_code != 200:
            logger.warning(
                "translation_rejected",
                target_language=target_language,
                status_code=response.status_code,
                reason=response.reason_phrase,
            )
            raise UpstreamError(response.status_code, response.reason_phrase)

        detected_language, translated_text = parse_response_body(response.text)

        return TranslationResult(
            source_language=detected_language or source_language,
            target_language=target_language or "en",
            source_text=text,
            translated_text=translated_text,
        )
