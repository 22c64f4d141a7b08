"""
Fan-Out Translator - Translates one text into many languages concurrently
"""
import asyncio
from typing import Iterable, List, Optional

from pydantic import BaseModel

from shared.logging_config import get_logger
from shared.models import TranslationRequest, TranslationResult
from translator.errors import (
    CredentialError,
    ProtocolError,
    TranslatorError,
    TransportError,
    UpstreamError,
)
from translator.languages import is_supported
from translator.translation_client import TranslationClient

logger = get_logger("fan-out-translator")

# Failures that belong to one target language only
ISOLATED_ERRORS = (TransportError, UpstreamError, ProtocolError)


class TranslationOutcome(BaseModel):
    """Result slot for one requested target language: a result or an error"""
    target_language: str
    result: Optional[TranslationResult] = None
    error: Optional[TranslatorError] = None

    class Config:
        arbitrary_types_allowed = True

    @property
    def ok(self) -> bool:
        return self.result is not None


class FanOutTranslator:
    """Runs one TranslationClient call per target language, all at once"""

    def __init__(self, client: TranslationClient):
        self.client = client

    async def translate(
        self,
        text: str,
        target_languages: Iterable[str],
        source_language: Optional[str] = None,
    ) -> List[TranslationOutcome]:
        """
        Translate text into every target language.

        Returns one outcome per target language, in the order given,
        whatever order the calls complete in. Network failures for a single
        language are recorded in that language's slot.

        Raises:
            ValueError: If the request is empty or names a language outside
                the supported catalog
            CredentialError: If no bearer token could be obtained
        """
        request = TranslationRequest(
            text=text,
            target_languages=list(target_languages),
            source_language=source_language,
        )
        unsupported = [lang for lang in request.target_languages if not is_supported(lang)]
        if unsupported:
            raise ValueError(f"Unsupported target languages: {', '.join(unsupported)}")

        # Credential failures affect every target; surface them before dispatch
        await self.client.credentials.get_valid_token()

        calls = [
            self.client.translate_one(request.text, target, request.source_language)
            for target in request.target_languages
        ]
        results = await asyncio.gather(*calls, return_exceptions=True)

        outcomes = []
        for target, result in zip(request.target_languages, results):
            if isinstance(result, CredentialError):
                logger.error("fan_out_credential_failed", target_language=target)
                raise result
            if isinstance(result, ISOLATED_ERRORS):
                logger.warning(
                    "fan_out_target_failed",
                    target_language=target,
                    error_type=type(result).__name__,
                    error=str(result),
                )
                outcomes.append(TranslationOutcome(target_language=target, error=result))
            elif isinstance(result, BaseException):
                raise result
            else:
                outcomes.append(TranslationOutcome(target_language=target, result=result))

        logger.info(
            "fan_out_completed",
            requested=len(outcomes),
            succeeded=sum(1 for o in outcomes if o.ok),
        )
        return outcomes

    async def translate_all(
        self,
        text: str,
        target_languages: Iterable[str],
        source_language: Optional[str] = None,
    ) -> List[TranslationResult]:
        """Successful results only, in target-language order"""
        outcomes = await self.translate(text, target_languages, source_language)
        return [o.result for o in outcomes if o.ok]
