"""
Credential Cache - Exchanges the Translator access key for a short-lived bearer token
"""
import asyncio
import time
from typing import Callable, Optional

import httpx

from shared.config import Config
from shared.logging_config import get_logger
from shared.models import Credential
from translator.errors import CredentialError

logger = get_logger("credential-cache")


class CredentialCache:
    """
    Holds one bearer token per access key and refreshes it before it expires.

    Concurrent callers that find no usable token share a single exchange:
    the first one starts it, the rest await the same pending task.
    """

    def __init__(
        self,
        access_key: str,
        http_client: httpx.AsyncClient,
        token_url: str = Config.TRANSLATOR_TOKEN_URL,
        lifetime_seconds: float = Config.TRANSLATOR_TOKEN_LIFETIME_SECONDS,
        refresh_ratio: float = Config.TRANSLATOR_TOKEN_REFRESH_RATIO,
        timeout: float = Config.TRANSLATOR_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if not access_key:
            raise ValueError("Translator access key not configured")
        if not 0 < refresh_ratio <= 1:
            raise ValueError("refresh_ratio must be in (0, 1]")

        self.access_key = access_key
        self.http_client = http_client
        self.token_url = token_url
        self.lifetime_seconds = lifetime_seconds
        self.refresh_ratio = refresh_ratio
        self.timeout = timeout
        self._clock = clock
        self._credential: Optional[Credential] = None
        self._pending: Optional[asyncio.Task] = None
        self.exchange_count = 0

    @property
    def credential(self) -> Optional[Credential]:
        return self._credential

    async def get_valid_token(self) -> str:
        """
        Return a usable bearer token, exchanging the access key if needed.

        Raises:
            CredentialError: If the exchange fails
        """
        credential = self._credential
        if credential is not None and not credential.needs_refresh(self._clock()):
            return credential.token

        if self._pending is None:
            self._pending = asyncio.ensure_future(self._refresh())
            self._pending.add_done_callback(self._clear_pending)

        # shield: one waiter being cancelled must not cancel the shared exchange
        credential = await asyncio.shield(self._pending)
        return credential.token

    def invalidate(self) -> None:
        """Drop the stored token so the next call exchanges again"""
        self._credential = None

    def _clear_pending(self, task: asyncio.Task) -> None:
        if self._pending is task:
            self._pending = None
        if not task.cancelled():
            # mark retrieved; waiters re-raise it themselves
            task.exception()

    async def _refresh(self) -> Credential:
        self._credential = None
        self.exchange_count += 1
        logger.info("token_exchange_started", url=self.token_url)

        try:
            response = await self.http_client.post(
                self.token_url,
                headers={"Ocp-Apim-Subscription-Key": self.access_key},
                content=b"",
                timeout=self.timeout,
            )
        except httpx.HTTPError as e:
            logger.error("token_exchange_transport_failed", error=str(e))
            raise CredentialError(f"Token exchange failed: {e}") from e

        if response.status_code != 200:
            logger.error(
                "token_exchange_rejected",
                status_code=response.status_code,
                reason=response.reason_phrase,
            )
            raise CredentialError(
                f"Token exchange rejected: {response.status_code} {response.reason_phrase}"
            )

        token = response.text.strip()
        if not token:
            raise CredentialError("Token exchange returned an empty token")

        now = self._clock()
        credential = Credential(
            token=token,
            expires_at=now + self.lifetime_seconds,
            refresh_at=now + self.lifetime_seconds * self.refresh_ratio,
        )
        self._credential = credential
        logger.info("token_exchange_succeeded", valid_for_seconds=self.lifetime_seconds * self.refresh_ratio)
        return credential
