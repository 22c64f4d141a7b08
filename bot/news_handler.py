"""
News Handler - Compose extension callbacks for the news search bot
"""
from datetime import datetime, timezone
from typing import Callable, Optional

from shared.config import Config
from shared.logging_config import get_logger
from shared.models import ComposeExtensionResponse, QueryRequest
from search.errors import SearchError
from search.news_client import NewsSearchClient
from bot import cards
from bot.session_store import SessionStore

logger = get_logger("news-handler")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class NewsSearchHandler:
    """Answers news queries with article cards, keeping the Bing client id per user"""

    def __init__(
        self,
        search_client: NewsSearchClient,
        sessions: SessionStore,
        base_uri: str = Config.APP_BASE_URI,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.search_client = search_client
        self.sessions = sessions
        self.base_uri = base_uri
        self._clock = clock

    async def handle_query(self, request: QueryRequest) -> ComposeExtensionResponse:
        data = self.sessions.load(request.user_id)
        text = request.text

        # Settings returned by the config page arrive with the next query
        if request.state:
            self.sessions.save(request.user_id, data)
            text = ""

        if not text:
            return cards.message_response("error_notext", request.locale)

        try:
            result = await self.search_client.search_news(text, client_id=data.client_id)
        except SearchError as e:
            logger.error("news_search_failed", user_id=request.user_id, error_type=type(e).__name__, error=str(e))
            return cards.message_response("error_search", request.locale)

        if result.client_id and result.client_id != data.client_id:
            data.client_id = result.client_id
            self.sessions.save(request.user_id, data)
            logger.info("news_client_id_updated", user_id=request.user_id)

        now = self._clock()
        return cards.list_response([cards.create_news_result(article, now) for article in result.articles])

    def handle_settings_url(self, user_id: str, locale: Optional[str] = None) -> ComposeExtensionResponse:
        # News search has no preferences to preselect
        return cards.config_response(self.base_uri, locale=locale)
