"""
News Search Client - Bing News Search queries for the news compose extension
"""
import re
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from shared.config import Config
from shared.logging_config import get_logger
from shared.models import NewsArticle, NewsSearchResult
from search.errors import SearchProtocolError, SearchTransportError, SearchUpstreamError

logger = get_logger("news-search-client")

CLIENT_ID_HEADER = "X-MSEdge-ClientID"

# Bing sends seven fractional digits; fromisoformat takes at most six
_FRACTION = re.compile(r"\.(\d+)")


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse a datePublished value into an aware UTC datetime, or None"""
    if not value:
        return None

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.debug("news_timestamp_unparsed", value=value)
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_article(item: Dict[str, Any]) -> NewsArticle:
    """Map one entry of the response 'value' array onto NewsArticle"""
    image = item.get("image") or {}
    thumbnail = image.get("thumbnail") or {}
    providers = [p.get("name") for p in item.get("provider") or [] if isinstance(p, dict) and p.get("name")]

    return NewsArticle(
        name=item.get("name"),
        url=item.get("url"),
        description=item.get("description") or "",
        thumbnail_url=thumbnail.get("contentUrl"),
        date_published=parse_timestamp(item.get("datePublished")),
        providers=providers,
    )


def parse_response(body: Any, client_id: Optional[str] = None) -> NewsSearchResult:
    """
    Build a NewsSearchResult from a decoded News Search response.

    Raises:
        SearchProtocolError: If the body does not have the expected structure
    """
    if not isinstance(body, dict):
        raise SearchProtocolError("News search response is not a JSON object")

    items = body.get("value") or []
    if not isinstance(items, list):
        raise SearchProtocolError("News search response 'value' is not a list")

    try:
        articles = [parse_article(item) for item in items]
        return NewsSearchResult(
            total_estimated_matches=body.get("totalEstimatedMatches") or 0,
            articles=articles,
            client_id=client_id,
        )
    except (AttributeError, ValidationError) as e:
        raise SearchProtocolError(f"Unexpected news search response: {e}") from e


class NewsSearchClient:
    """Queries Bing News Search with the subscription key"""

    def __init__(
        self,
        access_key: str,
        http_client: httpx.AsyncClient,
        search_url: str = Config.NEWS_SEARCH_URL,
        timeout: float = Config.NEWS_SEARCH_TIMEOUT_SECONDS,
    ):
        if not access_key:
            raise ValueError("Bing Search access key not configured")

        self.access_key = access_key
        self.http_client = http_client
        self.search_url = search_url
        self.timeout = timeout

    async def search_news(
        self,
        query: str,
        client_id: Optional[str] = None,
        count: Optional[int] = None,
        offset: Optional[int] = None,
        market: Optional[str] = None,
    ) -> NewsSearchResult:
        """
        Search news articles matching query.

        Args:
            query: Search terms
            client_id: X-MSEdge-ClientID from a previous response, if any
            count: Number of articles to return
            offset: Number of articles to skip
            market: Market code such as 'en-US'

        Returns:
            NewsSearchResult; client_id is the id returned by Bing, if any

        Raises:
            SearchTransportError: On network failure or timeout
            SearchUpstreamError: On a non-200 response
            SearchProtocolError: On a response body that cannot be parsed
        """
        if not query or not query.strip():
            raise ValueError("Query cannot be empty")

        params = {"q": query}
        if count is not None:
            params["count"] = count
        if offset is not None:
            params["offset"] = offset
        if market:
            params["mkt"] = market

        headers = {"Ocp-Apim-Subscription-Key": self.access_key}
        if client_id:
            headers[CLIENT_ID_HEADER] = client_id

        try:
            response = await self.http_client.get(
                self.search_url,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
        except httpx.TimeoutException as e:
            logger.warning("news_search_timeout")
            raise SearchTransportError(f"News search timed out: {e}") from e
        except httpx.HTTPError as e:
            logger.warning("news_search_transport_failed", error=str(e))
            raise SearchTransportError(f"News search failed: {e}") from e

        if response.status_code != 200:
            logger.warning(
                "news_search_rejected",
                status_code=response.status_code,
                reason=response.reason_phrase,
            )
            raise SearchUpstreamError(response.status_code, response.reason_phrase)

        try:
            body = response.json()
        except ValueError as e:
            raise SearchProtocolError(f"News search response is not JSON: {e}") from e

        result = parse_response(body, response.headers.get(CLIENT_ID_HEADER))
        logger.info(
            "news_search_completed",
            articles=len(result.articles),
            total_estimated_matches=result.total_estimated_matches,
        )
        return result
