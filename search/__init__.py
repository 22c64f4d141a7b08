"""
Bing News Search client for the news compose extension.
"""
from typing import Optional

import httpx

from shared.config import Config
from .errors import (
    SearchError,
    SearchTransportError,
    SearchUpstreamError,
    SearchProtocolError,
)
from .news_client import NewsSearchClient


def create_news_search_client(
    http_client: httpx.AsyncClient,
    access_key: Optional[str] = None,
) -> NewsSearchClient:
    return NewsSearchClient(access_key or Config.BING_SEARCH_ACCESS_KEY, http_client)


__all__ = [
    "SearchError",
    "SearchTransportError",
    "SearchUpstreamError",
    "SearchProtocolError",
    "NewsSearchClient",
    "create_news_search_client",
]
