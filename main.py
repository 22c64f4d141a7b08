"""
Translator Bot API with FastAPI

Compose extension callbacks (query, settings, item selection) backed by the
translation core, plus a news search compose extension backed by Bing.
"""
from contextlib import asynccontextmanager
from typing import Optional

import httpx
import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from shared.config import Config
from shared.logging_config import get_logger
from shared.models import (
    ComposeExtensionResponse,
    QueryRequest,
    SelectItemRequest,
    SettingsUpdateRequest,
)
from translator import create_fan_out_translator
from search import create_news_search_client
from bot import NewsSearchHandler, QueryHandler, get_session_store

logger = get_logger("translator-bot")

_http_client: Optional[httpx.AsyncClient] = None
_query_handler: Optional[QueryHandler] = None
_news_handler: Optional[NewsSearchHandler] = None


def get_http_client() -> httpx.AsyncClient:
    """Get or create the HTTP client shared by the outbound API clients"""
    global _http_client
    if _http_client is None:
        _http_client = httpx.AsyncClient(timeout=Config.TRANSLATOR_TIMEOUT_SECONDS)
    return _http_client


def get_query_handler() -> QueryHandler:
    """Get or create the query handler and the translation core behind it"""
    global _query_handler
    if _query_handler is None:
        _query_handler = QueryHandler(
            translator=create_fan_out_translator(get_http_client()),
            sessions=get_session_store(),
        )
        logger.info("query_handler_initialized")
    return _query_handler


def get_news_handler() -> NewsSearchHandler:
    """Get or create the news search handler"""
    global _news_handler
    if _news_handler is None:
        if not Config.BING_SEARCH_ACCESS_KEY:
            raise HTTPException(status_code=503, detail="News search is not configured")
        _news_handler = NewsSearchHandler(
            search_client=create_news_search_client(get_http_client()),
            sessions=get_session_store(),
        )
        logger.info("news_handler_initialized")
    return _news_handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    if _http_client is not None:
        await _http_client.aclose()
        logger.info("http_client_closed")


app = FastAPI(
    title="Translator Bot API",
    description="Translates compose extension queries into the user's languages",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "translator-bot"}


@app.post("/api/v1/query", response_model=ComposeExtensionResponse)
async def query(request: QueryRequest):
    try:
        return await get_query_handler().handle_query(request)
    except Exception as e:
        logger.error("query_failed", user_id=request.user_id, error=str(e))
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/api/v1/settings-url", response_model=ComposeExtensionResponse)
async def settings_url(user_id: str, locale: Optional[str] = None):
    try:
        return get_query_handler().handle_settings_url(user_id, locale)
    except Exception as e:
        logger.error("settings_url_failed", user_id=user_id, error=str(e))
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/v1/settings", response_model=ComposeExtensionResponse)
async def settings_update(request: SettingsUpdateRequest):
    try:
        return get_query_handler().handle_settings_update(request)
    except Exception as e:
        logger.error("settings_update_failed", user_id=request.user_id, error=str(e))
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/v1/select-item", response_model=ComposeExtensionResponse)
async def select_item(request: SelectItemRequest):
    try:
        return get_query_handler().handle_select_item(request)
    except Exception as e:
        logger.error("select_item_failed", user_id=request.user_id, error=str(e))
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/v1/news/query", response_model=ComposeExtensionResponse)
async def news_query(request: QueryRequest):
    handler = get_news_handler()
    try:
        return await handler.handle_query(request)
    except Exception as e:
        logger.error("news_query_failed", user_id=request.user_id, error=str(e))
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/api/v1/news/settings-url", response_model=ComposeExtensionResponse)
async def news_settings_url(user_id: str, locale: Optional[str] = None):
    handler = get_news_handler()
    try:
        return handler.handle_settings_url(user_id, locale)
    except Exception as e:
        logger.error("news_settings_url_failed", user_id=user_id, error=str(e))
        raise HTTPException(status_code=500, detail=str(e))


if __name__ == "__main__":
    missing_vars = Config.validate_environment()
    if missing_vars:
        logger.error("missing_environment_variables", missing=missing_vars)
        exit(1)
    if not Config.BING_SEARCH_ACCESS_KEY:
        logger.warning("news_search_disabled", reason="BING_SEARCH_ACCESS_KEY not set")

    logger.info("starting_translator_bot", port=Config.PORT)
    uvicorn.run(app, host="0.0.0.0", port=Config.PORT)
