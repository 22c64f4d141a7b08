"""
Bot-side collaborators of the translation core and the news search client:
query handling, cards, localized strings and the per-user session store
"""
from .session_store import SessionStore, get_session_store
from .query_handler import QueryHandler
from .news_handler import NewsSearchHandler

__all__ = [
    "SessionStore",
    "get_session_store",
    "QueryHandler",
    "NewsSearchHandler",
]
