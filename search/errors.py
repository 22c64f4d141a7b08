"""
Errors raised by the news search client
"""
from typing import Optional


class SearchError(Exception):
    """Base class for news search failures"""


class SearchTransportError(SearchError):
    """Network failure or timeout talking to the search endpoint"""


class SearchUpstreamError(SearchError):
    """The search endpoint answered with a non-success status"""

    def __init__(self, status_code: int, reason: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason or ""
        super().__init__(f"News search returned {status_code} {self.reason}".strip())


class SearchProtocolError(SearchError):
    """The search endpoint returned a body we could not parse"""
