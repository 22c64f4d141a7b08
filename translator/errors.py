"""
Error taxonomy for the translation core
"""
from typing import Optional


class TranslatorError(Exception):
    """Base class for translation core failures"""


class CredentialError(TranslatorError):
    """The access key could not be exchanged for a bearer token"""


class TransportError(TranslatorError):
    """Network failure or timeout talking to the translation endpoint"""


class UpstreamError(TranslatorError):
    """The translation endpoint answered with a non-success status"""

    def __init__(self, status_code: int, reason: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason or ""
        super().__init__(f"Translation service returned {status_code} {self.reason}".strip())


class ProtocolError(TranslatorError):
    """The translation endpoint returned a body we could not parse"""
