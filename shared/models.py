"""
Shared data models for the translator core and the bot API
"""
from datetime import datetime

from pydantic import BaseModel, Field, validator
from typing import Optional, Dict, Any, List


class Credential(BaseModel):
    """Bearer token issued by the identity endpoint"""
    token: str
    expires_at: float  # on the owning cache's monotonic clock
    refresh_at: float  # replace the token from this point on, before expiry

    class Config:
        frozen = True

    def is_usable(self, now: float) -> bool:
        return now < self.expires_at

    def needs_refresh(self, now: float) -> bool:
        return now >= self.refresh_at or not self.is_usable(now)


class TranslationRequest(BaseModel):
    """One text to translate into one or more languages"""
    text: str
    target_languages: List[str]
    source_language: Optional[str] = None

    @validator('text')
    def validate_text(cls, v):
        if not v or not v.strip():
            raise ValueError("Text cannot be empty")
        return v

    @validator('target_languages')
    def validate_target_languages(cls, v):
        # Keep first occurrence, preserve caller order
        unique = list(dict.fromkeys(lang for lang in v if lang))
        if not unique:
            raise ValueError("At least one target language is required")
        return unique


class TranslationResult(BaseModel):
    """Translation of one text into one target language"""
    source_language: Optional[str] = None
    target_language: str
    source_text: str
    translated_text: str

    @property
    def is_same_language(self) -> bool:
        return self.source_language == self.target_language


class HistoryEntry(BaseModel):
    """A past translation kept for redisplay without a network call"""
    translation: TranslationResult
    sequence: int = 0


class UserData(BaseModel):
    """Per-user state persisted by the session store"""
    languages: Optional[List[str]] = None
    translation_history: List[HistoryEntry] = Field(default_factory=list)
    client_id: Optional[str] = None  # X-MSEdge-ClientID issued by Bing Search


class NewsArticle(BaseModel):
    """One article from a Bing News Search response"""
    name: str
    url: str
    description: str = ""
    thumbnail_url: Optional[str] = None
    date_published: Optional[datetime] = None
    providers: List[str] = []


class NewsSearchResult(BaseModel):
    """Articles for one news query, plus the client id Bing wants echoed back"""
    total_estimated_matches: int = 0
    articles: List[NewsArticle] = []
    client_id: Optional[str] = None


# --- Bot API models ---

class QueryRequest(BaseModel):
    """Compose extension query from the chat client"""
    user_id: str
    text: str = ""
    initial_run: bool = False
    state: Optional[str] = None  # settings string returned by the config page
    locale: Optional[str] = None

    @validator('user_id')
    def validate_user_id(cls, v):
        if not v or not v.strip():
            raise ValueError("user_id cannot be empty")
        return v.strip()

    @validator('text')
    def strip_text(cls, v):
        return (v or "").strip()


class SettingsUpdateRequest(BaseModel):
    """Settings update callback from the configuration page"""
    user_id: str
    state: Optional[str] = None
    locale: Optional[str] = None


class SelectItemRequest(BaseModel):
    """Item selected by the user from a result list"""
    user_id: str
    translation: TranslationResult
    locale: Optional[str] = None


class CardAction(BaseModel):
    """Action attached to a card (tap or button)"""
    type: str
    title: Optional[str] = None
    value: Any = None


class Attachment(BaseModel):
    """Thumbnail card attachment, with an optional preview card"""
    content_type: str = "application/vnd.microsoft.card.thumbnail"
    content: Dict[str, Any] = {}
    preview: Optional["Attachment"] = None


class ComposeExtensionResult(BaseModel):
    """Body of a compose extension response"""
    type: str  # 'result' | 'message' | 'config'
    attachment_layout: Optional[str] = None
    attachments: List[Attachment] = []
    text: Optional[str] = None
    suggested_actions: List[CardAction] = []


class ComposeExtensionResponse(BaseModel):
    """Response returned to the chat client"""
    compose_extension: ComposeExtensionResult


Attachment.update_forward_refs()
