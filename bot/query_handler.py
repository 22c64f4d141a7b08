"""
Query Handler - Compose extension callbacks for the translator bot
"""
from typing import List, Optional

from shared.config import Config
from shared.logging_config import get_logger
from shared.models import (
    ComposeExtensionResponse,
    QueryRequest,
    SelectItemRequest,
    SettingsUpdateRequest,
    TranslationResult,
    UserData,
)
from translator.fan_out import FanOutTranslator
from translator.history_store import list_recent, record_and_get
from translator.languages import filter_supported, get_default_languages, parse_language_settings
from bot import cards
from bot.session_store import SessionStore

logger = get_logger("query-handler")


class QueryHandler:
    """Connects chat client callbacks to the translation core and the session store"""

    def __init__(
        self,
        translator: FanOutTranslator,
        sessions: SessionStore,
        base_uri: str = Config.APP_BASE_URI,
        allow_configuration_via_query: bool = Config.ALLOW_CONFIGURATION_VIA_QUERY,
        max_history: int = Config.MAX_TRANSLATION_HISTORY,
    ):
        self.translator = translator
        self.sessions = sessions
        self.base_uri = base_uri
        self.allow_configuration_via_query = allow_configuration_via_query
        self.max_history = max_history

    @staticmethod
    def get_translation_languages(data: UserData) -> List[str]:
        # Stored preferences may predate the current catalog
        return filter_supported(data.languages or []) or get_default_languages()

    def _update_settings(self, user_id: str, data: UserData, state: Optional[str]) -> UserData:
        data.languages = parse_language_settings(state)
        self.sessions.save(user_id, data)
        logger.info("settings_updated", user_id=user_id, languages=data.languages)
        return data

    async def handle_query(self, request: QueryRequest) -> ComposeExtensionResponse:
        """Translate the query text, or show history / instructions when there is none"""
        data = self.sessions.load(request.user_id)
        text = request.text

        # Settings can arrive as part of a query, after a config response
        if request.state:
            data = self._update_settings(request.user_id, data, request.state)
            text = ""

        languages = self.get_translation_languages(data)

        if text == "settings" and self.allow_configuration_via_query:
            return cards.config_response(self.base_uri, languages, request.locale)

        if text:
            return await self._translate(request.user_id, text, languages, request.locale)

        if request.initial_run:
            history = list_recent(data.translation_history)
            if history:
                attachments = [
                    cards.create_history_result(entry.translation, request.locale)
                    for entry in history
                    if not entry.translation.is_same_language
                ]
                return cards.list_response(attachments)

        return cards.message_response("error_notext", request.locale)

    async def _translate(self, user_id: str, text: str, languages: List[str], locale: Optional[str]) -> ComposeExtensionResponse:
        try:
            outcomes = await self.translator.translate(text, languages)
        except Exception as e:
            logger.error("translation_failed", user_id=user_id, error_type=type(e).__name__, error=str(e))
            return cards.message_response("error_translation", locale)

        # Same-language results are not worth showing
        results = [o.result for o in outcomes if o.ok and not o.result.is_same_language]
        failed = [o.target_language for o in outcomes if not o.ok]
        if failed:
            logger.warning("translation_partially_failed", user_id=user_id, failed_languages=failed)

        return cards.list_response([cards.create_translation_result(r, locale) for r in results])

    def handle_settings_url(self, user_id: str, locale: Optional[str] = None) -> ComposeExtensionResponse:
        data = self.sessions.load(user_id)
        return cards.config_response(self.base_uri, self.get_translation_languages(data), locale)

    def handle_settings_update(self, request: SettingsUpdateRequest) -> ComposeExtensionResponse:
        if request.state:
            data = self.sessions.load(request.user_id)
            self._update_settings(request.user_id, data, request.state)

        # The client ignores the body; reply with an empty message
        return ComposeExtensionResponse(compose_extension={"type": "message", "text": ""})

    def handle_select_item(self, request: SelectItemRequest) -> ComposeExtensionResponse:
        """Remember the chosen translation and return its card"""
        translation: TranslationResult = request.translation
        data = self.sessions.load(request.user_id)
        data.translation_history = record_and_get(data.translation_history, translation, self.max_history)
        self.sessions.save(request.user_id, data)
        logger.info("history_recorded", user_id=request.user_id, history_size=len(data.translation_history))

        card = cards.create_translation_card(translation, request.locale)
        # Clients still expect a preview on the selected item
        card.preview = cards.thumbnail(title=" ", text=" ")
        return cards.list_response([card])
