"""
Unit tests for the compose extension query handler
"""
import asyncio
import json

import pytest

from conftest import make_result
from bot.query_handler import QueryHandler
from shared.models import (
    QueryRequest,
    SelectItemRequest,
    SettingsUpdateRequest,
    UserData,
)
from translator.errors import CredentialError, TransportError
from translator.fan_out import TranslationOutcome
from translator.history_store import record_and_get


class FakeTranslator:
    """FanOutTranslator double returning prepared outcomes"""

    def __init__(self, outcomes=None, error=None):
        self.outcomes = outcomes or []
        self.error = error
        self.calls = []

    async def translate(self, text, target_languages, source_language=None):
        self.calls.append((text, list(target_languages)))
        if self.error is not None:
            raise self.error
        return self.outcomes


def ok(source_language, target_language, text="bonjour", translated="hello"):
    return TranslationOutcome(
        target_language=target_language,
        result=make_result(text, translated, source_language, target_language),
    )


def make_handler(session_store, translator=None, **kwargs):
    return QueryHandler(
        translator=translator or FakeTranslator(),
        sessions=session_store,
        base_uri="https://bot.test",
        **kwargs,
    )


class TestQueryHandler:
    """Test query, settings and selection callbacks"""

    @pytest.mark.unit
    def test_query_translates_into_default_languages(self, session_store):
        translator = FakeTranslator(outcomes=[ok("fr", "en")])
        handler = make_handler(session_store, translator)

        response = asyncio.run(handler.handle_query(QueryRequest(user_id="u1", text="bonjour")))

        assert translator.calls == [("bonjour", ["en", "es", "fr", "it", "ar"])]
        body = response.compose_extension
        assert body.type == "result"
        assert body.attachment_layout == "list"
        assert len(body.attachments) == 1
        preview = body.attachments[0].preview.content
        assert preview["title"] == "hello"
        assert preview["text"] == "English"
        assert json.loads(preview["tap"]["value"])["target_language"] == "en"

    @pytest.mark.unit
    def test_query_uses_saved_languages(self, session_store):
        session_store.save("u1", UserData(languages=["de", "ja"]))
        translator = FakeTranslator(outcomes=[])
        handler = make_handler(session_store, translator)

        asyncio.run(handler.handle_query(QueryRequest(user_id="u1", text="hello")))

        assert translator.calls[0][1] == ["de", "ja"]

    @pytest.mark.unit
    def test_saved_languages_outside_catalog_are_skipped(self, session_store):
        session_store.save("u1", UserData(languages=["xx", "de", "de", "klingon"]))
        translator = FakeTranslator(outcomes=[])
        handler = make_handler(session_store, translator)

        asyncio.run(handler.handle_query(QueryRequest(user_id="u1", text="hello")))

        assert translator.calls[0][1] == ["de"]

    @pytest.mark.unit
    def test_saved_languages_all_unknown_fall_back_to_defaults(self, session_store):
        session_store.save("u1", UserData(languages=["xx", "yy"]))
        translator = FakeTranslator(outcomes=[])
        handler = make_handler(session_store, translator)

        asyncio.run(handler.handle_query(QueryRequest(user_id="u1", text="hello")))
        response = handler.handle_settings_url("u1")

        assert translator.calls[0][1] == ["en", "es", "fr", "it", "ar"]
        assert response.compose_extension.suggested_actions[0].value.endswith("?languages=en,es,fr,it,ar")

    @pytest.mark.unit
    def test_language_names_are_localized(self, session_store):
        translator = FakeTranslator(outcomes=[ok("fr", "en")])
        handler = make_handler(session_store, translator)

        response = asyncio.run(handler.handle_query(QueryRequest(user_id="u1", text="bonjour", locale="he-IL")))

        card = response.compose_extension.attachments[0]
        assert card.preview.content["text"] == "אנגלית"
        assert "צרפתית" in card.content["text"]

    @pytest.mark.unit
    def test_same_language_and_failed_results_are_not_shown(self, session_store):
        outcomes = [
            ok("fr", "fr", translated="bonjour"),
            ok("fr", "en"),
            TranslationOutcome(target_language="de", error=TransportError("down")),
        ]
        handler = make_handler(session_store, FakeTranslator(outcomes=outcomes))

        response = asyncio.run(handler.handle_query(QueryRequest(user_id="u1", text="bonjour")))

        attachments = response.compose_extension.attachments
        assert [a.preview.content["text"] for a in attachments] == ["English"]

    @pytest.mark.unit
    def test_failed_fan_out_shows_error_message(self, session_store):
        handler = make_handler(session_store, FakeTranslator(error=CredentialError("no token")))

        response = asyncio.run(handler.handle_query(QueryRequest(user_id="u1", text="bonjour", locale="en-US")))

        assert response.compose_extension.type == "message"
        assert response.compose_extension.text.startswith("Sorry")

    @pytest.mark.unit
    def test_error_message_is_localized(self, session_store):
        handler = make_handler(session_store, FakeTranslator(error=CredentialError("no token")))

        response = asyncio.run(handler.handle_query(QueryRequest(user_id="u1", text="bonjour", locale="he-IL")))

        assert response.compose_extension.text.startswith("מצטערים")

    @pytest.mark.unit
    def test_initial_run_replays_history_without_translating(self, session_store):
        history = record_and_get([], make_result("cat", "chat"))
        history = record_and_get(history, make_result("same", "same", "en", "en"))
        history = record_and_get(history, make_result("dog", "chien"))
        session_store.save("u1", UserData(translation_history=history))
        translator = FakeTranslator()
        handler = make_handler(session_store, translator)

        response = asyncio.run(handler.handle_query(QueryRequest(user_id="u1", initial_run=True)))

        assert translator.calls == []
        previews = [a.preview.content for a in response.compose_extension.attachments]
        assert [(p["title"], p["text"]) for p in previews] == [("chien", "dog"), ("chat", "cat")]

    @pytest.mark.unit
    def test_initial_run_without_history_shows_instructions(self, session_store):
        handler = make_handler(session_store)

        response = asyncio.run(handler.handle_query(QueryRequest(user_id="u1", initial_run=True)))

        assert response.compose_extension.type == "message"
        assert response.compose_extension.text == "Type the text you want to translate."

    @pytest.mark.unit
    def test_settings_in_query_are_saved_and_text_ignored(self, session_store):
        translator = FakeTranslator()
        handler = make_handler(session_store, translator)

        response = asyncio.run(handler.handle_query(
            QueryRequest(user_id="u1", text="ignored", state="de,xx,ko")
        ))

        assert translator.calls == []
        assert session_store.load("u1").languages == ["de", "ko"]
        assert response.compose_extension.type == "message"

    @pytest.mark.unit
    def test_settings_query_returns_config_when_allowed(self, session_store):
        handler = make_handler(session_store, allow_configuration_via_query=True)

        response = asyncio.run(handler.handle_query(QueryRequest(user_id="u1", text="settings")))

        body = response.compose_extension
        assert body.type == "config"
        assert body.suggested_actions[0].type == "openUrl"
        assert body.suggested_actions[0].value == "https://bot.test/html/config.html?languages=en,es,fr,it,ar"

    @pytest.mark.unit
    def test_settings_query_is_translated_when_not_allowed(self, session_store):
        translator = FakeTranslator()
        handler = make_handler(session_store, translator, allow_configuration_via_query=False)

        asyncio.run(handler.handle_query(QueryRequest(user_id="u1", text="settings")))

        assert translator.calls[0][0] == "settings"

    @pytest.mark.unit
    def test_settings_url_lists_current_languages(self, session_store):
        session_store.save("u1", UserData(languages=["fr", "de"]))
        handler = make_handler(session_store)

        response = handler.handle_settings_url("u1")

        assert response.compose_extension.suggested_actions[0].value.endswith("?languages=fr,de")

    @pytest.mark.unit
    def test_settings_update_with_no_valid_language_stores_defaults(self, session_store):
        handler = make_handler(session_store)

        response = handler.handle_settings_update(SettingsUpdateRequest(user_id="u1", state="xx"))

        assert session_store.load("u1").languages == ["en", "es", "fr", "it", "ar"]
        assert response.compose_extension.type == "message"
        assert response.compose_extension.text == ""

    @pytest.mark.unit
    def test_select_item_records_history(self, session_store):
        handler = make_handler(session_store, max_history=5)
        first = make_result("Good morning", "Bonjour")

        handler.handle_select_item(SelectItemRequest(user_id="u1", translation=first))
        handler.handle_select_item(SelectItemRequest(user_id="u1", translation=make_result("cat", "chat")))
        response = handler.handle_select_item(
            SelectItemRequest(user_id="u1", translation=make_result("good MORNING", "BONJOUR"))
        )

        history = session_store.load("u1").translation_history
        assert [e.translation.source_text for e in history] == ["good MORNING", "cat"]
        card = response.compose_extension.attachments[0]
        assert "BONJOUR" in card.content["text"]
        assert card.preview.content["title"] == " "

    @pytest.mark.unit
    def test_card_text_is_escaped(self, session_store):
        handler = make_handler(session_store)
        translation = make_result("<script>x</script>", "<b>y</b>")

        response = handler.handle_select_item(SelectItemRequest(user_id="u1", translation=translation))

        text = response.compose_extension.attachments[0].content["text"]
        assert "<script>" not in text
        assert "&lt;script&gt;x&lt;/script&gt;" in text
        assert "&lt;b&gt;y&lt;/b&gt;" in text
