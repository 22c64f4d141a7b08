"""
Unit tests for the supported-language catalog
"""
import pytest

from translator.languages import (
    filter_supported,
    get_default_languages,
    get_language_name,
    get_supported_languages,
    parse_language_settings,
)


class TestLanguages:
    """Test catalog lookups and settings parsing"""

    @pytest.mark.unit
    def test_defaults_are_supported(self):
        assert get_default_languages() == ["en", "es", "fr", "it", "ar"]
        assert set(get_default_languages()) <= set(get_supported_languages())

    @pytest.mark.unit
    def test_returned_lists_are_copies(self):
        get_default_languages().append("xx")
        assert "xx" not in get_default_languages()

    @pytest.mark.unit
    def test_settings_filtered_against_catalog(self):
        assert parse_language_settings("fr, de,xx,zh-CHS,fr") == ["fr", "de", "zh-CHS"]

    @pytest.mark.unit
    @pytest.mark.parametrize("state", [None, "", "xx,yy", " , "])
    def test_empty_settings_fall_back_to_defaults(self, state):
        assert parse_language_settings(state) == get_default_languages()

    @pytest.mark.unit
    def test_filter_supported_keeps_order(self):
        assert filter_supported(["ru", "klingon", "tlh", "en"]) == ["ru", "tlh", "en"]

    @pytest.mark.unit
    def test_language_names(self):
        assert get_language_name("fr") == "French"
        assert get_language_name("xx") == "xx"
        assert get_language_name(None) == ""

    @pytest.mark.unit
    @pytest.mark.parametrize("locale", ["he", "he-IL", "HE_il"])
    def test_language_names_follow_locale(self, locale):
        assert get_language_name("fr", locale) == "צרפתית"
        assert get_language_name("zh-CHS", locale) == "סינית פשוטה"

    @pytest.mark.unit
    def test_unknown_locale_uses_english_names(self):
        assert get_language_name("de", "ja-JP") == "German"
        assert get_language_name("de", None) == "German"

    @pytest.mark.unit
    def test_every_supported_language_has_a_hebrew_name(self):
        for language in get_supported_languages():
            assert get_language_name(language, "he") != get_language_name(language, "en")
