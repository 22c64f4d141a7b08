"""
Card builders for compose extension responses
"""
import html
import json
from datetime import datetime, timezone
from typing import List, Optional

from shared.models import (
    Attachment,
    CardAction,
    ComposeExtensionResponse,
    ComposeExtensionResult,
    NewsArticle,
    TranslationResult,
)
from translator.languages import get_language_name
from bot.strings import gettext

THUMBNAIL_CARD = "application/vnd.microsoft.card.thumbnail"


def thumbnail(
    title: Optional[str] = None,
    text: Optional[str] = None,
    tap: Optional[CardAction] = None,
    image_url: Optional[str] = None,
) -> Attachment:
    content = {}
    if title is not None:
        content["title"] = title
    if text is not None:
        content["text"] = text
    if image_url:
        content["images"] = [{"url": image_url}]
    if tap is not None:
        content["tap"] = tap.dict(exclude_none=True)
    return Attachment(content_type=THUMBNAIL_CARD, content=content)


def _select_action(translation: TranslationResult) -> CardAction:
    # Tapping the preview sends the translation back as a selectItem invoke
    return CardAction(type="invoke", value=json.dumps(translation.dict()))


def create_translation_card(translation: TranslationResult, locale: Optional[str] = None) -> Attachment:
    """The card dropped into the conversation"""
    original_label = get_language_name(translation.source_language, locale) or gettext("original_label", locale)
    text = (
        f'<div style="font-size:1.6rem;font-weight:600;">{html.escape(translation.translated_text)}</div>'
        f'<div style="margin-top:1.4rem;"><span style="text-decoration:underline;">'
        f'{html.escape(original_label)}</span><br/>{html.escape(translation.source_text)}</div>'
    )
    return thumbnail(text=text)


def create_translation_result(translation: TranslationResult, locale: Optional[str] = None) -> Attachment:
    """Result list item: preview shows the translation and the target language"""
    card = create_translation_card(translation, locale)
    card.preview = thumbnail(
        title=translation.translated_text,
        text=get_language_name(translation.target_language, locale),
        tap=_select_action(translation),
    )
    return card


def create_history_result(translation: TranslationResult, locale: Optional[str] = None) -> Attachment:
    """History list item: preview shows the translation and the original text"""
    card = create_translation_card(translation, locale)
    card.preview = thumbnail(
        title=translation.translated_text,
        text=translation.source_text,
        tap=_select_action(translation),
    )
    return card


def format_age(published: datetime, now: Optional[datetime] = None) -> str:
    """Relative age of a timestamp, e.g. '3 hours ago'"""
    now = now or datetime.now(timezone.utc)
    seconds = max((now - published).total_seconds(), 0)
    minutes = seconds / 60
    hours = minutes / 60
    days = hours / 24

    if seconds < 45:
        return "a few seconds ago"
    if seconds < 90:
        return "a minute ago"
    if minutes < 45:
        return f"{int(minutes + 0.5)} minutes ago"
    if minutes < 90:
        return "an hour ago"
    if hours < 22:
        return f"{int(hours + 0.5)} hours ago"
    if hours < 36:
        return "a day ago"
    if days < 26:
        return f"{int(days + 0.5)} days ago"
    if days < 46:
        return "a month ago"
    if days < 320:
        return f"{max(int(days / 30.4 + 0.5), 2)} months ago"
    if days < 548:
        return "a year ago"
    return f"{max(int(days / 365 + 0.5), 2)} years ago"


def create_news_result(article: NewsArticle, now: Optional[datetime] = None) -> Attachment:
    """News list item with a linked headline; the preview shows plain text"""
    attributions = []
    if article.providers:
        attributions.append(", ".join(article.providers))
    if article.date_published is not None:
        attributions.append(format_age(article.date_published, now))

    card = thumbnail(
        title=f'<a href="{html.escape(article.url)}">{html.escape(article.name)}</a>',
        text=f"<p>{html.escape(article.description)}</p><p>{html.escape(' | '.join(attributions))}</p>",
        image_url=article.thumbnail_url,
    )
    card.preview = thumbnail(
        title=article.name,
        text=article.description,
        image_url=article.thumbnail_url,
    )
    return card


def list_response(attachments: List[Attachment]) -> ComposeExtensionResponse:
    return ComposeExtensionResponse(
        compose_extension=ComposeExtensionResult(
            type="result",
            attachment_layout="list",
            attachments=attachments,
        )
    )


def message_response(key: str, locale: Optional[str] = None) -> ComposeExtensionResponse:
    return ComposeExtensionResponse(
        compose_extension=ComposeExtensionResult(type="message", text=gettext(key, locale))
    )


def config_response(
    base_uri: str,
    languages: Optional[List[str]] = None,
    locale: Optional[str] = None,
) -> ComposeExtensionResponse:
    """Ask the client to open the settings page, preselecting languages if given"""
    page = gettext("configure_page", locale)
    url = f"{base_uri.rstrip('/')}/html/{page}"
    if languages is not None:
        url += f"?languages={','.join(languages)}"
    return ComposeExtensionResponse(
        compose_extension=ComposeExtensionResult(
            type="config",
            suggested_actions=[
                CardAction(type="openUrl", title=gettext("configure_text", locale), value=url),
            ],
        )
    )
