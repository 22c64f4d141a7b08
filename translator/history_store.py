"""
History Store - Most-recently-used translations per user, deduplicated
"""
from collections import OrderedDict
from typing import List, Sequence, Tuple

from shared.config import Config
from shared.models import HistoryEntry, TranslationResult


def history_key(translation: TranslationResult) -> Tuple[str, str]:
    """Case-insensitive identity of a translation in history"""
    return (translation.source_text.casefold(), translation.translated_text.casefold())


def record_and_get(
    history: Sequence[HistoryEntry],
    result: TranslationResult,
    max_entries: int = Config.MAX_TRANSLATION_HISTORY,
) -> List[HistoryEntry]:
    """
    Put result at the front of history and return the new list.

    An existing entry with the same source and translated text (ignoring
    case) is removed first. The list is cut to max_entries, dropping the
    oldest entries. The input list is not modified.
    """
    if max_entries < 1:
        raise ValueError("max_entries must be at least 1")

    next_sequence = max((entry.sequence for entry in history), default=0) + 1

    entries = OrderedDict()
    entries[history_key(result)] = HistoryEntry(translation=result, sequence=next_sequence)
    for entry in history:
        key = history_key(entry.translation)
        if key not in entries:
            entries[key] = entry

    return list(entries.values())[:max_entries]


def list_recent(history: Sequence[HistoryEntry]) -> List[HistoryEntry]:
    """Entries newest first, exactly as stored"""
    return list(history)
