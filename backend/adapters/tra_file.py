# adapters/tra_file.py
from __future__ import annotations
import logging
from typing import Any, Dict

from . import (
    SUPPORTED_LANGUAGES,
    MetadataMap,
    TranslationDataPort,
    TranslationMap,
    frozen_map,
)
from .tra_format import TraFileData, build_tra_table, validate_tra_file_data

log = logging.getLogger(__name__)


class TraFileAdapter(TranslationDataPort):
    """
    Builds the translation map from the contents of the four ``.tra`` files.

    Every identifier seen in any language gets a bundle holding only the
    languages that actually define it. The format carries no metadata, so the
    metadata map is always empty.
    """

    SOURCE_IDENTIFIER = "tra-files"

    def __init__(self, data: Any) -> None:
        tra_data = validate_tra_file_data(data)
        self._skipped: Dict[str, int] = {}
        self._translation_map: TranslationMap = frozen_map(self._build_translation_map(tra_data))
        self._metadata_map: MetadataMap = frozen_map({})

    def _build_translation_map(self, data: TraFileData) -> Dict[str, Dict[str, str]]:
        tables = {}
        for lang in SUPPORTED_LANGUAGES:
            table = build_tra_table(getattr(data, lang))
            log.debug(
                "[%s] %s: %d entries, %d skipped lines, %d duplicate ids",
                self.SOURCE_IDENTIFIER, lang, len(table.entries), table.skipped, table.duplicates,
            )
            self._skipped[lang] = table.skipped
            tables[lang] = table.entries

        merged: Dict[str, Dict[str, str]] = {}
        for lang, entries in tables.items():
            for identifier, text in entries.items():
                merged.setdefault(identifier, {})[lang] = text
        return merged

    def get_translation_map(self) -> TranslationMap:
        return self._translation_map

    def get_metadata_map(self) -> MetadataMap:
        return self._metadata_map

    def get_source_identifier(self) -> str:
        return self.SOURCE_IDENTIFIER

    def get_skipped_line_counts(self) -> Dict[str, int]:
        return dict(self._skipped)
