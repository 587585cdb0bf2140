# adapters/__init__.py
from __future__ import annotations
from abc import ABC, abstractmethod
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional


class Language(str, Enum):
    EN = "en"
    FR = "fr"
    NL = "nl"
    DE = "de"


SUPPORTED_LANGUAGES = tuple(lang.value for lang in Language)

TranslationBundle = Mapping[str, str]
TranslationMap = Mapping[str, TranslationBundle]
MetadataMap = Mapping[str, Mapping[str, Any]]


class InvalidInputFormat(ValueError):
    """Raised when an adapter is handed data it cannot be built from."""


class TranslationDataPort(ABC):
    """
    Read-only view over translation data coming from one source.

    Implementations compute everything at construction time, so the accessors
    below never fail.
    """

    @abstractmethod
    def get_translation_map(self) -> TranslationMap: ...
    @abstractmethod
    def get_metadata_map(self) -> MetadataMap: ...
    @abstractmethod
    def get_source_identifier(self) -> str: ...

    def get_translation_count(self) -> int: return len(self.get_translation_map())

    def get_translation(self, identifier: str) -> Optional[TranslationBundle]:
        return self.get_translation_map().get(identifier)


def frozen_map(data: Dict[str, Dict[str, Any]]) -> Mapping[str, Mapping[str, Any]]:
    return MappingProxyType({k: MappingProxyType(v) for k, v in data.items()})
