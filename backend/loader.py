# loader.py
"""
Reads the per-language ``.tra`` exports from disk.

The exports come out of older tooling in mixed encodings: UTF-8 with or
without a BOM, or Windows-1252. Everything is returned as ``str`` so the
adapters never see bytes.
"""
from __future__ import annotations
import codecs
import logging
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from adapters import SUPPORTED_LANGUAGES

log = logging.getLogger(__name__)

DEFAULT_TRA_FILES: Dict[str, str] = {
    "en": "en-BE.tra",
    "fr": "fr-BE.tra",
    "nl": "nl-BE.tra",
    "de": "de-BE.tra",
}


def detect_tra_encoding(data: bytes) -> str:
    if data.startswith(codecs.BOM_UTF8):
        return "utf-8-sig"
    try:
        data.decode("utf-8")
    except UnicodeDecodeError:
        return "cp1252"
    return "utf-8"


def decode_tra_bytes(data: bytes, encoding: Optional[str] = None) -> str:
    encoding = encoding or detect_tra_encoding(data)
    # cp1252 leaves 0x81, 0x8D, 0x8F, 0x90 and 0x9D undefined
    return data.decode(encoding, errors="replace")


def load_tra_files(
    directory: Union[str, Path],
    files: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Return ``{lang: content}`` for the four languages.

    A missing file is logged and loaded as empty content, so the remaining
    languages still make it into the translation map.
    """
    base = Path(directory)
    names = dict(DEFAULT_TRA_FILES)
    if files:
        unknown = set(files) - set(SUPPORTED_LANGUAGES)
        if unknown:
            raise ValueError(f"Unsupported language(s) in files mapping: {sorted(unknown)}")
        names.update(files)

    contents: Dict[str, str] = {}
    for lang in SUPPORTED_LANGUAGES:
        path = base / names[lang]
        if not path.is_file():
            log.warning("%s: not found, using empty content for '%s'", path, lang)
            contents[lang] = ""
            continue
        raw = path.read_bytes()
        encoding = detect_tra_encoding(raw)
        log.info("%s: %s", path.name, encoding)
        contents[lang] = decode_tra_bytes(raw, encoding)
    return contents
