# adapters/tra_format.py
'''
Legacy ``.tra`` resource format.

One entry per line, one file per language:

    10001,"Say ""Hello""","All"
    10002,"Just text"
    10003,SimpleText,All

Lines that match neither shape are dropped without error.
'''
from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, ValidationError

from . import InvalidInputFormat

_QUOTED_RE = re.compile(r'^([0-9]+),"((?:[^"\\]|\\.|"")*)"')
_UNQUOTED_RE = re.compile(r'^([0-9]+),([^,]*)')
_ESCAPE_RE = re.compile(r'""|\\(.)')


def _unescape(text: str) -> str:
    return _ESCAPE_RE.sub(lambda m: m.group(1) if m.group(1) is not None else '"', text)


def _trim(line: str) -> str:
    # exports decoded without utf-8-sig keep the byte order mark on the first line
    return line.strip().lstrip("\ufeff").strip()


def parse_tra_line(line: str) -> Optional[Tuple[str, str]]:
    """Return ``(identifier, text)`` for a data line, ``None`` otherwise."""
    trimmed = _trim(line)
    if not trimmed:
        return None

    match = _QUOTED_RE.match(trimmed)
    if match:
        return match.group(1), _unescape(match.group(2))

    # Simple values are taken as-is
    match = _UNQUOTED_RE.match(trimmed)
    if match:
        return match.group(1), match.group(2)
    return None


@dataclass
class TraTable:
    entries: Dict[str, str] = field(default_factory=dict)
    skipped: int = 0
    duplicates: int = 0


def build_tra_table(content: str) -> TraTable:
    table = TraTable()
    for line in content.replace("\r\n", "\n").split("\n"):
        parsed = parse_tra_line(line)
        if parsed is None:
            if _trim(line):
                table.skipped += 1
            continue
        identifier, text = parsed
        if identifier in table.entries:
            table.duplicates += 1
        table.entries[identifier] = text
    return table


def parse_tra_file(content: str) -> Dict[str, str]:
    """Map identifier -> text for one language file; later lines win."""
    return build_tra_table(content).entries


class TraFileData(BaseModel):
    """Contents of the four language files, one string each."""
    model_config = ConfigDict(strict=True, frozen=True, extra="ignore")

    en: str
    fr: str
    nl: str
    de: str


def validate_tra_file_data(data: Any) -> TraFileData:
    if isinstance(data, TraFileData):
        return data
    if isinstance(data, Mapping) and not isinstance(data, dict):
        data = dict(data)
    try:
        return TraFileData.model_validate(data, from_attributes=True)
    except ValidationError as e:
        problems = ", ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}" for err in e.errors()
        )
        raise InvalidInputFormat(
            f"Invalid data format: expected en, fr, nl, de string properties ({problems})"
        ) from e


def is_tra_file_data(data: Any) -> bool:
    try:
        validate_tra_file_data(data)
    except InvalidInputFormat:
        return False
    return True
