# catalog.py
from __future__ import annotations
import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from adapters import InvalidInputFormat, TranslationDataPort
from factory import create_adapter, has_adapter
from loader import load_tra_files

log = logging.getLogger(__name__)


class UnknownSourceError(KeyError):
    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


# ---------- Config models ----------
class SourceEntry(BaseModel):
    adapter: str = Field(..., description="Adapter type registered in factory.py (e.g., 'tra-files')")
    params: Dict[str, Any] = Field(default_factory=dict, description="Adapter-specific loading params")


class TraSourceParams(BaseModel):
    directory: str = Field(..., description="Directory holding the .tra exports")
    files: Optional[Dict[str, str]] = Field(None, description="Optional language -> file name overrides")


# ---------- Load config ----------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Read the YAML catalog. ``path`` falls back to ``$CONFIG_YML`` and then to
    ``config.yml``. The config file's directory is remembered under
    ``_base_dir`` so relative source directories resolve against it.
    """
    load_dotenv()  # loads .env into process env
    config_path = Path(path or os.environ.get("CONFIG_YML", "config.yml"))
    with open(config_path, "r", encoding="utf-8") as f:
        raw_cfg: Dict[str, Any] = yaml.safe_load(f) or {}
    raw_cfg["_base_dir"] = str(config_path.resolve().parent)
    return raw_cfg


class SourceCatalog:
    """Named translation sources from config, with a lazy cache of built adapters."""

    def __init__(self, config: Dict[str, Any]) -> None:
        self.defaults: Dict[str, Any] = config.get("defaults", {}) or {}
        self.base_dir = Path(config.get("_base_dir") or ".")
        self.sources: Dict[str, SourceEntry] = {}
        for name, entry in (config.get("sources", {}) or {}).items():
            try:
                self.sources[name] = SourceEntry.model_validate(entry or {})
            except ValidationError as e:
                raise ValueError(f"Invalid source '{name}' in config: {e}") from e
        self._adapter_cache: Dict[str, TranslationDataPort] = {}

    @property
    def default_source(self) -> Optional[str]:
        return self.defaults.get("source")

    def list_sources(self) -> List[Dict[str, Any]]:
        return [
            {"name": k, "adapter": v.adapter, "params_keys": sorted(v.params.keys())}
            for k, v in self.sources.items()
        ]

    def loaded_sources(self) -> List[str]:
        return list(self._adapter_cache)

    def get_or_create_adapter(self, source_key: Optional[str] = None) -> TranslationDataPort:
        """
        Returns a cached adapter instance for the given source key.
        Loads and caches on first use.
        """
        source_key = source_key or self.default_source
        if not source_key:
            raise ValueError("No source provided and no default source configured.")
        if source_key in self._adapter_cache:
            return self._adapter_cache[source_key]
        if source_key not in self.sources:
            raise UnknownSourceError(f"Source '{source_key}' not found in config")

        entry = self.sources[source_key]
        if not has_adapter(entry.adapter):
            raise ValueError(f"[{source_key}] Unknown adapter '{entry.adapter}'")

        adapter = create_adapter(self._load_source_data(source_key, entry), entry.adapter)
        log.info(
            "[%s] loaded %d translations from %s",
            source_key, adapter.get_translation_count(), adapter.get_source_identifier(),
        )
        self._adapter_cache[source_key] = adapter
        return adapter

    def _load_source_data(self, source_key: str, entry: SourceEntry) -> Dict[str, str]:
        try:
            params = TraSourceParams.model_validate(entry.params)
        except ValidationError as e:
            raise ValueError(f"[{source_key}] Invalid params: {e}") from e
        directory = Path(params.directory)
        if not directory.is_absolute():
            directory = self.base_dir / directory
        return load_tra_files(directory, params.files)


# ---------- CLI ----------
def _print_json(data: Any) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2))


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="tra-catalog",
        description="Load legacy .tra translation sources and inspect the merged translation map.",
    )
    parser.add_argument("--config", help="Path to config.yml (default: $CONFIG_YML or ./config.yml)")
    parser.add_argument("--source", help="Source key from config (default: defaults.source)")
    parser.add_argument("--list", action="store_true", help="List configured sources and exit")
    parser.add_argument("--lookup", metavar="ID", help="Print the translations for one identifier")
    parser.add_argument("--dump", action="store_true", help="Print the full translation map as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, yaml.YAMLError) as e:
        print(f"Could not read config: {e}", file=sys.stderr)
        return 2

    level = "DEBUG" if args.verbose else (
        os.environ.get("LOG_LEVEL") or (config.get("defaults") or {}).get("log_level") or "WARNING"
    )
    logging.basicConfig(level=level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        catalog = SourceCatalog(config)
        if args.list:
            _print_json({"sources": catalog.list_sources(), "default": catalog.default_source})
            return 0
        adapter = catalog.get_or_create_adapter(args.source)
    except (UnknownSourceError, InvalidInputFormat, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.lookup is not None:
        bundle = adapter.get_translation(args.lookup)
        if bundle is None:
            print(f"No translations for '{args.lookup}'", file=sys.stderr)
            return 1
        _print_json({args.lookup: dict(bundle)})
        return 0

    if args.dump:
        _print_json({k: dict(v) for k, v in adapter.get_translation_map().items()})
        return 0

    summary = {
        "source": adapter.get_source_identifier(),
        "translations": adapter.get_translation_count(),
    }
    skipped = getattr(adapter, "get_skipped_line_counts", None)
    if skipped is not None:
        summary["skipped_lines"] = skipped()
    _print_json(summary)
    return 0


if __name__ == "__main__":
    sys.exit(main())
