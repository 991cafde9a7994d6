"""
Message catalog for log lines and CLI text.

Catalog files are nested JSON objects flattened into dotted keys
("logs.db.schema_created"). Layers are applied in order, later layers
winning per key:

1. resources/i18n/*.json         shared log messages
2. resources/i18n/en/*.json      English CLI text
3. resources/i18n/{locale}/*.json  only when locale != "en"
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

__all__ = ["I18n", "get_language", "init_i18n", "t"]

logger = logging.getLogger("gamecatalog.i18n")

DEFAULT_LOCALE = "en"


def _flatten(data: dict[str, Any], prefix: str = "") -> dict[str, str]:
    """Turn nested catalog objects into {"a.b.c": "text"}; non-text leaves are dropped."""
    flat: dict[str, str] = {}
    for key, value in data.items():
        path = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, f"{path}."))
        elif isinstance(value, str):
            flat[path] = value
    return flat


def _read_layer(directory: Path) -> dict[str, str]:
    """Read every ``*.json`` in a directory (sorted) into one flat mapping."""
    messages: dict[str, str] = {}
    if not directory.is_dir():
        return messages
    for file_path in sorted(directory.glob("*.json")):
        try:
            data = json.loads(file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Skipping message file %s: %s", file_path.name, e)
            continue
        if isinstance(data, dict):
            messages.update(_flatten(data))
    return messages


class I18n:
    """Flat message table for one locale, with English as the fallback."""

    def __init__(self, locale: str = DEFAULT_LOCALE, i18n_root: Path | None = None) -> None:
        """Load the catalog layers for ``locale``.

        Args:
            locale: Locale directory name under the catalog root.
            i18n_root: Override for the catalog directory (tests).
        """
        if i18n_root is None:
            from gamecatalog.utils.paths import get_resources_dir

            i18n_root = get_resources_dir() / "i18n"

        self.locale = locale
        self.messages = _read_layer(i18n_root)
        self.messages.update(_read_layer(i18n_root / DEFAULT_LOCALE))
        if locale != DEFAULT_LOCALE:
            self.messages.update(_read_layer(i18n_root / locale))

    def t(self, key: str, **kwargs: Any) -> str:
        """Look up ``key`` and format it with ``kwargs``.

        Unknown keys render as ``[key]``. If formatting fails the raw
        template is returned.
        """
        template = self.messages.get(key)
        if template is None:
            return f"[{key}]"
        if not kwargs:
            return template
        try:
            return template.format(**kwargs)
        except (KeyError, IndexError, ValueError):
            return template


_catalog: I18n | None = None


def init_i18n(locale: str = DEFAULT_LOCALE) -> I18n:
    """Load the global catalog for ``locale`` and return it."""
    global _catalog
    _catalog = I18n(locale)
    return _catalog


def _current() -> I18n:
    return _catalog if _catalog is not None else init_i18n()


def get_language() -> str:
    """Locale code of the global catalog."""
    return _current().locale


def t(key: str, **kwargs: Any) -> str:
    """Look up a message in the global catalog (see ``I18n.t``)."""
    return _current().t(key, **kwargs)
