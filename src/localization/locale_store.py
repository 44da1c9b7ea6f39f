from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class LocalizedText(str):
    """Localized string value that remembers which catalog entry it came from.

    Behaves like a regular ``str``; ``format`` keeps the metadata so formatted
    messages can still be traced back to their key.
    """

    key: Optional[str]
    locale: Optional[str]

    def __new__(cls, value: str, *, key: Optional[str] = None, locale: Optional[str] = None):
        obj = super().__new__(cls, value)
        obj.key = key
        obj.locale = locale
        return obj

    def format(self, *args: Any, **kwargs: Any) -> "LocalizedText":  # type: ignore[override]
        return LocalizedText(super().format(*args, **kwargs), key=self.key, locale=self.locale)


class LocaleStore:
    """Loads and serves localized strings from JSON files, one file per locale."""

    def __init__(self, locale_directory: Path, default_locale: str = "en"):
        self.locale_directory = locale_directory
        self.default_locale = default_locale
        self._translations: Dict[str, Dict[str, LocalizedText]] = {}
        self._load_locale(default_locale)

    def available_locales(self) -> List[str]:
        return sorted(path.stem for path in self.locale_directory.glob("*.json"))

    def has_key(self, key: str) -> bool:
        return key in self._translations.get(self.default_locale, {})

    def resolve_locale(self, language_code: Optional[str]) -> str:
        """Map a Telegram language code such as ``ko`` or ``en-GB`` to a loaded catalog."""

        if not language_code:
            return self.default_locale

        candidates = [language_code, language_code.split("-")[0]]
        for candidate in candidates:
            if self._get_catalog(candidate.lower()) is not None:
                return candidate.lower()
        return self.default_locale

    def translate(self, key: str, *, locale: Optional[str] = None, **kwargs: Any) -> LocalizedText:
        """Return a translated string, falling back to the default locale."""

        target_locale = locale or self.default_locale
        catalog = self._get_catalog(target_locale) or {}
        entry = catalog.get(key)

        if entry is None and target_locale != self.default_locale:
            entry = self._translations.get(self.default_locale, {}).get(key)

        if entry is None:
            raise KeyError(f"Translation key '{key}' not found for locale '{target_locale}'")

        if kwargs:
            return entry.format(**kwargs)

        return entry

    def _get_catalog(self, locale: str) -> Optional[Dict[str, LocalizedText]]:
        if locale not in self._translations:
            self._load_locale(locale)
        return self._translations.get(locale)

    def _load_locale(self, locale: str) -> None:
        locale_file = self.locale_directory / f"{locale}.json"
        if not locale_file.exists():
            logger.debug("Locale file for '%s' not found at %s", locale, locale_file)
            return

        with locale_file.open("r", encoding="utf-8") as file:
            raw_data = json.load(file)

        self._translations[locale] = {
            key: LocalizedText(str(value), key=key, locale=locale)
            for key, value in raw_data.items()
        }
        logger.info("Loaded %d messages for locale '%s'", len(raw_data), locale)


class LocaleKeyAccessor:
    """Provides attribute access to translation keys, e.g. ``Key.greeting_prompt_name``."""

    def __init__(self, store: LocaleStore, locale: Optional[str] = None):
        self._store = store
        self._locale = locale

    def for_locale(self, locale: Optional[str]) -> "LocaleKeyAccessor":
        return LocaleKeyAccessor(self._store, locale=locale)

    def for_language_code(self, language_code: Optional[str]) -> "LocaleKeyAccessor":
        return self.for_locale(self._store.resolve_locale(language_code))

    def __getattr__(self, item: str) -> LocalizedText:
        if item.startswith("_"):
            raise AttributeError(item)
        if not self._store.has_key(item):
            raise AttributeError(f"Unknown translation key '{item}'")
        return self._store.translate(item, locale=self._locale)
