"""Persisted theme and country preferences."""

from typing import Literal

from newssphere.client.kvstore import KeyValueStore

STORAGE_THEME = "newssphere_theme"
STORAGE_COUNTRY = "newssphere_country"

Theme = Literal["light", "dark"]


class Preferences:
    """Theme and country choices kept across sessions."""

    def __init__(self, store: KeyValueStore, *, default_country: str = "us") -> None:
        self._store = store
        self._default_country = default_country

    @property
    def country(self) -> str:
        return self._store.get(STORAGE_COUNTRY) or self._default_country

    @country.setter
    def country(self, value: str) -> None:
        self._store.set(STORAGE_COUNTRY, (value or self._default_country).lower())

    @property
    def theme(self) -> Theme:
        return "dark" if self._store.get(STORAGE_THEME) == "dark" else "light"

    @theme.setter
    def theme(self, value: Theme) -> None:
        self._store.set(STORAGE_THEME, "dark" if value == "dark" else "light")

    def toggle_theme(self) -> Theme:
        self.theme = "light" if self.theme == "dark" else "dark"
        return self.theme
