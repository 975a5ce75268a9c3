"""Saved-articles list persisted in a local key-value store."""

import dataclasses
import json
import logging
from typing import Any

from newssphere.client.kvstore import KeyValueStore
from newssphere.data import Article, SavedArticle

logger = logging.getLogger(__name__)

STORAGE_SAVED = "newssphere_saved"


class SavedArticles:
    """Ordered, URL-unique list of saved articles.

    Stored as a JSON array under ``STORAGE_SAVED``. Content that does not
    parse, or is not an array, reads as an empty list.

    Args:
        store: Durable key-value store.
        key: Storage key for the JSON array.
    """

    def __init__(self, store: KeyValueStore, *, key: str = STORAGE_SAVED) -> None:
        self._store = store
        self._key = key

    def get_all(self) -> list[SavedArticle]:
        return [record for record in (_from_raw(item) for item in self._load()) if record]

    def saved_urls(self) -> set[str]:
        return {record.url for record in self.get_all()}

    def is_saved(self, url: str) -> bool:
        return url in self.saved_urls()

    def save(self, article: Article | SavedArticle) -> bool:
        """Append ``article`` unless its URL is already saved.

        Returns:
            True if the list changed.
        """
        record = article if isinstance(article, SavedArticle) else SavedArticle.from_article(article)
        if not record.url:
            return False
        items = self._load()
        if any(_url_of(item) == record.url for item in items):
            return False
        items.append(dataclasses.asdict(record))
        self._write(items)
        return True

    def remove(self, url: str) -> bool:
        """Drop every entry for ``url``.

        Returns:
            True if the list changed.
        """
        items = self._load()
        kept = [item for item in items if _url_of(item) != url]
        if len(kept) == len(items):
            return False
        self._write(kept)
        return True

    def toggle(self, article: Article) -> bool:
        """Save or unsave ``article``.

        Returns:
            True if the article is saved afterwards.
        """
        if self.is_saved(article.url):
            self.remove(article.url)
            return False
        self.save(article)
        return True

    def _load(self) -> list[Any]:
        raw = self._store.get(self._key)
        if not raw:
            return []
        try:
            items = json.loads(raw)
        except ValueError:
            logger.warning("Saved articles under %r are not valid JSON; treating as empty", self._key)
            return []
        return items if isinstance(items, list) else []

    def _write(self, items: list[Any]) -> None:
        self._store.set(self._key, json.dumps(items))


def _url_of(item: Any) -> str | None:
    if isinstance(item, dict):
        url = item.get("url")
        return url if isinstance(url, str) else None
    return None


def _from_raw(item: Any) -> SavedArticle | None:
    url = _url_of(item)
    if not url:
        return None
    return SavedArticle(
        url=url,
        title=str(item.get("title") or ""),
        description=str(item.get("description") or ""),
        image_url=str(item.get("image_url") or ""),
        source_name=str(item.get("source_name") or "Unknown"),
        published_at=str(item.get("published_at") or ""),
    )
