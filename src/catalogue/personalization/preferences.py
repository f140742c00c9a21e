"""Shopper behaviour history used for personalization.

Recently viewed products and categories, and recent search terms, are kept in
client-local storage as one JSON document::

    {"viewedCategories": [3, 1], "viewedProducts": [12, 7],
     "searchTerms": ["hoodie"], "lastVisit": "2026-10-19T08:00:00Z"}

Each list holds at most ``MAX_TRACKED_ITEMS`` entries, most recent first. The
document expires a year after ``lastVisit``; every save refreshes it. Reading
and writing are best effort: storage problems are logged and treated as "no
history".
"""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from shared.errors import StorageError
from shared.storage import KeyValueStore

logger = structlog.get_logger(__name__)

PREFS_STORAGE_KEY = "strongwill_user_prefs"
MAX_TRACKED_ITEMS = 10
PREFS_TTL = timedelta(days=365)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _push_front(items: list, value) -> list:
    """Move ``value`` to the front, dropping duplicates and the overflow."""
    return [value, *(i for i in items if i != value)][:MAX_TRACKED_ITEMS]


class UserPreferences(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    viewed_categories: list[int] = Field(default_factory=list, alias="viewedCategories")
    viewed_products: list[int] = Field(default_factory=list, alias="viewedProducts")
    search_terms: list[str] = Field(default_factory=list, alias="searchTerms")
    last_visit: datetime = Field(default_factory=_utcnow, alias="lastVisit")

    @field_validator("viewed_categories", "viewed_products", "search_terms")
    @classmethod
    def _cap(cls, value: list) -> list:
        return value[:MAX_TRACKED_ITEMS]

    @field_validator("last_visit")
    @classmethod
    def _aware(cls, value: datetime) -> datetime:
        return value if value.tzinfo else value.replace(tzinfo=UTC)

    def is_expired(self, now: datetime) -> bool:
        return now - PREFS_TTL > self.last_visit

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class PreferenceTracker:
    """Reads and records the shopper's browsing history."""

    def __init__(self, storage: KeyValueStore, clock: Callable[[], datetime] | None = None):
        self._storage = storage
        self._clock = clock or _utcnow

    def _fresh(self) -> UserPreferences:
        return UserPreferences(last_visit=self._clock())

    def load(self) -> UserPreferences:
        try:
            raw = self._storage.get(PREFS_STORAGE_KEY)
        except StorageError as exc:
            logger.warning("Could not read user preferences", error=str(exc))
            return self._fresh()

        if not raw:
            return self._fresh()

        try:
            prefs = UserPreferences.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning("Failed to parse user preferences", error_count=exc.error_count())
            return self._fresh()

        if prefs.is_expired(self._clock()):
            logger.debug("User preferences expired", last_visit=prefs.last_visit.isoformat())
            return self._fresh()
        return prefs

    def save(self, prefs: UserPreferences) -> None:
        try:
            self._storage.set(PREFS_STORAGE_KEY, prefs.to_json())
        except StorageError as exc:
            logger.warning("Failed to save user preferences", error=str(exc))

    def clear(self) -> None:
        try:
            self._storage.remove(PREFS_STORAGE_KEY)
        except StorageError as exc:
            logger.warning("Failed to clear user preferences", error=str(exc))

    def track_product_view(self, product_id: int, category_id: int | None = None) -> UserPreferences:
        prefs = self.load()
        prefs.viewed_products = _push_front(prefs.viewed_products, product_id)
        if category_id:
            prefs.viewed_categories = _push_front(prefs.viewed_categories, category_id)
        prefs.last_visit = self._clock()
        self.save(prefs)
        return prefs

    def track_search(self, search_term: str) -> UserPreferences:
        prefs = self.load()
        term = (search_term or "").strip().lower()
        if not term:
            return prefs

        prefs.search_terms = _push_front(prefs.search_terms, term)
        prefs.last_visit = self._clock()
        self.save(prefs)
        return prefs
