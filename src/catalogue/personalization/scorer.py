"""Relevance scoring for product listings and recommendation surfaces.

Scores only mean something relative to each other. A small random jitter is
added on purpose so that equally relevant products do not always appear in
the same order; pass ``jitter=lambda: 0.0`` to make ordering deterministic.
"""

import random
from collections.abc import Callable, Iterable, Mapping
from typing import Any

import structlog

from catalogue.personalization.preferences import PreferenceTracker, UserPreferences

logger = structlog.get_logger(__name__)

CATEGORY_BONUS = 10.0
SEARCH_TERM_BONUS = 5.0
SALE_BONUS = 3.0
MAX_JITTER = 2.0


def _default_jitter() -> float:
    return random.uniform(0, MAX_JITTER)


# Raw catalogue API payloads use camelCase keys
_MAPPING_ALIASES = {"category_id": "categoryId", "is_on_sale": "isOnSale"}


def _read(product: Any, name: str, default=None):
    if isinstance(product, Mapping):
        if name in product:
            return product[name]
        return product.get(_MAPPING_ALIASES.get(name, name), default)
    return getattr(product, name, default)


class PersonalizationScorer:
    def __init__(self, tracker: PreferenceTracker, jitter: Callable[[], float] | None = None):
        self._tracker = tracker
        self._jitter = jitter or _default_jitter

    def score(self, product: Any, prefs: UserPreferences | None = None) -> float:
        """Relevance of ``product`` for the current shopper.

        ``product`` may be a ``CatalogueProduct`` or a mapping with the same
        keys in snake_case or the catalogue API's camelCase.
        """
        if prefs is None:
            prefs = self._tracker.load()
        score = 0.0

        category_id = _read(product, "category_id")
        if category_id and category_id in prefs.viewed_categories:
            score += CATEGORY_BONUS

        text = f"{_read(product, 'name') or ''} {_read(product, 'description') or ''}".lower()
        for term in prefs.search_terms:
            if term in text:
                score += SEARCH_TERM_BONUS

        if _read(product, "is_on_sale", False):
            score += SALE_BONUS

        return score + self._jitter()

    def sort_by_relevance(self, products: Iterable[Any]) -> list:
        prefs = self._tracker.load()
        scored = [(self.score(p, prefs), p) for p in products]
        scored.sort(key=lambda pair: pair[0], reverse=True)
        return [p for _, p in scored]

    def recommend(
        self,
        products: Iterable[Any],
        current_product_id: int | None = None,
        category_id: int | None = None,
        max_items: int = 4,
    ) -> list:
        """Products to show next to ``current_product_id``, best first."""
        candidates = [
            p
            for p in products
            if not (current_product_id is not None and _read(p, "id") == current_product_id)
            and not (category_id is not None and _read(p, "category_id") != category_id)
        ]
        recommendations = self.sort_by_relevance(candidates)[: max(0, max_items)]
        logger.debug(
            "Built recommendations",
            current_product_id=current_product_id,
            category_id=category_id,
            candidates=len(candidates),
            returned=len(recommendations),
        )
        return recommendations
