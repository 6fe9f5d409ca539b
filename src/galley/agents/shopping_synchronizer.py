"""Shopping list synchronizer agent."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Optional, Union

from pydantic import ValidationError

from galley import metrics
from galley.agents.base import Agent
from galley.models.grocery import (
    KITCHEN_EQUIPMENT_CATEGORY,
    SHOPPING_LIST_TITLE,
    GroceryItem,
    GroceryList,
    ShoppingSyncResult,
)
from galley.models.recommendation import RecommendationCandidate

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = "medium"
DEFAULT_DESCRIPTION = "Recommended kitchen equipment"

RawList = Union[GroceryList, Mapping]


class ShoppingListSynchronizer(
    Agent[tuple[RecommendationCandidate, object, Optional[int]], ShoppingSyncResult]
):
    """
    Find or create the user's shopping list and append a recommended item once.

    The first list titled "Shopping" wins, then the first list with an items array.
    Selection and the duplicate check (case-insensitive name, "Kitchen Equipment"
    category) look at the lists as given, so an unreadable item never hides a list.
    A duplicate yields the input list unchanged. No storage is touched: callers
    persist ``added`` and ``created`` results.
    """

    def run(
        self, payload: tuple[RecommendationCandidate, object, Optional[int]]
    ) -> ShoppingSyncResult:
        recommendation, lists, user_id = payload
        rec = RecommendationCandidate.model_validate(recommendation)
        target = self._select_target(self._eligible_lists(lists))

        if target is None:
            created = GroceryList(
                user_id=user_id,
                title=SHOPPING_LIST_TITLE,
                items=[self._build_item(rec)],
                completed=False,
            )
            return self._result("created", created, rec)

        grocery_list = self._to_model(target)
        if self._contains(self._items_of(target), rec.name):
            return self._result("duplicate", grocery_list, rec)

        updated = grocery_list.model_copy(
            update={"items": [*grocery_list.items, self._build_item(rec)]}
        )
        return self._result("added", updated, rec)

    @staticmethod
    def _eligible_lists(lists: object) -> list[RawList]:
        if not isinstance(lists, (list, tuple)):
            return []
        eligible: list[RawList] = []
        for entry in lists:
            if isinstance(entry, GroceryList):
                eligible.append(entry)
                continue
            if not isinstance(entry, Mapping) or not isinstance(entry.get("items"), list):
                continue
            try:
                GroceryList.model_validate({**entry, "items": []})
            except ValidationError as exc:
                logger.warning(
                    "Skipping unaddressable grocery list id=%s errors=%s",
                    entry.get("id"),
                    exc.errors(include_url=False),
                )
                continue
            eligible.append(entry)
        return eligible

    @staticmethod
    def _title_of(entry: RawList) -> object:
        if isinstance(entry, GroceryList):
            return entry.title
        return entry.get("title")

    @staticmethod
    def _items_of(entry: RawList) -> list[object]:
        if isinstance(entry, GroceryList):
            return list(entry.items)
        return list(entry["items"])

    @classmethod
    def _select_target(cls, lists: list[RawList]) -> Optional[RawList]:
        for entry in lists:
            if cls._title_of(entry) == SHOPPING_LIST_TITLE:
                return entry
        return lists[0] if lists else None

    @staticmethod
    def _contains(items: list[object], name: str) -> bool:
        needle = name.lower()
        for item in items:
            if isinstance(item, GroceryItem):
                item_name, category = item.name, item.category
            elif isinstance(item, Mapping):
                item_name, category = item.get("name"), item.get("category")
            else:
                continue
            if (
                isinstance(item_name, str)
                and item_name.lower() == needle
                and category == KITCHEN_EQUIPMENT_CATEGORY
            ):
                return True
        return False

    @classmethod
    def _to_model(cls, entry: RawList) -> GroceryList:
        if isinstance(entry, GroceryList):
            return entry
        items: list[GroceryItem] = []
        for index, raw in enumerate(cls._items_of(entry)):
            try:
                items.append(GroceryItem.model_validate(raw))
            except ValidationError as exc:
                logger.warning(
                    "Unreadable item on grocery list id=%s index=%d errors=%s",
                    entry.get("id"),
                    index,
                    exc.errors(include_url=False),
                )
        return GroceryList.model_validate({**entry, "items": items})

    @staticmethod
    def _build_item(rec: RecommendationCandidate) -> GroceryItem:
        return GroceryItem(
            name=rec.name,
            quantity="1",
            completed=False,
            category=KITCHEN_EQUIPMENT_CATEGORY,
            estimated_price=rec.estimated_price or "",
            priority=rec.priority or DEFAULT_PRIORITY,
            description=rec.reason or DEFAULT_DESCRIPTION,
        )

    @staticmethod
    def _result(
        action: str, grocery_list: GroceryList, rec: RecommendationCandidate
    ) -> ShoppingSyncResult:
        metrics.SHOPPING_SYNC.labels(action=action).inc()
        logger.info(
            "ShoppingListSynchronizer action=%s item=%s list_id=%s",
            action,
            rec.name,
            grocery_list.id,
        )
        return ShoppingSyncResult(action=action, list=grocery_list)


def add_recommendation_to_shopping_list(
    rec: RecommendationCandidate | Mapping[str, object],
    lists: object,
    user_id: Optional[int],
) -> ShoppingSyncResult:
    """Add ``rec`` to the user's shopping list unless it is already there."""

    return ShoppingListSynchronizer().run((rec, lists, user_id))


__all__ = ["ShoppingListSynchronizer", "add_recommendation_to_shopping_list"]
