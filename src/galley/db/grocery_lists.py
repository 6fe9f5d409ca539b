"""Grocery list persistence helpers."""
# mypy: ignore-errors

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select

from galley.models.grocery import GroceryList

from .models import GroceryListORM
from .repository import session_scope


def _to_model(row: GroceryListORM) -> GroceryList:
    return GroceryList.model_validate(
        {
            "id": row.id,
            "user_id": row.user_id,
            "title": row.title,
            "items": list(row.items or []),
            "completed": row.completed,
        }
    )


def _items_payload(grocery_list: GroceryList) -> list[dict]:
    return [item.model_dump(mode="json", by_alias=True) for item in grocery_list.items]


def get_grocery_lists(user_id: int) -> List[GroceryList]:
    """Return the user's grocery lists in creation order."""

    with session_scope() as session:
        rows = (
            session.execute(
                select(GroceryListORM)
                .where(GroceryListORM.user_id == user_id)
                .order_by(GroceryListORM.id.asc())
            )
            .scalars()
            .all()
        )
        return [_to_model(row) for row in rows]


def get_grocery_list(list_id: int) -> Optional[GroceryList]:
    with session_scope() as session:
        row = session.get(GroceryListORM, list_id)
        if row is None:
            return None
        return _to_model(row)


def save_grocery_list(grocery_list: GroceryList) -> GroceryList:
    """Insert the list when it has no id, otherwise overwrite the stored row."""

    with session_scope() as session:
        if grocery_list.id is None:
            if grocery_list.user_id is None:
                raise ValueError("Grocery list requires a user_id")
            row = GroceryListORM(
                user_id=grocery_list.user_id,
                title=grocery_list.title,
                items=_items_payload(grocery_list),
                completed=grocery_list.completed,
            )
            session.add(row)
        else:
            row = session.get(GroceryListORM, grocery_list.id)
            if row is None:
                raise ValueError(f"Grocery list {grocery_list.id} not found")
            row.title = grocery_list.title
            row.items = _items_payload(grocery_list)
            row.completed = grocery_list.completed
        session.flush()
        return _to_model(row)


def delete_grocery_list(list_id: int) -> None:
    with session_scope() as session:
        row = session.get(GroceryListORM, list_id)
        if row is None:
            raise ValueError(f"Grocery list {list_id} not found")
        session.delete(row)


__all__ = [
    "get_grocery_lists",
    "get_grocery_list",
    "save_grocery_list",
    "delete_grocery_list",
]
