"""Grocery list models."""

from __future__ import annotations

from typing import Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

KITCHEN_EQUIPMENT_CATEGORY = "Kitchen Equipment"
SHOPPING_LIST_TITLE = "Shopping"


def new_item_id() -> str:
    return uuid4().hex


class GroceryItem(BaseModel):
    """Single entry on a grocery list."""

    id: str = Field(default_factory=new_item_id)
    name: str
    quantity: str = Field(default="1")
    completed: bool = Field(default=False)
    category: Optional[str] = Field(default=None)
    estimated_price: Optional[str] = Field(default=None, alias="estimatedPrice")
    priority: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default=None)

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("id", "quantity", mode="before")
    @classmethod
    def _stringify_numbers(cls, value: object) -> object:
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            return str(int(value)) if value.is_integer() else str(value)
        return value


class GroceryList(BaseModel):
    """Grocery list owned by a user. ``id`` is None until persisted; ``title`` may be unset."""

    id: Optional[int] = Field(default=None)
    user_id: Optional[int] = Field(default=None, alias="userId")
    title: Optional[str] = Field(default=None)
    items: list[GroceryItem] = Field(default_factory=list)
    completed: bool = Field(default=False)

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ShoppingSyncResult(BaseModel):
    """Outcome of adding a recommendation to the user's shopping list."""

    action: Literal["added", "created", "duplicate"]
    list: GroceryList

    model_config = ConfigDict(frozen=True)


__all__ = [
    "GroceryItem",
    "GroceryList",
    "KITCHEN_EQUIPMENT_CATEGORY",
    "SHOPPING_LIST_TITLE",
    "ShoppingSyncResult",
    "new_item_id",
]
