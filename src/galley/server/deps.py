"""Dependency definitions for the Galley API server."""

from __future__ import annotations

from typing import Callable, List, Optional

from fastapi import Depends, HTTPException, Query, Request, status

from galley.analysis import KitchenAnalysisService
from galley.config import Settings, get_settings
from galley.db.analysis_cache import DatabaseAnalysisCache
from galley.db.equipment import (
    create_equipment,
    delete_equipment,
    get_equipment,
    update_equipment,
)
from galley.db.grocery_lists import get_grocery_lists, save_grocery_list
from galley.llm.client import build_equipment_advisor
from galley.models.equipment import Equipment
from galley.models.grocery import GroceryList

EquipmentProvider = Callable[[int], List[Equipment]]
EquipmentCreator = Callable[[int, dict], Equipment]
EquipmentUpdater = Callable[[int, dict], Equipment]
EquipmentDeleter = Callable[[int], None]
GroceryListProvider = Callable[[int], List[GroceryList]]


def get_equipment_provider() -> EquipmentProvider:
    """Return the current equipment provider implementation."""

    return get_equipment


def get_equipment_creator() -> EquipmentCreator:
    return lambda user_id, payload: create_equipment(user_id=user_id, **payload)


def get_equipment_updater() -> EquipmentUpdater:
    return lambda equipment_id, payload: update_equipment(equipment_id, **payload)


def get_equipment_deleter() -> EquipmentDeleter:
    return delete_equipment


def get_grocery_list_provider() -> GroceryListProvider:
    return get_grocery_lists


def get_analysis_service() -> KitchenAnalysisService:
    """Build the analysis service over the SQLite store and configured advisor."""

    return KitchenAnalysisService(
        advisor=build_equipment_advisor(),
        cache=DatabaseAnalysisCache(),
        equipment_provider=get_equipment,
        equipment_updater=lambda equipment_id, payload: update_equipment(equipment_id, **payload),
        grocery_list_provider=get_grocery_lists,
        grocery_list_saver=save_grocery_list,
    )


def get_user_id(
    user_id: Optional[int] = Query(default=None, ge=1, alias="userId"),
) -> int:
    """Resolve the acting user; defaults to the configured household user."""

    return user_id if user_id is not None else get_settings().default_user_id


def require_api_token(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> None:
    """Ensure requests carry the configured API token when required."""

    token = settings.api_token
    if not token:
        return

    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.split("Bearer ")[-1].strip() == token:
        return

    if request.headers.get("X-API-Key") == token:
        return

    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
