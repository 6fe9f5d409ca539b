"""Kitchen equipment persistence helpers."""
# mypy: ignore-errors

from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy import select

from galley.models.equipment import Equipment, EquipmentCondition

from .models import EquipmentORM
from .repository import session_scope

_UNSET = object()
_FIELDS = (
    "name",
    "category",
    "condition",
    "purchase_date",
    "last_maintenance_date",
    "maintenance_interval",
    "maintenance_notes",
    "purchase_price",
)


def _to_model(row: EquipmentORM) -> Equipment:
    return Equipment.model_validate(
        {
            "id": row.id,
            "user_id": row.user_id,
            "name": row.name,
            "category": row.category,
            "condition": row.condition,
            "purchase_date": row.purchase_date,
            "last_maintenance_date": row.last_maintenance_date,
            "maintenance_interval": row.maintenance_interval,
            "maintenance_notes": row.maintenance_notes,
            "purchase_price": row.purchase_price,
        }
    )


def _to_column(field: str, value: object) -> object:
    if value is None:
        return None
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, EquipmentCondition):
        return value.value
    if field == "name":
        return str(value).strip()
    return value


def get_equipment(user_id: int) -> List[Equipment]:
    """Return the user's equipment ordered by id."""

    with session_scope() as session:
        rows = (
            session.execute(
                select(EquipmentORM)
                .where(EquipmentORM.user_id == user_id)
                .order_by(EquipmentORM.id.asc())
            )
            .scalars()
            .all()
        )
        return [_to_model(row) for row in rows]


def get_equipment_item(equipment_id: int) -> Optional[Equipment]:
    with session_scope() as session:
        row = session.get(EquipmentORM, equipment_id)
        if row is None:
            return None
        return _to_model(row)


def create_equipment(
    *,
    user_id: int,
    name: str,
    category: str,
    condition: EquipmentCondition | str = EquipmentCondition.GOOD,
    purchase_date: Optional[date] = None,
    last_maintenance_date: Optional[date] = None,
    maintenance_interval: Optional[int] = None,
    maintenance_notes: Optional[str] = None,
    purchase_price: Optional[int] = None,
) -> Equipment:
    values = {
        "name": name,
        "category": category,
        "condition": EquipmentCondition(condition),
        "purchase_date": purchase_date,
        "last_maintenance_date": last_maintenance_date,
        "maintenance_interval": maintenance_interval,
        "maintenance_notes": maintenance_notes,
        "purchase_price": purchase_price,
    }
    with session_scope() as session:
        row = EquipmentORM(
            user_id=user_id,
            **{field: _to_column(field, value) for field, value in values.items()},
        )
        session.add(row)
        session.flush()
        return _to_model(row)


def update_equipment(
    equipment_id: int,
    *,
    name: str | object = _UNSET,
    category: str | object = _UNSET,
    condition: EquipmentCondition | str | object = _UNSET,
    purchase_date: date | None | object = _UNSET,
    last_maintenance_date: date | None | object = _UNSET,
    maintenance_interval: int | None | object = _UNSET,
    maintenance_notes: str | None | object = _UNSET,
    purchase_price: int | None | object = _UNSET,
) -> Equipment:
    changes = {
        "name": name,
        "category": category,
        "condition": condition,
        "purchase_date": purchase_date,
        "last_maintenance_date": last_maintenance_date,
        "maintenance_interval": maintenance_interval,
        "maintenance_notes": maintenance_notes,
        "purchase_price": purchase_price,
    }
    with session_scope() as session:
        row = session.get(EquipmentORM, equipment_id)
        if row is None:
            raise ValueError(f"Equipment {equipment_id} not found")

        for field in _FIELDS:
            value = changes[field]
            if value is _UNSET:
                continue
            if field == "condition":
                value = EquipmentCondition(value)
            setattr(row, field, _to_column(field, value))

        session.flush()
        return _to_model(row)


def delete_equipment(equipment_id: int) -> None:
    with session_scope() as session:
        row = session.get(EquipmentORM, equipment_id)
        if row is None:
            raise ValueError(f"Equipment {equipment_id} not found")
        session.delete(row)


__all__ = [
    "get_equipment",
    "get_equipment_item",
    "create_equipment",
    "update_equipment",
    "delete_equipment",
]
