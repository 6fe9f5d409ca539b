"""In-memory equipment registry."""

from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, Iterator, Optional

from galley.models.equipment import Equipment


class EquipmentRegistry:
    """A user's equipment set keyed by id, preserving insertion order."""

    def __init__(self, equipment: Iterable[Equipment] = ()) -> None:
        self._items: Dict[int, Equipment] = {}
        for item in equipment:
            if item.id in self._items:
                raise ValueError(f"Duplicate equipment id {item.id}")
            self._items[item.id] = item

    def __iter__(self) -> Iterator[Equipment]:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, equipment_id: object) -> bool:
        return equipment_id in self._items

    def get(self, equipment_id: int) -> Optional[Equipment]:
        return self._items.get(equipment_id)

    def names_by_id(self) -> Dict[int, str]:
        return {equipment_id: item.name for equipment_id, item in self._items.items()}

    def next_id(self) -> int:
        return max(self._items, default=0) + 1

    def add(self, **fields: object) -> Equipment:
        """Register a new item under the next free id."""

        fields.pop("id", None)
        item = Equipment.model_validate({**fields, "id": self.next_id()})
        self._items[item.id] = item
        return item

    def update(self, equipment_id: int, **changes: object) -> Equipment:
        current = self._require(equipment_id)
        changes.pop("id", None)
        updated = Equipment.model_validate({**current.model_dump(), **changes})
        self._items[equipment_id] = updated
        return updated

    def remove(self, equipment_id: int) -> Equipment:
        self._require(equipment_id)
        return self._items.pop(equipment_id)

    def mark_maintained(self, equipment_id: int, when: Optional[date] = None) -> Equipment:
        """Record that maintenance was performed on ``when`` (default today)."""

        return self.update(equipment_id, last_maintenance_date=when or date.today())

    def _require(self, equipment_id: int) -> Equipment:
        item = self._items.get(equipment_id)
        if item is None:
            raise ValueError(f"Equipment {equipment_id} not found")
        return item


__all__ = ["EquipmentRegistry"]
