"""Cosmetic inventory and avatar slot helpers."""
from __future__ import annotations

from typing import Dict, Mapping, Tuple

Avatar = Dict[str, str]
Inventory = Dict[str, Tuple[str, ...]]

# Avatar slots are singular, the inventory lists they equip from are not always.
AVATAR_INVENTORY_SLOTS: Dict[str, str] = {"shirt": "shirts", "hair": "hair"}


def default_avatar() -> Avatar:
    return {"shirt": "red", "hair": "black"}


def default_inventory() -> Inventory:
    return {"shirts": ("red",), "hair": ("black",)}


def inventory_slot_for(avatar_slot: str) -> str:
    """Return the inventory list that backs an avatar slot."""
    return AVATAR_INVENTORY_SLOTS.get(avatar_slot, avatar_slot)


def owns(inventory: Mapping[str, Tuple[str, ...]], slot: str, item_id: str) -> bool:
    """Return True when item_id is in the inventory list for slot."""
    return item_id in inventory.get(slot, ())


def with_item(inventory: Mapping[str, Tuple[str, ...]], slot: str, item_id: str) -> Inventory:
    """Return a copy of inventory with item_id appended to slot (no duplicates)."""
    updated = dict(inventory)
    current = updated.get(slot, ())
    if item_id not in current:
        updated[slot] = current + (item_id,)
    return updated
