"""Shop definition structures."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(slots=True, frozen=True)
class ShopItemDef:
    """A cosmetic item sold in the shop.

    ``slot`` names the inventory list the item lands in and ``item_id`` is the
    value stored there (and later equipped on the avatar).
    """

    id: str
    name: str
    slot: str
    item_id: str
    cost: int


@dataclass(slots=True, frozen=True)
class ShopDef:
    """The shop catalog and the progress needed to unlock it."""

    unlock_completed_tasks: int = 5
    items: Tuple[ShopItemDef, ...] = field(default_factory=tuple)
