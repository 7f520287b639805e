"""Shop views and purchases for the cosmetic item catalog."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from questtown.data.repositories import ShopRepository
from questtown.domain.defs import ShopDef, ShopItemDef
from questtown.domain.inventory import owns
from questtown.domain.state import GameRecord
from questtown.services.game_store import GameStore, PurchaseResult


@dataclass(slots=True)
class ShopEntryView:
    shop_item_id: str
    name: str
    slot: str
    item_id: str
    cost: int
    owned: bool
    can_buy: bool


@dataclass(slots=True)
class ShopView:
    unlocked: bool
    completed_tasks: int
    unlock_completed_tasks: int
    coins: int
    entries: List[ShopEntryView] = field(default_factory=list)


class ShopService:
    """Gates the catalog behind quest progress and routes purchases to the store."""

    def __init__(self, *, shop_repo: ShopRepository, store: GameStore) -> None:
        self._shop_repo = shop_repo
        self._store = store

    def is_unlocked(self, record: GameRecord) -> bool:
        return record.completed_tasks >= self._shop().unlock_completed_tasks

    def build_shop_view(self, record: GameRecord) -> ShopView:
        shop = self._shop()
        unlocked = self.is_unlocked(record)
        entries: List[ShopEntryView] = []
        if unlocked:
            for item in shop.items:
                owned = owns(record.inventory, item.slot, item.item_id)
                entries.append(
                    ShopEntryView(
                        shop_item_id=item.id,
                        name=item.name,
                        slot=item.slot,
                        item_id=item.item_id,
                        cost=item.cost,
                        owned=owned,
                        can_buy=record.coins >= item.cost and not owned,
                    )
                )
        return ShopView(
            unlocked=unlocked,
            completed_tasks=record.completed_tasks,
            unlock_completed_tasks=shop.unlock_completed_tasks,
            coins=record.coins,
            entries=entries,
        )

    def buy(self, shop_item_id: str) -> PurchaseResult:
        record = self._store.record
        if not self.is_unlocked(record):
            return PurchaseResult(record=record, purchased=False, reason="locked")
        item = self._find_item(shop_item_id)
        if item is None:
            return PurchaseResult(record=record, purchased=False, reason="unknown_item")
        return self._store.purchase_item(item.slot, item.item_id, item.cost)

    def _shop(self) -> ShopDef:
        return self._shop_repo.shop()

    def _find_item(self, shop_item_id: str) -> ShopItemDef | None:
        try:
            return self._shop_repo.get(shop_item_id)
        except KeyError:
            return None
