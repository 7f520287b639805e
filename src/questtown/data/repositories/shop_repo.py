"""Shop catalog repository."""
from __future__ import annotations

from typing import Dict

from questtown.data.errors import DataValidationError
from questtown.data.repositories.base import RepositoryBase
from questtown.domain.defs import ShopDef, ShopItemDef

_DEFAULT_UNLOCK_COMPLETED_TASKS = 5


class ShopRepository(RepositoryBase[ShopItemDef]):
    """Loads and validates the shop catalog and its unlock threshold."""

    def __init__(self, base_path=None) -> None:
        super().__init__("shop.json", base_path)
        self._unlock_completed_tasks = _DEFAULT_UNLOCK_COMPLETED_TASKS

    def shop(self) -> ShopDef:
        """Return the whole catalog in file order."""
        self._ensure_loaded()
        assert self._definitions is not None
        return ShopDef(
            unlock_completed_tasks=self._unlock_completed_tasks,
            items=tuple(self._definitions.values()),
        )

    def _build(self, raw: dict[str, object]) -> Dict[str, ShopItemDef]:
        container = self._require_mapping(raw, "shop.json")
        unlock = self._require_int(
            container.get("unlock_completed_tasks", _DEFAULT_UNLOCK_COMPLETED_TASKS),
            "shop.json.unlock_completed_tasks",
        )
        if unlock < 0:
            raise DataValidationError("shop.json.unlock_completed_tasks must be >= 0.")
        self._unlock_completed_tasks = unlock
        raw_items = self._require_mapping(container.get("items"), "shop.json.items")
        definitions: Dict[str, ShopItemDef] = {}
        seen: set[tuple[str, str]] = set()
        for shop_item_id, payload in raw_items.items():
            mapping = self._require_mapping(payload, f"shop item '{shop_item_id}'")
            name = self._require_str(mapping.get("name"), f"shop item '{shop_item_id}' name")
            slot = self._require_str(mapping.get("slot"), f"shop item '{shop_item_id}' slot")
            item_id = self._require_str(mapping.get("item_id"), f"shop item '{shop_item_id}' item_id")
            cost = self._require_int(mapping.get("cost"), f"shop item '{shop_item_id}' cost")
            if cost < 0:
                raise DataValidationError(f"shop item '{shop_item_id}' cost must be >= 0.")
            if (slot, item_id) in seen:
                raise DataValidationError(
                    f"shop item '{shop_item_id}' duplicates '{item_id}' in slot '{slot}'."
                )
            seen.add((slot, item_id))
            definitions[shop_item_id] = ShopItemDef(
                id=shop_item_id,
                name=name,
                slot=slot,
                item_id=item_id,
                cost=cost,
            )
        return definitions
