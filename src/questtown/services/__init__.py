"""Service layer exports."""

from .errors import (
    GameError,
    InvalidLocationError,
    ItemNotOwnedError,
    NoActiveQuestError,
    SaveLoadError,
)
from .game_store import GameStore, LoadResult, PurchaseResult
from .save_service import SaveService
from .save_slot_service import SaveSlotService, SaveSlotView
from .shop_service import ShopEntryView, ShopService, ShopView

__all__ = [
    "GameError",
    "GameStore",
    "InvalidLocationError",
    "ItemNotOwnedError",
    "LoadResult",
    "NoActiveQuestError",
    "PurchaseResult",
    "SaveLoadError",
    "SaveService",
    "SaveSlotService",
    "SaveSlotView",
    "ShopEntryView",
    "ShopService",
    "ShopView",
]
