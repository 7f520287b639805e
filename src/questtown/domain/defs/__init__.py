"""Domain definition exports."""

from .location_def import LocationDef, RewardDef
from .shop_def import ShopDef, ShopItemDef

__all__ = [
    "LocationDef",
    "RewardDef",
    "ShopDef",
    "ShopItemDef",
]
