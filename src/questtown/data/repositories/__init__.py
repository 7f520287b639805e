"""Repository exports."""

from .locations_repo import LocationsRepository
from .shop_repo import ShopRepository

__all__ = [
    "LocationsRepository",
    "ShopRepository",
]
