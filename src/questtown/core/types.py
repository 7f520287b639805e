"""Shared type aliases for the core and presentation layers."""
from typing import Literal

Screen = Literal["home", "town_map", "gym", "library", "shop", "customize", "save_game"]

__all__ = ["Screen"]
