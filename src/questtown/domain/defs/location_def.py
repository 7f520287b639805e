"""Location definition data structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(slots=True, frozen=True)
class RewardDef:
    """XP and coin payout for completing a quest."""

    xp: int
    coins: int


@dataclass(slots=True, frozen=True)
class LocationDef:
    """A quest-giving location with its fixed reward pair and quest pool."""

    id: str
    name: str
    rewards: RewardDef
    quests: Tuple[str, ...]
