"""Transient quest state."""
from __future__ import annotations

from dataclasses import dataclass

from questtown.domain.defs import RewardDef


@dataclass(slots=True, frozen=True)
class Quest:
    """The single quest currently offered to the player."""

    location_id: str
    text: str
    rewards: RewardDef
