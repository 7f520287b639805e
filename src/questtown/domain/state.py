"""Persisted game record and save snapshots."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict

from questtown.domain.inventory import Avatar, Inventory, default_avatar, default_inventory


@dataclass(slots=True, frozen=True)
class GameRecord:
    """The single persisted record of player progress.

    Instances are never mutated; operations build an updated copy with
    :func:`dataclasses.replace` and fresh containers.
    """

    xp: int = 0
    coins: int = 0
    completed_tasks: int = 0
    level: int = 1
    avatar: Avatar = field(default_factory=default_avatar)
    inventory: Inventory = field(default_factory=default_inventory)
    save_slots: Dict[str, "SaveSnapshot"] = field(default_factory=dict)

    def copy(self) -> "GameRecord":
        """Return a detached copy with its own top-level containers."""
        return replace(
            self,
            avatar=dict(self.avatar),
            inventory=dict(self.inventory),
            save_slots=dict(self.save_slots),
        )


@dataclass(slots=True, frozen=True)
class SaveSnapshot:
    """A frozen copy of the record taken when the player saved."""

    record: GameRecord
    last_save: str


def default_record() -> GameRecord:
    """Return the record a brand-new player starts with."""
    return GameRecord()
