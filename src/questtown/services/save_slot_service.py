"""Summaries of the fixed save slots offered by the save menu."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from questtown.domain.state import GameRecord

SAVE_SLOT_IDS: tuple[str, ...] = ("saveSlot1", "saveSlot2", "saveSlot3")


@dataclass(slots=True)
class SaveSlotView:
    """Describes the contents of a save slot for menu display."""

    slot_id: str
    exists: bool
    level: int | None = None
    xp: int | None = None
    last_save: str | None = None


class SaveSlotService:
    def __init__(self, slot_ids: Sequence[str] = SAVE_SLOT_IDS) -> None:
        self._slot_ids = tuple(slot_ids)

    @property
    def slot_ids(self) -> tuple[str, ...]:
        return self._slot_ids

    def list_slots(self, record: GameRecord) -> List[SaveSlotView]:
        """Return a view for each configured slot, occupied or not."""
        slots: List[SaveSlotView] = []
        for slot_id in self._slot_ids:
            snapshot = record.save_slots.get(slot_id)
            if snapshot is None:
                slots.append(SaveSlotView(slot_id=slot_id, exists=False))
                continue
            slots.append(
                SaveSlotView(
                    slot_id=slot_id,
                    exists=True,
                    level=snapshot.record.level,
                    xp=snapshot.record.xp,
                    last_save=snapshot.last_save,
                )
            )
        return slots
