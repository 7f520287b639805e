"""The game state store: current record, current quest, and their transitions."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, Dict, Mapping

from questtown.core.rng import RNG
from questtown.data.errors import StorageError
from questtown.data.storage import BlobStore
from questtown.domain.defs import LocationDef
from questtown.domain.inventory import inventory_slot_for, owns, with_item
from questtown.domain.quest_state import Quest
from questtown.domain.state import GameRecord, SaveSnapshot, default_record
from questtown.services.errors import (
    InvalidLocationError,
    ItemNotOwnedError,
    NoActiveQuestError,
    SaveLoadError,
)
from questtown.services.save_service import SaveService

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "gameState"
_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(slots=True)
class PurchaseResult:
    record: GameRecord
    purchased: bool
    reason: str | None = None


@dataclass(slots=True)
class LoadResult:
    record: GameRecord
    loaded: bool


class GameStore:
    """Owns the current GameRecord and the single optional active Quest.

    Every mutating operation builds a new record, commits it, and then writes
    it through to the blob store. A failed encode or write is logged and
    otherwise ignored; the in-memory commit stands.
    """

    def __init__(
        self,
        *,
        locations: Mapping[str, LocationDef],
        blob_store: BlobStore,
        save_service: SaveService | None = None,
        rng: RNG | None = None,
        clock: Callable[[], datetime] | None = None,
        require_owned_equip: bool = True,
        storage_key: str = DEFAULT_STORAGE_KEY,
    ) -> None:
        self._locations: Dict[str, LocationDef] = dict(locations)
        self._blob_store = blob_store
        self._save_service = save_service or SaveService()
        self._rng = rng or RNG()
        self._clock = clock or datetime.now
        self._require_owned_equip = require_owned_equip
        self._storage_key = storage_key
        self._record = default_record()
        self._current_quest: Quest | None = None

    @property
    def record(self) -> GameRecord:
        return self._record

    @property
    def current_quest(self) -> Quest | None:
        return self._current_quest

    @property
    def locations(self) -> Dict[str, LocationDef]:
        return dict(self._locations)

    def initialize(self) -> GameRecord:
        """Load the stored record, falling back to a fresh one on any problem."""
        self._current_quest = None
        try:
            text = self._blob_store.read(self._storage_key)
        except StorageError as exc:
            logger.warning("Could not read saved game state; starting fresh: %s", exc)
            text = None
        if text is None:
            logger.debug("No saved game state under '%s'; using defaults.", self._storage_key)
            self._record = default_record()
            return self._record
        try:
            self._record = self._save_service.loads(text)
        except SaveLoadError as exc:
            logger.warning("Saved game state is malformed; starting fresh: %s", exc)
            self._record = default_record()
        return self._record

    def request_quest(self, location_id: str) -> Quest:
        """Draw a quest at location_id, replacing any unfinished one."""
        location = self._locations.get(location_id)
        if location is None:
            raise InvalidLocationError(f"Unknown location '{location_id}'.")
        if not location.quests:
            raise InvalidLocationError(f"Location '{location_id}' has no quests to offer.")
        if self._current_quest is not None:
            logger.debug("Abandoning quest %r", self._current_quest.text)
        quest = Quest(
            location_id=location_id,
            text=self._rng.choice(location.quests),
            rewards=location.rewards,
        )
        self._current_quest = quest
        return quest

    def complete_quest(self) -> GameRecord:
        quest = self._current_quest
        if quest is None:
            raise NoActiveQuestError("There is no active quest to complete.")
        record = self._record
        updated = replace(
            record,
            xp=record.xp + quest.rewards.xp,
            coins=record.coins + quest.rewards.coins,
            completed_tasks=record.completed_tasks + 1,
        )
        self._current_quest = None
        self._commit(updated)
        return updated

    def purchase_item(self, slot: str, item_id: str, cost: int) -> PurchaseResult:
        """Buy item_id into inventory[slot]; denied purchases change nothing."""
        record = self._record
        if cost < 0:
            return PurchaseResult(record=record, purchased=False, reason="invalid_cost")
        if owns(record.inventory, slot, item_id):
            return PurchaseResult(record=record, purchased=False, reason="already_owned")
        if record.coins < cost:
            return PurchaseResult(record=record, purchased=False, reason="insufficient_coins")
        updated = replace(
            record,
            coins=record.coins - cost,
            inventory=with_item(record.inventory, slot, item_id),
        )
        self._commit(updated)
        return PurchaseResult(record=updated, purchased=True)

    def equip_item(self, slot: str, item_id: str) -> GameRecord:
        record = self._record
        if self._require_owned_equip and not owns(record.inventory, inventory_slot_for(slot), item_id):
            raise ItemNotOwnedError(f"'{item_id}' is not owned for slot '{slot}'.")
        avatar = dict(record.avatar)
        avatar[slot] = item_id
        updated = replace(record, avatar=avatar)
        self._commit(updated)
        return updated

    def save_game(self, slot_id: str) -> GameRecord:
        """Snapshot the current record into slot_id, overwriting silently."""
        record = self._record
        snapshot = SaveSnapshot(
            record=record.copy(),
            last_save=self._clock().strftime(_TIMESTAMP_FORMAT),
        )
        save_slots = dict(record.save_slots)
        save_slots[slot_id] = snapshot
        updated = replace(record, save_slots=save_slots)
        self._commit(updated)
        return updated

    def load_game(self, slot_id: str) -> LoadResult:
        """Replace the whole record, save slots included, with the snapshot in slot_id."""
        snapshot = self._record.save_slots.get(slot_id)
        if snapshot is None:
            return LoadResult(record=self._record, loaded=False)
        updated = snapshot.record.copy()
        self._commit(updated)
        return LoadResult(record=updated, loaded=True)

    def _commit(self, record: GameRecord) -> None:
        self._record = record
        try:
            self._blob_store.write(self._storage_key, self._save_service.dumps(record))
        except (StorageError, OSError, ValueError, RecursionError) as exc:
            logger.warning("Failed to persist game state under '%s': %s", self._storage_key, exc)
