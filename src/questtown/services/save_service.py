"""Serialization helpers for the persisted game record."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Tuple

from questtown.domain.inventory import Avatar, Inventory, default_avatar, default_inventory
from questtown.domain.state import GameRecord, SaveSnapshot
from questtown.services.errors import SaveLoadError

logger = logging.getLogger(__name__)

SavePayload = Dict[str, Any]


class SaveService:
    """Converts game records to/from the JSON blob kept in storage.

    The blob uses the field names of the original browser save
    (``completedTasks``, ``saveSlots``, ``lastSave``). Missing fields fall back
    to their defaults one by one; unknown fields are ignored. Fields that are
    present but of the wrong shape reject the whole payload.

    Snapshots are written once each into a flat ``snapshots`` table and
    ``saveSlots`` holds table ids, so a snapshot shared by several records
    (every save keeps the slots that existed before it) is not repeated and
    the nesting depth stays constant however long the save history grows.
    Version 1 blobs with snapshots nested inline are still read.
    """

    SAVE_VERSION = 2

    def serialize(self, record: GameRecord) -> SavePayload:
        """Return a JSON-serializable payload for persistence."""
        snapshot_ids: Dict[int, str] = {}
        pending: List[SaveSnapshot] = []
        payload: SavePayload = {"saveVersion": self.SAVE_VERSION}
        payload.update(self._serialize_fields(record, self._slot_refs(record, snapshot_ids, pending)))
        snapshots: Dict[str, Any] = {}
        while pending:
            snapshot = pending.pop()
            entry = self._serialize_fields(
                snapshot.record, self._slot_refs(snapshot.record, snapshot_ids, pending)
            )
            entry["lastSave"] = snapshot.last_save
            snapshots[snapshot_ids[id(snapshot)]] = entry
        payload["snapshots"] = snapshots
        return payload

    def deserialize(self, payload: Mapping[str, Any]) -> GameRecord:
        """Rehydrate a GameRecord from a persisted payload."""
        if not isinstance(payload, Mapping):
            raise SaveLoadError("Save data must be a JSON object.")
        version = payload.get("saveVersion")
        if version is not None:
            version = self._require_int(version, "saveVersion")
            if version > self.SAVE_VERSION:
                logger.warning(
                    "Save data version %s is newer than supported version %s; reading known fields only.",
                    version,
                    self.SAVE_VERSION,
                )
        try:
            snapshots = self._resolve_snapshots(payload.get("snapshots"))
            return self._deserialize_record(payload, "state", snapshots)
        except RecursionError as exc:
            raise SaveLoadError("Save data is nested too deeply.") from exc

    def dumps(self, record: GameRecord) -> str:
        """Encode a record as the JSON text stored in the blob store."""
        return json.dumps(self.serialize(record), ensure_ascii=False, sort_keys=True)

    def loads(self, text: str) -> GameRecord:
        """Decode JSON text from the blob store into a record."""
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SaveLoadError(f"Save data is not valid JSON: {exc}") from exc
        except RecursionError as exc:
            raise SaveLoadError("Save data is nested too deeply.") from exc
        return self.deserialize(payload)

    @staticmethod
    def _slot_refs(
        record: GameRecord, snapshot_ids: Dict[int, str], pending: List[SaveSnapshot]
    ) -> Dict[str, str]:
        refs: Dict[str, str] = {}
        for slot_id, snapshot in record.save_slots.items():
            key = id(snapshot)
            if key not in snapshot_ids:
                snapshot_ids[key] = str(len(snapshot_ids) + 1)
                pending.append(snapshot)
            refs[slot_id] = snapshot_ids[key]
        return refs

    @staticmethod
    def _serialize_fields(record: GameRecord, slot_refs: Dict[str, str]) -> Dict[str, Any]:
        return {
            "xp": record.xp,
            "coins": record.coins,
            "completedTasks": record.completed_tasks,
            "level": record.level,
            "avatar": dict(record.avatar),
            "inventory": {slot: list(items) for slot, items in record.inventory.items()},
            "saveSlots": slot_refs,
        }

    def _resolve_snapshots(self, value: Any) -> Dict[str, SaveSnapshot]:
        """Build every table snapshot, children before the records that point at them."""
        if value is None:
            return {}
        table = self._require_dict(value, "snapshots")
        resolved: Dict[str, SaveSnapshot] = {}
        expanded: set[str] = set()
        for root_id in table:
            stack = [root_id]
            while stack:
                snapshot_id = stack[-1]
                if snapshot_id in resolved:
                    stack.pop()
                    continue
                context = f"snapshots.{snapshot_id}"
                entry = self._require_dict(table[snapshot_id], context)
                unresolved = [
                    ref for ref in self._table_refs(entry, context, table) if ref not in resolved
                ]
                if unresolved:
                    if snapshot_id in expanded or any(ref in expanded for ref in unresolved):
                        raise SaveLoadError(f"{context} is part of a snapshot cycle.")
                    expanded.add(snapshot_id)
                    stack.extend(unresolved)
                    continue
                last_save = entry.get("lastSave")
                resolved[snapshot_id] = SaveSnapshot(
                    record=self._deserialize_record(entry, context, resolved),
                    last_save="" if last_save is None else self._require_str(last_save, f"{context}.lastSave"),
                )
                expanded.discard(snapshot_id)
                stack.pop()
        return resolved

    def _table_refs(self, entry: Mapping[str, Any], context: str, table: Mapping[str, Any]) -> List[str]:
        slots = entry.get("saveSlots")
        if slots is None:
            return []
        refs: List[str] = []
        for slot_id, value in self._require_dict(slots, f"{context}.saveSlots").items():
            if isinstance(value, str):
                if value not in table:
                    raise SaveLoadError(f"{context}.saveSlots.{slot_id} points at unknown snapshot '{value}'.")
                refs.append(value)
        return refs

    def _deserialize_record(
        self, payload: Mapping[str, Any], context: str, snapshots: Mapping[str, SaveSnapshot]
    ) -> GameRecord:
        xp = self._coerce_non_negative_int(payload.get("xp"), f"{context}.xp", default=0)
        coins = self._coerce_non_negative_int(payload.get("coins"), f"{context}.coins", default=0)
        completed_tasks = self._coerce_non_negative_int(
            payload.get("completedTasks"), f"{context}.completedTasks", default=0
        )
        level = self._coerce_non_negative_int(payload.get("level"), f"{context}.level", default=1)
        if level < 1:
            raise SaveLoadError(f"{context}.level must be a positive integer.")
        return GameRecord(
            xp=xp,
            coins=coins,
            completed_tasks=completed_tasks,
            level=level,
            avatar=self._coerce_avatar(payload.get("avatar"), f"{context}.avatar"),
            inventory=self._coerce_inventory(payload.get("inventory"), f"{context}.inventory"),
            save_slots=self._coerce_save_slots(
                payload.get("saveSlots"), f"{context}.saveSlots", snapshots
            ),
        )

    def _coerce_avatar(self, value: Any, context: str) -> Avatar:
        if value is None:
            return default_avatar()
        mapping = self._require_dict(value, context)
        return {
            slot: self._require_str(item_id, f"{context}.{slot}")
            for slot, item_id in mapping.items()
        }

    def _coerce_inventory(self, value: Any, context: str) -> Inventory:
        if value is None:
            return default_inventory()
        mapping = self._require_dict(value, context)
        inventory: Inventory = {}
        for slot, items in mapping.items():
            inventory[slot] = self._coerce_item_list(items, f"{context}.{slot}")
        return inventory

    def _coerce_item_list(self, value: Any, context: str) -> Tuple[str, ...]:
        if not isinstance(value, list):
            raise SaveLoadError(f"{context} must be a list.")
        items: List[str] = []
        for entry in value:
            item_id = self._require_str(entry, f"{context}[]")
            if item_id in items:
                logger.debug("Dropping duplicate inventory entry %s in %s", item_id, context)
                continue
            items.append(item_id)
        return tuple(items)

    def _coerce_save_slots(
        self, value: Any, context: str, snapshots: Mapping[str, SaveSnapshot]
    ) -> Dict[str, SaveSnapshot]:
        if value is None:
            return {}
        mapping = self._require_dict(value, context)
        slots: Dict[str, SaveSnapshot] = {}
        for slot_id, snapshot_payload in mapping.items():
            if snapshot_payload is None:
                continue
            slot_context = f"{context}.{slot_id}"
            if isinstance(snapshot_payload, str):
                snapshot = snapshots.get(snapshot_payload)
                if snapshot is None:
                    raise SaveLoadError(f"{slot_context} points at unknown snapshot '{snapshot_payload}'.")
                slots[slot_id] = snapshot
                continue
            # Version 1 blobs nest the snapshot inline.
            snapshot_map = self._require_dict(snapshot_payload, slot_context)
            last_save = snapshot_map.get("lastSave")
            slots[slot_id] = SaveSnapshot(
                record=self._deserialize_record(snapshot_map, slot_context, snapshots),
                last_save="" if last_save is None else self._require_str(last_save, f"{slot_context}.lastSave"),
            )
        return slots

    @staticmethod
    def _require_dict(value: Any, context: str) -> Dict[str, Any]:
        if not isinstance(value, dict):
            raise SaveLoadError(f"{context} must be an object.")
        return value

    @staticmethod
    def _require_str(value: Any, context: str) -> str:
        if not isinstance(value, str):
            raise SaveLoadError(f"{context} must be a string.")
        return value

    @staticmethod
    def _require_int(value: Any, context: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise SaveLoadError(f"{context} must be an integer.")
        return value

    def _coerce_non_negative_int(self, value: Any, context: str, *, default: int) -> int:
        if value is None:
            return default
        value_int = self._require_int(value, context)
        if value_int < 0:
            raise SaveLoadError(f"{context} must be a non-negative integer.")
        return value_int
