"""Repository for quest-giving locations (the content table)."""
from __future__ import annotations

from typing import Dict

from questtown.data.errors import DataValidationError
from questtown.data.repositories.base import RepositoryBase
from questtown.domain.defs import LocationDef, RewardDef


class LocationsRepository(RepositoryBase[LocationDef]):
    """Loads and validates location definitions."""

    def __init__(self, base_path=None) -> None:
        super().__init__("locations.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, LocationDef]:
        container = self._require_mapping(raw, "locations.json")
        raw_locations = self._require_mapping(container.get("locations"), "locations.json.locations")
        definitions: Dict[str, LocationDef] = {}
        for location_id, payload in raw_locations.items():
            if not location_id.strip():
                raise DataValidationError("location id must be a non-empty string.")
            mapping = self._require_mapping(payload, f"location '{location_id}'")
            location_id_value = self._require_str(mapping.get("id"), f"location '{location_id}' id")
            if location_id_value != location_id:
                raise DataValidationError(
                    f"location '{location_id}' id must match key (found '{location_id_value}')."
                )
            name = self._require_str(mapping.get("name"), f"location '{location_id}' name").strip()
            if not name:
                raise DataValidationError(f"location '{location_id}' name must not be empty.")
            rewards = self._parse_rewards(mapping.get("rewards"), location_id)
            quests = tuple(
                self._require_str_list(mapping.get("quests"), f"location '{location_id}' quests")
            )
            if not quests:
                raise DataValidationError(f"location '{location_id}' must define at least one quest.")
            definitions[location_id] = LocationDef(
                id=location_id,
                name=name,
                rewards=rewards,
                quests=quests,
            )
        return definitions

    def _parse_rewards(self, value: object, location_id: str) -> RewardDef:
        mapping = self._require_mapping(value, f"location '{location_id}' rewards")
        xp = self._require_int(mapping.get("xp"), f"location '{location_id}' rewards.xp")
        coins = self._require_int(mapping.get("coins"), f"location '{location_id}' rewards.coins")
        if xp < 0 or coins < 0:
            raise DataValidationError(f"location '{location_id}' rewards must be >= 0.")
        return RewardDef(xp=xp, coins=coins)
