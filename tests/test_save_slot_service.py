from questtown.domain.state import GameRecord, SaveSnapshot
from questtown.services.save_slot_service import SAVE_SLOT_IDS, SaveSlotService


def test_list_slots_reports_empty_and_occupied() -> None:
    snapshot = SaveSnapshot(record=GameRecord(xp=24, level=1), last_save="2026-01-02 03:04:05")
    record = GameRecord(save_slots={"saveSlot2": snapshot, "elsewhere": snapshot})

    slots = SaveSlotService().list_slots(record)

    assert [slot.slot_id for slot in slots] == list(SAVE_SLOT_IDS)
    assert [slot.exists for slot in slots] == [False, True, False]
    assert slots[1].xp == 24
    assert slots[1].level == 1
    assert slots[1].last_save == "2026-01-02 03:04:05"
    assert slots[0].xp is None


def test_custom_slot_ids() -> None:
    service = SaveSlotService(slot_ids=("a", "b"))

    assert service.slot_ids == ("a", "b")
    assert len(service.list_slots(GameRecord())) == 2
