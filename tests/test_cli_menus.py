from datetime import datetime

from questtown.core.rng import RNG
from questtown.data.repositories import LocationsRepository, ShopRepository
from questtown.data.storage import MemoryBlobStore
from questtown.domain.state import GameRecord
from questtown.presentation.cli import app
from questtown.presentation.cli.app import CliSession, build_menu_entries, render_screen, run_session
from questtown.services import GameStore, SaveService, SaveSlotService, ShopService
from questtown.services.game_store import DEFAULT_STORAGE_KEY


def _session(record: GameRecord | None = None, screen: str = "home") -> CliSession:
    initial = {}
    if record is not None:
        initial[DEFAULT_STORAGE_KEY] = SaveService().dumps(record)
    store = GameStore(
        locations=LocationsRepository().as_mapping(),
        blob_store=MemoryBlobStore(initial),
        rng=RNG(5),
        clock=lambda: datetime(2026, 1, 2, 3, 4, 5),
    )
    store.initialize()
    return CliSession(
        store=store,
        shop_service=ShopService(shop_repo=ShopRepository(), store=store),
        save_slot_service=SaveSlotService(),
        screen=screen,
    )


def _labels(session: CliSession) -> list[str]:
    return [label for label, _ in build_menu_entries(session)]


def _feed_input(monkeypatch, values: list[str]) -> None:
    iterator = iter(values)
    monkeypatch.setattr("builtins.input", lambda *_args, **_kwargs: next(iterator))


def test_home_menu_offers_home_quest_and_navigation() -> None:
    labels = _labels(_session())

    assert labels[0] == "Get Home Quest"
    assert "Go to Town Map" in labels
    assert "Go to Save Game" in labels
    assert labels[-1] == "Quit"


def test_town_map_lists_destinations() -> None:
    labels = _labels(_session(screen="town_map"))

    assert labels[:3] == ["Visit Gym", "Visit Library", "Visit Shop"]


def test_active_quest_replaces_screen_content() -> None:
    session = _session(screen="gym")
    session.store.request_quest("gym")

    labels = _labels(session)

    assert labels[0] == "Complete Quest"
    assert "Get The Gym Quest" not in labels


def test_locked_shop_offers_no_purchases(capsys) -> None:
    session = _session(GameRecord(coins=100, completed_tasks=2), screen="shop")

    render_screen(session)
    labels = _labels(session)

    out = capsys.readouterr().out
    assert "The shop is locked." in out
    assert "(2/5 tasks completed)" in out
    assert not any(label.startswith("Buy") for label in labels)


def test_unlocked_shop_offers_affordable_unowned_items() -> None:
    record = GameRecord(coins=10, completed_tasks=5, inventory={"shirts": ("red", "green"), "hair": ("black",)})
    labels = _labels(_session(record, screen="shop"))

    assert "Buy Blue Shirt (10 Coins)" in labels
    assert "Buy Green Shirt (10 Coins)" not in labels


def test_customize_lists_owned_unequipped_items() -> None:
    record = GameRecord(inventory={"shirts": ("red", "blue"), "hair": ("black",)})
    labels = _labels(_session(record, screen="customize"))

    assert "Wear blue shirt" in labels
    assert "Wear red shirt" not in labels


def test_save_menu_offers_load_only_for_occupied_slots() -> None:
    session = _session(screen="save_game")
    session.store.save_game("saveSlot2")

    labels = _labels(session)

    assert "Save to Slot 1" in labels
    assert "Load Slot 1" not in labels
    assert "Load Slot 2" in labels


def test_scripted_session_completes_home_quest(monkeypatch, capsys) -> None:
    session = _session()
    _feed_input(monkeypatch, ["1", "1", "6"])

    run_session(session)

    assert session.store.record.xp == 6
    assert session.store.record.coins == 3
    assert session.store.record.completed_tasks == 1
    assert session.screen == "home"
    assert not session.running
    assert "Quest complete! +6 XP, +3 coins." in capsys.readouterr().out


def test_invalid_choice_is_reprompted(monkeypatch, capsys) -> None:
    session = _session()
    _feed_input(monkeypatch, ["zero", "99", "6"])

    run_session(session)

    out = capsys.readouterr().out
    assert "Please enter a number." in out
    assert "Please enter a value between 1 and 6." in out


def test_buy_then_equip_through_menu(monkeypatch) -> None:
    session = _session(GameRecord(coins=10, completed_tasks=5), screen="shop")
    _feed_input(monkeypatch, ["1", "3", "1", "6"])

    run_session(session)

    assert session.store.record.coins == 0
    assert session.store.record.avatar["shirt"] == "blue"


def test_load_returns_home() -> None:
    session = _session(screen="save_game")
    session.store.save_game("saveSlot1")
    entries = build_menu_entries(session)
    load_action = dict(entries)["Load Slot 1"]

    message = load_action()

    assert message == "Game loaded."
    assert session.screen == "home"


def test_build_session_uses_config_and_save_dir(monkeypatch, tmp_path) -> None:
    monkeypatch.setattr(app.config, "get_save_dir", lambda: tmp_path / "saves")
    monkeypatch.setattr(app.config, "load_config", lambda: {"equip_policy": "any"})

    session = app.build_session()
    session.store.equip_item("shirt", "gold")

    assert session.store.record.avatar["shirt"] == "gold"
    assert (tmp_path / "saves" / "gameState.json").exists()
