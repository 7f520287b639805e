"""Console-driven UI loop for Quest Town."""
from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Callable, List, Optional, Tuple

from questtown.core.types import Screen
from questtown.data.repositories import LocationsRepository, ShopRepository
from questtown.data.storage import FileBlobStore
from questtown.domain.inventory import AVATAR_INVENTORY_SLOTS
from questtown.presentation.cli import config
from questtown.presentation.cli.render import (
    debug_enabled,
    render_bullet_lines,
    render_heading,
    render_menu,
    render_status_bar,
)
from questtown.presentation.cli.screens import (
    NAVIGATION_SCREENS,
    SCREEN_BLURBS,
    SCREEN_TITLES,
    TOWN_DESTINATIONS,
    location_for_screen,
    navigate,
    screen_after_load,
    screen_after_quest_completed,
)
from questtown.services import (
    GameError,
    GameStore,
    SaveSlotService,
    ShopService,
)

MenuAction = Callable[[], Optional[str]]
MenuEntry = Tuple[str, MenuAction]

_PURCHASE_MESSAGES = {
    "locked": "The shop is locked.",
    "unknown_item": "That item is not sold here.",
    "already_owned": "You already own that.",
    "insufficient_coins": "Not enough coins.",
    "invalid_cost": "That price makes no sense.",
}


@dataclass
class CliSession:
    """Everything the menu loop needs; the screen tag lives here, not in the record."""

    store: GameStore
    shop_service: ShopService
    save_slot_service: SaveSlotService
    screen: Screen = "home"
    running: bool = True


def main() -> None:
    """Start the interactive CLI session."""
    session = build_session()
    print("=== Quest Town ===")
    run_session(session)
    print("Goodbye!")


def build_session() -> CliSession:
    """Wire repositories, storage and services from the user config."""
    options = config.load_config()
    store = GameStore(
        locations=LocationsRepository().as_mapping(),
        blob_store=FileBlobStore(config.get_save_dir()),
        require_owned_equip=options["equip_policy"] == "owned",
    )
    store.initialize()
    return CliSession(
        store=store,
        shop_service=ShopService(shop_repo=ShopRepository(), store=store),
        save_slot_service=SaveSlotService(),
    )


def run_session(session: CliSession) -> None:
    while session.running:
        render_screen(session)
        entries = build_menu_entries(session)
        render_menu("Actions", [label for label, _ in entries])
        index = _prompt_choice(len(entries))
        _, action = entries[index]
        message = action()
        if message:
            print(message)


def render_screen(session: CliSession) -> None:
    record = session.store.record
    render_status_bar(record)
    quest = session.store.current_quest
    if quest is not None:
        render_heading("Current Quest")
        print(quest.text)
        if debug_enabled():
            print(f"[{quest.location_id}] +{quest.rewards.xp} XP, +{quest.rewards.coins} coins")
        return
    render_heading(SCREEN_TITLES[session.screen])
    blurb = SCREEN_BLURBS.get(session.screen)
    if blurb:
        print(blurb)
    if session.screen == "shop":
        _render_shop(session)
    elif session.screen == "customize":
        render_bullet_lines(f"{slot}: {item_id}" for slot, item_id in record.avatar.items())
    elif session.screen == "save_game":
        _render_save_slots(session)


def build_menu_entries(session: CliSession) -> List[MenuEntry]:
    """Return the numbered actions for the current screen, navigation and quit."""
    entries = _content_entries(session)
    for label, screen in NAVIGATION_SCREENS:
        entries.append((f"Go to {label}", partial(_go_to, session, screen)))
    entries.append(("Quit", partial(_quit, session)))
    return entries


def _content_entries(session: CliSession) -> List[MenuEntry]:
    if session.store.current_quest is not None:
        return [("Complete Quest", partial(_complete_quest, session))]
    location_id = location_for_screen(session.screen)
    if location_id is not None:
        location = session.store.locations[location_id]
        return [(f"Get {location.name} Quest", partial(_get_quest, session, location_id))]
    if session.screen == "town_map":
        return [(f"Visit {label}", partial(_go_to, session, screen)) for label, screen in TOWN_DESTINATIONS]
    if session.screen == "shop":
        view = session.shop_service.build_shop_view(session.store.record)
        return [
            (f"Buy {entry.name} ({entry.cost} Coins)", partial(_buy, session, entry.shop_item_id))
            for entry in view.entries
            if entry.can_buy
        ]
    if session.screen == "customize":
        return _customize_entries(session)
    if session.screen == "save_game":
        return _save_entries(session)
    return []


def _customize_entries(session: CliSession) -> List[MenuEntry]:
    record = session.store.record
    entries: List[MenuEntry] = []
    for avatar_slot, inventory_slot in AVATAR_INVENTORY_SLOTS.items():
        for item_id in record.inventory.get(inventory_slot, ()):
            if record.avatar.get(avatar_slot) == item_id:
                continue
            entries.append(
                (f"Wear {item_id} {avatar_slot}", partial(_equip, session, avatar_slot, item_id))
            )
    return entries


def _save_entries(session: CliSession) -> List[MenuEntry]:
    entries: List[MenuEntry] = []
    for index, slot in enumerate(session.save_slot_service.list_slots(session.store.record), start=1):
        entries.append((f"Save to Slot {index}", partial(_save, session, slot.slot_id)))
        if slot.exists:
            entries.append((f"Load Slot {index}", partial(_load, session, slot.slot_id)))
    return entries


def _render_shop(session: CliSession) -> None:
    view = session.shop_service.build_shop_view(session.store.record)
    if not view.unlocked:
        print("The shop is locked. Complete more tasks to unlock it!")
        print(f"({view.completed_tasks}/{view.unlock_completed_tasks} tasks completed)")
        return
    print("Check out the new arrivals!")
    lines = []
    for entry in view.entries:
        status = "owned" if entry.owned else f"{entry.cost} coins"
        lines.append(f"{entry.name} ({status})")
    render_bullet_lines(lines)


def _render_save_slots(session: CliSession) -> None:
    lines = []
    for index, slot in enumerate(session.save_slot_service.list_slots(session.store.record), start=1):
        if slot.exists:
            lines.append(f"Slot {index}: Level {slot.level}, XP {slot.xp}, last save {slot.last_save}")
        else:
            lines.append(f"Slot {index}: Empty Slot")
    render_bullet_lines(lines)


def _prompt_choice(choice_count: int) -> int:
    while True:
        raw = input("Select an option: ").strip()
        try:
            index = int(raw) - 1
        except ValueError:
            print("Please enter a number.")
            continue
        if 0 <= index < choice_count:
            return index
        print(f"Please enter a value between 1 and {choice_count}.")


def _go_to(session: CliSession, screen: Screen) -> str | None:
    session.screen = navigate(session.screen, screen)
    return None


def _quit(session: CliSession) -> str | None:
    session.running = False
    return None


def _get_quest(session: CliSession, location_id: str) -> str | None:
    try:
        quest = session.store.request_quest(location_id)
    except GameError as exc:
        return str(exc)
    return f"New quest: {quest.text}"


def _complete_quest(session: CliSession) -> str | None:
    quest = session.store.current_quest
    try:
        session.store.complete_quest()
    except GameError as exc:
        return str(exc)
    session.screen = screen_after_quest_completed(session.screen)
    assert quest is not None
    return f"Quest complete! +{quest.rewards.xp} XP, +{quest.rewards.coins} coins."


def _buy(session: CliSession, shop_item_id: str) -> str | None:
    result = session.shop_service.buy(shop_item_id)
    if result.purchased:
        return f"Purchased! Coins left: {result.record.coins}."
    return _PURCHASE_MESSAGES.get(result.reason or "", "Purchase failed.")


def _equip(session: CliSession, slot: str, item_id: str) -> str | None:
    try:
        session.store.equip_item(slot, item_id)
    except GameError as exc:
        return str(exc)
    return f"Now wearing {item_id} {slot}."


def _save(session: CliSession, slot_id: str) -> str | None:
    session.store.save_game(slot_id)
    return "Game saved."


def _load(session: CliSession, slot_id: str) -> str | None:
    result = session.store.load_game(slot_id)
    if not result.loaded:
        return "That slot is empty."
    session.screen = screen_after_load(session.screen)
    return "Game loaded."
