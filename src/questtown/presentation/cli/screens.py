"""Screen identifiers and the transitions between them."""
from __future__ import annotations

from typing import Dict, Tuple

from questtown.core.types import Screen

NAVIGATION_SCREENS: Tuple[Tuple[str, Screen], ...] = (
    ("Home", "home"),
    ("Town Map", "town_map"),
    ("Customize", "customize"),
    ("Save Game", "save_game"),
)

TOWN_DESTINATIONS: Tuple[Tuple[str, Screen], ...] = (
    ("Gym", "gym"),
    ("Library", "library"),
    ("Shop", "shop"),
)

SCREEN_TITLES: Dict[Screen, str] = {
    "home": "Welcome Home!",
    "town_map": "Town Map",
    "gym": "The Gym",
    "library": "The Library",
    "shop": "The Shop",
    "customize": "Customize Your Avatar",
    "save_game": "Save Game",
}

SCREEN_BLURBS: Dict[Screen, str] = {
    "home": "Take a moment to relax and reflect. You can also work on some light goals here.",
    "town_map": "Choose your destination!",
    "gym": "Work on your physical health goals.",
    "library": "Focus on personal growth and learning.",
}

_QUEST_LOCATIONS: Dict[Screen, str] = {
    "home": "home",
    "gym": "gym",
    "library": "library",
}


def reachable_from(current: Screen) -> Tuple[Screen, ...]:
    """Return every screen the player can move to from current."""
    targets = [screen for _, screen in NAVIGATION_SCREENS]
    if current == "town_map":
        targets.extend(screen for _, screen in TOWN_DESTINATIONS)
    return tuple(targets)


def navigate(current: Screen, target: Screen) -> Screen:
    if target not in reachable_from(current):
        raise ValueError(f"Cannot move from '{current}' to '{target}'.")
    return target


def screen_after_quest_completed(current: Screen) -> Screen:
    return "home"


def screen_after_load(current: Screen) -> Screen:
    return "home"


def location_for_screen(screen: Screen) -> str | None:
    """Return the quest location offered on screen, if any."""
    return _QUEST_LOCATIONS.get(screen)
