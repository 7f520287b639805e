import pytest

from questtown.presentation.cli.screens import (
    location_for_screen,
    navigate,
    reachable_from,
    screen_after_load,
    screen_after_quest_completed,
)


def test_navigation_bar_reachable_from_anywhere() -> None:
    for screen in ("home", "gym", "shop", "save_game"):
        assert {"home", "town_map", "customize", "save_game"} <= set(reachable_from(screen))


def test_town_destinations_only_from_town_map() -> None:
    assert navigate("town_map", "gym") == "gym"
    assert navigate("town_map", "shop") == "shop"
    with pytest.raises(ValueError):
        navigate("home", "library")


def test_quest_completion_and_load_return_home() -> None:
    assert screen_after_quest_completed("gym") == "home"
    assert screen_after_load("save_game") == "home"


def test_location_for_screen() -> None:
    assert location_for_screen("home") == "home"
    assert location_for_screen("library") == "library"
    assert location_for_screen("shop") is None
    assert location_for_screen("town_map") is None
