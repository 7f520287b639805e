from questtown.domain.state import GameRecord
from questtown.presentation.cli.render import debug_enabled, format_status_bar, render_menu


def test_debug_enabled_only_for_explicit_flag(monkeypatch) -> None:
    monkeypatch.delenv("QUESTTOWN_DEBUG", raising=False)
    assert not debug_enabled()
    monkeypatch.setenv("QUESTTOWN_DEBUG", "true")
    assert not debug_enabled()
    monkeypatch.setenv("QUESTTOWN_DEBUG", "1")
    assert debug_enabled()


def test_status_bar_shows_level_xp_and_coins() -> None:
    assert format_status_bar(GameRecord(xp=12, coins=3)) == "Lvl 1 | XP: 12 | Coins: 3"


def test_render_menu_numbers_options(capsys) -> None:
    render_menu("Actions", ["Home", "Quit"])

    out = capsys.readouterr().out
    assert "=== Actions ===" in out
    assert "1. Home" in out
    assert "2. Quit" in out
