"""Shared CLI rendering helpers."""
from __future__ import annotations

import os
from typing import Iterable, Sequence

from questtown.domain.state import GameRecord


def debug_enabled() -> bool:
    """Return True only when QUESTTOWN_DEBUG is explicitly set to '1'."""
    return os.getenv("QUESTTOWN_DEBUG") == "1"


def format_status_bar(record: GameRecord) -> str:
    return f"Lvl {record.level} | XP: {record.xp} | Coins: {record.coins}"


def render_status_bar(record: GameRecord) -> None:
    """Print the top panel shown on every screen."""
    print()
    print(format_status_bar(record))


def render_heading(title: str) -> None:
    """Print a consistent section heading."""
    print(f"\n=== {title} ===")


def render_menu(title: str, options: Sequence[str]) -> None:
    """Display a menu section with numbered options."""
    render_heading(title)
    for idx, label in enumerate(options, start=1):
        print(f"{idx}. {label}")


def render_bullet_lines(lines: Iterable[str]) -> None:
    """Print bullet-prefixed lines."""
    for line in lines:
        print(f"- {line}")
