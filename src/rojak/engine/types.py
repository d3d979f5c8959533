from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Card:
    id: int
    front: str
    back: str


@dataclass(frozen=True)
class GameConfig:
    cards_per_round: int = 10
    max_skips: int = 3
    correct_glyph: str = "🟪"
    incorrect_glyph: str = "⬜"


@dataclass(frozen=True)
class GameState:
    """One play session. Every field is an immutable value.

    Transitions never mutate a state; they build a new one with
    ``dataclasses.replace`` so an older state stays a valid snapshot.
    """

    deck: tuple[Card, ...]
    current_index: int = 0
    correct_cards: frozenset[int] = frozenset()
    incorrect_cards: frozenset[int] = frozenset()
    skipped_cards: tuple[int, ...] = ()
    streak: int = 0
    longest_streak: int = 0
    has_completed_cycle: bool = False
    skips_used: int = 0
    current_round: int = 1
    cards_attempted_in_round: int = 0
