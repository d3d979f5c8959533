from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CorrectAction:
    card_id: int


@dataclass(frozen=True)
class IncorrectAction:
    card_id: int


@dataclass(frozen=True)
class SkipAction:
    card_id: int


@dataclass(frozen=True)
class NextRoundAction:
    pass


@dataclass(frozen=True)
class ResetDeckAction:
    # Start a new cycle even if the deck is not fully graded.
    force: bool = False


CardAction = CorrectAction | IncorrectAction | SkipAction
Action = CorrectAction | IncorrectAction | SkipAction | NextRoundAction | ResetDeckAction
