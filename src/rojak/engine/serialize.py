from __future__ import annotations


from .actions import (
    Action,
    CorrectAction,
    IncorrectAction,
    NextRoundAction,
    ResetDeckAction,
    SkipAction,
)
from .types import GameState


def action_to_dict(a: Action) -> dict[str, object]:
    if isinstance(a, CorrectAction):
        return {"type": "correct", "card_id": a.card_id}
    if isinstance(a, IncorrectAction):
        return {"type": "incorrect", "card_id": a.card_id}
    if isinstance(a, SkipAction):
        return {"type": "skip", "card_id": a.card_id}
    if isinstance(a, NextRoundAction):
        return {"type": "next_round"}
    if isinstance(a, ResetDeckAction):
        return {"type": "reset_deck", "force": a.force}
    # should be unreachable
    return {"type": "unknown"}


def snapshot(state: GameState) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of a game state."""
    return {
        "deck": [c.id for c in state.deck],
        "current_index": state.current_index,
        "correct_cards": sorted(state.correct_cards),
        "incorrect_cards": sorted(state.incorrect_cards),
        "skipped_cards": list(state.skipped_cards),
        "streak": state.streak,
        "longest_streak": state.longest_streak,
        "has_completed_cycle": state.has_completed_cycle,
        "skips_used": state.skips_used,
        "current_round": state.current_round,
        "cards_attempted_in_round": state.cards_attempted_in_round,
    }
