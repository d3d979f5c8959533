from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from typing import Iterable, Sequence

from .actions import (
    Action,
    CardAction,
    CorrectAction,
    IncorrectAction,
    NextRoundAction,
    ResetDeckAction,
    SkipAction,
)
from .types import Card, GameConfig, GameState

Event = dict[str, object]


@dataclass(frozen=True)
class StepResult:
    ok: bool
    state: GameState
    events: list[Event]
    error: str | None = None


@dataclass
class Session:
    """Host-side holder for the single authoritative state of a session."""

    seed: int
    rng: random.Random
    all_cards: tuple[Card, ...]
    config: GameConfig
    state: GameState
    action_log: list[Action] = field(default_factory=list)


def _shuffle(rng: random.Random, cards: Sequence[Card]) -> tuple[Card, ...]:
    items = list(cards)
    rng.shuffle(items)
    return tuple(items)


def initialize_game(cards: Sequence[Card], rng: random.Random) -> GameState:
    if not cards:
        raise ValueError("Cannot start a game with no cards.")
    return GameState(deck=_shuffle(rng, cards))


# Queries


def get_current_card(state: GameState) -> Card | None:
    if state.current_index >= len(state.deck):
        return None
    return state.deck[state.current_index]


def get_graded_count(state: GameState) -> int:
    return len(state.correct_cards) + len(state.incorrect_cards)


def get_remaining_count(state: GameState) -> int:
    return len(state.deck) - get_graded_count(state)


def get_cards_left_in_round(state: GameState, config: GameConfig | None = None) -> int:
    cfg = config or GameConfig()
    left_in_round = cfg.cards_per_round - state.cards_attempted_in_round
    # Never report more than the deck still holds.
    return min(left_in_round, get_remaining_count(state))


def get_skips_remaining(state: GameState, config: GameConfig | None = None) -> int:
    cfg = config or GameConfig()
    return max(0, cfg.max_skips - state.skips_used)


def get_accuracy(state: GameState) -> int:
    """Percentage of graded cards marked correct, rounded half up.

    Returns 0 before anything has been graded.
    """
    graded = get_graded_count(state)
    if graded == 0:
        return 0
    return (200 * len(state.correct_cards) + graded) // (2 * graded)


def get_pattern_string(state: GameState, config: GameConfig | None = None) -> str:
    cfg = config or GameConfig()
    glyphs: list[str] = []
    for card in state.deck:
        if card.id in state.correct_cards:
            glyphs.append(cfg.correct_glyph)
        elif card.id in state.incorrect_cards:
            glyphs.append(cfg.incorrect_glyph)
    return "".join(glyphs)


def should_reset_deck(state: GameState) -> bool:
    return get_graded_count(state) == len(state.deck)


def should_show_round_complete(state: GameState, config: GameConfig | None = None) -> bool:
    cfg = config or GameConfig()
    return state.cards_attempted_in_round >= cfg.cards_per_round or get_remaining_count(state) == 0


# Transitions


def handle_correct(state: GameState, card_id: int) -> GameState:
    streak = state.streak + 1
    return replace(
        state,
        correct_cards=state.correct_cards | {card_id},
        current_index=state.current_index + 1,
        streak=streak,
        longest_streak=max(state.longest_streak, streak),
        cards_attempted_in_round=state.cards_attempted_in_round + 1,
    )


def handle_incorrect(state: GameState, card_id: int) -> GameState:
    return replace(
        state,
        incorrect_cards=state.incorrect_cards | {card_id},
        current_index=state.current_index + 1,
        streak=0,
        cards_attempted_in_round=state.cards_attempted_in_round + 1,
    )


def handle_skip(state: GameState, card_id: int) -> GameState:
    """Move the current card to the end of the deck without grading it.

    The index is left alone, so it now points at the following card. The skip
    cap is not checked here; ``step`` enforces it.
    """
    i = state.current_index
    deck = state.deck[:i] + state.deck[i + 1 :] + state.deck[i : i + 1]
    return replace(
        state,
        deck=deck,
        skipped_cards=state.skipped_cards + (card_id,),
        skips_used=state.skips_used + 1,
        cards_attempted_in_round=state.cards_attempted_in_round + 1,
    )


# Rounds and cycles


def start_next_round(state: GameState) -> GameState:
    return replace(
        state,
        current_round=state.current_round + 1,
        cards_attempted_in_round=0,
    )


def reset_deck(state: GameState, all_cards: Sequence[Card], rng: random.Random) -> GameState:
    fresh = initialize_game(all_cards, rng)
    return replace(
        fresh,
        longest_streak=state.longest_streak,
        has_completed_cycle=True,
        current_round=state.current_round + 1,
    )


# Action dispatch


def _boundary_events(state: GameState, config: GameConfig) -> list[Event]:
    events: list[Event] = []
    if should_reset_deck(state):
        events.append({"type": "DECK_COMPLETE", "accuracy": get_accuracy(state)})
    elif should_show_round_complete(state, config):
        events.append({"type": "ROUND_COMPLETE", "round": state.current_round})
    return events


def _play_card(state: GameState, action: CardAction, config: GameConfig) -> StepResult:
    card = get_current_card(state)
    if card is None:
        return StepResult(ok=False, state=state, events=[], error="No card to play.")
    if card.id != action.card_id:
        return StepResult(ok=False, state=state, events=[], error="Card is not the current card.")

    if isinstance(action, SkipAction):
        if state.skips_used >= config.max_skips:
            return StepResult(
                ok=False,
                state=state,
                events=[{"type": "SKIP_LIMIT_REACHED", "skips_used": state.skips_used}],
                error="Skip limit reached.",
            )
        new_state = handle_skip(state, card.id)
        events: list[Event] = [
            {"type": "CARD_SKIPPED", "card_id": card.id, "skips_used": new_state.skips_used}
        ]
        if new_state.skips_used >= config.max_skips:
            events.append({"type": "SKIP_LIMIT_REACHED", "skips_used": new_state.skips_used})
    elif isinstance(action, CorrectAction):
        new_state = handle_correct(state, card.id)
        events = [{"type": "CARD_GRADED", "card_id": card.id, "correct": True, "streak": new_state.streak}]
    else:
        new_state = handle_incorrect(state, card.id)
        events = [{"type": "CARD_GRADED", "card_id": card.id, "correct": False, "streak": 0}]

    events.extend(_boundary_events(new_state, config))
    return StepResult(ok=True, state=new_state, events=events)


def step(
    state: GameState,
    action: Action,
    all_cards: Sequence[Card],
    rng: random.Random,
    config: GameConfig | None = None,
) -> StepResult:
    """Apply a single player action and return the resulting state.

    Rejected actions return the input state unchanged together with an
    error message, so callers may always store ``result.state``.
    """
    cfg = config or GameConfig()
    if isinstance(action, (CorrectAction, IncorrectAction, SkipAction)):
        return _play_card(state, action, cfg)
    if isinstance(action, NextRoundAction):
        if not should_show_round_complete(state, cfg):
            return StepResult(ok=False, state=state, events=[], error="Round is not complete.")
        new_state = start_next_round(state)
        return StepResult(
            ok=True,
            state=new_state,
            events=[{"type": "ROUND_STARTED", "round": new_state.current_round}],
        )
    if isinstance(action, ResetDeckAction):
        if not action.force and not should_reset_deck(state):
            return StepResult(ok=False, state=state, events=[], error="Deck is not fully graded.")
        new_state = reset_deck(state, all_cards, rng)
        return StepResult(
            ok=True,
            state=new_state,
            events=[{"type": "CYCLE_STARTED", "round": new_state.current_round}],
        )
    return StepResult(ok=False, state=state, events=[], error="Unknown action.")


def new_session(cards: Sequence[Card], seed: int, config: GameConfig | None = None) -> Session:
    cfg = config or GameConfig()
    rng = random.Random(seed)
    all_cards = tuple(cards)
    state = initialize_game(all_cards, rng)
    return Session(seed=seed, rng=rng, all_cards=all_cards, config=cfg, state=state)


def apply(session: Session, action: Action) -> StepResult:
    """Step the session's current state and store the result in place."""
    # Log first so a replay sees every attempted action.
    session.action_log.append(action)
    result = step(session.state, action, session.all_cards, session.rng, session.config)
    session.state = result.state
    return result


def replay(
    cards: Sequence[Card],
    seed: int,
    actions: Iterable[Action],
    config: GameConfig | None = None,
) -> Session:
    session = new_session(cards, seed=seed, config=config)
    for a in actions:
        apply(session, a)
    return session
