from __future__ import annotations

import random

import pytest

from rojak.engine.game import (
    get_accuracy,
    get_cards_left_in_round,
    get_current_card,
    get_pattern_string,
    get_remaining_count,
    get_skips_remaining,
    handle_correct,
    handle_incorrect,
    handle_skip,
    initialize_game,
    reset_deck,
    should_reset_deck,
    should_show_round_complete,
    start_next_round,
)
from rojak.engine.types import Card, GameConfig, GameState


def _cards(n: int) -> list[Card]:
    return [Card(id=i, front=f"clue {i} + more", back=f"answer {i}") for i in range(n)]


def _fixed(n: int) -> GameState:
    # Unshuffled deck so scenarios can name cards by position.
    return GameState(deck=tuple(_cards(n)))


def test_initialize_game_defaults() -> None:
    cards = _cards(5)
    state = initialize_game(cards, random.Random(7))
    assert sorted(c.id for c in state.deck) == [0, 1, 2, 3, 4]
    assert state.current_index == 0
    assert state.correct_cards == frozenset()
    assert state.incorrect_cards == frozenset()
    assert state.skipped_cards == ()
    assert state.streak == 0
    assert state.longest_streak == 0
    assert state.has_completed_cycle is False
    assert state.skips_used == 0
    assert state.current_round == 1
    assert state.cards_attempted_in_round == 0


def test_initialize_game_rejects_empty_deck() -> None:
    with pytest.raises(ValueError):
        initialize_game([], random.Random(1))


def test_initialize_game_does_not_touch_input() -> None:
    cards = _cards(6)
    before = list(cards)
    initialize_game(cards, random.Random(3))
    assert cards == before


def test_scenario_correct_incorrect_correct() -> None:
    state = _fixed(3)

    s1 = handle_correct(state, 0)
    assert s1.streak == 1
    assert s1.longest_streak == 1
    assert s1.correct_cards == {0}
    assert s1.current_index == 1

    s2 = handle_incorrect(s1, 1)
    assert s2.streak == 0
    assert s2.longest_streak == 1
    assert s2.incorrect_cards == {1}
    assert s2.current_index == 2

    s3 = handle_correct(s2, 2)
    assert s3.correct_cards == {0, 2}
    assert should_reset_deck(s3)
    assert get_current_card(s3) is None


def test_scenario_skip_moves_card_to_end() -> None:
    state = _fixed(3)
    s1 = handle_skip(state, 0)
    assert [c.id for c in s1.deck] == [1, 2, 0]
    assert s1.current_index == 0
    current = get_current_card(s1)
    assert current is not None and current.id == 1
    assert s1.skips_used == 1
    assert s1.skipped_cards == (0,)
    assert s1.cards_attempted_in_round == 1


def test_skip_keeps_streak_and_deck_size() -> None:
    state = handle_correct(handle_correct(_fixed(5), 0), 1)
    assert state.streak == 2
    s1 = handle_skip(state, 2)
    assert s1.streak == 2
    assert len(s1.deck) == len(state.deck)
    assert sorted(c.id for c in s1.deck) == sorted(c.id for c in state.deck)
    assert s1.deck[-1].id == 2
    assert not should_reset_deck(s1)


def test_skipping_same_card_twice_logs_both() -> None:
    s = handle_skip(_fixed(2), 0)  # deck [1, 0]
    s = handle_skip(s, 1)  # deck [0, 1]
    s = handle_skip(s, 0)  # deck [1, 0]
    assert s.skipped_cards == (0, 1, 0)
    assert s.skips_used == 3
    assert [c.id for c in s.deck] == [1, 0]


def test_transitions_leave_old_state_intact() -> None:
    state = _fixed(3)
    s1 = handle_correct(state, 0)
    s2 = handle_skip(s1, 1)
    assert state.correct_cards == frozenset()
    assert state.current_index == 0
    assert [c.id for c in s1.deck] == [0, 1, 2]
    assert [c.id for c in s2.deck] == [0, 2, 1]
    assert s1.skipped_cards == ()


def test_grading_sets_stay_disjoint() -> None:
    rng = random.Random(11)
    state = initialize_game(_cards(20), rng)
    while (card := get_current_card(state)) is not None:
        if rng.random() < 0.5:
            state = handle_correct(state, card.id)
        else:
            state = handle_incorrect(state, card.id)
        assert not (state.correct_cards & state.incorrect_cards)
        assert len(state.correct_cards) + len(state.incorrect_cards) <= len(state.deck)
    assert should_reset_deck(state)


def test_longest_streak_tracks_best_run() -> None:
    s = _fixed(6)
    s = handle_correct(s, 0)
    s = handle_correct(s, 1)
    s = handle_correct(s, 2)
    s = handle_incorrect(s, 3)
    s = handle_correct(s, 4)
    assert s.streak == 1
    assert s.longest_streak == 3


def test_accuracy_is_zero_before_grading_even_with_skips() -> None:
    s = handle_skip(handle_skip(_fixed(4), 0), 1)
    assert get_accuracy(s) == 0


def test_accuracy_rounds_half_up() -> None:
    s = _fixed(8)
    s = handle_correct(s, 0)
    for i in range(1, 8):
        s = handle_incorrect(s, i)
    # 1/8 = 12.5%
    assert get_accuracy(s) == 13

    s = _fixed(3)
    s = handle_correct(s, 0)
    s = handle_correct(s, 1)
    s = handle_incorrect(s, 2)
    assert get_accuracy(s) == 67


def test_accuracy_bounds() -> None:
    rng = random.Random(5)
    state = initialize_game(_cards(30), rng)
    while (card := get_current_card(state)) is not None:
        state = handle_correct(state, card.id) if rng.random() < 0.7 else handle_incorrect(state, card.id)
        acc = get_accuracy(state)
        assert isinstance(acc, int)
        assert 0 <= acc <= 100


def test_pattern_string_follows_deck_order() -> None:
    cfg = GameConfig(correct_glyph="Y", incorrect_glyph="n")
    s = _fixed(4)
    s = handle_skip(s, 0)  # deck [1, 2, 3, 0]
    s = handle_correct(s, 1)
    s = handle_incorrect(s, 2)
    s = handle_correct(s, 3)
    assert get_pattern_string(s, cfg) == "YnY"
    s = handle_incorrect(s, 0)
    assert get_pattern_string(s, cfg) == "YnYn"


def test_pattern_string_default_glyphs() -> None:
    s = handle_incorrect(handle_correct(_fixed(2), 0), 1)
    assert get_pattern_string(s) == "🟪⬜"


def test_scenario_ten_card_round_and_deck_complete_together() -> None:
    s = _fixed(10)
    for i in range(10):
        assert not should_show_round_complete(s)
        s = handle_correct(s, i)
    assert should_show_round_complete(s)
    assert get_remaining_count(s) == 0
    assert should_reset_deck(s)
    assert s.longest_streak == 10


def test_scenario_round_boundary_before_deck_end() -> None:
    s = _fixed(15)
    for i in range(10):
        s = handle_correct(s, i)
    assert should_show_round_complete(s)
    assert get_remaining_count(s) == 5
    assert not should_reset_deck(s)

    s = start_next_round(s)
    assert s.current_round == 2
    assert s.cards_attempted_in_round == 0
    assert not should_show_round_complete(s)
    assert get_cards_left_in_round(s) == 5

    for i in range(10, 15):
        card = get_current_card(s)
        assert card is not None and card.id == i
        s = handle_correct(s, card.id)
    assert should_reset_deck(s)


def test_cards_left_in_round_is_capped_by_remaining() -> None:
    s = _fixed(12)
    assert get_cards_left_in_round(s) == 10
    for i in range(3):
        s = handle_incorrect(s, i)
    assert get_cards_left_in_round(s) == 7

    s = _fixed(4)
    assert get_cards_left_in_round(s) == 4
    s = handle_skip(s, 0)
    assert get_cards_left_in_round(s) == 4


def test_round_counter_is_monotone_and_resets() -> None:
    s = _fixed(20)
    seen = [s.cards_attempted_in_round]
    s = handle_correct(s, 0)
    seen.append(s.cards_attempted_in_round)
    s = handle_skip(s, 1)
    seen.append(s.cards_attempted_in_round)
    s = handle_incorrect(s, 2)
    seen.append(s.cards_attempted_in_round)
    assert seen == [0, 1, 2, 3]
    assert start_next_round(s).cards_attempted_in_round == 0


def test_start_next_round_carries_everything_else() -> None:
    s = handle_skip(handle_correct(_fixed(5), 0), 1)
    n = start_next_round(s)
    assert n.deck == s.deck
    assert n.correct_cards == s.correct_cards
    assert n.skipped_cards == s.skipped_cards
    assert n.streak == s.streak
    assert n.skips_used == s.skips_used
    assert n.current_index == s.current_index


def test_reset_deck_starts_new_cycle() -> None:
    cards = _cards(3)
    s = GameState(deck=tuple(cards))
    s = handle_skip(s, 0)
    s = handle_correct(s, 1)
    s = handle_correct(s, 2)
    s = handle_incorrect(s, 0)
    assert should_reset_deck(s)

    n = reset_deck(s, cards, random.Random(9))
    assert n.longest_streak == s.longest_streak == 2
    assert n.correct_cards == frozenset()
    assert n.incorrect_cards == frozenset()
    assert n.skipped_cards == ()
    assert n.skips_used == 0
    assert n.streak == 0
    assert n.current_index == 0
    assert n.cards_attempted_in_round == 0
    assert n.has_completed_cycle is True
    assert n.current_round == s.current_round + 1
    assert sorted(c.id for c in n.deck) == [0, 1, 2]


def test_skips_remaining_clamps_at_zero() -> None:
    cfg = GameConfig(max_skips=3)
    s = _fixed(6)
    assert get_skips_remaining(s, cfg) == 3
    s = handle_skip(s, 0)
    assert get_skips_remaining(s, cfg) == 2
    for _ in range(3):
        card = get_current_card(s)
        assert card is not None
        s = handle_skip(s, card.id)
    assert s.skips_used == 4
    assert get_skips_remaining(s, cfg) == 0
