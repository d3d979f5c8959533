from __future__ import annotations

from rojak.engine.game import handle_correct, handle_incorrect, handle_skip
from rojak.engine.types import Card, GameState
from rojak.services.share import build_share_text


def test_share_text_format() -> None:
    cards = tuple(Card(id=i, front=f"f{i}", back=f"b{i}") for i in range(4))
    s = GameState(deck=cards)
    s = handle_correct(s, 0)
    s = handle_correct(s, 1)
    s = handle_skip(s, 2)  # deck [0, 1, 3, 2]
    s = handle_incorrect(s, 3)

    assert build_share_text(s) == (
        "Rojak Results 🥗✨\n"
        "2/3 correct • 67% accuracy\n"
        "🔥 Longest streak: 2\n"
        "\n"
        "My mix today:\n"
        "🟪🟪⬜\n"
        "\n"
        "Try beating my Rojak 😤\n"
        "rojak.app.tc1.airbase.sg"
    )


def test_share_text_before_any_grading() -> None:
    s = GameState(deck=(Card(id=0, front="a", back="b"),))
    text = build_share_text(s)
    assert "0/0 correct • 0% accuracy" in text
    assert "My mix today:\n\n" in text
