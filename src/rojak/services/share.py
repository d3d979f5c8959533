from __future__ import annotations

import logging

from rojak.engine.game import get_accuracy, get_graded_count, get_pattern_string
from rojak.engine.types import GameConfig, GameState

logger = logging.getLogger(__name__)

SHARE_TITLE = "Rojak Results \U0001F957✨"
SHARE_FOOTER = "Try beating my Rojak \U0001F624"
SHARE_URL = "rojak.app.tc1.airbase.sg"


def build_share_text(state: GameState, config: GameConfig | None = None) -> str:
    correct = len(state.correct_cards)
    lines = [
        SHARE_TITLE,
        f"{correct}/{get_graded_count(state)} correct • {get_accuracy(state)}% accuracy",
        f"\U0001F525 Longest streak: {state.longest_streak}",
        "",
        "My mix today:",
        get_pattern_string(state, config),
        "",
        SHARE_FOOTER,
        SHARE_URL,
    ]
    return "\n".join(lines)


def copy_to_clipboard(text: str) -> bool:
    """Put ``text`` on the system clipboard through pygame.

    Returns False when no clipboard is available so the caller can show the
    text instead.
    """
    import pygame  # type: ignore[import-not-found]

    try:
        pygame.scrap.init()
        pygame.scrap.put_text(text)
    except pygame.error as e:
        logger.warning("Clipboard unavailable: %s", e)
        return False
    return True
