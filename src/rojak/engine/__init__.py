"""Deterministic, headless game-state engine for Rojak.

IMPORTANT: This package must never import pygame.
"""

from .actions import CorrectAction, IncorrectAction, NextRoundAction, ResetDeckAction, SkipAction
from .game import Session, StepResult, apply, initialize_game, new_session, replay, step
from .types import Card, GameConfig, GameState

__all__ = [
    "Card",
    "CorrectAction",
    "GameConfig",
    "GameState",
    "IncorrectAction",
    "NextRoundAction",
    "ResetDeckAction",
    "Session",
    "SkipAction",
    "StepResult",
    "apply",
    "initialize_game",
    "new_session",
    "replay",
    "step",
]
