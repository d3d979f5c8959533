from __future__ import annotations

import logging
from typing import Literal

import pygame  # type: ignore[import-not-found]

from rojak.engine.actions import (
    Action,
    CorrectAction,
    IncorrectAction,
    NextRoundAction,
    ResetDeckAction,
    SkipAction,
)
from rojak.engine.game import (
    Session,
    apply,
    get_accuracy,
    get_cards_left_in_round,
    get_current_card,
    get_graded_count,
    get_pattern_string,
    get_remaining_count,
    get_skips_remaining,
)
from rojak.engine.types import GameState
from rojak.services.share import build_share_text, copy_to_clipboard

from ..app import GameContext
from ..scene_base import BaseScene, SceneTransition
from ..ui import Button, draw_centered_text, draw_panel, draw_text, wrap_text

logger = logging.getLogger(__name__)

Overlay = Literal["round", "deck", "results"]

CARD_FRONT = (250, 244, 255)
CARD_BACK = (255, 226, 120)
NEW_CYCLE_BANNER_SECONDS = 3.0


class GameScene(BaseScene):
    def __init__(self, ctx: GameContext, session: Session) -> None:
        super().__init__(ctx)
        self.session = session

        self._message: str = ""
        self._flipped = False
        self._revealed = False
        self._overlay: Overlay | None = None
        self._banner_timer = 0.0
        self._share_fallback: str | None = None

        w = ctx.screen.get_width()
        h = ctx.screen.get_height()
        self._card_rect = pygame.Rect(40, 150, w - 80, h - 360)

        half = (w - 100) // 2
        self.btn_menu = Button(rect=pygame.Rect(w - 110, 16, 94, 36), text="Menu", on_click=self._on_menu)
        self.btn_skip = Button(
            rect=pygame.Rect((w - 200) // 2, h - 150, 200, 56),
            text="Skip",
            on_click=lambda: self._play(SkipAction),
        )
        self.btn_correct = Button(
            rect=pygame.Rect(40, h - 150, half, 56),
            text="Got it",
            on_click=lambda: self._play(CorrectAction),
            color=(60, 140, 80),
        )
        self.btn_incorrect = Button(
            rect=pygame.Rect(60 + half, h - 150, half, 56),
            text="Missed it",
            on_click=lambda: self._play(IncorrectAction),
            color=(150, 60, 60),
        )

        # Overlay buttons share two slots; which ones are live depends on the overlay.
        slot_a = pygame.Rect(80, h // 2 + 60, w - 160, 50)
        slot_b = pygame.Rect(80, h // 2 + 120, w - 160, 50)
        slot_c = pygame.Rect(80, h // 2 + 180, w - 160, 50)
        self.btn_next_round = Button(rect=slot_a, text="Keep going", on_click=self._on_next_round, color=(120, 60, 160))
        self.btn_new_cycle = Button(rect=slot_a, text="Shuffle a new cycle", on_click=self._on_new_cycle, color=(120, 60, 160))
        self.btn_finish = Button(rect=slot_b, text="Finish session", on_click=self._on_finish)
        self.btn_share = Button(rect=slot_a, text="Share results", on_click=self._on_share, color=(120, 60, 160))
        self.btn_play_again = Button(rect=slot_b, text="Play again", on_click=self._on_play_again)
        self.btn_end = Button(rect=slot_c, text="End game", on_click=self._on_menu)

    # Navigation

    def _on_menu(self) -> None:
        from .landing import LandingScene

        self._log_summary("session_ended")
        self._go(LandingScene(self.ctx))

    # Engine calls

    def _step(self, action: Action) -> bool:
        result = apply(self.session, action)
        self.ctx.telemetry.log_events(result.events)
        if not result.ok:
            self._message = result.error or "Invalid action."
            if any(ev.get("type") == "SKIP_LIMIT_REACHED" for ev in result.events):
                self._overlay = "results"
            return False
        self._message = ""
        for ev in result.events:
            t = ev.get("type")
            if t == "SKIP_LIMIT_REACHED":
                self._overlay = "results"
            elif t == "DECK_COMPLETE" and self._overlay is None:
                self._overlay = "deck"
            elif t == "ROUND_COMPLETE" and self._overlay is None:
                self._overlay = "round"
        return True

    def _play(self, kind: type[CorrectAction] | type[IncorrectAction] | type[SkipAction]) -> None:
        card = get_current_card(self.session.state)
        if card is None or self._overlay is not None:
            return
        if kind is SkipAction and self._revealed:
            # Skipping is only offered before the answer is revealed.
            return
        if kind is not SkipAction and not self._revealed:
            return
        if self._step(kind(card_id=card.id)):
            self._reset_card_face()

    def _on_next_round(self) -> None:
        if self._step(NextRoundAction()):
            self._overlay = None

    def _on_new_cycle(self) -> None:
        self._start_cycle(ResetDeckAction())

    def _on_play_again(self) -> None:
        self._start_cycle(ResetDeckAction(force=True))

    def _start_cycle(self, action: ResetDeckAction) -> None:
        finished = self.session.state
        if self._step(action):
            self._log_summary("cycle_finished", finished)
            self._overlay = None
            self._reset_card_face()
            self._share_fallback = None
            self._banner_timer = NEW_CYCLE_BANNER_SECONDS

    def _flip(self) -> None:
        self._flipped = not self._flipped
        if self._flipped:
            self._revealed = True

    def _reset_card_face(self) -> None:
        # A new card always starts face down and unseen.
        self._flipped = False
        self._revealed = False

    def _on_finish(self) -> None:
        self._overlay = "results"

    def _on_share(self) -> None:
        text = build_share_text(self.session.state, self.session.config)
        if copy_to_clipboard(text):
            self._message = "Copied to clipboard!"
            self._share_fallback = None
        else:
            self._share_fallback = text
        self.ctx.telemetry.log("shared", {"copied": self._share_fallback is None})

    def _log_summary(self, event_type: str, state: GameState | None = None) -> None:
        state = state or self.session.state
        self.ctx.telemetry.log(
            event_type,
            {
                "seed": self.session.seed,
                "graded": get_graded_count(state),
                "correct": len(state.correct_cards),
                "accuracy": get_accuracy(state),
                "longest_streak": state.longest_streak,
                "round": state.current_round,
            },
        )

    # Scene protocol

    def handle_event(self, event: pygame.event.Event) -> None:
        if self._overlay is not None:
            self._handle_overlay_event(event)
            return

        self.btn_menu.handle_event(event)
        if self._revealed:
            self.btn_correct.handle_event(event)
            self.btn_incorrect.handle_event(event)
        else:
            self.btn_skip.handle_event(event)

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self._card_rect.collidepoint(event.pos):
                self._flip()
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_SPACE:
                self._flip()
            elif event.key == pygame.K_s:
                self._play(SkipAction)
            elif event.key == pygame.K_y:
                self._play(CorrectAction)
            elif event.key == pygame.K_n:
                self._play(IncorrectAction)

    def _handle_overlay_event(self, event: pygame.event.Event) -> None:
        if self._overlay == "round":
            for b in (self.btn_next_round, self.btn_finish):
                if b.handle_event(event):
                    return
        elif self._overlay == "deck":
            for b in (self.btn_new_cycle, self.btn_finish):
                if b.handle_event(event):
                    return
        elif self._overlay == "results":
            for b in (self.btn_share, self.btn_play_again, self.btn_end):
                if b.handle_event(event):
                    return

    def update(self, dt: float) -> SceneTransition | None:
        if self._banner_timer > 0:
            self._banner_timer = max(0.0, self._banner_timer - dt)
        return self._next

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((40, 16, 64))
        fonts = self.ctx.assets.fonts
        state = self.session.state
        cfg = self.session.config
        w = screen.get_width()

        self.btn_menu.draw(screen, fonts.ui)
        draw_text(screen, fonts.ui, f"Skips left: {get_skips_remaining(state, cfg)}/{cfg.max_skips}", (16, 24))
        if state.streak > 1:
            draw_text(screen, fonts.ui, f"Streak x{state.streak}", (16, 52), color=(255, 170, 60))
        draw_centered_text(
            screen,
            fonts.ui,
            f"Round {state.current_round} - {get_cards_left_in_round(state, cfg)} cards left",
            (w // 2, 100),
        )
        draw_centered_text(
            screen,
            fonts.small,
            f"{get_remaining_count(state)} of {len(state.deck)} cards still to grade",
            (w // 2, 124),
            color=(200, 180, 230),
        )
        if self._banner_timer > 0:
            draw_centered_text(screen, fonts.ui, "New cycle! Fresh shuffle.", (w // 2, 76), color=(255, 226, 120))

        card = get_current_card(state)
        if card is not None:
            self._render_card(screen, card.front if not self._flipped else card.back)
            if self._revealed:
                self.btn_correct.draw(screen, fonts.ui)
                self.btn_incorrect.draw(screen, fonts.ui)
            else:
                draw_centered_text(
                    screen,
                    fonts.small,
                    "Make a guess in your head, or skip if you're totally stuck.",
                    (w // 2, self.btn_skip.rect.top - 20),
                    color=(200, 180, 230),
                )
                self.btn_skip.enabled = get_skips_remaining(state, cfg) > 0
                self.btn_skip.draw(screen, fonts.ui)

        if self._message:
            draw_centered_text(screen, fonts.small, self._message, (w // 2, screen.get_height() - 60))

        if self._overlay is not None:
            self._render_overlay(screen)

    def _render_card(self, screen: pygame.Surface, text: str) -> None:
        fonts = self.ctx.assets.fonts
        color = CARD_BACK if self._flipped else CARD_FRONT
        pygame.draw.rect(screen, color, self._card_rect, border_radius=24)
        pygame.draw.rect(screen, (0, 0, 0), self._card_rect, width=3, border_radius=24)
        lines = wrap_text(fonts.card, text, self._card_rect.width - 40)
        line_h = fonts.card.get_linesize()
        y = self._card_rect.centery - (line_h * len(lines)) // 2 + line_h // 2
        for line in lines:
            draw_centered_text(screen, fonts.card, line, (self._card_rect.centerx, y), color=(30, 20, 40))
            y += line_h
        hint = "answer" if self._flipped else "tap to flip"
        draw_centered_text(
            screen, fonts.small, hint, (self._card_rect.centerx, self._card_rect.bottom - 24), color=(90, 70, 110)
        )

    def _render_overlay(self, screen: pygame.Surface) -> None:
        fonts = self.ctx.assets.fonts
        state = self.session.state
        cfg = self.session.config
        w = screen.get_width()
        h = screen.get_height()
        panel = pygame.Rect(40, h // 2 - 220, w - 80, 480)
        draw_panel(screen, panel)
        cx = w // 2
        y = panel.top + 40

        if self._overlay == "round":
            draw_centered_text(screen, fonts.big, f"Round {state.current_round} complete!", (cx, y))
        elif self._overlay == "deck":
            draw_centered_text(screen, fonts.big, "Deck complete!", (cx, y))
        else:
            draw_centered_text(screen, fonts.big, "Your results", (cx, y))

        y += 50
        draw_centered_text(
            screen, fonts.ui, f"{len(state.correct_cards)}/{get_graded_count(state)} correct", (cx, y)
        )
        y += 30
        draw_centered_text(screen, fonts.ui, f"{get_accuracy(state)}% accuracy", (cx, y))
        y += 30
        draw_centered_text(screen, fonts.ui, f"Longest streak: {state.longest_streak}", (cx, y))
        y += 30
        pattern = get_pattern_string(state, cfg)
        for line in wrap_text(fonts.small, " ".join(pattern), panel.width - 40)[:3]:
            draw_centered_text(screen, fonts.small, line, (cx, y), color=(200, 180, 230))
            y += 20

        if self._overlay == "round":
            self.btn_next_round.draw(screen, fonts.ui)
            self.btn_finish.draw(screen, fonts.ui)
        elif self._overlay == "deck":
            self.btn_new_cycle.draw(screen, fonts.ui)
            self.btn_finish.draw(screen, fonts.ui)
        else:
            self.btn_share.draw(screen, fonts.ui)
            self.btn_play_again.draw(screen, fonts.ui)
            self.btn_end.draw(screen, fonts.ui)
            if self._share_fallback is not None:
                self._render_share_fallback(screen)

    def _render_share_fallback(self, screen: pygame.Surface) -> None:
        fonts = self.ctx.assets.fonts
        w = screen.get_width()
        box = pygame.Rect(20, 20, w - 40, 230)
        pygame.draw.rect(screen, (20, 12, 30), box, border_radius=12)
        draw_text(screen, fonts.small, "Copy this text:", (box.x + 12, box.y + 10), color=(255, 226, 120))
        y = box.y + 32
        for line in self._share_fallback.splitlines() if self._share_fallback else []:
            for part in wrap_text(fonts.small, line, box.width - 24):
                if y > box.bottom - 20:
                    return
                draw_text(screen, fonts.small, part, (box.x + 12, y))
                y += 18
