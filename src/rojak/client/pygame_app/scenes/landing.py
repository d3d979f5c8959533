from __future__ import annotations

import random

import pygame  # type: ignore[import-not-found]

from rojak.engine.game import new_session

from ..app import GameContext
from ..scene_base import BaseScene
from ..ui import Button, draw_centered_text


class LandingScene(BaseScene):
    def __init__(self, ctx: GameContext) -> None:
        super().__init__(ctx)
        w = self.ctx.screen.get_width()
        bw, bh = 280, 56
        x = (w - bw) // 2
        self._buttons = [
            Button(rect=pygame.Rect(x, 380, bw, bh), text="Play", on_click=self._on_play, color=(120, 60, 160)),
            Button(rect=pygame.Rect(x, 450, bw, bh), text="How to play", on_click=self._on_how_to_play),
            Button(
                rect=pygame.Rect(x, 520, bw, bh),
                text="Quit",
                on_click=lambda: pygame.event.post(pygame.event.Event(pygame.QUIT)),
            ),
        ]

    def _on_play(self) -> None:
        from .game import GameScene
        from .how_to_play import HowToPlayScene

        cards = self.ctx.cards
        if not cards:
            return
        seed = self.ctx.seed if self.ctx.seed is not None else random.randrange(1, 2**31 - 1)
        session = new_session(cards, seed=seed, config=self.ctx.config)
        self.ctx.telemetry.log("session_started", {"seed": seed, "cards": len(cards)})
        game = GameScene(self.ctx, session)
        if not self.ctx.has_seen_tutorial:
            self._go(HowToPlayScene(self.ctx, then=game))
            return
        self._go(game)

    def _on_how_to_play(self) -> None:
        from .how_to_play import HowToPlayScene

        self._go(HowToPlayScene(self.ctx, then=LandingScene(self.ctx)))

    def handle_event(self, event: pygame.event.Event) -> None:
        for b in self._buttons:
            if b.handle_event(event):
                return

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((40, 16, 64))
        fonts = self.ctx.assets.fonts
        cx = screen.get_width() // 2
        draw_centered_text(screen, fonts.card, "Rojak", (cx, 180))
        draw_centered_text(screen, fonts.ui, "Two clues. One answer. Mix it up.", (cx, 230))
        n = len(self.ctx.cards or [])
        draw_centered_text(screen, fonts.small, f"{n} cards in the bowl", (cx, 260), color=(200, 180, 230))
        for b in self._buttons:
            b.draw(screen, fonts.ui)
