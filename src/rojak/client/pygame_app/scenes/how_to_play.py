from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from ..app import GameContext
from ..scene_base import BaseScene, Scene
from ..ui import Button, draw_centered_text, draw_text, wrap_text


class HowToPlayScene(BaseScene):
    def __init__(self, ctx: GameContext, then: Scene) -> None:
        super().__init__(ctx)
        self._then = then
        cfg = ctx.config
        self._steps = [
            "1. Read the two clues on the card and fuse them into one answer in your head.",
            "2. Click the card (or press Space) to flip it and reveal the answer.",
            "3. Grade yourself honestly: Got it or Missed it.",
            f"4. Totally stuck? Skip before flipping. You get {cfg.max_skips} skips; using the last one ends the session.",
            f"5. You play in rounds of {cfg.cards_per_round} cards. Grade every card to finish the deck and start a new cycle.",
        ]
        w = ctx.screen.get_width()
        h = ctx.screen.get_height()
        self.btn_go = Button(
            rect=pygame.Rect((w - 280) // 2, h - 110, 280, 56),
            text="Let's go",
            on_click=self._on_go,
            color=(120, 60, 160),
        )

    def _on_go(self) -> None:
        self.ctx.has_seen_tutorial = True
        self._go(self._then)

    def handle_event(self, event: pygame.event.Event) -> None:
        self.btn_go.handle_event(event)
        if event.type == pygame.KEYDOWN and event.key in (pygame.K_RETURN, pygame.K_ESCAPE):
            self._on_go()

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((40, 16, 64))
        fonts = self.ctx.assets.fonts
        draw_centered_text(screen, fonts.big, "How to play", (screen.get_width() // 2, 60))
        y = 120
        for step_text in self._steps:
            for line in wrap_text(fonts.ui, step_text, screen.get_width() - 60):
                draw_text(screen, fonts.ui, line, (30, y))
                y += 26
            y += 14
        self.btn_go.draw(screen, fonts.ui)
