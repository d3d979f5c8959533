from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import pygame  # type: ignore[import-not-found]

from rojak.engine.types import Card, GameConfig
from rojak.paths import Paths
from rojak.services.content import ContentService
from rojak.services.telemetry import TelemetryService

from .asset_manager import AssetManager
from .scene_base import Scene, SceneTransition


@dataclass
class GameContext:
    screen: pygame.Surface
    clock: pygame.time.Clock
    paths: Paths
    assets: AssetManager
    content: ContentService
    telemetry: TelemetryService
    config: GameConfig = field(default_factory=GameConfig)
    seed: Optional[int] = None
    cards_path: Optional[str] = None

    # Loaded at boot
    cards: Optional[list[Card]] = None
    has_seen_tutorial: bool = False


class App:
    def __init__(self, ctx: GameContext, initial_scene: Scene) -> None:
        self.ctx = ctx
        self.scene: Scene = initial_scene
        self.running = True

    def run(self) -> int:
        while self.running:
            dt = self.ctx.clock.tick(60) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                    break
                self.scene.handle_event(event)

            tr = self.scene.update(dt)
            if tr is not None:
                self.scene = tr.next_scene

            self.scene.render(self.ctx.screen)
            pygame.display.flip()

        return 0
