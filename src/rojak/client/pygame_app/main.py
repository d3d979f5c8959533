from __future__ import annotations

import argparse
import logging

import pygame  # type: ignore[import-not-found]

from rojak.engine.types import GameConfig
from rojak.paths import get_paths
from rojak.services.content import ContentService
from rojak.services.telemetry import TelemetryService

from .app import App, GameContext
from .asset_manager import AssetManager
from .scenes.boot import BootScene


def main() -> int:
    parser = argparse.ArgumentParser(prog="rojak")
    parser.add_argument("--width", type=int, default=480)
    parser.add_argument("--height", type=int, default=800)
    parser.add_argument("--seed", type=int, default=None, help="Fixed shuffle seed.")
    parser.add_argument("--cards", default=None, help="Path to a front,back CSV file.")
    parser.add_argument("--cards-per-round", type=int, default=GameConfig.cards_per_round)
    parser.add_argument("--max-skips", type=int, default=GameConfig.max_skips)
    parser.add_argument("--no-telemetry", action="store_true")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    pygame.init()
    screen = pygame.display.set_mode((args.width, args.height))
    pygame.display.set_caption("Rojak")

    clock = pygame.time.Clock()
    paths = get_paths()

    assets = AssetManager()
    content = ContentService(data_dir=paths.data_dir, schema_dir=paths.schema_dir)
    telemetry = TelemetryService(paths.userdata_dir / "telemetry.jsonl", enabled=not args.no_telemetry)

    ctx = GameContext(
        screen=screen,
        clock=clock,
        paths=paths,
        assets=assets,
        content=content,
        telemetry=telemetry,
        config=GameConfig(cards_per_round=args.cards_per_round, max_skips=args.max_skips),
        seed=args.seed,
        cards_path=args.cards,
    )

    app = App(ctx, BootScene(ctx))
    code = app.run()
    pygame.quit()
    return code


if __name__ == "__main__":
    raise SystemExit(main())
