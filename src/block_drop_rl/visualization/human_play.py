from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional

import pygame

from block_drop_rl.game import AutoDropTimer, BlockDropGame, Command, GameConfig, Snapshot
from block_drop_rl.game.core import MOVEMENT_COMMANDS
from block_drop_rl.game import persistence
from .renderer import Renderer


KEY_TO_COMMAND: Dict[int, Command] = {
    pygame.K_RETURN: Command.START_PAUSE,
    pygame.K_KP_ENTER: Command.START_PAUSE,
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_DOWN: Command.MOVE_DOWN,
    pygame.K_SPACE: Command.HARD_DROP,
    pygame.K_UP: Command.ROTATE,
    pygame.K_p: Command.PAUSE,
}


class KeyboardAdapter:
    """Turns key presses into game commands and keeps the drop timer in step."""

    def __init__(self, game: BlockDropGame, timer: AutoDropTimer) -> None:
        self.game = game
        self.timer = timer

    def submit(self, command: Command) -> Snapshot:
        snapshot = self.game.apply(command)
        self.timer.handle(snapshot.effects)
        return snapshot

    def handle_key(self, key: int) -> Optional[Snapshot]:
        command = KEY_TO_COMMAND.get(key)
        if command is None:
            return None
        snapshot = self.submit(command)
        # a player move pushes the next automatic drop a full period away
        if command in MOVEMENT_COMMANDS and snapshot.running and self.timer.active and not snapshot.effects:
            self.timer.restart()
        return snapshot

    def tick(self) -> Optional[Snapshot]:
        snapshot = None
        for _ in range(self.timer.due_ticks()):
            snapshot = self.submit(Command.TICK)
            if snapshot.effects:
                # the job was stopped or re-armed; the remaining ticks are stale
                break
        return snapshot


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--load", type=str, default=None, help="Resume from a saved game")
    p.add_argument("--save", type=str, default=None, help="Save the game here on exit")
    p.add_argument("--verbose", action="store_true")
    return p


def run(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    pygame.init()
    try:
        clock = pygame.time.Clock()
        if args.load:
            game = persistence.load(args.load)
        else:
            game = BlockDropGame(GameConfig(random_seed=args.seed))
        adapter = KeyboardAdapter(game, AutoDropTimer(pygame.time.get_ticks))
        renderer = Renderer(cell_size=28)

        screen = pygame.display.set_mode(renderer.window_size(game.grid.n_rows, game.grid.n_cols))
        pygame.display.set_caption("Block Drop - Human Play")

        snapshot = game.snapshot()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        snapshot = adapter.handle_key(event.key) or snapshot

            # Gravity
            snapshot = adapter.tick() or snapshot

            renderer.draw(screen, snapshot)
            clock.tick(60)
        if args.save:
            persistence.save(game, args.save)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
