#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--preset {beginner,intermediate,expert}] [--seed S]
    python main.py play --rows R --columns C --mines M [--no-safe-start]
    python main.py demo [--games N] [--delay S]
"""
import argparse
import logging
import time
from dataclasses import replace
from typing import Optional

import numpy as np

from minesweeper import (
    BEGINNER,
    EXPERT,
    INTERMEDIATE,
    Board,
    BoardConfig,
    GameController,
    GameSettings,
    MinesweeperEnv,
    MinesweeperError,
    SafeStart,
)

logger = logging.getLogger(__name__)

PRESETS = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}

HELP_TEXT = "Commands: r ROW COL (reveal), f ROW COL (flag), c ROW COL (chord), u (undo), q (quit)"


def build_config(args: argparse.Namespace) -> BoardConfig:
    """Resolve the board configuration from command-line options."""
    config = PRESETS[args.preset]
    if args.rows or args.columns or args.mines is not None:
        config = BoardConfig(
            width=args.columns or config.width,
            height=args.rows or config.height,
            num_mines=config.num_mines if args.mines is None else args.mines,
        )
    safe_start = SafeStart.OFF if args.no_safe_start else SafeStart.NEIGHBORHOOD
    return replace(config, safe_start=safe_start, seed=args.seed)


def print_board(controller: GameController) -> None:
    board = controller.board
    header = "   " + " ".join(str(col % 10) for col in range(board.columns))
    print(header)
    for row, line in enumerate(board.render(show_mines=board.is_lost).split("\n")):
        print(f"{row:2d} {line}")
    print(f"Mines left: {board.remaining_mines} | State: {board.state.name}")


def handle_command(controller: GameController, command: str) -> Optional[bool]:
    """
    Run one line of player input.

    Returns:
        False to quit, True if the board changed, None otherwise.
    """
    parts = command.split()
    if not parts:
        return None
    action = parts[0].lower()

    if action == "q":
        return False
    if action == "u":
        return controller.undo() or None
    if action not in ("r", "f", "c") or len(parts) != 3:
        print(HELP_TEXT)
        return None

    try:
        row, col = int(parts[1]), int(parts[2])
    except ValueError:
        print(HELP_TEXT)
        return None

    if action == "r":
        moved = controller.primary(row, col)
    elif action == "f":
        moved = controller.secondary(row, col)
    else:
        moved = controller.chord(row, col)
    return moved or None


def play(args: argparse.Namespace, config: BoardConfig) -> None:
    """Play an interactive game in the terminal."""
    controller = GameController(
        Board.create(config), settings=GameSettings(chord_enabled=args.chord)
    )

    print(f"Board: {config.height}x{config.width} with {config.num_mines} mines")
    print(HELP_TEXT)

    while True:
        print_board(controller)
        if not controller.board.is_playing:
            outcome = "WIN!" if controller.board.is_won else "LOST (hit mine)"
            print(f"\n*** {outcome} *** (u to undo, q to quit)")
        try:
            command = input("> ")
        except EOFError:
            break
        try:
            if handle_command(controller, command) is False:
                break
        except MinesweeperError as error:
            logger.warning("Move rejected: %s", error)


def demo(args: argparse.Namespace) -> None:
    """Watch random masked moves play out."""
    config = replace(PRESETS[args.preset], seed=args.seed)
    env = MinesweeperEnv(config=config, render_mode="ansi")
    rng = np.random.default_rng(args.seed)
    wins = 0

    for game in range(args.games):
        env.reset(seed=None if args.seed is None else args.seed + game)
        done = False
        step = 0

        while not done:
            mask = env.get_action_mask()
            # Reveal moves only, so the demo does not flag forever
            mask[env.board.rows * env.board.columns:] = False
            action = int(rng.choice(np.flatnonzero(mask)))
            _, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            print(f"=== Game {game + 1}/{args.games} | Step {step} | Reward {reward} ===")
            print(env.render())
            time.sleep(args.delay)

        if info["game_state"] == "WIN":
            wins += 1
            print("\n*** WIN! ***\n")
        else:
            print("\n*** LOST (hit mine) ***\n")

    print(f"=== Final: {wins}/{args.games} wins ===")


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Minesweeper")
    parser.add_argument(
        "--log-level", default="WARNING", help="Logging level (e.g. DEBUG, INFO)"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument(
        "--preset", choices=sorted(PRESETS), default="beginner", help="Difficulty"
    )
    play_parser.add_argument("--rows", type=int, default=None, help="Board rows")
    play_parser.add_argument("--columns", type=int, default=None, help="Board columns")
    play_parser.add_argument("--mines", type=int, default=None, help="Number of mines")
    play_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    play_parser.add_argument(
        "--no-safe-start", action="store_true", help="Allow losing on the first reveal"
    )
    play_parser.add_argument(
        "--chord", action="store_true", help="Enable the explicit chord command"
    )

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Watch random play")
    demo_parser.add_argument(
        "--preset", choices=sorted(PRESETS), default="beginner", help="Difficulty"
    )
    demo_parser.add_argument("--games", type=int, default=3, help="Number of games")
    demo_parser.add_argument(
        "--delay", type=float, default=0.2, help="Delay between moves"
    )
    demo_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper())

    if args.command == "play":
        try:
            config = build_config(args)
        except ValueError as error:
            parser.error(str(error))
        play(args, config)
    elif args.command == "demo":
        demo(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
