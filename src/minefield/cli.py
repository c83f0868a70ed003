"""
Minefield - command line entry point.

Usage:
    minefield play [--preset NAME | --width W --height H --density PCT] [--seed N]
    minefield simulate [--games N] [--seed N]
"""
import argparse
import logging
import sys
from typing import Callable, Iterable, List, Optional

import numpy as np

from .board import BoardConfig, InvalidConfiguration, CLASSIC, BEGINNER, INTERMEDIATE
from .engine import Engine
from .environment import MinefieldEnv
from .render import render_board, render_status


logger = logging.getLogger(__name__)

PRESETS = {
    "classic": CLASSIC,
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
}

HELP_TEXT = (
    "Commands: r X Y (reveal), f X Y (flag), c X Y (chord), "
    "n (new game), h (help), q (quit)"
)


# ============================================================================
# Interactive Play
# ============================================================================

def run_session(
    engine: Engine,
    lines: Iterable[str],
    write: Callable[[str], None] = print,
) -> None:
    """
    Feed text commands to the engine and print the board after each one.

    Args:
        engine: Engine holding the current game.
        lines: Command lines, e.g. "r 3 4".
        write: Output function.
    """
    actions = {
        "r": engine.reveal,
        "f": engine.toggle_flag,
        "c": engine.chord_reveal,
    }
    config = engine.board.config

    write(render_board(engine.board, coordinates=True))
    write(render_status(engine.board))

    for line in lines:
        parts = line.split()
        if not parts:
            continue
        command = parts[0].lower()

        if command == "q":
            return
        if command == "h":
            write(HELP_TEXT)
            continue
        if command == "n":
            engine.new_game_from_config(config)
        elif command in actions and len(parts) == 3:
            try:
                x, y = int(parts[1]), int(parts[2])
            except ValueError:
                write(f"Bad coordinates: {line.strip()}")
                continue
            actions[command](x, y)
        else:
            write(f"Unknown command: {line.strip()}")
            write(HELP_TEXT)
            continue

        write(render_board(engine.board, coordinates=True))
        write(render_status(engine.board))


def play(args: argparse.Namespace) -> None:
    """Play a game in the terminal."""
    engine = Engine(build_config(args), seed=args.seed)
    print(HELP_TEXT)
    run_session(engine, (line for line in sys.stdin))


# ============================================================================
# Simulation
# ============================================================================

def simulate(args: argparse.Namespace) -> None:
    """Play games with uniformly random legal actions."""
    config = build_config(args)
    env = MinefieldEnv(config=config)
    rng = np.random.default_rng(args.seed)

    wins = 0
    losses = 0
    for game in range(args.games):
        _, info = env.reset(seed=None if args.seed is None else args.seed + game)
        terminated = False
        steps = 0
        while not terminated and steps < args.max_steps:
            mask = env.get_action_mask()
            action = int(rng.choice(np.flatnonzero(mask)))
            _, _, terminated, _, info = env.step(action)
            steps += 1

        if info["game_state"] == "WON":
            wins += 1
        elif info["game_state"] == "LOST":
            losses += 1
        logger.debug("Game %d finished %s after %d steps", game + 1, info["game_state"], steps)

    unfinished = args.games - wins - losses
    print(f"Games: {args.games} | Won: {wins} | Lost: {losses} | Unfinished: {unfinished}")


# ============================================================================
# Argument Parsing
# ============================================================================

def build_config(args: argparse.Namespace) -> BoardConfig:
    """Build the board configuration from parsed arguments."""
    base = PRESETS[args.preset]
    return BoardConfig(
        args.width if args.width is not None else base.width,
        args.height if args.height is not None else base.height,
        args.density / 100 if args.density is not None else base.density,
    )


def _add_board_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--preset", choices=sorted(PRESETS), default="classic",
        help="Board preset (overridden by explicit sizes)",
    )
    parser.add_argument("--width", type=int, default=None, help="Board width")
    parser.add_argument("--height", type=int, default=None, help="Board height")
    parser.add_argument(
        "--density", type=float, default=None,
        help="Percentage of cells holding a mine",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(description="Minefield - terminal minesweeper")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play interactively")
    _add_board_arguments(play_parser)

    simulate_parser = subparsers.add_parser(
        "simulate", help="Play random games in the Gymnasium environment"
    )
    _add_board_arguments(simulate_parser)
    simulate_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )
    simulate_parser.add_argument(
        "--max-steps", type=int, default=10000, help="Step limit per game"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments and run the appropriate command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return

    try:
        build_config(args)
    except InvalidConfiguration as error:
        parser.error(str(error))

    if args.command == "play":
        play(args)
    elif args.command == "simulate":
        simulate(args)


if __name__ == "__main__":
    main()
