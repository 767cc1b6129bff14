"""Main entry point for the solitaire engine CLI."""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from solitaire_engine.config import GameLogConfig, load_config
from solitaire_engine.game.autoplay import lowest_playable_cards
from solitaire_engine.game.session import GameSession
from solitaire_engine.logging import GameLogger
from solitaire_engine.models.game_state import Variant
from solitaire_engine.models.moves import format_notation, parse_notation
from solitaire_engine.utils.logger import BoardDisplay, setup_logging

logger = logging.getLogger(__name__)


def generate_log_filename(log_dir: str, variant: str, seed: int) -> str:
    """Generate log filename with timestamp, variant and seed.

    Format: {ISO timestamp}_{variant}_{seed}.jsonl
    """
    timestamp = datetime.now().strftime("%Y%m%dT%H%M%S")
    return str(Path(log_dir) / f"{timestamp}_{variant}_{seed}.jsonl")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Deal a FreeCell or Klondike game and play moves in compact notation"
    )
    parser.add_argument(
        "moves",
        nargs="*",
        help="Moves to play in order (e.g. t0-t3, t0-t3x2, t1-c0, c0-f2, w-t4, draw, recycle)",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config file (YAML)",
    )
    parser.add_argument(
        "--variant",
        choices=[v.value for v in Variant],
        help="Game variant (overrides config)",
    )
    parser.add_argument(
        "-s",
        "--seed",
        type=int,
        help="Deal seed (overrides config)",
    )
    parser.add_argument(
        "--draw-count",
        type=int,
        choices=[1, 3],
        help="Klondike cards per draw (overrides config)",
    )
    parser.add_argument(
        "--auto",
        action="store_true",
        help="Play safe foundation moves after each move",
    )
    parser.add_argument(
        "--hint",
        action="store_true",
        help="Print the next card each foundation needs",
    )
    parser.add_argument(
        "--show-board",
        action="store_true",
        help="Print the board after the deal and after each move",
    )
    parser.add_argument(
        "--game-log",
        type=Path,
        help="Directory for game log files (filename auto-generated)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, 1 if a move was rejected or an error occurred)
    """
    args = build_parser().parse_args(argv)

    # Load config
    config = load_config(args.config)

    # Apply command-line overrides
    if args.variant:
        config.game.variant = Variant(args.variant)
    if args.seed is not None:
        config.game.seed = args.seed
    if args.draw_count:
        config.game.draw_count = args.draw_count
    if args.verbose:
        config.logging.level = "DEBUG"
    if args.show_board:
        config.logging.show_board = True

    setup_logging(config.logging.level)
    display = BoardDisplay(show_board=config.logging.show_board)

    try:
        moves = [parse_notation(text) for text in args.moves]
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    session = GameSession(config)
    state = session.new_game()

    game_log_enabled = args.game_log is not None or config.game_log.enabled
    if game_log_enabled:
        log_dir = str(args.game_log) if args.game_log else config.game_log.output_path
        log_config = GameLogConfig(
            enabled=True,
            output_path=generate_log_filename(log_dir, state.variant, state.seed),
        )
    else:
        log_config = GameLogConfig(enabled=False)

    try:
        with GameLogger(log_config) as game_logger:
            session.game_logger = game_logger
            game_logger.log_session_start(state.variant)
            game_logger.log_deal(state)

            print(f"{config.game.variant.value.capitalize()} seed {state.seed}")
            display.print_board(state)

            exit_code = 0
            for move in moves:
                result = session.play(move)
                display.print_move(format_notation(move), result.rejection)
                if not result.accepted:
                    exit_code = 1
                    break
                if args.auto:
                    for auto in session.auto_complete():
                        display.print_move(f"{format_notation(auto)} (auto)")
                display.print_board(session.state)

            if args.hint:
                print(f"Next needed: {', '.join(lowest_playable_cards(session.state)) or '-'}")

            display.print_result(session.state)
            game_logger.log_session_end(session.state)
            return exit_code

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 1
    except Exception as e:
        logger.exception(f"Engine error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
