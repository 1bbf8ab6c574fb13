"""Run an engine-vs-engine game between two registered player presets."""

import argparse
import logging
import sys
from typing import List, Optional

import chess

from arena.config import CONFIG
from arena.match import Match
from arena.registry import create_player, player_names


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="arena-match", description=__doc__)
    parser.add_argument("white", nargs="?", default=CONFIG.match.white, help="preset playing White")
    parser.add_argument("black", nargs="?", default=CONFIG.match.black, help="preset playing Black")
    parser.add_argument("--fen", default=None, help="start from this position instead of the initial one")
    parser.add_argument("--max-plies", type=int, default=CONFIG.match.max_plies)
    parser.add_argument("--log-level", default=CONFIG.log_level)
    parser.add_argument("--list", action="store_true", help="print the available presets and exit")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list:
        for name in player_names():
            print(name)
        return 0

    for name in (args.white, args.black):
        if name not in player_names():
            parser.error(f"unknown player type {name!r}; use --list to see the presets")

    try:
        board = chess.Board(args.fen) if args.fen else chess.Board()
    except ValueError as e:
        parser.error(f"invalid FEN: {e}")

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    match = Match(
        create_player(args.white, chess.WHITE),
        create_player(args.black, chess.BLACK),
        board=board,
        max_plies=args.max_plies,
    )
    result = match.play()

    print(match.board)
    print("----------------------------")
    print(f"{args.white} vs {args.black}: {result.result} after {result.plies} plies")
    return 0


if __name__ == "__main__":
    sys.exit(main())
