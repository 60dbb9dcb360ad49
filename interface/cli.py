"""Terminal front end: play against the engine, watch it play itself, run perft."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Optional

from checkers_engine.config import CONFIG
from checkers_engine.core.board import Side, initial_position
from checkers_engine.core.moves import legal_moves
from checkers_engine.main import Engine, self_play
from checkers_engine.notation import format_move, render_board
from checkers_engine.perft import perft, perft_divide

logger = logging.getLogger("checkers_engine.cli")

CLEAR_SCREEN = "\033[2J\033[H"


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None):
    """Configure the root logger once: stderr, plus a file when asked."""
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=(level or CONFIG.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )


def clear_screen(enabled: bool):
    if enabled:
        print(CLEAR_SCREEN, end="", flush=True)


def _announce_result(engine: Engine):
    winner = engine.winner()
    if winner is not None:
        print(f"Game over: {winner.value} wins.")
    else:
        print(f"Game over: {engine.state.side.value} has no legal moves and loses.")


def cmd_play(args: argparse.Namespace) -> int:
    engine = Engine(depth=args.depth, pruning=not args.no_pruning)
    human = Side(args.human)
    clear = CONFIG.ui.clear_screen and not args.no_clear
    message = ""

    while True:
        clear_screen(clear)
        engine.print_board()
        print()
        if message:
            print(message)
            message = ""

        if engine.is_game_over() or not legal_moves(engine.state):
            _announce_result(engine)
            return 0

        if engine.state.side is human:
            print("Legal moves:", ", ".join(engine.get_legal_moves()))
            try:
                text = input(f"Your move ({human.value}), e.g. c3 d4: ").strip()
            except EOFError:
                return 0
            if text.lower() in ("quit", "exit"):
                return 0
            if not engine.make_move(text):
                message = "Illegal move, try again."
                continue
        else:
            start = time.time()
            move_str, score = engine.get_best_move()
            elapsed = time.time() - start
            logger.info("Engine move %s (score %s) in %.2fs", move_str, score, elapsed)
            engine.make_move(move_str)
            message = f"Engine plays: {move_str} | Eval: {score} | {elapsed:.2f}s"


def cmd_selfplay(args: argparse.Namespace) -> int:
    engine = Engine(depth=args.depth, pruning=not args.no_pruning)
    for ply in range(args.plies):
        if engine.is_game_over():
            break
        start = time.time()
        move_str, score = engine.get_best_move()
        if move_str is None:
            break
        engine.make_move(move_str)
        print(f"{ply + 1}. {move_str} (score {score}, {time.time() - start:.2f}s)")
        engine.print_board()
        print()
    if engine.is_game_over() or not legal_moves(engine.state):
        _announce_result(engine)
    return 0


def cmd_compare(args: argparse.Namespace) -> int:
    results = {}
    for pruning in (True, False):
        start = time.time()
        state, moves, nodes = self_play(args.depth, args.plies, pruning=pruning)
        results[pruning] = (state, moves)
        label = "with pruning" if pruning else "without pruning"
        print(f"{label:>16}: {nodes} nodes in {time.time() - start:.2f}s")
    same = results[True] == results[False]
    print("Moves:", ", ".join(format_move(m) for m in results[True][1]))
    print("Final positions identical:", "yes" if same else "NO")
    if not same:
        logger.error("Pruning changed the game at depth %d", args.depth)
        return 1
    return 0


def cmd_perft(args: argparse.Namespace) -> int:
    state = initial_position()
    if args.divide:
        out = perft_divide(state, args.depth)
        for k in sorted(out):
            print(f"{k}: {out[k]}")
        print(f"Total: {sum(out.values())}")
    else:
        print(perft(state, args.depth))
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    state = initial_position()
    print(render_board(state))
    print()
    print(f"{state.side.value} to move:", ", ".join(format_move(m) for m in legal_moves(state)))
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="checkers", description=CONFIG.ui.engine_name)
    ap.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    ap.add_argument("--log-file", default=CONFIG.log_file, help="also write the log to this file")
    sub = ap.add_subparsers(dest="cmd", required=True)

    pl = sub.add_parser("play", help="Play against the engine")
    pl.add_argument("--human", choices=[s.value for s in Side], default=CONFIG.ui.human_side)
    pl.add_argument("--depth", type=int, default=CONFIG.search.depth)
    pl.add_argument("--no-pruning", action="store_true")
    pl.add_argument("--no-clear", action="store_true", help="do not clear the terminal between plies")
    pl.set_defaults(fn=cmd_play)

    sp = sub.add_parser("selfplay", help="Let the engine play both sides")
    sp.add_argument("--depth", type=int, default=CONFIG.search.depth)
    sp.add_argument("--plies", type=int, default=10)
    sp.add_argument("--no-pruning", action="store_true")
    sp.set_defaults(fn=cmd_selfplay)

    cp = sub.add_parser("compare", help="Self-play with and without pruning and compare")
    cp.add_argument("--depth", type=int, default=CONFIG.search.depth)
    cp.add_argument("--plies", type=int, default=10)
    cp.set_defaults(fn=cmd_compare)

    pf = sub.add_parser("perft", help="Count move-generator leaf nodes")
    pf.add_argument("--depth", type=int, default=3)
    pf.add_argument("--divide", action="store_true")
    pf.set_defaults(fn=cmd_perft)

    ss = sub.add_parser("show", help="Show the starting position")
    ss.set_defaults(fn=cmd_show)
    return ap


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)
    if getattr(args, "depth", 1) < 1:
        print("--depth must be a positive integer", file=sys.stderr)
        return 2
    return int(args.fn(args))


if __name__ == "__main__":
    raise SystemExit(main())
