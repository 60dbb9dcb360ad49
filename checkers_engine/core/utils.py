from typing import Iterable


def min_score(values: Iterable[float]) -> float:
    """Smallest of `values`; an empty input is an error, never a default."""
    values = list(values)
    if not values:
        raise ValueError("min_score() arg is an empty sequence")
    return min(values)


def format_info(depth, score, nodes, elapsed, move, pruning):
    nps = int(nodes / elapsed) if elapsed > 0 else 0
    move_str = str(move) if move is not None else "-"
    return (f"info depth {depth} score {score} nodes {nodes} nps {nps} "
            f"time {int(elapsed * 1000)} pruning {'on' if pruning else 'off'} bestmove {move_str}")
