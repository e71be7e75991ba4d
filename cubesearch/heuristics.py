from __future__ import annotations
from typing import Callable

import numpy as np

from cubesearch.cube import CP, CO, EP, EO, SOLVED, Configuration

__doc__ = """
Distance estimates for the solver. A heuristic is any function taking
a configuration and returning a non-negative integer; the solver
only finds shortest solutions if it never overestimates.

A face turn moves exactly 4 corners and 4 edges, so it can fix at most
4 misplaced corners and 4 misplaced edges. Both estimates below are
built on that, and neither overestimates.
"""

Heuristic = Callable[[Configuration], int]

def misplaced_pieces(c: Configuration) -> tuple[int, int]:
    """
    Counts the corner slots and edge slots whose piece
    or orientation is wrong.
    """
    wrong = c.array != SOLVED.array
    corners = np.count_nonzero(wrong[CP:CO] | wrong[CO:EP])
    edges = np.count_nonzero(wrong[EP:EO] | wrong[EO:])
    return int(corners), int(edges)

def misplaced_heuristic(c: Configuration) -> int:
    """ All misplaced pieces, 8 per turn """
    corners, edges = misplaced_pieces(c)
    return (corners + edges) // 8

def piece_count_heuristic(c: Configuration) -> int:
    """ Corners and edges counted seperately, 4 of each per turn """
    corners, edges = misplaced_pieces(c)
    return max(-(-corners // 4), -(-edges // 4))

def zero_heuristic(c: Configuration) -> int:
    return 0

HEURISTICS: dict[str, Heuristic] = {
    "misplaced": misplaced_heuristic,
    "piece_count": piece_count_heuristic,
    "zero": zero_heuristic,
}
