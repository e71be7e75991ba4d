from __future__ import annotations
import math
from dataclasses import dataclass, field
from time import perf_counter
from typing import Callable, Optional, Union

from cubesearch.cube import Configuration, Move, MoveTable, compose, fingerprint, initialize_moves, is_solved
from cubesearch.heuristics import Heuristic, misplaced_heuristic
from cubesearch.utils import get_root_move, is_redundant_move

__doc__ = """
Iterative deepening A* over the face turns of the cube.

Each pass is a depth-first search that gives up on any node whose
f = g + h exceeds the current threshold. When a pass fails, the next
threshold is the smallest f that went over, until it passes max_bound.

Nodes are counted on entry to the recursive search, the root included,
so solving an already solved cube reports a single node.
"""

Bound = Union[int, float]

@dataclass
class SearchProgress:
    current_depth: int
    nodes_explored: int
    elapsed: float

@dataclass
class SearchResult:
    found: bool
    moves: list[str] = field(default_factory=list)
    nodes_explored: int = 0
    threshold: Bound = 0
    iterations: int = 0
    elapsed: float = 0.0
    revisits: int = 0

class IDAStar:
    """
    Arguments:
        move_table: the moves to search with, all 18 face turns by default
        heuristic: distance estimate, see cubesearch.heuristics
        prune_same_face: never turn the face that was just turned
        prune_opposite_faces: of two turns on opposite faces, only try one order
        progress_callback: called with a SearchProgress every progress_interval nodes
        progress_interval: how many nodes between two progress calls, at least 1
        debug: print a line after every pass
    """

    def __init__(
        self,
        move_table: Optional[MoveTable] = None,
        heuristic: Heuristic = misplaced_heuristic,
        prune_same_face: bool = True,
        prune_opposite_faces: bool = True,
        progress_callback: Optional[Callable[[SearchProgress], None]] = None,
        progress_interval: int = 1000,
        debug: bool = False
    ):
        if progress_interval < 1:
            raise ValueError(f"progress_interval must be at least 1, got {progress_interval}")
        self.move_table = initialize_moves() if move_table is None else move_table
        self.heuristic = heuristic
        self.prune_same_face = prune_same_face
        self.prune_opposite_faces = prune_opposite_faces
        self.progress_callback = progress_callback
        self.progress_interval = progress_interval
        self.__debug = debug
        self.__successors = self.__build_successors()
        self.__nodes = 0
        self.__start_time = 0.0
        self.__revisits = 0

    def set_debug(self, debug: bool):
        self.__debug = debug

    def is_pruned(self, last_move: Optional[str], move: str) -> bool:
        """ Checks if move is skipped right after last_move """
        if last_move is None:
            return False
        if get_root_move(last_move) == get_root_move(move):
            return self.prune_same_face
        return self.prune_opposite_faces and is_redundant_move(last_move, move)

    def __build_successors(self) -> dict[Optional[str], list[Move]]:
        """ For every possible last move, the moves to try next, in table order """
        names = [None, *self.move_table]
        return {
            last: [self.move_table[name] for name in self.move_table if not self.is_pruned(last, name)]
            for last in names
        }

    def solve(self, start: Configuration, max_bound: int = 20, validate: bool = True) -> SearchResult:
        """
        Searches for a sequence of at most max_bound moves solving start.
        Running out of bound is not an error: the result just has found=False.
        Throws an InvalidConfigurationException if start is validated and unreachable.
        """
        if validate:
            start.validate()

        self.__nodes = 0
        self.__start_time = perf_counter()
        self.__revisits = 0
        path: list[str] = []
        threshold: Bound = self.heuristic(start)
        iterations = 0

        while threshold <= max_bound:
            iterations += 1
            found, bound = self.__search(start, path, 0, threshold, set(), None)
            if self.__debug:
                print(f"threshold {threshold}: {self.__nodes} nodes, {perf_counter() - self.__start_time:.3f}s")
            if found:
                return SearchResult(True, list(path), self.__nodes, threshold, iterations, perf_counter() - self.__start_time, self.__revisits)
            threshold = bound

        return SearchResult(False, [], self.__nodes, threshold, iterations, perf_counter() - self.__start_time, self.__revisits)

    def __search(
        self,
        node: Configuration,
        path: list[str],
        g: int,
        threshold: Bound,
        visited: set[bytes],
        last_move: Optional[str]
    ) -> tuple[bool, Bound]:
        self.__nodes += 1
        if self.progress_callback is not None and self.__nodes % self.progress_interval == 0:
            self.progress_callback(SearchProgress(g, self.__nodes, perf_counter() - self.__start_time))

        f = g + self.heuristic(node)
        if f > threshold:
            return False, f

        # only ancestors on the current path are in visited
        key = fingerprint(node)
        if key in visited:
            self.__revisits += 1
            return False, math.inf

        if is_solved(node):
            return True, threshold

        visited.add(key)
        minimum: Bound = math.inf
        for move in self.__successors[last_move]:
            path.append(move.name)
            found, bound = self.__search(compose(node, move), path, g + 1, threshold, visited, move.name)
            if found:
                return True, bound
            path.pop()
            minimum = min(minimum, bound)
        visited.discard(key)
        return False, minimum
