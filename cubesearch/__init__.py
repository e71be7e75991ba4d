__version__ = "0.1.0"
__author__ = "Vivaan Singhvi"

from cubesearch.cube import (
    SOLVED, Configuration, Move, MoveTable, apply_moves, compose, fingerprint, initialize_moves, is_solved
)
from cubesearch.solver import IDAStar, SearchResult, solve
