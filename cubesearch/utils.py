from __future__ import annotations
import re
import random
from typing import Optional, Union

from cubesearch.enums import Face
from cubesearch.error import InvalidTurnException

FACE_ORDER = "RLUDFB"
MOVE_NAMES = [f"{face}{suffix}" for face in FACE_ORDER for suffix in ["", "'", "2"]]
MOVE_PATTERN = re.compile(r"([URFDLB])(['2]?)")

def get_root_move(move: str) -> str:
    """
    Gets the face letter from a given move
    """
    if (match := MOVE_PATTERN.fullmatch(move)) is None:
        raise InvalidTurnException(f"Unknown move: {move!r}")
    return match.group(1)

def get_dist(move: str) -> int:
    """
    Returns the clockwise distance of a move
    """
    return 3 if move[-1] == "'" else 2 if move[-1] == '2' else 1

def get_final_move(move: str, dist: int) -> str:
    """
    Gets the final representation of the move given root and distance
    """
    addon = ['', '', '2', "'"][dist % 4]
    return f"{move}{addon}"

def parse_moves(moves: Union[str, list[str]]) -> list[str]:
    """
    Splits a space seperated string of moves and checks every move.
    >>> parse_moves("R U2  F'")
    ['R', 'U2', "F'"]
    """
    if isinstance(moves, str):
        moves = moves.split()
    for move in moves:
        get_root_move(move)
    return list(moves)

def clean_moves(moves: list[str]) -> list[str]:
    """
    Replaces groups of moves (2, 3, 4) on the same face with the appropriate move.
    >>> clean_moves(['R', 'R', 'R'])
    ["R'"]
    >>> clean_moves(['F', 'F2', 'F'])
    []
    """

    new_moves = []
    prev_root = None
    prev_move_dist = 0
    for move in moves:
        root = get_root_move(move)
        if root == prev_root:
            prev_move_dist += get_dist(move)
        else:
            if prev_root is not None and prev_move_dist % 4 != 0:
                new_moves.append(get_final_move(prev_root, prev_move_dist))
            prev_move_dist = get_dist(move)
            prev_root = root
    if prev_root is None or prev_move_dist % 4 == 0:
        return new_moves
    return [*new_moves, get_final_move(prev_root, prev_move_dist)]

def is_redundant_move(last_move: Optional[str], move: str) -> bool:
    """
    Checks if a move is useless right after the last one.
    Turning the same face twice can always be merged into one turn,
    and turns of opposite faces commute, so only one of their orders is kept:
    R then L is redundant, but L then R is not.
    """
    if last_move is None:
        return False
    last_face, face = get_root_move(last_move), get_root_move(move)
    if last_face == face:
        return True
    return Face[face] is Face[last_face].opposite and last_face > face

def generate_scramble(length: int, moves: Optional[list[str]] = None, rng: Optional[random.Random] = None) -> list[str]:
    """
    Returns a random sequence of moves without redundant neighbours.
    """
    if moves is None:
        moves = MOVE_NAMES
    if rng is None:
        rng = random.Random()

    scramble = []
    for _ in range(length):
        last_move = scramble[-1] if scramble else None
        candidates = [m for m in moves if not is_redundant_move(last_move, m)]
        if not candidates:
            break
        scramble.append(rng.choice(candidates))
    return scramble
