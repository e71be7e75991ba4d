from __future__ import annotations
from collections.abc import Mapping
from typing import Iterator, Optional, Sequence, Union

import numpy as np

from cubesearch.enums import Corner, Edge, Face
from cubesearch.error import InvalidConfigurationException, InvalidTurnException
from cubesearch.utils import FACE_ORDER, get_final_move, parse_moves

N_CORNERS = len(Corner)
N_EDGES = len(Edge)

# offsets of the four sequences inside the packed array
CP, CO, EP, EO = 0, N_CORNERS, 2 * N_CORNERS, 2 * N_CORNERS + N_EDGES

MODULI = np.array(
    [N_CORNERS] * N_CORNERS + [3] * N_CORNERS + [N_EDGES] * N_EDGES + [2] * N_EDGES,
    dtype=np.int8
)

class Configuration():

    """
    Stores the state of the cube's movable pieces as a single
    read-only array of 40 small integers:

        cp | co | ep | eo
         8    8   12   12

    cp[i] is the corner piece sitting in corner slot i, and co[i] its twist
    (0, 1 or 2 clockwise thirds). ep and eo do the same for the 12 edges,
    with a flip of 0 or 1. Slots are numbered as in the Corner and Edge enums.

    Configurations are values: composing returns a new one, and two
    configurations are equal when all four sequences are.
    """

    __slots__ = ("_data", "_operands")

    def __init__(
        self,
        cp: Optional[Sequence[int]] = None,
        co: Optional[Sequence[int]] = None,
        ep: Optional[Sequence[int]] = None,
        eo: Optional[Sequence[int]] = None
    ):
        parts = [
            np.arange(N_CORNERS) if cp is None else np.asarray(cp),
            np.zeros(N_CORNERS, dtype=int) if co is None else np.asarray(co),
            np.arange(N_EDGES) if ep is None else np.asarray(ep),
            np.zeros(N_EDGES, dtype=int) if eo is None else np.asarray(eo),
        ]
        # (length, number of allowed values) per sequence
        bounds = [(N_CORNERS, N_CORNERS), (N_CORNERS, 3), (N_EDGES, N_EDGES), (N_EDGES, 2)]
        for part, (size, limit), label in zip(parts, bounds, ["cp", "co", "ep", "eo"]):
            if part.shape != (size,):
                raise InvalidConfigurationException(f"{label} must hold {size} values, got shape {part.shape}")
            if not np.issubdtype(part.dtype, np.integer):
                raise InvalidConfigurationException(f"{label} must hold integers, got {part.dtype}")
            if np.any((part < 0) | (part >= limit)):
                raise InvalidConfigurationException(f"{label} values must be between 0 and {limit - 1}, got {part.tolist()}")
        self._set_data(np.concatenate(parts).astype(np.int8))

    def _set_data(self, data: np.ndarray) -> None:
        data.flags.writeable = False
        self._data = data
        self._operands = None

    @staticmethod
    def _wrap(data: np.ndarray) -> Configuration:
        """ Builds a configuration around an already packed array, skipping the checks """
        config = Configuration.__new__(Configuration)
        config._set_data(data)
        return config

    @staticmethod
    def from_moves(moves: Union[str, list[str]], move_table: Optional[MoveTable] = None) -> Configuration:
        """
        Returns the configuration reached by turning a solved cube.
        """
        return apply_moves(SOLVED, moves, move_table)

    @property
    def cp(self) -> np.ndarray:
        return self._data[CP:CO]

    @property
    def co(self) -> np.ndarray:
        return self._data[CO:EP]

    @property
    def ep(self) -> np.ndarray:
        return self._data[EP:EO]

    @property
    def eo(self) -> np.ndarray:
        return self._data[EO:]

    @property
    def array(self) -> np.ndarray:
        """ The packed read-only array """
        return self._data

    def operands(self) -> tuple[np.ndarray, np.ndarray]:
        """
        Returns the gather indices and orientation offsets used when this
        configuration is applied after another one.
        """
        if self._operands is None:
            cp, ep = self.cp.astype(np.intp), self.ep.astype(np.intp)
            gather = np.concatenate([cp + CP, cp + CO, ep + EP, ep + EO])
            delta = self._data.copy()
            delta[CP:CO] = 0
            delta[EP:EO] = 0
            self._operands = (gather, delta)
        return self._operands

    def compose(self, other: Configuration) -> Configuration:
        return compose(self, other)

    def __mul__(self, other: Configuration) -> Configuration:
        return compose(self, other)

    def is_solved(self) -> bool:
        return is_solved(self)

    def fingerprint(self) -> bytes:
        return fingerprint(self)

    def validate(self) -> Configuration:
        """
        Checks that the configuration can be reached by turning the faces.
        Throws an InvalidConfigurationException if:
            cp or ep is not a permutation
            an orientation is out of range
            the corner twists don't add up to 0 (mod 3)
            the edge flips don't add up to 0 (mod 2)
            the corner and edge permutations have different parities
        """
        for perm, size, label in [(self.cp, N_CORNERS, "corner"), (self.ep, N_EDGES, "edge")]:
            if not np.array_equal(np.sort(perm), np.arange(size)):
                raise InvalidConfigurationException(f"The {label} permutation {perm.tolist()} is not a permutation of 0..{size - 1}")
        for ori, mod, label in [(self.co, 3, "corner"), (self.eo, 2, "edge")]:
            if np.any((ori < 0) | (ori >= mod)):
                raise InvalidConfigurationException(f"The {label} orientations {ori.tolist()} must be between 0 and {mod - 1}")
            if int(ori.sum()) % mod != 0:
                raise InvalidConfigurationException(f"The {label} orientations don't add up to 0 (mod {mod})")
        if permutation_parity(self.cp) != permutation_parity(self.ep):
            raise InvalidConfigurationException("The corner and edge permutations have different parities")
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Configuration):
            return NotImplemented
        return np.array_equal(self._data, other._data)

    def __hash__(self) -> int:
        return hash(self._data.tobytes())

    def __repr__(self) -> str:
        return f"Configuration(cp={self.cp.tolist()}, co={self.co.tolist()}, ep={self.ep.tolist()}, eo={self.eo.tolist()})"

class Move(Configuration):
    """
    A named face turn. The configuration part is the effect
    of the turn on a solved cube.
    """

    __slots__ = ("name", "face", "dist")

    def __init__(self, name: str, face: Face, dist: int, configuration: Configuration):
        self._set_data(configuration.array)
        self.name = name
        self.face = face
        self.dist = dist
        self.operands()

    def __repr__(self) -> str:
        return f"Move({self.name!r})"

def compose(a: Configuration, m: Configuration) -> Configuration:
    """
    Applies m after a:
        cp[i] = a.cp[m.cp[i]]
        co[i] = (a.co[m.cp[i]] + m.co[i]) % 3
    and the same for edges (mod 2). Not commutative.
    """
    gather, delta = m.operands()
    return Configuration._wrap((a.array[gather] + delta) % MODULI)

def is_solved(c: Configuration) -> bool:
    return np.array_equal(c.array, SOLVED.array)

def fingerprint(c: Configuration) -> bytes:
    """ Key for set membership, equal iff the configurations are equal """
    return c.array.tobytes()

def permutation_parity(perm: Sequence[int]) -> int:
    """
    Returns 0 for even permutations and 1 for odd ones, by counting
    the cycles: a cycle of length k is made of k - 1 swaps.
    >>> permutation_parity([1, 0, 2])
    1
    """
    perm = [int(p) for p in perm]
    seen = [False] * len(perm)
    swaps = 0
    for start in range(len(perm)):
        length = 0
        i = start
        while not seen[i]:
            seen[i] = True
            i = perm[i]
            length += 1
        swaps += max(length - 1, 0)
    return swaps % 2

SOLVED = Configuration()

# Quarter turn generators (clockwise, looking at the face)
BASIC_TURNS = {
    Face.U: Configuration(
        cp=[3, 0, 1, 2, 4, 5, 6, 7],
        co=[0, 0, 0, 0, 0, 0, 0, 0],
        ep=[3, 0, 1, 2, 4, 5, 6, 7, 8, 9, 10, 11],
        eo=[0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0]
    ),
    Face.R: Configuration(
        cp=[4, 1, 2, 0, 7, 5, 6, 3],
        co=[2, 0, 0, 1, 1, 0, 0, 2],
        ep=[8, 1, 2, 3, 11, 5, 6, 7, 4, 9, 10, 0],
        eo=[0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0]
    ),
    Face.F: Configuration(
        cp=[1, 5, 2, 3, 0, 4, 6, 7],
        co=[1, 2, 0, 0, 2, 1, 0, 0],
        ep=[0, 9, 2, 3, 4, 8, 6, 7, 1, 5, 10, 11],
        eo=[0, 1, 0, 0, 0, 1, 0, 0, 1, 1, 0, 0]
    ),
    Face.D: Configuration(
        cp=[0, 1, 2, 3, 5, 6, 7, 4],
        co=[0, 0, 0, 0, 0, 0, 0, 0],
        ep=[0, 1, 2, 3, 5, 6, 7, 4, 8, 9, 10, 11],
        eo=[0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0]
    ),
    Face.L: Configuration(
        cp=[0, 2, 6, 3, 4, 1, 5, 7],
        co=[0, 1, 2, 0, 0, 2, 1, 0],
        ep=[0, 1, 10, 3, 4, 5, 9, 7, 8, 2, 6, 11],
        eo=[0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0]
    ),
    Face.B: Configuration(
        cp=[0, 1, 3, 7, 4, 5, 2, 6],
        co=[0, 0, 1, 2, 0, 0, 2, 1],
        ep=[0, 1, 2, 11, 4, 5, 6, 10, 8, 9, 3, 7],
        eo=[0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 1, 1]
    ),
}

class MoveTable(Mapping):
    """
    Read-only mapping from move names ("R", "R'", "R2", ...) to moves.
    Iterates in the order the moves were built, which is also the
    order the solver tries them in.
    """

    def __init__(self, moves: list[Move]):
        self._moves = {move.name: move for move in moves}

    def __getitem__(self, name: str) -> Move:
        return self._moves[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._moves)

    def __len__(self) -> int:
        return len(self._moves)

    def lookup(self, name: str) -> Move:
        """ Like table[name], but throws an InvalidTurnException for unknown moves """
        try:
            return self._moves[name]
        except KeyError:
            raise InvalidTurnException(f"Move {name!r} is not part of the move table") from None

    def inverse(self, name: str) -> Move:
        """ The turn of the same face that undoes the given move """
        move = self.lookup(name)
        return self.lookup(get_final_move(move.face.name, -move.dist))

    def __repr__(self) -> str:
        return f"MoveTable({list(self._moves)})"

def initialize_moves(faces: str = FACE_ORDER) -> MoveTable:
    """
    Builds the quarter, half and inverse turn of every given face
    by composing the face's generator with itself.
    >>> list(initialize_moves("R"))
    ['R', "R'", 'R2']
    """
    for letter in faces:
        if letter not in Face.__members__:
            raise InvalidTurnException(f"Unknown face: {letter!r}")

    moves = []
    for letter in FACE_ORDER:
        if letter not in faces:
            continue
        face = Face[letter]
        quarter = BASIC_TURNS[face]
        half = compose(quarter, quarter)
        inverse = compose(half, quarter)
        for dist, config in [(1, quarter), (3, inverse), (2, half)]:
            moves.append(Move(get_final_move(letter, dist), face, dist, config))
    return MoveTable(moves)

def apply_moves(c: Configuration, moves: Union[str, list[str]], move_table: Optional[MoveTable] = None) -> Configuration:
    """
    Replays a sequence of moves (a list of names or a space seperated string)
    """
    if move_table is None:
        move_table = initialize_moves()
    for name in parse_moves(moves):
        c = compose(c, move_table.lookup(name))
    return c
