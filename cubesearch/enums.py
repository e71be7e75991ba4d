from __future__ import annotations
from enum import Enum 

class Face(Enum):
    """ 
    Enums for faces, named by their letter in move notation.
    The values follow the U R F D L B order, so that a face and its 
    opposite are always three apart.
    """
    U = 0
    R = 1
    F = 2
    D = 3
    L = 4
    B = 5

    @property
    def opposite(self) -> Face:
        return Face((self.value + 3) % 6)

class Corner(Enum):
    """ Corner slots, named by the faces they touch (clockwise) """
    URF = 0
    UFL = 1
    ULB = 2
    UBR = 3
    DFR = 4
    DLF = 5
    DBL = 6
    DRB = 7

class Edge(Enum):
    """ Edge slots, named by the two faces they touch """
    UR = 0
    UF = 1
    UL = 2
    UB = 3
    DR = 4
    DF = 5
    DL = 6
    DB = 7
    FR = 8
    FL = 9
    BL = 10
    BR = 11
