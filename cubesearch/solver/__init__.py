from cubesearch.cube import Configuration
from cubesearch.solver.ida import IDAStar, SearchProgress, SearchResult

def solve(start: Configuration, max_bound: int = 20, **options) -> SearchResult:
    """
    Solves a configuration with a fresh IDAStar engine.
    The options are passed on to IDAStar, see its documentation.
    """
    return IDAStar(**options).solve(start, max_bound)
