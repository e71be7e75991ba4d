import random

import pytest

from cubesearch.cube import SOLVED, Configuration, apply_moves, initialize_moves, is_solved
from cubesearch.error import InvalidConfigurationException
from cubesearch.heuristics import HEURISTICS, piece_count_heuristic, zero_heuristic
from cubesearch.solver import IDAStar, SearchProgress, solve
from cubesearch.solver.__main__ import main
from cubesearch.utils import generate_scramble, get_root_move

MOVES = initialize_moves()

def assert_solves(start: Configuration, moves: list[str], move_table=MOVES) -> None:
    assert is_solved(apply_moves(start, moves, move_table))

def test_solved_start() -> None:
    for bound in [0, 1, 20]:
        result = IDAStar(MOVES).solve(SOLVED, bound)
        assert result.found
        assert result.moves == []
        assert result.nodes_explored == 1
        assert result.iterations == 1

def test_scramble_scenario() -> None:
    start = Configuration.from_moves("R U R' F R F'", MOVES)
    result = IDAStar(MOVES).solve(start, 6)
    assert result.found
    assert len(result.moves) <= 6
    assert result.threshold <= 6
    assert_solves(start, result.moves)

def test_single_and_double_turns() -> None:
    assert solve(Configuration.from_moves("R", MOVES), 3).moves == ["R'"]
    assert solve(Configuration.from_moves("F2", MOVES), 3).moves == ["F2"]
    assert solve(Configuration.from_moves("R U", MOVES), 3).moves == ["U'", "R'"]

def test_exhausted_search() -> None:
    start = Configuration.from_moves("R U F", MOVES)
    result = IDAStar(MOVES).solve(start, 2)
    assert not result.found
    assert result.moves == []
    assert result.nodes_explored > 0
    assert result.threshold > 2

def test_bound_below_first_estimate() -> None:
    result = IDAStar(MOVES).solve(Configuration.from_moves("R U F", MOVES), 0)
    assert not result.found
    assert result.moves == []
    assert result.nodes_explored == 0
    assert result.iterations == 0

@pytest.mark.parametrize("name", [*HEURISTICS])
def test_admissible_heuristics_find_shortest_solutions(name: str) -> None:
    start = Configuration.from_moves("R U F", MOVES)
    result = IDAStar(MOVES, heuristic=HEURISTICS[name]).solve(start, 5)
    assert result.found
    assert len(result.moves) == 3
    assert_solves(start, result.moves)

def test_random_scrambles() -> None:
    rng = random.Random(2024)
    solver = IDAStar(MOVES, heuristic=piece_count_heuristic)
    for _ in range(4):
        scramble = generate_scramble(4, rng=rng)
        start = Configuration.from_moves(scramble, MOVES)
        result = solver.solve(start, 4)
        assert result.found
        assert len(result.moves) <= len(scramble)
        assert_solves(start, result.moves)

def test_no_pruning() -> None:
    solver = IDAStar(MOVES, prune_same_face=False, prune_opposite_faces=False)
    start = Configuration.from_moves("R U", MOVES)
    result = solver.solve(start, 3)
    assert result.moves == ["U'", "R'"]

def test_returning_to_an_ancestor_is_cut_off() -> None:
    # without move filters, every inverse turn at depth 2 lands back on the root
    solver = IDAStar(MOVES, heuristic=zero_heuristic, prune_same_face=False, prune_opposite_faces=False)
    start = Configuration.from_moves("R U", MOVES)
    result = solver.solve(start, 2)
    assert result.moves == ["U'", "R'"]
    assert result.iterations == 3
    # R R' R2 L L' L2 U are expanded before U' solves it
    assert result.revisits == 7
    assert_solves(start, result.moves)

    filtered = IDAStar(MOVES, heuristic=zero_heuristic).solve(start, 2)
    assert filtered.moves == ["U'", "R'"]
    assert filtered.revisits == 0

def test_visited_states_are_cleared_between_passes() -> None:
    reports: list[SearchProgress] = []
    solver = IDAStar(MOVES, heuristic=zero_heuristic, progress_callback=reports.append, progress_interval=1)
    start = Configuration.from_moves("R U", MOVES)
    result = solver.solve(start, 2)
    assert result.found
    depths = [r.current_depth for r in reports]
    # the root is entered once per pass and expanded every time
    assert depths.count(0) == result.iterations == 3
    roots = [i for i, depth in enumerate(depths) if depth == 0]
    assert all(depths[i + 1] == 1 for i in roots)

    # the solving pass leaves its path behind, a new solve starts over
    again = solver.solve(start, 2)
    assert again.moves == result.moves
    assert again.nodes_explored == result.nodes_explored

def test_pruning_rules() -> None:
    solver = IDAStar(MOVES)
    assert not solver.is_pruned(None, "R")
    assert solver.is_pruned("R", "R2")
    assert solver.is_pruned("R", "L")
    assert not solver.is_pruned("L", "R")
    assert not solver.is_pruned("R", "U")

    solver = IDAStar(MOVES, prune_same_face=False, prune_opposite_faces=False)
    assert not solver.is_pruned("R", "R2")
    assert not solver.is_pruned("R", "L")

def test_solutions_never_repeat_a_face() -> None:
    start = Configuration.from_moves("R U R' U'", MOVES)
    result = IDAStar(MOVES).solve(start, 4)
    assert result.found
    faces = [get_root_move(m) for m in result.moves]
    assert all(a != b for a, b in zip(faces, faces[1:]))

def test_reduced_move_table() -> None:
    table = initialize_moves("RU")
    start = Configuration.from_moves("R U R' U'", table)
    result = IDAStar(table).solve(start, 4)
    assert result.found
    assert {get_root_move(m) for m in result.moves} <= {"R", "U"}
    assert_solves(start, result.moves, table)

def test_progress_callback() -> None:
    reports: list[SearchProgress] = []
    solver = IDAStar(MOVES, progress_callback=reports.append, progress_interval=1)
    result = solver.solve(Configuration.from_moves("R U", MOVES), 3)
    assert len(reports) == result.nodes_explored
    assert [r.nodes_explored for r in reports] == list(range(1, result.nodes_explored + 1))
    assert all(0 <= r.current_depth <= 3 for r in reports)

def test_progress_interval_must_be_positive() -> None:
    for interval in [0, -5]:
        with pytest.raises(ValueError):
            IDAStar(MOVES, progress_callback=print, progress_interval=interval)

def test_debug_output(capsys) -> None:
    solver = IDAStar(MOVES)
    solver.set_debug(True)
    solver.solve(Configuration.from_moves("R U", MOVES), 3)
    assert "threshold" in capsys.readouterr().out

def test_engine_can_be_reused() -> None:
    solver = IDAStar(MOVES)
    first = solver.solve(Configuration.from_moves("R U", MOVES), 3)
    second = solver.solve(Configuration.from_moves("R U", MOVES), 3)
    assert first.moves == second.moves
    assert first.nodes_explored == second.nodes_explored

def test_invalid_start_is_rejected() -> None:
    twisted = Configuration(co=[1, 0, 0, 0, 0, 0, 0, 0])
    with pytest.raises(InvalidConfigurationException):
        solve(twisted, 5)

def test_command_line(capsys) -> None:
    assert main(["-c", "R U", "-m", "3", "-p"]) == 0
    out = capsys.readouterr().out
    assert "Scramble: R U" in out
    assert "Solution (2 moves): U' R'" in out

    assert main(["-c", "R U F", "-m", "1"]) == 1
    assert "No solution within bound 1" in capsys.readouterr().out

    assert main(["-r", "3", "-s", "5", "-H", "piece_count", "-m", "3"]) == 0
