import random
import argparse

from cubesearch.cube import Configuration, initialize_moves
from cubesearch.heuristics import HEURISTICS
from cubesearch.solver import IDAStar
from cubesearch.utils import clean_moves, generate_scramble, parse_moves

def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="python -m cubesearch.solver")
    parser.add_argument("-c", "--custom-scramble", help="solve your own scramble, e.g. \"R U R' F\"", type=str)
    parser.add_argument("-r", "--random-scramble", help="solve a random scramble of the given length", type=int)
    parser.add_argument("-s", "--seed", help="seed for the random scramble", type=int)
    parser.add_argument("-m", "--max-bound", help="the longest solution to look for", type=int, default=20)
    parser.add_argument("-H", "--heuristic", help="the distance estimate to use", choices=[*HEURISTICS], default="misplaced")
    parser.add_argument("--no-pruning", help="also try turning the same or opposite face twice in a row", action="store_true")
    parser.add_argument("-p", "--print-scramble", help="print the scramble of the cube", action="store_true")
    parser.add_argument("-d", "--debug", help="print every threshold pass", action="store_true")
    return parser.parse_args(argv)

def main(argv=None) -> int:
    args = parse_args(argv)
    move_table = initialize_moves()

    if args.custom_scramble:
        scramble = clean_moves(parse_moves(args.custom_scramble))
    else:
        length = 6 if args.random_scramble is None else args.random_scramble
        scramble = generate_scramble(length, rng=random.Random(args.seed))
    if args.print_scramble:
        print(f"Scramble: {' '.join(scramble)}")

    solver = IDAStar(
        move_table=move_table,
        heuristic=HEURISTICS[args.heuristic],
        prune_same_face=not args.no_pruning,
        prune_opposite_faces=not args.no_pruning,
        debug=args.debug
    )
    result = solver.solve(Configuration.from_moves(scramble, move_table), args.max_bound)

    if result.found:
        print(f"Solution ({len(result.moves)} moves): {' '.join(result.moves)}")
    else:
        print(f"No solution within bound {args.max_bound}")
    print(f"Nodes: {result.nodes_explored}, time: {result.elapsed:.3f}s")
    return 0 if result.found else 1

if __name__ == "__main__":
    raise SystemExit(main())
