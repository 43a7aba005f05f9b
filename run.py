"""CLI entrypoint: load puzzle(s), run solver, and report results."""

import argparse
import csv
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from solver import solve_puzzle
from src.sudoku.config import SolverConfig
from src.sudoku.loader import load_puzzles
from src.sudoku.parser import PuzzleFormatError, format_board
from src.utils.io import read_text
from src.utils.trace import get_tracer, reset_tracer

PUZZLE_SUFFIXES = [".txt", ".json", ".jsonl", ".parquet", ".csv"]


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Solve generalized N x N Sudoku puzzles")
    parser.add_argument(
        "input",
        type=Path,
        nargs="?",
        default=None,
        help="Puzzle file or directory of puzzles; reads one grid from stdin when omitted",
    )
    parser.add_argument(
        "--size",
        type=int,
        default=None,
        help="Side length of the grid (a perfect square); inferred from the input when omitted",
    )
    parser.add_argument("--output", type=Path, default=None, help="Optional path to write results CSV")
    parser.add_argument("--trace", type=Path, default=None, help="Optional path to write the solver trace CSV")
    parser.add_argument("--no-trace", action="store_true", help="Disable step tracing")
    return parser.parse_args(argv)


def collect_puzzles(input_path: Optional[Path], size: Optional[int]) -> List[Dict[str, Any]]:
    if input_path is None:
        puzzles = [{"id": "stdin", "puzzle": read_text()}]
    elif input_path.is_file():
        puzzles = load_puzzles(str(input_path))
    elif input_path.is_dir():
        puzzles = []
        for file_path in sorted(input_path.iterdir()):
            if file_path.suffix in PUZZLE_SUFFIXES:
                puzzles.extend(load_puzzles(str(file_path)))
    else:
        raise ValueError(f"Input path {input_path} is neither file nor directory")

    if size is not None:
        for puzzle in puzzles:
            puzzle["size"] = size
    return puzzles


def _trace_path_for(base: Path, puzzle_id: str, many: bool) -> Path:
    if not many:
        return base
    return base.with_name(f"{base.stem}_{puzzle_id}{base.suffix or '.csv'}")


def write_results_csv(results, output_path: Path):
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["id", "solution", "status", "steps"])

        for r in results:
            writer.writerow([
                r["id"],
                json.dumps(r["solution"], separators=(",", ":")),
                r["status"],
                r["steps"],
            ])


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    config = SolverConfig(trace_enabled=False if args.no_trace else None, trace_path=args.trace)

    puzzles = collect_puzzles(args.input, args.size)
    many = len(puzzles) > 1
    results = []

    for puzzle in puzzles:
        reset_tracer()
        tracer = get_tracer()
        tracer.enabled = config.trace_enabled
        puzzle_id = str(puzzle.get("id", "unknown"))

        try:
            result = solve_puzzle(puzzle, tracer)
        except PuzzleFormatError as e:
            print(f"ERROR: Failed to parse puzzle {puzzle_id}: {e}")
            results.append({"id": puzzle_id, "solution": None, "status": "error", "steps": -1, "text": None})
            continue

        summary = tracer.summary()
        results.append({
            "id": puzzle_id,
            "solution": result.board.values() if result.solved else None,
            "status": result.status,
            # Counts givens, deductions and guesses alike.
            "steps": summary.get("num_assignments", summary["total_steps"]),
            "text": format_board(result.board) if result.solved else config.failure_marker,
        })

        if config.trace_path:
            tracer.to_csv(_trace_path_for(config.trace_path, puzzle_id, many))

    if args.output:
        write_results_csv(results, args.output)
    elif many:
        for r in results:
            print(f"{r['id']}: {r['status']} ({r['steps']} steps)")
            if r["text"]:
                print(r["text"])
    elif results:
        print(results[0]["text"] or config.failure_marker)

    return 0 if results and all(r["status"] == "solved" for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
