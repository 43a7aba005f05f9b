"""Tracing module: logs Sudoku solver steps and writes them to CSV."""

import csv
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class TraceStep:
    """A single step in the solving process."""

    timestamp: float
    step_number: int
    action_type: str  # 'assign', 'domain_reduced', 'contradiction', 'backtrack', 'snapshot', ...
    cell: Optional[str] = None
    label: Optional[int] = None
    candidates_left: Optional[int] = None
    determined_cells: Optional[int] = None
    reason: Optional[str] = None  # 'given', 'search', 'naked_single', 'hidden_single', ...


class Tracer:
    """Records solver steps for logging and analysis."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.steps: List[TraceStep] = []
        self.start_time = datetime.now().timestamp()
        self.step_counter = 0

    def _get_timestamp(self) -> float:
        """Get elapsed time in seconds since tracer creation."""
        return datetime.now().timestamp() - self.start_time

    def _record(self, action_type: str, **fields: Any) -> None:
        if not self.enabled:
            return
        self.step_counter += 1
        self.steps.append(TraceStep(
            timestamp=self._get_timestamp(),
            step_number=self.step_counter,
            action_type=action_type,
            **fields,
        ))

    def log_assign(self, cell: str, label: int, reason: str = "search"):
        """Log a cell being fixed to a single label."""
        self._record('assign', cell=cell, label=label, candidates_left=1, reason=reason)

    def log_domain_reduction(self, cell: str, label: int, candidates_left: int):
        """Log a label removed from a cell's candidates."""
        self._record('domain_reduced', cell=cell, label=label, candidates_left=candidates_left)

    def log_contradiction(self, cell: str, label: int, reason: str):
        """Log a contradiction found during propagation."""
        self._record('contradiction', cell=cell, label=label, reason=reason)

    def log_backtrack(self, cell: str, reason: str = "No candidate label succeeded"):
        """Log a backtrack event."""
        self._record('backtrack', cell=cell, reason=reason)

    def log_snapshot(self, determined_cells: int):
        self._record('snapshot', determined_cells=determined_cells)

    def log_restore(self, determined_cells: int):
        self._record('restore', determined_cells=determined_cells)

    def log_solution_found(self, determined_cells: int):
        """Log when a solution is found."""
        self._record('solution_found', determined_cells=determined_cells)

    def to_csv(self, filepath: Path) -> None:
        """Write trace to CSV file."""
        if not self.steps:
            print("No trace steps to write")
            return

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        fieldnames = [
            'timestamp', 'step_number', 'action_type', 'cell', 'label',
            'candidates_left', 'determined_cells', 'reason'
        ]

        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for step in self.steps:
                writer.writerow(asdict(step))

        print(f"Trace written to {filepath} ({len(self.steps)} steps)")

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the trace."""
        action_counts: Dict[str, int] = {}
        for step in self.steps:
            action_counts[step.action_type] = action_counts.get(step.action_type, 0) + 1

        assigns = [s for s in self.steps if s.action_type == 'assign']
        return {
            'total_steps': len(self.steps),
            'elapsed_time_seconds': self._get_timestamp(),
            'action_counts': action_counts,
            'num_assignments': len(assigns),
            'num_guesses': sum(1 for s in assigns if s.reason == 'search'),
            'num_backtracks': action_counts.get('backtrack', 0),
            'num_contradictions': action_counts.get('contradiction', 0),
        }


# Global tracer instance
_global_tracer: Optional[Tracer] = None


def get_tracer() -> Tracer:
    """Get or create the global tracer."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = Tracer(enabled=True)
    return _global_tracer


def reset_tracer() -> None:
    """Reset the global tracer."""
    global _global_tracer
    _global_tracer = None


def enable_tracing(enabled: bool = True) -> None:
    """Enable or disable tracing."""
    get_tracer().enabled = enabled
