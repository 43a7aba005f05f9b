"""
Solver configuration.

Values left unset are read from environment variables:
SUDOKU_TRACE ("0"/"false" disables tracing) and SUDOKU_TRACE_PATH.
"""

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Optional

FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class SolverConfig:
    """Configuration for a solving session."""

    trace_enabled: Optional[bool] = None
    trace_path: Optional[Path] = None

    # Printed instead of a grid when no solution is found
    failure_marker: str = "FAILED"

    def __post_init__(self):
        if self.trace_enabled is None:
            raw = os.getenv("SUDOKU_TRACE", "1")
            self.trace_enabled = raw.strip().lower() not in FALSE_VALUES
        if self.trace_path is None:
            raw_path = os.getenv("SUDOKU_TRACE_PATH", "")
            self.trace_path = Path(raw_path) if raw_path else None
