"""
Run-length helpers shared by the boundary and font scans
"""

import numpy as np
from typing import List, Optional, Tuple


def find_runs(mask: np.ndarray, keep_open_end: bool = True) -> List[Tuple[int, int]]:
    """
    Locate runs of consecutive True values in a 1-D mask.

    Args:
        mask: 1-D boolean array
        keep_open_end: Keep a run that is still open at the end of the mask

    Returns:
        List of (start, end) pairs, end exclusive, in scan order
    """
    mask = np.asarray(mask, dtype=bool)
    if mask.size == 0:
        return []

    padded = np.concatenate(([False], mask, [False])).astype(np.int8)
    steps = np.diff(padded)
    starts = np.flatnonzero(steps == 1)
    ends = np.flatnonzero(steps == -1)

    runs = [(int(s), int(e)) for s, e in zip(starts, ends)]
    if not keep_open_end and runs and runs[-1][1] == mask.size:
        runs.pop()
    return runs


def first_run_start(mask: np.ndarray, min_length: int) -> Optional[int]:
    """Start index of the first run at least min_length long."""
    for start, end in find_runs(mask):
        if end - start >= min_length:
            return start
    return None


def last_run_end(mask: np.ndarray, min_length: int) -> Optional[int]:
    """Last index (inclusive) of the last run at least min_length long."""
    for start, end in reversed(find_runs(mask)):
        if end - start >= min_length:
            return end - 1
    return None


def hysteresis_runs(values: np.ndarray, enter: float, leave: float) -> List[Tuple[int, int]]:
    """
    Two-state scan: a run opens when a value rises above ``enter`` and closes
    at the first value below ``leave``. A run still open at the end is dropped.
    """
    runs = []
    in_run = False
    start = 0

    for i, value in enumerate(values):
        if not in_run and value > enter:
            in_run = True
            start = i
        elif in_run and value < leave:
            in_run = False
            runs.append((start, i))

    return runs

