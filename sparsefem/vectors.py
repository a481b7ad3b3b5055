"""Small helpers on dense vectors."""

from __future__ import annotations

import math
from collections.abc import Sequence


def norm_l2(vec: Sequence[float], normalize: bool = False) -> float:
    """Euclidean norm of ``vec``; divided by the length under the root when ``normalize``."""
    total = max(sum(v * v for v in vec), 0.0)
    if not normalize:
        return math.sqrt(total)
    if not vec:
        return math.nan
    return math.sqrt(total / len(vec))


def dot(a: Sequence[float], b: Sequence[float]) -> float:
    """Dot product of two vectors of equal length."""
    if len(a) != len(b):
        raise ValueError(f"dot: Mismatching vector sizes {len(a)} and {len(b)}")
    return sum(x * y for x, y in zip(a, b))