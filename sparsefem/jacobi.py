"""Jacobi iteration on CSR matrices."""

from __future__ import annotations

import logging
import math
from collections.abc import MutableSequence, Sequence

from sparsefem.csr import CsrMatrix

logger = logging.getLogger(__name__)


def jacobi_step(
    m: CsrMatrix, curr: MutableSequence[float], b: Sequence[float], old: Sequence[float]
) -> None:
    """Write into ``curr`` one Jacobi update computed from ``old``."""
    for i in range(m.rows):
        diag = 0.0
        neg_sum_terms = []
        for j in range(m.row_start[i], m.row_start[i + 1]):
            col = m.column[j]
            if col == i:
                diag = m.values[j]
            else:
                neg_sum_terms.append(m.values[j] * old[col])
        if diag == 0:
            raise ZeroDivisionError(f"Zero or missing diagonal element in row {i}")
        curr[i] = (b[i] - math.fsum(neg_sum_terms)) / diag


def jacobi(
    m: CsrMatrix, x: MutableSequence[float], b: Sequence[float], max_iters: int, eps: float
) -> float:
    """Iterate until the residual drops below ``eps``; ``x`` is updated in place.

    Returns the last residual, or -1 when no iteration ran.
    """
    if len(x) != m.cols:
        raise ValueError(f"jacobi: Bad size of x vector [{len(x)}] - expected {m.cols}")
    if len(b) != m.rows:
        raise ValueError(f"jacobi: Bad size of b vector [{len(b)}] - expected {m.rows}")

    old = list(x)
    curr = list(x)
    last = -1.0
    for i in range(max_iters):
        old, curr = curr, old
        jacobi_step(m, curr, b, old)
        last = m.mse(curr, b)
        logger.debug("%d: %s", i, last)
        if last < eps:
            break
    x[:] = curr
    return last