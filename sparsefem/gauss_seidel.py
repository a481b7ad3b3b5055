"""Gauss-Seidel iteration on CSR matrices."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, MutableSequence, Sequence
from dataclasses import dataclass, field

from sparsefem.csr import CsrMatrix

logger = logging.getLogger(__name__)


@dataclass
class GaussSeidelContext:
    """A matrix split into its off-diagonal part and its inverted diagonal."""

    stripped: CsrMatrix
    inv_diag: list[float] = field(default_factory=list)


def build_gauss_seidel_context(m: CsrMatrix) -> GaussSeidelContext:
    """Split a square matrix into off-diagonal entries and ``1 / diagonal``."""
    n = m.cols
    if n != m.rows:
        raise ValueError("build_gauss_seidel_context: Matrix must be square")

    stripped = CsrMatrix(rows=m.rows, cols=m.cols)
    inv_diag = [0.0] * n
    for row in range(n):
        stripped.row_start.append(len(stripped.values))
        diag_found = False
        for j in range(m.row_start[row], m.row_start[row + 1]):
            col = m.column[j]
            value = m.values[j]
            if col == row:
                if value == 0:
                    raise ValueError("Matrix contains zeros on the diagonal")
                inv_diag[row] = 1.0 / value
                diag_found = True
            else:
                stripped.column.append(col)
                stripped.values.append(value)
        if not diag_found:
            raise ValueError("Matrix has missing diagonal elements!")
    stripped.row_start.append(len(stripped.values))
    return GaussSeidelContext(stripped=stripped, inv_diag=inv_diag)


def _split_row(m: CsrMatrix, i: int) -> tuple[float, list[tuple[int, float]]]:
    """Diagonal value of row ``i`` and its off-diagonal (column, value) pairs."""
    diag = 0.0
    off: list[tuple[int, float]] = []
    for j in range(m.row_start[i], m.row_start[i + 1]):
        col = m.column[j]
        if col == i:
            diag = m.values[j]
        else:
            off.append((col, m.values[j]))
    if diag == 0:
        raise ZeroDivisionError(f"Zero or missing diagonal element in row {i}")
    return diag, off


def _check_sizes(m: CsrMatrix, x: Sequence[float], b: Sequence[float], channels: int = 1) -> None:
    if len(x) != channels * m.cols:
        raise ValueError(f"Bad size of x vector [{len(x)}] - expected {channels * m.cols}")
    if len(b) != channels * m.rows:
        raise ValueError(f"Bad size of b vector [{len(b)}] - expected {channels * m.rows}")


def _sweep(m: CsrMatrix, x: MutableSequence[float], b: Sequence[float], rows: Iterable[int]) -> None:
    for i in rows:
        diag, off = _split_row(m, i)
        neg_sum = math.fsum(value * x[col] for col, value in off)
        x[i] = (b[i] - neg_sum) / diag


def gauss_seidel_step(m: CsrMatrix, x: MutableSequence[float], b: Sequence[float]) -> None:
    """One in-place Gauss-Seidel sweep over the rows in natural order."""
    _check_sizes(m, x, b)
    _sweep(m, x, b, range(m.rows))


def gauss_seidel_step_custom_order(
    m: CsrMatrix, x: MutableSequence[float], b: Sequence[float], order: Sequence[int]
) -> None:
    """One in-place Gauss-Seidel sweep visiting rows in the given order."""
    _check_sizes(m, x, b)
    if len(order) != len(x):
        raise ValueError(f"Bad size of order vector [{len(order)}] - expected {len(x)}")
    _sweep(m, x, b, order)


def gauss_seidel_step_2ch(m: CsrMatrix, x: MutableSequence[float], b: Sequence[float]) -> None:
    """One in-place sweep on two interleaved channels sharing the matrix ``m``."""
    _check_sizes(m, x, b, channels=2)
    for i in range(m.rows):
        diag, off = _split_row(m, i)
        neg_sum0 = math.fsum(value * x[2 * col] for col, value in off)
        neg_sum1 = math.fsum(value * x[2 * col + 1] for col, value in off)
        x[2 * i] = (b[2 * i] - neg_sum0) / diag
        x[2 * i + 1] = (b[2 * i + 1] - neg_sum1) / diag


def mse_2ch(m: CsrMatrix, x: Sequence[float], b: Sequence[float]) -> tuple[float, float]:
    """Root mean squared residual of each of two interleaved channels."""
    _check_sizes(m, x, b, channels=2)
    err0 = 0.0
    err1 = 0.0
    for i in range(m.rows):
        span = range(m.row_start[i], m.row_start[i + 1])
        sum0 = math.fsum(m.values[j] * x[2 * m.column[j]] for j in span)
        sum1 = math.fsum(m.values[j] * x[2 * m.column[j] + 1] for j in span)
        err0 += (sum0 - b[2 * i]) ** 2
        err1 += (sum1 - b[2 * i + 1]) ** 2
    return math.sqrt(err0 / m.rows), math.sqrt(err1 / m.rows)


def _iterate(m, x, b, step, max_iters: int, eps: float) -> float:
    last = -1.0
    for i in range(max_iters):
        step()
        last = m.mse(x, b)
        logger.debug("%d: %s", i, last)
        if last < eps:
            break
    return last


def gauss_seidel(
    m: CsrMatrix, x: MutableSequence[float], b: Sequence[float], max_iters: int, eps: float
) -> float:
    """Iterate until the residual drops below ``eps``; ``x`` is updated in place.

    Returns the last residual, or -1 when no iteration ran.
    """
    _check_sizes(m, x, b)
    return _iterate(m, x, b, lambda: _sweep(m, x, b, range(m.rows)), max_iters, eps)


def gauss_seidel_custom_order(
    m: CsrMatrix,
    x: MutableSequence[float],
    b: Sequence[float],
    order: Sequence[int],
    max_iters: int,
    eps: float,
) -> float:
    """Like :func:`gauss_seidel`, visiting rows in the given order."""
    _check_sizes(m, x, b)
    if len(order) != len(x):
        raise ValueError(f"Bad size of order vector [{len(order)}] - expected {len(x)}")
    return _iterate(m, x, b, lambda: _sweep(m, x, b, order), max_iters, eps)


def gauss_seidel_2ch(
    m: CsrMatrix, x: MutableSequence[float], b: Sequence[float], max_iters: int, eps: float
) -> tuple[float, float]:
    """Solve two interleaved channels at once; stops when both residuals are below ``eps``."""
    _check_sizes(m, x, b, channels=2)
    last = (-1.0, -1.0)
    for _ in range(max_iters):
        gauss_seidel_step_2ch(m, x, b)
        last = mse_2ch(m, x, b)
        if last[0] < eps and last[1] < eps:
            break
    return last