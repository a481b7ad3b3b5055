"""Compressed sparse row matrix."""

from __future__ import annotations

import math
from bisect import bisect_left
from collections.abc import Sequence
from dataclasses import dataclass, field


@dataclass(eq=False)
class CsrMatrix:
    """A sparse matrix in compressed sparse row layout.

    ``values`` and ``column`` hold one entry per stored element; ``row_start``
    has ``rows + 1`` entries, the last being the number of stored elements.
    """

    rows: int = 0
    cols: int = 0
    values: list[float] = field(default_factory=list)
    column: list[int] = field(default_factory=list)
    row_start: list[int] = field(default_factory=list)

    __hash__ = None  # type: ignore[assignment]

    def _row_span(self, row: int) -> tuple[int, int]:
        return self.row_start[row], self.row_start[row + 1]

    def slice(self, row_ids: Sequence[int], col_ids: Sequence[int]) -> CsrMatrix:
        """Return the submatrix made of the given rows and columns, in that order."""
        if not row_ids or not col_ids:
            return CsrMatrix(rows=0, cols=0)

        for i in row_ids:
            if not 0 <= i < self.rows:
                raise ValueError(f"slice: Bad row index {i}")

        col_map: dict[int, int] = {}
        for dst, src in enumerate(col_ids):
            if not 0 <= src < self.cols:
                raise ValueError(f"slice: Bad col index {src}")
            col_map[src] = dst

        result = CsrMatrix(rows=len(row_ids), cols=len(col_ids))
        for src_row in row_ids:
            result.row_start.append(len(result.values))
            start, end = self._row_span(src_row)
            picked = sorted(
                (
                    (col_map[self.column[j]], self.values[j])
                    for j in range(start, end)
                    if self.column[j] in col_map
                ),
                key=lambda pair: pair[0],
            )
            for col, value in picked:
                result.column.append(col)
                result.values.append(value)
        result.row_start.append(len(result.values))
        return result

    def find_offsets(self, row: int, column_ids: Sequence[int]) -> list[int]:
        """Offsets into ``values`` of the given sorted column ids on ``row``; -1 where absent."""
        if not 0 <= row < self.rows:
            return [-1] * len(column_ids)

        j, end = self._row_span(row)
        offsets = []
        for q in column_ids:
            while j < end and self.column[j] < q:
                j += 1
            offsets.append(j if j < end and self.column[j] == q else -1)
        return offsets

    def find_offsets_unsorted(self, row: int, column_ids: Sequence[int]) -> list[int]:
        """Like :meth:`find_offsets`, but the column ids may come in any order."""
        if not 0 <= row < self.rows:
            return [-1] * len(column_ids)

        start, end = self._row_span(row)
        offsets = []
        for q in column_ids:
            pos = bisect_left(self.column, q, start, end)
            offsets.append(pos if pos < end and self.column[pos] == q else -1)
        return offsets

    def compare_layout(self, other: CsrMatrix) -> bool:
        """True when both matrices have the same shape and sparsity pattern."""
        return (
            self.rows == other.rows
            and self.cols == other.cols
            and list(self.row_start) == list(other.row_start)
            and list(self.column) == list(other.column)
        )

    def compare_values(self, other: CsrMatrix, epsilon: float) -> bool:
        """True when the stored values differ by no more than ``epsilon``."""
        if len(self.values) != len(other.values):
            return False
        return all(abs(a - b) <= epsilon for a, b in zip(self.values, other.values))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CsrMatrix):
            return NotImplemented
        return self.compare_layout(other) and self.compare_values(other, 0)

    def _row_products(self, x: Sequence[float]):
        for i in range(self.rows):
            start, end = self._row_span(i)
            yield math.fsum(self.values[j] * x[self.column[j]] for j in range(start, end))

    def r_mult(self, src: Sequence[float]) -> list[float]:
        """Return the product of this matrix with the column vector ``src``."""
        if len(src) != self.cols:
            raise ValueError(f"r_mult: Bad size of src vector [{len(src)}] - expected {self.cols}")
        return list(self._row_products(src))

    def mse(self, x: Sequence[float], b: Sequence[float]) -> float:
        """Root of the mean squared residual: sqrt(sum((Mx - b)^2) / rows)."""
        if len(x) != self.cols:
            raise ValueError(f"mse: Bad size of x vector [{len(x)}] - expected {self.cols}")
        if len(b) != self.rows:
            raise ValueError(f"mse: Bad size of b vector [{len(b)}] - expected {self.rows}")
        err = sum((s - bi) ** 2 for s, bi in zip(self._row_products(x), b))
        return math.sqrt(err / self.rows)