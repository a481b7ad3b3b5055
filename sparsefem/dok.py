"""Coordinate-list builders for sparse matrices and their sparsity patterns."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from itertools import accumulate

from sparsefem.csr import CsrMatrix


@dataclass
class Triplet:
    """A single (row, col, value) entry."""

    row: int
    col: int
    value: float


@dataclass(frozen=True, order=True)
class Coordinate:
    """A (row, col) position in a matrix."""

    row: int
    col: int


def _check_index(row: int, col: int, rows: int, cols: int) -> None:
    if not 0 <= row < rows or not 0 <= col < cols:
        raise IndexError(f"Entry ({row}, {col}) outside {rows}x{cols} matrix")


def _row_start(rows: int, row_indices: Iterable[int]) -> list[int]:
    """Row offsets for entries that are already ordered by row."""
    counts = [0] * rows
    for row in row_indices:
        if not 0 <= row < rows:
            raise ValueError(f"Entry row {row} outside matrix with {rows} rows")
        counts[row] += 1
    return list(accumulate(counts, initial=0))


class SparseMatrixDokBuilder:
    """Collects (row, col, value) triplets; duplicates are summed on build."""

    def __init__(self, rows: int = 0, cols: int = 0) -> None:
        self._rows = rows
        self._cols = cols
        self._triplets: list[Triplet] = []

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def triplets(self) -> list[Triplet]:
        """The triplets gathered so far."""
        return self._triplets

    def resize(self, new_rows: int, new_cols: int) -> None:
        """Change the shape; gathered triplets are kept."""
        self._rows = new_rows
        self._cols = new_cols

    def add(self, row: int, col: int, value: float) -> None:
        """Add ``value`` at (row, col)."""
        _check_index(row, col, self._rows, self._cols)
        self._triplets.append(Triplet(row, col, value))

    def extend(self, others: Iterable[SparseMatrixDokBuilder]) -> None:
        """Append the triplets of every builder in ``others``."""
        for other in others:
            self._triplets.extend(Triplet(t.row, t.col, t.value) for t in other._triplets)

    def compress(self) -> None:
        """Sort triplets by (row, col) and sum those at the same position."""
        merged: list[Triplet] = []
        for t in sorted(self._triplets, key=lambda t: (t.row, t.col)):
            if merged and merged[-1].row == t.row and merged[-1].col == t.col:
                merged[-1].value += t.value
            else:
                merged.append(Triplet(t.row, t.col, t.value))
        self._triplets = merged

    def build_csr(self) -> CsrMatrix:
        """Compress the triplets in place and return them as a CSR matrix."""
        self.compress()
        return CsrMatrix(
            rows=self._rows,
            cols=self._cols,
            values=[t.value for t in self._triplets],
            column=[t.col for t in self._triplets],
            row_start=_row_start(self._rows, (t.row for t in self._triplets)),
        )

    def build_csr2(self) -> CsrMatrix:
        """Return the CSR matrix by sorting per row; the triplets are left as they are."""
        buckets: list[list[tuple[int, float]]] = [[] for _ in range(self._rows)]
        for t in self._triplets:
            if not 0 <= t.row < self._rows:
                raise ValueError(f"Entry row {t.row} outside matrix with {self._rows} rows")
            buckets[t.row].append((t.col, t.value))

        result = CsrMatrix(rows=self._rows, cols=self._cols)
        for bucket in buckets:
            result.row_start.append(len(result.values))
            merged: list[list] = []
            for col, value in sorted(bucket, key=lambda p: p[0]):
                if merged and merged[-1][0] == col:
                    merged[-1][1] += value
                else:
                    merged.append([col, value])
            for col, value in merged:
                result.column.append(col)
                result.values.append(value)
        result.row_start.append(len(result.values))
        return result


class SparseMatrixPrototypeBuilder:
    """Collects (row, col) positions to build a sparsity pattern."""

    def __init__(self, rows: int = 0, cols: int = 0) -> None:
        self._rows = rows
        self._cols = cols
        self._coords: list[Coordinate] = []

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def coords(self) -> list[Coordinate]:
        """The positions gathered so far."""
        return self._coords

    def resize(self, new_rows: int, new_cols: int) -> None:
        """Change the shape; gathered positions are kept."""
        self._rows = new_rows
        self._cols = new_cols

    def add(self, row: int, col: int) -> None:
        """Mark (row, col) as part of the pattern."""
        _check_index(row, col, self._rows, self._cols)
        self._coords.append(Coordinate(row, col))

    def extend(self, others: Iterable[SparseMatrixPrototypeBuilder]) -> None:
        """Append the positions of every builder in ``others``."""
        for other in others:
            self._coords.extend(other._coords)

    def compress(self) -> None:
        """Sort positions by (row, col) and drop repeats."""
        self._coords = sorted(set(self._coords))

    def build_csr_prototype(self) -> CsrMatrix:
        """Compress in place and return the pattern with all values zero."""
        self.compress()
        return CsrMatrix(
            rows=self._rows,
            cols=self._cols,
            values=[0.0] * len(self._coords),
            column=[c.col for c in self._coords],
            row_start=_row_start(self._rows, (c.row for c in self._coords)),
        )

    def build_csr_prototype2(self) -> CsrMatrix:
        """Return the pattern by sorting per row; it carries no values."""
        buckets: list[set[int]] = [set() for _ in range(self._rows)]
        for c in self._coords:
            if not 0 <= c.row < self._rows:
                raise ValueError(f"Entry row {c.row} outside matrix with {self._rows} rows")
            buckets[c.row].add(c.col)

        result = CsrMatrix(rows=self._rows, cols=self._cols)
        for bucket in buckets:
            result.row_start.append(len(result.column))
            result.column.extend(sorted(bucket))
        result.row_start.append(len(result.column))
        return result