"""Row-wise accumulating builder for sparse matrices."""

from __future__ import annotations

from dataclasses import dataclass

from sparsefem.csr import CsrMatrix


@dataclass
class ColPair:
    """A column index with the value stored there."""

    col: int
    value: float


def _check_size(rows: int, cols: int) -> None:
    if rows < 1 or cols < 1:
        raise ValueError(f"Bad builder matrix size: {rows}x{cols}")


class SparseMatrixBuilder:
    """Collects (row, col, value) entries per row; duplicates are summed on build."""

    def __init__(self, rows: int, cols: int) -> None:
        _check_size(rows, cols)
        self._rows = rows
        self._cols = cols
        self._row_pairs: list[list[ColPair]] = [[] for _ in range(rows)]

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def row_pairs(self) -> list[list[ColPair]]:
        """The entries gathered so far, one list per row."""
        return self._row_pairs

    def resize(self, new_rows: int, new_cols: int) -> None:
        """Change the shape and drop every entry."""
        _check_size(new_rows, new_cols)
        self._rows = new_rows
        self._cols = new_cols
        self._row_pairs = [[] for _ in range(new_rows)]

    def add(self, row: int, col: int, value: float) -> None:
        """Add ``value`` at (row, col)."""
        if not 0 <= row < self._rows or not 0 <= col < self._cols:
            raise IndexError(f"Entry ({row}, {col}) outside {self._rows}x{self._cols} matrix")
        self._row_pairs[row].append(ColPair(col, value))

    def compress_rows(self) -> None:
        """Sort each row by column and sum entries that share a column."""
        for index, row in enumerate(self._row_pairs):
            merged: list[ColPair] = []
            for pair in sorted(row, key=lambda p: p.col):
                if merged and merged[-1].col == pair.col:
                    merged[-1].value += pair.value
                else:
                    merged.append(ColPair(pair.col, pair.value))
            self._row_pairs[index] = merged

    def build_csr(self) -> CsrMatrix:
        """Compress the rows and return them as a CSR matrix."""
        self.compress_rows()
        result = CsrMatrix(rows=self._rows, cols=self._cols)
        for row in self._row_pairs:
            result.row_start.append(len(result.values))
            for pair in row:
                result.column.append(pair.col)
                result.values.append(pair.value)
        result.row_start.append(len(result.values))
        return result