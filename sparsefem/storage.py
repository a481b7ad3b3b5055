"""Binary storage of CSR matrices and dense vectors."""

from __future__ import annotations

import os
import struct
from collections.abc import Sequence
from enum import Enum
from typing import BinaryIO

from sparsefem.csr import CsrMatrix

_INT = struct.Struct("<i")


class DType(Enum):
    """Element type of stored values, with its on-disk id."""

    FLOAT32 = 0
    FLOAT64 = 1

    @property
    def code(self) -> str:
        return "f" if self is DType.FLOAT32 else "d"

    @property
    def size(self) -> int:
        return 4 if self is DType.FLOAT32 else 8


class StorageError(Exception):
    """Raised when a stored matrix or vector cannot be read or a file cannot be opened."""


def _write_int(stream: BinaryIO, value: int) -> None:
    stream.write(_INT.pack(value))


def _write_floats(stream: BinaryIO, values: Sequence[float], dtype: DType) -> None:
    stream.write(struct.pack(f"<{len(values)}{dtype.code}", *values))


def _write_ints(stream: BinaryIO, values: Sequence[int]) -> None:
    stream.write(struct.pack(f"<{len(values)}i", *values))


def _read_exact(stream: BinaryIO, size: int, message: str) -> bytes:
    data = stream.read(size)
    if data is None or len(data) != size:
        raise StorageError(message)
    return data


def _read_int(stream: BinaryIO, message: str) -> int:
    return _INT.unpack(_read_exact(stream, _INT.size, message))[0]


def _read_floats(stream: BinaryIO, n: int, dtype: DType, message: str) -> list[float]:
    return list(struct.unpack(f"<{n}{dtype.code}", _read_exact(stream, n * dtype.size, message)))


def _read_ints(stream: BinaryIO, n: int, message: str) -> list[int]:
    return list(struct.unpack(f"<{n}i", _read_exact(stream, n * _INT.size, message)))


def _check_dtype(stream: BinaryIO, dtype: DType, message: str) -> None:
    try:
        found = _read_int(stream, message)
    except StorageError:
        raise StorageError(message) from None
    if found != dtype.value:
        raise StorageError(message)


def write_csr(stream: BinaryIO, m: CsrMatrix, dtype: DType = DType.FLOAT32) -> None:
    """Write ``m`` as dtype id, rows, cols, nnz, values, columns and row starts."""
    if len(m.row_start) != m.rows + 1:
        raise ValueError(
            f"write_csr: Bad size of row_start [{len(m.row_start)}] - expected {m.rows + 1}"
        )
    if len(m.values) != len(m.column):
        raise ValueError(
            f"write_csr: Bad size of column [{len(m.column)}] - expected {len(m.values)}"
        )
    _write_int(stream, dtype.value)
    _write_int(stream, m.rows)
    _write_int(stream, m.cols)
    _write_int(stream, len(m.values))
    _write_floats(stream, m.values, dtype)
    _write_ints(stream, m.column)
    _write_ints(stream, m.row_start)


def write_vector(stream: BinaryIO, v: Sequence[float], dtype: DType = DType.FLOAT32) -> None:
    """Write ``v`` as dtype id, length and values."""
    _write_int(stream, dtype.value)
    _write_int(stream, len(v))
    _write_floats(stream, v, dtype)


def read_csr(stream: BinaryIO, dtype: DType = DType.FLOAT32) -> CsrMatrix:
    """Read a matrix written by :func:`write_csr` with the same ``dtype``."""
    _check_dtype(stream, dtype, "Failed to read CSR matrix: Bad dtype")
    header_error = "Failed to read CSR matrix: Couldn't read header"
    rows = _read_int(stream, header_error)
    cols = _read_int(stream, header_error)
    nnz = _read_int(stream, header_error)
    if rows < 1 or cols < 1 or nnz < 1:
        raise StorageError("Failed to read CSR matrix: Bad header values")

    data_error = "Failed to read CSR matrix: Couldn't read data vectors"
    values = _read_floats(stream, nnz, dtype, data_error)
    column = _read_ints(stream, nnz, data_error)
    row_start = _read_ints(stream, rows + 1, data_error)
    if row_start[-1] != nnz:
        raise StorageError("Failed to read CSR matrix: Bad end of rowStart")
    return CsrMatrix(rows=rows, cols=cols, values=values, column=column, row_start=row_start)


def read_vector(stream: BinaryIO, dtype: DType = DType.FLOAT32) -> list[float]:
    """Read a vector written by :func:`write_vector` with the same ``dtype``."""
    _check_dtype(stream, dtype, "Failed to read vector: Bad dtype")
    n = _read_int(stream, "Failed to read vector: Couldn't read header")
    if n < 1:
        raise StorageError("Failed to read vector: Bad size")
    return _read_floats(stream, n, dtype, "Failed to read vector: Couldn't read data vector")


def _open(path: str | os.PathLike, mode: str, kind: str) -> BinaryIO:
    try:
        return open(path, mode)
    except OSError as exc:
        raise StorageError(f"Failed to open {kind} file {os.fspath(path)}") from exc


def save_csr(path: str | os.PathLike, m: CsrMatrix, dtype: DType = DType.FLOAT32) -> None:
    """Write ``m`` to the file at ``path``."""
    with _open(path, "wb", "output") as f:
        write_csr(f, m, dtype)


def save_vector(path: str | os.PathLike, v: Sequence[float], dtype: DType = DType.FLOAT32) -> None:
    """Write ``v`` to the file at ``path``."""
    with _open(path, "wb", "output") as f:
        write_vector(f, v, dtype)


def load_csr(path: str | os.PathLike, dtype: DType = DType.FLOAT32) -> CsrMatrix:
    """Read a matrix from the file at ``path``."""
    with _open(path, "rb", "input") as f:
        return read_csr(f, dtype)


def load_vector(path: str | os.PathLike, dtype: DType = DType.FLOAT32) -> list[float]:
    """Read a vector from the file at ``path``."""
    with _open(path, "rb", "input") as f:
        return read_vector(f, dtype)