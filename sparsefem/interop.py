"""Conversions between CsrMatrix and SciPy sparse matrices."""

from __future__ import annotations

import numpy as np
import scipy.sparse as sp

from sparsefem.builder import SparseMatrixBuilder
from sparsefem.csr import CsrMatrix


def csr_from_scipy(m) -> CsrMatrix:
    """Copy a SciPy CSR matrix into a :class:`CsrMatrix`."""
    if getattr(m, "format", None) != "csr":
        raise ValueError("csr_from_scipy: Matrix must be in CSR format")
    rows, cols = m.shape
    nnz = int(m.indptr[-1])
    return CsrMatrix(
        rows=int(rows),
        cols=int(cols),
        values=[float(v) for v in m.data[:nnz]],
        column=[int(c) for c in m.indices[:nnz]],
        row_start=[int(s) for s in m.indptr[:rows]] + [nnz],
    )


def scipy_from_csr(m: CsrMatrix) -> sp.csr_matrix:
    """Copy a :class:`CsrMatrix` into a SciPy CSR matrix with sorted indices."""
    result = sp.csr_matrix(
        (
            np.asarray(m.values, dtype=float),
            np.asarray(m.column, dtype=np.int64),
            np.asarray(m.row_start, dtype=np.int64),
        ),
        shape=(m.rows, m.cols),
    )
    result.sort_indices()
    return result


def build_scipy_csr(builder: SparseMatrixBuilder) -> sp.csr_matrix:
    """Compress the builder's rows and return them as a SciPy CSR matrix."""
    builder.compress_rows()
    rows, cols, values = [], [], []
    for i, row in enumerate(builder.row_pairs):
        for pair in row:
            rows.append(i)
            cols.append(pair.col)
            values.append(pair.value)
    coo = sp.coo_matrix(
        (np.asarray(values, dtype=float), (np.asarray(rows, dtype=np.int64), np.asarray(cols, dtype=np.int64))),
        shape=(builder.rows, builder.cols),
    )
    return coo.tocsr()