import numpy as np
import pytest
import scipy.sparse as sp
from hypothesis import given, strategies as st

from sparsefem.builder import SparseMatrixBuilder
from sparsefem.csr import CsrMatrix
from sparsefem.interop import build_scipy_csr, csr_from_scipy, scipy_from_csr


def _sample():
    return CsrMatrix(
        rows=3,
        cols=3,
        values=[4.0, -1.0, -1.0, 4.0, 2.0],
        column=[0, 1, 0, 1, 2],
        row_start=[0, 2, 4, 5],
    )


def test_csr_to_scipy_and_back():
    m = _sample()
    back = csr_from_scipy(scipy_from_csr(m))
    assert back == m


def test_scipy_shape_and_pattern():
    m = _sample()
    s = scipy_from_csr(m)
    assert s.shape == (3, 3)
    assert list(s.indptr) == m.row_start
    assert list(s.indices) == m.column
    assert list(s.data) == m.values


def test_product_matches_scipy():
    m = _sample()
    x = [1.0, 2.0, 3.0]
    assert np.allclose(scipy_from_csr(m) @ np.array(x), m.r_mult(x))


def test_csr_from_scipy_requires_csr_format():
    with pytest.raises(ValueError):
        csr_from_scipy(sp.coo_matrix(np.eye(2)))
    with pytest.raises(ValueError):
        csr_from_scipy(np.eye(2))


def test_csr_from_scipy_has_sentinel():
    s = sp.csr_matrix(np.array([[0.0, 1.0], [0.0, 0.0], [2.0, 3.0]]))
    m = csr_from_scipy(s)
    assert (m.rows, m.cols) == (3, 2)
    assert m.row_start[-1] == len(m.values) == len(m.column)
    assert len(m.row_start) == m.rows + 1


def test_build_scipy_csr_sums_duplicates():
    b = SparseMatrixBuilder(2, 2)
    b.add(0, 1, 1.0)
    b.add(0, 1, 2.0)
    b.add(1, 0, 5.0)
    s = build_scipy_csr(b)
    assert s.shape == (2, 2)
    assert s.nnz == 2
    assert csr_from_scipy(s) == b.build_csr()


@given(
    st.lists(
        st.tuples(st.integers(0, 3), st.integers(0, 4), st.integers(-20, 20)),
        max_size=30,
    )
)
def test_build_scipy_csr_matches_builder(entries):
    b = SparseMatrixBuilder(4, 5)
    expected = np.zeros((4, 5))
    for r, c, v in entries:
        b.add(r, c, float(v))
        expected[r, c] += v
    s = build_scipy_csr(b)
    assert np.array_equal(s.toarray(), expected)
    assert np.array_equal(scipy_from_csr(b.build_csr()).toarray(), expected)