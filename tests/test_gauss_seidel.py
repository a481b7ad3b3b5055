import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from sparsefem.builder import SparseMatrixBuilder
from sparsefem.gauss_seidel import (
    GaussSeidelContext,
    build_gauss_seidel_context,
    gauss_seidel,
    gauss_seidel_2ch,
    gauss_seidel_custom_order,
    gauss_seidel_step,
    gauss_seidel_step_2ch,
    gauss_seidel_step_custom_order,
    mse_2ch,
)


def _csr(dense):
    builder = SparseMatrixBuilder(len(dense), len(dense[0]))
    for r, row in enumerate(dense):
        for c, value in enumerate(row):
            if value != 0:
                builder.add(r, c, value)
    return builder.build_csr()


DENSE = [[4.0, -1.0, 0.0], [-1.0, 4.0, -1.0], [0.0, -1.0, 4.0]]
B = [1.0, 2.0, 3.0]


def test_context_strips_diagonal():
    m = _csr(DENSE)
    ctx = build_gauss_seidel_context(m)
    assert isinstance(ctx, GaussSeidelContext)
    assert ctx.inv_diag == pytest.approx([0.25, 0.25, 0.25])
    for row in range(ctx.stripped.rows):
        cols = ctx.stripped.column[ctx.stripped.row_start[row]:ctx.stripped.row_start[row + 1]]
        assert row not in cols
    assert len(ctx.stripped.values) == len(m.values) - 3
    assert ctx.stripped.row_start[-1] == len(ctx.stripped.values)


def test_context_requires_square():
    with pytest.raises(ValueError):
        build_gauss_seidel_context(_csr([[1.0, 2.0]]))


def test_context_missing_diagonal():
    with pytest.raises(ValueError, match="missing diagonal"):
        build_gauss_seidel_context(_csr([[1.0, 0.0], [1.0, 0.0]]))


def test_gauss_seidel_converges():
    m = _csr(DENSE)
    x = [0.0, 0.0, 0.0]
    res = gauss_seidel(m, x, B, 200, 1e-10)
    assert 0 <= res < 1e-10
    assert x == pytest.approx(list(np.linalg.solve(np.array(DENSE), np.array(B))))


def test_gauss_seidel_zero_iterations_returns_minus_one():
    m = _csr(DENSE)
    x = [0.0, 0.0, 0.0]
    assert gauss_seidel(m, x, B, 0, 1e-10) == -1
    assert x == [0.0, 0.0, 0.0]


def test_gauss_seidel_bad_sizes():
    m = _csr(DENSE)
    with pytest.raises(ValueError):
        gauss_seidel(m, [0.0, 0.0], B, 10, 1e-6)
    with pytest.raises(ValueError):
        gauss_seidel(m, [0.0, 0.0, 0.0], [1.0], 10, 1e-6)


def test_step_on_diagonal_matrix_is_exact():
    m = _csr([[2.0, 0.0], [0.0, 5.0]])
    x = [0.0, 0.0]
    gauss_seidel_step(m, x, [4.0, 10.0])
    assert m.mse(x, [4.0, 10.0]) == pytest.approx(0.0)


def test_step_missing_diagonal_raises():
    m = _csr([[0.0, 1.0], [1.0, 1.0]])
    with pytest.raises(ZeroDivisionError):
        gauss_seidel_step(m, [0.0, 0.0], [1.0, 1.0])


def test_custom_order_reverse_solves_upper_triangular_in_one_step():
    m = _csr([[2.0, 1.0], [0.0, 4.0]])
    b = [5.0, 8.0]
    x = [0.0, 0.0]
    gauss_seidel_step_custom_order(m, x, b, [1, 0])
    assert m.mse(x, b) == pytest.approx(0.0)


def test_custom_order_converges():
    m = _csr(DENSE)
    x = [0.0, 0.0, 0.0]
    res = gauss_seidel_custom_order(m, x, B, [2, 0, 1], 200, 1e-10)
    assert res < 1e-10
    assert m.mse(x, B) < 1e-10


def test_custom_order_bad_order_size():
    m = _csr(DENSE)
    with pytest.raises(ValueError):
        gauss_seidel_custom_order(m, [0.0, 0.0, 0.0], B, [0, 1], 10, 1e-6)


def test_two_channels_match_separate_solves():
    m = _csr(DENSE)
    b0, b1 = B, [3.0, -1.0, 2.0]
    interleaved_b = [v for pair in zip(b0, b1) for v in pair]
    x = [0.0] * 6
    res0, res1 = gauss_seidel_2ch(m, x, interleaved_b, 200, 1e-10)
    assert res0 < 1e-10 and res1 < 1e-10

    x0 = [0.0] * 3
    x1 = [0.0] * 3
    gauss_seidel(m, x0, b0, 200, 1e-12)
    gauss_seidel(m, x1, b1, 200, 1e-12)
    assert x[0::2] == pytest.approx(x0)
    assert x[1::2] == pytest.approx(x1)


def test_two_channel_step_matches_single_channel_step():
    m = _csr(DENSE)
    b1 = [0.5, 1.5, -2.0]
    interleaved = [v for pair in zip(B, b1) for v in pair]
    x = [0.0] * 6
    gauss_seidel_step_2ch(m, x, interleaved)
    x0 = [0.0] * 3
    x1 = [0.0] * 3
    gauss_seidel_step(m, x0, B)
    gauss_seidel_step(m, x1, b1)
    assert x[0::2] == pytest.approx(x0)
    assert x[1::2] == pytest.approx(x1)


def test_mse_2ch_matches_per_channel_mse():
    m = _csr(DENSE)
    x = [1.0, 2.0, -1.0, 0.5, 3.0, 0.0]
    b = [0.0, 1.0, 2.0, 3.0, 4.0, 5.0]
    mse0, mse1 = mse_2ch(m, x, b)
    assert mse0 == pytest.approx(m.mse(x[0::2], b[0::2]))
    assert mse1 == pytest.approx(m.mse(x[1::2], b[1::2]))


def test_2ch_zero_iterations_and_bad_sizes():
    m = _csr(DENSE)
    assert gauss_seidel_2ch(m, [0.0] * 6, [0.0] * 6, 0, 1e-6) == (-1, -1)
    with pytest.raises(ValueError):
        gauss_seidel_2ch(m, [0.0] * 3, [0.0] * 6, 5, 1e-6)


@st.composite
def _dominant_systems(draw):
    n = draw(st.integers(min_value=1, max_value=6))
    off = st.floats(min_value=-1.0, max_value=1.0, allow_nan=False)
    dense = [[draw(off) for _ in range(n)] for _ in range(n)]
    for i in range(n):
        dense[i][i] = sum(abs(v) for j, v in enumerate(dense[i]) if j != i) + 1.0
    b = draw(st.lists(st.floats(min_value=-10, max_value=10), min_size=n, max_size=n))
    return dense, b


@settings(max_examples=30, deadline=None)
@given(_dominant_systems())
def test_converges_on_diagonally_dominant_systems(system):
    dense, b = system
    m = _csr(dense)
    x = [0.0] * len(b)
    res = gauss_seidel(m, x, b, 500, 1e-9)
    assert res < 1e-9
    assert m.mse(x, b) < 1e-9