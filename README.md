# sparsefem

Sparse linear algebra building blocks for finite element solvers, written in
plain Python lists. SciPy is used only for conversion.

## Modules

- `sparsefem.csr.CsrMatrix` is a compressed sparse row matrix. It holds
  `rows`, `cols`, `values`, `column` and `row_start`. Its methods are:
  - `slice(row_ids, col_ids)`, which returns the submatrix made of the given
    rows and columns.
  - `find_offsets(row, column_ids)` and `find_offsets_unsorted(row, column_ids)`,
    which return the offsets into `values`, or -1 where an entry is absent.
    The first method needs sorted column ids.
  - `compare_layout(other)` and `compare_values(other, epsilon)`. The `==`
    operator uses both with an epsilon of zero.
  - `r_mult(src)`, the matrix-vector product.
  - `mse(x, b)`, which returns `sqrt(sum((Mx - b)^2) / rows)`.
- `sparsefem.vectors` provides `norm_l2(vec, normalize=False)` and `dot(a, b)`.
- `sparsefem.builder.SparseMatrixBuilder(rows, cols)` is a row-bucketed builder.
  - `add(row, col, value)` adds an entry. Duplicate entries are summed by
    `compress_rows()` and by `build_csr()`.
  - `resize(new_rows, new_cols)` changes the shape and clears all entries.
  - A shape below 1x1 raises `ValueError`.
- `sparsefem.dok` collects coordinates and triplets:
  - `SparseMatrixDokBuilder` collects `Triplet`s. It provides `add`, `extend`,
    `compress`, `build_csr` and `build_csr2`. `build_csr2` leaves the stored
    triplets unchanged.
  - `SparseMatrixPrototypeBuilder` collects `Coordinate`s and builds the
    sparsity pattern only.
    - `build_csr_prototype()` fills the values with zeros.
    - `build_csr_prototype2()` stores no values.
  - For both builders, `resize` keeps the entries already gathered.
- `sparsefem.interop` provides three conversions:
  - `csr_from_scipy(m)`: from a SciPy CSR matrix to a `CsrMatrix`.
  - `scipy_from_csr(m)`: from a `CsrMatrix` to a SciPy CSR matrix with sorted indices.
  - `build_scipy_csr(builder)`: from a `SparseMatrixBuilder` to a SciPy CSR matrix.
- `sparsefem.gauss_seidel` contains the Gauss-Seidel solvers:
  - Single steps: `gauss_seidel_step`, `gauss_seidel_step_custom_order` and
    `gauss_seidel_step_2ch`. The last one works on two interleaved channels.
  - Solvers: `gauss_seidel`, `gauss_seidel_custom_order` and `gauss_seidel_2ch`.
  - `mse_2ch` computes the residuals of two interleaved channels.
  - `build_gauss_seidel_context(m)` splits a square matrix into its
    off-diagonal part and its inverted diagonal, returned as a `GaussSeidelContext`.
- `sparsefem.jacobi` provides `jacobi_step(m, curr, b, old)` and
  `jacobi(m, x, b, max_iters, eps)`.
- `sparsefem.graphs` works on graphs given as adjacency lists:
  - `build_csr_graph(m)` builds the adjacency graph of a matrix.
  - `build_smallest_last_ordering(graph)` returns a smallest-last vertex ordering.
  - `partition_graph_greedy(graph, order)` and `partition_graph_dsatur(graph)`
    colour the graph.
  - `verify_coloring(graph, coloring)` checks a colouring and logs each
    problem it finds.
- `sparsefem.storage` is a little-endian binary format for matrices and vectors:
  - The functions are `write_csr`, `read_csr`, `write_vector`, `read_vector`,
    `save_csr`, `load_csr`, `save_vector` and `load_vector`.
  - The element type is chosen with `DType.FLOAT32` (the default) or
    `DType.FLOAT64`.
  - Failed reads and files that cannot be opened raise `StorageError`.
  - Empty matrices and vectors are rejected on reading.
- `sparsefem.chorin` holds two containers used by a Chorin projection scheme:
  - `DirichletNode`. Nodes order by `id` alone.
  - `ChorinContext`.

The solvers update `x` in place. They return the last residual, or -1 when
`max_iters` is 0. Per-iteration residuals go to the `logging` debug level.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from sparsefem.builder import SparseMatrixBuilder
from sparsefem.gauss_seidel import gauss_seidel

builder = SparseMatrixBuilder(2, 2)
builder.add(0, 0, 4.0)
builder.add(0, 1, 1.0)
builder.add(1, 0, 1.0)
builder.add(1, 1, 3.0)
m = builder.build_csr()

x = [0.0, 0.0]
residual = gauss_seidel(m, x, [1.0, 2.0], 50, 1e-8)
```

Matrices round-trip through the binary format:

```python
from sparsefem.storage import DType, save_csr, load_csr

save_csr("matrix.bin", m, DType.FLOAT64)
again = load_csr("matrix.bin", DType.FLOAT64)
```

## What it does not do

The package does not assemble finite element matrices. It has no meshes, no
element integration and no assembly of the velocity, pressure, divergence or
convection matrices. `ChorinContext` only stores such matrices once they have
been built elsewhere. The package also has no command-line program.