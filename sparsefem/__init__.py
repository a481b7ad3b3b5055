"""Sparse matrices, builders, iterative solvers, graph colouring and binary storage for finite element work."""

__version__ = "0.1.0"

__all__ = [
    "builder",
    "chorin",
    "csr",
    "dok",
    "gauss_seidel",
    "graphs",
    "interop",
    "jacobi",
    "storage",
    "vectors",
]