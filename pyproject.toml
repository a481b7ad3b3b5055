[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sparsefem"
version = "0.1.0"
description = "Compressed sparse row matrices, sparse builders, iterative solvers and graph colouring for finite element work"
requires-python = ">=3.10"
keywords = ["sparse", "csr", "gauss-seidel", "jacobi", "graph-coloring", "finite-elements"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "numpy",
    "scipy",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["sparsefem"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
