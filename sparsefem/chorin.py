"""Data held by a Chorin projection solver: boundary nodes and assembled matrices."""

from __future__ import annotations

from dataclasses import dataclass, field

from sparsefem.csr import CsrMatrix


@dataclass(order=True)
class DirichletNode:
    """A node with a prescribed value; nodes order by id alone."""

    id: int
    value: float = field(default=0.0, compare=False)


@dataclass
class ChorinContext:
    """Node sets and system matrices for velocity and pressure."""

    num_velocity_nodes: int = 0
    dirichlet_vx: list[DirichletNode] = field(default_factory=list)
    dirichlet_vy: list[DirichletNode] = field(default_factory=list)
    internal_velocity_nodes: list[int] = field(default_factory=list)

    num_pressure_nodes: int = 0
    dirichlet_pressure: list[DirichletNode] = field(default_factory=list)
    internal_pressure_nodes: list[int] = field(default_factory=list)

    velocity_mass: CsrMatrix = field(default_factory=CsrMatrix)
    velocity_stiffness: CsrMatrix = field(default_factory=CsrMatrix)
    pressure_stiffness: CsrMatrix = field(default_factory=CsrMatrix)
    pressure_stiffness_internal: CsrMatrix = field(default_factory=CsrMatrix)
    velocity_pressure_div: CsrMatrix = field(default_factory=CsrMatrix)
    pressure_velocity_div: CsrMatrix = field(default_factory=CsrMatrix)

    convection: CsrMatrix = field(default_factory=CsrMatrix)
    fast_convection_integration: CsrMatrix = field(default_factory=CsrMatrix)