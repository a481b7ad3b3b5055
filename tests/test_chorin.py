from sparsefem.chorin import ChorinContext, DirichletNode
from sparsefem.csr import CsrMatrix


def test_dirichlet_nodes_sort_by_id():
    nodes = [DirichletNode(5, 0.1), DirichletNode(2, 9.0), DirichletNode(7, -1.0)]
    assert [n.id for n in sorted(nodes)] == [2, 5, 7]


def test_dirichlet_ordering_ignores_value():
    a = DirichletNode(3, 1.0)
    b = DirichletNode(3, 100.0)
    assert not a < b
    assert not b < a
    assert DirichletNode(1, 100.0) < DirichletNode(2, 0.0)


def test_context_lists_are_independent():
    first = ChorinContext()
    second = ChorinContext()
    first.dirichlet_vx.append(DirichletNode(0, 1.0))
    first.internal_pressure_nodes.append(4)
    assert second.dirichlet_vx == []
    assert second.internal_pressure_nodes == []


def test_context_matrices_are_independent():
    ctx = ChorinContext()
    ctx.velocity_mass.rows = 3
    assert ctx.velocity_stiffness.rows == 0
    assert ctx.convection == CsrMatrix()


def test_context_holds_given_values():
    mass = CsrMatrix(rows=1, cols=1, values=[2.0], column=[0], row_start=[0, 1])
    ctx = ChorinContext(num_velocity_nodes=1, velocity_mass=mass)
    assert ctx.num_velocity_nodes == 1
    assert ctx.velocity_mass.r_mult([3.0]) == [6.0]