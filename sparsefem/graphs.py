"""Graph helpers for ordering and colouring the rows of sparse matrices."""

from __future__ import annotations

import heapq
import logging
from collections.abc import Sequence

from sparsefem.csr import CsrMatrix

logger = logging.getLogger(__name__)

Graph = Sequence[Sequence[int]]


def verify_coloring(graph: Graph, coloring: Sequence[Sequence[int]]) -> bool:
    """Check that ``coloring`` gives every vertex exactly one colour and no edge joins equal colours.

    Every problem found is logged; the result is False if there was any.
    """
    n = len(graph)
    color = [-1] * n
    ok = True

    for part_index, part in enumerate(coloring):
        for v in part:
            if not 0 <= v < n:
                ok = False
                logger.error(
                    "Partition %d contains vertex %d, which doesn't exist in the graph", part_index, v
                )
                continue
            if color[v] != -1:
                ok = False
                logger.error(
                    "Partition %d tried to color vertex %d again. It already has color %d",
                    part_index,
                    v,
                    color[v],
                )
                continue
            color[v] = part_index

    for v, neighbours in enumerate(graph):
        current = color[v]
        if current == -1:
            ok = False
            logger.error("Vertex %d is not colored", v)
            continue
        for nv in neighbours:
            if color[nv] == current:
                ok = False
                logger.error("Vertex %d has neighbour %d with the same color [%d]", v, nv, current)

    return ok


def build_smallest_last_ordering(graph: Graph) -> list[int]:
    """Order vertices so that repeatedly removing the one of smallest degree gives the reverse order."""
    n = len(graph)
    degree = [len(neighbours) for neighbours in graph]
    removed = [False] * n
    heap = [(d, v) for v, d in enumerate(degree)]
    heapq.heapify(heap)

    result: list[int] = []
    while len(result) < n:
        _, v = heapq.heappop(heap)
        if removed[v]:
            continue
        result.append(v)
        removed[v] = True
        for nv in graph[v]:
            if removed[nv]:
                continue
            degree[nv] -= 1
            heapq.heappush(heap, (degree[nv], nv))

    result.reverse()
    return result


def partition_graph_greedy(graph: Graph, order: Sequence[int]) -> list[list[int]]:
    """Colour vertices in ``order``, each with the lowest colour its neighbours leave free.

    Returns one list of vertices per colour.
    """
    n = len(graph)
    if len(order) != n:
        raise ValueError(f"partition_graph_greedy: Order has {len(order)} entries, expected {n}")
    if n == 0:
        return []

    color = [-1] * n
    result: list[list[int]] = []
    for v in order:
        used = {color[u] for u in graph[v] if color[u] != -1}
        lowest = next(c for c in range(len(result) + 1) if c not in used)
        color[v] = lowest
        if lowest == len(result):
            result.append([v])
        else:
            result[lowest].append(v)
    return result


def partition_graph_dsatur(graph: Graph) -> list[list[int]]:
    """Colour the graph with the DSatur heuristic; returns one list of vertices per colour."""
    n = len(graph)
    degree = [len(neighbours) for neighbours in graph]
    saturation = [0] * n
    color = [-1] * n
    result: list[list[int]] = []

    def select_vertex() -> int:
        idx, deg, sat = -1, -1, -1
        for i in range(n):
            if color[i] >= 0 or saturation[i] < sat:
                continue
            if saturation[i] > sat:
                idx, sat, deg = i, saturation[i], degree[i]
            elif degree[i] > deg:
                idx, deg = i, degree[i]
        return idx

    def color_vertex(v: int) -> None:
        used: set[int] = set()
        for u in graph[v]:
            if color[u] >= 0:
                used.add(color[u])
            else:
                degree[u] -= 1
                saturation[u] += 1
        new_color = 0
        while new_color < n and new_color in used:
            new_color += 1
        if new_color >= len(result):
            result.append([])
        color[v] = new_color
        result[new_color].append(v)

    for _ in range(n):
        color_vertex(select_vertex())
    return result


def build_csr_graph(m: CsrMatrix) -> list[list[int]]:
    """Adjacency lists of the matrix's off-diagonal pattern, one list per row."""
    return [
        [m.column[j] for j in range(m.row_start[r], m.row_start[r + 1]) if m.column[j] != r]
        for r in range(m.rows)
    ]