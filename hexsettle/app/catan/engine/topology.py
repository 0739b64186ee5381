"""Vertex and edge topology on the hex grid.

Cube-coordinate geometry
------------------------
Each hex is identified by integer cube coordinates (q, r, s) with the
invariant q + r + s == 0.  The six neighbour directions in order are::

    0: (+1,  0, -1)   east
    1: ( 0, +1, -1)   south-east
    2: (-1, +1,  0)   south-west
    3: (-1,  0, +1)   west
    4: ( 0, -1, +1)   north-west
    5: (+1, -1,  0)   north-east

Vertex identification
---------------------
A vertex is addressed as ``(q, r, s, position)`` with position 0–5.  The same
physical vertex is shared by up to three hexes, so it has exactly three
equivalent addresses::

    (H, p)
    (neighbour of H in direction p,           (p + 4) % 6)
    (neighbour of H in direction (p - 1) % 6, (p + 2) % 6)

The *canonical* address is the lexicographically smallest of the three; two
addresses denote the same vertex iff their canonical addresses are equal.

Edge identification
-------------------
Edge ``p`` of H runs from vertex ``p`` to vertex ``(p + 1) % 6`` of H.  An
edge is identified by the unordered pair of its endpoints' canonical
addresses; no separate edge-equivalence table is kept.

Every function here is pure; the equivalence computations are memoized.
"""

from __future__ import annotations

import functools

from ..models.board import CubeCoord, Location

VertexKey = tuple[int, int, int, int]
EdgeKey = tuple[VertexKey, VertexKey]

# Six neighbour directions in cube coordinate space, indexed 0–5.
HEX_DIRECTIONS: list[tuple[int, int, int]] = [
    (1, 0, -1),
    (0, 1, -1),
    (-1, 1, 0),
    (-1, 0, 1),
    (0, -1, 1),
    (1, -1, 0),
]


def neighbor(q: int, r: int, s: int, direction: int) -> tuple[int, int, int]:
    """Return the hex adjacent to (q, r, s) in *direction* (taken mod 6)."""
    dq, dr, ds = HEX_DIRECTIONS[direction % 6]
    return (q + dq, r + dr, s + ds)


@functools.cache
def equivalent_vertices(
    q: int, r: int, s: int, position: int
) -> tuple[VertexKey, VertexKey, VertexKey]:
    """Return the three addresses of the vertex at *position* on hex (q, r, s)."""
    n1 = neighbor(q, r, s, position)
    n2 = neighbor(q, r, s, position - 1)
    return (
        (q, r, s, position),
        (*n1, (position + 4) % 6),
        (*n2, (position + 2) % 6),
    )


@functools.cache
def canonical_vertex(q: int, r: int, s: int, position: int) -> VertexKey:
    """Return the canonical address of a vertex."""
    return min(equivalent_vertices(q, r, s, position))


def canonical_vertex_of(location: Location) -> VertexKey:
    """Return the canonical address of the vertex *location* points at."""
    return canonical_vertex(*location.as_tuple())


def edge_endpoints(
    q: int, r: int, s: int, position: int
) -> tuple[VertexKey, VertexKey]:
    """Return the two vertex addresses (on the same hex) an edge connects."""
    return ((q, r, s, position), (q, r, s, (position + 1) % 6))


@functools.cache
def canonical_edge(q: int, r: int, s: int, position: int) -> EdgeKey:
    """Return the edge identity: its endpoints' canonical addresses, sorted."""
    a, b = edge_endpoints(q, r, s, position)
    ca, cb = canonical_vertex(*a), canonical_vertex(*b)
    return (ca, cb) if ca <= cb else (cb, ca)


def canonical_edge_of(location: Location) -> EdgeKey:
    """Return the identity of the edge *location* points at."""
    return canonical_edge(*location.as_tuple())


def neighbouring_vertices(q: int, r: int, s: int, position: int) -> set[VertexKey]:
    """Return the canonical addresses of the (three) vertices one edge away.

    Taking ``position + 1`` on each of the three equivalent addresses visits
    every adjacent vertex exactly once.
    """
    return {
        canonical_vertex(eq, er, es, (ep + 1) % 6)
        for eq, er, es, ep in equivalent_vertices(q, r, s, position)
    }


def touching_edges(q: int, r: int, s: int, position: int) -> set[EdgeKey]:
    """Return the identities of the (three) edges that meet at a vertex."""
    edges: set[EdgeKey] = set()
    for eq, er, es, ep in equivalent_vertices(q, r, s, position):
        edges.add(canonical_edge(eq, er, es, ep))
        edges.add(canonical_edge(eq, er, es, (ep - 1) % 6))
    return edges


def vertex_hexes(q: int, r: int, s: int, position: int) -> set[tuple[int, int, int]]:
    """Return the coordinates of the three hexes meeting at a vertex."""
    return {(eq, er, es) for eq, er, es, _ in equivalent_vertices(q, r, s, position)}


def edge_hexes(q: int, r: int, s: int, position: int) -> set[tuple[int, int, int]]:
    """Return the coordinates of the two hexes sharing an edge."""
    a, b = edge_endpoints(q, r, s, position)
    return vertex_hexes(*a) & vertex_hexes(*b)


def vertex_touches_hex(location: Location, coord: CubeCoord) -> bool:
    """True if the vertex at *location* is a corner of the hex at *coord*."""
    return coord.as_tuple() in vertex_hexes(*location.as_tuple())
