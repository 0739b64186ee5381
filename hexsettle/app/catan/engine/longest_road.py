"""Longest road computation.

The road network of one player is reduced to a graph whose nodes are
canonical vertex addresses and whose edges are that player's roads.  The
longest road is the longest trail in that graph: a walk that may revisit a
node but never reuses an edge.  ``road_graph`` and ``longest_trail`` are pure
and know nothing about sessions.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Sequence

from ..models.game_state import GameState
from ..models.structures import City, Road, Settlement
from . import topology
from .rules import LONGEST_ROAD_MIN_LENGTH, get_player, log_action, transfer_bonus


def road_graph(
    structures: Iterable[Settlement | City | Road], player_id: str
) -> tuple[set[topology.VertexKey], list[topology.EdgeKey]]:
    """Return (nodes, edges) of *player_id*'s road network."""
    edges = sorted(
        {
            topology.canonical_edge_of(s.location)
            for s in structures
            if isinstance(s, Road) and s.player_id == player_id
        }
    )
    nodes = {v for edge in edges for v in edge}
    return nodes, edges


def longest_trail(edges: Sequence[tuple[Hashable, Hashable]]) -> int:
    """Return the number of edges in the longest edge-disjoint walk.

    Exhaustive DFS with backtracking from every node; road networks are small
    enough that this stays cheap.
    """
    adjacency: dict[Hashable, list[tuple[int, Hashable]]] = {}
    for index, (a, b) in enumerate(edges):
        adjacency.setdefault(a, []).append((index, b))
        adjacency.setdefault(b, []).append((index, a))

    used = [False] * len(edges)

    def _dfs(node: Hashable) -> int:
        best = 0
        for index, other in adjacency[node]:
            if used[index]:
                continue
            used[index] = True
            best = max(best, 1 + _dfs(other))
            used[index] = False
        return best

    return max((_dfs(node) for node in adjacency), default=0)


def calculate_longest_road(state: GameState, player_id: str) -> int:
    """Return the length of *player_id*'s longest road on the current board."""
    _, edges = road_graph(state.structures, player_id)
    return longest_trail(edges)


def update_longest_road(state: GameState, player_id: str) -> None:
    """Record *player_id*'s road length and move the bonus if they now lead.

    The bonus moves only for a length of at least five that strictly beats the
    current holder's recorded length.
    """
    player = get_player(state, player_id)
    player.longest_road_length = calculate_longest_road(state, player_id)
    if player.longest_road_length < LONGEST_ROAD_MIN_LENGTH:
        return

    holder_id = state.longest_road_player_id
    if holder_id == player_id:
        return
    holder = state.find_player(holder_id) if holder_id else None
    if holder is not None and player.longest_road_length <= holder.longest_road_length:
        return

    transfer_bonus(state, holder_id, player_id)
    state.longest_road_player_id = player_id
    log_action(
        state,
        f'{player.name} now holds the Longest Road ({player.longest_road_length}).',
    )
