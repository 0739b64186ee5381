"""Placement legality for settlements, cities, and roads.

Each ``validate_*`` function raises a :class:`~..errors.PlacementViolation`
(or :class:`~..errors.NotFoundViolation` off the board) and never
mutates the state.  Occupancy is always compared through canonical vertex
and edge identities, so every equivalent address of a vertex or edge is
treated the same.
"""

from __future__ import annotations

from ..errors import NotFoundViolation, PlacementViolation
from ..models.board import Location
from ..models.game_state import GameState
from ..models.structures import City, Road, Settlement, is_building
from . import topology

# ---------------------------------------------------------------------------
# Board look-ups
# ---------------------------------------------------------------------------


def occupied_vertices(state: GameState) -> dict[topology.VertexKey, Settlement | City]:
    """Map each canonical vertex holding a settlement or city to its structure."""
    return {
        topology.canonical_vertex_of(s.location): s
        for s in state.structures
        if is_building(s)
    }


def road_edges(
    state: GameState, player_id: str | None = None
) -> dict[topology.EdgeKey, Road]:
    """Map each canonical edge carrying a road to it, optionally for one owner."""
    return {
        topology.canonical_edge_of(s.location): s
        for s in state.structures
        if isinstance(s, Road) and (player_id is None or s.player_id == player_id)
    }


def _require_on_board(
    state: GameState, location: Location, hexes: set[tuple[int, int, int]]
) -> None:
    board = {tile.coord.as_tuple() for tile in state.hexes}
    if board.isdisjoint(hexes):
        raise NotFoundViolation(f'{location.as_tuple()} is not on the board.')


def require_vertex_on_board(state: GameState, location: Location) -> None:
    """Raise NotFoundViolation unless a hex at the vertex is part of the board."""
    _require_on_board(state, location, topology.vertex_hexes(*location.as_tuple()))


def require_edge_on_board(state: GameState, location: Location) -> None:
    """Raise NotFoundViolation unless a hex along the edge is part of the board."""
    _require_on_board(state, location, topology.edge_hexes(*location.as_tuple()))


def find_own_settlement(
    state: GameState, player_id: str, location: Location
) -> Settlement | None:
    """Return *player_id*'s settlement at *location* (any equivalent address)."""
    structure = occupied_vertices(state).get(topology.canonical_vertex_of(location))
    if isinstance(structure, Settlement) and structure.player_id == player_id:
        return structure
    return None


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate_settlement(
    state: GameState, player_id: str, location: Location, *, setup: bool
) -> None:
    """Check occupancy, the distance rule, and (outside setup) road connectivity."""
    require_vertex_on_board(state, location)
    occupied = occupied_vertices(state)
    vertex = topology.canonical_vertex_of(location)
    if vertex in occupied:
        raise PlacementViolation('That vertex is already occupied.')
    if any(n in occupied for n in topology.neighbouring_vertices(*vertex)):
        raise PlacementViolation('Too close to another settlement or city.')
    if setup:
        return
    own_roads = road_edges(state, player_id)
    if not any(e in own_roads for e in topology.touching_edges(*vertex)):
        raise PlacementViolation('A settlement must connect to one of your roads.')


def validate_city(state: GameState, player_id: str, location: Location) -> Settlement:
    """Return the settlement to upgrade, or raise if there is none of the player's."""
    require_vertex_on_board(state, location)
    settlement = find_own_settlement(state, player_id, location)
    if settlement is None:
        raise PlacementViolation('A city must replace one of your settlements.')
    return settlement


def _require_free_edge(state: GameState, edge: topology.EdgeKey) -> None:
    if edge in road_edges(state):
        raise PlacementViolation('That edge already has a road.')


def validate_setup_road(state: GameState, player_id: str, location: Location) -> None:
    """A setup road must touch the settlement the player has just placed."""
    require_edge_on_board(state, location)
    edge = topology.canonical_edge_of(location)
    _require_free_edge(state, edge)

    player = state.find_player(player_id)
    last = (
        state.find_structure(player.structure_ids[-1])
        if player is not None and player.structure_ids
        else None
    )
    if not isinstance(last, Settlement):
        raise PlacementViolation('Place a settlement before its road.')
    if topology.canonical_vertex_of(last.location) not in edge:
        raise PlacementViolation(
            'A setup road must touch the settlement you just placed.'
        )


def validate_connected_road(
    state: GameState, player_id: str, location: Location
) -> None:
    """A main-phase road must touch an own building or own road at an endpoint."""
    require_edge_on_board(state, location)
    edge = topology.canonical_edge_of(location)
    _require_free_edge(state, edge)

    occupied = occupied_vertices(state)
    own_roads = road_edges(state, player_id)
    for endpoint in edge:
        building = occupied.get(endpoint)
        if building is not None and building.player_id == player_id:
            return
        if any(e in own_roads for e in topology.touching_edges(*endpoint)):
            return
    raise PlacementViolation('A road must connect to your road, settlement, or city.')
