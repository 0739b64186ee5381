"""Unit tests for placement legality."""

from __future__ import annotations

import random
import unittest

from hexsettle.app.catan.engine import placement
from hexsettle.app.catan.engine.turn_manager import (
    add_player,
    create_initial_game_state,
)
from hexsettle.app.catan.errors import NotFoundViolation, PlacementViolation
from hexsettle.app.catan.models.board import Location
from hexsettle.app.catan.models.game_state import GameState
from hexsettle.app.catan.models.structures import City, Road, Settlement

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _loc(q: int, r: int, position: int) -> Location:
    return Location(q=q, r=r, s=-q - r, position=position)


def _state() -> GameState:
    state = create_initial_game_state('s1', random.Random(5))
    add_player(state, 'a', 'Alice')
    add_player(state, 'b', 'Bob')
    return state


def _put(
    state: GameState,
    cls: type[Settlement] | type[City] | type[Road],
    player_id: str,
    location: Location,
) -> None:
    structure = cls(
        structure_id=f'{player_id}-{len(state.structures)}',
        player_id=player_id,
        location=location,
    )
    state.structures.append(structure)
    state.find_player(player_id).structure_ids.append(structure.structure_id)


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestValidateSettlement(unittest.TestCase):
    def test_empty_vertex_in_setup(self) -> None:
        placement.validate_settlement(_state(), 'a', _loc(0, 0, 0), setup=True)

    def test_occupied_through_equivalent_address(self) -> None:
        state = _state()
        _put(state, Settlement, 'a', _loc(0, 0, 0))
        with self.assertRaises(PlacementViolation):
            placement.validate_settlement(state, 'b', _loc(1, 0, 4), setup=True)

    def test_distance_rule_either_order(self) -> None:
        for first, second in [(0, 1), (1, 0)]:
            state = _state()
            _put(state, Settlement, 'a', _loc(0, 0, first))
            with self.assertRaises(PlacementViolation):
                placement.validate_settlement(
                    state, 'b', _loc(0, 0, second), setup=True
                )

    def test_distance_rule_across_hexes(self) -> None:
        state = _state()
        _put(state, City, 'a', _loc(0, 0, 0))
        # Vertex 5 of the east neighbour is one edge away from vertex 0.
        with self.assertRaises(PlacementViolation):
            placement.validate_settlement(state, 'b', _loc(1, 0, 5), setup=True)

    def test_two_steps_away_is_allowed(self) -> None:
        state = _state()
        _put(state, Settlement, 'a', _loc(0, 0, 0))
        placement.validate_settlement(state, 'b', _loc(0, 0, 2), setup=True)

    def test_main_phase_needs_own_road(self) -> None:
        state = _state()
        with self.assertRaises(PlacementViolation):
            placement.validate_settlement(state, 'a', _loc(0, 0, 2), setup=False)
        _put(state, Road, 'b', _loc(0, 0, 1))
        with self.assertRaises(PlacementViolation):
            placement.validate_settlement(state, 'a', _loc(0, 0, 2), setup=False)
        _put(state, Road, 'a', _loc(0, 0, 2))
        placement.validate_settlement(state, 'a', _loc(0, 0, 2), setup=False)

    def test_off_board_hex(self) -> None:
        with self.assertRaises(NotFoundViolation):
            placement.validate_settlement(_state(), 'a', _loc(5, -5, 0), setup=True)

    def test_board_vertex_through_off_board_address(self) -> None:
        """(3, 0, -3, 4) and (3, -1, -2, 2) both name vertex 0 of hex (2, 0, -2)."""
        for location in (_loc(2, 0, 0), _loc(3, 0, 4), _loc(3, -1, 2)):
            placement.validate_settlement(_state(), 'a', location, setup=True)

        state = _state()
        _put(state, Settlement, 'b', _loc(2, 0, 0))
        with self.assertRaises(PlacementViolation):
            placement.validate_settlement(state, 'a', _loc(3, 0, 4), setup=True)


class TestValidateCity(unittest.TestCase):
    def test_upgrades_own_settlement(self) -> None:
        state = _state()
        _put(state, Settlement, 'a', _loc(0, 0, 0))
        settlement = placement.validate_city(state, 'a', _loc(1, -1, 2))
        self.assertEqual(settlement.location, _loc(0, 0, 0))

    def test_rejects_opponent_settlement(self) -> None:
        state = _state()
        _put(state, Settlement, 'b', _loc(0, 0, 0))
        with self.assertRaises(PlacementViolation):
            placement.validate_city(state, 'a', _loc(0, 0, 0))

    def test_rejects_existing_city(self) -> None:
        state = _state()
        _put(state, City, 'a', _loc(0, 0, 0))
        with self.assertRaises(PlacementViolation):
            placement.validate_city(state, 'a', _loc(0, 0, 0))


class TestValidateSetupRoad(unittest.TestCase):
    def test_touches_last_settlement(self) -> None:
        state = _state()
        _put(state, Settlement, 'a', _loc(0, 0, 0))
        placement.validate_setup_road(state, 'a', _loc(0, 0, 0))
        placement.validate_setup_road(state, 'a', _loc(0, 0, 5))
        placement.validate_setup_road(state, 'a', _loc(1, 0, 3))

    def test_away_from_last_settlement(self) -> None:
        state = _state()
        _put(state, Settlement, 'a', _loc(0, 0, 0))
        with self.assertRaises(PlacementViolation):
            placement.validate_setup_road(state, 'a', _loc(0, 0, 2))

    def test_must_follow_newest_settlement(self) -> None:
        state = _state()
        _put(state, Settlement, 'a', _loc(0, 0, 0))
        _put(state, Road, 'a', _loc(0, 0, 0))
        _put(state, Settlement, 'a', _loc(-2, 2, 3))
        with self.assertRaises(PlacementViolation):
            placement.validate_setup_road(state, 'a', _loc(0, 0, 5))
        placement.validate_setup_road(state, 'a', _loc(-2, 2, 3))

    def test_without_settlement(self) -> None:
        with self.assertRaises(PlacementViolation):
            placement.validate_setup_road(_state(), 'a', _loc(0, 0, 0))


class TestValidateConnectedRoad(unittest.TestCase):
    def test_extends_own_road(self) -> None:
        state = _state()
        _put(state, Road, 'a', _loc(0, 0, 0))
        placement.validate_connected_road(state, 'a', _loc(0, 0, 1))

    def test_extends_own_building(self) -> None:
        state = _state()
        _put(state, City, 'a', _loc(0, 0, 3))
        placement.validate_connected_road(state, 'a', _loc(0, 0, 2))

    def test_disconnected(self) -> None:
        state = _state()
        _put(state, Road, 'a', _loc(0, 0, 0))
        with self.assertRaises(PlacementViolation):
            placement.validate_connected_road(state, 'a', _loc(0, 0, 3))

    def test_occupied_edge_through_other_hex(self) -> None:
        state = _state()
        _put(state, Road, 'a', _loc(0, 0, 0))
        with self.assertRaises(PlacementViolation):
            placement.validate_connected_road(state, 'a', _loc(1, 0, 3))

    def test_coastal_edge_through_off_board_hex(self) -> None:
        """Edge 3 of (3, 0, -3) is edge 0 of board hex (2, 0, -2)."""
        state = _state()
        _put(state, Settlement, 'a', _loc(2, 0, 0))
        placement.validate_connected_road(state, 'a', _loc(3, 0, 3))
        with self.assertRaises(NotFoundViolation):
            placement.validate_connected_road(state, 'a', _loc(3, 0, 0))

    def test_opponent_road_does_not_connect(self) -> None:
        state = _state()
        _put(state, Road, 'b', _loc(0, 0, 0))
        with self.assertRaises(PlacementViolation):
            placement.validate_connected_road(state, 'a', _loc(0, 0, 1))


if __name__ == '__main__':
    unittest.main()
