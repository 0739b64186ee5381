"""Unit tests for undoing the last paid build."""

from __future__ import annotations

import random
import unittest

from hexsettle.app.catan.engine.turn_manager import (
    add_player,
    create_initial_game_state,
)
from hexsettle.app.catan.engine.undo import undo_last_build
from hexsettle.app.catan.errors import StateViolation
from hexsettle.app.catan.models.board import Location
from hexsettle.app.catan.models.game_state import (
    BuildRecord,
    GamePhase,
    GameState,
    SessionStatus,
)
from hexsettle.app.catan.models.player import Resources
from hexsettle.app.catan.models.structures import City, Road, Settlement

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _centre(position: int) -> Location:
    return Location(q=0, r=0, s=0, position=position)


def _state() -> GameState:
    state = create_initial_game_state('s1', random.Random(5))
    add_player(state, 'a', 'Alice')
    add_player(state, 'b', 'Bob')
    state.status = SessionStatus.PLAYING
    state.phase = GamePhase.PLAYING
    state.turn_order = ['a', 'b']
    state.current_player_id = 'a'
    return state


def _ring_state() -> GameState:
    """Alice's last road closed a six-road ring and took Longest Road from Bob."""
    state = _state()
    alice = state.find_player('a')
    for position in range(6):
        road = Road(
            structure_id=f'r{position}', player_id='a', location=_centre(position)
        )
        state.structures.append(road)
        alice.structure_ids.append(road.structure_id)
    alice.longest_road_length = 6
    alice.victory_points = 2
    state.find_player('b').longest_road_length = 5
    state.longest_road_player_id = 'a'
    state.builds_this_turn = [
        BuildRecord(structure_id='r5', longest_road_player_id='b')
    ]
    return state


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestUndoBuildings(unittest.TestCase):
    def test_city_reverts_to_settlement(self) -> None:
        """Undoing a city leaves the original settlement and refunds the upgrade."""
        state = _state()
        state.structures = [City(structure_id='c0', player_id='a', location=_centre(0))]
        alice = state.find_player('a')
        alice.structure_ids = ['c0']
        alice.victory_points = 2
        state.builds_this_turn = [BuildRecord(structure_id='c0')]

        undo_last_build(state, 'a')

        structure = state.find_structure('c0')
        self.assertIsInstance(structure, Settlement)
        self.assertEqual(structure.location, _centre(0))
        self.assertEqual(alice.resources, Resources(wheat=2, ore=3))
        self.assertEqual(alice.victory_points, 1)
        self.assertEqual(alice.structure_ids, ['c0'])
        self.assertTrue(state.has_undone)

    def test_settlement_removed(self) -> None:
        state = _state()
        state.structures = [
            Settlement(structure_id='s0', player_id='a', location=_centre(0))
        ]
        alice = state.find_player('a')
        alice.structure_ids = ['s0']
        alice.victory_points = 1
        state.builds_this_turn = [BuildRecord(structure_id='s0')]

        undo_last_build(state, 'a')

        self.assertEqual(state.structures, [])
        self.assertEqual(alice.structure_ids, [])
        self.assertEqual(alice.resources, Resources(wood=1, brick=1, wheat=1, sheep=1))
        self.assertEqual(alice.victory_points, 0)
        self.assertTrue(state.logs[-1].endswith('Alice undid their last settlement.'))


class TestUndoRoad(unittest.TestCase):
    def test_restores_longest_road_holder(self) -> None:
        """The bonus returns to whoever held it before the undone road."""
        state = _ring_state()
        bob = state.find_player('b')

        undo_last_build(state, 'a')

        alice = state.find_player('a')
        self.assertIsNone(state.find_structure('r5'))
        self.assertEqual(alice.resources, Resources(wood=1, brick=1))
        self.assertEqual(alice.longest_road_length, 5)
        self.assertEqual(state.longest_road_player_id, 'b')
        self.assertEqual(alice.victory_points, 0)
        self.assertEqual(bob.victory_points, 2)

    def test_departed_holder_bonus_is_re_evaluated(self) -> None:
        """With the old holder gone, five remaining roads keep the bonus."""
        state = _ring_state()
        state.players = [p for p in state.players if p.player_id != 'b']
        state.turn_order = ['a']

        undo_last_build(state, 'a')

        self.assertEqual(state.longest_road_player_id, 'a')
        self.assertEqual(state.find_player('a').longest_road_length, 5)
        self.assertEqual(state.find_player('a').victory_points, 2)

    def test_holder_unchanged_when_road_did_not_move_bonus(self) -> None:
        state = _ring_state()
        state.builds_this_turn = [
            BuildRecord(structure_id='r5', longest_road_player_id='a')
        ]

        undo_last_build(state, 'a')

        self.assertEqual(state.longest_road_player_id, 'a')
        self.assertEqual(state.find_player('a').victory_points, 2)


class TestUndoLimits(unittest.TestCase):
    def test_nothing_to_undo(self) -> None:
        with self.assertRaises(StateViolation):
            undo_last_build(_state(), 'a')

    def test_once_per_turn(self) -> None:
        state = _ring_state()
        state.builds_this_turn.insert(0, BuildRecord(structure_id='r4'))
        undo_last_build(state, 'a')
        with self.assertRaises(StateViolation):
            undo_last_build(state, 'a')
        self.assertIsNotNone(state.find_structure('r4'))


if __name__ == '__main__':
    unittest.main()
