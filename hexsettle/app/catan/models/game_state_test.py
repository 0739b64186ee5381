"""Unit tests for the GameState model's look-up helpers."""

from __future__ import annotations

import unittest

from hexsettle.app.catan.models.board import Location
from hexsettle.app.catan.models.game_state import GamePhase, GameState
from hexsettle.app.catan.models.player import Player
from hexsettle.app.catan.models.structures import City, Road, Settlement

_LOCATION = Location(q=0, r=0, s=0, position=0)


def _state() -> GameState:
    state = GameState(session_id='s1')
    state.players = [Player(player_id='a', name='Alice', color='red')]
    state.structures = [
        Settlement(structure_id='s1', player_id='a', location=_LOCATION),
        Road(structure_id='r1', player_id='a', location=_LOCATION),
    ]
    state.players[0].structure_ids = ['s1', 'r1']
    return state


class TestGameState(unittest.TestCase):
    def test_defaults(self) -> None:
        state = GameState(session_id='s1')
        self.assertEqual(state.status, 'waiting')
        self.assertIsNone(state.current_player_id)
        self.assertEqual(state.logs, [])

    def test_find_helpers(self) -> None:
        state = _state()
        self.assertEqual(state.find_player('a').name, 'Alice')
        self.assertIsNone(state.find_player('b'))
        self.assertIsInstance(state.find_structure('r1'), Road)
        self.assertIsNone(state.find_structure('nope'))
        self.assertIsNone(state.find_hex('nope'))

    def test_replace_structure(self) -> None:
        state = _state()
        state.replace_structure(
            City(structure_id='s1', player_id='a', location=_LOCATION)
        )
        self.assertIsInstance(state.structures[0], City)
        with self.assertRaises(KeyError):
            state.replace_structure(
                City(structure_id='zz', player_id='a', location=_LOCATION)
            )

    def test_remove_structure_updates_owner(self) -> None:
        state = _state()
        state.remove_structure('r1')
        self.assertEqual([s.structure_id for s in state.structures], ['s1'])
        self.assertEqual(state.players[0].structure_ids, ['s1'])
        with self.assertRaises(KeyError):
            state.remove_structure('r1')

    def test_in_setup(self) -> None:
        state = GameState(session_id='s1')
        self.assertTrue(state.in_setup)
        state.phase = GamePhase.PLAYING
        self.assertFalse(state.in_setup)


if __name__ == '__main__':
    unittest.main()
