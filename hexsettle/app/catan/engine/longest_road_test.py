"""Unit tests for longest road computation."""

from __future__ import annotations

import random
import unittest

from hexsettle.app.catan.engine import longest_road
from hexsettle.app.catan.engine.turn_manager import (
    add_player,
    create_initial_game_state,
)
from hexsettle.app.catan.models.board import Location
from hexsettle.app.catan.models.game_state import GameState
from hexsettle.app.catan.models.structures import Road


def _road(player_id: str, q: int, r: int, position: int, n: int = 0) -> Road:
    return Road(
        structure_id=f'{player_id}-road-{q}-{r}-{position}-{n}',
        player_id=player_id,
        location=Location(q=q, r=r, s=-q - r, position=position),
    )


def _state_with_roads(roads: list[Road]) -> GameState:
    state = create_initial_game_state('s1', random.Random(3))
    add_player(state, 'a', 'Alice')
    add_player(state, 'b', 'Bob')
    for road in roads:
        state.structures.append(road)
        state.find_player(road.player_id).structure_ids.append(road.structure_id)
    return state


class TestLongestTrail(unittest.TestCase):
    def test_no_edges(self) -> None:
        self.assertEqual(longest_road.longest_trail([]), 0)

    def test_straight_chain(self) -> None:
        for n in range(1, 8):
            edges = [(i, i + 1) for i in range(n)]
            self.assertEqual(longest_road.longest_trail(edges), n)

    def test_y_shape_counts_two_arms(self) -> None:
        """Three 2-road arms on one centre: only two arms can be walked."""
        edges = [(0, 1), (1, 2), (0, 3), (3, 4), (0, 5), (5, 6)]
        self.assertEqual(longest_road.longest_trail(edges), 4)

    def test_cycle_uses_every_edge(self) -> None:
        edges = [(i, (i + 1) % 6) for i in range(6)]
        self.assertEqual(longest_road.longest_trail(edges), 6)

    def test_cycle_with_tail(self) -> None:
        edges = [(0, 1), (1, 2), (2, 0), (2, 3), (3, 4)]
        self.assertEqual(longest_road.longest_trail(edges), 5)

    def test_disconnected_segments(self) -> None:
        edges = [(0, 1), (1, 2), (10, 11)]
        self.assertEqual(longest_road.longest_trail(edges), 2)


class TestRoadGraph(unittest.TestCase):
    def test_ring_around_hex(self) -> None:
        roads = [_road('a', 0, 0, p) for p in range(6)]
        nodes, edges = longest_road.road_graph(roads, 'a')
        self.assertEqual(len(nodes), 6)
        self.assertEqual(len(edges), 6)
        self.assertEqual(longest_road.longest_trail(edges), 6)

    def test_equivalent_addresses_are_one_edge(self) -> None:
        roads = [_road('a', 0, 0, 0), _road('a', 1, 0, 3, n=1)]
        _, edges = longest_road.road_graph(roads, 'a')
        self.assertEqual(len(edges), 1)

    def test_only_owner_roads(self) -> None:
        roads = [_road('a', 0, 0, 0), _road('b', 0, 0, 1)]
        _, edges = longest_road.road_graph(roads, 'a')
        self.assertEqual(len(edges), 1)


class TestUpdateLongestRoad(unittest.TestCase):
    def test_four_roads_do_not_qualify(self) -> None:
        state = _state_with_roads([_road('a', 0, 0, p) for p in range(4)])
        longest_road.update_longest_road(state, 'a')
        self.assertEqual(state.find_player('a').longest_road_length, 4)
        self.assertIsNone(state.longest_road_player_id)

    def test_five_roads_award_bonus(self) -> None:
        state = _state_with_roads([_road('a', 0, 0, p) for p in range(5)])
        longest_road.update_longest_road(state, 'a')
        self.assertEqual(state.longest_road_player_id, 'a')
        self.assertEqual(state.find_player('a').victory_points, 2)

    def test_tie_keeps_holder(self) -> None:
        roads = [_road('a', 0, 0, p) for p in range(5)]
        roads += [_road('b', -2, 2, p) for p in range(5)]
        state = _state_with_roads(roads)
        longest_road.update_longest_road(state, 'a')
        longest_road.update_longest_road(state, 'b')
        self.assertEqual(state.longest_road_player_id, 'a')
        self.assertEqual(state.find_player('b').longest_road_length, 5)

    def test_strictly_longer_takes_bonus(self) -> None:
        roads = [_road('a', 0, 0, p) for p in range(5)]
        roads += [_road('b', -2, 2, p) for p in range(6)]
        state = _state_with_roads(roads)
        longest_road.update_longest_road(state, 'a')
        longest_road.update_longest_road(state, 'b')
        self.assertEqual(state.longest_road_player_id, 'b')
        self.assertEqual(state.find_player('a').victory_points, 0)
        self.assertEqual(state.find_player('b').victory_points, 2)


if __name__ == '__main__':
    unittest.main()
