"""JSON serialization helpers for session models.

Provides thin wrappers around Pydantic's built-in serialization so that
callers (HTTP routes, the external broadcast collaborator) can serialize any
model without directly depending on Pydantic internals.
"""

from __future__ import annotations

import json
import typing

import pydantic

from .game_state import GameState


def serialize_model(model: pydantic.BaseModel) -> dict[str, typing.Any]:
    """Return a JSON-serializable dict representation of any Pydantic model."""
    return model.model_dump(mode='json')


def board_snapshot(state: GameState) -> dict[str, list[dict[str, typing.Any]]]:
    """Return the transmissible board surface: ordered hexes and structures.

    Hexes carry their axial coordinates, terrain, resource and number token;
    structures carry hex coordinates, position, kind and owner.
    """
    hexes = [
        {
            'hex_id': tile.hex_id,
            'q': tile.coord.q,
            'r': tile.coord.r,
            's': tile.coord.s,
            'terrain': tile.terrain.value,
            'resource': tile.resource.value if tile.resource else None,
            'number_token': tile.number_token,
        }
        for tile in state.hexes
    ]
    structures = [
        {
            'q': structure.location.q,
            'r': structure.location.r,
            's': structure.location.s,
            'position': structure.location.position,
            'kind': structure.kind.value,
            'player_id': structure.player_id,
        }
        for structure in state.structures
    ]
    return {'hexes': hexes, 'structures': structures}


def game_state_to_json(game_state: GameState) -> str:
    """Convert a GameState to a JSON string suitable for transport."""
    return game_state.model_dump_json()


def game_state_from_json(json_str: str) -> GameState:
    """Parse a JSON string back into a GameState instance."""
    return GameState.model_validate(json.loads(json_str))
