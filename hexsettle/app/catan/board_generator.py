"""Board generation.

Generates the standard 19-hex board (a radius-2 hexagon in cube
coordinates) with randomised terrain placement and number-token assignment.
The board is static for the life of a session; vertex and edge relationships
are derived on demand by :mod:`.engine.topology` rather than stored.
"""

from __future__ import annotations

import random
import uuid

from .models.board import TERRAIN_RESOURCE, CubeCoord, HexTile, TerrainType

# ---------------------------------------------------------------------------
# Board constants
# ---------------------------------------------------------------------------

BOARD_RADIUS = 2

# Standard terrain distribution (must sum to 19).
_TERRAIN_DISTRIBUTION: list[TerrainType] = (
    [TerrainType.FOREST] * 4
    + [TerrainType.HILLS] * 3
    + [TerrainType.PASTURE] * 4
    + [TerrainType.FIELDS] * 4
    + [TerrainType.MOUNTAINS] * 3
    + [TerrainType.DESERT] * 1
)

# Standard number-token distribution (18 tokens for 18 non-desert hexes).
_NUMBER_TOKENS: list[int] = [2, 3, 3, 4, 4, 5, 5, 6, 6, 8, 8, 9, 9, 10, 10, 11, 11, 12]

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def board_positions(radius: int = BOARD_RADIUS) -> list[tuple[int, int, int]]:
    """Return every (q, r, s) within *radius* of the origin, q-major order."""
    positions: list[tuple[int, int, int]] = []
    for q in range(-radius, radius + 1):
        for r in range(max(-radius, -q - radius), min(radius, -q + radius) + 1):
            positions.append((q, r, -q - r))
    return positions


def generate_board(rng: random.Random | None = None) -> list[HexTile]:
    """Generate and return a randomised standard board as an ordered hex list.

    Args:
        rng: Random source used for terrain, token and id shuffling.  Pass a
            seeded ``random.Random`` for reproducible boards.

    Returns:
        19 :class:`HexTile` instances; the desert carries no token.
    """
    rng = rng or random.Random()

    terrains = _TERRAIN_DISTRIBUTION.copy()
    rng.shuffle(terrains)
    number_tokens = _NUMBER_TOKENS.copy()
    rng.shuffle(number_tokens)
    token_iter = iter(number_tokens)

    tiles: list[HexTile] = []
    for (q, r, s), terrain in zip(board_positions(), terrains, strict=True):
        is_desert = terrain == TerrainType.DESERT
        tiles.append(
            HexTile(
                hex_id=str(uuid.UUID(int=rng.getrandbits(128), version=4)),
                coord=CubeCoord(q=q, r=r, s=s),
                terrain=terrain,
                resource=TERRAIN_RESOURCE.get(terrain),
                number_token=None if is_desert else next(token_iter),
            )
        )
    return tiles
