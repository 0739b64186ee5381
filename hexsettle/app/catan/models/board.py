"""Board data models.

Defines the hexagonal grid representation using cube coordinates, terrain
kinds, and the (hex, position) locations used to address vertices and edges.
"""

from __future__ import annotations

import enum

import pydantic


class TerrainType(enum.StrEnum):
    """Terrain kinds and the resource each produces."""

    FOREST = 'forest'  # produces wood
    HILLS = 'hills'  # produces brick
    PASTURE = 'pasture'  # produces sheep
    FIELDS = 'fields'  # produces wheat
    MOUNTAINS = 'mountains'  # produces ore
    DESERT = 'desert'  # produces nothing


class ResourceType(enum.StrEnum):
    """The five tradeable resource types."""

    WOOD = 'wood'
    BRICK = 'brick'
    SHEEP = 'sheep'
    WHEAT = 'wheat'
    ORE = 'ore'


# Map from terrain to the resource it produces (desert excluded).
TERRAIN_RESOURCE: dict[TerrainType, ResourceType] = {
    TerrainType.FOREST: ResourceType.WOOD,
    TerrainType.HILLS: ResourceType.BRICK,
    TerrainType.PASTURE: ResourceType.SHEEP,
    TerrainType.FIELDS: ResourceType.WHEAT,
    TerrainType.MOUNTAINS: ResourceType.ORE,
}


class CubeCoord(pydantic.BaseModel):
    """Cube coordinates for a hex tile. Invariant: q + r + s == 0."""

    model_config = pydantic.ConfigDict(frozen=True)

    q: int
    r: int
    s: int

    @pydantic.model_validator(mode='after')
    def _check_cube_invariant(self) -> CubeCoord:
        if self.q + self.r + self.s != 0:
            raise ValueError(f'q + r + s must be 0, got ({self.q}, {self.r}, {self.s})')
        return self

    def as_tuple(self) -> tuple[int, int, int]:
        """Return ``(q, r, s)``."""
        return (self.q, self.r, self.s)


class Location(pydantic.BaseModel):
    """A vertex or edge of a hex: the hex's cube coordinates plus a position 0–5.

    For settlements and cities the position indexes a vertex; for roads it
    indexes an edge (edge ``p`` runs from vertex ``p`` to vertex ``p + 1``).
    """

    model_config = pydantic.ConfigDict(frozen=True)

    q: int
    r: int
    s: int
    position: int = pydantic.Field(ge=0, le=5)

    @pydantic.model_validator(mode='after')
    def _check_cube_invariant(self) -> Location:
        if self.q + self.r + self.s != 0:
            raise ValueError(f'q + r + s must be 0, got ({self.q}, {self.r}, {self.s})')
        return self

    @property
    def coord(self) -> CubeCoord:
        """The hex this location is expressed against."""
        return CubeCoord(q=self.q, r=self.r, s=self.s)

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Return ``(q, r, s, position)``."""
        return (self.q, self.r, self.s, self.position)


class HexTile(pydantic.BaseModel):
    """A single terrain hex on the board."""

    hex_id: str
    coord: CubeCoord
    terrain: TerrainType
    resource: ResourceType | None = None  # None for desert
    number_token: int | None = None  # None for desert; 2–12 excluding 7
