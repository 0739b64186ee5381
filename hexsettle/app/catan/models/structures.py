"""Structure variants placed on the board.

A structure is one of three tagged variants discriminated on ``kind``.
Upgrading a settlement produces a new :class:`City` value that keeps the
settlement's identity, owner, and location; nothing is mutated in place.
"""

from __future__ import annotations

import enum
from typing import Annotated, Literal

import pydantic

from .board import Location


class StructureKind(enum.StrEnum):
    """Discriminator values for the structure variants."""

    SETTLEMENT = 'settlement'
    CITY = 'city'
    ROAD = 'road'


class BaseStructure(pydantic.BaseModel):
    """Fields shared by every structure."""

    model_config = pydantic.ConfigDict(frozen=True)

    structure_id: str
    player_id: str
    location: Location


class Settlement(BaseStructure):
    """A settlement on a vertex. Worth 1 VP, produces 1 resource."""

    kind: Literal[StructureKind.SETTLEMENT] = StructureKind.SETTLEMENT


class City(BaseStructure):
    """An upgraded settlement on a vertex. Worth 2 VP, produces 2 resources."""

    kind: Literal[StructureKind.CITY] = StructureKind.CITY


class Road(BaseStructure):
    """A road on an edge."""

    kind: Literal[StructureKind.ROAD] = StructureKind.ROAD


# Discriminated union of all structure variants for deserialization.
Structure = Annotated[
    Settlement | City | Road,
    pydantic.Field(discriminator='kind'),
]


def is_building(structure: Settlement | City | Road) -> bool:
    """Return True for settlements and cities (anything occupying a vertex)."""
    return not isinstance(structure, Road)


def upgrade_to_city(settlement: Settlement) -> City:
    """Return the city that replaces *settlement*, preserving id, owner, location."""
    return City(
        structure_id=settlement.structure_id,
        player_id=settlement.player_id,
        location=settlement.location,
    )


def downgrade_to_settlement(city: City) -> Settlement:
    """Return the settlement a city reverts to when its upgrade is undone."""
    return Settlement(
        structure_id=city.structure_id,
        player_id=city.player_id,
        location=city.location,
    )
