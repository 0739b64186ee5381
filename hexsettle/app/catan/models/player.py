"""Player data models.

Tracks a player's resources, development cards, owned structures, and
victory points throughout the game.
"""

from __future__ import annotations

import enum

import pydantic

from .board import ResourceType


class DevCardType(enum.StrEnum):
    """Development card types."""

    KNIGHT = 'knight'
    VICTORY_POINT = 'victory_point'
    ROAD_BUILDING = 'road_building'
    YEAR_OF_PLENTY = 'year_of_plenty'
    MONOPOLY = 'monopoly'


# Standard development card deck composition (25 cards total).
DEV_CARD_COUNTS: dict[DevCardType, int] = {
    DevCardType.KNIGHT: 14,
    DevCardType.VICTORY_POINT: 5,
    DevCardType.ROAD_BUILDING: 2,
    DevCardType.YEAR_OF_PLENTY: 2,
    DevCardType.MONOPOLY: 2,
}

# Standard build costs.
ROAD_COST = {'wood': 1, 'brick': 1}
SETTLEMENT_COST = {'wood': 1, 'brick': 1, 'wheat': 1, 'sheep': 1}
CITY_COST = {'wheat': 2, 'ore': 3}
DEV_CARD_COST = {'wheat': 1, 'sheep': 1, 'ore': 1}


class Resources(pydantic.BaseModel):
    """A collection of resource cards held by a player."""

    wood: int = pydantic.Field(default=0, ge=0)
    brick: int = pydantic.Field(default=0, ge=0)
    sheep: int = pydantic.Field(default=0, ge=0)
    wheat: int = pydantic.Field(default=0, ge=0)
    ore: int = pydantic.Field(default=0, ge=0)

    @classmethod
    def of_each(cls, amount: int) -> Resources:
        """Return Resources holding *amount* of every kind."""
        return cls(**{resource.value: amount for resource in ResourceType})

    def total(self) -> int:
        """Return the total number of resource cards."""
        return self.wood + self.brick + self.sheep + self.wheat + self.ore

    def can_afford(self, cost: dict[str, int]) -> bool:
        """Return True if these resources can cover the given cost dict."""
        return all(
            getattr(self, resource, 0) >= amount for resource, amount in cost.items()
        )

    def subtract(self, cost: dict[str, int]) -> Resources:
        """Return new Resources with cost subtracted.

        Raises pydantic.ValidationError if any count would go negative, so
        callers must check :meth:`can_afford` first.
        """
        return Resources(
            wood=self.wood - cost.get('wood', 0),
            brick=self.brick - cost.get('brick', 0),
            sheep=self.sheep - cost.get('sheep', 0),
            wheat=self.wheat - cost.get('wheat', 0),
            ore=self.ore - cost.get('ore', 0),
        )

    def add(self, gained: dict[str, int]) -> Resources:
        """Return new Resources with the given counts added."""
        return Resources(
            wood=self.wood + gained.get('wood', 0),
            brick=self.brick + gained.get('brick', 0),
            sheep=self.sheep + gained.get('sheep', 0),
            wheat=self.wheat + gained.get('wheat', 0),
            ore=self.ore + gained.get('ore', 0),
        )

    def get(self, resource_type: ResourceType) -> int:
        """Return the count for a specific resource type."""
        return getattr(self, resource_type.value, 0)

    def with_resource(self, resource_type: ResourceType, amount: int) -> Resources:
        """Return new Resources with one field replaced."""
        data = self.model_dump()
        data[resource_type.value] = amount
        return Resources(**data)

    def units(self) -> list[ResourceType]:
        """Return one entry per held card, grouped by kind in a fixed order."""
        pool: list[ResourceType] = []
        for resource in ResourceType:
            pool.extend([resource] * self.get(resource))
        return pool


class DevelopmentCard(pydantic.BaseModel):
    """A single development card owned by a player."""

    card_id: str
    card_type: DevCardType
    # Bought this turn; not playable until the owner's next turn.
    is_new: bool = True
    was_played: bool = False


class Player(pydantic.BaseModel):
    """A player's complete state."""

    player_id: str
    name: str
    color: str
    resources: Resources = pydantic.Field(default_factory=Resources)
    victory_points: int = 0
    # IDs of structures on the board owned by this player, in build order.
    structure_ids: list[str] = pydantic.Field(default_factory=list)
    development_cards: list[DevelopmentCard] = pydantic.Field(default_factory=list)
    knights_played: int = 0
    longest_road_length: int = 0

    def find_card(self, card_id: str) -> DevelopmentCard | None:
        """Return the owned card with *card_id*, or ``None``."""
        return next((c for c in self.development_cards if c.card_id == card_id), None)

    def held_victory_point_cards(self) -> int:
        """Number of victory-point cards in hand (they count at all times)."""
        return sum(
            1
            for c in self.development_cards
            if c.card_type == DevCardType.VICTORY_POINT
        )
