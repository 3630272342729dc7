"""
Base building blocks:
identity and season scoping for persisted league entities.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from leaguemerge.domain.model.enums import EntityType


def new_id() -> UUID:
    return uuid4()


@runtime_checkable
class EntityRef(Protocol):
    """Reference to a typed entity using its stable identity."""

    @property
    def entity_type(self) -> EntityType: ...

    @property
    def id(self) -> UUID: ...


@dataclass(eq=False, kw_only=True)
class Entity:
    """Internal identity exists immediately in the domain."""

    id: UUID = field(default_factory=new_id)

    # class-level discriminator; subclasses must override
    ENTITY_TYPE: ClassVar[EntityType]

    @property
    def entity_type(self) -> EntityType:
        return self.ENTITY_TYPE


@dataclass(eq=False, kw_only=True)
class SeasonScopedEntity(Entity):
    """Entity owned by exactly one season of the league store."""

    season_id: UUID | None = None

    def belongs_to(self, season_id: UUID) -> bool:
        return self.season_id == season_id
