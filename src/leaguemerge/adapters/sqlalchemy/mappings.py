"""SQLAlchemy mapping metadata for the league domain model."""

from __future__ import annotations

import logging
import uuid
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers, relationship

from leaguemerge.domain.model import (
    Division,
    Fixture,
    FrameResult,
    FrameWinner,
    Player,
    Season,
    Team,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Core tables -----------------------------------------------------------------

season_table = Table(
    "season",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False),
    Column("start_date", Date, nullable=True),
    Column("end_date", Date, nullable=True),
    Column("is_active", Boolean, nullable=False, default=True),
)

division_table = Table(
    "division",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "season_id", UUIDColumnType, ForeignKey("season.id", ondelete="CASCADE"), nullable=True
    ),
    Column("name", String, nullable=False),
    Column("notes", String, nullable=True),
)

team_table = Table(
    "team",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "season_id", UUIDColumnType, ForeignKey("season.id", ondelete="CASCADE"), nullable=True
    ),
    Column("name", String, nullable=False),
    Column(
        "division_id",
        UUIDColumnType,
        ForeignKey("division.id", ondelete="SET NULL"),
        nullable=True,
    ),
)

player_table = Table(
    "player",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "season_id", UUIDColumnType, ForeignKey("season.id", ondelete="CASCADE"), nullable=True
    ),
    Column("first_name", String, nullable=False),
    Column("last_name", String, nullable=False),
    Column("team_id", UUIDColumnType, ForeignKey("team.id", ondelete="SET NULL"), nullable=True),
)

fixture_table = Table(
    "fixture",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "season_id", UUIDColumnType, ForeignKey("season.id", ondelete="CASCADE"), nullable=True
    ),
    Column("date", Date, nullable=False),
    Column("home_team_id", UUIDColumnType, ForeignKey("team.id"), nullable=False),
    Column("away_team_id", UUIDColumnType, ForeignKey("team.id"), nullable=False),
    Column(
        "division_id",
        UUIDColumnType,
        ForeignKey("division.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Index("ix_fixture_season_date", "season_id", "date"),
)

frame_result_table = Table(
    "frame_result",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "fixture_id",
        UUIDColumnType,
        ForeignKey("fixture.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("number", Integer, nullable=False),
    Column("home_player_id", UUIDColumnType, ForeignKey("player.id"), nullable=True),
    Column("away_player_id", UUIDColumnType, ForeignKey("player.id"), nullable=True),
    Column("winner", Enum(FrameWinner, native_enum=False), nullable=False),
    Column("home_player_rating", Integer, nullable=True),
    Column("away_player_rating", Integer, nullable=True),
)

SEASON_SCOPED_TABLES: dict[type[object], Table] = {
    Division: division_table,
    Team: team_table,
    Player: player_table,
    Fixture: fixture_table,
}


@cache
def start_mappers() -> orm.registry:
    """Map the league dataclasses onto their tables (idempotent)."""

    log.debug("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Season, season_table)
    mapper_registry.map_imperatively(Division, division_table)
    mapper_registry.map_imperatively(Team, team_table)
    mapper_registry.map_imperatively(Player, player_table)
    mapper_registry.map_imperatively(FrameResult, frame_result_table)
    mapper_registry.map_imperatively(
        Fixture,
        fixture_table,
        properties={
            "frames": relationship(
                FrameResult,
                cascade="all, delete-orphan",
                order_by=frame_result_table.c.number,
            ),
        },
    )

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
