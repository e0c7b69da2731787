"""SQLAlchemy mapping metadata for the pokesync domain model."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING, Final

from sqlalchemy import (
    Column,
    DateTime,
    Dialect,
    Index,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers

from pokesync.domain.model import Pokemon, RankingAttribute

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

pokemon_table = Table(
    "pokemon",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("poke_api_id", Integer, nullable=False),
    Column("name", String, nullable=False),
    Column("height", Integer, nullable=False),
    Column("weight", Integer, nullable=False),
    Column("base_experience", Integer, nullable=True),
    Column("raw_payload", Text, nullable=False),
    Column("last_synced_at", UTCDateTime(), nullable=False),
    UniqueConstraint("poke_api_id"),
    Index("ix_pokemon_height", "height"),
    Index("ix_pokemon_weight", "weight"),
    Index("ix_pokemon_base_experience", "base_experience"),
)

RANKING_COLUMNS: Final[dict[RankingAttribute, Column[int]]] = {
    RankingAttribute.HEIGHT: pokemon_table.c.height,
    RankingAttribute.WEIGHT: pokemon_table.c.weight,
    RankingAttribute.BASE_EXPERIENCE: pokemon_table.c.base_experience,
}


@cache
def start_mappers() -> orm.registry:
    """Map domain classes onto the tables. Safe to call repeatedly."""

    mapper_registry.map_imperatively(Pokemon, pokemon_table)
    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
