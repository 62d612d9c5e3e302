"""
Pokedex Backend - Pokemon SQLAlchemy Model
============================================

What:  ORM model representing the `pokemons` table.
Why:   Maps records to rows; Alembic mirrors this in its migrations.
How:   Two indexed identity columns (`no`, `name`) plus a JSON document
       holding every other descriptive field the client sent.

Table Design Rationale:
    - UUID primary key: the record's object id, assigned on insert, never changed
    - no: catalogue ordinal, unique, NULL allowed (several NULLs do not collide)
    - name: unique, stored lowercase by the service layer
    - attributes: opaque payload; the service merges it key by key on update
    - version: optimistic-lock counter maintained by SQLAlchemy, never serialized
"""

import uuid
from typing import Any, Dict, Optional

from sqlalchemy import JSON, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Pokemon(Base):
    """
    A single Pokedex entry.

    Query Patterns:
        - List page:    ORDER BY no ASC OFFSET :offset LIMIT :limit
        - By ordinal:   WHERE no = :no       (uq_pokemons_no)
        - By object id: WHERE id = :uuid     (primary key)
        - By name:      WHERE name = :name   (uq_pokemons_name)
    """

    __tablename__ = "pokemons"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Object id assigned on insert",
    )

    no: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment="Catalogue ordinal, unique",
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Lowercase name, unique",
    )

    # JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
    attributes: Mapped[Dict[str, Any]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=False,
        default=dict,
        comment="Opaque descriptive fields passed through unchanged",
    )

    version: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Internal revision counter",
    )

    __table_args__ = (
        UniqueConstraint("name", name="uq_pokemons_name"),
        UniqueConstraint("no", name="uq_pokemons_no"),
    )

    __mapper_args__ = {"version_id_col": version}

    def to_document(self) -> Dict[str, Any]:
        """Public shape of the record: {id, no, name, ...attributes}."""
        return {**(self.attributes or {}), "id": self.id, "no": self.no, "name": self.name}

    def __repr__(self) -> str:
        return f"<Pokemon(id={self.id}, no={self.no}, name='{self.name}')>"
