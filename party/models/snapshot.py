"""Append-only history of aggregate payloads."""

from __future__ import annotations

import datetime
import uuid
from typing import Any

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from party.models.base import Base, NumericCodeEnumType
from party.models.enums import EntityType


class Snapshot(Base):
    """The serialized state of an association, mandate, organization or person."""

    __tablename__ = "party_snapshots"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    tenant_id: Mapped[uuid.UUID] = mapped_column(nullable=False, index=True)
    entity_type: Mapped[EntityType] = mapped_column(
        NumericCodeEnumType(EntityType), nullable=False
    )
    entity_id: Mapped[uuid.UUID] = mapped_column(nullable=False, index=True)
    timestamp: Mapped[datetime.datetime] = mapped_column(
        nullable=False, default=datetime.datetime.now
    )
    data: Mapped[str] = mapped_column(Text, nullable=False)

    def __init__(self, **kwargs: Any) -> None:
        kwargs.setdefault("id", uuid.uuid4())
        kwargs.setdefault("timestamp", datetime.datetime.now())
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return (
            f"Snapshot(entity_type={self.entity_type}, entity_id={self.entity_id}, "
            f"timestamp={self.timestamp})"
        )
