"""Associations between two parties."""

from __future__ import annotations

import datetime
import uuid
from typing import Any

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from party.models.base import Base, TimestampMixin
from party.models.keys import AssociationPropertyId
from party.models.party import ValueMixin, remove_by_key, upsert_by_key


class Association(TimestampMixin, Base):
    """A typed link between a first and a second party in the same tenant."""

    __tablename__ = "party_associations"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    tenant_id: Mapped[uuid.UUID] = mapped_column(nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    first_party_id: Mapped[uuid.UUID] = mapped_column(nullable=False, index=True)
    second_party_id: Mapped[uuid.UUID] = mapped_column(nullable=False, index=True)
    effective_from: Mapped[datetime.date | None] = mapped_column(nullable=True, default=None)
    effective_to: Mapped[datetime.date | None] = mapped_column(nullable=True, default=None)

    properties: Mapped[list[AssociationProperty]] = relationship(
        back_populates="association",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="AssociationProperty.type",
    )

    def __init__(self, **kwargs: Any) -> None:
        kwargs.setdefault("id", uuid.uuid4())
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return (
            f"Association(id={self.id}, type={self.type!r}, "
            f"first_party_id={self.first_party_id}, second_party_id={self.second_party_id})"
        )

    def involves(self, party_id: uuid.UUID) -> bool:
        return party_id in (self.first_party_id, self.second_party_id)

    def add_property(self, association_property: AssociationProperty) -> None:
        association_property.association_id = self.id
        upsert_by_key(self.properties, association_property)

    def get_property(self, type: str) -> AssociationProperty | None:
        key = AssociationPropertyId(self.id, type)
        return next((item for item in self.properties if item.key == key), None)

    def has_property(self, type: str) -> bool:
        return self.get_property(type) is not None

    def remove_property(self, type: str) -> bool:
        return remove_by_key(self.properties, AssociationPropertyId(self.id, type))


class AssociationProperty(ValueMixin, Base):
    __tablename__ = "party_association_properties"

    association_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("party_associations.id", ondelete="CASCADE"), primary_key=True
    )
    type: Mapped[str] = mapped_column(String(50), primary_key=True)

    association: Mapped[Association] = relationship(back_populates="properties")

    @property
    def key(self) -> AssociationPropertyId:
        return AssociationPropertyId(self.association_id, self.type)
