"""Mandates: authority granted to one or more mandataries."""

from __future__ import annotations

import datetime
import uuid
from typing import Any

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from party.models.base import Base, NumericCodeEnumType, TimestampMixin
from party.models.enums import RequiredMandataries
from party.models.keys import MandataryId, MandateLinkId, MandatePropertyId
from party.models.party import ValueMixin, remove_by_key, upsert_by_key


class Mandate(TimestampMixin, Base):
    """A mandate for a tenant.

    ``required_mandataries`` states how many of the mandataries must act
    together; it is stored as its numeric code.
    """

    __tablename__ = "party_mandates"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    tenant_id: Mapped[uuid.UUID] = mapped_column(nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    required_mandataries: Mapped[RequiredMandataries] = mapped_column(
        NumericCodeEnumType(RequiredMandataries), nullable=False
    )
    effective_from: Mapped[datetime.date | None] = mapped_column(nullable=True, default=None)
    effective_to: Mapped[datetime.date | None] = mapped_column(nullable=True, default=None)

    mandataries: Mapped[list[Mandatary]] = relationship(
        back_populates="mandate", cascade="all, delete-orphan", lazy="selectin"
    )
    properties: Mapped[list[MandateProperty]] = relationship(
        back_populates="mandate", cascade="all, delete-orphan", lazy="selectin"
    )
    links: Mapped[list[MandateLink]] = relationship(
        back_populates="mandate", cascade="all, delete-orphan", lazy="selectin"
    )

    def __init__(self, **kwargs: Any) -> None:
        kwargs.setdefault("id", uuid.uuid4())
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return f"Mandate(id={self.id}, type={self.type!r}, tenant_id={self.tenant_id})"

    @property
    def party_ids(self) -> list[uuid.UUID]:
        return [mandatary.party_id for mandatary in self.mandataries]

    def add_mandatary(self, mandatary: Mandatary) -> None:
        mandatary.mandate_id = self.id
        upsert_by_key(self.mandataries, mandatary)

    def remove_mandatary_for_party(self, party_id: uuid.UUID) -> bool:
        return remove_by_key(self.mandataries, MandataryId(self.id, party_id))

    def add_property(self, mandate_property: MandateProperty) -> None:
        mandate_property.mandate_id = self.id
        upsert_by_key(self.properties, mandate_property)

    def get_property(self, type: str) -> MandateProperty | None:
        key = MandatePropertyId(self.id, type)
        return next((item for item in self.properties if item.key == key), None)

    def remove_property(self, type: str) -> bool:
        return remove_by_key(self.properties, MandatePropertyId(self.id, type))

    def add_link(self, link: MandateLink) -> None:
        link.mandate_id = self.id
        upsert_by_key(self.links, link)

    def get_links(self, type: str) -> list[MandateLink]:
        return [link for link in self.links if link.type == type]

    def remove_links(self, type: str) -> int:
        matching = self.get_links(type)
        for link in matching:
            self.links.remove(link)
        return len(matching)


class Mandatary(Base):
    __tablename__ = "party_mandataries"

    mandate_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("party_mandates.id", ondelete="CASCADE"), primary_key=True
    )
    party_id: Mapped[uuid.UUID] = mapped_column(primary_key=True, index=True)
    role: Mapped[str] = mapped_column(String(50), nullable=False)

    mandate: Mapped[Mandate] = relationship(back_populates="mandataries")

    @property
    def key(self) -> MandataryId:
        return MandataryId(self.mandate_id, self.party_id)


class MandateProperty(ValueMixin, Base):
    __tablename__ = "party_mandate_properties"

    mandate_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("party_mandates.id", ondelete="CASCADE"), primary_key=True
    )
    type: Mapped[str] = mapped_column(String(50), primary_key=True)

    mandate: Mapped[Mandate] = relationship(back_populates="properties")

    @property
    def key(self) -> MandatePropertyId:
        return MandatePropertyId(self.mandate_id, self.type)


class MandateLink(Base):
    """A link from a mandate to an external target (an account, a product)."""

    __tablename__ = "party_mandate_links"

    mandate_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("party_mandates.id", ondelete="CASCADE"), primary_key=True
    )
    type: Mapped[str] = mapped_column(String(50), primary_key=True)
    target: Mapped[str] = mapped_column(String(100), primary_key=True)

    mandate: Mapped[Mandate] = relationship(back_populates="links")

    @property
    def key(self) -> MandateLinkId:
        return MandateLinkId(self.mandate_id, self.type, self.target)
