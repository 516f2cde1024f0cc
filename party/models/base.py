"""Declarative base, column types and mixins shared by every party table.

Uses SQLAlchemy 2.0 ``DeclarativeBase`` with a ``type_annotation_map`` so
mapped columns can be declared with plain Python types:

* ``str``   -> ``String``
* ``int``   -> ``Integer``
* ``bool``  -> ``Boolean``
* ``uuid.UUID`` -> ``Uuid`` (native on PostgreSQL, CHAR(32) elsewhere)
* ``datetime.date`` / ``datetime.datetime`` -> ``Date`` / ``DateTime``
* ``Decimal`` -> ``Numeric``
"""

from __future__ import annotations

import datetime
import uuid
from decimal import Decimal
from typing import Any

from sqlalchemy import Boolean, Date, DateTime, Integer, Numeric, String, Uuid
from sqlalchemy.engine import Dialect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from party.models.enums import CodeEnum


class Base(DeclarativeBase):
    """Shared declarative base for every party table."""

    type_annotation_map = {
        str: String,
        int: Integer,
        bool: Boolean,
        uuid.UUID: Uuid,
        datetime.date: Date,
        datetime.datetime: DateTime,
        Decimal: Numeric(28, 8),
    }


class CodeEnumType(TypeDecorator):
    """Persist a ``CodeEnum`` member as its string code."""

    impl = String(50)
    cache_ok = True

    def __init__(self, enum_class: type[CodeEnum], length: int = 50) -> None:
        super().__init__(length)
        self.enum_class = enum_class

    def process_bind_param(self, value: Any, dialect: Dialect) -> str | None:
        if value is None:
            return None
        if isinstance(value, self.enum_class):
            return value.code
        return self.enum_class.from_code(value).code

    def process_result_value(self, value: Any, dialect: Dialect) -> CodeEnum | None:
        if value is None:
            return None
        return self.enum_class.from_code(value)


class NumericCodeEnumType(TypeDecorator):
    """Persist a ``CodeEnum`` member as its dense numeric code."""

    impl = Integer
    cache_ok = True

    def __init__(self, enum_class: type[CodeEnum]) -> None:
        super().__init__()
        self.enum_class = enum_class

    def process_bind_param(self, value: Any, dialect: Dialect) -> int | None:
        if value is None:
            return None
        if not isinstance(value, self.enum_class):
            value = self.enum_class.from_code(value)
        return value.to_numeric_code()

    def process_result_value(self, value: Any, dialect: Dialect) -> CodeEnum | None:
        if value is None:
            return None
        return self.enum_class.from_numeric_code(value)


class StringListType(TypeDecorator):
    """Persist a list of codes as a comma-separated string."""

    impl = String(1000)
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Dialect) -> str | None:
        if value is None:
            return None
        return ",".join(value)

    def process_result_value(self, value: Any, dialect: Dialect) -> list[str]:
        if not value:
            return []
        return value.split(",")


class TimestampMixin:
    """Mixin that adds ``created`` and ``updated`` timestamps."""

    created: Mapped[datetime.datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.datetime.now
    )
    updated: Mapped[datetime.datetime | None] = mapped_column(
        DateTime, nullable=True, onupdate=datetime.datetime.now
    )