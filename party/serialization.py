"""Serialization of party aggregates to JSON-compatible values.

Mapped entities are walked through the SQLAlchemy mapper: every column
attribute is included and one-to-many relationships (the owned
sub-entities) are serialized recursively. Back-references to the owning
aggregate are skipped.
"""

import json
import uuid
from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from sqlalchemy import inspect
from sqlalchemy.orm import ONETOMANY

from party.models.enums import CodeEnum


def to_dict(obj: Any) -> dict:
    """Convert a mapped entity or dataclass to a dictionary."""
    if _is_mapped(obj):
        return entity_to_dict(obj)
    elif is_dataclass(obj):
        return dataclass_to_dict(obj)
    elif isinstance(obj, dict):
        return {k: serialize_value(v) for k, v in obj.items()}
    else:
        return {"value": str(obj)}


def _is_mapped(obj: Any) -> bool:
    return hasattr(type(obj), "__mapper__")


def entity_to_dict(obj: Any) -> dict:
    """Convert a mapped entity, and the sub-entities it owns, to a dict."""
    mapper = inspect(obj).mapper
    result: dict[str, Any] = {}
    for attr in mapper.column_attrs:
        result[attr.key] = serialize_value(getattr(obj, attr.key))
    for rel in mapper.relationships:
        if rel.direction is ONETOMANY:
            result[rel.key] = [entity_to_dict(child) for child in getattr(obj, rel.key)]
    return result


def dataclass_to_dict(obj: Any) -> dict:
    """Convert a dataclass to a dict without a deep copy."""
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, CodeEnum):
        return value.code
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, uuid.UUID):
        return str(value)
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple, set)):
        return [serialize_value(v) for v in value]
    elif _is_mapped(value) or is_dataclass(value):
        return to_dict(value)
    return value


def to_json(obj: Any, pretty: bool = False) -> str:
    """Serialize a mapped entity or dataclass to a JSON string."""
    if pretty:
        return json.dumps(to_dict(obj), indent=2, ensure_ascii=False)
    return json.dumps(to_dict(obj), ensure_ascii=False)
