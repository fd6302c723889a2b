"""JSON cache serializer.

ONLY JSON serialization - default codec for cached values, with type
tags for datetimes, decimals, UUIDs and sets.

Following maximum separation architecture - one file = one purpose.
"""

import json
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict
from uuid import UUID

from ...core.exceptions import CacheOperationError


class CacheJSONEncoder(json.JSONEncoder):
    """JSON encoder with tagged extended types."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, datetime):
            return {"__datetime__": obj.isoformat()}
        elif isinstance(obj, date):
            return {"__date__": obj.isoformat()}
        elif isinstance(obj, Decimal):
            return {"__decimal__": str(obj)}
        elif isinstance(obj, UUID):
            return {"__uuid__": str(obj)}
        elif isinstance(obj, (set, frozenset)):
            return {"__set__": sorted(obj, key=repr)}
        elif is_dataclass(obj) and not isinstance(obj, type):
            return asdict(obj)
        return super().default(obj)


def decode_json_object(obj: Dict[str, Any]) -> Any:
    """Decode tagged JSON objects back to Python types."""
    if "__datetime__" in obj:
        return datetime.fromisoformat(obj["__datetime__"])
    elif "__date__" in obj:
        return date.fromisoformat(obj["__date__"])
    elif "__decimal__" in obj:
        return Decimal(obj["__decimal__"])
    elif "__uuid__" in obj:
        return UUID(obj["__uuid__"])
    elif "__set__" in obj:
        return set(obj["__set__"])
    return obj


def serialize(value: Any) -> str:
    """Serialize a value to a JSON string.

    Raises:
        CacheOperationError: If the value is not JSON serializable
    """
    try:
        return json.dumps(value, cls=CacheJSONEncoder, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise CacheOperationError(
            operation="serialize",
            message="Failed to serialize cache value",
            details={"value_type": type(value).__name__},
            cause=e,
        ) from e


def deserialize(data: Any) -> Any:
    """Deserialize a JSON string.

    Raises:
        CacheOperationError: If the payload is not valid JSON
    """
    if isinstance(data, bytes):
        data = data.decode("utf-8")
    try:
        return json.loads(data, object_hook=decode_json_object)
    except (TypeError, ValueError) as e:
        raise CacheOperationError(
            operation="deserialize",
            message="Failed to deserialize cache value",
            details={"payload_preview": str(data)[:64]},
            cause=e,
        ) from e


class JSONCacheSerializer:
    """JSON cache serializer."""

    def serialize(self, value: Any) -> str:
        return serialize(value)

    def deserialize(self, data: str) -> Any:
        return deserialize(data)

    def get_format_name(self) -> str:
        return "json"
