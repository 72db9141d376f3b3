"""Encode/decode Python values to/from Firestore REST API 'fields' format.

Also encodes the atomic field operations (increment, array union/remove)
as Firestore FieldTransforms for :commit writes.
"""

import base64
import re
from datetime import UTC, datetime
from typing import Any

from eventlink.application.interfaces.store import (
    ArrayRemove,
    ArrayUnion,
    Increment,
)


def encode_value(v: Any) -> dict:
    if v is None:
        return {"nullValue": None}
    if isinstance(v, bool):
        return {"booleanValue": v}
    if isinstance(v, int):
        return {"integerValue": str(v)}
    if isinstance(v, float):
        return {"doubleValue": v}
    if isinstance(v, datetime):
        aware = v if v.tzinfo else v.replace(tzinfo=UTC)
        return {"timestampValue": aware.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%S.%fZ")}
    if isinstance(v, str):
        return {"stringValue": v}
    if isinstance(v, bytes):
        return {"bytesValue": base64.standard_b64encode(v).decode("ascii")}
    if isinstance(v, (list, tuple)):
        return {"arrayValue": {"values": [encode_value(x) for x in v]}}
    if isinstance(v, dict):
        return {"mapValue": {"fields": {k: encode_value(x) for k, x in v.items()}}}
    raise TypeError(f"Unsupported Firestore value type: {type(v)}")


def encode_fields(data: dict[str, Any]) -> dict:
    """Convert a Python dict to a Firestore REST Document body ({'fields': ...})."""
    return {"fields": {k: encode_value(v) for k, v in data.items()}}


def encode_transform(field_path: str, op: Increment | ArrayUnion | ArrayRemove) -> dict:
    """Convert an atomic field operation to a Firestore FieldTransform."""
    if isinstance(op, Increment):
        return {"fieldPath": field_path, "increment": encode_value(op.delta)}
    if isinstance(op, ArrayUnion):
        return {
            "fieldPath": field_path,
            "appendMissingElements": {"values": [encode_value(x) for x in op.values]},
        }
    if isinstance(op, ArrayRemove):
        return {
            "fieldPath": field_path,
            "removeAllFromArray": {"values": [encode_value(x) for x in op.values]},
        }
    raise TypeError(f"Unsupported field transform: {type(op)}")


_FRACTION_RE = re.compile(r"\.(\d{6})\d+")


def _parse_timestamp(raw: str) -> datetime:
    # Firestore returns up to nanosecond precision; datetime keeps microseconds.
    return datetime.fromisoformat(_FRACTION_RE.sub(r".\1", raw).replace("Z", "+00:00"))


def decode_value(obj: dict) -> Any:
    if "nullValue" in obj:
        return None
    if "booleanValue" in obj:
        return obj["booleanValue"]
    if "integerValue" in obj:
        return int(obj["integerValue"])
    if "doubleValue" in obj:
        return float(obj["doubleValue"])
    if "timestampValue" in obj:
        return _parse_timestamp(obj["timestampValue"])
    if "stringValue" in obj:
        return obj["stringValue"]
    if "bytesValue" in obj:
        return base64.standard_b64decode(obj["bytesValue"])
    if "arrayValue" in obj:
        vals = obj.get("arrayValue", {}).get("values") or []
        return [decode_value(x) for x in vals]
    if "mapValue" in obj:
        fields = obj["mapValue"].get("fields") or {}
        return {k: decode_value(x) for k, x in fields.items()}
    return None


def decode_fields(document: dict | None) -> dict:
    """Convert a Firestore REST Document resource to a Python dict of its fields."""
    if not document:
        return {}
    return {k: decode_value(v) for k, v in (document.get("fields") or {}).items()}
