"""Apply store patches to decoded document data.

Same semantics as Firestore field transforms: increment treats a missing
or non-numeric field as 0, array union appends only missing elements,
array remove drops every occurrence.
"""

import copy
from typing import Any

from eventlink.application.interfaces.store import (
    ArrayRemove,
    ArrayUnion,
    Increment,
    Patch,
)


def _as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, list) else []


def apply_patch(data: dict[str, Any], patch: Patch) -> dict[str, Any]:
    """Return a new dict with patch applied; data is not modified."""
    out = copy.deepcopy(data)
    for key, op in patch.items():
        if isinstance(op, Increment):
            current = out.get(key)
            if isinstance(current, bool) or not isinstance(current, (int, float)):
                current = 0
            out[key] = current + op.delta
        elif isinstance(op, ArrayUnion):
            items = _as_list(out.get(key))
            for v in op.values:
                if v not in items:
                    items.append(v)
            out[key] = items
        elif isinstance(op, ArrayRemove):
            out[key] = [v for v in _as_list(out.get(key)) if v not in op.values]
        else:
            out[key] = copy.deepcopy(op)
    return out
