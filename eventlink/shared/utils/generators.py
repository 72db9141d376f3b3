"""Identifiers for store-assigned document ids and request ids."""

from cuid2 import Cuid

# Lowercase alphanumerics only: valid in Firestore paths and in log lines.
_ids = Cuid(length=24)


def generate_cuid() -> str:
    """Return a new collision-resistant id (CUID2, 24 chars)."""
    return _ids.generate()
