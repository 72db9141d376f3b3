"""Firestore collection names (schema-in-code).

Firestore has no DDL or migrations. Collections are created automatically
when you first write a document. Use these constants so collection names
stay consistent with the mobile client, which reads the same collections.
"""

COLLECTION_EVENTS = "events"
# Keyed by the NGO owner's user id; existence gates event creation.
COLLECTION_NGO_PROFILES = "ngoProfiles"
# Public NGO directory, mirrored from ngoProfiles on save.
COLLECTION_NGOS = "ngos"
# Keyed by user id; holds role and display fields.
COLLECTION_USERS = "users"
