"""
DOMAIN SERVICES - Pure domain logic shared by several use cases (no I/O).
"""

from marketplace.domain.services.chat_roles import (
    ChatRole,
    canonical_room_id,
    classify_role,
    parse_room_id,
    room_id_for,
)
from marketplace.domain.services.passwords import hash_password, verify_password

__all__ = [
    "ChatRole",
    "canonical_room_id",
    "classify_role",
    "parse_room_id",
    "room_id_for",
    "hash_password",
    "verify_password",
]
