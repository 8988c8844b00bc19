"""Record identifier generation"""

import uuid


def generate_id() -> str:
    """Opaque random identifier for a new record (UUID4 hex, no dashes)"""
    return uuid.uuid4().hex
