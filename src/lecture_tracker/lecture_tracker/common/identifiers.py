from __future__ import annotations

import uuid


def new_id() -> str:
    """Opaque identifier for a new record."""
    return str(uuid.uuid4())
