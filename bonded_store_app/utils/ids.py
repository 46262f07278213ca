from __future__ import annotations

import uuid


def new_id() -> str:
    """Opaque identifier for crew, products and transactions."""
    return str(uuid.uuid4())
