from __future__ import annotations

import uuid


def new_id() -> str:
    """Opaque stable identifier shared by every table."""
    return uuid.uuid4().hex
