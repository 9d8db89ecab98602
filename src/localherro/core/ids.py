from __future__ import annotations

import uuid


def new_id(now_ms: int) -> str:
    """Return a record identifier: creation time plus a random suffix.

    The time prefix keeps ids roughly sortable; the uuid4 suffix keeps two ids
    created in the same millisecond apart.
    """
    return f"{int(now_ms)}-{uuid.uuid4().hex[:8]}"
