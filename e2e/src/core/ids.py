# e2e/src/core/ids.py
from __future__ import annotations

import hashlib
import uuid
from typing import Optional


def generate_unique_identifier(seed: Optional[str] = None, length: int = 12) -> str:
    """
    Usernames on the demo bank must be unique across runs.
    Same seed -> same id; no seed -> fresh uuid.
    """
    if seed is None:
        return uuid.uuid4().hex[:length]
    return hashlib.sha1(seed.encode("utf-8")).hexdigest()[:length]
