from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SelfieUpload:
    """Raw selfie payload as received from the client."""

    data: bytes
    filename: Optional[str] = None
    content_type: Optional[str] = None
