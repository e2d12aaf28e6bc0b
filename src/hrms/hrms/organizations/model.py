from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class OfficeLocation:
    latitude: float
    longitude: float
    address: Optional[str] = None
    radius: Optional[float] = None  # meters; None -> configured default


@dataclass(frozen=True)
class Organization:
    """Domain entity: the tenant owning users, shifts and attendance."""

    organization_id: int
    company_name: str
    office_location: Optional[OfficeLocation] = None
    is_active: bool = True
