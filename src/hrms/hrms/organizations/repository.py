from __future__ import annotations

from typing import Optional, Protocol

from .model import OfficeLocation, Organization


class OrganizationRepository(Protocol):
    def get_by_id(self, organization_id: int) -> Optional[Organization]:
        raise NotImplementedError

    def update_office_location(self, organization_id: int, location: OfficeLocation) -> bool:
        raise NotImplementedError
