from __future__ import annotations

from typing import Optional

import structlog

from ..common.validators import require_coordinates
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import OfficeLocation, Organization
from .repository import OrganizationRepository

log = structlog.get_logger(__name__)


class OrganizationService:
    """Use case: read the tenant and maintain its office geofence."""

    def __init__(self, organizations: OrganizationRepository):
        self._organizations = organizations

    def get(self, organization_id: int) -> Organization:
        org = self._organizations.get_by_id(organization_id)
        if not org:
            raise NotFoundError("Organization not found")
        return org

    def update_office_location(
        self,
        *,
        current_role: Role,
        organization_id: int,
        latitude,
        longitude,
        address: Optional[str] = None,
        radius=None,
    ) -> Organization:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can change the office location")

        lat, lon = require_coordinates(latitude, longitude)
        radius_m = None
        if radius is not None and radius != "":
            try:
                radius_m = float(radius)
            except (TypeError, ValueError):
                raise ValidationError("Radius must be a number of meters")
            if radius_m < 0:
                raise ValidationError("Radius cannot be negative")

        self.get(organization_id)
        address = address.strip() if isinstance(address, str) else ""
        location = OfficeLocation(latitude=lat, longitude=lon, address=address or None, radius=radius_m)
        self._organizations.update_office_location(organization_id, location)
        log.info("organization.office_location_updated", organization_id=organization_id, radius=radius_m)
        return self.get(organization_id)
