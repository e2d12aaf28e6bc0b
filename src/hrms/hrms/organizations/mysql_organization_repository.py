from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import OfficeLocation, Organization
from .repository import OrganizationRepository


class MySQLOrganizationRepository(OrganizationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, organization_id: int) -> Optional[Organization]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT organization_id, company_name, office_latitude, office_longitude,
                       office_address, office_radius, is_active
                FROM organizations
                WHERE organization_id=%s
                """,
                (int(organization_id),),
            )
            r = fetchone(cur)
            if not r:
                return None

            office = None
            if r.get("office_latitude") is not None and r.get("office_longitude") is not None:
                office = OfficeLocation(
                    latitude=float(r["office_latitude"]),
                    longitude=float(r["office_longitude"]),
                    address=r.get("office_address"),
                    radius=float(r["office_radius"]) if r.get("office_radius") is not None else None,
                )
            return Organization(
                organization_id=int(r["organization_id"]),
                company_name=r["company_name"],
                office_location=office,
                is_active=bool(r.get("is_active", True)),
            )

    def update_office_location(self, organization_id: int, location: OfficeLocation) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE organizations
                SET office_latitude=%s, office_longitude=%s, office_address=%s, office_radius=%s
                WHERE organization_id=%s
                """,
                (location.latitude, location.longitude, location.address, location.radius, int(organization_id)),
            )
            return cur.rowcount > 0
