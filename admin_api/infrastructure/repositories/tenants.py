import admin_api.domain.repositories as repo
import admin_api.domain.models as domain
import admin_api.domain.exceptions as domexc
import admin_api.infrastructure.interfaces as iabc
import admin_api.infrastructure.models as db
from admin_api.infrastructure.telemetry.traces import TracerType

import sqlalchemy as sa
import sqlalchemy.exc as saexc
import logging

__all__ = ["SQLATenantRepository"]

logger = logging.getLogger('admin_api.storage')

_tenants = db.Tenant.__table__


class SQLATenantRepository(repo.ITenantRepository):
    """Tenant tree stored as an adjacency list (tenants.parent_id).
    A user sees its own tenant and every descendant, provided its own tenant is active.
    """

    def __init__(self, db_manager: iabc.SessionManagerInterface):
        self._db = db_manager

    @staticmethod
    def _subtree_query(root_id: int) -> sa.Select:
        # UNION, not UNION ALL: a cycle in parent_id stops once no new ids show up
        subtree = (
            sa.select(_tenants.c.id)
            .where(_tenants.c.id == root_id)
            .cte('tenant_subtree', recursive=True)
        )
        children = sa.select(_tenants.c.id).where(_tenants.c.parent_id == subtree.c.id)
        subtree = subtree.union(children)
        return sa.select(subtree.c.id)

    async def _fetch(self, stmt) -> list[sa.Row]:
        try:
            async with self._db.session() as session:
                return list((await session.execute(stmt)).all())
        except saexc.SQLAlchemyError as e:
            logger.error(f"[TENANTS] Tenant lookup failed: {e}")
            raise domexc.ResourceSystemError("storage failure while checking tenancy", orig=e) from e

    async def get_by_id(self, tenant_id: int) -> domain.Tenant | None:
        stmt = sa.select(_tenants.c.id, _tenants.c.name, _tenants.c.active, _tenants.c.parent_id).where(_tenants.c.id == tenant_id)
        rows = await self._fetch(stmt)
        return domain.Tenant.model_validate(dict(rows[0]._mapping)) if rows else None

    @TracerType.traced
    async def visible_tenant_ids(self, current_user: domain.CurrentUser) -> list[int]:
        if current_user.tenant_id is None:
            return []
        own = await self.get_by_id(current_user.tenant_id)
        if own is None or not own.active:
            logger.info(f"[TENANTS] User '{current_user.username}' belongs to a missing or inactive tenant")
            return []
        rows = await self._fetch(self._subtree_query(current_user.tenant_id))
        return sorted(row[0] for row in rows)

    @TracerType.traced
    async def is_resource_authorized(self, tenant_id: int, current_user: domain.CurrentUser) -> bool:
        return tenant_id in await self.visible_tenant_ids(current_user)
