import admin_api.domain.repositories as repo
import admin_api.domain.exceptions as domexc
import admin_api.infrastructure.exceptions as exc
import admin_api.infrastructure.interfaces as iabc
import admin_api.infrastructure.models as db

import sqlalchemy as sa
import sqlalchemy.exc as saexc
import typing as t
import logging

__all__ = ["SQLALookupStore", "LOOKUP_TARGETS"]

logger = logging.getLogger('admin_api.storage')

_users = db.User.__table__
_roles = db.Role.__table__
_tenants = db.Tenant.__table__

# logical entity -> (table, logical field -> column)
LOOKUP_TARGETS: dict[str, tuple[sa.Table, dict[str, sa.Column]]] = {
    'user': (_users, {'id': _users.c.id, 'username': _users.c.username, 'email': _users.c.email}),
    'role': (_roles, {'id': _roles.c.id, 'name': _roles.c.name}),
    'tenant': (_tenants, {'id': _tenants.c.id, 'name': _tenants.c.name}),
}


class SQLALookupStore(repo.ILookupStore):
    """Uniqueness and existence checks for validation. Each check runs in its own short session"""

    def __init__(self, db_manager: iabc.SessionManagerInterface):
        self._db = db_manager

    @staticmethod
    def _target(entity: str, field: str) -> tuple[sa.Table, sa.Column]:
        try:
            table, columns = LOOKUP_TARGETS[entity]
            return table, columns[field]
        except KeyError as e:
            raise exc.UnknownLookupTarget(f"No lookup defined for {entity}.{field}") from e

    async def _scalar(self, stmt) -> t.Any:
        try:
            async with self._db.session() as session:
                return (await session.execute(stmt)).scalar()
        except saexc.SQLAlchemyError as e:
            logger.error(f"[LOOKUPS] Lookup failed: {e}")
            raise domexc.ResourceSystemError("storage failure during validation", orig=e) from e

    async def is_unique(self, entity: str, field: str, value: t.Any, exclude_id: int | None = None) -> bool:
        table, column = self._target(entity, field)
        stmt = sa.select(sa.func.count()).select_from(table).where(column == value)
        if exclude_id is not None:
            stmt = stmt.where(table.c.id != exclude_id)
        return await self._scalar(stmt) == 0

    async def exists(self, entity: str, field: str, value: t.Any) -> bool:
        table, column = self._target(entity, field)
        stmt = sa.select(sa.literal(1)).select_from(table).where(column == value).limit(1)
        return await self._scalar(stmt) is not None
