import admin_api.domain.models as domain
import admin_api.domain.repositories as repo
import admin_api.domain.services as domsvc
import admin_api.infrastructure.models as db
import admin_api.infrastructure.interfaces as iabc
from admin_api.infrastructure.db import WhereColumn, is_bool, is_int, is_timestamp
from admin_api.infrastructure.repositories.base import ResourceMapping, SQLAResourceRepository

import sqlalchemy as sa
import typing as t
import logging

__all__ = ["SQLAUserRepository", "UserMapping", "SETTABLE"]

logger = logging.getLogger('admin_api.storage')

_users = db.User.__table__
_roles = db.Role.__table__

# Columns written by insert and by the full-row update. id, last_updated and the joined role name are not settable.
SETTABLE = (
    'active', 'address_line1', 'address_line2', 'city', 'company', 'country', 'email', 'full_name',
    'gid', 'local_passwd', 'new_user', 'phone_number', 'postal_code', 'public_ssh_key',
    'registration_sent', 'role', 'state_or_province', 'tenant_id', 'token', 'uid', 'username',
)


class UserMapping(ResourceMapping[domain.User]):
    type_name = 'user'
    table = _users
    tenant_column = _users.c.tenant_id

    def __init__(self, hasher: domsvc.IPasswordHasherAsync):
        self.hasher = hasher

    def select_query(self) -> sa.Select:
        return (
            sa.select(*_users.c, _roles.c.name.label('role_name'))
            .select_from(_users.outerjoin(_roles, _users.c.role == _roles.c.id))
        )

    def filter_columns(self) -> t.Mapping[str, WhereColumn]:
        return {
            'active': WhereColumn(_users.c.active, is_bool),
            'company': WhereColumn(_users.c.company),
            'email': WhereColumn(_users.c.email),
            'fullName': WhereColumn(_users.c.full_name),
            'gid': WhereColumn(_users.c.gid, is_int),
            'id': WhereColumn(_users.c.id, is_int),
            'lastUpdated': WhereColumn(_users.c.last_updated, is_timestamp),
            'newUser': WhereColumn(_users.c.new_user, is_bool),
            'publicSSHKey': WhereColumn(_users.c.public_ssh_key),
            'role': WhereColumn(_users.c.role, is_int),
            'rolename': WhereColumn(_roles.c.name),
            'uid': WhereColumn(_users.c.uid, is_int),
            'username': WhereColumn(_users.c.username),
        }

    def from_row(self, row: sa.Row) -> domain.User:
        return domain.User.model_validate(dict(row._mapping))

    def _settable(self, user: domain.User) -> dict[str, t.Any]:
        values = {name: getattr(user, name) for name in SETTABLE}
        # absent and null collapse, the columns are not nullable
        if values['active'] is None:
            values['active'] = True
        if values['new_user'] is None:
            values['new_user'] = False
        return values

    def insert_values(self, user: domain.User) -> dict[str, t.Any]:
        return self._settable(user)

    def update_values(self, user: domain.User) -> dict[str, t.Any]:
        return self._settable(user)

    async def prepare(self, values: dict[str, t.Any]) -> dict[str, t.Any]:
        if values.get('local_passwd') is not None:
            values['local_passwd'] = await self.hasher.hash(values['local_passwd'])
        return values

    def unique_constraints(self) -> t.Mapping[str, str]:
        return {db.USERNAME_CONSTRAINT: 'username', db.EMAIL_CONSTRAINT: 'email'}


class SQLAUserRepository(SQLAResourceRepository[domain.User], repo.IUserRepository):
    """Users through the generic engine. Passwords are hashed right before insert/update and never read back in plaintext"""

    def __init__(self, db_manager: iabc.SessionManagerInterface, hasher: domsvc.IPasswordHasherAsync, **kwargs):
        super().__init__(db_manager, UserMapping(hasher), **kwargs)
