import admin_api.domain.repositories as repos
import admin_api.domain.models as domain
import admin_api.domain.exceptions as domexc
from admin_api.domain.validation import IValidator

import typing as t
import logging

__all__ = ['ResourceService']

logger = logging.getLogger('admin_api')

R = t.TypeVar("R", bound=domain.IIdentifiable)


class ResourceService(t.Generic[R]):
    """Runs one CRUD operation for a resource type: validation, the tenant check, then the storage engine.
    Reads skip validation and are restricted to the tenants the acting user can see.
    """

    def __init__(self, repo: repos.IResourceRepository[R], validator: IValidator[R], tenants: repos.ITenantRepository):
        self.repo = repo
        self.validator = validator
        self.tenants = tenants

    type_name: str = 'resource'

    @property
    def log_prefix(self) -> str:
        return f'[{self.type_name.upper()}S]'

    async def _validate(self, record: R) -> None:
        errors = await self.validator.validate(record)
        if errors:
            logger.info(f"{self.log_prefix} {record.type_name()} '{record.audit_label()}' rejected: {len(errors)} validation errors")
            raise domexc.ResourceValidationError(errors)

    async def _authorize(self, current_user: domain.CurrentUser, record: R) -> None:
        if not await record.is_authorized(current_user, self.tenants):
            logger.info(f"{self.log_prefix} '{current_user.username}' is not authorized for {record.type_name()} '{record.audit_label()}'")
            raise domexc.ResourceNotAuthorized("not authorized on this tenant")

    async def create(self, current_user: domain.CurrentUser, record: R) -> R:
        await self._validate(record)
        await self._authorize(current_user, record)
        return await self.repo.create(record)

    async def list(self, current_user: domain.CurrentUser, parameters: t.Mapping[str, str]) -> list[R]:
        tenant_ids = await self.tenants.visible_tenant_ids(current_user)
        return await self.repo.read(dict(parameters), tenant_ids)

    async def get(self, current_user: domain.CurrentUser, id: int) -> R:
        '''Records of tenants the acting user can't see are reported as missing'''
        record = await self.repo.get(id)
        if record is None or not await record.is_authorized(current_user, self.tenants):
            raise domexc.ResourceMissing(f"no {self.type_name} found with this id")
        return record

    async def update(self, current_user: domain.CurrentUser, record: R) -> R:
        record_id, present = record.identity()
        await self._validate(record)
        existing = await self.repo.get(record_id) if present else None
        if existing is None:
            raise domexc.ResourceMissing(f"no {self.type_name} found with this id")
        # the record may not leave a tenant the user can't see, nor move into one
        await self._authorize(current_user, existing)
        await self._authorize(current_user, record)
        return await self.repo.update(record)

    async def delete(self, current_user: domain.CurrentUser, id: int) -> R:
        existing = await self.repo.get(id)
        if existing is None:
            raise domexc.ResourceMissing(f"no {self.type_name} with that id found")
        await self._authorize(current_user, existing)
        await self.repo.delete(existing)
        return existing
