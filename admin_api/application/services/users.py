import admin_api.domain.repositories as repos
import admin_api.domain.models as domain
from admin_api.domain.validation import IValidator
from admin_api.application.services.resources import ResourceService

import logging

__all__ = ['UserService']

logger = logging.getLogger('admin_api')


class UserService(ResourceService[domain.User]):
    type_name = 'user'

    def __init__(self, user_repo: repos.IUserRepository, validator: IValidator[domain.User], tenants: repos.ITenantRepository) -> None:
        super().__init__(user_repo, validator, tenants)

    async def create(self, current_user: domain.CurrentUser, user: domain.User) -> domain.User:
        logger.debug(f"[USERS] '{current_user.username}' creates user '{user.audit_label()}'")
        return await super().create(current_user, user)

    async def update(self, current_user: domain.CurrentUser, user: domain.User) -> domain.User:
        logger.debug(f"[USERS] '{current_user.username}' updates user id={user.id}")
        return await super().update(current_user, user)

    async def delete(self, current_user: domain.CurrentUser, id: int) -> domain.User:
        logger.debug(f"[USERS] '{current_user.username}' deletes user id={id}")
        return await super().delete(current_user, id)
