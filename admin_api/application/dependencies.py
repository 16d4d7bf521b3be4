from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import typing as t

import admin_api.infrastructure.dependencies as ideps
import admin_api.application.services as services
import admin_api.application.exceptions as appexc
import admin_api.domain.models as domain
from admin_api.domain.validation import UserValidator
from admin_api.common.config import Config


async def get_user_validator(lookups: ideps.LookupStoreDependency, deny_list: ideps.DenyListDependency):
    return UserValidator(lookups, deny_list, min_password_length=Config.PASSWORD_MIN_LENGTH)

UserValidatorDependency = t.Annotated[UserValidator, Depends(get_user_validator)]


async def get_user_service(user_repo: ideps.UserRepoDependency, validator: UserValidatorDependency, tenants: ideps.TenantRepoDependency):
    return services.UserService(user_repo, validator, tenants)

UserServiceDependency = t.Annotated[services.UserService, Depends(get_user_service)]


#Tokens are issued elsewhere, this service only reads them
BearerToken = t.Annotated[HTTPAuthorizationCredentials | None, Depends(HTTPBearer(auto_error=False))]

async def get_current_user(credentials: BearerToken, resolver: ideps.TokenResolverDependency) -> domain.CurrentUser:
    if credentials is None:
        raise appexc.CredentialsException("Not authenticated")
    return resolver.resolve(credentials.credentials)

CurrentUserDependency = t.Annotated[domain.CurrentUser, Depends(get_current_user)]
