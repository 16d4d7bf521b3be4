from fastapi import Depends
import typing as t

import admin_api.infrastructure.repositories as repos
import admin_api.infrastructure.security as security
import admin_api.infrastructure.adapters as adap
import admin_api.domain.services as domsvc
from admin_api.infrastructure.db.sqla_manager import SQLAlchemySessionManager
from admin_api.common.config import Config


#Password infrastructure choices
PasswordHasherType = security.BCryptHasher


#####################################
#             Databases             #
#####################################

DatabaseManagerType = SQLAlchemySessionManager
DatabaseManager = DatabaseManagerType(Config.DB_URL, Config.DB_KWARGS)

def get_database_manager() -> SQLAlchemySessionManager:
    return DatabaseManager

DatabaseManagerDependency = t.Annotated[SQLAlchemySessionManager, Depends(get_database_manager)]


#####################################
#             Passwords             #
#####################################

#One instance per process, it bounds how many hashes run at once
PasswordHasher = adap.AsyncHasher(PasswordHasherType())
DenyList = security.FileDenyList(Config.INVALID_PASSWORDS_FILE, reload=Config.INVALID_PASSWORDS_RELOAD)

def get_deny_list() -> domsvc.IPasswordDenyList:
    return DenyList

def get_password_hasher() -> domsvc.IPasswordHasherAsync:
    return PasswordHasher

DenyListDependency = t.Annotated[domsvc.IPasswordDenyList, Depends(get_deny_list)]
PasswordHasherDependency = t.Annotated[domsvc.IPasswordHasherAsync, Depends(get_password_hasher)]


#####################################
#            Repositories           #
#####################################

UserRepository = repos.SQLAUserRepository
TenantRepository = repos.SQLATenantRepository
LookupStore = repos.SQLALookupStore

async def get_user_repo(db_manager: DatabaseManagerDependency, hasher: PasswordHasherDependency):
    return UserRepository(db_manager, hasher)

async def get_tenant_repo(db_manager: DatabaseManagerDependency):
    return TenantRepository(db_manager)

async def get_lookup_store(db_manager: DatabaseManagerDependency):
    return LookupStore(db_manager)

UserRepoDependency = t.Annotated[UserRepository, Depends(get_user_repo)]
TenantRepoDependency = t.Annotated[TenantRepository, Depends(get_tenant_repo)]
LookupStoreDependency = t.Annotated[LookupStore, Depends(get_lookup_store)]


#####################################
#           Authentication          #
#####################################

def get_token_resolver() -> security.JWTCurrentUserResolver:
    return security.JWTCurrentUserResolver()

TokenResolverDependency = t.Annotated[security.JWTCurrentUserResolver, Depends(get_token_resolver)]
