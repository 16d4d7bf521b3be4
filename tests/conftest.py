import os

# the app builds its database manager at import time, keep it off the network in tests
os.environ.setdefault('DB_URL', 'sqlite+aiosqlite://')
os.environ.setdefault('BCRYPT_ROUNDS', '4')

import pytest, typing as t, httpx
import pytest_asyncio as pytestaio
import sqlalchemy as sa
import admin_api.infrastructure.dependencies as ideps
import admin_api.infrastructure.models as imod
import admin_api.infrastructure.security as security
from admin_api.common.config import Config
import tests.mocks as mocks

import logging
logger = logging.getLogger('admin_api')

DENIED_PASSWORDS = {'password1', 'qwertyuiop'}


@pytestaio.fixture(scope='function')
async def database_manager(tmp_path) -> t.AsyncGenerator[ideps.DatabaseManagerType, None]:
    '''A fresh SQLite file per test: several sessions (and transactions) can run against it concurrently'''
    mgr = ideps.DatabaseManagerType(f"sqlite+aiosqlite:///{tmp_path / 'admin_api.db'}", Config.DB_KWARGS)
    await mgr.initialize_data_structures()
    yield mgr
    await mgr.close()


@pytestaio.fixture(scope='function')
async def seeded(database_manager: ideps.DatabaseManagerType) -> ideps.DatabaseManagerType:
    '''Roles 0 and 1; tenants: 1 root -> 2 -> 3, 4 (another root), 5 (inactive root)'''
    async with database_manager.session() as session:
        await session.execute(sa.insert(imod.Role.__table__), [
            dict(id=0, name='admin', description='Full access', priv_level=30),
            dict(id=1, name='operations', description='Day to day', priv_level=20),
        ])
        tenants = imod.Tenant.__table__
        await session.execute(sa.insert(tenants), [
            dict(id=1, name='root', active=True, parent_id=None),
            dict(id=4, name='other', active=True, parent_id=None),
            dict(id=5, name='retired', active=False, parent_id=None),
        ])
        await session.execute(sa.insert(tenants), [dict(id=2, name='yoyodyne', active=True, parent_id=1)])
        await session.execute(sa.insert(tenants), [dict(id=3, name='red-lectroids', active=True, parent_id=2)])
        await session.commit()
    return database_manager


@pytest.fixture
def hasher() -> mocks.AsyncHasherAdapter:
    return mocks.AsyncHasherAdapter(mocks.FakeHasher())


@pytest.fixture
def deny_list() -> security.StaticDenyList:
    return security.StaticDenyList(DENIED_PASSWORDS)


@pytest.fixture
def user_repo(seeded, hasher) -> ideps.UserRepository:
    return ideps.UserRepository(seeded, hasher)


@pytest.fixture
def tenant_repo(seeded) -> ideps.TenantRepository:
    return ideps.TenantRepository(seeded)


@pytest.fixture
def lookup_store(seeded) -> ideps.LookupStore:
    return ideps.LookupStore(seeded)


@pytestaio.fixture(scope='function')
async def async_client(seeded, hasher, deny_list):
    import admin_api.main as main

    overrides = {
        ideps.get_database_manager: lambda: seeded,
        ideps.get_password_hasher: lambda: hasher,
        ideps.get_deny_list: lambda: deny_list,
    }
    main.app.dependency_overrides.update(overrides)

    transport = httpx.ASGITransport(app=main.app)
    async with httpx.AsyncClient(transport=transport, base_url=f"http://app:8000/{Config.APP_NAME}") as client:
        yield client

    for dependency in overrides:
        del main.app.dependency_overrides[dependency]
