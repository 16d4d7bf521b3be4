import pytest
from admin_api.common.config import Config
import admin_api.infrastructure.db.sqla_manager as sqlamgr
import admin_api.infrastructure.exceptions as iexc
import sqlalchemy as sa

@pytest.fixture(scope='function')
def mgr(tmp_path):
    return sqlamgr.SQLAlchemySessionManager(f"sqlite+aiosqlite:///{tmp_path / 'mgr.db'}", Config.DB_KWARGS)

@pytest.mark.asyncio
async def test_sqla_connect_and_close(mgr: sqlamgr.SQLAlchemySessionManager):
    async with mgr.connect() as conn:
        result = await conn.execute(sa.text("SELECT 1"))
        assert result.scalar_one() == 1

    with pytest.raises(ValueError):
        async with mgr.connect() as conn:
            raise ValueError()
    await mgr.close()


#to avoid copypaste with pytest raises blocks...
@pytest.mark.parametrize(
    "call",
    [
        lambda mgr: mgr.close(),
        lambda mgr: mgr.connect(),
        lambda mgr: mgr.session(),
        lambda mgr: mgr.wait_for_startup(),
        lambda mgr: mgr.initialize_data_structures(),
        lambda mgr: mgr.flush_data(),
    ]
)
@pytest.mark.asyncio
async def test_sqla_raises_when_closed(mgr: sqlamgr.SQLAlchemySessionManager, call):
    await mgr.close()
    with pytest.raises(iexc.StorageNotInitialized):
        res = call(mgr)
        if hasattr(res, "__aenter__"):  #if async context manager
            async with res:
                pass
        else:
            await res


@pytest.mark.asyncio
async def test_sqla_session_rolls_back_on_error(mgr: sqlamgr.SQLAlchemySessionManager):
    await mgr.initialize_data_structures()

    with pytest.raises(RuntimeError):
        async with mgr.session() as sess:
            await sess.execute(sa.text("INSERT INTO roles (id, name, priv_level) VALUES (7, 'ghost', 10)"))
            raise RuntimeError('abort')

    async with mgr.session() as sess:
        count = (await sess.execute(sa.text("SELECT count(*) FROM roles"))).scalar_one()
    assert count == 0
    await mgr.close()


@pytest.mark.asyncio
async def test_sqla_session_overrides(mgr: sqlamgr.SQLAlchemySessionManager):
    async with mgr.session(autoflush=True) as sess:
        assert sess.autoflush is True
        result = await sess.execute(sa.text("SELECT 1"))
        assert result.scalar_one() == 1

    async with mgr.session() as sess:
        assert sess.autoflush is False
    await mgr.close()


@pytest.mark.asyncio
async def test_sqla_schema_lifecycle(mgr: sqlamgr.SQLAlchemySessionManager):
    await mgr.initialize_data_structures()
    async with mgr.connect() as conn:
        tables = await conn.run_sync(lambda sync_conn: sa.inspect(sync_conn).get_table_names())
    assert {'users', 'roles', 'tenants'} <= set(tables)

    await mgr.flush_data()
    async with mgr.connect() as conn:
        tables = await conn.run_sync(lambda sync_conn: sa.inspect(sync_conn).get_table_names())
    assert tables == []
    await mgr.close()


@pytest.mark.asyncio
async def test_sqla_startup(mgr: sqlamgr.SQLAlchemySessionManager, tmp_path):
    await mgr.wait_for_startup(1, 0)
    await mgr.close()

    with pytest.raises(iexc.StorageBootError):
        broken = sqlamgr.SQLAlchemySessionManager(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'dir.db'}")
        await broken.wait_for_startup(1, 0)
