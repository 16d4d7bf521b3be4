import logging
import pytest
import sqlalchemy as sa
import admin_api.infrastructure.db as idb
import admin_api.infrastructure.models as imod

roles = imod.Role.__table__


@pytest.mark.asyncio
async def test_uow_commit_runs_hooks(database_manager):
    ran = []

    async def hook():
        ran.append('audited')

    async with database_manager.session() as session:
        uow = idb.SQLAlchemyUnitOfWork(session)
        await uow.session.execute(sa.insert(roles).values(id=3, name='viewer'))
        uow.after_commit('audit log', hook)
        assert uow.pending_hooks == ['audit log']
        assert ran == []
        await uow.commit()
    assert ran == ['audited']

    async with database_manager.session() as session:
        assert (await session.execute(sa.select(roles.c.name))).scalar_one() == 'viewer'


@pytest.mark.asyncio
async def test_uow_rollback_drops_hooks(database_manager):
    ran = []

    async def hook():
        ran.append('audited')

    async with database_manager.session() as session:
        uow = idb.SQLAlchemyUnitOfWork(session)
        await uow.session.execute(sa.insert(roles).values(id=3, name='viewer'))
        uow.after_commit('audit log', hook)
        await uow.rollback()
        assert await uow.run_post_commit_hooks() == 0

        count = (await session.execute(sa.select(sa.func.count()).select_from(roles))).scalar_one()
    assert count == 0
    assert ran == []


@pytest.mark.asyncio
async def test_uow_failing_hook_is_logged_not_raised(database_manager, caplog):
    ran = []

    async def raiser():
        raise RuntimeError('log sink is gone')

    async def hook():
        ran.append('audited')

    async with database_manager.session() as session:
        uow = idb.SQLAlchemyUnitOfWork(session)
        uow.after_commit('broken', raiser)
        uow.after_commit('audit log', hook)
        with caplog.at_level(logging.ERROR, logger='admin_api.storage'):
            assert await uow.run_post_commit_hooks() == 1
        assert uow.pending_hooks == []

    assert ran == ['audited']
    assert "post-commit hook 'broken' failed: RuntimeError" in caplog.text
