import logging
from sqlalchemy.ext.asyncio import AsyncSession
import admin_api.infrastructure.interfaces as iabc

__all__ = ['SQLAlchemyUnitOfWork']

logger = logging.getLogger('admin_api.storage')


class SQLAlchemyUnitOfWork(iabc.IUnitOfWork[AsyncSession]):
    def __init__(self, session: AsyncSession):
        self._session = session
        self._pending: list[tuple[str, iabc.PostCommitHook]] = []

    @property
    def session(self) -> AsyncSession:
        return self._session

    @property
    def pending_hooks(self) -> list[str]:
        return [label for label, _ in self._pending]

    async def commit(self) -> None:
        await self._session.commit()
        await self.run_post_commit_hooks()

    async def rollback(self) -> None:
        await self._session.rollback()
        self._pending.clear()

    def after_commit(self, label: str, hook: iabc.PostCommitHook) -> None:
        self._pending.append((label, hook))

    async def run_post_commit_hooks(self) -> int:
        # the data is committed by now, hook failures are only reported
        pending, self._pending = self._pending, []
        failed = 0
        for label, hook in pending:
            try:
                await hook()
            except Exception as e:
                failed += 1
                logger.exception(f"[UoW] post-commit hook '{label}' failed: {e.__class__.__name__}")
        return failed
