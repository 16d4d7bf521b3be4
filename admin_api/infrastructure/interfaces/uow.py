import abc, typing as t

SessionType = t.TypeVar("SessionType")

__all__ = ["IUnitOfWork", "PostCommitHook"]

PostCommitHook = t.Callable[[], t.Awaitable[t.Any]]


class IUnitOfWork(t.Generic[SessionType], abc.ABC):
    '''One transaction on one session, plus side effects that may only happen once it is committed'''

    @property
    @abc.abstractmethod
    def session(self) -> SessionType: ...

    @abc.abstractmethod
    async def commit(self) -> None:
        '''Commits, then runs pending hooks'''

    @abc.abstractmethod
    async def rollback(self) -> None:
        '''Rolls back and discards pending hooks'''

    @abc.abstractmethod
    def after_commit(self, label: str, hook: PostCommitHook) -> None: ...

    @abc.abstractmethod
    async def run_post_commit_hooks(self) -> int:
        '''Runs and clears pending hooks, returns how many of them failed. A failing hook never fails the caller'''
