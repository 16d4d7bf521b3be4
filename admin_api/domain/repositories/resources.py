from abc import abstractmethod, ABC
import typing as t

R = t.TypeVar("R")


class ICreator(ABC, t.Generic[R]):
    @abstractmethod
    async def create(self, record: R) -> R:
        '''Inserts the record in its own transaction. Sets identity and server-assigned fields on the returned record'''


class IReader(ABC, t.Generic[R]):
    @abstractmethod
    async def read(self, parameters: dict[str, str], tenant_ids: t.Sequence[int] | None = None) -> list[R]:
        '''Filters come from caller-supplied query parameters. tenant_ids=None means no tenant restriction'''

    @abstractmethod
    async def get(self, id: int) -> R | None: ...


class IUpdater(ABC, t.Generic[R]):
    @abstractmethod
    async def update(self, record: R) -> R:
        '''Full-row replace of the record with the same id'''


class IDeleter(ABC, t.Generic[R]):
    @abstractmethod
    async def delete(self, record: R) -> None: ...


class IResourceRepository(ICreator[R], IReader[R], IUpdater[R], IDeleter[R], t.Generic[R]):
    """Every CRUD capability a resource exposes through the engine"""
