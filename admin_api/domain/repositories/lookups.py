from abc import abstractmethod, ABC
import typing as t


class ILookupStore(ABC):
    """Read-only checks the validation pipeline runs against current storage state.
    `entity` and `field` are logical names (e.g. 'user', 'email'), implementations map them to real columns.
    """

    @abstractmethod
    async def is_unique(self, entity: str, field: str, value: t.Any, exclude_id: int | None = None) -> bool: ...

    @abstractmethod
    async def exists(self, entity: str, field: str, value: t.Any) -> bool: ...
