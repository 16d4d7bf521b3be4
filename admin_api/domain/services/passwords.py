from abc import ABC, abstractmethod
import typing as t

class IPasswordHasher(ABC):
    @abstractmethod
    def hash(self, password: str) -> str: ...

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool: ...


class IPasswordHasherAsync(ABC):
    @abstractmethod
    async def hash(self, password: str) -> str: ...

    @abstractmethod
    async def verify(self, password: str, password_hash: str) -> bool: ...


class IPasswordDenyList(ABC):
    @abstractmethod
    async def entries(self) -> t.Collection[str]:
        '''Passwords that must never be accepted. Called on every validation, caching is up to the implementation.
        File or network reads must not block the event loop'''
