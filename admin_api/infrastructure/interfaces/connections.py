from abc import ABC, abstractmethod
import typing as t

__all__ = ['ConnectionManagerInterface', 'SessionManagerInterface']

ConnectionType = t.TypeVar("ConnectionType")
SessionType = t.TypeVar("SessionType")



class ConnectionManagerInterface(t.Generic[ConnectionType], ABC):
    '''Owns the pool of connections to one storage backend for the lifetime of the app'''

    @abstractmethod
    def connect(self) -> t.AsyncContextManager[ConnectionType]: ...

    @abstractmethod
    async def close(self) -> None:
        '''Disposes the pool. The manager is unusable afterwards'''

    @abstractmethod
    async def wait_for_startup(self, attempts:int = 5, interval_sec: int = 5):
        '''Blocks until the backend answers, raises StorageBootError when it never does'''

    @abstractmethod
    async def initialize_data_structures(self): ...

    @abstractmethod
    async def flush_data(self): ...


class SessionManagerInterface(ConnectionManagerInterface[ConnectionType], t.Generic[ConnectionType, SessionType], ABC):
    @abstractmethod
    def session(self, **overrides) -> t.AsyncContextManager[SessionType]:
        '''async with manager.session() as session: one session, one connection.
        Rolled back on error and closed on exit, whatever happens inside.'''
