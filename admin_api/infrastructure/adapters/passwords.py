from admin_api.domain.services import IPasswordHasher, IPasswordHasherAsync
import asyncio


class AsyncHasher(IPasswordHasherAsync):
    '''Offloads a blocking hasher to worker threads.
    At most `max_concurrent` hashes run at once so a burst of writes can't occupy the whole default executor.
    '''
    def __init__(self, sync_hasher: IPasswordHasher, max_concurrent: int = 4):
        self._sync_hasher = sync_hasher
        self._slots = asyncio.Semaphore(max_concurrent)

    async def _offload(self, func, *args):
        async with self._slots:
            return await asyncio.to_thread(func, *args)

    async def hash(self, password: str) -> str:
        return await self._offload(self._sync_hasher.hash, password)

    async def verify(self, password: str, password_hash: str) -> bool:
        return await self._offload(self._sync_hasher.verify, password, password_hash)
