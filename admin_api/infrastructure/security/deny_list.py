import admin_api.domain.services as domsvc
import typing as t
import pathlib
import asyncio
import logging

__all__ = ['StaticDenyList', 'FileDenyList']

logger = logging.getLogger('admin_api.security')


class StaticDenyList(domsvc.IPasswordDenyList):
    def __init__(self, entries: t.Iterable[str] = ()):
        self._entries = frozenset(entries)

    async def entries(self) -> t.Collection[str]:
        return self._entries


class FileDenyList(domsvc.IPasswordDenyList):
    """One password per line, blank lines ignored.
    reload=False reads the file once and keeps the entries, reload=True re-reads it on every call.
    The file is read in a worker thread. A missing or unreadable file is logged and treated as an empty list.
    """

    def __init__(self, path: str | pathlib.Path, reload: bool = False):
        self.path = pathlib.Path(path)
        self.reload = reload
        self._cached: frozenset[str] | None = None

    def _read(self) -> frozenset[str]:
        try:
            with self.path.open(encoding='utf-8') as f:
                return frozenset(line.strip() for line in f if line.strip())
        except OSError as e:
            logger.error(f"[PASSWORDS] Could not read invalid passwords file {self.path}: {e}")
            return frozenset()

    async def entries(self) -> t.Collection[str]:
        if self.reload:
            return await asyncio.to_thread(self._read)
        if self._cached is None:
            self._cached = await asyncio.to_thread(self._read)
            logger.info(f"[PASSWORDS] Loaded {len(self._cached)} invalid passwords from {self.path}")
        return self._cached
