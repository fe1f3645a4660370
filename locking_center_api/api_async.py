import contextlib

from .api_docstrings import (
    _doc_api_lock,
    _doc_api_locked,
    _doc_api_reset,
    _doc_api_reset_by_key,
    _doc_api_reset_by_source,
    _doc_api_unlock,
    _doc_api_wait,
)
from .protocol import Action


class API_Async_Mixin:
    async def lock(self, key, source=None, *, timeout=None):
        # Docstring is maintained separately
        await self.send_request(action=Action.LOCK, key=key, source=source, timeout=timeout)

    async def unlock(self, key, *, timeout=None):
        # Docstring is maintained separately
        await self.send_request(action=Action.UNLOCK, key=key, timeout=timeout)

    @contextlib.asynccontextmanager
    async def locked(self, key, source=None, *, timeout=None):
        # Docstring is maintained separately
        await self.lock(key, source, timeout=timeout)
        try:
            yield
        finally:
            # The lock must be released even if the deadline has passed
            await self.unlock(key)

    async def wait(self, key, *, timeout=None):
        # Docstring is maintained separately
        async with self.locked(key, timeout=timeout):
            pass

    async def reset_by_key(self, key, *, timeout=None):
        # Docstring is maintained separately
        await self.send_request(action=Action.RESET_BY_KEY, key=key, timeout=timeout)

    async def reset(self, key, *, timeout=None):
        # Docstring is maintained separately
        await self.reset_by_key(key, timeout=timeout)

    async def reset_by_source(self, source=None, *, timeout=None):
        # Docstring is maintained separately
        await self.send_request(action=Action.RESET_BY_SOURCE, source=source, timeout=timeout)


API_Async_Mixin.lock.__doc__ = _doc_api_lock
API_Async_Mixin.unlock.__doc__ = _doc_api_unlock
API_Async_Mixin.locked.__doc__ = _doc_api_locked
API_Async_Mixin.wait.__doc__ = _doc_api_wait
API_Async_Mixin.reset_by_key.__doc__ = _doc_api_reset_by_key
API_Async_Mixin.reset.__doc__ = _doc_api_reset
API_Async_Mixin.reset_by_source.__doc__ = _doc_api_reset_by_source
