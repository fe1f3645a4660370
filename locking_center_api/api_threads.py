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


class API_Threads_Mixin:
    def lock(self, key, source=None, *, timeout=None):
        # Docstring is maintained separately
        self.send_request(action=Action.LOCK, key=key, source=source, timeout=timeout)

    def unlock(self, key, *, timeout=None):
        # Docstring is maintained separately
        self.send_request(action=Action.UNLOCK, key=key, timeout=timeout)

    @contextlib.contextmanager
    def locked(self, key, source=None, *, timeout=None):
        # Docstring is maintained separately
        self.lock(key, source, timeout=timeout)
        try:
            yield
        finally:
            # The lock must be released even if the deadline has passed
            self.unlock(key)

    def wait(self, key, *, timeout=None):
        # Docstring is maintained separately
        with self.locked(key, timeout=timeout):
            pass

    def reset_by_key(self, key, *, timeout=None):
        # Docstring is maintained separately
        self.send_request(action=Action.RESET_BY_KEY, key=key, timeout=timeout)

    def reset(self, key, *, timeout=None):
        # Docstring is maintained separately
        self.reset_by_key(key, timeout=timeout)

    def reset_by_source(self, source=None, *, timeout=None):
        # Docstring is maintained separately
        self.send_request(action=Action.RESET_BY_SOURCE, source=source, timeout=timeout)


API_Threads_Mixin.lock.__doc__ = _doc_api_lock
API_Threads_Mixin.unlock.__doc__ = _doc_api_unlock
API_Threads_Mixin.locked.__doc__ = _doc_api_locked
API_Threads_Mixin.wait.__doc__ = _doc_api_wait
API_Threads_Mixin.reset_by_key.__doc__ = _doc_api_reset_by_key
API_Threads_Mixin.reset.__doc__ = _doc_api_reset
API_Threads_Mixin.reset_by_source.__doc__ = _doc_api_reset_by_source
