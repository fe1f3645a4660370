from .._defaults import (
    default_retry_period,
    default_timeout_connect,
    default_timeout_recv,
)
from ..api_docstrings import _doc_LockingCenter
from ..api_async import API_Async_Mixin
from ..comm_async import LockingCenterComm_Async


class LockingCenter(LockingCenterComm_Async, API_Async_Mixin):
    # docstring is maintained separately
    def __init__(
        self,
        server_address=None,
        *,
        retry_period=default_retry_period,
        timeout_connect=default_timeout_connect,
        timeout_recv=default_timeout_recv,
    ):
        LockingCenterComm_Async.__init__(
            self,
            server_address=server_address,
            retry_period=retry_period,
            timeout_connect=timeout_connect,
            timeout_recv=timeout_recv,
        )


LockingCenter.__doc__ = _doc_LockingCenter
