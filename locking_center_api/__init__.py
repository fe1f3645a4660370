__version__ = "0.1.0"

from .comm_base import (  # noqa: F401, E402
    RequestTimeoutError,
    ServerAddressError,
    ServerUnreachableError,
)
from .protocol import (  # noqa: F401, E402
    ACK_SUCCESS,
    MAX_KEY_SIZE,
    MAX_SOURCE_SIZE,
    Action,
    FrameError,
    IncompleteFrameError,
    InvalidKeyError,
    InvalidSourceError,
    LockRequest,
    decode_ack,
    decode_request,
    encode_request,
)

# Client classes: ``locking_center_api.tcp.LockingCenter`` (threads) and
#   ``locking_center_api.tcp.aio.LockingCenter`` (asyncio).
