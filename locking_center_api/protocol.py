"""
Locking Center wire format

Each request is sent to the server as one frame::

    [action] [key size] [key] [source size] [source]

The key fields are present only for actions that target a single lock (``LOCK``,
``UNLOCK`` and ``RESET_BY_KEY``). The source fields are present only for ``LOCK`` and
``RESET_BY_SOURCE``; source size 0 means that no source is attached. Sizes occupy
one byte each. The server acknowledges the request with a single byte: ``b"+"``
means success, any other byte (or no byte at all) means failure.
"""

import enum
import struct
from typing import Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, model_validator

MAX_KEY_SIZE = 128  # bytes
MAX_SOURCE_SIZE = 128  # bytes

ACK_SUCCESS = b"+"

_ACTION_FORMAT = struct.Struct("<B")
# Size 128 is sent as 0x80, the same byte a wrapped signed 8-bit value produces.
_SIZE_FORMAT = struct.Struct("<B")


class FrameError(ValueError): ...


class IncompleteFrameError(FrameError): ...


class InvalidKeyError(ValueError): ...


class InvalidSourceError(ValueError): ...


class Action(enum.IntEnum):
    """Operation codes understood by the server."""

    LOCK = 1
    UNLOCK = 2
    RESET_BY_KEY = 3
    RESET_BY_SOURCE = 4

    @property
    def requires_key(self) -> bool:
        """The frame contains the key of a single lock."""
        return self in _ACTIONS_WITH_KEY

    @property
    def carries_source(self) -> bool:
        """The frame contains the (possibly empty) source address."""
        return self in _ACTIONS_WITH_SOURCE


_ACTIONS_WITH_KEY = frozenset({Action.LOCK, Action.UNLOCK, Action.RESET_BY_KEY})
_ACTIONS_WITH_SOURCE = frozenset({Action.LOCK, Action.RESET_BY_SOURCE})


def _key_to_bytes(action: Action, key) -> bytes:
    if not action.requires_key:
        return b""
    if not isinstance(key, str):
        raise InvalidKeyError(f"Key must be a string: key={key!r}")
    data = key.encode("utf-8")
    if not data or len(data) > MAX_KEY_SIZE:
        raise InvalidKeyError(f"Key can not be empty or more than {MAX_KEY_SIZE} bytes: key={key!r}")
    return data


def _source_to_bytes(action: Action, source) -> bytes:
    # Absent source and empty source are both sent as size 0
    if not action.carries_source or source is None:
        return b""
    if not isinstance(source, str):
        raise InvalidSourceError(f"Source address must be a string or None: source={source!r}")
    data = source.encode("utf-8")
    if len(data) > MAX_SOURCE_SIZE:
        raise InvalidSourceError(f"Source address can not be more than {MAX_SOURCE_SIZE} bytes: source={source!r}")
    return data


class LockRequest(BaseModel):
    """
    Parameters of a single request. ``key`` is ``None`` for ``RESET_BY_SOURCE``,
    ``source`` is ``None`` if no source address is attached. Instantiating
    the model with invalid key or source raises ``pydantic.ValidationError``.
    """

    model_config = ConfigDict(frozen=True)

    action: Action
    key: Optional[str] = None
    source: Optional[str] = None

    @model_validator(mode="after")
    def check_sizes(self):
        _key_to_bytes(self.action, self.key)
        _source_to_bytes(self.action, self.source)
        return self

    def to_bytes(self) -> bytes:
        return encode_request(self.action, self.key, self.source)


def encode_request(action: Union[Action, int], key: Optional[str] = None, source: Optional[str] = None) -> bytes:
    """
    Build the request frame. The key is validated only for the actions that
    require it, the source only for the actions that carry it.

    Raises
    ------
    InvalidKeyError
        The key is required and is empty, longer than ``MAX_KEY_SIZE`` bytes
        (UTF-8) or not a string.
    InvalidSourceError
        The source is longer than ``MAX_SOURCE_SIZE`` bytes or not a string.
    ValueError
        Unknown action code.
    """
    action = Action(action)
    key_data = _key_to_bytes(action, key)
    source_data = _source_to_bytes(action, source)

    frame = bytearray(_ACTION_FORMAT.pack(action))
    if action.requires_key:
        frame += _SIZE_FORMAT.pack(len(key_data)) + key_data
    if action.carries_source:
        frame += _SIZE_FORMAT.pack(len(source_data)) + source_data
    return bytes(frame)


def _read_field(frame: bytes, offset: int, *, name: str, max_size: int) -> Tuple[str, int]:
    if offset + _SIZE_FORMAT.size > len(frame):
        raise IncompleteFrameError(f"Frame ends before {name} size")
    (size,) = _SIZE_FORMAT.unpack_from(frame, offset)
    if size > max_size:
        raise FrameError(f"Invalid {name} size: {size}")

    start = offset + _SIZE_FORMAT.size
    end = start + size
    if end > len(frame):
        raise IncompleteFrameError(f"Frame ends inside {name}: expected {size} bytes, got {len(frame) - start}")
    try:
        value = frame[start:end].decode("utf-8")
    except UnicodeDecodeError as ex:
        raise FrameError(f"The {name} is not valid UTF-8") from ex
    return value, end


def decode_request(frame: bytes) -> LockRequest:
    """
    Parse a complete request frame.

    Raises
    ------
    IncompleteFrameError
        The frame is a valid prefix of a request, but it is truncated.
    FrameError
        The frame can not be a valid request.
    """
    frame = bytes(frame)
    if len(frame) < _ACTION_FORMAT.size:
        raise IncompleteFrameError("Frame is empty")

    (code,) = _ACTION_FORMAT.unpack_from(frame, 0)
    try:
        action = Action(code)
    except ValueError as ex:
        raise FrameError(f"Unknown action code: {code}") from ex

    offset, key, source = _ACTION_FORMAT.size, None, None
    if action.requires_key:
        key, offset = _read_field(frame, offset, name="key", max_size=MAX_KEY_SIZE)
        if not key:
            raise FrameError("Key is empty")
    if action.carries_source:
        source, offset = _read_field(frame, offset, name="source", max_size=MAX_SOURCE_SIZE)
        source = source or None

    if offset != len(frame):
        raise FrameError(f"Frame contains {len(frame) - offset} unexpected trailing byte(s)")

    return LockRequest(action=action, key=key, source=source)


def decode_ack(data: Union[bytes, int, None]) -> bool:
    """
    Interpret the acknowledgment sent by the server. Only the single byte ``b"+"``
    (``0x2B``) means success. Any other byte, ``b""`` or ``None`` (the connection
    was closed before the byte arrived) mean failure.
    """
    if isinstance(data, int) and not isinstance(data, bool):
        return data == ACK_SUCCESS[0]
    return data == ACK_SUCCESS
