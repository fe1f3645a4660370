import logging
import os
import socket
import time as ttime

from ._defaults import (
    default_retry_period,
    default_server_address,
    default_timeout_connect,
    default_timeout_recv,
)
from .protocol import (
    Action,
    FrameError,
    IncompleteFrameError,
    InvalidKeyError,
    InvalidSourceError,
    encode_request,
)

logger = logging.getLogger(__name__)


class ServerAddressError(ValueError): ...


class ServerUnreachableError(ConnectionError): ...


class RequestTimeoutError(TimeoutError):
    def __init__(self, msg, request):
        msg = f"Request timeout: {msg}"
        self.request = request
        super().__init__(msg)


def parse_server_address(address):
    """
    Split server address represented as ``'host:port'`` into host and port. IPv6 addresses
    must be enclosed in brackets (``'[::1]:60660'``). Empty host (``':60660'``) means
    local host.
    """
    if not isinstance(address, str) or not address.strip():
        raise ServerAddressError(f"Server address must be a non-empty string: {address!r}")

    host, sep, port = address.strip().rpartition(":")
    if not sep:
        raise ServerAddressError(f"Server address must have the form 'host:port': {address!r}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    elif ":" in host:
        raise ServerAddressError(f"IPv6 address must be enclosed in brackets: {address!r}")

    if not port.isdigit() or not (0 < int(port) < 65536):
        raise ServerAddressError(f"Invalid port in server address: {address!r}")

    return host or "localhost", int(port)


def resolve_server_address(address):
    """
    Resolve server address. Returns address family and socket address. IPv4 addresses
    are preferred if the host name resolves to both IPv4 and IPv6 addresses.
    """
    host, port = parse_server_address(address)
    try:
        addr_info = socket.getaddrinfo(host, port, type=socket.SOCK_STREAM)
    except (socket.gaierror, UnicodeError) as ex:
        raise ServerAddressError(f"Failed to resolve server address {address!r}: {ex}") from ex

    addr_info.sort(key=lambda info: info[0] != socket.AF_INET)
    family, _, _, _, sockaddr = addr_info[0]
    return family, sockaddr


def _format_error(ex):
    return str(ex) or ex.__class__.__name__


class LockingCenterAPI_Base:
    ServerAddressError = ServerAddressError
    ServerUnreachableError = ServerUnreachableError
    RequestTimeoutError = RequestTimeoutError
    InvalidKeyError = InvalidKeyError
    InvalidSourceError = InvalidSourceError
    FrameError = FrameError
    IncompleteFrameError = IncompleteFrameError

    Actions = Action

    def __init__(
        self,
        *,
        server_address=None,
        retry_period=default_retry_period,
        timeout_connect=default_timeout_connect,
        timeout_recv=default_timeout_recv,
    ):
        server_address = server_address or os.environ.get("LOCKING_CENTER_ADDRESS", None)
        server_address = server_address or default_server_address

        self._server_address = server_address
        self._family, self._sockaddr = resolve_server_address(server_address)

        # The value may still be explicitly passed as None, so replace it with the default value.
        self.retry_period = retry_period if retry_period is not None else default_retry_period

        # None, 0 or negative value disable the timeout
        self._timeout_connect = self._adjust_timeout(timeout_connect)
        self._timeout_recv = self._adjust_timeout(timeout_recv)

        self._check_server()

    @property
    def server_address(self):
        """
        Address of the server (*str*) as it was passed to the constructor, e.g. ``'localhost:60660'``.
        """
        return self._server_address

    @property
    def retry_period(self):
        """
        Pause between attempts of a failed request in seconds (*float*). The property is
        writable, the new value is used by the requests started after the change.
        """
        return self._retry_period

    @retry_period.setter
    def retry_period(self, v):
        if isinstance(v, bool) or not isinstance(v, (int, float)) or v < 0:
            raise ValueError(f"Retry period must be a non-negative number: {v!r}")
        self._retry_period = v

    def _adjust_timeout(self, timeout):
        return timeout if (timeout is not None) and (timeout > 0) else None

    def _open_socket(self, timeout):
        """
        Open a blocking TCP connection to the server. ``timeout`` is applied to connection.
        """
        sock = socket.socket(self._family, socket.SOCK_STREAM)
        try:
            sock.settimeout(timeout)
            sock.connect(self._sockaddr)
        except BaseException:
            sock.close()
            raise
        return sock

    def _check_server(self):
        """
        Open and immediately close the connection to the server.
        """
        try:
            sock = self._open_socket(self._timeout_connect)
        except OSError as ex:
            raise self.ServerUnreachableError(
                f"Locking Center server at {self._server_address!r} is unreachable: {_format_error(ex)}"
            ) from ex
        sock.close()

    def _prepare_request(self, *, action, key=None, source=None):
        """
        Returns request parameters and encoded frame. Invalid parameters are
        reported before the server is contacted.
        """
        action = Action(action)
        frame = encode_request(action, key, source)
        request = {
            "action": action.name,
            "key": key if action.requires_key else None,
            "source": source if action.carries_source else None,
        }
        return request, frame

    def _format_request(self, request):
        params = [f"{k}={v!r}" for k, v in request.items() if (k != "action") and (v is not None)]
        return " ".join([request["action"]] + params)

    def _describe_ack(self, ack):
        if not ack:
            return "connection was closed by the server before acknowledgment was received"
        return f"request was rejected by the server (acknowledgment {ack!r})"

    def _describe_comm_error(self, ex, *, connecting):
        prefix = "connection failure" if connecting else "communication error"
        return f"{prefix}: {_format_error(ex)}"

    def _start_deadline(self, timeout):
        timeout = self._adjust_timeout(timeout)
        return None if timeout is None else ttime.monotonic() + timeout

    def _step_timeout(self, timeout, deadline):
        """
        Timeout of a single blocking operation limited by the remaining time.
        """
        if deadline is None:
            return timeout
        time_left = max(deadline - ttime.monotonic(), 0.001)
        return time_left if timeout is None else min(timeout, time_left)

    def _retry_delay(self, deadline):
        if deadline is None:
            return self._retry_period
        return max(min(self._retry_period, deadline - ttime.monotonic()), 0)

    def _check_deadline(self, deadline, *, request, attempt):
        if (deadline is not None) and (ttime.monotonic() >= deadline):
            msg = f"{self._format_request(request)} did not succeed in {attempt} attempt(s)"
            raise self.RequestTimeoutError(msg, request)

    def _report_failure(self, *, request, attempt, reason):
        logger.warning(f"{self._format_request(request)} failed (attempt {attempt}): {reason}")

    def _report_success(self, *, request, attempt):
        logger.debug(f"{self._format_request(request)} succeeded (attempt {attempt})")
