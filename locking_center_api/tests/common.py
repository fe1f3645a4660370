import socket
import socketserver
import threading
import time as ttime

import pytest

from locking_center_api.protocol import IncompleteFrameError, decode_request
from locking_center_api.tcp import LockingCenter as LockingCenter_threads
from locking_center_api.tcp.aio import LockingCenter as LockingCenter_async


class _ReusableServer(socketserver.ThreadingTCPServer):
    allow_reuse_address = True
    daemon_threads = True
    block_on_close = False


class FakeLockServer:
    """
    Locking Center server for testing. The server reads one request per connection and
    replies according to the list of scripted replies. A reply may be a string or bytes,
    which is sent to the client, or ``None``, in which case the connection is closed
    without reply. ``default_reply`` is used once the list is exhausted. Connections closed
    by the client without sending a request (ping) are counted, but not recorded as requests.
    """

    def __init__(self, *, port=0, replies=None, default_reply="+", reply_delay=0):
        self.frames = []
        self.requests = []
        self.timestamps = []
        self.n_connections = 0

        self._replies = list(replies or [])
        self._default_reply = default_reply
        self._reply_delay = reply_delay
        self._lock = threading.Lock()

        fake_server = self

        class _Handler(socketserver.BaseRequestHandler):
            def handle(self):
                fake_server._handle(self.request)

        self._server = _ReusableServer(("127.0.0.1", port), _Handler)
        self._thread = None

    @property
    def address(self):
        host, port = self._server.server_address
        return f"{host}:{port}"

    @property
    def port(self):
        return self._server.server_address[1]

    @property
    def actions(self):
        with self._lock:
            return [_.action for _ in self.requests]

    def set_replies(self, replies, *, default_reply="+"):
        with self._lock:
            self._replies = list(replies)
            self._default_reply = default_reply

    def start(self):
        self._thread = threading.Thread(
            name="Fake Locking Center", target=self._server.serve_forever, kwargs={"poll_interval": 0.05}, daemon=True
        )
        self._thread.start()

    def stop(self):
        self._server.shutdown()
        self._server.server_close()
        self._thread.join()

    def _read_frame(self, conn):
        data = b""
        while True:
            chunk = conn.recv(1024)
            if not chunk:
                return None, None
            data += chunk
            try:
                return data, decode_request(data)
            except IncompleteFrameError:
                continue

    def _handle(self, conn):
        with self._lock:
            self.n_connections += 1

        frame, request = self._read_frame(conn)
        if frame is None:
            return

        with self._lock:
            self.frames.append(frame)
            self.requests.append(request)
            self.timestamps.append(ttime.monotonic())
            reply = self._replies.pop(0) if self._replies else self._default_reply

        if self._reply_delay:
            ttime.sleep(self._reply_delay)
        if reply is not None:
            conn.sendall(reply.encode() if isinstance(reply, str) else reply)


@pytest.fixture
def lock_server():
    server = FakeLockServer()
    server.start()
    yield server
    server.stop()


def unused_address():
    """
    Address of a local port, which is not accepting connections.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"127.0.0.1:{port}"


def _is_async(library):
    if library == "ASYNC":
        return True
    elif library == "THREADS":
        return False
    else:
        raise ValueError(f"Unknown library: {library!r}")


def _select_locking_center(library):
    return LockingCenter_async if _is_async(library) else LockingCenter_threads
