import itertools
import time as ttime

from .api_docstrings import _doc_api_ping, _doc_send_request
from .comm_base import LockingCenterAPI_Base
from .protocol import decode_ack


class LockingCenterComm_Threads(LockingCenterAPI_Base):
    def ping(self):
        # Docstring is maintained separately
        self._check_server()

    def _send_once(self, frame, deadline):
        """
        Send the request over a new connection and wait for acknowledgment. Returns ``None``
        if the request succeeded, otherwise the description of the failure.
        The connection is closed before the function returns.
        """
        try:
            sock = self._open_socket(self._step_timeout(self._timeout_connect, deadline))
        except OSError as ex:
            return self._describe_comm_error(ex, connecting=True)

        try:
            sock.settimeout(self._step_timeout(None, deadline))
            sock.sendall(frame)
            sock.settimeout(self._step_timeout(self._timeout_recv, deadline))
            ack = sock.recv(1)
        except OSError as ex:
            return self._describe_comm_error(ex, connecting=False)
        finally:
            sock.close()

        return None if decode_ack(ack) else self._describe_ack(ack)

    def send_request(self, *, action, key=None, source=None, timeout=None):
        # Docstring is maintained separately
        request, frame = self._prepare_request(action=action, key=key, source=source)
        deadline = self._start_deadline(timeout)

        for attempt in itertools.count(1):
            failure = self._send_once(frame, deadline)
            if failure is None:
                self._report_success(request=request, attempt=attempt)
                return

            self._report_failure(request=request, attempt=attempt, reason=failure)
            self._check_deadline(deadline, request=request, attempt=attempt)
            ttime.sleep(self._retry_delay(deadline))
            self._check_deadline(deadline, request=request, attempt=attempt)


LockingCenterComm_Threads.ping.__doc__ = _doc_api_ping
LockingCenterComm_Threads.send_request.__doc__ = _doc_send_request
