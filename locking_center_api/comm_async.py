import asyncio
import itertools
import logging

from .api_docstrings import _doc_api_ping, _doc_send_request
from .comm_base import LockingCenterAPI_Base, _format_error
from .protocol import decode_ack

logger = logging.getLogger(__name__)


class LockingCenterComm_Async(LockingCenterAPI_Base):
    def _open_connection(self, timeout):
        host, port = self._sockaddr[:2]
        return asyncio.wait_for(asyncio.open_connection(host=host, port=port), timeout=timeout)

    async def _close_connection(self, writer):
        writer.close()
        try:
            await writer.wait_closed()
        except OSError as ex:
            # The server may reset the connection right after acknowledgment
            logger.debug(f"Error while closing connection: {ex}")

    async def ping(self):
        # Docstring is maintained separately
        try:
            _, writer = await self._open_connection(self._timeout_connect)
        except (OSError, asyncio.TimeoutError) as ex:
            raise self.ServerUnreachableError(
                f"Locking Center server at {self._server_address!r} is unreachable: {_format_error(ex)}"
            ) from ex
        await self._close_connection(writer)

    async def _send_once(self, frame, deadline):
        """
        Send the request over a new connection and wait for acknowledgment. Returns ``None``
        if the request succeeded, otherwise the description of the failure.
        The connection is closed before the function returns (also if the task is cancelled).
        """
        try:
            reader, writer = await self._open_connection(self._step_timeout(self._timeout_connect, deadline))
        except (OSError, asyncio.TimeoutError) as ex:
            return self._describe_comm_error(ex, connecting=True)

        try:
            writer.write(frame)
            await asyncio.wait_for(writer.drain(), timeout=self._step_timeout(None, deadline))
            ack = await asyncio.wait_for(reader.read(1), timeout=self._step_timeout(self._timeout_recv, deadline))
        except (OSError, asyncio.TimeoutError) as ex:
            return self._describe_comm_error(ex, connecting=False)
        finally:
            await self._close_connection(writer)

        return None if decode_ack(ack) else self._describe_ack(ack)

    async def send_request(self, *, action, key=None, source=None, timeout=None):
        # Docstring is maintained separately
        request, frame = self._prepare_request(action=action, key=key, source=source)
        deadline = self._start_deadline(timeout)

        for attempt in itertools.count(1):
            failure = await self._send_once(frame, deadline)
            if failure is None:
                self._report_success(request=request, attempt=attempt)
                return

            self._report_failure(request=request, attempt=attempt, reason=failure)
            self._check_deadline(deadline, request=request, attempt=attempt)
            await asyncio.sleep(self._retry_delay(deadline))
            self._check_deadline(deadline, request=request, attempt=attempt)


LockingCenterComm_Async.ping.__doc__ = _doc_api_ping
LockingCenterComm_Async.send_request.__doc__ = _doc_send_request
