_doc_LockingCenter = """
    API for communication with Locking Center server over TCP. The server maintains
    a table of named mutual exclusion locks shared by independent processes. The client
    holds no lock state: each request is sent over a new connection, which is closed
    as soon as the server acknowledges the request.

    All requests block until the server acknowledges them. Transient failures (the server
    is unreachable, the connection is closed or reset, the server rejects the request)
    are logged and the request is repeated after ``retry_period``. The requests never
    give up unless ``timeout`` is passed to the API. Invalid parameters (e.g. empty key
    or a key longer than 128 bytes) are reported immediately by raising ``InvalidKeyError``.

    The constructor checks if the server is reachable by opening and closing
    a connection. The instance keeps no mutable state between requests and may be used
    concurrently from multiple threads (or tasks).

    Parameters
    ----------
    server_address: str or None, optional
        Address of the server in the form ``'host:port'``, e.g. ``'localhost:60660'``.
        IPv6 address must be enclosed in brackets (``'[::1]:60660'``). If the address
        is not passed, then it is read from the environment variable
        ``LOCKING_CENTER_ADDRESS``. The default address is used if the variable is not set.
    retry_period: float, optional
        Pause between attempts of a failed request in seconds. Default: 0.5.
    timeout_connect: float or None, optional
        Timeout for opening a connection in seconds. The timeout is disabled if the value
        is *None*, zero or negative. Default: 5.0.
    timeout_recv: float or None, optional
        Timeout for receiving acknowledgment in seconds. The server delays acknowledgment
        of ``lock`` requests until the lock is acquired, so the timeout is disabled
        by default. Timed out requests are repeated. Default: *None*.

    Raises
    ------
    ServerAddressError
        The server address is invalid or can not be resolved.
    ServerUnreachableError
        Failed to connect to the server.

    Examples
    --------

    Synchronous code:

    .. code-block:: python

        from locking_center_api.tcp import LockingCenter

        LC = LockingCenter("localhost:60660")

        LC.lock("shared-resource")
        try:
            ...  # Critical section
        finally:
            LC.unlock("shared-resource")

        # Same as above
        with LC.locked("shared-resource"):
            ...

    Asynchronous code:

    .. code-block:: python

        import asyncio
        from locking_center_api.tcp.aio import LockingCenter

        async def testing():
            LC = LockingCenter("localhost:60660")
            async with LC.locked("shared-resource"):
                ...

        asyncio.run(testing())
"""

_doc_send_request = """
    Send request to the server and wait for acknowledgment. The request is repeated
    until the server acknowledges it. The encoded request is validated before the server
    is contacted. The function is used by all other API and is not expected to be called
    directly.

    Parameters
    ----------
    action: Action or int
        Request type: ``Action.LOCK``, ``Action.UNLOCK``, ``Action.RESET_BY_KEY`` or
        ``Action.RESET_BY_SOURCE``.
    key: str or None, optional
        Lock key. Required for all actions except ``Action.RESET_BY_SOURCE``.
    source: str or None, optional
        Source address. Sent only with ``Action.LOCK`` and ``Action.RESET_BY_SOURCE``.
    timeout: float or None, optional
        Maximum time in seconds spent on repeating the request. The request is repeated
        indefinitely if the value is *None*, zero or negative. Default: *None*.

    Returns
    -------
    None

    Raises
    ------
    InvalidKeyError, InvalidSourceError
        Invalid key or source address.
    RequestTimeoutError
        The request did not succeed before timeout expired.
"""

_doc_api_ping = """
    Check if the server is reachable: open and immediately close a connection.
    The check is performed once by the constructor.

    Raises
    ------
    ServerUnreachableError
        Failed to connect to the server.

    Examples
    --------

    .. code-block:: python

        # Synchronous code
        LC.ping()

        # Asynchronous code
        await LC.ping()
"""

_doc_api_lock = """
    Acquire the lock. The server keeps the request pending while the lock is held
    by another client, so the call blocks until the lock is acquired. The ``source``
    address tells the server which client owns the lock; all locks owned by the source
    may be released at once using ``reset_by_source()``.

    Parameters
    ----------
    key: str
        Lock key: non-empty string, not longer than 128 bytes (UTF-8 encoded).
    source: str or None, optional
        Source address (not longer than 128 bytes). *None* and empty string both mean
        that no source is attached to the lock. Default: *None*.
    timeout: float or None, optional
        Maximum time in seconds spent on the request. If the lock is not acquired before
        timeout expires, then ``RequestTimeoutError`` is raised. By default the request
        blocks until the lock is acquired. Default: *None*.

    Returns
    -------
    None

    Raises
    ------
    InvalidKeyError, InvalidSourceError
        Invalid key or source address.
    RequestTimeoutError
        Timeout expired.

    Examples
    --------

    .. code-block:: python

        # Synchronous code
        LC.lock("resource-1")
        LC.lock("resource-2", "worker-17")

        # Asynchronous code
        await LC.lock("resource-1")
        await LC.lock("resource-2", "worker-17")
"""

_doc_api_unlock = """
    Release the lock. The request is repeated until the server acknowledges it.

    Parameters
    ----------
    key: str
        Lock key: non-empty string, not longer than 128 bytes (UTF-8 encoded).
    timeout: float or None, optional
        Maximum time in seconds spent on the request. Default: *None* (no timeout).

    Returns
    -------
    None

    Raises
    ------
    InvalidKeyError
        Invalid key.
    RequestTimeoutError
        Timeout expired.
"""

_doc_api_locked = """
    Context manager that acquires the lock on entry and releases it on exit. The lock
    is released even if the code inside the block raises an exception. The timeout
    limits the time spent on acquiring the lock, releasing the lock is never timed out.

    Parameters
    ----------
    key: str
        Lock key: non-empty string, not longer than 128 bytes (UTF-8 encoded).
    source: str or None, optional
        Source address. Default: *None*.
    timeout: float or None, optional
        Maximum time in seconds spent on acquiring the lock. Default: *None* (no timeout).

    Examples
    --------

    .. code-block:: python

        # Synchronous code
        with LC.locked("resource-1"):
            ...

        # Asynchronous code
        async with LC.locked("resource-1"):
            ...
"""

_doc_api_wait = """
    Wait until the lock is available: acquire the lock and immediately release it.
    The lock is always released once it is acquired. The timeout limits the time spent
    on acquiring the lock.

    Parameters
    ----------
    key: str
        Lock key: non-empty string, not longer than 128 bytes (UTF-8 encoded).
    timeout: float or None, optional
        Maximum time in seconds spent on acquiring the lock. Default: *None* (no timeout).

    Returns
    -------
    None

    Raises
    ------
    InvalidKeyError
        Invalid key.
    RequestTimeoutError
        The lock was not acquired before timeout expired.
"""

_doc_api_reset_by_key = """
    Forcefully release the lock regardless of which client is holding it.

    Parameters
    ----------
    key: str
        Lock key: non-empty string, not longer than 128 bytes (UTF-8 encoded).
    timeout: float or None, optional
        Maximum time in seconds spent on the request. Default: *None* (no timeout).

    Returns
    -------
    None

    Raises
    ------
    InvalidKeyError
        Invalid key.
    RequestTimeoutError
        Timeout expired.
"""

_doc_api_reset = """
    Same as ``reset_by_key()``.
"""

_doc_api_reset_by_source = """
    Forcefully release all locks owned by the source. The locks acquired without
    source address are released if ``source`` is *None* or an empty string.

    Parameters
    ----------
    source: str or None, optional
        Source address (not longer than 128 bytes). Default: *None*.
    timeout: float or None, optional
        Maximum time in seconds spent on the request. Default: *None* (no timeout).

    Returns
    -------
    None

    Raises
    ------
    InvalidSourceError
        Invalid source address.
    RequestTimeoutError
        Timeout expired.

    Examples
    --------

    .. code-block:: python

        # Synchronous code
        LC.reset_by_source("worker-17")

        # Asynchronous code
        await LC.reset_by_source("worker-17")
"""
