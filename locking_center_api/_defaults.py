default_server_address = "localhost:60660"  # Default address (for testing and evaluation)

default_retry_period = 0.5  # s, pause between attempts of a failed request

default_timeout_connect = 5.0  # s, single connection attempt
default_timeout_recv = None  # s, the server holds the reply while the lock is queued
