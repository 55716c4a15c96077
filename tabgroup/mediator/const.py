DEFAULT_HTTP_IFACE = '127.0.0.1'
DEFAULT_MIN_HTTP_PORT = 4635
DEFAULT_MAX_HTTP_PORT = 4645
DEFAULT_SHUTDOWN_POLL_INTERVAL = 1.0
DEFAULT_PARENT_WATCH_INTERVAL = 1.0
