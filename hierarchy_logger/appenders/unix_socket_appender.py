"""Unix domain socket appender"""

import socket
from typing import Any, Optional

from hierarchy_logger.core.logging_event import LoggingEvent
from hierarchy_logger.core.outcome import Outcome
from hierarchy_logger.appenders.base_appender import Appender
from hierarchy_logger.layouts.base_layout import to_bytes


class UnixSocketAppender(Appender):
    """
    Write events to a Unix domain stream socket.

    The connection is opened on the first append and reused until the
    appender is closed.
    """

    def __init__(self, name: str = "", path: Optional[str] = None, **kwargs):
        super().__init__(name, **kwargs)
        self.path = path
        self._socket: Optional[socket.socket] = None

    def set_path(self, value: Any) -> None:
        self._set_string("path", value)

    def activate_options(self) -> Outcome:
        if not self.path:
            return Outcome.config_error("Required parameter 'path' not set")
        return Outcome.success()

    def append(self, event: LoggingEvent) -> Outcome:
        content = self.format(event)
        if content is None:
            return Outcome.success()

        try:
            if self._socket is None:
                self._socket = self._connect()
            self._socket.sendall(to_bytes(content))
        except OSError as e:
            return Outcome.io_error(f"Could not write to unix socket [{self.path}]: {e}")
        return Outcome.success()

    def _connect(self) -> socket.socket:
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.connect(self.path)
        except OSError:
            sock.close()
            raise
        return sock

    def release(self) -> None:
        if self._socket is not None:
            sock, self._socket = self._socket, None
            sock.close()
