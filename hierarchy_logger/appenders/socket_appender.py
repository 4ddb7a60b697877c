"""
Socket appender for remote logging

Sends each formatted event to a remote host over TCP or UDP, e.g. to a log
server unpickling LoggingEvent objects.
"""

import socket
from typing import Any, Optional, Tuple

from hierarchy_logger.core.logging_event import LoggingEvent
from hierarchy_logger.core.outcome import Outcome
from hierarchy_logger.appenders.base_appender import Appender
from hierarchy_logger.layouts.base_layout import Layout, to_bytes
from hierarchy_logger.layouts.serialized_layout import SerializedLayout

DEFAULT_PORT = 4446
DEFAULT_TIMEOUT = 60.0

TCP = "tcp"
UDP = "udp"


def parse_remote_host(remote_host: str) -> Tuple[str, str]:
    """
    Split an optional ``tcp://`` or ``udp://`` prefix off a host.

    Returns:
        (protocol, host) with protocol defaulting to TCP
    """
    for protocol in (TCP, UDP):
        prefix = f"{protocol}://"
        if remote_host.lower().startswith(prefix):
            return protocol, remote_host[len(prefix):]
    return TCP, remote_host


class SocketAppender(Appender):
    """
    Send events to a remote socket.

    A new connection is made for every event and closed right after the
    write. Failed connections are not retried; the appender closes itself.

    Example:
        appender = SocketAppender("remote", remote_host="udp://logs.local", port=4446)
    """

    def __init__(
        self,
        name: str = "",
        remote_host: Optional[str] = None,
        port: int = DEFAULT_PORT,
        timeout: Optional[float] = None,
        **kwargs
    ):
        """
        Initialize socket appender.

        Args:
            name: Appender name
            remote_host: Remote host address, optionally prefixed by tcp:// or udp://
            port: Remote port number
            timeout: Connection timeout in seconds
        """
        super().__init__(name, **kwargs)
        self.remote_host = remote_host
        self.port = port
        if timeout is None:
            timeout = socket.getdefaulttimeout() or DEFAULT_TIMEOUT
        self.timeout = timeout

    def get_default_layout(self) -> Layout:
        return SerializedLayout()

    def set_remote_host(self, value: Any) -> None:
        self._set_string("remote_host", value)

    def set_port(self, value: Any) -> None:
        self._set_positive_integer("port", value)

    def set_timeout(self, value: Any) -> None:
        self._set_number("timeout", value)

    def activate_options(self) -> Outcome:
        if not self.remote_host:
            return Outcome.config_error("Required parameter 'remoteHost' not set")
        return Outcome.success()

    def append(self, event: LoggingEvent) -> Outcome:
        content = self.format(event)
        if content is None:
            return Outcome.success()

        protocol, host = parse_remote_host(self.remote_host)
        data = to_bytes(content)
        try:
            if protocol == UDP:
                self._send_udp(host, data)
            else:
                self._send_tcp(host, data)
        except OSError as e:
            return Outcome.io_error(f"Could not send to {protocol}://{host}:{self.port}: {e}")
        return Outcome.success()

    def _send_tcp(self, host: str, data: bytes) -> None:
        with socket.create_connection((host, self.port), timeout=self.timeout) as sock:
            sock.sendall(data)

    def _send_udp(self, host: str, data: bytes) -> None:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.settimeout(self.timeout)
            sock.sendto(data, (host, self.port))
