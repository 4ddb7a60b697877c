"""Tests for socket appenders"""

import pickle
import socket
from unittest.mock import MagicMock, patch

import pytest

from hierarchy_logger import Level, LoggingEvent, LoggerWarning
from hierarchy_logger.appenders import SocketAppender, UnixSocketAppender
from hierarchy_logger.appenders.socket_appender import DEFAULT_PORT, parse_remote_host
from hierarchy_logger.core.location_info import LocationInfo
from hierarchy_logger.layouts import PatternLayout, SerializedLayout


def make_event(message="Hello", level=Level.INFO):
    return LoggingEvent("tests", "app.net", level, message, location=LocationInfo())


def read_all(conn):
    chunks = []
    while True:
        chunk = conn.recv(4096)
        if not chunk:
            return b"".join(chunks)
        chunks.append(chunk)


class TestParseRemoteHost:
    """Test protocol prefixes on remote hosts."""

    def test_plain_host_is_tcp(self):
        assert parse_remote_host("logs.local") == ("tcp", "logs.local")

    def test_prefixes(self):
        assert parse_remote_host("tcp://logs.local") == ("tcp", "logs.local")
        assert parse_remote_host("UDP://10.0.0.1") == ("udp", "10.0.0.1")


class TestSocketAppender:
    """Test one-shot socket writes."""

    def test_defaults(self):
        appender = SocketAppender("socket", remote_host="localhost")
        appender.activate()
        assert appender.port == DEFAULT_PORT
        assert isinstance(appender.layout, SerializedLayout)
        assert appender.timeout == (socket.getdefaulttimeout() or 60)

    def test_remote_host_required(self):
        appender = SocketAppender("socket")
        with pytest.warns(LoggerWarning, match="Required parameter 'remoteHost' not set"):
            assert not appender.activate().ok

    def test_tcp_round_trip(self):
        server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        server.bind(("127.0.0.1", 0))
        server.listen(1)
        server.settimeout(5)
        try:
            appender = SocketAppender("socket")
            appender.configure({"remoteHost": "127.0.0.1", "port": server.getsockname()[1], "timeout": "5"})
            appender.activate()

            assert appender.do_append(make_event("over the wire")).ok

            conn, _ = server.accept()
            with conn:
                conn.settimeout(5)
                event = pickle.loads(read_all(conn))
            assert event.get_rendered_message() == "over the wire"
            assert event.logger_name == "app.net"
        finally:
            server.close()

    def test_udp_datagram(self):
        server = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        server.bind(("127.0.0.1", 0))
        server.settimeout(5)
        try:
            appender = SocketAppender(
                "socket",
                remote_host="udp://127.0.0.1",
                port=server.getsockname()[1],
                layout=PatternLayout("%p %m"),
            )
            appender.activate()
            appender.do_append(make_event("datagram"))

            data, _ = server.recvfrom(4096)
            assert data == b"INFO datagram"
        finally:
            server.close()

    def test_new_connection_per_event(self):
        appender = SocketAppender("socket", remote_host="logs.local")
        appender.activate()

        with patch("hierarchy_logger.appenders.socket_appender.socket.create_connection") as create_connection:
            create_connection.return_value = MagicMock()
            appender.do_append(make_event("one"))
            appender.do_append(make_event("two"))

        assert create_connection.call_count == 2
        create_connection.assert_called_with(("logs.local", DEFAULT_PORT), timeout=appender.timeout)
        sock = create_connection.return_value.__enter__.return_value
        assert sock.sendall.call_count == 2

    def test_connection_failure_closes(self):
        appender = SocketAppender("socket", remote_host="logs.local")
        appender.activate()

        with patch(
            "hierarchy_logger.appenders.socket_appender.socket.create_connection",
            side_effect=ConnectionRefusedError("refused"),
        ) as create_connection:
            with pytest.warns(LoggerWarning, match="Could not send to tcp://logs.local:4446"):
                assert not appender.do_append(make_event()).ok
            appender.do_append(make_event())

        assert appender.closed
        assert create_connection.call_count == 1


@pytest.mark.skipif(not hasattr(socket, "AF_UNIX"), reason="Unix sockets not available")
class TestUnixSocketAppender:
    """Test unix socket writes."""

    def test_connection_reused(self, tmp_path):
        path = str(tmp_path / "log.sock")
        server = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        server.bind(path)
        server.listen(2)
        server.settimeout(1)
        try:
            appender = UnixSocketAppender("unix")
            appender.configure({"path": path})
            appender.activate()
            appender.do_append(make_event("a"))
            appender.do_append(make_event("b"))

            conn, _ = server.accept()
            appender.close()
            with conn:
                assert read_all(conn) == b"INFO - a\nINFO - b\n"

            with pytest.raises(socket.timeout):
                server.accept()
        finally:
            server.close()

    def test_missing_socket_closes(self, tmp_path):
        appender = UnixSocketAppender("unix", path=str(tmp_path / "missing.sock"))
        appender.activate()

        with pytest.warns(LoggerWarning, match="Could not write to unix socket"):
            assert not appender.do_append(make_event()).ok
        assert appender.closed

    def test_path_required(self):
        appender = UnixSocketAppender("unix")
        with pytest.warns(LoggerWarning, match="Required parameter 'path' not set"):
            appender.activate()
        assert appender.closed
