"""
Appenders module

Provides appenders that deliver formatted events to consoles, files,
sockets and the standard library logging module.
"""

from hierarchy_logger.appenders.base_appender import Appender, AppenderState
from hierarchy_logger.appenders.console_appender import ConsoleAppender
from hierarchy_logger.appenders.echo_appender import EchoAppender
from hierarchy_logger.appenders.file_appender import FileAppender
from hierarchy_logger.appenders.rolling_file_appender import RollingFileAppender
from hierarchy_logger.appenders.socket_appender import SocketAppender
from hierarchy_logger.appenders.unix_socket_appender import UnixSocketAppender
from hierarchy_logger.appenders.null_appender import NullAppender
from hierarchy_logger.appenders.stdlib_appender import StdlibLoggingAppender

__all__ = [
    "Appender",
    "AppenderState",
    "ConsoleAppender",
    "EchoAppender",
    "FileAppender",
    "RollingFileAppender",
    "SocketAppender",
    "UnixSocketAppender",
    "NullAppender",
    "StdlibLoggingAppender",
]
