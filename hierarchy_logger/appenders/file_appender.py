"""File appender"""

from pathlib import Path
from typing import Any, BinaryIO, Optional

try:
    import fcntl
except ImportError:  # pragma: no cover - not available on Windows
    fcntl = None

from hierarchy_logger.core.logging_event import LoggingEvent
from hierarchy_logger.core.outcome import Outcome
from hierarchy_logger.appenders.base_appender import Appender
from hierarchy_logger.layouts.base_layout import Content, to_bytes


class FileAppender(Appender):
    """
    Write events to a file.

    The file is opened on the first write, creating missing parent
    directories. With ``locking`` each write takes an exclusive advisory
    lock, so several processes can share one log file.
    """

    def __init__(
        self,
        name: str = "",
        file: Optional[str] = None,
        append: bool = True,
        locking: bool = True,
        encoding: str = "utf-8",
        **kwargs
    ):
        """
        Initialize file appender.

        Args:
            name: Appender name
            file: Path to log file
            append: Append to an existing file instead of truncating it
            locking: Lock the file around each write
            encoding: Encoding for text produced by the layout
        """
        super().__init__(name, **kwargs)
        self.file = file
        self.append_mode = append
        self.locking = locking
        self.encoding = encoding
        self._fp: Optional[BinaryIO] = None

    def set_file(self, value: Any) -> None:
        self._set_string("file", value)

    def set_append(self, value: Any) -> None:
        self._set_boolean("append_mode", value)

    def set_locking(self, value: Any) -> None:
        self._set_boolean("locking", value)

    def set_encoding(self, value: Any) -> None:
        self._set_string("encoding", value)

    @property
    def path(self) -> Path:
        return Path(self.file)

    def activate_options(self) -> Outcome:
        if not self.file:
            return Outcome.config_error("Required parameter 'file' not set")
        if self.locking and fcntl is None:
            self.warn("File locking is not supported on this platform. Writing without locks.")
            self.locking = False
        return Outcome.success()

    def append(self, event: LoggingEvent) -> Outcome:
        content = self.format(event)
        if content is None:
            return Outcome.success()

        if self._fp is None:
            outcome = self._open()
            if not outcome.ok:
                return outcome

        return self._write(content)

    def _open(self) -> Outcome:
        """Open log file."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return Outcome.io_error(f"Failed creating target directory [{self.path.parent}]: {e}")

        try:
            self._fp = open(self.path, "ab" if self.append_mode else "wb")
        except OSError as e:
            return Outcome.io_error(f"Failed opening target file [{self.path}]: {e}")

        header = self.layout.get_header() if self.layout is not None else None
        if header:
            return self._write(header)
        return Outcome.success()

    def _write(self, content: Content) -> Outcome:
        data = to_bytes(content, self.encoding)
        try:
            if self.locking:
                fcntl.flock(self._fp.fileno(), fcntl.LOCK_EX)
            try:
                self._fp.write(data)
                self._fp.flush()
            finally:
                if self.locking:
                    fcntl.flock(self._fp.fileno(), fcntl.LOCK_UN)
        except OSError as e:
            return Outcome.io_error(f"Failed writing to file [{self.path}]: {e}")
        return Outcome.success()

    def write_footer(self) -> Outcome:
        footer = self.layout.get_footer() if self.layout is not None else None
        if footer and self._fp is not None:
            return self._write(footer)
        return Outcome.success()

    def release(self) -> None:
        """Close file."""
        if self._fp:
            fp, self._fp = self._fp, None
            fp.close()
