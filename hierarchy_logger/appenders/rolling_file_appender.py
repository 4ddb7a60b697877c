"""Rolling file appender"""

import os
from typing import Any

from hierarchy_logger.core.logging_event import LoggingEvent
from hierarchy_logger.core.outcome import Outcome
from hierarchy_logger.appenders.file_appender import FileAppender

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024


class RollingFileAppender(FileAppender):
    """
    Write events to a file with size-based rotation.

    Before a write, if the file has reached ``max_file_size`` bytes, it is
    renamed to ``<file>.1``, older backups shift up by one and the oldest
    beyond ``max_backup_index`` is removed.
    """

    def __init__(
        self,
        name: str = "",
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
        max_backup_index: int = 1,
        **kwargs
    ):
        """
        Initialize rolling file appender.

        Args:
            name: Appender name
            max_file_size: Maximum file size before rotation
            max_backup_index: Number of backup files to keep
        """
        super().__init__(name, **kwargs)
        self.max_file_size = max_file_size
        self.max_backup_index = max_backup_index

    def set_max_file_size(self, value: Any) -> None:
        self._set_file_size("max_file_size", value)

    def set_max_backup_index(self, value: Any) -> None:
        self._set_positive_integer("max_backup_index", value)

    def append(self, event: LoggingEvent) -> Outcome:
        if self._should_rollover():
            outcome = self._do_rollover()
            if not outcome.ok:
                return outcome
        return super().append(event)

    def _should_rollover(self) -> bool:
        """Check if file should be rotated."""
        if self._fp is not None:
            return self._fp.tell() >= self.max_file_size
        try:
            return self.append_mode and os.path.getsize(self.path) >= self.max_file_size
        except OSError:
            return False

    def _do_rollover(self) -> Outcome:
        """Perform file rotation."""
        self.release()

        try:
            oldest = self._backup_name(self.max_backup_index)
            if os.path.exists(oldest):
                os.remove(oldest)

            for i in range(self.max_backup_index - 1, 0, -1):
                src = self._backup_name(i)
                if os.path.exists(src):
                    os.replace(src, self._backup_name(i + 1))

            if os.path.exists(self.path):
                os.replace(self.path, self._backup_name(1))
        except OSError as e:
            return Outcome.io_error(f"Failed rolling over file [{self.path}]: {e}")

        return Outcome.success()

    def _backup_name(self, index: int) -> str:
        return f"{self.path}.{index}"
