"""Console appender writing to standard output or standard error"""

import sys
from typing import Any, Optional, TextIO

from hierarchy_logger.core.logging_event import LoggingEvent
from hierarchy_logger.core.outcome import Outcome
from hierarchy_logger.appenders.base_appender import Appender
from hierarchy_logger.layouts.base_layout import to_text

STDOUT = "stdout"
STDERR = "stderr"


class ConsoleAppender(Appender):
    """
    Write events to the console.

    The stream is looked up when the appender is activated, so redirecting
    ``sys.stdout`` before activation is honoured. The stream is flushed but
    never closed.
    """

    def __init__(self, name: str = "", target: str = STDOUT, **kwargs):
        """
        Initialize console appender.

        Args:
            name: Appender name
            target: "stdout" or "stderr"
        """
        super().__init__(name, **kwargs)
        self.target = STDOUT
        self.stream: Optional[TextIO] = None
        if target != STDOUT:
            self.set_target(target)

    def set_target(self, value: Any) -> None:
        text = str(value).strip().lower() if isinstance(value, str) else None
        if text not in (STDOUT, STDERR):
            self._warn_invalid("target", value, f"'{STDOUT}' or '{STDERR}'")
            return
        self.target = text

    def activate_options(self) -> Outcome:
        self.stream = sys.stderr if self.target == STDERR else sys.stdout
        header = self.layout.get_header() if self.layout is not None else None
        if header:
            return self._write(header)
        return Outcome.success()

    def append(self, event: LoggingEvent) -> Outcome:
        content = self.format(event)
        if content is None:
            return Outcome.success()
        return self._write(to_text(content))

    def write_footer(self) -> Outcome:
        footer = self.layout.get_footer() if self.layout is not None else None
        if footer:
            return self._write(footer)
        return Outcome.success()

    def _write(self, text: str) -> Outcome:
        try:
            self.stream.write(text)
            self.stream.flush()
        except (OSError, ValueError) as e:
            return Outcome.io_error(f"Failed writing to {self.target}: {e}")
        return Outcome.success()

    def release(self) -> None:
        self.stream = None
