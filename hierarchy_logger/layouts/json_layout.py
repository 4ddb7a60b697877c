"""
JSON layout for structured logging

Formats each event as one compact JSON object per line
"""

import json
from datetime import datetime
from typing import Any, Dict, Optional

from hierarchy_logger.core.location_info import LOCATION_INFO_NA
from hierarchy_logger.core.logging_event import LoggingEvent
from hierarchy_logger.layouts.base_layout import Layout

ISO8601_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


class JsonLayout(Layout):
    """
    Format events as JSON objects, one per line.

    Keys: date, level, name, file, line, message, trace and context.
    Empty values are left out, so an event without location, exception or
    context only carries date, level, name and message.
    """

    content_type = "application/json"

    def __init__(self, ensure_ascii: bool = False, **kwargs):
        """
        Initialize JSON layout.

        Args:
            ensure_ascii: Escape non-ASCII characters
        """
        super().__init__(**kwargs)
        self.ensure_ascii = ensure_ascii

    def set_ensure_ascii(self, value: Any) -> None:
        self._set_boolean("ensure_ascii", value)

    def format(self, event: LoggingEvent) -> Optional[str]:
        """
        Format event as JSON.

        Args:
            event: Event to format

        Returns:
            JSON object followed by a newline
        """
        throwable = event.get_throwable_information()
        location = event.get_location_information()

        context: Dict[str, Any] = {}
        if event.logger is not None:
            context.update(event.logger.resolve_extended_context())
        context.update(event.get_context())
        context.pop("exception", None)

        entry = {
            "date": datetime.fromtimestamp(int(event.timestamp)).astimezone().strftime(ISO8601_FORMAT),
            "level": event.level.name,
            "name": event.logger_name,
            "file": _known(location.file_name),
            "line": _known(location.line_number),
            "message": event.get_rendered_message(),
            "trace": throwable.to_string() if throwable is not None else None,
            "context": context,
        }
        entry = {key: value for key, value in entry.items() if _has_value(value)}

        return json.dumps(entry, ensure_ascii=self.ensure_ascii, separators=(",", ":"), default=str) + "\n"

    def __repr__(self) -> str:
        return f"JsonLayout(ensure_ascii={self.ensure_ascii})"


def _known(value: Any) -> Any:
    return None if value == LOCATION_INFO_NA else value


def _has_value(value: Any) -> bool:
    return bool(value)
