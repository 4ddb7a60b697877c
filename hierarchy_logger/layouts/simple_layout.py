"""
Simple layout for minimal log output

Produces one ``LEVEL - message`` line per event
"""

from typing import Optional

from hierarchy_logger.core.logging_event import LoggingEvent
from hierarchy_logger.layouts.base_layout import Layout


class SimpleLayout(Layout):
    """
    Format events as ``LEVEL - message`` followed by a newline.

    Example:
        layout = SimpleLayout()
        layout.format(event)  # "INFO - Application started\\n"
    """

    def format(self, event: LoggingEvent) -> Optional[str]:
        message = event.get_rendered_message()
        if message is None:
            message = ""
        return f"{event.level.name} - {message}\n"
