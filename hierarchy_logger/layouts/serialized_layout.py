"""
Serialized layout for structured transport

Pickles the whole event, used by socket appenders so that the receiving
side gets a LoggingEvent back.
"""

import pickle
from typing import Any, Optional

from hierarchy_logger.core.logging_event import LoggingEvent
from hierarchy_logger.layouts.base_layout import Layout


class SerializedLayout(Layout):
    """
    Format events as pickled LoggingEvent objects.

    Location information is only included when ``location_info`` is set,
    as computing it costs a stack inspection per event.

    Example:
        data = SerializedLayout(location_info=True).format(event)
        received = pickle.loads(data)
    """

    content_type = "application/octet-stream"

    def __init__(self, location_info: bool = False, protocol: int = pickle.HIGHEST_PROTOCOL, **kwargs):
        super().__init__(**kwargs)
        self.location_info = location_info
        self.protocol = protocol

    def set_location_info(self, value: Any) -> None:
        self._set_boolean("location_info", value)

    def format(self, event: LoggingEvent) -> Optional[bytes]:
        if self.location_info:
            event.get_location_information()
        return pickle.dumps(event, protocol=self.protocol)

    def __repr__(self) -> str:
        return f"SerializedLayout(location_info={self.location_info})"
