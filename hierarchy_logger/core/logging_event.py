"""
Logging event

The internal representation of one log occurrence. Stored fields are set
at construction; derived fields (rendered message, location, NDC/MDC,
process id) are computed on first use and cached.
"""

from __future__ import annotations

import json
import math
import os
import pickle
import re
import time
from decimal import Decimal
from types import FrameType
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Union

from hierarchy_logger.core.diagnostic_context import MDC, NDC
from hierarchy_logger.core.level import Level
from hierarchy_logger.core.location_info import LocationInfo
from hierarchy_logger.core.renderer_map import RendererMap
from hierarchy_logger.core.throwable_info import ThrowableInformation

if TYPE_CHECKING:
    from hierarchy_logger.core.logger import Logger

# Process start, fixed when the framework is first imported
_START_TIME = time.time()

_PLACEHOLDER = re.compile(r"\{([^{}]*)\}")

_NUMERAL = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


class LoggingEvent:
    """
    One log occurrence.

    Created by a logger, passed by reference through filters, appenders and
    layouts, and discarded once dispatch returns.

    Example:
        event = LoggingEvent("app", "app.db", Level.INFO,
                             "Connected to {host}", context={"host": "db1"})
        event.get_rendered_message()  # "Connected to db1"
    """

    def __init__(
        self,
        fqcn: str,
        logger: Union["Logger", str, None],
        level: Level,
        message: Any,
        timestamp: Any = None,
        context: Optional[Mapping[str, Any]] = None,
        location: Union[FrameType, LocationInfo, None] = None,
        renderer_map: Optional[RendererMap] = None,
    ):
        """
        Initialize logging event.

        Args:
            fqcn: Fully qualified name of the calling class or module
            logger: Originating Logger, or a logger name
            level: Level of the event
            message: Message template (str) or any renderable object
            timestamp: Seconds since the epoch; ignored unless numeric
            context: Free-form key/value data; an ``exception`` entry
                     attaches throwable information
            location: Caller frame or precomputed LocationInfo
            renderer_map: Registry used to render non-string messages
        """
        if not isinstance(level, Level):
            raise TypeError("level must be Level enum")

        self._fqcn = fqcn
        if logger is None or isinstance(logger, str):
            self._logger = None
            self._logger_name = "" if logger is None else logger
        elif hasattr(logger, "call_appenders"):
            self._logger = logger
            self._logger_name = logger.name
        else:
            self._logger = None
            self._logger_name = str(logger)

        self._level = level
        self._message = message
        self._timestamp = _to_timestamp(timestamp)
        self._context: Dict[str, Any] = dict(context) if context else {}
        self._caller = location
        self._caller_line = location.f_lineno if isinstance(location, FrameType) else None

        if renderer_map is None and self._logger is not None:
            hierarchy = getattr(self._logger, "hierarchy", None)
            renderer_map = getattr(hierarchy, "renderer_map", None)
        self._renderer_map = renderer_map

        self._rendered_message: Optional[str] = None
        self._rendered = False
        self._location_info: Optional[LocationInfo] = None
        self._thread_name: Optional[str] = None
        self._ndc: Optional[str] = None
        self._mdc: Optional[Dict[str, Any]] = None

        exception = self._context.get("exception")
        if isinstance(exception, BaseException):
            self._throwable_info: Optional[ThrowableInformation] = ThrowableInformation(exception)
        else:
            self._throwable_info = None

    # Stored fields

    @property
    def fqcn(self) -> str:
        """Fully qualified name of the caller class."""
        return self._fqcn

    @property
    def logger(self) -> Optional["Logger"]:
        return self._logger

    @property
    def logger_name(self) -> str:
        return self._logger_name

    @property
    def level(self) -> Level:
        return self._level

    @property
    def message(self) -> Any:
        return self._message

    @property
    def timestamp(self) -> float:
        return self._timestamp

    @property
    def context(self) -> Dict[str, Any]:
        return self._context

    # Derived fields

    def get_rendered_message(self) -> Optional[str]:
        """
        Render the message.

        String messages get ``{key}`` placeholders replaced with context
        values (lists and dicts JSON encoded). Other objects go through the
        renderer map. The result is cached.
        """
        if not self._rendered:
            self._rendered = True
            if self._message is None:
                self._rendered_message = None
            elif isinstance(self._message, str):
                self._rendered_message = self._interpolate(self._message)
            else:
                if self._renderer_map is None:
                    self._renderer_map = RendererMap()
                self._rendered_message = self._renderer_map.find_and_render(self._message)
        return self._rendered_message

    def get_location_information(self) -> LocationInfo:
        """
        Get the location of the log call. Computed once and cached.

        An exception in the context wins: its throw site is used. Otherwise
        the caller captured at the logger boundary is used, and as a last
        resort the current stack is searched for the first frame outside
        the framework.
        """
        if self._location_info is None:
            info = None
            exception = self._context.get("exception")
            if isinstance(exception, BaseException):
                info = LocationInfo.from_exception(exception)
            if info is None:
                if isinstance(self._caller, LocationInfo):
                    info = self._caller
                elif self._caller is not None:
                    info = LocationInfo.from_frame(self._caller, self._caller_line)
                else:
                    info = LocationInfo.from_stack()
            self._location_info = info
            self._caller = None
        return self._location_info

    def get_throwable_information(self) -> Optional[ThrowableInformation]:
        return self._throwable_info

    @property
    def thread_name(self) -> str:
        """Identifier of the emitting process."""
        if self._thread_name is None:
            self._thread_name = str(os.getpid())
        return self._thread_name

    def get_ndc(self) -> str:
        if self._ndc is None:
            self._ndc = NDC.get()
        return self._ndc

    def get_mdc_map(self) -> Dict[str, Any]:
        if self._mdc is None:
            self._mdc = MDC.get_map()
        return self._mdc

    def get_mdc(self, key: str) -> Any:
        return self.get_mdc_map().get(key, "")

    def get_context(self) -> Dict[str, Any]:
        return self._context

    @staticmethod
    def get_start_time() -> float:
        """Process start time as seconds since the epoch."""
        return _START_TIME

    def get_relative_time(self) -> float:
        """Seconds elapsed between process start and this event."""
        return self._timestamp - _START_TIME

    # Serialization

    def to_string(self) -> bytes:
        """Pickled form of this event."""
        return pickle.dumps(self)

    def __getstate__(self) -> Dict[str, Any]:
        self.get_rendered_message()
        self.get_ndc()
        _ = self.thread_name
        state = self.__dict__.copy()
        state["_logger"] = None
        state["_caller"] = None
        state["_renderer_map"] = None
        state["_context"] = {}
        state["_mdc"] = None
        if not isinstance(self._message, (str, int, float, type(None))):
            state["_message"] = self._rendered_message
        return state

    def __setstate__(self, state: Dict[str, Any]) -> None:
        self.__dict__.update(state)
        if self._location_info is None:
            self._location_info = LocationInfo()

    def __repr__(self) -> str:
        return f"LoggingEvent({self._level.name}, {self._logger_name!r}, {self._message!r})"

    def _interpolate(self, template: str) -> str:
        if not self._context:
            return template
        pairs = {str(key): _stringify(value) for key, value in self._context.items()}
        return _PLACEHOLDER.sub(lambda match: pairs.get(match.group(1), match.group(0)), template)


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(value, default=str)
    return str(value)


def _to_timestamp(value: Any) -> float:
    """Numeric timestamps are kept when finite, anything else means now."""
    if value is None or isinstance(value, bool):
        return time.time()
    if isinstance(value, str) and _NUMERAL.match(value.strip()):
        value = value.strip()
    elif not isinstance(value, (int, float, Decimal)):
        return time.time()
    try:
        timestamp = float(value)
    except OverflowError:
        return time.time()
    return timestamp if math.isfinite(timestamp) else time.time()
