"""
Caller location information

Snapshot of the file, line, class and method that issued a log call.
"""

import sys
from types import FrameType, TracebackType
from typing import Iterator, List, Optional, Tuple, Union

# Value returned when a piece of location information is not available
LOCATION_INFO_NA = "NA"

# Name reported for module-level code
MAIN = "main"

_PACKAGE = __name__.split(".")[0]


class GenericHandler:
    """
    Marker base class for error/exception hooks that log on behalf of
    other code.

    Frames running methods of a GenericHandler are skipped when looking
    for the caller, so the event is attributed to the code that triggered
    the hook rather than to the hook itself.
    """


class LocationInfo:
    """
    Caller location snapshot.

    Missing fields are reported as ``LOCATION_INFO_NA``.
    """

    __slots__ = ("_file", "_line", "_class_name", "_method")

    def __init__(
        self,
        file_name: Optional[str] = None,
        line_number: Optional[int] = None,
        class_name: Optional[str] = None,
        method_name: Optional[str] = None,
    ):
        self._file = file_name
        self._line = line_number
        self._class_name = class_name
        self._method = method_name

    @property
    def file_name(self) -> str:
        return LOCATION_INFO_NA if self._file is None else self._file

    @property
    def line_number(self) -> Union[int, str]:
        return LOCATION_INFO_NA if self._line is None else self._line

    @property
    def class_name(self) -> str:
        return LOCATION_INFO_NA if self._class_name is None else self._class_name

    @property
    def method_name(self) -> str:
        return LOCATION_INFO_NA if self._method is None else self._method

    @property
    def full_info(self) -> str:
        """Class, method, file and line combined."""
        return f"{self.class_name}.{self.method_name}({self.file_name}:{self.line_number})"

    @classmethod
    def from_frame(cls, frame: Optional[FrameType], line_number: Optional[int] = None) -> "LocationInfo":
        """
        Build location information from a stack frame.

        The frame's code object is the enclosing function. Its current line
        is the log statement unless ``line_number``, recorded when the frame
        was captured, is given.
        """
        if frame is None:
            return cls()
        method, class_name = describe_frame(frame)
        if line_number is None:
            line_number = frame.f_lineno
        return cls(frame.f_code.co_filename, line_number, class_name, method)

    @classmethod
    def from_exception(cls, exception: BaseException) -> Optional["LocationInfo"]:
        """
        Build location information from the throw site of an exception.

        Returns:
            LocationInfo, or None if the exception was never raised
        """
        tb: Optional[TracebackType] = exception.__traceback__
        if tb is None:
            return None
        while tb.tb_next is not None:
            tb = tb.tb_next
        method, class_name = describe_frame(tb.tb_frame)
        return cls(tb.tb_frame.f_code.co_filename, tb.tb_lineno, class_name, method)

    @classmethod
    def from_stack(cls) -> "LocationInfo":
        """
        Find the caller by walking the current stack from the oldest frame.

        The walk stops at the first frame that belongs to the framework
        (or to a GenericHandler); the frame just before it issued the call.
        """
        previous = None
        for frame in _oldest_first(sys._getframe(1)):
            if is_framework_frame(frame):
                break
            previous = frame
        return cls.from_frame(previous)

    def __getstate__(self):
        return (self._file, self._line, self._class_name, self._method)

    def __setstate__(self, state):
        self._file, self._line, self._class_name, self._method = state

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LocationInfo):
            return NotImplemented
        return self.__getstate__() == other.__getstate__()

    def __hash__(self) -> int:
        return hash(self.__getstate__())

    def __repr__(self) -> str:
        return f"LocationInfo({self.full_info})"


def describe_frame(frame: FrameType) -> Tuple[str, str]:
    """
    Get the method and class names of the code running in a frame.

    Returns:
        Tuple of (method name, class name); module-level code and plain
        functions report ``main`` for the missing part
    """
    code = frame.f_code
    method = MAIN if code.co_name == "<module>" else code.co_name

    f_locals = frame.f_locals
    owner = f_locals.get("self") if code.co_argcount else None
    if owner is not None and not isinstance(owner, type):
        return method, type(owner).__name__
    owner = f_locals.get("cls") if code.co_argcount else None
    if isinstance(owner, type):
        return method, owner.__name__

    qualname = getattr(code, "co_qualname", None)
    if qualname and "." in qualname:
        parent = qualname.rsplit(".", 1)[0]
        if not parent.endswith("<locals>"):
            return method, parent.rsplit(".", 1)[-1]
    return method, MAIN


def is_framework_frame(frame: FrameType) -> bool:
    """Check whether a frame runs framework code or a GenericHandler method."""
    module = frame.f_globals.get("__name__", "")
    if module == _PACKAGE or module.startswith(_PACKAGE + "."):
        return True
    if frame.f_code.co_argcount:
        owner = frame.f_locals.get("self")
        if isinstance(owner, GenericHandler):
            return True
    return False


def skip_framework_frames(frame: Optional[FrameType]) -> Optional[FrameType]:
    """Move outward past framework frames and GenericHandler methods."""
    while frame is not None and is_framework_frame(frame):
        frame = frame.f_back
    return frame


def _oldest_first(frame: Optional[FrameType]) -> Iterator[FrameType]:
    stack: List[FrameType] = []
    while frame is not None:
        stack.append(frame)
        frame = frame.f_back
    return reversed(stack)
