"""Structured representation of an exception attached to a logging event"""

import traceback
from typing import Any, Dict, List, Optional


class ThrowableInformation:
    """
    Wraps an exception's class, message and traceback.

    The live exception object is not kept when the information is
    pickled, so events carrying it can be serialized for transport.
    """

    def __init__(self, exception: BaseException):
        self.exception: Optional[BaseException] = exception
        exc_type = type(exception)
        self.exception_class = f"{exc_type.__module__}.{exc_type.__qualname__}"
        if exc_type.__module__ == "builtins":
            self.exception_class = exc_type.__qualname__
        self.message = str(exception)
        self._lines: Optional[List[str]] = None

    def get_string_representation(self) -> List[str]:
        """
        Get the formatted traceback.

        Returns:
            Traceback lines without trailing newlines
        """
        if self._lines is None:
            formatted = traceback.format_exception(
                type(self.exception), self.exception, self.exception.__traceback__
            )
            self._lines = "".join(formatted).rstrip("\n").split("\n")
        return self._lines

    def to_string(self) -> str:
        """Traceback as a single string."""
        return "\n".join(self.get_string_representation())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "class": self.exception_class,
            "message": self.message,
            "trace": self.get_string_representation(),
        }

    def __getstate__(self) -> Dict[str, Any]:
        self.get_string_representation()
        state = self.__dict__.copy()
        state["exception"] = None
        return state

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"ThrowableInformation({self.exception_class}: {self.message!r})"
