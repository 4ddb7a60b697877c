"""
Mapped and nested diagnostic contexts

Ambient data merged into logging events. Both contexts are stored in
context variables, so each thread and each asyncio task sees its own.
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Any, Dict, Optional, Tuple

_mdc: ContextVar[Dict[str, Any]] = ContextVar("hierarchy_logger_mdc")
_ndc: ContextVar[Tuple[str, ...]] = ContextVar("hierarchy_logger_ndc", default=())


class MDC:
    """Mapped diagnostic context: key/value pairs."""

    @staticmethod
    def put(key: str, value: Any) -> None:
        current = dict(_mdc.get({}))
        current[key] = value
        _mdc.set(current)

    @staticmethod
    def get(key: str, default: Any = "") -> Any:
        return _mdc.get({}).get(key, default)

    @staticmethod
    def get_map() -> Dict[str, Any]:
        return dict(_mdc.get({}))

    @staticmethod
    def remove(key: str) -> None:
        current = dict(_mdc.get({}))
        current.pop(key, None)
        _mdc.set(current)

    @staticmethod
    def clear() -> None:
        _mdc.set({})


class NDC:
    """Nested diagnostic context: a stack of messages."""

    @staticmethod
    def push(message: str) -> None:
        _ndc.set(_ndc.get() + (str(message),))

    @staticmethod
    def pop() -> Optional[str]:
        stack = _ndc.get()
        if not stack:
            return None
        _ndc.set(stack[:-1])
        return stack[-1]

    @staticmethod
    def peek() -> Optional[str]:
        stack = _ndc.get()
        return stack[-1] if stack else None

    @staticmethod
    def get() -> str:
        """All messages of the stack joined by spaces."""
        return " ".join(_ndc.get())

    @staticmethod
    def get_depth() -> int:
        return len(_ndc.get())

    @staticmethod
    def clear() -> None:
        _ndc.set(())
