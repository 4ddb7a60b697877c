"""
Core module for logger system

This module contains the fundamental classes:
- Level: Level enumeration
- LoggingEvent: One log occurrence with lazily derived fields
- LocationInfo / ThrowableInformation: Caller and exception snapshots
- Logger / RootLogger: Named loggers with level inheritance
- Hierarchy: Logger registry, threshold and renderer map
- MDC / NDC: Diagnostic contexts
- Outcome / LoggerWarning / LoggerException: Error reporting
"""

from hierarchy_logger.core.level import Level
from hierarchy_logger.core.outcome import Outcome, OutcomeKind
from hierarchy_logger.core.diagnostics import LoggerException, LoggerWarning
from hierarchy_logger.core.location_info import GenericHandler, LocationInfo
from hierarchy_logger.core.throwable_info import ThrowableInformation
from hierarchy_logger.core.renderer_map import Renderer, RendererMap
from hierarchy_logger.core.diagnostic_context import MDC, NDC
from hierarchy_logger.core.logging_event import LoggingEvent
from hierarchy_logger.core.logger import Logger, RootLogger
from hierarchy_logger.core.hierarchy import Hierarchy

__all__ = [
    "Level",
    "Outcome",
    "OutcomeKind",
    "LoggerException",
    "LoggerWarning",
    "GenericHandler",
    "LocationInfo",
    "ThrowableInformation",
    "Renderer",
    "RendererMap",
    "MDC",
    "NDC",
    "LoggingEvent",
    "Logger",
    "RootLogger",
    "Hierarchy",
]
