"""
BSD 3-Clause License

Copyright (c) 2021, 🍀☀🌕🌥 🌊
All rights reserved.

Python Hierarchy Logger - A hierarchical, synchronous logging framework
with pluggable appenders, layouts and filters
"""

__version__ = "1.0.0"
__author__ = "kcenon"
__email__ = "kcenon@naver.com"

from hierarchy_logger.core.level import Level
from hierarchy_logger.core.logging_event import LoggingEvent
from hierarchy_logger.core.logger import Logger, RootLogger
from hierarchy_logger.core.hierarchy import Hierarchy
from hierarchy_logger.core.diagnostic_context import MDC, NDC
from hierarchy_logger.core.diagnostics import LoggerException, LoggerWarning
from hierarchy_logger.core.logger_builder import LoggerBuilder
from hierarchy_logger.config.configurator import Configurator

# Import submodules (not all classes by default)
from hierarchy_logger import appenders
from hierarchy_logger import filters
from hierarchy_logger import layouts

__all__ = [
    "Level",
    "LoggingEvent",
    "Logger",
    "RootLogger",
    "Hierarchy",
    "MDC",
    "NDC",
    "LoggerException",
    "LoggerWarning",
    "LoggerBuilder",
    "Configurator",
    "appenders",
    "filters",
    "layouts",
]
