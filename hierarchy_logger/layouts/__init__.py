"""
Layouts module

Provides layouts that turn logging events into text or bytes.
"""

from hierarchy_logger.layouts.base_layout import Layout
from hierarchy_logger.layouts.simple_layout import SimpleLayout
from hierarchy_logger.layouts.pattern_layout import PatternLayout
from hierarchy_logger.layouts.json_layout import JsonLayout
from hierarchy_logger.layouts.serialized_layout import SerializedLayout

__all__ = [
    "Layout",
    "SimpleLayout",
    "PatternLayout",
    "JsonLayout",
    "SerializedLayout",
]
