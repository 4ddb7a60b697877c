"""
Filters module

Provides the filter chain used by appenders to accept or deny events.
"""

from hierarchy_logger.filters.base_filter import Filter, FilterDecision, decide_chain
from hierarchy_logger.filters.string_match_filter import StringMatchFilter
from hierarchy_logger.filters.level_match_filter import LevelMatchFilter
from hierarchy_logger.filters.level_range_filter import LevelRangeFilter
from hierarchy_logger.filters.deny_all_filter import DenyAllFilter
from hierarchy_logger.filters.callback_filter import CallbackFilter

__all__ = [
    "Filter",
    "FilterDecision",
    "decide_chain",
    "StringMatchFilter",
    "LevelMatchFilter",
    "LevelRangeFilter",
    "DenyAllFilter",
    "CallbackFilter",
]
