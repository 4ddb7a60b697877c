"""Tests for filters and filter chains"""

import pytest

from hierarchy_logger import Level, LoggingEvent, LoggerWarning
from hierarchy_logger.core.location_info import LocationInfo
from hierarchy_logger.filters import (
    CallbackFilter,
    DenyAllFilter,
    FilterDecision,
    LevelMatchFilter,
    LevelRangeFilter,
    StringMatchFilter,
    decide_chain,
)


def make_event(message="Disk almost full", level=Level.WARNING):
    return LoggingEvent("tests", "app", level, message, location=LocationInfo())


class TestDecideChain:
    """Test filter chain folding."""

    def test_empty_chain_accepts(self):
        assert decide_chain([], make_event()) == FilterDecision.ACCEPT

    def test_all_neutral_accepts(self):
        filters = [StringMatchFilter("nothing"), LevelMatchFilter(Level.DEBUG)]
        assert decide_chain(filters, make_event()) == FilterDecision.ACCEPT

    def test_first_verdict_wins(self):
        filters = [StringMatchFilter("Disk"), DenyAllFilter()]
        assert decide_chain(filters, make_event()) == FilterDecision.ACCEPT

        filters = [DenyAllFilter(), StringMatchFilter("Disk")]
        assert decide_chain(filters, make_event()) == FilterDecision.DENY

    def test_accept_only_matching(self):
        filters = [StringMatchFilter("Disk"), DenyAllFilter()]
        assert decide_chain(filters, make_event("CPU hot")) == FilterDecision.DENY


class TestStringMatchFilter:
    """Test substring matching on the rendered message."""

    def test_match_accepts(self):
        assert StringMatchFilter("full").decide(make_event()) == FilterDecision.ACCEPT

    def test_match_denies(self):
        event_filter = StringMatchFilter("full", accept_on_match=False)
        assert event_filter.decide(make_event()) == FilterDecision.DENY

    def test_no_match_is_neutral(self):
        assert StringMatchFilter("cpu").decide(make_event()) == FilterDecision.NEUTRAL

    def test_missing_message_or_string_is_neutral(self):
        assert StringMatchFilter("full").decide(make_event(None)) == FilterDecision.NEUTRAL
        assert StringMatchFilter().decide(make_event()) == FilterDecision.NEUTRAL

    def test_options(self):
        event_filter = StringMatchFilter()
        event_filter.configure({"stringToMatch": "Disk", "acceptOnMatch": "false"})
        assert event_filter.decide(make_event()) == FilterDecision.DENY


class TestLevelMatchFilter:
    """Test exact level matching."""

    def test_match(self):
        assert LevelMatchFilter(Level.WARNING).decide(make_event()) == FilterDecision.ACCEPT
        event_filter = LevelMatchFilter(Level.WARNING, accept_on_match=False)
        assert event_filter.decide(make_event()) == FilterDecision.DENY

    def test_other_level_is_neutral(self):
        assert LevelMatchFilter(Level.ERROR).decide(make_event()) == FilterDecision.NEUTRAL

    def test_level_option(self):
        event_filter = LevelMatchFilter()
        event_filter.configure({"levelToMatch": "warn"})
        assert event_filter.level_to_match == Level.WARNING


class TestLevelRangeFilter:
    """Test level range filtering."""

    def test_out_of_range_denied(self):
        event_filter = LevelRangeFilter(Level.ERROR, Level.CRITICAL)
        assert event_filter.decide(make_event(level=Level.WARNING)) == FilterDecision.DENY
        assert event_filter.decide(make_event(level=Level.ALERT)) == FilterDecision.DENY

    def test_in_range_neutral_by_default(self):
        event_filter = LevelRangeFilter(Level.INFO, Level.ERROR)
        assert event_filter.decide(make_event()) == FilterDecision.NEUTRAL

    def test_in_range_accepted(self):
        event_filter = LevelRangeFilter(level_min=Level.INFO, accept_on_match=True)
        assert event_filter.decide(make_event(level=Level.EMERGENCY)) == FilterDecision.ACCEPT

    def test_invalid_level_option(self):
        event_filter = LevelRangeFilter()
        with pytest.warns(LoggerWarning, match="Invalid value given for 'level_min' property"):
            event_filter.configure({"levelMin": "LOUD"})
        assert event_filter.level_min is None


class TestCallbackFilter:
    """Test callback-based decisions."""

    def test_bool_results(self):
        assert CallbackFilter(lambda event: True).decide(make_event()) == FilterDecision.ACCEPT
        assert CallbackFilter(lambda event: False).decide(make_event()) == FilterDecision.DENY

    def test_none_is_neutral(self):
        assert CallbackFilter(lambda event: None).decide(make_event()) == FilterDecision.NEUTRAL

    def test_decision_passthrough(self):
        event_filter = CallbackFilter(lambda event: FilterDecision.DENY)
        assert event_filter.decide(make_event()) == FilterDecision.DENY

    def test_raising_callback_is_neutral(self):
        def broken(event):
            raise RuntimeError("oops")

        with pytest.warns(LoggerWarning, match="Filter callback error: oops"):
            assert CallbackFilter(broken).decide(make_event()) == FilterDecision.NEUTRAL

    def test_requires_callable(self):
        with pytest.raises(TypeError):
            CallbackFilter("not callable")
