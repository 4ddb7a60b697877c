"""Tests for logging events, location and exception information"""

import math
import os
import pickle
import sys

import pytest

from hierarchy_logger import Level, LoggingEvent, MDC, NDC
from hierarchy_logger.core.location_info import LOCATION_INFO_NA, GenericHandler, LocationInfo
from hierarchy_logger.core.renderer_map import Renderer, RendererMap


def raise_error():
    raise ValueError("boom")


def log_through_helper(logger):
    logger.info("from helper", stacklevel=2)


class ErrorHook(GenericHandler):
    def handle(self, logger, message):
        logger.error(message)


class CountingRenderer(Renderer):
    def __init__(self):
        self.calls = 0

    def render(self, obj):
        self.calls += 1
        return f"point({obj.x})"


class Point:
    def __init__(self, x):
        self.x = x


class TestLoggingEvent:
    """Test stored and derived event fields."""

    def test_stored_fields(self):
        event = LoggingEvent("tests", "app.db", Level.INFO, "ready", timestamp=1000.5)
        assert event.fqcn == "tests"
        assert event.logger is None
        assert event.logger_name == "app.db"
        assert event.level == Level.INFO
        assert event.message == "ready"
        assert event.timestamp == 1000.5

    def test_level_must_be_level(self):
        with pytest.raises(TypeError):
            LoggingEvent("tests", "app", 20000, "message")

    def test_timestamp_defaults_to_now(self):
        event = LoggingEvent("tests", "app", Level.INFO, "message", timestamp="not a number")
        assert event.timestamp > LoggingEvent.get_start_time()

    def test_numeric_string_timestamp(self):
        event = LoggingEvent("tests", "app", Level.INFO, "message", timestamp=" 12.25 ")
        assert event.timestamp == 12.25

    @pytest.mark.parametrize("timestamp", ["nan", "inf", "-Infinity", "1_000", float("nan"), float("inf"), 10 ** 400])
    def test_non_finite_timestamp_defaults_to_now(self, timestamp):
        event = LoggingEvent("tests", "app", Level.INFO, "message", timestamp=timestamp)
        assert math.isfinite(event.timestamp)
        assert event.timestamp > LoggingEvent.get_start_time()

    def test_exponent_string_timestamp(self):
        event = LoggingEvent("tests", "app", Level.INFO, "message", timestamp="1.5e3")
        assert event.timestamp == 1500.0

    def test_relative_time(self):
        start = LoggingEvent.get_start_time()
        event = LoggingEvent("tests", "app", Level.INFO, "message", timestamp=start + 1.5)
        assert event.get_relative_time() == pytest.approx(1.5)

    def test_placeholder_interpolation(self):
        event = LoggingEvent(
            "tests", "app", Level.INFO, "User {user} has {roles}, {missing} stays, {empty}.",
            context={"user": "alice", "roles": ["admin", "dev"], "empty": None},
        )
        assert event.get_rendered_message() == 'User alice has ["admin", "dev"], {missing} stays, .'

    def test_message_without_context_unchanged(self):
        event = LoggingEvent("tests", "app", Level.INFO, "Literal {braces}")
        assert event.get_rendered_message() == "Literal {braces}"

    def test_none_message(self):
        event = LoggingEvent("tests", "app", Level.INFO, None)
        assert event.get_rendered_message() is None

    def test_object_message_rendered_once(self):
        renderer = CountingRenderer()
        renderer_map = RendererMap()
        renderer_map.add_renderer(Point, renderer)
        event = LoggingEvent("tests", "app", Level.INFO, Point(3), renderer_map=renderer_map)

        assert event.get_rendered_message() == "point(3)"
        assert event.get_rendered_message() == "point(3)"
        assert renderer.calls == 1

    def test_object_message_default_renderer(self):
        event = LoggingEvent("tests", "app", Level.INFO, {"a": 1})
        assert event.get_rendered_message() == "{'a': 1}"

    def test_process_id(self):
        event = LoggingEvent("tests", "app", Level.INFO, "message")
        assert event.thread_name == str(os.getpid())

    def test_diagnostic_contexts(self):
        NDC.push("outer")
        NDC.push("inner")
        MDC.put("user", "alice")
        event = LoggingEvent("tests", "app", Level.INFO, "message")

        assert event.get_ndc() == "outer inner"
        assert event.get_mdc("user") == "alice"
        assert event.get_mdc("missing") == ""
        assert event.get_mdc_map() == {"user": "alice"}


class TestThrowableInformation:
    """Test exception information attached through the context."""

    def test_throwable_information(self):
        try:
            raise_error()
        except ValueError as e:
            event = LoggingEvent("tests", "app", Level.ERROR, "failed", context={"exception": e})

        info = event.get_throwable_information()
        assert info.exception_class == "ValueError"
        assert info.message == "boom"
        assert info.get_string_representation()[0] == "Traceback (most recent call last):"
        assert info.to_string().endswith("ValueError: boom")

    def test_no_exception(self):
        event = LoggingEvent("tests", "app", Level.ERROR, "failed", context={"exception": "not one"})
        assert event.get_throwable_information() is None


class TestLocationInfo:
    """Test caller location capture."""

    def test_na_fields(self):
        info = LocationInfo()
        assert info.file_name == LOCATION_INFO_NA
        assert info.line_number == LOCATION_INFO_NA
        assert info.full_info == "NA.NA(NA:NA)"

    def test_logger_call_site(self, hierarchy, make_memory_appender):
        appender = make_memory_appender()
        hierarchy.root.add_appender(appender)
        logger = hierarchy.get_logger("app")

        expected_line = sys._getframe().f_lineno + 1
        logger.info("located")

        info = appender.events[0].get_location_information()
        assert info.line_number == expected_line
        assert info.method_name == "test_logger_call_site"
        assert info.class_name == "TestLocationInfo"
        assert os.path.basename(info.file_name) == os.path.basename(__file__)

    def test_location_cached(self, hierarchy, make_memory_appender):
        appender = make_memory_appender()
        hierarchy.root.add_appender(appender)
        hierarchy.get_logger("app").info("located")

        event = appender.events[0]
        assert event.get_location_information() is event.get_location_information()

    def test_stacklevel(self, hierarchy, make_memory_appender):
        appender = make_memory_appender()
        hierarchy.root.add_appender(appender)

        expected_line = sys._getframe().f_lineno + 1
        log_through_helper(hierarchy.get_logger("app"))

        info = appender.events[0].get_location_information()
        assert info.method_name == "test_stacklevel"
        assert info.line_number == expected_line

    def test_generic_handler_frames_skipped(self, hierarchy, make_memory_appender):
        appender = make_memory_appender()
        hierarchy.root.add_appender(appender)
        hook = ErrorHook()

        expected_line = sys._getframe().f_lineno + 1
        hook.handle(hierarchy.get_logger("app"), "handled")

        info = appender.events[0].get_location_information()
        assert info.method_name == "test_generic_handler_frames_skipped"
        assert info.class_name == "TestLocationInfo"
        assert info.line_number == expected_line

    def test_exception_throw_site_wins(self, hierarchy, make_memory_appender):
        appender = make_memory_appender()
        hierarchy.root.add_appender(appender)

        try:
            raise_error()
        except ValueError as e:
            hierarchy.get_logger("app").error("failed", {"exception": e})

        info = appender.events[0].get_location_information()
        assert info.method_name == "raise_error"
        assert info.class_name == "main"
        assert info.line_number == raise_error.__code__.co_firstlineno + 1

    def test_explicit_location(self):
        location = LocationInfo("app.py", 12, "Service", "run")
        event = LoggingEvent("tests", "app", Level.INFO, "message", location=location)
        assert event.get_location_information().full_info == "Service.run(app.py:12)"

    def test_stack_walk_without_capture(self):
        event = LoggingEvent("tests", "app", Level.INFO, "message")
        expected_line = sys._getframe().f_lineno + 1
        info = event.get_location_information()
        assert info.method_name == "test_stack_walk_without_capture"
        assert info.line_number == expected_line


class TestEventSerialization:
    """Test pickling events for transport."""

    def test_round_trip(self):
        NDC.push("request")
        event = LoggingEvent("tests", "app.db", Level.WARNING, "slow {ms}", timestamp=10.0, context={"ms": 250})

        restored = pickle.loads(event.to_string())

        assert restored.logger_name == "app.db"
        assert restored.level == Level.WARNING
        assert restored.timestamp == 10.0
        assert restored.get_rendered_message() == "slow 250"
        assert restored.get_ndc() == "request"
        assert restored.logger is None

    def test_location_not_computed_is_na(self):
        event = LoggingEvent("tests", "app", Level.INFO, "message")
        restored = pickle.loads(pickle.dumps(event))
        assert restored.get_location_information() == LocationInfo()

    def test_object_message_replaced_by_rendering(self):
        event = LoggingEvent("tests", "app", Level.INFO, Point(1))
        restored = pickle.loads(pickle.dumps(event))
        assert isinstance(restored.message, str)

    def test_exception_survives_as_text(self):
        try:
            raise_error()
        except ValueError as e:
            event = LoggingEvent("tests", "app", Level.ERROR, "failed", context={"exception": e})

        restored = pickle.loads(pickle.dumps(event))
        info = restored.get_throwable_information()
        assert info.exception is None
        assert info.to_string().endswith("ValueError: boom")
