"""Tests for layouts"""

import json
import pickle
from datetime import datetime

import pytest

from hierarchy_logger import Level, LoggingEvent, LoggerWarning, MDC, NDC
from hierarchy_logger.core.location_info import LocationInfo
from hierarchy_logger.layouts import JsonLayout, PatternLayout, SerializedLayout, SimpleLayout

LOCATION = LocationInfo("/srv/app/service.py", 42, "Service", "run")


def make_event(message="Hello", level=Level.INFO, logger="app.service", context=None, location=LOCATION, timestamp=None):
    return LoggingEvent("tests", logger, level, message, timestamp=timestamp, context=context, location=location)


class TestSimpleLayout:
    """Test the minimal one-line layout."""

    def test_format(self):
        assert SimpleLayout().format(make_event("Started")) == "INFO - Started\n"

    def test_none_message(self):
        assert SimpleLayout().format(make_event(None, Level.ERROR)) == "ERROR - \n"

    def test_header_and_footer_options(self):
        layout = SimpleLayout()
        layout.configure({"header": "BEGIN\n", "footer": "END\n"})
        assert layout.get_header() == "BEGIN\n"
        assert layout.get_footer() == "END\n"


class TestPatternLayout:
    """Test conversion pattern formatting."""

    def test_default_pattern(self):
        event = make_event(timestamp=0)
        expected_date = datetime.fromtimestamp(0).astimezone().isoformat(timespec="seconds")
        assert PatternLayout().format(event) == f"{expected_date} INFO  app.service Hello\n"

    def test_location_converters(self):
        layout = PatternLayout("%F:%L %C.%M %l")
        assert layout.format(make_event()) == "/srv/app/service.py:42 Service.run Service.run(/srv/app/service.py:42)"

    def test_long_and_short_names(self):
        layout = PatternLayout("%p|%le|%level|%c|%lo|%logger|%m|%msg|%message")
        assert layout.format(make_event("x")) == "INFO|INFO|INFO|app.service|app.service|app.service|x|x|x"

    def test_padding_and_truncation(self):
        layout = PatternLayout("[%-7p][%7p][%.3c]")
        assert layout.format(make_event(level=Level.WARNING)) == "[WARNING][WARNING][ice]"
        assert layout.format(make_event(level=Level.INFO)) == "[INFO   ][   INFO][ice]"

    def test_logger_name_shortening(self):
        layout = PatternLayout("%c{12}")
        assert layout.format(make_event(logger="org.apache.foo.Bar")) == "o.a.foo.Bar"

    def test_date_format_option(self):
        layout = PatternLayout("%d{%Y}")
        assert layout.format(make_event(timestamp=0)) == datetime.fromtimestamp(0).astimezone().strftime("%Y")

    def test_mdc_ndc_and_context(self):
        MDC.put("user", "alice")
        NDC.push("req-1")
        layout = PatternLayout("%X{user} %x %context{order}")
        assert layout.format(make_event(context={"order": 7})) == "alice req-1 7"

    def test_exception_converter(self):
        try:
            raise RuntimeError("bad")
        except RuntimeError as e:
            event = make_event(context={"exception": e})
        assert PatternLayout("%ex").format(event).endswith("RuntimeError: bad")

    def test_invalid_keyword_warns_and_stays_literal(self):
        layout = PatternLayout("%q %m")
        with pytest.warns(LoggerWarning, match=r"Invalid keyword '%q'"):
            assert layout.format(make_event("hi")) == "%q hi"

    def test_conversion_pattern_option(self):
        layout = PatternLayout()
        layout.configure({"conversionPattern": "%p: %m"})
        assert layout.format(make_event("hi")) == "INFO: hi"


class TestJsonLayout:
    """Test one-object-per-line JSON output."""

    def test_minimal_event(self):
        event = make_event("Hello", location=LocationInfo(), timestamp=0)
        output = JsonLayout().format(event)

        assert output.endswith("\n")
        assert output.count("\n") == 1
        data = json.loads(output)
        assert set(data) == {"date", "level", "name", "message"}
        assert data["level"] == "INFO"
        assert data["name"] == "app.service"
        assert data["message"] == "Hello"
        assert data["date"] == datetime.fromtimestamp(0).astimezone().strftime("%Y-%m-%dT%H:%M:%S%z")

    def test_location_and_context(self):
        data = json.loads(JsonLayout().format(make_event(context={"user": "alice", "empty": None})))
        assert data["file"] == "/srv/app/service.py"
        assert data["line"] == 42
        assert data["context"] == {"user": "alice", "empty": None}

    def test_exception_key_removed_from_context(self):
        try:
            raise KeyError("id")
        except KeyError as e:
            event = make_event(context={"exception": e})
        data = json.loads(JsonLayout().format(event))

        assert "context" not in data
        assert "KeyError" in data["trace"]

    def test_logger_extended_context(self, hierarchy):
        logger = hierarchy.get_logger("app")
        logger.set_context("service", "billing")
        logger.set_context("request", lambda: "r-1")
        event = LoggingEvent("tests", logger, Level.INFO, "Hello", context={"service": "override"}, location=LocationInfo())

        data = json.loads(JsonLayout().format(event))
        assert data["context"] == {"service": "override", "request": "r-1"}

    def test_na_message_and_logger_kept(self):
        data = json.loads(JsonLayout().format(make_event("NA", logger="NA", location=LocationInfo())))
        assert data["message"] == "NA"
        assert data["name"] == "NA"
        assert "file" not in data
        assert "line" not in data

    def test_compact_separators(self):
        output = JsonLayout().format(make_event(location=LocationInfo()))
        assert ", " not in output
        assert '": ' not in output

    def test_ensure_ascii_option(self):
        layout = JsonLayout()
        assert "é" in layout.format(make_event("café"))
        layout.configure({"ensureAscii": "true"})
        assert "\\u00e9" in layout.format(make_event("café"))


class TestSerializedLayout:
    """Test pickled event output."""

    def test_round_trip(self):
        output = SerializedLayout().format(make_event("payload", location=None))
        restored = pickle.loads(output)

        assert isinstance(output, bytes)
        assert restored.get_rendered_message() == "payload"
        assert restored.get_location_information() == LocationInfo()

    def test_location_info_option(self):
        layout = SerializedLayout()
        layout.configure({"locationInfo": "true"})
        restored = pickle.loads(layout.format(make_event()))
        assert restored.get_location_information() == LOCATION
