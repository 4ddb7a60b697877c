"""Tests for levels and option conversion"""

import pytest

from hierarchy_logger import Level, LoggerWarning
from hierarchy_logger.core.options import Configurable, OptionConverter, to_snake_case


class TestLevel:
    """Test level ordering and conversion."""

    def test_levels_are_ordered(self):
        assert Level.ALL < Level.TRACE < Level.DEBUG < Level.INFO < Level.NOTICE
        assert Level.NOTICE < Level.WARNING < Level.ERROR < Level.CRITICAL
        assert Level.CRITICAL < Level.ALERT < Level.EMERGENCY < Level.OFF

    def test_str_is_name(self):
        assert str(Level.INFO) == "INFO"

    def test_syslog_equivalent(self):
        assert Level.EMERGENCY.syslog_equivalent == 0
        assert Level.WARNING.syslog_equivalent == 4
        assert Level.DEBUG.syslog_equivalent == 7

    def test_is_greater_or_equal(self):
        assert Level.ERROR.is_greater_or_equal(Level.WARNING)
        assert Level.ERROR.is_greater_or_equal(Level.ERROR)
        assert not Level.DEBUG.is_greater_or_equal(Level.INFO)

    def test_to_level_from_name(self):
        assert Level.to_level("debug") == Level.DEBUG
        assert Level.to_level(" Info ") == Level.INFO
        assert Level.to_level("WARN") == Level.WARNING

    def test_to_level_from_int(self):
        assert Level.to_level(40000) == Level.ERROR
        assert Level.to_level(12345) is None

    def test_to_level_default(self):
        assert Level.to_level("FOO") is None
        assert Level.to_level("FOO", Level.INFO) == Level.INFO
        assert Level.to_level(True, Level.INFO) == Level.INFO
        assert Level.to_level(None) is None


class TestOptionConverter:
    """Test raw option value conversion."""

    def test_to_snake_case(self):
        assert to_snake_case("remoteHost") == "remote_host"
        assert to_snake_case("maxBackupIndex") == "max_backup_index"
        assert to_snake_case("file") == "file"

    @pytest.mark.parametrize("value", ["true", "1", "on", "YES", True, 1])
    def test_true_values(self, value):
        assert OptionConverter.to_boolean(value) is True

    @pytest.mark.parametrize("value", ["false", "0", "off", "no", False, 0])
    def test_false_values(self, value):
        assert OptionConverter.to_boolean(value) is False

    def test_invalid_boolean(self):
        with pytest.raises(ValueError):
            OptionConverter.to_boolean("maybe")

    def test_file_size(self):
        assert OptionConverter.to_file_size("100KB") == 100 * 1024
        assert OptionConverter.to_file_size("10mb") == 10 * 1024 * 1024
        assert OptionConverter.to_file_size("1GB") == 1024 ** 3
        assert OptionConverter.to_file_size(2048) == 2048
        with pytest.raises(ValueError):
            OptionConverter.to_file_size("-1MB")

    def test_positive_integer(self):
        assert OptionConverter.to_positive_integer("5") == 5
        with pytest.raises(ValueError):
            OptionConverter.to_positive_integer(0)


class Component(Configurable):
    def __init__(self):
        self.enabled = False
        self.remote_host = "localhost"

    def set_enabled(self, value):
        self._set_boolean("enabled", value)

    def set_remote_host(self, value):
        self._set_string("remote_host", value)


class TestConfigurable:
    """Test option surface of configurable components."""

    def test_camel_case_options(self):
        component = Component()
        component.configure({"enabled": "true", "remoteHost": "logs.local"})
        assert component.enabled is True
        assert component.remote_host == "logs.local"

    def test_unknown_option_warns(self):
        component = Component()
        with pytest.warns(LoggerWarning, match=r"Unknown option \[fooParameter\] specified on \[Component\]"):
            component.configure({"fooParameter": 1})

    def test_invalid_value_keeps_previous(self):
        component = Component()
        with pytest.warns(LoggerWarning, match="Invalid value given for 'enabled' property"):
            component.configure({"enabled": "perhaps"})
        assert component.enabled is False

    def test_options_must_be_a_mapping(self):
        component = Component()
        with pytest.warns(LoggerWarning, match=r"Invalid options \[\['enabled'\]\] specified on \[Component\]. Skipping."):
            component.configure(["enabled"])
        assert component.enabled is False
