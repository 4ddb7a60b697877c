"""
Conversion pattern parsing

A conversion pattern mixes literal text with conversion specifiers of the
form ``%[-][min][.max]word[{option}]``, e.g. ``%d{%H:%M:%S} %-5p %c - %m%n``.
"""

import json
import re
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Dict, List, Optional, Type

from hierarchy_logger.core.logging_event import LoggingEvent

_SPECIFIER = re.compile(r"%(-)?(\d+)?(?:\.(\d+))?([a-zA-Z]+)(\{[^}]*\})?")

# Named date formats accepted as %date options
DATE_FORMATS = {
    "ISO8601": None,
    "ABSOLUTE": "%H:%M:%S",
    "DATE": "%d %b %Y %H:%M:%S",
}


class FormattingInfo:
    """Minimum/maximum width and alignment of one converted field."""

    __slots__ = ("min", "max", "left_align")

    def __init__(self, min_width: int = 0, max_width: Optional[int] = None, left_align: bool = False):
        self.min = min_width
        self.max = max_width
        self.left_align = left_align

    def apply(self, text: str) -> str:
        if self.max is not None and len(text) > self.max:
            text = text[len(text) - self.max:]
        if len(text) < self.min:
            text = text.ljust(self.min) if self.left_align else text.rjust(self.min)
        return text


class PatternConverter(ABC):
    """Converts one element of a logging event to text."""

    def __init__(self, formatting: Optional[FormattingInfo] = None, option: Optional[str] = None):
        self.formatting = formatting or FormattingInfo()
        self.option = option

    @abstractmethod
    def convert(self, event: LoggingEvent) -> str:
        pass

    def format(self, event: LoggingEvent) -> str:
        value = self.convert(event)
        return self.formatting.apply("" if value is None else str(value))


class LiteralConverter(PatternConverter):
    """Emits fixed text."""

    def __init__(self, literal: str):
        super().__init__()
        self.literal = literal

    def convert(self, event: LoggingEvent) -> str:
        return self.literal


class DateConverter(PatternConverter):
    def __init__(self, formatting=None, option=None):
        super().__init__(formatting, option)
        if option is None:
            self.date_format = None
        else:
            self.date_format = DATE_FORMATS.get(option.upper(), option)

    def convert(self, event: LoggingEvent) -> str:
        moment = datetime.fromtimestamp(event.timestamp).astimezone()
        if self.date_format is None:
            return moment.isoformat(timespec="seconds")
        return moment.strftime(self.date_format)


class LoggerConverter(PatternConverter):
    """Logger name, optionally shortened to ``{length}`` characters."""

    def convert(self, event: LoggingEvent) -> str:
        return shorten_name(event.logger_name, _length_option(self.option))


class ClassConverter(PatternConverter):
    def convert(self, event: LoggingEvent) -> str:
        return shorten_name(event.get_location_information().class_name, _length_option(self.option))


class FileConverter(PatternConverter):
    def convert(self, event: LoggingEvent) -> str:
        return event.get_location_information().file_name


class LineConverter(PatternConverter):
    def convert(self, event: LoggingEvent) -> str:
        return str(event.get_location_information().line_number)


class LocationConverter(PatternConverter):
    def convert(self, event: LoggingEvent) -> str:
        return event.get_location_information().full_info


class MethodConverter(PatternConverter):
    def convert(self, event: LoggingEvent) -> str:
        return event.get_location_information().method_name


class MessageConverter(PatternConverter):
    def convert(self, event: LoggingEvent) -> str:
        return event.get_rendered_message()


class NewLineConverter(PatternConverter):
    def convert(self, event: LoggingEvent) -> str:
        return "\n"


class LevelConverter(PatternConverter):
    def convert(self, event: LoggingEvent) -> str:
        return event.level.name


class RelativeConverter(PatternConverter):
    """Milliseconds elapsed since the process started."""

    def convert(self, event: LoggingEvent) -> str:
        return str(int(round(event.get_relative_time() * 1000)))


class ProcessConverter(PatternConverter):
    def convert(self, event: LoggingEvent) -> str:
        return event.thread_name


class MdcConverter(PatternConverter):
    def convert(self, event: LoggingEvent) -> str:
        if self.option:
            return _stringify(event.get_mdc(self.option))
        return ", ".join(f"{key}={_stringify(value)}" for key, value in event.get_mdc_map().items())


class NdcConverter(PatternConverter):
    def convert(self, event: LoggingEvent) -> str:
        return event.get_ndc()


class ThrowableConverter(PatternConverter):
    def convert(self, event: LoggingEvent) -> str:
        info = event.get_throwable_information()
        return info.to_string() if info is not None else ""


class ContextConverter(PatternConverter):
    """A single context value with ``{key}``, otherwise the whole context as JSON."""

    def convert(self, event: LoggingEvent) -> str:
        context = event.get_context()
        if self.option:
            return _stringify(context.get(self.option))
        data = {key: value for key, value in context.items() if key != "exception"}
        return json.dumps(data, default=str) if data else ""


CONVERTERS: Dict[str, Type[PatternConverter]] = {
    "c": LoggerConverter,
    "lo": LoggerConverter,
    "logger": LoggerConverter,
    "C": ClassConverter,
    "class": ClassConverter,
    "d": DateConverter,
    "date": DateConverter,
    "F": FileConverter,
    "file": FileConverter,
    "L": LineConverter,
    "line": LineConverter,
    "l": LocationConverter,
    "location": LocationConverter,
    "M": MethodConverter,
    "method": MethodConverter,
    "m": MessageConverter,
    "msg": MessageConverter,
    "message": MessageConverter,
    "n": NewLineConverter,
    "newline": NewLineConverter,
    "p": LevelConverter,
    "le": LevelConverter,
    "level": LevelConverter,
    "r": RelativeConverter,
    "relative": RelativeConverter,
    "t": ProcessConverter,
    "pid": ProcessConverter,
    "process": ProcessConverter,
    "X": MdcConverter,
    "mdc": MdcConverter,
    "x": NdcConverter,
    "ndc": NdcConverter,
    "ex": ThrowableConverter,
    "exception": ThrowableConverter,
    "throwable": ThrowableConverter,
    "context": ContextConverter,
}


class PatternParser:
    """
    Turns a conversion pattern into a list of converters.

    Unknown conversion words are reported through ``on_error`` and kept as
    literal text; parsing never fails.
    """

    def __init__(
        self,
        pattern: str,
        converters: Optional[Dict[str, Type[PatternConverter]]] = None,
        on_error: Optional[Callable[[str], None]] = None,
    ):
        self.pattern = pattern
        self.converters = converters if converters is not None else CONVERTERS
        self.on_error = on_error

    def parse(self) -> List[PatternConverter]:
        result: List[PatternConverter] = []
        literal: List[str] = []
        pattern = self.pattern
        i = 0

        while i < len(pattern):
            char = pattern[i]
            if char != "%":
                literal.append(char)
                i += 1
                continue

            if pattern.startswith("%%", i):
                literal.append("%")
                i += 2
                continue

            match = _SPECIFIER.match(pattern, i)
            if match is None:
                literal.append(char)
                i += 1
                continue

            left, min_width, max_width, word, option = match.groups()
            name = self._longest_known_prefix(word)
            if name is None:
                self._error(f"Invalid keyword '%{word}' at position {i}. Skipping.")
                literal.append(match.group(0))
                i = match.end()
                continue

            if literal:
                result.append(LiteralConverter("".join(literal)))
                literal = []

            formatting = FormattingInfo(
                int(min_width) if min_width else 0,
                int(max_width) if max_width is not None else None,
                left is not None,
            )
            if name == word:
                converter_option = option[1:-1] if option else None
                i = match.end()
            else:
                # "%msgX" -> message converter followed by literal "X"
                converter_option = None
                i = match.start(4) + len(name)
            result.append(self.converters[name](formatting, converter_option))

        if literal:
            result.append(LiteralConverter("".join(literal)))
        return result

    def _longest_known_prefix(self, word: str) -> Optional[str]:
        for end in range(len(word), 0, -1):
            if word[:end] in self.converters:
                return word[:end]
        return None

    def _error(self, message: str) -> None:
        if self.on_error is not None:
            self.on_error(message)


def shorten_name(name: str, length: Optional[int]) -> str:
    """
    Shorten a dotted name to about ``length`` characters.

    Leading segments are abbreviated to their first letter, left to right,
    until the name fits; the last segment is never abbreviated. A length of
    0 keeps only the last segment.

    Example:
        shorten_name("org.apache.foo.Bar", 12)  # "o.a.foo.Bar"
    """
    if length is None or length < 0:
        return name
    name = name.strip(".")
    parts = name.split(".")
    if length == 0:
        return parts[-1]
    if len(name) <= length:
        return name

    total = len(name)
    for index in range(len(parts) - 1):
        if total <= length:
            break
        part = parts[index]
        if len(part) > 1:
            total -= len(part) - 1
            parts[index] = part[0]
    return ".".join(parts)


def _length_option(option: Optional[str]) -> Optional[int]:
    if option is not None and option.strip().isdigit():
        return int(option.strip())
    return None


def _stringify(value) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(value, default=str)
    return str(value)
