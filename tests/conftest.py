"""Shared fixtures"""

import pytest

from hierarchy_logger import Hierarchy, MDC, NDC
from hierarchy_logger.appenders.base_appender import Appender
from hierarchy_logger.core.outcome import Outcome


class MemoryAppender(Appender):
    """Collects appended events."""

    requires_layout = False

    def __init__(self, name: str = "memory", **kwargs):
        super().__init__(name, **kwargs)
        self.events = []

    def append(self, event):
        self.events.append(event)
        return Outcome.success()

    @property
    def messages(self):
        return [event.get_rendered_message() for event in self.events]


@pytest.fixture
def make_memory_appender():
    def factory(name="memory", **kwargs):
        appender = MemoryAppender(name, **kwargs)
        appender.activate()
        return appender
    return factory


@pytest.fixture
def hierarchy():
    hierarchy = Hierarchy()
    yield hierarchy
    hierarchy.shutdown()


@pytest.fixture(autouse=True)
def clean_diagnostic_contexts():
    yield
    MDC.clear()
    NDC.clear()
