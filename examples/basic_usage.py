#!/usr/bin/env python3
"""Basic usage example"""

from hierarchy_logger import Configurator, Hierarchy, Level, LoggerBuilder, MDC, NDC
from hierarchy_logger.layouts import PatternLayout


def main():
    # Build a hierarchy with the builder pattern
    hierarchy = (LoggerBuilder()
        .with_root_level(Level.DEBUG)
        .with_console(layout=PatternLayout("%d{%H:%M:%S} %-5p %c [%X{user}] %x - %m%n"))
        .with_file("logs/example.log", rotating=True)
        .with_logger("example.db", level=Level.WARNING)
        .build())

    logger = hierarchy.get_logger("example")

    # Log messages
    logger.trace("This is trace")
    logger.debug("This is debug")
    logger.info("Application {name} started", {"name": "example"})
    logger.warning("This is warning")

    MDC.put("user", "alice")
    NDC.push("request-42")
    try:
        1 / 0
    except ZeroDivisionError as e:
        logger.error("Calculation failed", {"exception": e})
    finally:
        NDC.pop()
        MDC.remove("user")

    # Below the example.db level, not logged
    hierarchy.get_logger("example.db").info("Connected")
    hierarchy.get_logger("example.db").critical("Connection lost")

    hierarchy.shutdown()

    # Same setup from a configuration mapping
    hierarchy = Hierarchy()
    Configurator().configure(hierarchy, {
        "rootLogger": {"level": "INFO", "appenders": ["console"]},
        "appenders": {
            "console": {
                "class": "console",
                "layout": {"class": "json"},
                "params": {"target": "stdout"},
            },
        },
    })
    hierarchy.get_logger("example").info("Configured from a mapping")
    hierarchy.shutdown()


if __name__ == "__main__":
    main()
