"""
Configuration module

Configures a Hierarchy from mappings, INI/properties files or JSON files.
"""

from hierarchy_logger.config.configurator import Configurator, default_configuration
from hierarchy_logger.config.ini_adapter import IniConfigAdapter

__all__ = ["Configurator", "IniConfigAdapter", "default_configuration"]
