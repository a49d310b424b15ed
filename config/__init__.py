"""
Configuration package for the RouteLens console.
"""

from config.parser import ConsoleConfig, ConfigurationError

__all__ = ['ConsoleConfig', 'ConfigurationError']
