"""
Configuration for SleekKit.
"""

from .parser import SleekConfig, parse_config, load_config, validate_config

__all__ = ["SleekConfig", "parse_config", "load_config", "validate_config"]
