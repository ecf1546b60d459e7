"""
Core configuration for the support package.

This package provides logging configuration and the settings model shared by
the other support modules.
"""

from hypervel_support.core.config import SupportSettings, get_settings
from hypervel_support.core.logging_config import get_logger, setup_logging

__all__ = ["SupportSettings", "get_logger", "get_settings", "setup_logging"]
