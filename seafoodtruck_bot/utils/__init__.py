"""
Utilities Module
================

Shared plumbing:
- logger: context-aware logging with a process-wide level
- config: configuration loaded once at startup
"""

from seafoodtruck_bot.utils.logger import Logger, configure_logging, logger
from seafoodtruck_bot.utils.config import Config, load_config

__all__ = ["Logger", "logger", "configure_logging", "Config", "load_config"]
