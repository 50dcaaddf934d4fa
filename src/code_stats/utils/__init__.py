"""
Utility modules for code_stats
"""

from .logger import get_logger, setup_logger, LogContext, log_execution_time
from .config import AppConfig, CodeStatsConfig, Config

__all__ = [
    "get_logger",
    "setup_logger",
    "LogContext",
    "log_execution_time",
    "AppConfig",
    "CodeStatsConfig",
    "Config",
]
