"""
Ozon Seller 客户端实用工具模块
"""

from .logger import get_logger, LogContext, setup_logging, setup_logging_from_settings
from .errors import OzonClientError, OzonConnectionError, OzonDecodeError, OzonSerializationError

__all__ = [
    "get_logger",
    "LogContext",
    "setup_logging",
    "setup_logging_from_settings",
    "OzonClientError",
    "OzonConnectionError",
    "OzonDecodeError",
    "OzonSerializationError",
]
