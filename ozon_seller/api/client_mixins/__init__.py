"""
Ozon API 客户端 Mixins

将 OzonAPIClient 拆分为多个功能模块，便于维护和测试。
"""

from .base import OzonAPIClientBase
from .finance import FinanceMixin
from .reports import ReportsMixin
from .returns import ReturnsMixin

__all__ = [
    "OzonAPIClientBase",
    "FinanceMixin",
    "ReturnsMixin",
    "ReportsMixin",
]
