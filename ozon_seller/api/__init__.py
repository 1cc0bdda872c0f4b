"""Ozon API 客户端模块"""

from .client import OzonAPIClient
from .mock import MockHttpHandler, new_mock_client

__all__ = [
    "OzonAPIClient",
    "MockHttpHandler",
    "new_mock_client",
]
