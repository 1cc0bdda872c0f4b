"""
Ozon Seller API 客户端
"""

from .api import OzonAPIClient

__version__ = "1.0.0"

__all__ = ["OzonAPIClient"]
