"""
Ozon Seller 客户端核心模块
"""

__version__ = "1.0.0"
