"""
外部 API 计时工具

每次出站调用写一行耗时到 external_api_timing 日志器。
文件输出需显式调用 configure_external_api_timing，不读取全局配置。
"""

import logging
import os
import time
from typing import Optional

TIMING_LOGGER_NAME = "external_api_timing"

_timing_logger = logging.getLogger(TIMING_LOGGER_NAME)
_timing_logger.setLevel(logging.INFO)


def configure_external_api_timing(log_file: str) -> logging.Handler:
    """
    将计时日志额外写入文件（同一路径只添加一次 handler）

    Args:
        log_file: 日志文件路径，目录不存在时自动创建

    Returns:
        对应的文件 handler
    """
    path = os.path.abspath(log_file)
    for handler in _timing_logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == path:
            return handler

    os.makedirs(os.path.dirname(path), exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s | %(message)s", datefmt="%Y-%m-%d %H:%M:%S"))
    _timing_logger.addHandler(handler)
    return handler


def log_external_api_timing(
    service: str,
    method: str,
    endpoint: str,
    elapsed_ms: float,
    extra_info: Optional[str] = None
) -> None:
    """记录一次外部 API 调用耗时，格式：服务 | 方法 端点 | 耗时 | 额外信息"""
    msg = f"{service} | {method} {endpoint} | {elapsed_ms:.1f}ms"
    if extra_info:
        msg += f" | {extra_info}"
    _timing_logger.info(msg)


class ExternalAPITimer:
    """
    外部 API 计时器

    用法:
        timer = ExternalAPITimer("OZON", "POST", "/v3/finance/transaction/list", client="123")
        timer.start()
        response = await client.request(...)
        timer.stop(error=None if response.is_success else str(response.status_code))
    """

    def __init__(self, service: str, method: str, endpoint: str, **extra_kwargs):
        self.service = service
        self.method = method
        self.endpoint = endpoint
        self.extra_kwargs = extra_kwargs
        self._start_time: Optional[float] = None
        self._elapsed_ms: Optional[float] = None

    def start(self) -> None:
        self._start_time = time.perf_counter()

    def stop(self, error: Optional[str] = None) -> float:
        """停止计时并记录日志，返回耗时（毫秒）"""
        if self._start_time is None:
            raise RuntimeError("Timer not started")

        self._elapsed_ms = (time.perf_counter() - self._start_time) * 1000

        extra_parts = [f"{key}={value}" for key, value in self.extra_kwargs.items()]
        if error:
            extra_parts.append(f"ERROR={error}")

        log_external_api_timing(
            self.service,
            self.method,
            self.endpoint,
            self._elapsed_ms,
            " | ".join(extra_parts) or None,
        )
        return self._elapsed_ms

    @property
    def elapsed_ms(self) -> Optional[float]:
        """耗时（毫秒），未停止时为 None"""
        return self._elapsed_ms

    def __enter__(self) -> "ExternalAPITimer":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop(error=exc_type.__name__ if exc_type is not None else None)
