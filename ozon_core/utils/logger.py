# mypy: disable-error-code="no-untyped-def, assignment, var-annotated"
"""
Ozon Seller 客户端日志系统
- JSON 格式输出
- 常用字段：ts, level, trace_id, client_id, action, latency_ms, result, err
- 凭证与 PII 自动脱敏
"""
import logging
import re
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from contextvars import ContextVar

import structlog
from structlog.processors import JSONRenderer, TimeStamper, add_log_level

from ozon_core.config import Settings, get_settings

# Context variables for request tracking
trace_id_var: ContextVar[Optional[str]] = ContextVar("trace_id", default=None)
client_id_var: ContextVar[Optional[str]] = ContextVar("client_id", default=None)


class SensitiveDataMaskingProcessor:
    """凭证与 PII 数据脱敏处理器"""

    # 脱敏规则
    PATTERNS = {
        # Api-Key 请求头
        "api_key_header": (re.compile(r"(Api-Key[\"']?\s*[:=]\s*[\"']?)([^\"'\s,}]+)", re.IGNORECASE), r"\1***MASKED***"),
        # Token/密钥
        "token": (re.compile(r"(token|api_key|secret|password)[\"']?\s*[:=]\s*[\"']?([^\"'\s,}]+)"), r"\1=***MASKED***"),
        # 电话号码：保留前3位和后3位
        "phone": (re.compile(r"(\+\d{1,3}\s?\d{3})\d{4,8}(\d{3})"), r"\1****\2"),
        # 邮箱：保留首字母和域名
        "email": (re.compile(r"([a-zA-Z0-9])[a-zA-Z0-9._-]*@([a-zA-Z0-9.-]+\.[a-zA-Z]{2,})"), r"\1***@\2"),
    }

    # 这些键的值整体替换
    SENSITIVE_KEYS = {"api_key", "api-key", "apikey", "authorization"}

    def __call__(self, logger, method_name, event_dict):
        """处理日志事件，脱敏敏感数据"""
        return self._mask_dict(event_dict)

    def _mask_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """递归脱敏字典中的敏感数据"""
        if not isinstance(data, dict):
            return data

        masked_data = {}
        for key, value in data.items():
            if isinstance(key, str) and key.lower() in self.SENSITIVE_KEYS:
                masked_data[key] = "***MASKED***"
            elif isinstance(value, str):
                masked_data[key] = self._mask_string(value)
            elif isinstance(value, dict):
                masked_data[key] = self._mask_dict(value)
            elif isinstance(value, list):
                masked_data[key] = [
                    (
                        self._mask_dict(item)
                        if isinstance(item, dict)
                        else self._mask_string(item) if isinstance(item, str) else item
                    )
                    for item in value
                ]
            else:
                masked_data[key] = value
        return masked_data

    def _mask_string(self, text: str) -> str:
        """脱敏字符串中的敏感数据"""
        for pattern, replacement in self.PATTERNS.values():
            text = pattern.sub(replacement, text)
        return text


class OzonSellerProcessor:
    """添加客户端通用字段"""

    def __call__(self, logger, method_name, event_dict):
        # 添加时间戳
        event_dict["ts"] = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")

        # 添加上下文变量
        if trace_id := trace_id_var.get():
            event_dict["trace_id"] = trace_id

        if client_id := client_id_var.get():
            event_dict["client_id"] = client_id

        # 重命名标准字段
        if "event" in event_dict:
            event_dict["action"] = event_dict.pop("event")

        if "exception" in event_dict:
            event_dict["err"] = str(event_dict.pop("exception"))

        return event_dict


def setup_logging(log_level: str = "INFO", log_format: str = "json", enable_masking: bool = True) -> None:
    """配置日志系统

    - structlog 的日志按 JSON 或控制台格式输出到 stdout
    - 标准 logging 的日志同样输出到 stdout
    """
    level = getattr(logging, log_level.upper())

    # 配置 structlog 处理器链
    processors = [
        TimeStamper(fmt="iso"),
        add_log_level,
        OzonSellerProcessor(),
    ]

    if enable_masking:
        processors.append(SensitiveDataMaskingProcessor())

    # 根据格式选择渲染器
    if log_format == "json":
        processors.append(JSONRenderer(ensure_ascii=False))
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # 移除已有的 handlers，避免重复
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(level)

    if log_format == "json":
        # structlog 已渲染为 JSON，这里只输出消息本身
        formatter = logging.Formatter("%(message)s")
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
    stdout_handler.setFormatter(formatter)
    root_logger.addHandler(stdout_handler)

    for module in ("ozon_core", "ozon_seller"):
        module_logger = logging.getLogger(module)
        module_logger.setLevel(level)
        module_logger.propagate = True

    # 降低第三方库的日志级别，避免噪音
    for logger_name in ("httpx", "httpcore", "asyncio"):
        logging.getLogger(logger_name).setLevel(logging.WARNING)


def setup_logging_from_settings(settings: Optional[Settings] = None) -> None:
    """按配置（OZON__LOG_LEVEL / OZON__LOG_FORMAT）初始化日志"""
    settings = settings or get_settings()
    setup_logging(log_level=settings.log_level, log_format=settings.log_format)


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """获取日志记录器"""
    return structlog.get_logger(name)


# 日志上下文管理器
class LogContext:
    """日志上下文管理器，用于设置请求级别的上下文

    绑定的 trace_id 也会作为 X-Correlation-Id 随请求发送。
    """

    def __init__(self, trace_id: Optional[str] = None, client_id: Optional[str] = None):
        self.trace_id = trace_id
        self.client_id = client_id
        self._tokens = []

    def __enter__(self):
        if self.trace_id:
            self._tokens.append(trace_id_var.set(self.trace_id))
        if self.client_id:
            self._tokens.append(client_id_var.set(self.client_id))
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        for token in reversed(self._tokens):
            token.var.reset(token)
        self._tokens = []
