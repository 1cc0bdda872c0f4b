"""
Ozon Seller 客户端错误处理

两类错误互相独立：
- 传输/本地错误（网络中断、请求体无法序列化、响应体无法解析）以异常形式抛出
- 远端 API 错误（非 2xx + JSON 错误体）属于正常返回，由响应中的
  status_code / code / message 表达，不抛异常
"""
from typing import Any, Dict, Optional


class OzonClientError(Exception):
    """客户端基础异常类"""

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        code: int = 0,
        **kwargs
    ):
        self.message = message
        self.status_code = status_code
        self.code = code
        self.extra = kwargs
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """转换为结构化日志字段"""
        data = {
            "error_type": type(self).__name__,
            "message": self.message,
            "status_code": self.status_code,
            "code": self.code,
        }
        data.update(self.extra)
        return data


class OzonConnectionError(OzonClientError):
    """网络连接失败或超时（没有 HTTP 响应，status_code 为 0）"""

    def __init__(self, message: str, timeout: bool = False, **kwargs):
        super().__init__(message, status_code=0, timeout=timeout, **kwargs)
        self.timeout = timeout


class OzonSerializationError(OzonClientError):
    """请求参数无法编码为 JSON"""


class OzonDecodeError(OzonClientError):
    """响应体不是合法 JSON，或与响应结构不符"""

    def __init__(self, message: str, status_code: int, body: Optional[str] = None, **kwargs):
        super().__init__(message, status_code=status_code, **kwargs)
        self.body = body
