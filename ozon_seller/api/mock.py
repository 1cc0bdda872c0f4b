"""
测试用 Mock Transport

返回固定的状态码、响应体与响应头，不产生网络请求。
"""

from typing import Dict, List, Optional

import httpx

from .client import OzonAPIClient


class MockHttpHandler:
    """
    httpx.MockTransport 的处理函数

    Args:
        status_code: 返回的 HTTP 状态码
        body: 返回的响应体（原样返回）
        headers: 返回的响应头
        expected_headers: 期望调用方发送的请求头，不匹配时抛出 AssertionError
    """

    def __init__(
        self,
        status_code: int,
        body: str,
        headers: Optional[Dict[str, str]] = None,
        expected_headers: Optional[Dict[str, str]] = None,
    ):
        self.status_code = status_code
        self.body = body
        self.headers = headers or {}
        self.expected_headers = expected_headers or {}
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        for key, value in self.expected_headers.items():
            actual = request.headers.get(key)
            if actual != value:
                raise AssertionError(f"header {key}: got {actual!r}, expected {value!r}")

        return httpx.Response(
            self.status_code,
            content=self.body.encode("utf-8"),
            headers={"Content-Type": "application/json", **self.headers},
            request=request,
        )

    @property
    def last_request(self) -> Optional[httpx.Request]:
        """最后一次收到的请求"""
        return self.requests[-1] if self.requests else None


def new_mock_client(
    handler: MockHttpHandler,
    client_id: str = "my-client-id",
    api_key: str = "my-api-key",
) -> OzonAPIClient:
    """创建使用 MockTransport 的客户端"""
    return OzonAPIClient(
        client_id=client_id,
        api_key=api_key,
        transport=httpx.MockTransport(handler),
    )
