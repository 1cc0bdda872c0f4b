"""
Ozon API 客户端基础类
包含初始化、连接管理、核心请求方法
"""

import json as json_module
import uuid
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from ozon_core.config import Settings, get_settings
from ozon_core.utils.errors import OzonConnectionError, OzonDecodeError, OzonSerializationError
from ozon_core.utils.external_api_timing import ExternalAPITimer, configure_external_api_timing
from ozon_core.utils.logger import get_logger, trace_id_var

from ...models.common import CommonResponse, OzonModel, Response

logger = get_logger(__name__)

ResponseT = TypeVar("ResponseT", bound=OzonModel)

RequestParams = Union[BaseModel, Mapping[str, Any], None]


def truncate_for_log(obj: Any, max_len: int = 5000) -> Optional[str]:
    """截断对象用于日志记录（避免日志过大）"""
    if obj is None:
        return None
    try:
        s = json_module.dumps(obj, ensure_ascii=False)
    except (TypeError, ValueError):
        s = str(obj)
    if len(s) > max_len:
        return s[:max_len] + f"... [truncated, total {len(s)} chars]"
    return s


def encode_params(params: RequestParams) -> Optional[Dict[str, Any]]:
    """
    将请求参数编码为可 JSON 序列化的字典（字段名使用线上拼写）

    Raises:
        OzonSerializationError: 参数无法编码
    """
    if params is None:
        return None
    try:
        if isinstance(params, BaseModel):
            payload = params.model_dump(mode="json", by_alias=True, exclude_none=True)
        else:
            payload = to_jsonable_python(dict(params), by_alias=True, exclude_none=True)
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise OzonSerializationError(f"Failed to encode request params: {e}") from e
    return payload


def build_query(payload: Optional[Dict[str, Any]]) -> Optional[List[Tuple[str, Any]]]:
    """GET 请求的参数放入查询串：列表重复键名，None 忽略"""
    if payload is None:
        return None
    query: List[Tuple[str, Any]] = []
    for key, value in payload.items():
        if value is None:
            continue
        if isinstance(value, dict):
            raise OzonSerializationError(f"Nested object '{key}' cannot be encoded into a query string")
        values = value if isinstance(value, list) else [value]
        for item in values:
            if isinstance(item, bool):
                item = "true" if item else "false"
            query.append((key, item))
    return query


class OzonAPIClientBase:
    """Ozon API 客户端基础类"""

    BASE_URL = "https://api-seller.ozon.ru"
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        client_id: str,
        api_key: str,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timing_log_file: Optional[str] = None,
    ):
        """
        初始化 Ozon API 客户端

        Args:
            client_id: Ozon 客户端 ID
            api_key: Ozon API 密钥
            base_url: API 地址（默认 https://api-seller.ozon.ru）
            timeout: 默认超时（秒），单次调用可通过 timeout 参数覆盖
            transport: 自定义 httpx transport（测试时传入 httpx.MockTransport）
            timing_log_file: 调用耗时日志文件，None 表示只写入 external_api_timing 日志器
        """
        self.client_id = client_id
        self.api_key = api_key
        self.base_url = (base_url or self.BASE_URL).rstrip("/")

        if timing_log_file:
            configure_external_api_timing(timing_log_file)

        # HTTP 客户端配置，凭证作为默认请求头注入每次调用
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Client-Id": self.client_id, "Api-Key": self.api_key, "Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs):
        """根据配置（OZON__ 环境变量 / .env）创建客户端"""
        settings = settings or get_settings()
        if not settings.has_credentials:
            logger.warning("OZON credentials are not configured", env_prefix="OZON__")
        kwargs.setdefault("timing_log_file", settings.timing_log_file)
        return cls(
            client_id=settings.client_id,
            api_key=settings.api_key,
            base_url=settings.base_url,
            timeout=settings.timeout,
            **kwargs,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """关闭客户端连接"""
        await self.client.aclose()

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: RequestParams = None,
        destination: Type[ResponseT] = Response,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> Tuple[Response, ResponseT]:
        """
        发送一次 API 请求（不重试、不限流）

        Args:
            method: HTTP 方法
            endpoint: API 端点
            params: 请求参数（GET 放入查询串，其余方法作为 JSON 请求体）
            destination: 响应体解析到的模型类型
            headers: 额外请求头，覆盖默认值
            timeout: 本次调用的超时（秒），None 表示使用客户端默认值

        Returns:
            (传输结果信封, 解析后的响应对象)
            非 2xx 且错误体为 JSON 时正常返回，响应对象为空模型，
            错误码与错误信息在信封中

        Raises:
            OzonSerializationError: 请求参数无法编码
            OzonConnectionError: 网络错误或超时
            OzonDecodeError: 响应体不是合法 JSON 或与响应模型不符
        """
        method = method.upper()
        payload = encode_params(params)

        if method == "GET":
            body, query = None, build_query(payload)
        else:
            body, query = payload, None

        # 生成请求ID
        request_id = str(uuid.uuid4())

        request_headers = {"X-Request-Id": request_id}
        if trace_id := trace_id_var.get():
            request_headers["X-Correlation-Id"] = trace_id
        if headers:
            request_headers.update(headers)

        # 记录出站请求（含请求参数）
        logger.info(
            "OZON API request",
            direction="outbound",
            method=method,
            endpoint=endpoint,
            url=f"{self.base_url}{endpoint}",
            request_id=request_id,
            request_body=truncate_for_log(body),
            query_params=truncate_for_log(query) if query else None,
        )

        timer = ExternalAPITimer("OZON", method, endpoint, client=self.client_id)
        timer.start()

        try:
            response = await self.client.request(
                method=method,
                url=endpoint,
                json=body,
                params=query,
                headers=request_headers,
                timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
            )
        except httpx.TransportError as e:
            api_elapsed_ms = timer.stop(error=type(e).__name__)
            is_timeout = isinstance(e, httpx.TimeoutException)

            logger.error(
                "OZON API request failed",
                direction="outbound",
                method=method,
                endpoint=endpoint,
                latency_ms=int(api_elapsed_ms),
                request_id=request_id,
                request_body=truncate_for_log(body),
                error=str(e),
                error_type=type(e).__name__,
                result="error",
            )
            message = "Request timed out" if is_timeout else f"Connection error: {e}"
            raise OzonConnectionError(message, timeout=is_timeout, method=method, endpoint=endpoint) from e

        api_elapsed_ms = timer.stop(error=None if response.is_success else str(response.status_code))
        result, resp = self._decode_response(response, destination, endpoint, request_id)

        log_fields = dict(
            direction="outbound",
            method=method,
            endpoint=endpoint,
            status_code=response.status_code,
            latency_ms=int(api_elapsed_ms),
            request_id=request_id,
        )
        if response.is_success:
            logger.info(
                "OZON API response",
                response_body=truncate_for_log(response.text),
                result="success",
                **log_fields,
            )
        else:
            # API 错误属于正常返回，由调用方检查 status_code
            logger.warning(
                "OZON API error response",
                request_body=truncate_for_log(body),
                error_code=result.code,
                error_message=result.message,
                result="error",
                **log_fields,
            )

        return result, resp

    def _decode_response(
        self,
        response: httpx.Response,
        destination: Type[ResponseT],
        endpoint: str,
        request_id: str,
    ) -> Tuple[Response, ResponseT]:
        """解析响应体，并填充信封字段"""
        result = Response(status_code=response.status_code)

        if not response.content.strip():
            # 空响应体：错误信息使用 HTTP 状态描述
            if not response.is_success:
                result.message = response.reason_phrase
            return result, destination()

        try:
            data = response.json()
        except ValueError as e:
            logger.error(
                "OZON API response decode error",
                direction="outbound",
                endpoint=endpoint,
                request_id=request_id,
                status_code=response.status_code,
                content_type=response.headers.get("content-type"),
                content_length=len(response.content),
            )
            raise OzonDecodeError(
                "OZON API returned a body that is not valid JSON",
                status_code=response.status_code,
                body=response.text[:5000],
                endpoint=endpoint,
            ) from e

        if not isinstance(data, dict):
            raise OzonDecodeError(
                f"OZON API returned unexpected JSON payload of type {type(data).__name__}",
                status_code=response.status_code,
                body=response.text[:5000],
                endpoint=endpoint,
            )

        # status_code 只由 HTTP 状态决定
        data.pop("status_code", None)

        if not response.is_success:
            result = Response.from_error_body(response.status_code, data)
            if not result.message:
                result.message = response.reason_phrase
            return result, destination()

        try:
            resp = destination.model_validate(data)
        except ValidationError as e:
            logger.error(
                "OZON API response schema mismatch",
                direction="outbound",
                endpoint=endpoint,
                request_id=request_id,
                status_code=response.status_code,
                error=str(e),
            )
            raise OzonDecodeError(
                f"OZON API response does not match {destination.__name__}: {e}",
                status_code=response.status_code,
                body=response.text[:5000],
                endpoint=endpoint,
            ) from e

        # 2xx 响应体中若带有 code/message，同样反映到信封
        if isinstance(resp, CommonResponse):
            result.code = resp.code
            result.message = resp.message
            result.details = list(resp.details)

        return result, resp
