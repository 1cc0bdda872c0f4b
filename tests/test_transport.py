"""
传输层测试：请求头注入、参数编码、错误归一化
"""
import asyncio
import json

import httpx
import pytest
from structlog.testing import capture_logs

from ozon_core.config import Settings
from ozon_core.utils.errors import OzonConnectionError, OzonDecodeError, OzonSerializationError
from ozon_core.utils.logger import LogContext
from ozon_seller.api import OzonAPIClient
from ozon_seller.api.mock import MockHttpHandler, new_mock_client
from ozon_seller.models.common import Response
from ozon_seller.models.finance import (
    GetTotalTransactionsSumParams,
    GetTotalTransactionsSumResponse,
    ListTransactionsParams,
    ListTransactionsResponse,
)

pytestmark = pytest.mark.asyncio

TOTALS_BODY = '{"result": {"accruals_for_sale": 96647.58, "others_amount": 113.05}}'


def _raising_handler(exc_type, message):
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc_type(message, request=request)

    return handler


class TestHeaders:

    async def test_default_headers(self):
        handler = MockHttpHandler(200, TOTALS_BODY)
        async with new_mock_client(handler, client_id="42", api_key="secret") as client:
            await client.get_total_transactions_sum(GetTotalTransactionsSumParams())

        headers = handler.last_request.headers
        assert headers["Client-Id"] == "42"
        assert headers["Api-Key"] == "secret"
        assert headers["Content-Type"] == "application/json"
        assert headers["X-Request-Id"]
        assert "X-Correlation-Id" not in headers

    async def test_per_call_headers_override_defaults(self):
        handler = MockHttpHandler(200, "{}", expected_headers={"Api-Key": "other-key", "X-Extra": "1"})
        async with new_mock_client(handler) as client:
            result, _ = await client._request(
                "POST", "/v1/anything", {}, headers={"Api-Key": "other-key", "X-Extra": "1"}
            )

        assert result.status_code == 200
        assert handler.last_request.headers["Client-Id"] == "my-client-id"

    async def test_correlation_id_from_log_context(self):
        handler = MockHttpHandler(200, TOTALS_BODY)
        async with new_mock_client(handler) as client:
            with LogContext(trace_id="trace-123"):
                await client.get_total_transactions_sum(GetTotalTransactionsSumParams())

        assert handler.last_request.headers["X-Correlation-Id"] == "trace-123"

    async def test_request_ids_are_unique(self):
        handler = MockHttpHandler(200, TOTALS_BODY)
        async with new_mock_client(handler) as client:
            await client.get_total_transactions_sum(GetTotalTransactionsSumParams())
            await client.get_total_transactions_sum(GetTotalTransactionsSumParams())

        first, second = (request.headers["X-Request-Id"] for request in handler.requests)
        assert first != second

    async def test_mock_rejects_unexpected_headers(self, auth_headers):
        handler = MockHttpHandler(200, TOTALS_BODY, expected_headers=auth_headers)
        async with new_mock_client(handler, api_key="wrong") as client:
            with pytest.raises(AssertionError, match="Api-Key"):
                await client.get_total_transactions_sum(GetTotalTransactionsSumParams())


class TestParamsEncoding:

    async def test_get_params_go_to_query_string(self):
        handler = MockHttpHandler(200, "{}")
        async with new_mock_client(handler) as client:
            await client._request("GET", "/v1/anything", {"ids": [1, 2], "visible": True, "skip": None})

        request = handler.last_request
        assert request.method == "GET"
        assert request.url.params.get_list("ids") == ["1", "2"]
        assert request.url.params["visible"] == "true"
        assert "skip" not in request.url.params
        assert request.content == b""

    async def test_post_without_params_sends_no_body(self):
        handler = MockHttpHandler(200, "{}")
        async with new_mock_client(handler) as client:
            await client._request("POST", "/v1/anything")

        assert handler.last_request.content == b""

    async def test_unencodable_params(self):
        handler = MockHttpHandler(200, "{}")
        async with new_mock_client(handler) as client:
            with pytest.raises(OzonSerializationError):
                await client._request("POST", "/v1/anything", {"value": object()})

        assert handler.requests == []

    async def test_nested_object_in_query(self):
        handler = MockHttpHandler(200, "{}")
        async with new_mock_client(handler) as client:
            with pytest.raises(OzonSerializationError, match="filter"):
                await client._request("GET", "/v1/anything", {"filter": {"a": 1}})

        assert handler.requests == []


class TestApiErrors:

    async def test_error_body_is_a_normal_return(self):
        body = json.dumps({
            "code": 3,
            "message": "invalid page_size",
            "details": [{"typeUrl": "type.googleapis.com/google.rpc.BadRequest", "value": "page_size"}],
        })
        handler = MockHttpHandler(400, body)
        async with new_mock_client(handler) as client:
            resp = await client.list_transactions(ListTransactionsParams(page=1, page_size=5000))

        assert isinstance(resp, ListTransactionsResponse)
        assert resp.status_code == 400
        assert not resp.is_success
        assert resp.code == 3
        assert resp.message == "invalid page_size"
        assert resp.details[0].type_url == "type.googleapis.com/google.rpc.BadRequest"
        assert resp.result.operations == []

    async def test_empty_error_body_uses_reason_phrase(self):
        handler = MockHttpHandler(500, "")
        async with new_mock_client(handler) as client:
            resp = await client.get_total_transactions_sum(GetTotalTransactionsSumParams())

        assert resp.status_code == 500
        assert resp.message == "Internal Server Error"

    async def test_success_body_with_error_fields(self):
        handler = MockHttpHandler(200, '{"code": 7, "message": "partially applied", "result": {}}')
        async with new_mock_client(handler) as client:
            resp = await client.get_total_transactions_sum(GetTotalTransactionsSumParams())

        assert resp.is_success
        assert resp.code == 7
        assert resp.message == "partially applied"

    async def test_transport_result(self):
        handler = MockHttpHandler(404, '{"code": 5, "message": "Not Found"}')
        async with new_mock_client(handler) as client:
            result, resp = await client._request(
                "POST", "/v1/missing", {}, GetTotalTransactionsSumResponse
            )

        assert isinstance(result, Response)
        assert result.status_code == 404
        assert result.message == "Not Found"
        # 解析目标保持为空模型，由调用方回填信封
        assert resp.status_code == 0
        result.copy_common_response(resp)
        assert resp.status_code == 404
        assert resp.code == 5

    async def test_error_body_without_envelope_fields(self):
        handler = MockHttpHandler(403, '{"error": "forbidden"}')
        async with new_mock_client(handler) as client:
            resp = await client.get_total_transactions_sum(GetTotalTransactionsSumParams())

        assert resp.status_code == 403
        assert resp.code == 0
        assert resp.message == "Forbidden"
        assert resp.details == []

    async def test_error_body_with_null_fields(self):
        handler = MockHttpHandler(429, '{"code": 8, "message": null, "details": null}')
        async with new_mock_client(handler) as client:
            resp = await client.list_transactions(ListTransactionsParams())

        assert resp.status_code == 429
        assert resp.code == 8
        assert resp.message == "Too Many Requests"
        assert resp.details == []

    async def test_error_body_with_unexpected_types(self):
        body = json.dumps({
            "code": "3",
            "message": "bad request",
            "details": [{"typeUrl": "type.googleapis.com/google.rpc.BadRequest", "value": 5}, "junk"],
        })
        handler = MockHttpHandler(400, body)
        async with new_mock_client(handler) as client:
            resp = await client.get_total_transactions_sum(GetTotalTransactionsSumParams())

        assert resp.status_code == 400
        assert resp.code == 0
        assert resp.message == "bad request"
        assert len(resp.details) == 1
        assert resp.details[0].type_url == "type.googleapis.com/google.rpc.BadRequest"
        assert resp.details[0].value == ""

    async def test_status_code_in_body_is_ignored(self):
        handler = MockHttpHandler(200, '{"status_code": 999, "result": {"accruals_for_sale": 1.5}}')
        async with new_mock_client(handler) as client:
            result, resp = await client._request(
                "POST", "/v3/finance/transaction/totals", {}, GetTotalTransactionsSumResponse
            )
            wrapped = await client.get_total_transactions_sum(GetTotalTransactionsSumParams())

        assert result.status_code == 200
        assert resp.status_code == 0
        assert resp.result.accruals_for_sale == 1.5
        assert wrapped.status_code == 200

    async def test_status_code_in_error_body_is_ignored(self):
        handler = MockHttpHandler(400, '{"status_code": 999, "code": 3, "message": "bad"}')
        async with new_mock_client(handler) as client:
            resp = await client.get_total_transactions_sum(GetTotalTransactionsSumParams())

        assert resp.status_code == 400
        assert resp.code == 3


class TestTransportFailures:

    async def test_connection_error(self):
        client = OzonAPIClient("id", "key", transport=httpx.MockTransport(_raising_handler(httpx.ConnectError, "refused")))
        async with client:
            with pytest.raises(OzonConnectionError) as exc_info:
                await client.get_total_transactions_sum(GetTotalTransactionsSumParams())

        assert exc_info.value.status_code == 0
        assert exc_info.value.timeout is False
        assert "refused" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    async def test_timeout(self):
        client = OzonAPIClient("id", "key", transport=httpx.MockTransport(_raising_handler(httpx.ReadTimeout, "slow")))
        async with client:
            with pytest.raises(OzonConnectionError) as exc_info:
                await client.get_total_transactions_sum(GetTotalTransactionsSumParams())

        assert exc_info.value.timeout is True
        assert exc_info.value.message == "Request timed out"
        assert exc_info.value.to_dict()["error_type"] == "OzonConnectionError"

    async def test_per_call_timeout(self):
        handler = MockHttpHandler(200, TOTALS_BODY)
        async with new_mock_client(handler) as client:
            await client.get_total_transactions_sum(GetTotalTransactionsSumParams(), timeout=5.0)
            await client.get_total_transactions_sum(GetTotalTransactionsSumParams())

        first, second = handler.requests
        assert first.extensions["timeout"]["read"] == 5.0
        assert second.extensions["timeout"]["read"] == OzonAPIClient.DEFAULT_TIMEOUT

    @pytest.mark.parametrize("status_code", [200, 502])
    async def test_body_is_not_json(self, status_code):
        handler = MockHttpHandler(status_code, "<html>Bad Gateway</html>")
        async with new_mock_client(handler) as client:
            with pytest.raises(OzonDecodeError) as exc_info:
                await client.get_total_transactions_sum(GetTotalTransactionsSumParams())

        assert exc_info.value.status_code == status_code
        assert exc_info.value.body == "<html>Bad Gateway</html>"

    async def test_body_is_not_an_object(self):
        handler = MockHttpHandler(200, "[1, 2, 3]")
        async with new_mock_client(handler) as client:
            with pytest.raises(OzonDecodeError, match="list"):
                await client.get_total_transactions_sum(GetTotalTransactionsSumParams())

    async def test_body_does_not_match_schema(self):
        handler = MockHttpHandler(200, '{"result": {"page_count": "many"}}')
        async with new_mock_client(handler) as client:
            with pytest.raises(OzonDecodeError, match="ListTransactionsResponse"):
                await client.list_transactions(ListTransactionsParams())


class TestStatelessness:

    async def test_same_call_twice_is_identical(self):
        handler = MockHttpHandler(200, TOTALS_BODY)
        params = GetTotalTransactionsSumParams(transaction_type="ALL")
        async with new_mock_client(handler) as client:
            first = await client.get_total_transactions_sum(params)
            second = await client.get_total_transactions_sum(params)

        assert first == second
        assert first is not second
        assert first.model_dump() == second.model_dump()
        assert handler.requests[0].content == handler.requests[1].content

    async def test_concurrent_calls(self):
        handler = MockHttpHandler(200, TOTALS_BODY)
        async with new_mock_client(handler) as client:
            responses = await asyncio.gather(*(
                client.get_total_transactions_sum(GetTotalTransactionsSumParams()) for _ in range(20)
            ))

        assert len(handler.requests) == 20
        assert all(resp.result.accruals_for_sale == 96647.58 for resp in responses)
        assert len({request.headers["X-Request-Id"] for request in handler.requests}) == 20


class TestClientConstruction:

    async def test_from_settings(self):
        settings = Settings(client_id="from-env", api_key="env-key", base_url="https://example.test/", timeout=12)
        handler = MockHttpHandler(200, TOTALS_BODY, expected_headers={"Client-Id": "from-env", "Api-Key": "env-key"})
        client = OzonAPIClient.from_settings(settings, transport=httpx.MockTransport(handler))
        async with client:
            resp = await client.get_total_transactions_sum(GetTotalTransactionsSumParams())

        assert client.base_url == "https://example.test"
        assert resp.status_code == 200
        assert handler.last_request.url.host == "example.test"
        assert handler.last_request.extensions["timeout"]["read"] == 12

    async def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("OZON__CLIENT_ID", "env-id")
        monkeypatch.setenv("OZON__API_KEY", "env-key")
        client = OzonAPIClient.from_settings()
        async with client:
            assert client.client_id == "env-id"
            assert client.api_key == "env-key"
            assert client.base_url == OzonAPIClient.BASE_URL

    async def test_calls_do_not_depend_on_environment_settings(self, monkeypatch):
        monkeypatch.setenv("OZON__BASE_URL", "api-seller.ozon.ru")
        monkeypatch.setenv("OZON__TIMEOUT", "-1")
        handler = MockHttpHandler(200, TOTALS_BODY)
        async with new_mock_client(handler) as client:
            resp = await client.get_total_transactions_sum(GetTotalTransactionsSumParams())

        assert resp.status_code == 200
        assert resp.result.accruals_for_sale == 96647.58

    async def test_from_settings_writes_timing_log_file(self, tmp_path, timing_logger):
        log_file = tmp_path / "logs" / "external_api_timing.log"
        settings = Settings(client_id="42", api_key="key", timing_log_file=str(log_file))
        handler = MockHttpHandler(200, TOTALS_BODY)
        client = OzonAPIClient.from_settings(settings, transport=httpx.MockTransport(handler))
        async with client:
            await client.get_total_transactions_sum(GetTotalTransactionsSumParams())

        assert "OZON | POST /v3/finance/transaction/totals" in log_file.read_text(encoding="utf-8")
        assert "client=42" in log_file.read_text(encoding="utf-8")

    async def test_from_settings_warns_without_credentials(self):
        with capture_logs() as logs:
            client = OzonAPIClient.from_settings(Settings(_env_file=None, client_id="", api_key=""))
        await client.close()

        assert {"event": "OZON credentials are not configured", "log_level": "warning", "env_prefix": "OZON__"} in logs

    async def test_from_settings_with_credentials_does_not_warn(self):
        with capture_logs() as logs:
            client = OzonAPIClient.from_settings(Settings(_env_file=None, client_id="42", api_key="key"))
        await client.close()

        assert logs == []
