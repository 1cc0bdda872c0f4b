"""
Pytest 配置和 fixtures
"""
import json
import logging
from typing import Any

import pytest

from ozon_core.config import get_settings
from ozon_core.utils.external_api_timing import TIMING_LOGGER_NAME
from ozon_seller.models.common import OzonModel


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """每个测试使用独立的配置"""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def timing_logger():
    """计时日志器，测试结束后移除新增的文件 handler"""
    timing = logging.getLogger(TIMING_LOGGER_NAME)
    original = timing.handlers[:]
    yield timing
    for handler in timing.handlers[:]:
        if handler not in original:
            timing.removeHandler(handler)
            handler.close()


@pytest.fixture
def auth_headers():
    """Mock 客户端默认发送的凭证请求头"""
    return {"Client-Id": "my-client-id", "Api-Key": "my-api-key"}


@pytest.fixture
def unauthorized_body():
    """缺少凭证时 Ozon 返回的错误体"""
    return """{
        "code": 16,
        "message": "Client-Id and Api-Key headers are required"
    }"""


def _assert_subset(expected: Any, actual: Any, path: str = "$") -> None:
    if isinstance(expected, dict):
        assert isinstance(actual, dict), f"{path}: expected object, got {actual!r}"
        for key, value in expected.items():
            assert key in actual, f"{path}.{key}: field is missing from the model"
            _assert_subset(value, actual[key], f"{path}.{key}")
    elif isinstance(expected, list):
        assert isinstance(actual, list), f"{path}: expected array, got {actual!r}"
        assert len(actual) == len(expected), f"{path}: got {len(actual)} items, expected {len(expected)}"
        for i, (expected_item, actual_item) in enumerate(zip(expected, actual)):
            _assert_subset(expected_item, actual_item, f"{path}[{i}]")
    else:
        assert actual == expected, f"{path}: got {actual!r}, expected {expected!r}"


@pytest.fixture
def assert_json_fidelity():
    """断言响应体中的每个字段都出现在模型中且取值相同"""

    def check(body: str, model: OzonModel) -> None:
        _assert_subset(json.loads(body), model.model_dump(mode="json", by_alias=True))

    return check
