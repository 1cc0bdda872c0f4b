"""
通用响应信封与模型基类
"""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class OzonModel(BaseModel):
    """所有请求/响应模型的基类

    属性名使用 snake_case，与 JSON 字段名不同时通过 alias 保留线上拼写。
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class CommonResponseDetail(OzonModel):
    """错误详情"""

    type_url: str = Field(default="", alias="typeUrl")
    value: str = ""


class CommonResponse(OzonModel):
    """通用响应信封

    status_code 不来自 JSON，由传输层根据 HTTP 状态回填；
    code / message / details 为 Ozon 错误体中的字段。
    """

    status_code: int = Field(default=0, exclude=True)
    code: int = 0
    message: str = ""
    details: List[CommonResponseDetail] = Field(default_factory=list)

    @property
    def is_success(self) -> bool:
        """HTTP 状态是否为 2xx"""
        return 200 <= self.status_code < 300


def _str_or_empty(value: Any) -> str:
    return value if isinstance(value, str) else ""


class Response(CommonResponse):
    """传输层返回的结果，仅包含信封字段"""

    @classmethod
    def from_error_body(cls, status_code: int, data: Dict[str, Any]) -> "Response":
        """
        宽松解析非 2xx 错误体

        字段缺失、为 null 或类型不符时取默认值，不抛出校验错误。
        """
        code = data.get("code")
        raw_details = data.get("details")
        details = []
        if isinstance(raw_details, list):
            details = [
                CommonResponseDetail(type_url=_str_or_empty(item.get("typeUrl")), value=_str_or_empty(item.get("value")))
                for item in raw_details
                if isinstance(item, dict)
            ]
        return cls(
            status_code=status_code,
            code=code if isinstance(code, int) and not isinstance(code, bool) else 0,
            message=_str_or_empty(data.get("message")),
            details=details,
        )

    def copy_common_response(self, target: CommonResponse) -> None:
        """将信封字段回填到具体的响应对象"""
        target.status_code = self.status_code
        target.code = self.code
        target.message = self.message
        target.details = [detail.model_copy() for detail in self.details]
