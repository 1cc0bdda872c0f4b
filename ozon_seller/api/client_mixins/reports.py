"""
Ozon API 报告相关方法
"""

from typing import Optional

from ...models.reports import (
    GetReportDetailsParams,
    GetReportDetailsResponse,
    GetReportsListParams,
    GetReportsListResponse,
)


class ReportsMixin:
    """报告相关 API 方法"""

    async def get_report_list(
        self, params: GetReportsListParams, timeout: Optional[float] = None
    ) -> GetReportsListResponse:
        """
        获取已生成的报告列表
        使用 /v1/report/list 接口
        """
        response, resp = await self._request(
            "POST", "/v1/report/list", params, GetReportsListResponse, timeout=timeout
        )
        response.copy_common_response(resp)

        return resp

    async def get_report_details(
        self, params: GetReportDetailsParams, timeout: Optional[float] = None
    ) -> GetReportDetailsResponse:
        """
        按报告ID查询报告状态与下载链接
        使用 /v1/report/info 接口

        Args:
            params: code 为生成报告接口返回的 result.code
        """
        response, resp = await self._request(
            "POST", "/v1/report/info", params, GetReportDetailsResponse, timeout=timeout
        )
        response.copy_common_response(resp)

        return resp
