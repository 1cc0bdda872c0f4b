"""
Ozon API 财务相关方法
"""

from typing import Optional

from ...models.finance import (
    GetReportParams,
    GetTotalTransactionsSumParams,
    GetTotalTransactionsSumResponse,
    ListTransactionsParams,
    ListTransactionsResponse,
    ReportOnSoldProductsParams,
    ReportOnSoldProductsResponse,
    ReportResponse,
)


class FinanceMixin:
    """财务相关 API 方法"""

    async def report_on_sold_products(
        self, params: ReportOnSoldProductsParams, timeout: Optional[float] = None
    ) -> ReportOnSoldProductsResponse:
        """
        获取商品销售报告（月度）
        使用 /v2/finance/realization 接口

        Args:
            params: month / year
            timeout: 本次调用超时（秒）

        Returns:
            销售报告，包含：
            - result.header: 报告抬头（合同、付款方、收款方、金额）
            - result.rows: 每个商品的销售与退货佣金明细
        """
        response, resp = await self._request(
            "POST", "/v2/finance/realization", params, ReportOnSoldProductsResponse, timeout=timeout
        )
        response.copy_common_response(resp)

        return resp

    async def get_total_transactions_sum(
        self, params: GetTotalTransactionsSumParams, timeout: Optional[float] = None
    ) -> GetTotalTransactionsSumResponse:
        """
        获取财务清单数目（费用汇总）
        使用 /v3/finance/transaction/totals 接口

        按 date（RFC3339 日期范围）或 posting_number 查询，transaction_type 默认由调用方指定

        Returns:
            财务清单汇总数据，包含：
            - accruals_for_sale: 商品总成本和退货
            - sale_commission: 销售佣金
            - processing_and_delivery: 运输处理和配送费
            - refunds_and_cancellations: 退货和取消费用
            - compensation_amount: 补贴
            - money_transfer: 交货和退货费用
            - services_amount: 附加服务成本
            - others_amount: 其他应计费用
        """
        response, resp = await self._request(
            "POST", "/v3/finance/transaction/totals", params, GetTotalTransactionsSumResponse, timeout=timeout
        )
        response.copy_common_response(resp)

        return resp

    async def list_transactions(
        self, params: ListTransactionsParams, timeout: Optional[float] = None
    ) -> ListTransactionsResponse:
        """
        获取财务交易明细列表
        使用 /v3/finance/transaction/list 接口

        只请求 params.page 指定的一页，不会自动翻页

        Returns:
            财务交易明细列表，包含：
            - operations: 交易操作列表
            - page_count: 总页数
            - row_count: 总交易数
        """
        response, resp = await self._request(
            "POST", "/v3/finance/transaction/list", params, ListTransactionsResponse, timeout=timeout
        )
        response.copy_common_response(resp)

        return resp

    async def mutual_settlements(self, params: GetReportParams, timeout: Optional[float] = None) -> ReportResponse:
        """
        生成对账单报告
        使用 /v1/finance/mutual-settlement 接口

        返回的 result.code 用于通过 /v1/report/info 查询报告状态
        """
        response, resp = await self._request(
            "POST", "/v1/finance/mutual-settlement", params, ReportResponse, timeout=timeout
        )
        response.copy_common_response(resp)

        return resp

    async def sales_to_legal_entities(self, params: GetReportParams, timeout: Optional[float] = None) -> ReportResponse:
        """
        生成法人客户销售报告
        使用 /v1/finance/document-b2b-sales 接口
        """
        response, resp = await self._request(
            "POST", "/v1/finance/document-b2b-sales", params, ReportResponse, timeout=timeout
        )
        response.copy_common_response(resp)

        return resp
