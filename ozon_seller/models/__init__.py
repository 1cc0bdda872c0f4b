"""Ozon Seller API 请求/响应模型"""

from .common import CommonResponse, CommonResponseDetail, OzonModel, Response
from .finance import (
    GetReportParams,
    GetTotalTransactionsSumDate,
    GetTotalTransactionsSumParams,
    GetTotalTransactionsSumResponse,
    ListTransactionsFilter,
    ListTransactionsFilterDate,
    ListTransactionsParams,
    ListTransactionsResponse,
    ReportOnSoldProductsParams,
    ReportOnSoldProductsResponse,
    ReportResponse,
)
from .reports import (
    GetReportDetailsParams,
    GetReportDetailsResponse,
    GetReportsListParams,
    GetReportsListResponse,
)
from .returns import (
    GetFBOReturnsFilter,
    GetFBOReturnsParams,
    GetFBOReturnsResponse,
    GetFBSReturnsFilter,
    GetFBSReturnsFilterTimeRange,
    GetFBSReturnsParams,
    GetFBSReturnsResponse,
)

__all__ = [
    "OzonModel",
    "CommonResponse",
    "CommonResponseDetail",
    "Response",
    "ReportOnSoldProductsParams",
    "ReportOnSoldProductsResponse",
    "GetTotalTransactionsSumDate",
    "GetTotalTransactionsSumParams",
    "GetTotalTransactionsSumResponse",
    "ListTransactionsFilter",
    "ListTransactionsFilterDate",
    "ListTransactionsParams",
    "ListTransactionsResponse",
    "GetReportParams",
    "ReportResponse",
    "GetFBOReturnsFilter",
    "GetFBOReturnsParams",
    "GetFBOReturnsResponse",
    "GetFBSReturnsFilter",
    "GetFBSReturnsFilterTimeRange",
    "GetFBSReturnsParams",
    "GetFBSReturnsResponse",
    "GetReportsListParams",
    "GetReportsListResponse",
    "GetReportDetailsParams",
    "GetReportDetailsResponse",
]
