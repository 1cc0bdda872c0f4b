"""
报告相关请求/响应模型
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import Field

from .common import CommonResponse, OzonModel


class GetReportsListParams(OzonModel):
    """
    报告列表请求参数

    page: 页码（从1开始）
    page_size: 每页数量（最大1000）
    report_type: ALL / SELLER_PRODUCTS / SELLER_TRANSACTIONS / SELLER_PRODUCT_PRICES /
                 SELLER_STOCK / SELLER_RETURNS / SELLER_POSTINGS / SELLER_FINANCE
    """

    page: int = 0
    page_size: int = 0
    report_type: str = ""


class ReportInfo(OzonModel):
    code: str = ""  # 报告唯一ID
    created_at: Optional[datetime] = None
    error: str = ""  # 生成失败时的错误信息
    file: str = ""  # 报告文件链接
    params: Dict[str, str] = Field(default_factory=dict)
    report_type: str = ""
    status: str = ""  # waiting / processing / success / failed


class GetReportsListResult(OzonModel):
    reports: List[ReportInfo] = Field(default_factory=list)
    total: int = 0


class GetReportsListResponse(CommonResponse):
    result: GetReportsListResult = Field(default_factory=GetReportsListResult)


class GetReportDetailsParams(OzonModel):
    code: str = ""


class GetReportDetailsResponse(CommonResponse):
    result: ReportInfo = Field(default_factory=ReportInfo)
