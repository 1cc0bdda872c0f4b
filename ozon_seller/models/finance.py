"""
财务相关请求/响应模型
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .common import CommonResponse, OzonModel


# ========== 销售报告（/v2/finance/realization） ==========


class ReportOnSoldProductsParams(OzonModel):
    """销售报告请求参数"""

    month: int = 0  # 月份
    year: int = 0  # 年份


class ReportOnSoldProductsHeader(OzonModel):
    """报告抬头"""

    contract_date: str = ""  # 合同日期
    contract_number: str = ""  # 合同编号
    currency_sys_name: str = ""  # 货币
    doc_amount: float = 0  # 应付总额
    doc_date: str = ""  # 报告日期
    number: str = ""  # 报告编号
    payer_inn: str = ""
    payer_kpp: str = ""
    payer_name: str = ""
    receiver_inn: str = ""
    receiver_kpp: str = ""
    receiver_name: str = ""
    start_date: str = ""  # 报告期开始
    stop_date: str = ""  # 报告期结束
    vat_amount: float = 0  # 增值税


class ReportOnSoldProductsCommission(OzonModel):
    """销售/退货佣金明细"""

    amount: float = 0
    bonus: float = 0
    commission: float = 0
    compensation: float = 0
    price_per_instance: float = 0
    quantity: int = 0
    standard_fee: float = 0
    bank_coinvestment: float = 0
    stars: float = 0
    total: float = 0


class ReportOnSoldProductsItem(OzonModel):
    """商品信息"""

    barcode: str = ""
    name: str = ""
    offer_id: str = ""
    sku: int = 0


class ReportOnSoldProductsRow(OzonModel):
    """报告行"""

    commission_ratio: float = 0
    delivery_commission: ReportOnSoldProductsCommission = Field(default_factory=ReportOnSoldProductsCommission)
    item: ReportOnSoldProductsItem = Field(default_factory=ReportOnSoldProductsItem)
    return_commission: ReportOnSoldProductsCommission = Field(default_factory=ReportOnSoldProductsCommission)
    row_number: int = Field(default=0, alias="rowNumber")
    seller_price_per_instance: float = 0


class ReportOnSoldProductsResult(OzonModel):
    header: ReportOnSoldProductsHeader = Field(default_factory=ReportOnSoldProductsHeader)
    rows: List[ReportOnSoldProductsRow] = Field(default_factory=list)


class ReportOnSoldProductsResponse(CommonResponse):
    result: ReportOnSoldProductsResult = Field(default_factory=ReportOnSoldProductsResult)


# ========== 交易汇总（/v3/finance/transaction/totals） ==========


class GetTotalTransactionsSumDate(OzonModel):
    """日期范围（RFC3339）"""

    from_: Optional[datetime] = Field(default=None, alias="from")
    to: Optional[datetime] = None


class GetTotalTransactionsSumParams(OzonModel):
    """
    交易汇总请求参数

    date 与 posting_number 二选一
    transaction_type: all / orders / returns / services / compensation / transferDelivery / other
    """

    date: Optional[GetTotalTransactionsSumDate] = None
    posting_number: Optional[str] = None
    transaction_type: str = ""


class GetTotalTransactionsSumResult(OzonModel):
    accruals_for_sale: float = 0  # 商品总成本和退货
    compensation_amount: float = 0  # 补贴
    money_transfer: float = 0  # 交货和退货费用
    others_amount: float = 0  # 其他应计费用
    processing_and_delivery: float = 0  # 运输处理和配送费
    refunds_and_cancellations: float = 0  # 退货和取消费用
    sale_commission: float = 0  # 销售佣金
    services_amount: float = 0  # 附加服务成本


class GetTotalTransactionsSumResponse(CommonResponse):
    result: GetTotalTransactionsSumResult = Field(default_factory=GetTotalTransactionsSumResult)


# ========== 交易明细（/v3/finance/transaction/list） ==========


class ListTransactionsFilterDate(OzonModel):
    from_: Optional[datetime] = Field(default=None, alias="from")
    to: Optional[datetime] = None


class ListTransactionsFilter(OzonModel):
    date: ListTransactionsFilterDate = Field(default_factory=ListTransactionsFilterDate)
    operation_type: List[str] = Field(default_factory=list)
    posting_number: str = ""
    transaction_type: str = ""


class ListTransactionsParams(OzonModel):
    """交易明细请求参数，page 从 1 开始，page_size 最大 1000"""

    filter: ListTransactionsFilter = Field(default_factory=ListTransactionsFilter)
    page: int = 0
    page_size: int = 0


class TransactionItem(OzonModel):
    name: str = ""
    sku: int = 0


class TransactionPosting(OzonModel):
    delivery_schema: str = ""  # FBO / FBS / RFBS
    order_date: str = ""
    posting_number: str = ""
    warehouse_id: int = 0


class TransactionService(OzonModel):
    name: str = ""
    price: float = 0


class TransactionOperation(OzonModel):
    accruals_for_sale: float = 0
    amount: float = 0
    delivery_charge: float = 0
    items: List[TransactionItem] = Field(default_factory=list)
    operation_date: str = ""
    operation_id: int = 0
    operation_type: str = ""
    operation_type_name: str = ""
    posting: TransactionPosting = Field(default_factory=TransactionPosting)
    return_delivery_charge: float = 0
    sale_commission: float = 0
    services: List[TransactionService] = Field(default_factory=list)
    type: str = ""


class ListTransactionsResult(OzonModel):
    operations: List[TransactionOperation] = Field(default_factory=list)
    page_count: int = 0
    row_count: int = 0


class ListTransactionsResponse(CommonResponse):
    result: ListTransactionsResult = Field(default_factory=ListTransactionsResult)


# ========== 对账单 / B2B 销售报告 ==========


class GetReportParams(OzonModel):
    """报告生成参数，date 格式 YYYY-MM，language: DEFAULT / RU / EN"""

    date: str = ""
    language: str = ""


class ReportResult(OzonModel):
    code: str = ""  # 报告唯一ID


class ReportResponse(CommonResponse):
    result: ReportResult = Field(default_factory=ReportResult)
