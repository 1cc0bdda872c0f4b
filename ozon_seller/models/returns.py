"""
退货相关请求/响应模型

注意：FBS 退货响应包裹在 result 中，FBO 退货响应没有 result 包裹，
两者均按 Ozon 接口原样保留。
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .common import CommonResponse, OzonModel


# ========== FBO 退货（/v3/returns/company/fbo） ==========


class GetFBOReturnsFilter(OzonModel):
    posting_number: str = ""  # 发货号
    status: List[str] = Field(default_factory=list)


class GetFBOReturnsParams(OzonModel):
    """
    FBO 退货请求参数

    last_id: 上一页最后一个值的ID，首次请求留空
    limit: 每页数量
    """

    filter: GetFBOReturnsFilter = Field(default_factory=GetFBOReturnsFilter)
    last_id: int = 0
    limit: int = 0


class FBOReturn(OzonModel):
    accepted_from_customer_moment: Optional[datetime] = None  # 从买家处接收退货的时间
    company_id: int = 0  # 卖家ID
    current_place_name: str = ""  # 当前所在位置
    destination_place_name: str = Field(default="", alias="dst_place_name")  # 退货目的地
    id: int = 0
    is_opened: bool = False  # 包裹是否已拆开
    posting_number: str = ""
    return_reason_name: str = ""
    returned_to_ozon_moment: Optional[datetime] = None  # 退回 Ozon 仓库的时间
    sku: int = 0
    status: str = Field(default="", alias="status_name")


class GetFBOReturnsResponse(CommonResponse):
    last_id: int = 0
    returns: List[FBOReturn] = Field(default_factory=list)


# ========== FBS 退货（/v2/returns/company/fbs） ==========


class GetFBSReturnsFilterTimeRange(OzonModel):
    """时间范围，格式 YYYY-MM-DDTHH:mm:ss.sssZ"""

    time_from: Optional[datetime] = None
    time_to: Optional[datetime] = None


class GetFBSReturnsFilter(OzonModel):
    """
    FBS 退货过滤条件

    status: returned_to_seller / waiting_for_seller / accepted_from_customer /
            cancelled_with_compensation / ready_for_shipment
    """

    accepted_from_customer_moment: GetFBSReturnsFilterTimeRange = Field(default_factory=GetFBSReturnsFilterTimeRange)
    # 线上字段名即为 last_free_waiting_dat
    last_free_waiting_day: List[GetFBSReturnsFilterTimeRange] = Field(
        default_factory=list, alias="last_free_waiting_dat"
    )
    order_id: int = 0
    posting_number: List[str] = Field(default_factory=list)
    product_name: str = ""
    product_offer_id: str = ""
    status: str = ""


class GetFBSReturnsParams(OzonModel):
    """FBS 退货请求参数，limit 取值 1-1000"""

    filter: GetFBSReturnsFilter = Field(default_factory=GetFBSReturnsFilter)
    limit: int = 0
    offset: int = 0


class FBSReturn(OzonModel):
    accepted_from_customer_amount: Optional[str] = None
    clearing_id: int = 0  # 商品标签底部条码
    commission: float = 0
    commission_percent: float = 0
    id: int = 0
    is_moving: bool = False  # 是否在途
    is_opened: bool = False
    last_free_waiting_day: str = ""  # 免费存储最后一天
    place_id: int = 0
    moving_to_place_name: str = ""
    picking_amount: Optional[float] = None  # 配送费用
    picking_tag: Optional[str] = None
    posting_number: str = ""
    price: float = 0
    price_without_commission: float = 0
    product_id: int = 0
    product_name: str = ""
    quantity: int = 0
    return_date: str = ""
    return_reason_name: str = ""
    waiting_for_seller_date: str = Field(default="", alias="waiting_for_seller_date_time")
    returned_to_seller_date: str = Field(default="", alias="returned_to_seller_date_time")
    waiting_for_seller_days: int = 0  # 退货存储天数
    returns_keeping_cost: float = 0  # 退货存储费用
    sku: int = 0
    status: str = ""


class GetFBSReturnsResult(OzonModel):
    count: int = 0
    returns: List[FBSReturn] = Field(default_factory=list)


class GetFBSReturnsResponse(CommonResponse):
    result: GetFBSReturnsResult = Field(default_factory=GetFBSReturnsResult)
