"""
Ozon API 退货相关方法
"""

from typing import Optional

from ...models.returns import (
    GetFBOReturnsParams,
    GetFBOReturnsResponse,
    GetFBSReturnsParams,
    GetFBSReturnsResponse,
)


class ReturnsMixin:
    """退货相关 API 方法"""

    async def get_fbo_returns(
        self, params: GetFBOReturnsParams, timeout: Optional[float] = None
    ) -> GetFBOReturnsResponse:
        """
        获取 Ozon 仓库发货（FBO）商品的退货信息
        使用 /v3/returns/company/fbo 接口

        Args:
            params: filter / last_id / limit，翻页时把响应中的 last_id 传入下一次请求

        Returns:
            last_id 与 returns 列表（该接口的响应没有 result 包裹）
        """
        response, resp = await self._request(
            "POST", "/v3/returns/company/fbo", params, GetFBOReturnsResponse, timeout=timeout
        )
        response.copy_common_response(resp)

        return resp

    async def get_fbs_returns(
        self, params: GetFBSReturnsParams, timeout: Optional[float] = None
    ) -> GetFBSReturnsResponse:
        """
        获取卖家仓库发货（FBS）商品的退货信息
        使用 /v2/returns/company/fbs 接口

        Returns:
            result.count 与 result.returns 列表
        """
        response, resp = await self._request(
            "POST", "/v2/returns/company/fbs", params, GetFBSReturnsResponse, timeout=timeout
        )
        response.copy_common_response(resp)

        return resp
