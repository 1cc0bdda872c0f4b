"""
Ozon API 客户端
处理与 Ozon Seller API 的所有交互

采用 Mixin 模式组织代码，各功能模块在 client_mixins/ 目录下：
- base.py: 基础配置、连接管理、核心请求方法
- finance.py: 财务相关 API
- returns.py: 退货相关 API
- reports.py: 报告相关 API
"""

from .client_mixins import (
    FinanceMixin,
    OzonAPIClientBase,
    ReportsMixin,
    ReturnsMixin,
)


class OzonAPIClient(
    OzonAPIClientBase,
    FinanceMixin,
    ReturnsMixin,
    ReportsMixin,
):
    """
    Ozon API 客户端 - 完整功能

    使用方式:
        async with OzonAPIClient(client_id, api_key) as client:
            resp = await client.list_transactions(params)
            if resp.status_code != 200:
                print(resp.code, resp.message)

    主要功能模块:
        - 财务: report_on_sold_products, get_total_transactions_sum, list_transactions,
                mutual_settlements, sales_to_legal_entities
        - 退货: get_fbo_returns, get_fbs_returns
        - 报告: get_report_list, get_report_details
    """

    pass
