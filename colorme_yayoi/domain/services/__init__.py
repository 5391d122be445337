"""ドメインサービス"""
from colorme_yayoi.domain.services.customer_matcher import CustomerMatcher
from colorme_yayoi.domain.services.new_customer_encoder import NewCustomerRecordEncoder
from colorme_yayoi.domain.services.sales_slip_encoder import SalesSlipEncoder

__all__ = ["CustomerMatcher", "NewCustomerRecordEncoder", "SalesSlipEncoder"]
