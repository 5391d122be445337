"""受注エンティティ"""
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple

from colorme_yayoi.domain.entities.customer import Customer

COD_KEYWORD = "代引"


class MatchMethod(str, Enum):
    """顧客照合の方法"""

    EMAIL = "メールアドレス一致"
    PHONE = "電話番号一致"
    NAME = "顧客名一致"
    NONE = ""


@dataclass(frozen=True)
class OrderItem:
    """受注の商品明細を表す値オブジェクト"""

    product_code: str
    product_name: str
    unit_price: Decimal = Decimal("0")
    quantity: Decimal = Decimal("0")
    subtotal: Decimal = Decimal("0")


@dataclass(frozen=True)
class Order:
    """カラーミーショップの受注（売上ID単位）を表すエンティティ"""

    sales_id: str
    items: Tuple[OrderItem, ...]
    order_date: str = ""
    customer_id: str = ""
    delivery_id: str = ""
    customer_name: str = ""
    zip: str = ""
    prefecture: str = ""
    address: str = ""
    email: str = ""
    phone: str = ""
    mobile: str = ""
    payment_method: str = ""
    shipping_fee: Decimal = Decimal("0")
    discount_name: str = ""
    discount_amount: Decimal = Decimal("0")

    # 顧客照合の結果
    matched_customer: Optional[Customer] = field(default=None, compare=False)
    match_method: MatchMethod = MatchMethod.NONE
    destination_code: str = ""

    def __post_init__(self):
        """バリデーション"""
        if not self.sales_id:
            raise ValueError("売上IDが空です")

        if not self.items:
            raise ValueError(f"商品明細がありません: {self.sales_id}")

    @property
    def is_cash_on_delivery(self) -> bool:
        return COD_KEYWORD in self.payment_method

    @property
    def items_total(self) -> Decimal:
        return sum((item.subtotal for item in self.items), Decimal("0"))

    @property
    def contact_phone(self) -> str:
        """電話番号（なければ携帯番号）"""
        return self.phone or self.mobile
