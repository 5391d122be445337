"""弥生販売の売上伝票（59項目）エンコーダー"""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import List, Optional, Sequence, Union

from colorme_yayoi.domain.entities.order import Order, OrderItem
from colorme_yayoi.domain.value_objects.catalog import ProductCatalog
from colorme_yayoi.domain.value_objects.conversion_settings import ConversionSettings

FIELD_COUNT = 59
DELIMITER = "\t"
LINE_BREAK = "\r\n"
DOCUMENT_NUMBER_WIDTH = 4

DELIVERY_CODE_BANK = "003"
DELIVERY_CODE_COD = "001"
SHIPPING_PRODUCT_NAME = "送料"
COD_FEE_PRODUCT_CODE = "0002"
COD_FEE_PRODUCT_NAME = "代引き手数料"
DISCOUNT_PRODUCT_CODE = "0110"
DISCOUNT_DEFAULT_NAME = "クーポン割引"

# 代引き手数料（支払合計がこの金額未満なら手数料）
COD_FEE_TIERS = (
    (Decimal("10000"), Decimal("330")),
    (Decimal("30000"), Decimal("440")),
    (Decimal("100000"), Decimal("660")),
)
COD_FEE_MAX = Decimal("1100")

Number = Union[int, Decimal]


def calculate_cod_fee(payment_total: Number) -> Decimal:
    """代引き手数料を計算する"""
    total = Decimal(payment_total)
    for upper_bound, fee in COD_FEE_TIERS:
        if total < upper_bound:
            return fee
    return COD_FEE_MAX


def format_number(value: Number) -> str:
    """数値を出力用の文字列にする（整数値は小数点なし）"""
    value = Decimal(value)
    if value == 0:
        return "0"
    integral = value.to_integral_value()
    if value == integral:
        return format(integral, "f")
    return format(value.normalize(), "f")


@dataclass(frozen=True)
class SlipLine:
    """売上伝票の明細1行分の可変項目"""

    document_date: str
    document_number: str
    destination_code: str
    delivery_code: str
    operator_code: str
    line_number: int
    product_code: str
    product_name: str
    quantity: Decimal
    unit_price: Decimal
    amount: Decimal
    customer_name: str

    def to_fields(self) -> List[str]:
        """59項目の並びに展開する（固定値は取込側で位置ごとに検証される）"""
        unit_price = format_number(self.unit_price)
        return [
            "1",                            # 削除マーク
            "1",                            # 締フラグ
            "0",                            # チェック
            self.document_date,             # 伝票日付
            self.document_number,           # 伝票番号
            "24",                           # 伝票区分
            "2",                            # 取引区分
            "5",                            # 税転嫁
            "1",                            # 金額端数処理
            "1",                            # 税端数処理
            self.destination_code,          # 得意先コード
            self.delivery_code,             # 納入先コード
            self.operator_code,             # 担当者コード
            str(self.line_number),          # 行番号
            "1",                            # 明細区分
            self.product_code,              # 商品コード
            "",                             # 入金区分コード
            self.product_name,              # 商品名
            "13",                           # 課税区分
            "",
            "0",
            "0",
            "",
            format_number(self.quantity),   # 数量
            unit_price,                     # 単価
            format_number(self.amount),     # 金額
            "",
            unit_price,                     # 単価（再掲）
            "0",
            "0",
            "",
            "2",
            "2",
            "",
            "",
            "",
            "",
            "",
            "",
            self.customer_name,             # 購入者名
            *[""] * 12,
            "",                             # 得意先名
            *[""] * 6,
        ]


class SalesSlipEncoder:
    """受注を弥生販売の売上伝票インポート形式に変換する"""

    def __init__(self, catalog: Optional[ProductCatalog] = None):
        self.catalog = catalog or ProductCatalog.default()

    def encode(
        self,
        orders: Sequence[Order],
        settings: ConversionSettings,
        processing_date: Optional[date] = None,
    ) -> str:
        """得意先コード設定済みの受注を売上伝票テキストに変換する

        Args:
            orders: 変換する受注（得意先コード設定済み）
            settings: 伝票番号の開始番号、担当者コードなど
            processing_date: 伝票日付（省略時は今日）

        Returns:
            str: タブ区切り・CRLF改行のテキスト
        """
        document_date = (processing_date or date.today()).strftime("%Y%m%d")
        document_number = settings.document_number_start
        rows: List[str] = []

        for order in orders:
            lines = self.build_lines(
                order,
                settings,
                document_date=document_date,
                document_number=str(document_number).zfill(DOCUMENT_NUMBER_WIDTH),
            )
            rows.extend(DELIMITER.join(line.to_fields()) for line in lines)
            document_number += 1

        return LINE_BREAK.join(rows)

    def build_lines(
        self,
        order: Order,
        settings: ConversionSettings,
        document_date: str,
        document_number: str,
    ) -> List[SlipLine]:
        """1件の受注から伝票明細を組み立てる

        商品明細（セット商品は構成商品に分解）、送料、代引き手数料、割引の順に並ぶ。
        """
        delivery_code = DELIVERY_CODE_COD if order.is_cash_on_delivery else DELIVERY_CODE_BANK
        customer_name = order.customer_name or settings.default_customer_name
        lines: List[SlipLine] = []

        def add(product_code: str, product_name: str, quantity, unit_price, amount) -> None:
            lines.append(
                SlipLine(
                    document_date=document_date,
                    document_number=document_number,
                    destination_code=order.destination_code,
                    delivery_code=delivery_code,
                    operator_code=settings.operator_code,
                    line_number=len(lines) + 1,
                    product_code=product_code,
                    product_name=product_name,
                    quantity=Decimal(quantity),
                    unit_price=Decimal(unit_price),
                    amount=Decimal(amount),
                    customer_name=customer_name,
                )
            )

        for item in order.items:
            self._add_item(item, add)

        if order.shipping_fee > 0:
            add(
                self.catalog.shipping_code_for(order.prefecture),
                SHIPPING_PRODUCT_NAME,
                1,
                order.shipping_fee,
                order.shipping_fee,
            )

        if order.is_cash_on_delivery:
            fee = calculate_cod_fee(order.items_total + order.shipping_fee)
            add(COD_FEE_PRODUCT_CODE, COD_FEE_PRODUCT_NAME, 1, fee, fee)

        if order.discount_amount > 0:
            discount = -abs(order.discount_amount)
            add(
                DISCOUNT_PRODUCT_CODE,
                order.discount_name or DISCOUNT_DEFAULT_NAME,
                1,
                discount,
                discount,
            )

        return lines

    def _add_item(self, item: OrderItem, add) -> None:
        if self.catalog.is_set_product(item.product_code):
            for component in self.catalog.components_of(item.product_code):
                add(
                    component.code,
                    component.name,
                    item.quantity,
                    component.price,
                    component.price * item.quantity,
                )
            return

        add(
            item.product_code,
            self.catalog.product_name_for(item.product_code, item.product_name),
            item.quantity,
            item.unit_price,
            item.subtotal,
        )
