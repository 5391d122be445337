"""カラーミーショップ受注CSVパーサー"""
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Sequence, Tuple

from colorme_yayoi.domain.entities.order import Order, OrderItem
from colorme_yayoi.domain.exceptions import FormatError
from colorme_yayoi.infrastructure.csv_parser.csv_splitter import split_csv_fields, split_csv_lines

# ヘッダーより項目数がこれ以上少ない行は読み飛ばす
COLUMN_SHORTAGE_TOLERANCE = 10

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

# 倍精度浮動小数点数で表せる桁の範囲（これを超える指数の値は0とする）
MAX_DECIMAL_EXPONENT = 308


def parse_number(value: str) -> Decimal:
    """先頭の数値部分をDecimalに変換する（数値でなければ0）"""
    match = _LEADING_NUMBER.match(value or "")
    if not match:
        return Decimal("0")
    try:
        number = Decimal(match.group(1))
    except InvalidOperation:
        return Decimal("0")
    if number and abs(number.adjusted()) > MAX_DECIMAL_EXPONENT:
        return Decimal("0")
    return number


@dataclass(frozen=True)
class SchemaLayout:
    """受注CSVのヘッダー構成（項目名 → 列名）"""

    name: str
    sales_id: str
    product_name: str
    order_date: str
    customer_id: str
    customer_name: str
    email: str
    phone: str
    mobile: str
    payment_method: str
    product_code: str
    unit_price: str
    quantity: str
    subtotal: str
    delivery_id: str
    zip: str
    prefecture: str
    address: str
    shipping_fee: str
    discount_name: str
    discount_amount: str

    def required_columns(self) -> Tuple[str, str]:
        return self.sales_id, self.product_name

    def matches(self, headers: Sequence[str]) -> bool:
        return all(column in headers for column in self.required_columns())


# 受注データCSV（sales_all.csv）
SALES_ALL = SchemaLayout(
    name="sales_all",
    sales_id="売上ID",
    product_name="購入商品 商品名",
    order_date="受注日",
    customer_id="購入者 顧客ID",
    customer_name="購入者 名前",
    email="購入者 メールアドレス",
    phone="購入者 電話番号",
    mobile="購入者 携帯番号",
    payment_method="決済方法",
    product_code="購入商品 型番",
    unit_price="購入商品 販売価格(消費税込)",
    quantity="購入商品 販売個数",
    subtotal="購入商品 小計",
    delivery_id="配送先ID",
    zip="購入者 郵便番号",
    prefecture="購入者 都道府県",
    address="購入者 住所",
    shipping_fee="送料合計",
    discount_name="割引名称",
    discount_amount="割引金額",
)

# 売上詳細CSV（sales_detail.csv、旧形式）
SALES_DETAIL = SchemaLayout(
    name="sales_detail",
    sales_id="売上ID",
    product_name="商品名",
    order_date="受注日",
    customer_id="顧客ID",
    customer_name="名前",
    email="メールアドレス",
    phone="電話番号",
    mobile="携帯番号",
    payment_method="決済方法",
    product_code="型番",
    unit_price="販売価格(消費税込)",
    quantity="販売個数",
    subtotal="小計",
    delivery_id="配送先ID",
    # 購入者の住所・送料・割引は受注データCSVと同じ列名
    zip="購入者 郵便番号",
    prefecture="購入者 都道府県",
    address="購入者 住所",
    shipping_fee="送料合計",
    discount_name="割引名称",
    discount_amount="割引金額",
)

LAYOUTS: Tuple[SchemaLayout, ...] = (SALES_ALL, SALES_DETAIL)


def detect_layout(headers: Sequence[str]) -> SchemaLayout:
    """ヘッダーから受注CSVの形式を判定する

    受注データCSV、売上詳細CSVの順に、必須項目（売上ID、商品名）が揃っている形式を採用する。

    Raises:
        FormatError: どの形式にも一致しない場合
    """
    for layout in LAYOUTS:
        if layout.matches(headers):
            return layout
    raise FormatError("CSVファイルに必要な項目が見つかりません")


class _Row:
    """列名で値を取り出すための1行分のラッパー"""

    def __init__(self, columns: List[str], index: Dict[str, int]):
        self.columns = columns
        self.index = index

    def get(self, column: str) -> str:
        position = self.index.get(column)
        if position is None or position >= len(self.columns):
            return ""
        return self.columns[position]

    def number(self, column: str) -> Decimal:
        return parse_number(self.get(column))


class ColorMeOrderParser:
    """カラーミーショップの受注CSVを解析してOrderエンティティに変換する"""

    def parse(self, csv_text: str) -> List[Order]:
        """受注CSVを解析する

        同じ売上IDの行は1件の受注にまとめる（購入者情報は最初の行のもの）。

        Args:
            csv_text: CSVファイルの内容

        Returns:
            List[Order]: 出現順の受注のリスト

        Raises:
            FormatError: CSVが空、必要な項目がない、有効な受注がない場合
        """
        lines = split_csv_lines(csv_text)
        if len(lines) < 2:
            raise FormatError("CSVファイルが空です")

        headers = split_csv_fields(lines[0])
        layout = detect_layout(headers)
        index = self._index_headers(headers)

        first_rows: Dict[str, _Row] = {}
        items_by_id: Dict[str, List[OrderItem]] = {}

        for line in lines[1:]:
            columns = split_csv_fields(line)
            if len(columns) < len(headers) - COLUMN_SHORTAGE_TOLERANCE:
                continue

            row = _Row(columns, index)
            sales_id = row.get(layout.sales_id)
            if not sales_id:
                continue

            if sales_id not in first_rows:
                first_rows[sales_id] = row
                items_by_id[sales_id] = []
            items_by_id[sales_id].append(self._build_item(row, layout))

        if not first_rows:
            raise FormatError("有効な受注データが見つかりませんでした")

        return [
            self._build_order(row, layout, sales_id, items_by_id[sales_id])
            for sales_id, row in first_rows.items()
        ]

    def _index_headers(self, headers: Sequence[str]) -> Dict[str, int]:
        """列名 → 列位置（同名の列は最初のもの）"""
        index: Dict[str, int] = {}
        for position, header in enumerate(headers):
            index.setdefault(header, position)
        return index

    def _build_order(
        self, row: _Row, layout: SchemaLayout, sales_id: str, items: List[OrderItem]
    ) -> Order:
        return Order(
            sales_id=sales_id,
            items=tuple(items),
            order_date=row.get(layout.order_date),
            customer_id=row.get(layout.customer_id),
            delivery_id=row.get(layout.delivery_id),
            customer_name=row.get(layout.customer_name),
            zip=row.get(layout.zip),
            prefecture=row.get(layout.prefecture),
            address=row.get(layout.address),
            email=row.get(layout.email),
            phone=row.get(layout.phone),
            mobile=row.get(layout.mobile),
            payment_method=row.get(layout.payment_method),
            shipping_fee=row.number(layout.shipping_fee),
            discount_name=row.get(layout.discount_name),
            discount_amount=row.number(layout.discount_amount),
        )

    def _build_item(self, row: _Row, layout: SchemaLayout) -> OrderItem:
        return OrderItem(
            product_code=row.get(layout.product_code),
            product_name=row.get(layout.product_name),
            unit_price=row.number(layout.unit_price),
            quantity=row.number(layout.quantity),
            subtotal=row.number(layout.subtotal),
        )

