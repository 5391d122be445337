"""pytest共通設定"""
from decimal import Decimal
from typing import Callable, Dict, List, Sequence

import pytest

from colorme_yayoi.domain.entities.customer import Customer
from colorme_yayoi.domain.entities.order import Order, OrderItem
from colorme_yayoi.domain.value_objects.conversion_settings import ConversionSettings

SALES_ALL_HEADERS: List[str] = [
    "売上ID",
    "受注日",
    "購入者 顧客ID",
    "購入者 名前",
    "購入者 郵便番号",
    "購入者 都道府県",
    "購入者 住所",
    "購入者 メールアドレス",
    "購入者 電話番号",
    "購入者 携帯番号",
    "決済方法",
    "送料合計",
    "割引名称",
    "割引金額",
    "購入商品 型番",
    "購入商品 商品名",
    "購入商品 販売価格(消費税込)",
    "購入商品 販売個数",
    "購入商品 小計",
    "配送先ID",
]

_ROW_ALIASES: Dict[str, str] = {
    "sales_id": "売上ID",
    "name": "購入者 名前",
    "zip": "購入者 郵便番号",
    "prefecture": "購入者 都道府県",
    "address": "購入者 住所",
    "email": "購入者 メールアドレス",
    "phone": "購入者 電話番号",
    "mobile": "購入者 携帯番号",
    "payment": "決済方法",
    "shipping": "送料合計",
    "discount_name": "割引名称",
    "discount": "割引金額",
    "code": "購入商品 型番",
    "product": "購入商品 商品名",
    "price": "購入商品 販売価格(消費税込)",
    "quantity": "購入商品 販売個数",
    "subtotal": "購入商品 小計",
}


def _default_sales_row() -> Dict[str, str]:
    return {
        "売上ID": "1001",
        "受注日": "2025-12-01",
        "購入者 顧客ID": "C1",
        "購入者 名前": "山田太郎",
        "購入者 郵便番号": "150-0001",
        "購入者 都道府県": "東京都",
        "購入者 住所": "渋谷区神宮前1-2-3",
        "購入者 メールアドレス": "taro@example.com",
        "購入者 電話番号": "03-1234-5678",
        "購入者 携帯番号": "",
        "決済方法": "銀行振込",
        "送料合計": "0",
        "割引名称": "",
        "割引金額": "0",
        "購入商品 型番": "1364",
        "購入商品 商品名": "アグア100ml",
        "購入商品 販売価格(消費税込)": "1650",
        "購入商品 販売個数": "1",
        "購入商品 小計": "1650",
        "配送先ID": "D1",
    }


@pytest.fixture
def sales_row() -> Callable[..., Dict[str, str]]:
    """受注データCSVの1行を作る（省略した列は既定値）"""

    def _make(**values: str) -> Dict[str, str]:
        row = _default_sales_row()
        for key, value in values.items():
            row[_ROW_ALIASES.get(key, key)] = value
        return row

    return _make


@pytest.fixture
def build_csv() -> Callable[..., str]:
    """列名をキーにした辞書のリストからCSVテキストを作る"""

    def _build(rows: Sequence[Dict[str, str]], headers: Sequence[str] = SALES_ALL_HEADERS) -> str:
        lines = [",".join(headers)]
        for row in rows:
            lines.append(",".join(row.get(header, "") for header in headers))
        return "\r\n".join(lines) + "\r\n"

    return _build


@pytest.fixture
def make_order() -> Callable[..., Order]:
    """テスト用の受注を作る"""

    def _make(
        sales_id: str = "1001",
        customer_name: str = "山田太郎",
        items: Sequence[OrderItem] = (),
        **kwargs,
    ) -> Order:
        if not items:
            items = (
                OrderItem(
                    product_code="1364",
                    product_name="アグア100ml",
                    unit_price=Decimal("1650"),
                    quantity=Decimal("1"),
                    subtotal=Decimal("1650"),
                ),
            )
        return Order(sales_id=sales_id, items=tuple(items), customer_name=customer_name, **kwargs)

    return _make


@pytest.fixture
def ledger_customers() -> List[Customer]:
    """テスト用の得意先台帳"""
    return [
        Customer(customer_code="000101", name="佐藤花子", phone="03-1111-2222", email="hanako@example.com"),
        Customer(customer_code="000102", name="鈴木一郎", phone="(090) 3333 4444", email=""),
        Customer(customer_code="A-000150", name="高橋商店", phone="", email="TAKAHASHI@example.com"),
        Customer(customer_code="WEB", name="ウェブ注文", phone="", email=""),
    ]


@pytest.fixture
def ledger_csv_text() -> str:
    """弥生販売の得意先リストCSV（先頭5行がタイトルとヘッダー）"""
    return "\r\n".join(
        [
            '"得意先リスト",,,,,',
            ",,,,,",
            '"コード順",,,,,',
            ",,,,,",
            ',"コード","名称","フリガナ","TEL","メールアドレス"',
            ',"000101","佐藤花子","サトウハナコ","03-1111-2222","hanako@example.com"',
            ',"000102","鈴木一郎","スズキイチロウ","090-3333-4444",""',
            ',"","名称だけの行","","",""',
            ',"000103","","","",""',
            ',"000150","高橋商店","タカハシショウテン","","takahashi@example.com"',
        ]
    )


@pytest.fixture
def settings() -> ConversionSettings:
    """テスト用の変換設定"""
    return ConversionSettings(document_number_start=1)


@pytest.fixture
def sales_all_headers() -> List[str]:
    """受注データCSV（sales_all.csv）のヘッダー"""
    return list(SALES_ALL_HEADERS)
