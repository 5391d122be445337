"""商品カタログ（セット商品・商品名称・送料コード）の値オブジェクト"""
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

DEFAULT_SHIPPING_CODE = "0010"


@dataclass(frozen=True)
class SetComponent:
    """セット商品を構成する商品"""

    code: str
    name: str
    price: Decimal

    def __post_init__(self):
        """バリデーション"""
        if not self.code:
            raise ValueError("構成商品のコードが空です")
        object.__setattr__(self, "price", Decimal(str(self.price)))


# 商品名称マッピング（カラーミー型番 → 弥生販売の商品名）
DEFAULT_PRODUCT_NAMES: Dict[str, str] = {
    "1364": "Ag・uA(ｱｸﾞｱ)100mlｽﾌﾟﾚｰﾎﾞﾄﾙ",
    "1365": "きのこの酵素水100mlｽﾌﾟﾚｰﾎﾞﾄﾙ",
    "1366": "お米と大豆の酵素水100mlｽﾌﾟﾚｰﾎﾞﾄﾙ",
    "1369": "Ag・uAアグア650mlパック(酵素水)",
    "1396": "遮光スプレー200ml(トリガーヘッド) 空容器",
}

# セット商品定義
DEFAULT_SET_PRODUCTS: Dict[str, Tuple[SetComponent, ...]] = {
    "1229": (
        SetComponent("1221", "ビダウォーターソープ詰替用(400ml)", Decimal("2420")),
        SetComponent("1224", "泡ポンプ400ml空容器", Decimal("800")),
    ),
    "1378": (
        SetComponent("1369", "Ag・uAアグア650mlパック(酵素水)", Decimal("2530")),
        SetComponent("1396", "遮光スプレー200ml(トリガーヘッド) 空容器", Decimal("800")),
    ),
    "1379": (
        SetComponent("1393", "お米と大豆の酵素水650mlパック", Decimal("2530")),
        SetComponent("1396", "遮光スプレー200ml(トリガーヘッド) 空容器", Decimal("800")),
    ),
    "1227": (
        SetComponent("1226", "ビダウォーターソープ200ml", Decimal("1980")),
        SetComponent("1221", "ビダウォーターソープ詰替用(400ml)", Decimal("2420")),
        SetComponent("1228", "ビダソープセット割引", Decimal("-100")),
    ),
}


def _prefectures(code: str, names: Iterable[str]) -> Dict[str, str]:
    return {name: code for name in names}


# 送料コード（都道府県別）
DEFAULT_SHIPPING_CODES: Dict[str, str] = {
    **_prefectures("0013", ["北海道"]),
    **_prefectures("0011", ["青森県", "岩手県", "宮城県", "秋田県", "山形県", "福島県"]),
    **_prefectures(
        "0010",
        [
            "茨城県", "栃木県", "群馬県", "埼玉県", "千葉県", "東京都", "神奈川県",
            "新潟県", "富山県", "石川県", "福井県", "山梨県", "長野県", "岐阜県",
            "静岡県", "愛知県",
        ],
    ),
    **_prefectures(
        "0011", ["三重県", "滋賀県", "京都府", "大阪府", "兵庫県", "奈良県", "和歌山県"]
    ),
    **_prefectures(
        "0012",
        ["鳥取県", "島根県", "岡山県", "広島県", "山口県", "徳島県", "香川県", "愛媛県", "高知県"],
    ),
    **_prefectures(
        "0013", ["福岡県", "佐賀県", "長崎県", "熊本県", "大分県", "宮崎県", "鹿児島県"]
    ),
    **_prefectures("0014", ["沖縄県"]),
}


@dataclass(frozen=True)
class ProductCatalog:
    """変換時に参照する静的な設定テーブル

    各テーブルは初期化時に読み取り専用のマッピングに変換される。
    """

    set_products: Mapping[str, Tuple[SetComponent, ...]] = field(
        default_factory=lambda: DEFAULT_SET_PRODUCTS
    )
    product_names: Mapping[str, str] = field(default_factory=lambda: DEFAULT_PRODUCT_NAMES)
    shipping_codes: Mapping[str, str] = field(default_factory=lambda: DEFAULT_SHIPPING_CODES)
    default_shipping_code: str = DEFAULT_SHIPPING_CODE

    def __post_init__(self):
        object.__setattr__(
            self,
            "set_products",
            MappingProxyType(
                {code: tuple(components) for code, components in self.set_products.items()}
            ),
        )
        object.__setattr__(self, "product_names", MappingProxyType(dict(self.product_names)))
        object.__setattr__(self, "shipping_codes", MappingProxyType(dict(self.shipping_codes)))

        for code, components in self.set_products.items():
            if not components:
                raise ValueError(f"セット商品の構成商品が空です: {code}")

    @classmethod
    def default(cls) -> "ProductCatalog":
        """組み込みのテーブルでカタログを作成する"""
        return cls()

    def is_set_product(self, product_code: str) -> bool:
        return product_code in self.set_products

    def components_of(self, product_code: str) -> Tuple[SetComponent, ...]:
        return self.set_products.get(product_code, ())

    def product_name_for(self, product_code: str, fallback: str) -> str:
        """弥生販売側の商品名（上書き設定がなければ元の商品名）"""
        return self.product_names.get(product_code) or fallback

    def shipping_code_for(self, prefecture: Optional[str]) -> str:
        """都道府県に対応する送料の商品コード"""
        return self.shipping_codes.get(prefecture or "") or self.default_shipping_code
