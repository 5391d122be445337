"""商品カタログ（TOML）の読み込みを行うサービス"""
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import tomli

from colorme_yayoi.domain.exceptions import FormatError
from colorme_yayoi.domain.value_objects.catalog import (
    DEFAULT_PRODUCT_NAMES,
    DEFAULT_SET_PRODUCTS,
    DEFAULT_SHIPPING_CODE,
    DEFAULT_SHIPPING_CODES,
    ProductCatalog,
    SetComponent,
)

logger = logging.getLogger(__name__)


class CatalogLoader:
    """TOMLファイルから商品カタログを読み込む

    ファイルに含まれるテーブルだけを置き換え、それ以外は組み込みの値を使う。

    例::

        default_shipping_code = "0010"

        [product_names]
        "1364" = "Ag・uA(ｱｸﾞｱ)100mlｽﾌﾟﾚｰﾎﾞﾄﾙ"

        [shipping_codes]
        "北海道" = "0013"

        [[set_products."1229"]]
        code = "1221"
        name = "ビダウォーターソープ詰替用(400ml)"
        price = 2420
    """

    def load(self, catalog_file: Optional[Path]) -> ProductCatalog:
        """商品カタログを読み込む

        Args:
            catalog_file: TOMLファイルのパス（Noneの場合は組み込みのカタログ）

        Returns:
            ProductCatalog: 商品カタログ

        Raises:
            FormatError: ファイルが存在しない、または内容が不正な場合
        """
        if catalog_file is None:
            return ProductCatalog.default()

        if not catalog_file.exists():
            raise FormatError(f"商品カタログファイルが存在しません: {catalog_file}")

        try:
            with open(catalog_file, "rb") as f:
                data = tomli.load(f)
        except tomli.TOMLDecodeError as e:
            raise FormatError(f"商品カタログファイルを読み込めませんでした: {e}") from e

        try:
            catalog = ProductCatalog(
                set_products=self._parse_set_products(data.get("set_products")),
                product_names=self._parse_mapping(
                    data.get("product_names"), DEFAULT_PRODUCT_NAMES, "product_names"
                ),
                shipping_codes=self._parse_mapping(
                    data.get("shipping_codes"), DEFAULT_SHIPPING_CODES, "shipping_codes"
                ),
                default_shipping_code=str(
                    data.get("default_shipping_code", DEFAULT_SHIPPING_CODE)
                ),
            )
        except (TypeError, ValueError, KeyError, InvalidOperation) as e:
            raise FormatError(f"商品カタログの内容が不正です: {e}") from e

        logger.info(
            "商品カタログを読み込みました",
            extra={
                "context": {
                    "file": str(catalog_file),
                    "set_products": len(catalog.set_products),
                    "product_names": len(catalog.product_names),
                    "shipping_codes": len(catalog.shipping_codes),
                }
            },
        )
        return catalog

    def _parse_mapping(
        self, value: Any, default: Dict[str, str], table: str
    ) -> Dict[str, str]:
        if value is None:
            return default
        if not isinstance(value, dict):
            raise TypeError(f"{table} はテーブルである必要があります")
        return {str(key): str(item) for key, item in value.items()}

    def _parse_set_products(self, value: Any) -> Dict[str, Tuple[SetComponent, ...]]:
        if value is None:
            return DEFAULT_SET_PRODUCTS
        if not isinstance(value, dict):
            raise TypeError("set_products はテーブルである必要があります")

        return {
            str(code): tuple(
                SetComponent(
                    code=str(component["code"]),
                    name=str(component["name"]),
                    price=Decimal(str(component["price"])),
                )
                for component in components
            )
            for code, components in value.items()
        }
