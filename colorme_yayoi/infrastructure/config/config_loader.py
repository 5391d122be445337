"""設定の読み込みを行うサービス"""
import codecs
import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import ValidationError as PydanticValidationError

from colorme_yayoi.domain.value_objects.application_config import (
    DEFAULT_CUSTOMER_NAME,
    DEFAULT_OPERATOR_CODE,
    ApplicationConfig,
)


class ConfigLoader:
    """環境変数（.env）から設定を読み込むサービス"""

    def __init__(self) -> None:
        self.logger = logging.getLogger(__name__)

    def load_config(self) -> ApplicationConfig:
        """アプリケーション設定を読み込む

        Returns:
            ApplicationConfig: アプリケーション設定

        Raises:
            ValueError: 設定値が無効な場合
        """
        load_dotenv()

        log_level = self._parse_log_level(os.getenv("LOG_LEVEL"))

        # 文字コードは空文字の場合に自動判定とする
        order_csv_encoding = self._parse_encoding(os.getenv("ORDER_CSV_ENCODING", "cp932"))
        ledger_csv_encoding = self._parse_encoding(os.getenv("LEDGER_CSV_ENCODING"))

        operator_code = os.getenv("OPERATOR_CODE", DEFAULT_OPERATOR_CODE)
        if not operator_code.strip():
            self.logger.warning(
                f"OPERATOR_CODE が空です。既定値 {DEFAULT_OPERATOR_CODE} を使用します。"
            )
            operator_code = DEFAULT_OPERATOR_CODE

        try:
            config = ApplicationConfig(
                log_level=log_level,
                log_dir=os.getenv("LOG_DIR", "logs"),
                ledger_store_file=os.getenv("LEDGER_STORE_FILE", "data/yayoi_customers.json"),
                output_dir=os.getenv("OUTPUT_DIR", "output"),
                order_csv_encoding=order_csv_encoding,
                ledger_csv_encoding=ledger_csv_encoding,
                operator_code=operator_code,
                default_customer_name=os.getenv("DEFAULT_CUSTOMER_NAME", DEFAULT_CUSTOMER_NAME),
                catalog_file=os.getenv("CATALOG_FILE") or None,
            )

            if config.catalog_file:
                self.logger.info(f"商品カタログファイル: {config.catalog_file}")

            return config
        except PydanticValidationError as e:
            raise ValueError(f"設定値が無効です: {str(e)}")

    def _parse_log_level(self, value: Optional[str]) -> str:
        """ログレベルをパースする

        Args:
            value: 環境変数の値

        Returns:
            str: ログレベル、無効な場合はINFO
        """
        if not value:
            return "INFO"

        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if value.upper() not in valid_levels:
            self.logger.warning(f"LOG_LEVEL の値が無効です: {value}。INFOで実行します。")
            return "INFO"
        return value.upper()

    def _parse_encoding(self, value: Optional[str]) -> Optional[str]:
        """文字コードをパースする

        Args:
            value: 環境変数の値

        Returns:
            Optional[str]: 文字コード、未設定・無効な場合はNone（自動判定）
        """
        if not value or not value.strip():
            return None

        try:
            codecs.lookup(value.strip())
        except LookupError:
            self.logger.warning(f"文字コードの指定が無効です: {value}。自動判定します。")
            return None
        return value.strip()
