"""アプリケーション設定を表す値オブジェクト"""
from typing import Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_OPERATOR_CODE = "11"
DEFAULT_CUSTOMER_NAME = "テネモスショップ"


class ApplicationConfig(BaseModel):
    """アプリケーション設定の値オブジェクト"""

    # ログ設定
    log_level: str = Field(default="INFO", description="ログレベル")
    log_dir: str = Field(default="logs", description="ログファイルの保存先")

    # 入出力設定
    ledger_store_file: str = Field(
        default="data/yayoi_customers.json", description="顧客台帳の保存ファイル"
    )
    output_dir: str = Field(default="output", description="TXTファイルの出力先")
    order_csv_encoding: Optional[str] = Field(
        default="cp932", description="カラーミーCSVの文字コード（Noneの場合は自動判定）"
    )
    ledger_csv_encoding: Optional[str] = Field(
        default=None, description="弥生販売CSVの文字コード（Noneの場合は自動判定）"
    )

    # 変換設定
    operator_code: str = Field(default=DEFAULT_OPERATOR_CODE, description="担当者コード")
    default_customer_name: str = Field(
        default=DEFAULT_CUSTOMER_NAME, description="購入者名が空の場合の表示名"
    )
    catalog_file: Optional[str] = Field(default=None, description="商品カタログTOMLファイル")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """ログレベルのバリデーション"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"ログレベルは {valid_levels} のいずれかである必要があります")
        return v.upper()

    @field_validator("operator_code")
    @classmethod
    def validate_operator_code(cls, v: str) -> str:
        """担当者コードのバリデーション"""
        if not v.strip():
            raise ValueError("担当者コードが空です")
        return v.strip()

    class Config:
        frozen = True
