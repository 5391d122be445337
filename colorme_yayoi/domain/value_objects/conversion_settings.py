"""売上伝票変換の設定を表す値オブジェクト"""
import re
from typing import Optional

import pydantic
from pydantic import BaseModel, Field

from colorme_yayoi.domain.exceptions import ValidationError
from colorme_yayoi.domain.value_objects.application_config import (
    DEFAULT_CUSTOMER_NAME,
    DEFAULT_OPERATOR_CODE,
)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class ConversionSettings(BaseModel):
    """売上伝票変換の実行単位の設定"""

    document_number_start: int = Field(default=1, ge=1, description="伝票番号（開始番号）")
    operator_code: str = Field(default=DEFAULT_OPERATOR_CODE, description="担当者コード")
    default_customer_name: str = Field(
        default=DEFAULT_CUSTOMER_NAME, description="購入者名が空の場合の表示名"
    )

    class Config:
        frozen = True

    @classmethod
    def from_user_input(
        cls,
        document_number_start: Optional[str],
        operator_code: str = DEFAULT_OPERATOR_CODE,
        default_customer_name: str = DEFAULT_CUSTOMER_NAME,
    ) -> "ConversionSettings":
        """利用者の入力値から設定を作成する

        Args:
            document_number_start: 伝票番号（開始番号）の入力値
            operator_code: 担当者コード
            default_customer_name: 購入者名が空の場合の表示名

        Returns:
            ConversionSettings: 変換設定

        Raises:
            ValidationError: 開始番号が未入力、または設定値が無効な場合
        """
        if document_number_start is None or not document_number_start.strip():
            raise ValidationError("伝票番号（開始番号）を入力してください")

        # 先頭の整数部分のみを採用し、数値でない・0の場合は1から始める
        match = _LEADING_INT.match(document_number_start)
        start = int(match.group(1)) if match else 0
        if start == 0:
            start = 1

        try:
            return cls(
                document_number_start=start,
                operator_code=operator_code,
                default_customer_name=default_customer_name,
            )
        except pydantic.ValidationError as e:
            raise ValidationError(f"変換設定が無効です: {e}") from e
