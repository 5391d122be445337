"""受注を弥生販売の売上伝票に変換するユースケース"""
import logging
from datetime import date
from pathlib import Path
from typing import List, Optional, Sequence

from colorme_yayoi.domain.entities.order import Order
from colorme_yayoi.domain.exceptions import ValidationError
from colorme_yayoi.domain.repositories.output_repository import IOutputRepository
from colorme_yayoi.domain.services.sales_slip_encoder import SalesSlipEncoder
from colorme_yayoi.domain.value_objects.conversion_settings import ConversionSettings
from colorme_yayoi.domain.value_objects.match_result import MatchResult

logger = logging.getLogger(__name__)


class ConvertOrdersUseCase:
    """照合済みの受注を売上伝票TXTとして出力するユースケース"""

    def __init__(self, encoder: SalesSlipEncoder, output_repository: IOutputRepository):
        self.encoder = encoder
        self.output_repository = output_repository

    def execute(
        self,
        match_result: MatchResult,
        settings: ConversionSettings,
        sales_ids: Optional[Sequence[str]] = None,
        today: Optional[date] = None,
    ) -> Path:
        """売上伝票TXTを出力する

        Args:
            match_result: 顧客照合の結果
            settings: 変換設定
            sales_ids: 変換する売上ID（省略時はすべて）
            today: 伝票日付とファイル名に使う日付（省略時は今日）

        Returns:
            Path: 出力したファイルのパス

        Raises:
            ValidationError: 新規顧客の登録が完了していない、または変換する受注がない場合
        """
        if not match_result.all_registered:
            pending = [c.assigned_code for c in match_result.new_customers if not c.registered]
            raise ValidationError(
                f"すべての新規顧客にチェックを入れてください（未登録: {', '.join(pending)}）"
            )

        orders = self._select(match_result.orders, sales_ids)
        if not orders:
            raise ValidationError("変換する受注を選択してください")

        processing_date = today or date.today()
        logger.info(
            "売上伝票への変換を開始します",
            extra={
                "context": {
                    "orders": len(orders),
                    "document_number_start": settings.document_number_start,
                }
            },
        )

        content = self.encoder.encode(orders, settings, processing_date=processing_date)
        filename = f"ya_sales_{processing_date.strftime('%Y%m%d')}.txt"
        path = self.output_repository.write_text(filename, content)

        logger.info(f"売上伝票TXTファイルを出力しました（{len(orders)}件）: {path}")
        return path

    def _select(self, orders: Sequence[Order], sales_ids: Optional[Sequence[str]]) -> List[Order]:
        if sales_ids is None:
            return list(orders)

        wanted = set(sales_ids)
        unknown = wanted - {order.sales_id for order in orders}
        if unknown:
            logger.warning(f"受注データにない売上IDを無視します: {', '.join(sorted(unknown))}")
        return [order for order in orders if order.sales_id in wanted]
