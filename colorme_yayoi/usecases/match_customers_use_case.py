"""受注の購入者を顧客台帳と照合するユースケース"""
import logging
from pathlib import Path
from typing import Optional

from colorme_yayoi.domain.exceptions import FormatError
from colorme_yayoi.domain.repositories.ledger_repository import ILedgerRepository
from colorme_yayoi.domain.services.customer_matcher import CustomerMatcher
from colorme_yayoi.domain.value_objects.match_result import MatchResult
from colorme_yayoi.infrastructure.csv_parser.order_parser import ColorMeOrderParser
from colorme_yayoi.infrastructure.csv_parser.text_reader import read_csv_text

logger = logging.getLogger(__name__)


class MatchCustomersUseCase:
    """受注CSVを解析し、保存済みの顧客台帳と照合するユースケース"""

    def __init__(
        self,
        order_parser: ColorMeOrderParser,
        ledger_repository: ILedgerRepository,
        matcher: Optional[CustomerMatcher] = None,
        encoding: Optional[str] = "cp932",
    ):
        self.order_parser = order_parser
        self.ledger_repository = ledger_repository
        self.matcher = matcher or CustomerMatcher()
        self.encoding = encoding

    def execute(self, orders_csv: Path) -> MatchResult:
        """受注CSVを読み込んで顧客照合を行う

        Args:
            orders_csv: カラーミーショップの受注CSVのパス

        Returns:
            MatchResult: 照合結果

        Raises:
            FormatError: CSVの形式が不正な場合、顧客台帳が保存されていない場合
        """
        logger.info(f"顧客照合を開始します: {orders_csv}")

        try:
            # ステップ1: 受注CSVを解析
            logger.info("ステップ1: 受注CSVを解析中...")
            orders = self.order_parser.parse(read_csv_text(orders_csv, self.encoding))
            logger.info(f"受注データ読み込み完了: {len(orders)}件")

            # ステップ2: 顧客台帳を読み込み
            logger.info("ステップ2: 顧客台帳を読み込み中...")
            customers = self.ledger_repository.load()
            if not customers:
                raise FormatError("顧客台帳が保存されていません。先に得意先リストを取り込んでください")

            # ステップ3: 照合
            logger.info("ステップ3: 顧客照合中...")
            result = self.matcher.match(orders, customers)
            logger.info(
                "顧客照合が完了しました",
                extra={
                    "context": {
                        "total": result.total_orders,
                        "existing": result.existing_count,
                        "new": result.new_count,
                        "max_code": result.max_code,
                        "next_code": result.next_code,
                        "new_customers": len(result.new_customers),
                    }
                },
            )
            return result

        except ValueError as e:
            logger.error(f"顧客照合に失敗しました: {e}")
            raise
