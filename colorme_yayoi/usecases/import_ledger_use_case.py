"""得意先リストCSVを顧客台帳として取り込むユースケース"""
import logging
from pathlib import Path
from typing import List, Optional

from colorme_yayoi.domain.entities.customer import Customer
from colorme_yayoi.domain.repositories.ledger_repository import ILedgerRepository
from colorme_yayoi.infrastructure.csv_parser.ledger_parser import YayoiLedgerParser
from colorme_yayoi.infrastructure.csv_parser.text_reader import read_csv_text

logger = logging.getLogger(__name__)


class ImportLedgerUseCase:
    """弥生販売の得意先リストCSVを解析して保存するユースケース"""

    def __init__(
        self,
        ledger_parser: YayoiLedgerParser,
        ledger_repository: ILedgerRepository,
        encoding: Optional[str] = None,
    ):
        self.ledger_parser = ledger_parser
        self.ledger_repository = ledger_repository
        self.encoding = encoding

    def execute(self, csv_path: Path) -> List[Customer]:
        """得意先リストCSVを取り込む

        Args:
            csv_path: 得意先リストCSVのパス

        Returns:
            List[Customer]: 取り込んだ得意先のリスト

        Raises:
            FormatError: CSVの形式が不正な場合
        """
        logger.info(f"顧客台帳の取り込みを開始します: {csv_path}")

        try:
            # ステップ1: CSVを解析
            logger.info("ステップ1: 得意先リストCSVを解析中...")
            customers = self.ledger_parser.parse(read_csv_text(csv_path, self.encoding))
            logger.info(f"顧客台帳読み込み完了: {len(customers)}件")

            # ステップ2: 保存
            logger.info("ステップ2: 顧客台帳を保存中...")
            self.ledger_repository.save(customers)

            return customers

        except ValueError as e:
            logger.error(f"顧客台帳の取り込みに失敗しました: {e}")
            raise
