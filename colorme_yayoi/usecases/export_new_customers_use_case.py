"""新規顧客をTXTで出力するユースケース"""
import logging
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

from colorme_yayoi.domain.entities.customer import NewCustomerCandidate
from colorme_yayoi.domain.exceptions import ValidationError
from colorme_yayoi.domain.repositories.output_repository import IOutputRepository
from colorme_yayoi.domain.services.new_customer_encoder import NewCustomerRecordEncoder

logger = logging.getLogger(__name__)


class ExportNewCustomersUseCase:
    """未登録の新規顧客を弥生販売の得意先インポート形式で出力するユースケース"""

    def __init__(
        self,
        output_repository: IOutputRepository,
        encoder: Optional[NewCustomerRecordEncoder] = None,
    ):
        self.output_repository = output_repository
        self.encoder = encoder or NewCustomerRecordEncoder()

    def execute(
        self, candidates: Sequence[NewCustomerCandidate], today: Optional[date] = None
    ) -> Path:
        """新規顧客TXTを出力する

        Args:
            candidates: 新規顧客候補
            today: ファイル名に使う日付（省略時は今日）

        Returns:
            Path: 出力したファイルのパス

        Raises:
            ValidationError: 出力する顧客がない場合（すべて登録済み）
        """
        unregistered = [candidate for candidate in candidates if not candidate.registered]
        if not unregistered:
            raise ValidationError("出力する顧客がありません（すべて登録済み）")

        content = self.encoder.encode(unregistered)
        filename = f"ya_n_cstmers_{(today or date.today()).strftime('%Y%m%d')}.txt"
        path = self.output_repository.write_text(filename, content)

        logger.info(f"新規顧客TXTファイルを出力しました（{len(unregistered)}件）: {path}")
        return path
