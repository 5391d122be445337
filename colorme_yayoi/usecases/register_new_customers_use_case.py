"""登録済みの新規顧客を顧客台帳に追加するユースケース"""
import logging
from typing import List, Sequence

from colorme_yayoi.domain.entities.customer import Customer, NewCustomerCandidate
from colorme_yayoi.domain.exceptions import FormatError, ValidationError
from colorme_yayoi.domain.repositories.ledger_repository import ILedgerRepository

logger = logging.getLogger(__name__)


class RegisterNewCustomersUseCase:
    """弥生販売に登録した新規顧客を保存済みの顧客台帳に追加するユースケース"""

    def __init__(self, ledger_repository: ILedgerRepository):
        self.ledger_repository = ledger_repository

    def execute(self, candidates: Sequence[NewCustomerCandidate]) -> List[Customer]:
        """登録済みの新規顧客を台帳に追加する

        Args:
            candidates: 新規顧客候補（registered が True のものだけ追加する）

        Returns:
            List[Customer]: 更新後の顧客台帳

        Raises:
            ValidationError: 登録済みの顧客がない場合
            FormatError: 顧客台帳が保存されていない場合
        """
        registered = [candidate for candidate in candidates if candidate.registered]
        if not registered:
            raise ValidationError("登録済みの顧客がありません")

        customers = self.ledger_repository.load()
        if customers is None:
            raise FormatError("顧客台帳が保存されていません")

        updated = list(customers) + [candidate.to_customer() for candidate in registered]
        self.ledger_repository.save(updated)

        logger.info(f"顧客台帳を更新しました（+{len(registered)}件）")
        return updated
