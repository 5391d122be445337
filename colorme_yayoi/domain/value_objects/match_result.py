"""顧客照合結果を表す値オブジェクト"""
from dataclasses import dataclass
from typing import List

from colorme_yayoi.domain.entities.customer import NewCustomerCandidate
from colorme_yayoi.domain.entities.order import Order


@dataclass(frozen=True)
class MatchResult:
    """顧客照合の結果"""

    orders: List[Order]
    existing_count: int
    new_count: int
    max_code: int
    next_code: int
    new_customers: List[NewCustomerCandidate]

    @property
    def total_orders(self) -> int:
        return len(self.orders)

    @property
    def all_registered(self) -> bool:
        """新規顧客候補がすべて登録済みか（候補なしの場合もTrue）"""
        return all(candidate.registered for candidate in self.new_customers)
