"""顧客エンティティ"""
import re
from dataclasses import dataclass, replace

_NON_DIGIT = re.compile(r"[^0-9]")


@dataclass(frozen=True)
class Customer:
    """弥生販売の得意先台帳の1件を表すエンティティ"""

    customer_code: str
    name: str
    furigana: str = ""
    phone: str = ""
    email: str = ""

    def __post_init__(self):
        """バリデーション"""
        if not self.customer_code:
            raise ValueError("得意先コードが空です")

    @property
    def numeric_code(self) -> int:
        """コードから数字以外を除いた値（数字がなければ0）"""
        digits = _NON_DIGIT.sub("", self.customer_code)
        return int(digits) if digits else 0


@dataclass(frozen=True)
class NewCustomerCandidate:
    """台帳に一致する得意先がない購入者（新規顧客候補）"""

    assigned_code: str
    customer_name: str
    zip: str = ""
    prefecture: str = ""
    address: str = ""
    email: str = ""
    phone: str = ""
    furigana: str = ""
    registered: bool = False

    def mark_registered(self, registered: bool = True) -> "NewCustomerCandidate":
        """弥生販売への登録済みフラグを切り替えたコピーを返す"""
        return replace(self, registered=registered)

    def to_customer(self) -> Customer:
        """得意先台帳のエントリに変換する"""
        return Customer(
            customer_code=self.assigned_code,
            name=self.customer_name,
            furigana="",
            phone=self.phone,
            email=self.email,
        )
