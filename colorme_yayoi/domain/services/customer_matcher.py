"""顧客照合サービス

カラーミーショップの購入者を弥生販売の得意先台帳と照合し、
一致しない購入者に新しい得意先コードを割り当てる。
"""
import re
from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Tuple

from colorme_yayoi.domain.entities.customer import Customer, NewCustomerCandidate
from colorme_yayoi.domain.entities.order import MatchMethod, Order
from colorme_yayoi.domain.value_objects.match_result import MatchResult

CODE_WIDTH = 6

_PHONE_NOISE = re.compile(r"[-\s()]")


def normalize_phone(phone: str) -> str:
    """電話番号からハイフン、空白、括弧を除去する"""
    return _PHONE_NOISE.sub("", phone or "")


def format_customer_code(code: int) -> str:
    return str(code).zfill(CODE_WIDTH)


def max_customer_code(customers: Sequence[Customer]) -> int:
    """台帳の最大得意先コード（数字部分）を返す。台帳が空なら0"""
    if not customers:
        return 0
    return max(customer.numeric_code for customer in customers)


def find_match(
    order: Order, customers: Sequence[Customer]
) -> Optional[Tuple[Customer, MatchMethod]]:
    """受注の購入者に一致する得意先を探す

    メールアドレス、電話番号、顧客名の順に照合し、最初に一致したものを返す。

    Args:
        order: 受注
        customers: 得意先台帳

    Returns:
        Optional[Tuple[Customer, MatchMethod]]: 一致した得意先と照合方法、一致しなければNone
    """
    # 優先度1: メールアドレス（大文字小文字を区別しない）
    if order.email:
        email = order.email.lower()
        for customer in customers:
            if customer.email and customer.email.lower() == email:
                return customer, MatchMethod.EMAIL

    # 優先度2: 電話番号（なければ携帯番号）
    phone = normalize_phone(order.contact_phone)
    if phone:
        for customer in customers:
            if customer.phone and normalize_phone(customer.phone) == phone:
                return customer, MatchMethod.PHONE

    # 優先度3: 顧客名（完全一致）
    if order.customer_name:
        for customer in customers:
            if customer.name and customer.name == order.customer_name:
                return customer, MatchMethod.NAME

    return None


def build_new_customer_list(
    orders: Sequence[Order], start_code: int
) -> Tuple[List[Order], List[NewCustomerCandidate]]:
    """未照合の受注から新規顧客候補を作成し、得意先コードを割り当てる

    メールアドレスがあればメールアドレスで、なければ顧客名で重複を判定する。
    電話番号は重複判定に使わない。

    Args:
        orders: 照合済みの受注（照合できなかったものは matched_customer が None）
        start_code: 最初に割り当てる得意先コード

    Returns:
        Tuple[List[Order], List[NewCustomerCandidate]]:
            得意先コードを設定した受注と、出現順の新規顧客候補
    """
    candidates: List[NewCustomerCandidate] = []
    code_by_email: Dict[str, str] = {}
    code_by_name: Dict[str, str] = {}
    current_code = start_code
    annotated: List[Order] = []

    for order in orders:
        if order.matched_customer is not None:
            annotated.append(order)
            continue

        # 重複している場合は既に割り当てたコードを使う
        if order.email:
            duplicate_code = code_by_email.get(order.email)
        else:
            duplicate_code = code_by_name.get(order.customer_name)

        if duplicate_code is not None:
            annotated.append(replace(order, destination_code=duplicate_code))
            continue

        assigned = format_customer_code(current_code)
        candidates.append(
            NewCustomerCandidate(
                assigned_code=assigned,
                customer_name=order.customer_name,
                zip=order.zip,
                prefecture=order.prefecture,
                address=order.address,
                email=order.email,
                phone=order.contact_phone,
            )
        )
        annotated.append(replace(order, destination_code=assigned))

        if order.email:
            code_by_email.setdefault(order.email, assigned)
        code_by_name.setdefault(order.customer_name, assigned)
        current_code += 1

    return annotated, candidates


class CustomerMatcher:
    """受注と得意先台帳を照合するサービス"""

    def match(self, orders: Sequence[Order], customers: Sequence[Customer]) -> MatchResult:
        """すべての受注を照合し、新規顧客候補の一覧を作成する

        Args:
            orders: 受注のリスト
            customers: 得意先台帳

        Returns:
            MatchResult: 照合結果（入力の受注は変更しない）
        """
        existing_count = 0
        new_count = 0
        matched: List[Order] = []

        for order in orders:
            found = find_match(order, customers)
            if found:
                customer, method = found
                matched.append(
                    replace(
                        order,
                        matched_customer=customer,
                        match_method=method,
                        destination_code=customer.customer_code,
                    )
                )
                existing_count += 1
            else:
                matched.append(
                    replace(
                        order,
                        matched_customer=None,
                        match_method=MatchMethod.NONE,
                        destination_code="",
                    )
                )
                new_count += 1

        max_code = max_customer_code(customers)
        next_code = max_code + 1
        annotated, new_customers = build_new_customer_list(matched, next_code)

        return MatchResult(
            orders=annotated,
            existing_count=existing_count,
            new_count=new_count,
            max_code=max_code,
            next_code=next_code,
            new_customers=new_customers,
        )
