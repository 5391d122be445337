"""顧客照合サービスのテスト"""
from colorme_yayoi.domain.entities.customer import Customer
from colorme_yayoi.domain.entities.order import MatchMethod
from colorme_yayoi.domain.services.customer_matcher import (
    CustomerMatcher,
    build_new_customer_list,
    find_match,
    max_customer_code,
    normalize_phone,
)


def test_normalize_phone():
    """ハイフン・空白・括弧を除去する"""
    assert normalize_phone("(03) 1234-5678") == "0312345678"
    assert normalize_phone("") == ""


def test_max_customer_code(ledger_customers):
    """数字部分の最大値を返す（数字のないコードは0扱い）"""
    assert max_customer_code(ledger_customers) == 150
    assert max_customer_code([]) == 0
    assert max_customer_code([Customer(customer_code="WEB", name="ウェブ注文")]) == 0


def test_email_match_is_case_insensitive(make_order, ledger_customers):
    """メールアドレスは大文字小文字を区別せず照合する"""
    order = make_order(customer_name="別名", email="takahashi@EXAMPLE.com")

    customer, method = find_match(order, ledger_customers)

    assert customer.customer_code == "A-000150"
    assert method == MatchMethod.EMAIL


def test_email_takes_priority_over_phone(make_order, ledger_customers):
    """メールアドレスと電話番号が別の得意先に一致する場合はメールアドレスを優先する"""
    order = make_order(email="hanako@example.com", phone="090-3333-4444")

    customer, method = find_match(order, ledger_customers)

    assert customer.customer_code == "000101"
    assert method == MatchMethod.EMAIL


def test_phone_match_ignores_formatting(make_order, ledger_customers):
    """書式の違う電話番号でも一致する"""
    order = make_order(customer_name="すずき", phone="090 3333-4444")

    customer, method = find_match(order, ledger_customers)

    assert customer.customer_code == "000102"
    assert method == MatchMethod.PHONE


def test_mobile_is_used_when_phone_is_empty(make_order, ledger_customers):
    """電話番号が空なら携帯番号で照合する"""
    order = make_order(customer_name="すずき", mobile="09033334444")

    customer, method = find_match(order, ledger_customers)

    assert customer.customer_code == "000102"
    assert method == MatchMethod.PHONE


def test_name_match(make_order, ledger_customers):
    """メールアドレス・電話番号が一致しなければ顧客名で照合する"""
    order = make_order(customer_name="高橋商店", email="other@example.com", phone="011-000-0000")

    customer, method = find_match(order, ledger_customers)

    assert customer.customer_code == "A-000150"
    assert method == MatchMethod.NAME


def test_no_match(make_order, ledger_customers):
    """どれにも一致しなければNone"""
    assert find_match(make_order(customer_name="新規太郎"), ledger_customers) is None


def test_match_assigns_sequential_codes(make_order, ledger_customers):
    """新規顧客には最大コードの次から6桁の連番を割り当てる"""
    orders = [
        make_order(sales_id="1", customer_name="新規一郎", email="one@example.com"),
        make_order(sales_id="2", customer_name="佐藤花子"),
        make_order(sales_id="3", customer_name="新規二郎", email="two@example.com"),
    ]

    result = CustomerMatcher().match(orders, ledger_customers)

    assert result.max_code == 150
    assert result.next_code == 151
    assert result.existing_count == 1
    assert result.new_count == 2
    assert [c.assigned_code for c in result.new_customers] == ["000151", "000152"]
    assert [o.destination_code for o in result.orders] == ["000151", "000101", "000152"]
    assert result.orders[1].match_method == MatchMethod.NAME
    assert result.orders[1].matched_customer.customer_code == "000101"


def test_match_with_empty_ledger_starts_from_one(make_order):
    """台帳が空なら000001から割り当てる"""
    result = CustomerMatcher().match([make_order(customer_name="新規一郎")], [])

    assert result.max_code == 0
    assert result.new_customers[0].assigned_code == "000001"


def test_repeat_buyer_gets_same_code(make_order, ledger_customers):
    """同じ新規顧客の複数の受注には同じコードを割り当てる"""
    orders = [
        make_order(sales_id="1", customer_name="新規一郎", email="one@example.com"),
        make_order(sales_id="2", customer_name="新規一郎（2回目）", email="one@example.com"),
        make_order(sales_id="3", customer_name="名前だけ"),
        make_order(sales_id="4", customer_name="名前だけ"),
    ]

    result = CustomerMatcher().match(orders, ledger_customers)

    assert len(result.new_customers) == 2
    assert [o.destination_code for o in result.orders] == ["000151", "000151", "000152", "000152"]
    # 照合できなかった受注の件数は重複も含めて数える
    assert result.new_count == 4


def test_duplicate_detection_does_not_use_phone(make_order):
    """電話番号が同じでもメールアドレスが違えば別の新規顧客になる"""
    orders = [
        make_order(sales_id="1", customer_name="山田太郎", email="a@example.com", phone="03-0000-0000"),
        make_order(sales_id="2", customer_name="山田太郎", email="b@example.com", phone="03-0000-0000"),
    ]

    result = CustomerMatcher().match(orders, [])

    assert [c.assigned_code for c in result.new_customers] == ["000001", "000002"]


def test_order_without_email_reuses_code_by_name(make_order):
    """メールアドレスのない受注は、先に出現した同名の新規顧客のコードを使う"""
    orders = [
        make_order(sales_id="1", customer_name="山田太郎", email="a@example.com"),
        make_order(sales_id="2", customer_name="山田太郎"),
    ]

    result = CustomerMatcher().match(orders, [])

    assert len(result.new_customers) == 1
    assert result.orders[1].destination_code == "000001"


def test_every_order_gets_destination_code(make_order, ledger_customers):
    """照合後はすべての受注に得意先コードが設定される"""
    orders = [make_order(sales_id=str(i), customer_name=f"顧客{i % 3}") for i in range(6)]

    result = CustomerMatcher().match(orders, ledger_customers)

    assert all(order.destination_code for order in result.orders)


def test_match_does_not_modify_input(make_order, ledger_customers):
    """入力の受注は変更しない"""
    order = make_order(customer_name="新規一郎", phone="03-9999-9999")

    result = CustomerMatcher().match([order], ledger_customers)

    assert order.destination_code == ""
    assert order.matched_customer is None
    assert result.orders[0] is not order
    assert result.new_customers[0].phone == "03-9999-9999"


def test_build_new_customer_list_skips_matched_orders(make_order):
    """照合済みの受注には候補を作らない"""
    matched = make_order(
        sales_id="1",
        matched_customer=Customer(customer_code="000005", name="山田太郎"),
        destination_code="000005",
    )

    orders, candidates = build_new_customer_list([matched], start_code=10)

    assert candidates == []
    assert orders[0].destination_code == "000005"
