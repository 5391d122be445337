"""YayoiLedgerParserのテスト"""
import pytest

from colorme_yayoi.domain.exceptions import FormatError
from colorme_yayoi.infrastructure.csv_parser.ledger_parser import YayoiLedgerParser


def test_parse_ledger(ledger_csv_text):
    """5行目のヘッダーから列を探し、6行目以降を読む"""
    customers = YayoiLedgerParser().parse(ledger_csv_text)

    assert [customer.customer_code for customer in customers] == ["000101", "000102", "000150"]
    hanako = customers[0]
    assert hanako.name == "佐藤花子"
    assert hanako.furigana == "サトウハナコ"
    assert hanako.phone == "03-1111-2222"
    assert hanako.email == "hanako@example.com"


def test_parse_ledger_trims_values():
    """値の前後の空白を取り除く"""
    text = "\n".join(
        [
            "得意先リスト",
            ",",
            "コード順",
            ",",
            ",コード,名称",
            ", 000201 , 伊藤 ",
        ]
    )

    customers = YayoiLedgerParser().parse(text)

    assert customers[0].customer_code == "000201"
    assert customers[0].name == "伊藤"
    assert customers[0].email == ""


def test_parse_ledger_without_required_columns(ledger_csv_text):
    """コード・名称の列がない場合はFormatError"""
    text = ledger_csv_text.replace('"名称"', '"得意先名"')

    with pytest.raises(FormatError, match="コード、名称"):
        YayoiLedgerParser().parse(text)


def test_parse_ledger_too_few_lines():
    """ヘッダー行まで届かない場合はFormatError"""
    with pytest.raises(FormatError, match="顧客台帳CSVが空です"):
        YayoiLedgerParser().parse("得意先リスト\n,\nコード順\n,")


def test_parse_ledger_without_customers():
    """有効な得意先がない場合はFormatError"""
    text = "得意先リスト\n,\nコード順\n,\n,コード,名称\n,,名称だけ\n"

    with pytest.raises(FormatError, match="有効な顧客データ"):
        YayoiLedgerParser().parse(text)
