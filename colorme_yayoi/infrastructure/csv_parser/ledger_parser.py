"""弥生販売 得意先リストCSVパーサー"""
from typing import List, Optional, Sequence

from colorme_yayoi.domain.entities.customer import Customer
from colorme_yayoi.domain.exceptions import FormatError
from colorme_yayoi.infrastructure.csv_parser.csv_splitter import split_csv_fields, split_csv_lines

# 行0: タイトル（"得意先リスト"）、行1: 空、行2: ソート順、行3: 空、行4: ヘッダー
HEADER_LINE_INDEX = 4

CODE_COLUMN = "コード"
NAME_COLUMN = "名称"
FURIGANA_COLUMN = "フリガナ"
PHONE_COLUMN = "TEL"
EMAIL_COLUMN = "メールアドレス"


def _find(headers: Sequence[str], column: str) -> Optional[int]:
    try:
        return list(headers).index(column)
    except ValueError:
        return None


def _value(columns: Sequence[str], position: Optional[int]) -> str:
    if position is None or position >= len(columns):
        return ""
    return columns[position].strip()


class YayoiLedgerParser:
    """弥生販売からエクスポートした得意先リストを解析してCustomerエンティティに変換する"""

    def parse(self, csv_text: str) -> List[Customer]:
        """得意先リストCSVを解析する

        Args:
            csv_text: CSVファイルの内容

        Returns:
            List[Customer]: 得意先のリスト

        Raises:
            FormatError: 行数が足りない、コード・名称の列がない、有効な得意先がない場合
        """
        lines = split_csv_lines(csv_text)
        if len(lines) <= HEADER_LINE_INDEX:
            raise FormatError("顧客台帳CSVが空です")

        # 先頭に空列があるため列位置は名前で探す
        headers = split_csv_fields(lines[HEADER_LINE_INDEX])
        code_at = _find(headers, CODE_COLUMN)
        name_at = _find(headers, NAME_COLUMN)
        if code_at is None or name_at is None:
            raise FormatError("CSVファイルに必要な項目（コード、名称）が見つかりません")

        furigana_at = _find(headers, FURIGANA_COLUMN)
        phone_at = _find(headers, PHONE_COLUMN)
        email_at = _find(headers, EMAIL_COLUMN)
        min_columns = max(code_at, name_at) + 1

        customers: List[Customer] = []
        for line in lines[HEADER_LINE_INDEX + 1:]:
            line = line.strip()
            if not line:
                continue

            columns = split_csv_fields(line)
            if len(columns) < min_columns:
                continue

            code = _value(columns, code_at)
            name = _value(columns, name_at)
            if not code or not name:
                continue

            customers.append(
                Customer(
                    customer_code=code,
                    name=name,
                    furigana=_value(columns, furigana_at),
                    phone=_value(columns, phone_at),
                    email=_value(columns, email_at),
                )
            )

        if not customers:
            raise FormatError("有効な顧客データが見つかりませんでした")

        return customers
