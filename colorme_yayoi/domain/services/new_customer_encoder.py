"""新規顧客（得意先台帳インポート形式）のエンコーダー"""
import re
from typing import List, Sequence, Tuple

from colorme_yayoi.domain.entities.customer import NewCustomerCandidate
from colorme_yayoi.domain.services.kana import to_half_width_katakana

FIELD_COUNT = 48
DELIMITER = "\t"
LINE_BREAK = "\r\n"

HONORIFIC = "様"
SALES_SLIP_PATTERN = "334401"
TRADE_TYPE = "2"
PRICE_TYPE = "1"
TAX_SHIFT = "5"
COLLECTION_CYCLE = "1"
FEE_BURDEN = "1"
AMOUNT_ROUNDING = "1"
TAX_ROUNDING = "1"
OPERATOR_CODE = "11"
REFERENCE_DISPLAY = "1"
OUTPUT_METHOD = "1"

# 数字（半角・全角）の後の空白（半角・全角）で住所を分割する
_ADDRESS_SPLIT = re.compile(r"(.+[0-9０-９])[\s　]+(.+)")


def split_address(full_address: str) -> Tuple[str, str]:
    """住所を「番地まで」と「建物名等」に分割する

    最後の「数字＋空白」までを住所1、残りを住所2とする。
    パターンに一致しない場合は全体を住所1とし、住所2は空にする。
    """
    match = _ADDRESS_SPLIT.fullmatch(full_address)
    if match:
        return match.group(1), match.group(2)
    return full_address, ""


class NewCustomerRecordEncoder:
    """新規顧客候補を弥生販売の得意先インポート用TXT（48項目）に変換する"""

    def encode(self, candidates: Sequence[NewCustomerCandidate]) -> str:
        """未登録の新規顧客候補を1件1行に変換する

        Args:
            candidates: 新規顧客候補（登録済みのものは出力しない）

        Returns:
            str: タブ区切り・CRLF改行のテキスト
        """
        rows = [
            DELIMITER.join(self.build_row(candidate))
            for candidate in candidates
            if not candidate.registered
        ]
        return LINE_BREAK.join(rows)

    def build_row(self, candidate: NewCustomerCandidate) -> List[str]:
        address1, address2 = split_address(
            f"{candidate.prefecture or ''}{candidate.address or ''}"
        )

        row = [
            candidate.assigned_code,                        # コード
            candidate.customer_name,                        # 名称
            to_half_width_katakana(candidate.furigana),     # フリガナ
            candidate.customer_name,                        # 略称
            (candidate.zip or "").replace("-", ""),         # 郵便番号
            address1,                                       # 住所1
            address2,                                       # 住所2
            "",                                             # 部署名
            "",                                             # 役職名
            "",                                             # 担当者
            HONORIFIC,                                      # 敬称
            candidate.phone or "",                          # TEL
            "",                                             # FAX
            "",                                             # 携帯
            "",                                             # メモ1
            "",                                             # メモ2
            "",                                             # メモ3
            "",                                             # 銀行名
            "",                                             # 支店名
            SALES_SLIP_PATTERN,                             # 指定売上伝票
            "",                                             # 口座番号
            "",                                             # 口座名義
            TRADE_TYPE,                                     # 取引区分
            PRICE_TYPE,                                     # 単価種類
            "",                                             # 掛率
            "",                                             # 与信限度額
            "",                                             # 税率
            TAX_SHIFT,                                      # 税転嫁
            "",                                             # 請求締日
            COLLECTION_CYCLE,                               # 回収サイクル
            "",                                             # 回収日
            FEE_BURDEN,                                     # 手数料負担区分
            "",                                             # 請求書発行単位
            "",                                             # 金額端数処理単位
            AMOUNT_ROUNDING,                                # 金額端数処理
            TAX_ROUNDING,                                   # 税端数処理
            OPERATOR_CODE,                                  # 担当者コード
            "",                                             # ホームページ
            candidate.email or "",                          # メールアドレス
            "",                                             # 参照先
            REFERENCE_DISPLAY,                              # 参照表示
            "",                                             # 出力先
            OUTPUT_METHOD,                                  # 出力方法
            "",                                             # ユーザー定義1
            "",                                             # ユーザー定義2
            "",                                             # ユーザー定義3
            "",                                             # ユーザー定義4
            "",                                             # ユーザー定義5
        ]
        return row
