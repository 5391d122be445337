"""ドメイン例外"""


class FormatError(ValueError):
    """入力データの形式が不正な場合の例外

    必須項目の欠落、行数不足、有効なレコードが0件の場合に送出する。
    """


class ValidationError(ValueError):
    """利用者が指定した設定や操作の前提条件が満たされていない場合の例外"""
