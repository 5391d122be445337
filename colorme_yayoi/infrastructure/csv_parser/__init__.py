"""CSVパーサーモジュール"""
from colorme_yayoi.infrastructure.csv_parser.ledger_parser import YayoiLedgerParser
from colorme_yayoi.infrastructure.csv_parser.order_parser import ColorMeOrderParser

__all__ = ["ColorMeOrderParser", "YayoiLedgerParser"]
