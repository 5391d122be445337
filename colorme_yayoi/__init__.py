"""カラーミーショップ受注データを弥生販売の取込形式に変換するツール"""

__version__ = "3.4.0"
