"""CSVファイルの読み込み（文字コード判定付き）"""
import logging
from pathlib import Path
from typing import Optional

from charset_normalizer import from_bytes

logger = logging.getLogger(__name__)

UTF8_BOM = b"\xef\xbb\xbf"


def decode_csv_bytes(raw: bytes, encoding: Optional[str] = None) -> str:
    """バイト列を文字列に変換する

    Args:
        raw: ファイルの内容
        encoding: 文字コード（Noneの場合は自動判定）

    Returns:
        str: デコードした文字列（UTF-8のBOMは除く）

    Raises:
        ValueError: 指定した文字コードでデコードできない場合
    """
    if raw.startswith(UTF8_BOM):
        return raw[len(UTF8_BOM):].decode("utf-8")

    if encoding:
        try:
            return raw.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            raise ValueError(f"文字コード {encoding} でファイルを読み込めませんでした: {e}") from e

    match = from_bytes(raw).best()
    detected = match.encoding if match is not None else "utf-8"
    logger.debug(f"文字コードを判定しました: {detected}")
    return raw.decode(detected, errors="replace")


def read_csv_text(path: Path, encoding: Optional[str] = None) -> str:
    """CSVファイルを読み込んで文字列を返す

    Args:
        path: CSVファイルのパス
        encoding: 文字コード（Noneの場合は自動判定）

    Returns:
        str: ファイルの内容

    Raises:
        ValueError: ファイルが存在しない場合、またはデコードに失敗した場合
    """
    if not path.exists():
        raise ValueError(f"CSVファイルが存在しません: {path}")

    logger.info(f"CSVファイルを読み込み中: {path}")
    return decode_csv_bytes(path.read_bytes(), encoding)
