"""Shift_JIS（CP932）でTXTファイルを出力するサービス"""
import logging
from pathlib import Path

from colorme_yayoi.domain.repositories.output_repository import IOutputRepository

logger = logging.getLogger(__name__)

OUTPUT_ENCODING = "cp932"


class ShiftJisFileWriter(IOutputRepository):
    """弥生販売の取込用ファイルをShift_JISで書き出す"""

    def __init__(self, output_dir: Path):
        self.output_dir = output_dir

    def write_text(self, filename: str, content: str) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / filename

        # Shift_JISで表せない文字は「?」に置き換える
        path.write_bytes(content.encode(OUTPUT_ENCODING, errors="replace"))

        logger.info(
            f"ファイルを出力しました: {path}",
            extra={"context": {"encoding": OUTPUT_ENCODING, "chars": len(content)}},
        )
        return path
