import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from colorme_yayoi.infrastructure.logging.json_formatter import JSONFormatter, get_version


class LoggingSetup:

    @staticmethod
    def setup(log_level: str, project_root: Path, log_dir: Optional[Path] = None) -> Path:
        level = getattr(logging, log_level.upper(), logging.INFO)

        version = get_version(project_root)
        formatter = JSONFormatter(version=version)

        # ログファイルの保存先ディレクトリを作成
        log_dir = log_dir or project_root / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)

        # ログファイル名にタイムスタンプを含める
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"app_{timestamp}.log"

        # ハンドラーの設定（標準出力はコマンドの結果表示に使う）
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(formatter)

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)

        logging.basicConfig(
            level=level,
            handlers=[stream_handler, file_handler],
            force=True
        )

        logger = logging.getLogger(__name__)
        logger.info("ログファイルを初期化しました", extra={"context": {"log_file": str(log_file)}})
        return log_file
