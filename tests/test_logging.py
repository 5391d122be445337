"""ログ設定のテスト"""
import json
import logging
from pathlib import Path

from colorme_yayoi import __version__
from colorme_yayoi.infrastructure.logging.json_formatter import JSONFormatter, get_version
from colorme_yayoi.infrastructure.logging.logging_setup import LoggingSetup


def test_json_formatter_includes_context():
    """contextを含むJSONを出力する"""
    record = logging.LogRecord(
        name="colorme_yayoi.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="顧客照合が完了しました",
        args=(),
        exc_info=None,
    )
    record.context = {"new": 2}

    data = json.loads(JSONFormatter(version="1.0.0").format(record))

    assert data["level"] == "INFO"
    assert data["version"] == "1.0.0"
    assert data["message"] == "顧客照合が完了しました"
    assert data["context"] == {"new": 2}
    assert "exception" not in data


def test_get_version_from_pyproject(tmp_path: Path):
    """pyproject.toml のバージョンを読む"""
    (tmp_path / "pyproject.toml").write_text('[project]\nversion = "9.9.9"\n', encoding="utf-8")

    assert get_version(tmp_path) == "9.9.9"


def test_get_version_without_pyproject(tmp_path: Path):
    """pyproject.toml がなければパッケージのバージョン"""
    assert get_version(tmp_path) == __version__


def test_logging_setup_writes_file(tmp_path: Path):
    """ログディレクトリにJSON形式のログファイルを作る"""
    root = logging.getLogger()
    original_level = root.level
    log_file = LoggingSetup.setup("DEBUG", tmp_path, tmp_path / "logs")
    try:
        logging.getLogger("colorme_yayoi.test").info("テスト")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert log_file.parent == tmp_path / "logs"
        lines = log_file.read_text(encoding="utf-8").splitlines()
        assert json.loads(lines[-1])["message"] == "テスト"
    finally:
        for handler in list(root.handlers):
            handler.close()
            root.removeHandler(handler)
        root.setLevel(original_level)
