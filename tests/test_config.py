"""設定の読み込みのテスト"""
import pydantic
import pytest

from colorme_yayoi.domain.exceptions import ValidationError
from colorme_yayoi.domain.value_objects.conversion_settings import ConversionSettings
from colorme_yayoi.infrastructure.config.config_loader import ConfigLoader

ENV_VARS = [
    "LOG_LEVEL",
    "LOG_DIR",
    "LEDGER_STORE_FILE",
    "OUTPUT_DIR",
    "OPERATOR_CODE",
    "DEFAULT_CUSTOMER_NAME",
    "CATALOG_FILE",
    "ORDER_CSV_ENCODING",
    "LEDGER_CSV_ENCODING",
]


@pytest.fixture
def clean_env(monkeypatch):
    """設定に関係する環境変数を消す"""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_load_defaults(clean_env):
    """環境変数がなければ既定値を使う"""
    config = ConfigLoader().load_config()

    assert config.log_level == "INFO"
    assert config.log_dir == "logs"
    assert config.ledger_store_file == "data/yayoi_customers.json"
    assert config.output_dir == "output"
    assert config.operator_code == "11"
    assert config.default_customer_name == "テネモスショップ"
    assert config.catalog_file is None
    assert config.order_csv_encoding == "cp932"
    assert config.ledger_csv_encoding is None


def test_load_from_env(clean_env):
    """環境変数の値を使う"""
    clean_env.setenv("LOG_LEVEL", "debug")
    clean_env.setenv("OUTPUT_DIR", "/tmp/yayoi")
    clean_env.setenv("OPERATOR_CODE", " 21 ")
    clean_env.setenv("CATALOG_FILE", "catalog.toml")
    clean_env.setenv("LEDGER_CSV_ENCODING", "utf-8")

    config = ConfigLoader().load_config()

    assert config.log_level == "DEBUG"
    assert config.output_dir == "/tmp/yayoi"
    assert config.operator_code == "21"
    assert config.catalog_file == "catalog.toml"
    assert config.ledger_csv_encoding == "utf-8"


def test_invalid_values_fall_back(clean_env):
    """無効な値は既定値に戻す"""
    clean_env.setenv("LOG_LEVEL", "VERBOSE")
    clean_env.setenv("OPERATOR_CODE", "  ")
    clean_env.setenv("ORDER_CSV_ENCODING", "no-such-encoding")

    config = ConfigLoader().load_config()

    assert config.log_level == "INFO"
    assert config.operator_code == "11"
    assert config.order_csv_encoding is None


def test_config_is_frozen(clean_env):
    """設定は変更できない"""
    config = ConfigLoader().load_config()

    with pytest.raises(pydantic.ValidationError):
        config.log_level = "DEBUG"


@pytest.mark.parametrize(
    "raw, expected",
    [("120", 120), (" 7 ", 7), ("15番", 15), ("abc", 1), ("0", 1)],
)
def test_settings_from_user_input(raw, expected):
    """開始番号は先頭の整数部分を使い、数値でない・0の場合は1にする"""
    settings = ConversionSettings.from_user_input(raw, operator_code="21")

    assert settings.document_number_start == expected
    assert settings.operator_code == "21"
    assert settings.default_customer_name == "テネモスショップ"


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_settings_require_start_number(raw):
    """開始番号が未入力ならValidationError"""
    with pytest.raises(ValidationError, match="伝票番号"):
        ConversionSettings.from_user_input(raw)


def test_settings_reject_negative_start_number():
    """負の開始番号はValidationError"""
    with pytest.raises(ValidationError, match="変換設定が無効です"):
        ConversionSettings.from_user_input("-5")
