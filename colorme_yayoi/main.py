"""メインエントリーポイント

カラーミーショップの受注CSVを弥生販売の売上伝票インポート形式に変換する。

使用方法:
    colorme-yayoi ledger import 得意先リスト.csv
    colorme-yayoi match sales_all.csv --export-new
    colorme-yayoi convert sales_all.csv --start-number 120 --registered
"""
import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from colorme_yayoi.domain.services.sales_slip_encoder import SalesSlipEncoder
from colorme_yayoi.domain.value_objects.application_config import ApplicationConfig
from colorme_yayoi.domain.value_objects.conversion_settings import ConversionSettings
from colorme_yayoi.domain.value_objects.match_result import MatchResult
from colorme_yayoi.infrastructure.config.catalog_loader import CatalogLoader
from colorme_yayoi.infrastructure.config.config_loader import ConfigLoader
from colorme_yayoi.infrastructure.csv_parser.ledger_parser import YayoiLedgerParser
from colorme_yayoi.infrastructure.csv_parser.order_parser import ColorMeOrderParser
from colorme_yayoi.infrastructure.logging.logging_setup import LoggingSetup
from colorme_yayoi.infrastructure.output.shift_jis_writer import ShiftJisFileWriter
from colorme_yayoi.infrastructure.storage.json_ledger_repository import JsonLedgerRepository
from colorme_yayoi.usecases.convert_orders_use_case import ConvertOrdersUseCase
from colorme_yayoi.usecases.export_new_customers_use_case import ExportNewCustomersUseCase
from colorme_yayoi.usecases.import_ledger_use_case import ImportLedgerUseCase
from colorme_yayoi.usecases.match_customers_use_case import MatchCustomersUseCase
from colorme_yayoi.usecases.register_new_customers_use_case import RegisterNewCustomersUseCase

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """コマンドライン引数の定義"""
    parser = argparse.ArgumentParser(
        prog="colorme-yayoi",
        description="カラーミーショップの受注データを弥生販売の売上伝票に変換します",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # 顧客台帳
    ledger = subparsers.add_parser("ledger", help="顧客台帳（得意先リスト）の管理")
    ledger_commands = ledger.add_subparsers(dest="ledger_command", required=True)

    ledger_import = ledger_commands.add_parser("import", help="得意先リストCSVを取り込む")
    ledger_import.add_argument("csv_file", type=Path, help="弥生販売の得意先リストCSV")

    ledger_commands.add_parser("show", help="保存データの概要を表示する")

    ledger_export = ledger_commands.add_parser("export", help="保存データをJSONで出力する")
    ledger_export.add_argument(
        "--dir", type=Path, default=None, help="出力先ディレクトリ（省略時は OUTPUT_DIR）"
    )

    ledger_import_json = ledger_commands.add_parser(
        "import-json", help="JSONファイルから保存データを読み込む"
    )
    ledger_import_json.add_argument("json_file", type=Path, help="出力済みのJSONファイル")

    ledger_commands.add_parser("clear", help="保存データを削除する")

    # 顧客照合
    match = subparsers.add_parser("match", help="受注の購入者を顧客台帳と照合する")
    match.add_argument("orders_csv", type=Path, help="カラーミーショップの受注CSV")
    match.add_argument(
        "--export-new", action="store_true", help="新規顧客を得意先インポート用TXTで出力する"
    )

    # 売上伝票変換
    convert = subparsers.add_parser("convert", help="受注を売上伝票TXTに変換する")
    convert.add_argument("orders_csv", type=Path, help="カラーミーショップの受注CSV")
    convert.add_argument("--start-number", default=None, help="伝票番号（開始番号）")
    convert.add_argument(
        "--registered",
        action="store_true",
        help="新規顧客を弥生販売に登録済みとして顧客台帳に追加してから変換する",
    )
    convert.add_argument(
        "--sales-id",
        action="append",
        dest="sales_ids",
        default=None,
        help="変換する売上ID（複数指定可、省略時はすべて）",
    )

    return parser


def print_match_summary(result: MatchResult) -> None:
    """照合結果を表示する"""
    print(f"受注件数: {result.total_orders}")
    print(f"既存顧客: {result.existing_count}")
    print(f"新規顧客: {result.new_count}")
    print(f"最大得意先コード: {result.max_code}（次のコード: {result.next_code}）")

    if result.new_customers:
        print("\n新規顧客:")
        for candidate in result.new_customers:
            print(
                f"  {candidate.assigned_code}  {candidate.customer_name}  "
                f"{candidate.email or '-'}  {candidate.phone or '-'}"
            )

    print("\n受注:")
    for order in result.orders:
        method = order.match_method.value or "新規"
        print(f"  {order.sales_id}  {order.destination_code}  {order.customer_name}  ({method})")


def run(args: argparse.Namespace, config: ApplicationConfig) -> None:
    """サブコマンドを実行する"""
    ledger_repository = JsonLedgerRepository(Path(config.ledger_store_file))
    output_repository = ShiftJisFileWriter(Path(config.output_dir))

    if args.command == "ledger":
        run_ledger(args, config, ledger_repository)
        return

    match_use_case = MatchCustomersUseCase(
        order_parser=ColorMeOrderParser(),
        ledger_repository=ledger_repository,
        encoding=config.order_csv_encoding,
    )
    result = match_use_case.execute(args.orders_csv)

    if args.command == "match":
        print_match_summary(result)
        if args.export_new and result.new_customers:
            path = ExportNewCustomersUseCase(output_repository).execute(result.new_customers)
            print(f"\n新規顧客TXTファイルを出力しました: {path}")
        return

    # convert
    settings = ConversionSettings.from_user_input(
        args.start_number,
        operator_code=config.operator_code,
        default_customer_name=config.default_customer_name,
    )

    if args.registered and result.new_customers:
        registered = [candidate.mark_registered() for candidate in result.new_customers]
        RegisterNewCustomersUseCase(ledger_repository).execute(registered)
        result = replace(result, new_customers=registered)

    catalog_file = Path(config.catalog_file) if config.catalog_file else None
    encoder = SalesSlipEncoder(CatalogLoader().load(catalog_file))
    path = ConvertOrdersUseCase(encoder, output_repository).execute(
        result, settings, sales_ids=args.sales_ids
    )
    print(f"売上伝票TXTファイルを出力しました: {path}")


def run_ledger(
    args: argparse.Namespace,
    config: ApplicationConfig,
    ledger_repository: JsonLedgerRepository,
) -> None:
    """顧客台帳のサブコマンドを実行する"""
    if args.ledger_command == "import":
        use_case = ImportLedgerUseCase(
            ledger_parser=YayoiLedgerParser(),
            ledger_repository=ledger_repository,
            encoding=config.ledger_csv_encoding,
        )
        customers = use_case.execute(args.csv_file)
        print(f"顧客台帳を取り込みました（{len(customers)}件）")

    elif args.ledger_command == "show":
        info = ledger_repository.snapshot_info()
        if info is None:
            print("保存データが見つかりません")
            return
        print(f"件数: {info.customer_count}")
        print(f"最終更新: {info.timestamp or '-'}")
        print(f"バージョン: {info.version or '-'}")

    elif args.ledger_command == "export":
        path = ledger_repository.export_to(args.dir or Path(config.output_dir))
        print(f"データを {path} として出力しました")

    elif args.ledger_command == "import-json":
        customers = ledger_repository.import_from(args.json_file)
        print(f"データ（{len(customers)}件）を読み込みました")

    elif args.ledger_command == "clear":
        if ledger_repository.clear():
            print("保存データをクリアしました")
        else:
            print("保存データが見つかりません")


def main(argv: Optional[List[str]] = None) -> None:
    """メイン処理"""
    args = build_parser().parse_args(argv)

    try:
        config = ConfigLoader().load_config()
        project_root = Path.cwd()
        LoggingSetup.setup(config.log_level, project_root, Path(config.log_dir))

        logger.info(
            "=== カラーミー → 弥生販売 変換ツール 開始 ===",
            extra={"context": {"command": args.command}},
        )
        run(args, config)
        logger.info("=== 処理完了 ===")

    except Exception as e:
        logger.error(f"=== エラー: {str(e)} ===", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
