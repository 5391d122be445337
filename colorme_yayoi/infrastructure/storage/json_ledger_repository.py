"""顧客台帳をJSONファイルに保存するリポジトリ"""
import json
import logging
import shutil
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from colorme_yayoi.domain.entities.customer import Customer
from colorme_yayoi.domain.exceptions import FormatError
from colorme_yayoi.domain.repositories.ledger_repository import (
    ILedgerRepository,
    LedgerSnapshotInfo,
)

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = "3.4"


class StoredCustomer(BaseModel):
    """保存データ内の得意先"""

    customer_code: str = Field(..., alias="customerCode", min_length=1)
    name: str = ""
    furigana: str = ""
    phone: str = ""
    email: str = ""

    @field_validator("customer_code", "name", "furigana", "phone", "email", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        """nullは空文字、数値などは文字列として扱う"""
        if v is None:
            return ""
        return str(v)

    @classmethod
    def from_entity(cls, customer: Customer) -> "StoredCustomer":
        return cls(
            customer_code=customer.customer_code,
            name=customer.name,
            furigana=customer.furigana,
            phone=customer.phone,
            email=customer.email,
        )

    def to_entity(self) -> Customer:
        return Customer(
            customer_code=self.customer_code,
            name=self.name,
            furigana=self.furigana,
            phone=self.phone,
            email=self.email,
        )

    class Config:
        populate_by_name = True


class LedgerSnapshot(BaseModel):
    """保存データ全体"""

    version: str = SNAPSHOT_VERSION
    timestamp: str = ""
    customers: List[StoredCustomer] = Field(..., alias="yayoiCustomers")
    customer_count: int = Field(default=0, alias="customerCount")

    @field_validator("version", "timestamp", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v)

    @field_validator("customer_count", mode="before")
    @classmethod
    def coerce_count(cls, v: Any) -> Any:
        return 0 if v is None else v

    class Config:
        populate_by_name = True


class JsonLedgerRepository(ILedgerRepository):
    """顧客台帳をJSONファイルに保存・読み込みする"""

    def __init__(self, store_file: Path, clock: Callable[[], datetime] = datetime.now):
        """初期化

        Args:
            store_file: 保存先のJSONファイル
            clock: 現在日時を返す関数
        """
        self.store_file = store_file
        self.clock = clock

    def load(self) -> Optional[List[Customer]]:
        snapshot = self._read_snapshot(self.store_file)
        if snapshot is None:
            logger.info("保存された顧客台帳がありません")
            return None

        customers = [stored.to_entity() for stored in snapshot.customers]
        logger.info(
            "保存された顧客台帳を読み込みました",
            extra={"context": {"count": len(customers), "timestamp": snapshot.timestamp}},
        )
        return customers

    def save(self, customers: List[Customer]) -> None:
        snapshot = LedgerSnapshot(
            version=SNAPSHOT_VERSION,
            timestamp=self.clock().strftime("%Y/%m/%d %H:%M"),
            customers=[StoredCustomer.from_entity(customer) for customer in customers],
            customer_count=len(customers),
        )
        self.store_file.parent.mkdir(parents=True, exist_ok=True)
        self.store_file.write_text(
            json.dumps(snapshot.model_dump(by_alias=True), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        logger.info(
            "顧客台帳を保存しました",
            extra={"context": {"count": len(customers), "file": str(self.store_file)}},
        )

    def snapshot_info(self) -> Optional[LedgerSnapshotInfo]:
        snapshot = self._read_snapshot(self.store_file)
        if snapshot is None:
            return None
        return LedgerSnapshotInfo(
            version=snapshot.version,
            timestamp=snapshot.timestamp,
            customer_count=snapshot.customer_count,
        )

    def clear(self) -> bool:
        if not self.store_file.exists():
            return False
        self.store_file.unlink()
        logger.info(f"保存データを削除しました: {self.store_file}")
        return True

    def export_to(self, directory: Path) -> Path:
        if not self.store_file.exists():
            raise FormatError("保存データがありません")

        directory.mkdir(parents=True, exist_ok=True)
        destination = directory / f"yayoi_storage_{self.clock().strftime('%Y%m%d')}.json"
        shutil.copyfile(self.store_file, destination)
        logger.info(f"データを {destination.name} として出力しました")
        return destination

    def import_from(self, path: Path) -> List[Customer]:
        if not path.exists():
            raise FormatError(f"ファイルが存在しません: {path}")

        snapshot = self._read_snapshot(path)
        if snapshot is None:
            raise FormatError("無効なデータ形式です")

        # 読み込んだ内容をそのまま保存データにする
        self.store_file.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(path, self.store_file)

        customers = [stored.to_entity() for stored in snapshot.customers]
        logger.info(f"データ（{len(customers)}件）を読み込みました")
        return customers

    def _read_snapshot(self, path: Path) -> Optional[LedgerSnapshot]:
        """JSONファイルを読み込む（ファイルがなければNone）

        Raises:
            FormatError: JSONとして読めない、または顧客の配列がない場合
        """
        if not path.exists():
            return None

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise FormatError(f"保存データを読み込めませんでした: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("yayoiCustomers"), list):
            raise FormatError("無効なデータ形式です")

        try:
            return LedgerSnapshot.model_validate(data)
        except PydanticValidationError as e:
            raise FormatError(f"無効なデータ形式です: {e}") from e
