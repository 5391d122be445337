"""顧客台帳リポジトリのインターフェース"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from colorme_yayoi.domain.entities.customer import Customer


@dataclass(frozen=True)
class LedgerSnapshotInfo:
    """保存データの概要"""

    version: str
    timestamp: str
    customer_count: int


class ILedgerRepository(ABC):
    """顧客台帳（得意先リスト）の保存先のインターフェース"""

    @abstractmethod
    def load(self) -> Optional[List[Customer]]:
        """保存されている顧客台帳を読み込む

        Returns:
            Optional[List[Customer]]: 顧客のリスト、保存データがない場合はNone
        """
        pass

    @abstractmethod
    def save(self, customers: List[Customer]) -> None:
        """顧客台帳を保存する

        Args:
            customers: 保存する顧客のリスト
        """
        pass

    @abstractmethod
    def snapshot_info(self) -> Optional[LedgerSnapshotInfo]:
        """保存データの概要（バージョン、最終更新日時、件数）を取得する"""
        pass

    @abstractmethod
    def clear(self) -> bool:
        """保存データを削除する

        Returns:
            bool: 削除した場合はTrue、保存データがなかった場合はFalse
        """
        pass

    @abstractmethod
    def export_to(self, directory: Path) -> Path:
        """保存データをJSONファイルとして出力する

        Args:
            directory: 出力先ディレクトリ

        Returns:
            Path: 出力したファイルのパス

        Raises:
            FormatError: 保存データがない場合
        """
        pass

    @abstractmethod
    def import_from(self, path: Path) -> List[Customer]:
        """JSONファイルから顧客台帳を読み込んで保存する

        Args:
            path: 読み込むJSONファイルのパス

        Returns:
            List[Customer]: 読み込んだ顧客のリスト

        Raises:
            FormatError: データ形式が無効な場合
        """
        pass
