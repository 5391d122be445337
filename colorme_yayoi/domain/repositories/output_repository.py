"""出力リポジトリのインターフェース"""
from abc import ABC, abstractmethod
from pathlib import Path


class IOutputRepository(ABC):
    """弥生販売の取込用TXTファイルの出力先のインターフェース"""

    @abstractmethod
    def write_text(self, filename: str, content: str) -> Path:
        """テキストを出力する

        Args:
            filename: ファイル名
            content: 出力する内容

        Returns:
            Path: 出力したファイルのパス
        """
        pass
