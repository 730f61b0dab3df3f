"""スナップショット読み込み用アダプタ（基底クラス）.

記録済みのリクエスト状態（JSON/YAML/CSV）を共通インターフェースで扱うための
抽象基底クラスを定義します。
"""

from abc import ABC, abstractmethod

from .snapshot import Snapshot


class BaseAdapter(ABC):
    """スナップショットアダプタの基底クラス.

    全てのアダプタはこのクラスを継承し、read()/validate()/repair() を実装します。
    """

    @abstractmethod
    def read(self) -> list[Snapshot]:
        """ファイルを読み込み、Snapshot のリストに変換する.

        Raises:
            ValueError: ファイル形式が不正な場合
            SnapshotFormatError: エントリを RequestState に変換できない場合
        """
        ...

    @abstractmethod
    def validate(self, snapshots: list[Snapshot]) -> bool:
        """読み込み結果を検証する."""
        ...

    @abstractmethod
    def repair(self, snapshots: list[Snapshot]) -> list[Snapshot]:
        """読み込み結果を修復する（必要なら）."""
        ...
