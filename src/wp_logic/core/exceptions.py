"""wp-logic exceptions.

リクエスト状態の欠落や不正値では例外を投げず、空/False/None に縮退させます。
ここで定義するのは、スナップショット読み込みとリクエストスコープの誤用に限った例外です。
"""


class SnapshotFormatError(ValueError):
    """スナップショットファイルのエントリを RequestState に変換できない場合の例外.

    Attributes:
        file_path: 読み込み元のファイルパス
        entry: 問題のあったエントリ（名前またはインデックス）
        reason: 変換できなかった理由
    """

    def __init__(self, file_path: str, entry: str, reason: str) -> None:
        """例外初期化.

        Args:
            file_path: 読み込み元のファイルパス
            entry: 問題のあったエントリ
            reason: 変換できなかった理由
        """
        self.file_path = file_path
        self.entry = entry
        self.reason = reason
        super().__init__(f"Invalid snapshot entry {entry!r} in {file_path}: {reason}")


class ScopeStateError(RuntimeError):
    """判定済みの RequestScope に別のリクエスト状態を読み込もうとした場合の例外."""
