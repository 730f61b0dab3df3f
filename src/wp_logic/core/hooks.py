"""フィルター/アクションのフック登録.

ホストアプリケーションが出力を差し替えるための拡張ポイントです。
フィルターは値を受け取って変換後の値を返し、アクションは副作用のみを持ちます。

コールバックは priority の昇順、同じ priority 内では登録順に実行されます。
コールバック内の例外はそのまま呼び出し元に伝播します。
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from typing import Any

from loguru import logger

# このアクションが発火した後はユニバーサルクラスをキャッシュする
LOADED_ACTION = "wp_loaded"

DEFAULT_PRIORITY = 10


class HookRegistry:
    """フィルター/アクションの登録簿.

    登録はアプリケーション単位で共有し、アクションの発火回数（did_action）は
    RequestScope 側でリクエストごとに数えます。
    """

    def __init__(self) -> None:
        self._filters: dict[str, dict[int, list[Callable[..., Any]]]] = defaultdict(lambda: defaultdict(list))
        self._actions: dict[str, dict[int, list[Callable[..., Any]]]] = defaultdict(lambda: defaultdict(list))

    @staticmethod
    def _ordered(table: dict[int, list[Callable[..., Any]]]) -> list[Callable[..., Any]]:
        return [cb for priority in sorted(table) for cb in table[priority]]

    def add_filter(self, name: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> None:
        self._filters[name][priority].append(callback)
        logger.debug(f"Filter registered: {name} -> {getattr(callback, '__name__', callback)!r} ({priority})")

    def remove_filter(self, name: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> bool:
        """登録済みのフィルターを外す（見つからなければ False）."""
        callbacks = self._filters.get(name, {}).get(priority, [])
        if callback not in callbacks:
            return False
        callbacks.remove(callback)
        return True

    def has_filter(self, name: str) -> bool:
        return any(self._filters.get(name, {}).values())

    def apply_filters(self, name: str, value: Any, *args: Any) -> Any:
        """登録順にフィルターを適用した値を返す."""
        for callback in self._ordered(self._filters.get(name, {})):
            value = callback(value, *args)
        return value

    def add_action(self, name: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> None:
        self._actions[name][priority].append(callback)

    def run_action(self, name: str, *args: Any) -> None:
        for callback in self._ordered(self._actions.get(name, {})):
            callback(*args)
