"""リクエスト単位の状態とキャッシュ.

コンテキスト判定は「1リクエストにつき1回計算してキャッシュ」します。
キャッシュはプロセス全体ではなく RequestScope に持たせ、リクエストの境界で捨てます。

- RequestScope: 1リクエスト分の状態（RequestState）と判定結果のキャッシュ
- request_scope(): リクエスト処理中だけ現在のスコープを ContextVar に束縛する
- current_scope(): 束縛中のスコープを取得する
"""

from __future__ import annotations

import contextvars
from collections import Counter
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger

from wp_logic.config import LogicSettings

from .context import ContextTags, resolve_context
from .exceptions import ScopeStateError
from .hooks import LOADED_ACTION, HookRegistry
from .state import RequestState
from .timeframe import timeframe
from .tokens import token_explode

_current_scope: contextvars.ContextVar[RequestScope] = contextvars.ContextVar("wp_logic_request_scope")

_UNSET: Any = object()


class RequestScope:
    """1リクエスト分の状態と判定結果のキャッシュ.

    Args:
        state: リクエスト状態（ルーティング前なら None。後から load() で渡す）
        hooks: フック登録簿（アプリケーションで共有）
        settings: 出力設定
    """

    def __init__(
        self,
        state: RequestState | None = None,
        hooks: HookRegistry | None = None,
        settings: LogicSettings | None = None,
    ) -> None:
        self.state = state
        self.hooks = hooks if hooks is not None else HookRegistry()
        self.settings = settings if settings is not None else LogicSettings()
        self._fired: Counter[str] = Counter()
        self._contexts: ContextTags | None = None
        self._timeframe: Any = _UNSET
        self._classes: str | None = None
        self._universal: list[str] | None = None

    def load(self, state: RequestState) -> None:
        """ルーティング完了後のリクエスト状態を渡す.

        Raises:
            ScopeStateError: 既に判定済みのスコープに別の状態を渡した場合
        """
        if self.state is state:
            return
        if self._contexts is not None or self._timeframe is not _UNSET:
            raise ScopeStateError("Request state is already resolved for this scope; start a new request scope")
        self.state = state

    def timeframe(self) -> str | bool | None:
        """日付アーカイブの粒度（リクエスト内でキャッシュ）."""
        if self._timeframe is not _UNSET:
            return self._timeframe
        if self.state is None:
            return None
        self._timeframe = timeframe(self.state)
        return self._timeframe

    def contexts(self) -> ContextTags | None:
        """コンテキストタグ（リクエスト内で同一インスタンスを返す）.

        状態が無い間は None を返し、何もキャッシュしません。
        """
        if self._contexts is not None:
            return self._contexts
        if self.state is None:
            return None
        self._contexts = resolve_context(self.state, self.timeframe())
        logger.debug(f"Contexts resolved: {dict(self._contexts)}")
        return self._contexts

    def do_action(self, name: str, *args: Any) -> None:
        self._fired[name] += 1
        self.hooks.run_action(name, *args)

    def did_action(self, name: str) -> int:
        return self._fired[name]

    def universal_tokens(self) -> list[str]:
        """フィルター適用済みのユニバーサルクラス.

        wp_loaded 発火前は呼ぶたびにフィルターを再適用し、発火後は結果を固定します。
        """
        if self._universal is not None and self.did_action(LOADED_ACTION):
            return self._universal
        tokens = self.hooks.apply_filters(self.settings.universal_filter, self.settings.universal_tokens())
        self._universal = token_explode(tokens)
        return self._universal

    def cached_classes(self) -> str | None:
        return self._classes

    def cache_classes(self, classes: str) -> None:
        self._classes = classes


@contextmanager
def request_scope(
    state: RequestState | None = None,
    hooks: HookRegistry | None = None,
    settings: LogicSettings | None = None,
) -> Iterator[RequestScope]:
    """リクエスト処理中だけ新しいスコープを現在のスコープにする.

    Examples:
        >>> with request_scope(state, hooks) as scope:
        ...     classes = context_to_class_string(scope)
    """
    scope = RequestScope(state, hooks, settings)
    token = _current_scope.set(scope)
    try:
        yield scope
    finally:
        _current_scope.reset(token)


def current_scope() -> RequestScope:
    """束縛中のスコープ.

    Raises:
        LookupError: request_scope() の外で呼ばれた場合
    """
    return _current_scope.get()
