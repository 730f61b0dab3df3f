"""コンテキスト判定と class 文字列生成のコア処理群.

- 判定（リクエスト状態 → コンテキストタグ）
- 整形（トークンの分割・結合・重複除去）
- 出力（class 文字列、エントリ属性）
"""

from .context import ContextTags, resolve_context
from .hooks import HookRegistry
from .renderer import (
    ByIdentifier,
    ByReference,
    Current,
    ItemRef,
    as_item_ref,
    context_class_tokens,
    context_to_class_string,
    item_attributes,
)
from .request_scope import RequestScope, current_scope, request_scope
from .timeframe import timeframe
from .tokens import token_explode, tokens_to_class_string

__all__ = [
    "ContextTags",
    "resolve_context",
    "timeframe",
    "HookRegistry",
    "RequestScope",
    "request_scope",
    "current_scope",
    "ByIdentifier",
    "ByReference",
    "Current",
    "ItemRef",
    "as_item_ref",
    "item_attributes",
    "context_class_tokens",
    "context_to_class_string",
    "tokens_to_class_string",
    "token_explode",
]
