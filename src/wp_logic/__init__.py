"""wp-logic: テンプレート向けのコンテキスト判定ユーティリティ."""

from wp_logic.config import LogicSettings, load_settings
from wp_logic.core import (
    ByIdentifier,
    ByReference,
    ContextTags,
    Current,
    HookRegistry,
    RequestScope,
    context_to_class_string,
    current_scope,
    item_attributes,
    request_scope,
    resolve_context,
    tokens_to_class_string,
)
from wp_logic.core.state import Author, Post, PostType, RequestState, Sidebar, SiteRegistry, Taxonomy, Term

__version__ = "0.5.0"

__all__ = [
    "LogicSettings",
    "load_settings",
    "RequestState",
    "SiteRegistry",
    "Post",
    "PostType",
    "Term",
    "Taxonomy",
    "Author",
    "Sidebar",
    "ContextTags",
    "resolve_context",
    "HookRegistry",
    "RequestScope",
    "request_scope",
    "current_scope",
    "ByIdentifier",
    "ByReference",
    "Current",
    "item_attributes",
    "context_to_class_string",
    "tokens_to_class_string",
]
