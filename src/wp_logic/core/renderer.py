"""class 属性 / HTML 属性文字列の生成.

- context_to_class_string(): コンテキストタグ + ユニバーサルクラスを body 用の class 文字列にする
- item_attributes(): 一覧内の1件分の class / data-id / id 属性を作る

アイテム参照は ItemRef（ByIdentifier / ByReference / Current）で受け取ります。
解決できない参照は例外にせず、最小限の属性（class="hentry"）に縮退します。
"""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from .hooks import LOADED_ACTION
from .registry import taxos
from .request_scope import RequestScope, current_scope
from .sanitize import format_attributes
from .state import Post, SiteRegistry
from .tokens import kv, pluck, sift, token_explode, tokens_to_class_string, unique


@dataclass(frozen=True)
class ByIdentifier:
    """投稿 ID による参照（0 以下は「アイテムなし」）."""

    post_id: int


@dataclass(frozen=True)
class ByReference:
    post: Post


@dataclass(frozen=True)
class Current:
    """ループ中の現在の投稿."""


ItemRef = ByIdentifier | ByReference | Current


def as_item_ref(value: object) -> ItemRef:
    """ゆるい値（ID / Post / None）を ItemRef に変換する.

    None や 0 は現在の投稿、解釈できない値は「アイテムなし」になります。
    """
    if isinstance(value, ByIdentifier | ByReference | Current):
        return value
    if value is None or value is False or value == 0:
        return Current()
    if isinstance(value, Post):
        return ByReference(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return ByIdentifier(value)
    logger.warning(f"Unsupported item reference: {value!r}")
    return ByIdentifier(0)


def _resolve_item(scope: RequestScope, ref: ItemRef) -> tuple[SiteRegistry, int | None, Post | None]:
    state = scope.state
    site = state.site if state is not None else SiteRegistry()

    post: Post | None = None
    if isinstance(ref, ByReference):
        post = ref.post
        post_id: object = ref.post.post_id
    elif isinstance(ref, ByIdentifier):
        post_id = ref.post_id
    else:
        post_id = state.current_post_id if state is not None else None

    if not isinstance(post_id, int) or isinstance(post_id, bool) or post_id <= 0:
        return site, None, None

    if post is None:
        post = site.get_post(post_id)
        if post is None:
            logger.warning(f"Item reference did not resolve to a known post: {post_id}")
    return site, post_id, post


def item_attributes(
    scope: RequestScope | None = None,
    ref: object = None,
    as_map: bool = False,
) -> dict[str, object] | str:
    """一覧内の1件分の属性を作る.

    Args:
        scope: リクエストスコープ（省略時は current_scope()）
        ref: ItemRef、投稿 ID、Post、または None（現在の投稿）
        as_map: True なら属性の dict、False なら ``key="value"`` 文字列を返す

    Returns:
        class（hentry, sticky, type=, status=, <taxonomy>-<term>）、data-id、
        singular ページでは id="entry-<id>" を含む属性

    Examples:
        >>> item_attributes(scope, ByIdentifier(999))
        'class="hentry" data-id="999"'
    """
    scope = scope if scope is not None else current_scope()
    state = scope.state
    settings = scope.settings

    site, post_id, post = _resolve_item(scope, as_item_ref(ref))

    classes: list[str] = [settings.entry_class]
    if post is not None and post.sticky:
        classes.append("sticky")

    attrs: dict[str, object] = {"class": None}
    if post_id is not None:
        if post is not None:
            for facet, value in (("type", post.post_type), ("status", post.post_status)):
                if value:
                    classes.append(f"{facet}={value}")

        attrs["data-id"] = post_id
        if state is not None and state.is_singular:
            attrs["id"] = f"{settings.entry_id_prefix}{post_id}"

        # リクエスト状態がなければ空のレジストリなので、タクソノミーのクラスは付かない
        if post is not None:
            for taxonomy in taxos(site, post):
                for slug in pluck(post.terms.get(taxonomy, ()), "slug"):
                    if str(slug):
                        classes.append(f"{taxonomy}-{slug}")

    attrs["class"] = tokens_to_class_string(classes)
    if as_map:
        return attrs
    return format_attributes(attrs)


def context_class_tokens(scope: RequestScope | None = None) -> list[str] | None:
    """ユニバーサルクラスとコンテキストタグを合わせた重複なしのトークン列.

    コンテキストが未確定（リクエスト状態なし）の場合は None を返します。
    """
    scope = scope if scope is not None else current_scope()
    contexts = scope.contexts()
    if contexts is None:
        return None

    merged: dict[int | str, object] = dict(enumerate(scope.universal_tokens()))
    position = len(merged)
    for key, value in contexts.items():
        if isinstance(key, int):
            merged[position] = value
            position += 1
        else:
            merged[key] = value

    values = sift(kv(merged, "="))
    return unique(token_explode(list(values.values())))


def context_to_class_string(scope: RequestScope | None = None) -> str | None:
    """body 要素などに出力する class 文字列.

    wp_loaded 発火後の結果はスコープ内でキャッシュします。
    """
    scope = scope if scope is not None else current_scope()
    cached = scope.cached_classes()
    if cached is not None:
        return cached

    tokens = context_class_tokens(scope)
    if tokens is None:
        return None

    classes = tokens_to_class_string(tokens)
    if scope.did_action(LOADED_ACTION):
        scope.cache_classes(classes)
    return classes
