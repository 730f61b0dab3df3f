"""タクソノミー / ターム / サイドバーの参照ヘルパー.

SiteRegistry に登録された情報を、テンプレートで使いやすい形（名前のリストや
タクソノミー名 → ターム slug の辞書）に変換します。
"""

from __future__ import annotations

from .state import Post, SiteRegistry, Taxonomy, Term
from .tokens import pluck, sift


def _resolve_post_type(site: SiteRegistry, post_type: str | int | Post | None) -> str | None:
    if isinstance(post_type, str):
        return post_type
    if isinstance(post_type, Post):
        return post_type.post_type
    post = site.get_post(post_type)
    return post.post_type if post is not None else None


def taxos(
    site: SiteRegistry,
    post_type: str | int | Post | None,
    field: str | None = "name",
) -> dict[str, object]:
    """投稿タイプがサポートするタクソノミーを登録順に返す.

    Args:
        site: サイト登録情報
        post_type: 投稿タイプ名、投稿 ID、または Post
        field: 値として取り出す Taxonomy の属性名（None なら Taxonomy そのもの）

    Returns:
        タクソノミー名 → field の値（投稿タイプが未登録なら空）
    """
    type_name = _resolve_post_type(site, post_type)
    if type_name is None or not site.post_type_exists(type_name):
        return {}

    result: dict[str, object] = {}
    for name, taxonomy in site.taxonomies.items():
        if site.is_object_in_taxonomy(type_name, name):
            result[name] = getattr(taxonomy, field) if field else taxonomy
    return result


def terms(
    site: SiteRegistry,
    post_id: int | None,
    taxonomy: str,
    field: str | None = "slug",
) -> list[object]:
    """投稿に割り当てられた taxonomy のタームを返す.

    未登録のタクソノミーや存在しない投稿の場合は空リストを返します。
    field=None の場合は Term オブジェクトを返します。
    """
    if not site.taxonomy_exists(taxonomy):
        return []
    post = site.get_post(post_id)
    if post is None:
        return []

    assigned: tuple[Term, ...] = tuple(post.terms.get(taxonomy, ()))
    if field:
        return pluck(assigned, field)
    return list(assigned)


def all_terms(
    site: SiteRegistry,
    post_id: int | None,
    field: str | None = "slug",
) -> dict[str, list[object]]:
    """投稿タイプがサポートする全タクソノミーについて terms() を返す."""
    return {name: terms(site, post_id, name, field) for name in taxos(site, post_id)}


def sidebars(site: SiteRegistry, active: bool | None = None) -> list[str]:
    """登録済みサイドバー ID の一覧.

    Examples:
        sidebars(site)         # 全て
        sidebars(site, True)   # アクティブのみ
        sidebars(site, False)  # 非アクティブのみ
    """
    ids = list(site.sidebars)
    if active is None:
        return ids
    return list(sift(ids, lambda sidebar_id, _key, _items: site.sidebars[sidebar_id].active, not active))


def post_format(site: SiteRegistry, post_id: int | None) -> str | bool | None:
    """投稿フォーマット（テーマが post-formats 非対応なら False）."""
    if not site.theme_supports_post_formats:
        return False
    post = site.get_post(post_id)
    if post is None:
        return False
    return post.post_format
