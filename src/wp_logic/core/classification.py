"""リクエストの分類.

コンテキスト判定の排他的な分岐を、優先順位付きの列挙型として表現します。
列挙の定義順がそのまま判定の優先順位です（先に当てはまったものが勝つ）。
"""

from __future__ import annotations

from enum import Enum

from .state import RequestState


class RequestKind(str, Enum):
    """リクエストの種類（優先順位順）."""

    BLOG = "blog"  # 「投稿ページ」に指定された一覧ページ
    SINGULAR = "singular"
    SEARCH = "search"
    NOT_FOUND = "error-404"
    ARCHIVE = "archive"
    OTHER = "other"


class ArchiveKind(str, Enum):
    """アーカイブの種類（優先順位順）."""

    TAXONOMY = "taxo"
    POST_TYPE = "type"
    AUTHOR = "user"
    DATE = "timeframe"
    OTHER = "other"


def classify_request(state: RequestState) -> RequestKind:
    # is_home() と is_front_page() は、設定でフロントページが指定されている場合のみ異なる。
    # その場合 is_home() は「投稿ページ」表示時だけ真になる。
    checks = (
        (RequestKind.BLOG, state.is_home),
        (RequestKind.SINGULAR, state.is_singular),
        (RequestKind.SEARCH, state.is_search),
        (RequestKind.NOT_FOUND, state.is_404),
        (RequestKind.ARCHIVE, state.is_archive),
    )
    for kind, matched in checks:
        if matched:
            return kind
    return RequestKind.OTHER


def classify_archive(state: RequestState, unit: str | bool | None) -> ArchiveKind:
    """アーカイブの種類を判定する.

    Args:
        state: リクエスト状態
        unit: timeframe() の結果。DATE は unit が truthy の場合のみ
    """
    checks = (
        (ArchiveKind.TAXONOMY, state.is_tag or state.is_category or state.is_tax),
        (ArchiveKind.POST_TYPE, state.is_post_type_archive),
        (ArchiveKind.AUTHOR, state.is_author),
        (ArchiveKind.DATE, bool(unit)),
    )
    for kind, matched in checks:
        if matched:
            return kind
    return ArchiveKind.OTHER
