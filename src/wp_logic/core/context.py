"""リクエストのコンテキスト判定（ページ種別・タクソノミー・日付粒度・ユーザー状態）.

リクエスト状態から「このページは何か」を表すタグの順序付きマッピングを作ります。

判定の流れ:
    1. テーマ系統（child-theme / parent-theme）
    2. ログイン状態（logged-in [+ admin-bar] / logged-out）
    3. マルチサイト（multisite, blog-<id>）
    4. home / paged
    5. singular / plural
    6. 投稿ページなら blog を付けて即座に返す
    7. 排他的な分岐（RequestKind ごとに1つだけ）
    8. 後処理（空値の除去、id / slug の付与）

タグの判定ロジックは Hybrid Core の context.php を参考にしています。
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field

from loguru import logger

from .classification import ArchiveKind, RequestKind, classify_archive, classify_request
from .registry import post_format, terms
from .sanitize import sanitize_html_class, zeroise
from .state import Author, Post, RequestState, Term
from .timeframe import DATE_PATH, timeframe
from .tokens import kv, sift


class ContextTags(Mapping[int | str, object]):
    """判定済みのコンテキストタグ（変更不可の順序付きマッピング）.

    キーは位置タグ（"archive" など）の場合は整数、キー付きタグ
    （"type", "format", "unit", "slug", "id", "taxo", "mime", "pfor"）の場合は文字列です。
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[int | str, object]) -> None:
        self._data = dict(data)

    def __getitem__(self, key: int | str) -> object:
        return self._data[key]

    def __iter__(self) -> Iterator[int | str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"ContextTags({self._data!r})"

    @property
    def bare(self) -> tuple[object, ...]:
        """位置タグだけを順に返す."""
        return tuple(v for k, v in self._data.items() if isinstance(k, int))

    @property
    def keyed(self) -> dict[str, object]:
        return {k: v for k, v in self._data.items() if isinstance(k, str)}

    def tokens(self, glue: str = "=") -> list[object]:
        """キー付きタグを ``key=value`` に変換したトークン列."""
        return list(kv(self._data, glue).values())


@dataclass
class _Contribution:
    """分岐ごとのタグの寄与分."""

    entries: list[tuple[str | None, object]] = field(default_factory=list)
    slug: str | None = None
    keep_object_id: bool = True

    def tag(self, value: object) -> None:
        self.entries.append((None, value))

    def set(self, key: str, value: object) -> None:
        self.entries.append((key, value))


def _as_int(value: object) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return 0


def _is_printable(value: object, _key: object = None, _items: object = None) -> bool:
    if value is True:
        return True
    if value is None or value is False:
        return False
    if isinstance(value, int | float):
        return value > 0
    if isinstance(value, str):
        return bool(value.strip()) and value.isprintable()
    return False


def _singular(state: RequestState, unit: str | bool | None) -> _Contribution:
    contribution = _Contribution()
    post = state.queried_object if isinstance(state.queried_object, Post) else None
    if post is None:
        post = state.site.get_post(state.queried_object_id)
    if post is None:
        logger.warning(f"Singular request without a resolvable post: id={state.queried_object_id}")
        return contribution

    contribution.set("type", post.post_type)
    contribution.slug = sanitize_html_class(post.post_name)

    if post.post_type == "attachment":
        primary = post.mime_type.split("/", 1)[0] if post.mime_type else ""
        if primary.isascii() and primary.isalnum():
            contribution.set("mime", primary)
    else:
        fmt = post_format(state.site, post.post_id)
        if fmt:
            contribution.set("format", fmt)
            contribution.set("pfor", " ".join(str(t) for t in terms(state.site, post.post_id, "post_format")))

    return contribution


def _search(state: RequestState, unit: str | bool | None) -> _Contribution:
    contribution = _Contribution()
    contribution.tag("search")
    return contribution


def _not_found(state: RequestState, unit: str | bool | None) -> _Contribution:
    contribution = _Contribution()
    contribution.tag("error-404")
    return contribution


def _taxonomy_archive(state: RequestState, unit: str | bool | None, contribution: _Contribution) -> None:
    contribution.tag("taxo")
    term = state.queried_object
    if isinstance(term, Term):
        contribution.set("taxo", term.taxonomy)
        contribution.slug = sanitize_html_class(term.slug)


def _post_type_archive(state: RequestState, unit: str | bool | None, contribution: _Contribution) -> None:
    name = state.get_query_var("post_type")
    if not name:
        return
    post_type = state.site.get_post_type(name)
    if post_type is None:
        logger.warning(f"Post type archive for unregistered post type: {name!r}")
        return
    contribution.set("type", post_type.name)


def _author_archive(state: RequestState, unit: str | bool | None, contribution: _Contribution) -> None:
    contribution.tag("user")
    author = state.queried_object if isinstance(state.queried_object, Author) else None
    if author is None:
        author = state.site.get_author(state.queried_object_id)
    if author is not None:
        contribution.slug = sanitize_html_class(author.nicename)


def _date_archive(state: RequestState, unit: str | bool | None, contribution: _Contribution) -> None:
    contribution.tag("timeframe")
    contribution.set("unit", unit)
    contribution.keep_object_id = False

    if unit not in {name for name, _ in DATE_PATH}:
        return

    # 年 → 月 → 日 の順に辿り、最初に欠けた要素で止める（年なしの月、月なしの日は推定しない）
    parts: list[str] = []
    for _name, var in DATE_PATH:
        number = _as_int(state.get_query_var(var))
        if not number:
            break
        parts.append(zeroise(number, 2))
    if parts:
        contribution.slug = "-".join(parts)


_ARCHIVE_BRANCHES: dict[ArchiveKind, Callable[[RequestState, str | bool | None, _Contribution], None]] = {
    ArchiveKind.TAXONOMY: _taxonomy_archive,
    ArchiveKind.POST_TYPE: _post_type_archive,
    ArchiveKind.AUTHOR: _author_archive,
    ArchiveKind.DATE: _date_archive,
}


def _archive(state: RequestState, unit: str | bool | None) -> _Contribution:
    contribution = _Contribution()
    contribution.tag("archive")
    kind = classify_archive(state, unit)
    logger.debug(f"Archive kind: {kind.value}")
    branch = _ARCHIVE_BRANCHES.get(kind)
    if branch is not None:
        branch(state, unit, contribution)
    return contribution


_REQUEST_BRANCHES: dict[RequestKind, Callable[[RequestState, str | bool | None], _Contribution]] = {
    RequestKind.SINGULAR: _singular,
    RequestKind.SEARCH: _search,
    RequestKind.NOT_FOUND: _not_found,
    RequestKind.ARCHIVE: _archive,
}


def _base_tags(state: RequestState) -> list[str]:
    site = state.site
    tags = ["child-theme" if site.is_child_theme else "parent-theme"]

    if state.logged_in:
        tags.append("logged-in")
        if state.admin_bar_showing:
            tags.append("admin-bar")
    else:
        tags.append("logged-out")

    if site.is_multisite:
        tags.append("multisite")
        tags.append(f"blog-{site.blog_id}")

    if state.is_front_page:
        tags.append("home")
    if state.is_paged:
        tags.append("paged")
    tags.append("singular" if state.is_singular else "plural")
    return tags


def resolve_context(state: RequestState | None, unit: str | bool | None = None) -> ContextTags | None:
    """リクエスト状態からコンテキストタグを判定する.

    Args:
        state: リクエスト状態。None の場合（クエリ前）は判定できないので None を返す
        unit: 算出済みの timeframe()。省略時は state から算出する

    Returns:
        判定結果のタグ。判定不能なら None

    Examples:
        >>> tags = resolve_context(RequestState(is_search=True))
        >>> list(tags.values())
        ['parent-theme', 'logged-out', 'plural', 'search']
    """
    if state is None:
        return None

    data: dict[int | str, object] = dict(enumerate(_base_tags(state)))
    kind = classify_request(state)
    logger.debug(f"Request kind: {kind.value}")

    if kind is RequestKind.BLOG:
        data[len(data)] = "blog"
        return ContextTags(data)

    if unit is None:
        unit = timeframe(state)

    branch = _REQUEST_BRANCHES.get(kind)
    contribution = branch(state, unit) if branch is not None else _Contribution()

    position = len(data)
    for key, value in contribution.entries:
        if key is None:
            data[position] = value
            position += 1
        else:
            data[key] = value

    result = sift(data, _is_printable)

    object_id = state.queried_object_id if contribution.keep_object_id else None
    if isinstance(object_id, int) and not isinstance(object_id, bool) and object_id > 0:
        result["id"] = object_id
    if contribution.slug:
        result["slug"] = contribution.slug

    return ContextTags(result)
