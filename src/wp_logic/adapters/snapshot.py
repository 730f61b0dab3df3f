"""スナップショット（記録済みリクエスト状態）のパース.

JSON/YAML から読み込んだ辞書を SiteRegistry / RequestState に変換します。
各アダプタはファイルの読み込みだけを担当し、ここで共通の変換を行います。

ドキュメント形式:
    site:
      is_multisite: true
      blog_id: 3
      theme_supports_post_formats: true
      post_types: [post, page, {name: book, has_archive: true}]
      taxonomies:
        - {name: category, object_types: [post]}
      sidebars:
        - {sidebar_id: primary, active: true}
      authors:
        - {user_id: 7, nicename: jane}
      posts:
        - {post_id: 42, post_name: hello-world, terms: {category: [news]}}
    requests:
      - name: single-post
        flags: [is_singular]
        queried_object: {post: 42}
        current_post_id: 42
        logged_in: true

``requests`` を省略してリストだけを置いた場合はサイト情報なしとして扱います。
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields

from wp_logic.core.exceptions import SnapshotFormatError
from wp_logic.core.state import (
    Author,
    Post,
    PostType,
    QueriedObject,
    RequestState,
    Sidebar,
    SiteRegistry,
    Taxonomy,
    Term,
)

_FLAG_FIELDS = frozenset(f.name for f in fields(RequestState) if f.type in ("bool", bool))
_REQUEST_KEYS = _FLAG_FIELDS | {
    "name",
    "flags",
    "query_vars",
    "queried_object",
    "queried_object_id",
    "current_post_id",
}
_SITE_FLAGS = ("theme_supports_post_formats", "is_child_theme", "is_multisite")


@dataclass(frozen=True)
class Snapshot:
    """名前付きのリクエスト状態."""

    name: str
    state: RequestState


def _as_list(value: object, what: str, file_path: str, entry: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise SnapshotFormatError(file_path, entry, f"'{what}' must be a list, got {type(value).__name__}")
    return value


def _named(item: object, key: str, file_path: str, entry: str) -> dict:
    """文字列だけの要素を {key: 文字列} に寄せる."""
    if isinstance(item, str):
        return {key: item}
    if isinstance(item, Mapping) and key in item:
        return dict(item)
    raise SnapshotFormatError(file_path, entry, f"expected a string or a mapping with '{key}', got {item!r}")


def _build(cls: type, data: Mapping, file_path: str, entry: str):
    try:
        return cls(**data)
    except TypeError as e:
        raise SnapshotFormatError(file_path, entry, f"invalid {cls.__name__}: {e}") from e


def _parse_terms(raw: object, file_path: str, entry: str) -> dict[str, tuple[Term, ...]]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise SnapshotFormatError(file_path, entry, "'terms' must be a mapping of taxonomy -> list")
    result: dict[str, tuple[Term, ...]] = {}
    for taxonomy, items in raw.items():
        parsed: list[Term] = []
        for item in _as_list(items, f"terms.{taxonomy}", file_path, entry):
            data = _named(item, "slug", file_path, entry)
            data["taxonomy"] = str(taxonomy)
            parsed.append(_build(Term, data, file_path, entry))
        result[str(taxonomy)] = tuple(parsed)
    return result


def _parse_post(raw: object, file_path: str, entry: str) -> Post:
    if not isinstance(raw, Mapping) or "post_id" not in raw:
        raise SnapshotFormatError(file_path, entry, f"post entries need a 'post_id', got {raw!r}")
    if not isinstance(raw["post_id"], int) or isinstance(raw["post_id"], bool):
        raise SnapshotFormatError(file_path, entry, f"'post_id' must be an integer, got {raw['post_id']!r}")
    data = dict(raw)
    data["terms"] = _parse_terms(data.get("terms"), file_path, entry)
    return _build(Post, data, file_path, entry)


def parse_site(raw: object, file_path: str = "<memory>") -> SiteRegistry:
    """site セクションを SiteRegistry に変換する.

    Raises:
        SnapshotFormatError: 形式が不正な場合
    """
    if raw is None:
        return SiteRegistry()
    if not isinstance(raw, Mapping):
        raise SnapshotFormatError(file_path, "site", "'site' must be a mapping")

    post_types: dict[str, PostType] = {}
    for item in _as_list(raw.get("post_types"), "post_types", file_path, "site"):
        post_type = _build(PostType, _named(item, "name", file_path, "site"), file_path, "site")
        post_types[post_type.name] = post_type

    taxonomies: dict[str, Taxonomy] = {}
    for item in _as_list(raw.get("taxonomies"), "taxonomies", file_path, "site"):
        data = _named(item, "name", file_path, "site")
        data["object_types"] = tuple(_as_list(data.get("object_types"), "object_types", file_path, "site"))
        taxonomy = _build(Taxonomy, data, file_path, "site")
        taxonomies[taxonomy.name] = taxonomy

    sidebars: dict[str, Sidebar] = {}
    for item in _as_list(raw.get("sidebars"), "sidebars", file_path, "site"):
        sidebar = _build(Sidebar, _named(item, "sidebar_id", file_path, "site"), file_path, "site")
        sidebars[sidebar.sidebar_id] = sidebar

    authors: dict[int, Author] = {}
    for item in _as_list(raw.get("authors"), "authors", file_path, "site"):
        if not isinstance(item, Mapping):
            raise SnapshotFormatError(file_path, "site", f"author entries must be mappings, got {item!r}")
        author = _build(Author, item, file_path, "site")
        authors[author.user_id] = author

    posts: dict[int, Post] = {}
    for item in _as_list(raw.get("posts"), "posts", file_path, "site"):
        post = _parse_post(item, file_path, "site")
        posts[post.post_id] = post

    options = {key: bool(raw[key]) for key in _SITE_FLAGS if key in raw}
    if "blog_id" in raw:
        options["blog_id"] = raw["blog_id"]

    return SiteRegistry(
        post_types=post_types,
        taxonomies=taxonomies,
        sidebars=sidebars,
        posts=posts,
        authors=authors,
        **options,
    )


def _parse_queried_object(
    raw: object, site: SiteRegistry, file_path: str, entry: str
) -> tuple[QueriedObject | None, int]:
    if raw is None:
        return None, 0
    if not isinstance(raw, Mapping) or len(raw) != 1:
        raise SnapshotFormatError(
            file_path, entry, "'queried_object' must be one of {post: ID}, {term: {...}}, {author: ID}, {post_type: NAME}"
        )

    kind, value = next(iter(raw.items()))
    if kind == "post":
        if isinstance(value, Mapping):
            post = _parse_post(value, file_path, entry)
        else:
            post = site.get_post(value)
        return post, post.post_id if post is not None else 0
    if kind == "term":
        if not isinstance(value, Mapping) or "taxonomy" not in value or "slug" not in value:
            raise SnapshotFormatError(file_path, entry, "'term' needs 'taxonomy' and 'slug'")
        term = _build(Term, value, file_path, entry)
        return term, term.term_id
    if kind == "author":
        author = _build(Author, value, file_path, entry) if isinstance(value, Mapping) else site.get_author(value)
        return author, author.user_id if author is not None else 0
    if kind == "post_type":
        return site.get_post_type(value) or PostType(name=str(value)), 0
    raise SnapshotFormatError(file_path, entry, f"unknown queried object kind: {kind!r}")


def parse_request(raw: object, site: SiteRegistry, file_path: str = "<memory>", index: int = 0) -> Snapshot:
    """requests の1エントリを Snapshot に変換する.

    Raises:
        SnapshotFormatError: 未知のキー、不正なフラグ、不正な参照が含まれる場合
    """
    if not isinstance(raw, Mapping):
        raise SnapshotFormatError(file_path, f"#{index}", "request entries must be mappings")

    name = str(raw.get("name") or f"request-{index}")
    unknown = sorted(set(raw) - _REQUEST_KEYS)
    if unknown:
        raise SnapshotFormatError(file_path, name, f"unknown keys {unknown}")

    options: dict[str, object] = {key: bool(raw[key]) for key in _FLAG_FIELDS if key in raw}
    for flag in _as_list(raw.get("flags"), "flags", file_path, name):
        if flag not in _FLAG_FIELDS:
            raise SnapshotFormatError(file_path, name, f"unknown flag {flag!r}")
        options[flag] = True

    query_vars = raw.get("query_vars") or {}
    if not isinstance(query_vars, Mapping):
        raise SnapshotFormatError(file_path, name, "'query_vars' must be a mapping")

    queried_object, object_id = _parse_queried_object(raw.get("queried_object"), site, file_path, name)
    if "queried_object_id" in raw:
        object_id = raw["queried_object_id"]

    state = RequestState(
        site=site,
        query_vars=dict(query_vars),
        queried_object=queried_object,
        queried_object_id=object_id,
        current_post_id=raw.get("current_post_id"),
        **options,
    )
    return Snapshot(name=name, state=state)


def parse_document(data: object, file_path: str = "<memory>") -> list[Snapshot]:
    """読み込んだドキュメント全体を Snapshot のリストに変換する."""
    if isinstance(data, list):
        site = SiteRegistry()
        requests = data
    elif isinstance(data, Mapping):
        site = parse_site(data.get("site"), file_path)
        requests = _as_list(data.get("requests"), "requests", file_path, "requests")
    else:
        raise SnapshotFormatError(file_path, "<root>", f"expected a mapping or a list, got {type(data).__name__}")

    return [parse_request(raw, site, file_path, i) for i, raw in enumerate(requests)]


def dedupe_names(snapshots: list[Snapshot]) -> list[Snapshot]:
    """重複したスナップショット名に連番を付けて一意にする."""
    seen: dict[str, int] = {}
    repaired: list[Snapshot] = []
    for snapshot in snapshots:
        count = seen.get(snapshot.name, 0)
        seen[snapshot.name] = count + 1
        if count:
            snapshot = Snapshot(name=f"{snapshot.name}-{count + 1}", state=snapshot.state)
        repaired.append(snapshot)
    return repaired
