"""リクエスト状態とサイト情報のデータモデル.

ホスト CMS（クエリ/ルーティング層、タクソノミー、サイドバー登録）から受け取る事実を
読み取り専用のデータとして表現します。このパッケージは CMS 自体を実装せず、
ここに詰められた値だけを判断材料にします。

- SiteRegistry: サイト全体で共通の登録情報（投稿タイプ、タクソノミー、投稿など）
- RequestState: 1リクエスト分の判定フラグ・クエリ変数・クエリ対象オブジェクト

参照系のメソッドは見つからない場合に None / False を返し、例外は投げません。
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Term:
    taxonomy: str
    slug: str
    name: str = ""
    term_id: int = 0


@dataclass(frozen=True)
class Author:
    user_id: int
    nicename: str
    display_name: str = ""


@dataclass(frozen=True)
class Post:
    """1件のコンテンツ（投稿/固定ページ/添付ファイルなど）."""

    post_id: int
    post_type: str = "post"
    post_name: str = ""
    post_status: str = "publish"
    mime_type: str = ""
    post_format: str | None = None
    sticky: bool = False
    terms: Mapping[str, tuple[Term, ...]] = field(default_factory=dict)


@dataclass(frozen=True)
class PostType:
    name: str
    label: str = ""
    has_archive: bool = False


@dataclass(frozen=True)
class Taxonomy:
    name: str
    label: str = ""
    object_types: tuple[str, ...] = ()


@dataclass(frozen=True)
class Sidebar:
    sidebar_id: str
    name: str = ""
    active: bool = False


@dataclass(frozen=True)
class SiteRegistry:
    """サイト全体の登録情報.

    taxonomies / sidebars は登録順を保持します（出力トークンの順序に影響するため）。
    """

    post_types: Mapping[str, PostType] = field(default_factory=dict)
    taxonomies: Mapping[str, Taxonomy] = field(default_factory=dict)
    sidebars: Mapping[str, Sidebar] = field(default_factory=dict)
    posts: Mapping[int, Post] = field(default_factory=dict)
    authors: Mapping[int, Author] = field(default_factory=dict)
    theme_supports_post_formats: bool = False
    is_child_theme: bool = False
    is_multisite: bool = False
    blog_id: int = 1

    def get_post(self, post_id: object) -> Post | None:
        if isinstance(post_id, bool) or not isinstance(post_id, int):
            return None
        return self.posts.get(post_id)

    def get_author(self, user_id: object) -> Author | None:
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            return None
        return self.authors.get(user_id)

    def get_post_type(self, name: object) -> PostType | None:
        if not isinstance(name, str):
            return None
        return self.post_types.get(name)

    def post_type_exists(self, name: object) -> bool:
        return self.get_post_type(name) is not None

    def taxonomy_exists(self, name: object) -> bool:
        return isinstance(name, str) and name in self.taxonomies

    def is_object_in_taxonomy(self, post_type: str, taxonomy: str) -> bool:
        tax = self.taxonomies.get(taxonomy)
        return tax is not None and post_type in tax.object_types


QueriedObject = Post | Term | Author | PostType


@dataclass(frozen=True)
class RequestState:
    """1リクエスト分の読み取り専用の状態.

    フラグはホストのルーティング層が判定した結果をそのまま保持します。
    query_vars の値は文字列または整数（未設定は欠落または空文字）。
    """

    site: SiteRegistry = field(default_factory=SiteRegistry)

    logged_in: bool = False
    admin_bar_showing: bool = False

    is_front_page: bool = False
    is_paged: bool = False
    is_singular: bool = False
    is_home: bool = False
    is_search: bool = False
    is_404: bool = False
    is_archive: bool = False
    is_tag: bool = False
    is_category: bool = False
    is_tax: bool = False
    is_post_type_archive: bool = False
    is_author: bool = False
    is_date: bool = False
    is_time: bool = False
    is_day: bool = False
    is_month: bool = False
    is_year: bool = False

    query_vars: Mapping[str, object] = field(default_factory=dict)
    queried_object: QueriedObject | None = None
    queried_object_id: int = 0
    current_post_id: int | None = None

    def get_query_var(self, name: str, default: object = "") -> object:
        return self.query_vars.get(name, default)

    @property
    def current_post(self) -> Post | None:
        """ループ中の現在の投稿（なければ None）."""
        return self.site.get_post(self.current_post_id)
