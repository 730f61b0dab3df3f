"""Unit tests for taxonomy, term and sidebar lookups."""

from wp_logic.core.registry import all_terms, post_format, sidebars, taxos, terms
from wp_logic.core.state import Post, PostType, SiteRegistry, Sidebar, Taxonomy, Term


def _site(**kwargs: object) -> SiteRegistry:
    post = Post(
        post_id=1,
        post_format="gallery",
        terms={
            "category": (Term("category", "news", "News"), Term("category", "tech", "Tech")),
            "post_tag": (),
        },
    )
    defaults: dict[str, object] = {
        "post_types": {"post": PostType("post"), "page": PostType("page")},
        "taxonomies": {
            "category": Taxonomy("category", label="Categories", object_types=("post",)),
            "post_tag": Taxonomy("post_tag", label="Tags", object_types=("post",)),
            "genre": Taxonomy("genre", label="Genres", object_types=("book",)),
        },
        "sidebars": {
            "primary": Sidebar("primary", active=True),
            "footer": Sidebar("footer"),
            "header": Sidebar("header", active=True),
        },
        "posts": {1: post},
        "theme_supports_post_formats": True,
    }
    defaults.update(kwargs)
    return SiteRegistry(**defaults)


class TestTaxos:
    def test_by_post_type(self) -> None:
        assert taxos(_site(), "post") == {"category": "category", "post_tag": "post_tag"}

    def test_by_post_id_and_field(self) -> None:
        assert taxos(_site(), 1, "label") == {"category": "Categories", "post_tag": "Tags"}

    def test_whole_objects(self) -> None:
        result = taxos(_site(), "post", None)
        assert isinstance(result["category"], Taxonomy)

    def test_unregistered_type(self) -> None:
        assert taxos(_site(), "book") == {}
        assert taxos(_site(), 999) == {}
        assert taxos(_site(), None) == {}


class TestTerms:
    def test_slugs(self) -> None:
        assert terms(_site(), 1, "category") == ["news", "tech"]

    def test_other_field_and_objects(self) -> None:
        site = _site()
        assert terms(site, 1, "category", "name") == ["News", "Tech"]
        assert all(isinstance(t, Term) for t in terms(site, 1, "category", None))

    def test_missing(self) -> None:
        site = _site()
        assert terms(site, 1, "unknown") == []
        assert terms(site, 2, "category") == []
        assert terms(site, 1, "post_tag") == []

    def test_all_terms(self) -> None:
        assert all_terms(_site(), 1) == {"category": ["news", "tech"], "post_tag": []}


class TestSidebars:
    def test_all_active_inactive(self) -> None:
        site = _site()
        assert sidebars(site) == ["primary", "footer", "header"]
        assert sidebars(site, True) == ["primary", "header"]
        assert sidebars(site, False) == ["footer"]


class TestPostFormat:
    def test_supported(self) -> None:
        assert post_format(_site(), 1) == "gallery"

    def test_unsupported_theme(self) -> None:
        assert post_format(_site(theme_supports_post_formats=False), 1) is False

    def test_missing_post(self) -> None:
        assert post_format(_site(), 2) is False
