"""Unit tests for snapshot adapters."""

import json
from pathlib import Path

import pytest

from wp_logic.adapters import CSV_Adapter, JSON_Adapter, YAML_Adapter, parse_document
from wp_logic.core.exceptions import SnapshotFormatError
from wp_logic.core.state import Author, Post, Term

SITE_YAML = """\
site:
  is_multisite: true
  blog_id: 4
  theme_supports_post_formats: true
  post_types: [post, {name: book, has_archive: true}]
  taxonomies:
    - {name: category, object_types: [post]}
  sidebars:
    - {sidebar_id: primary, active: true}
    - footer
  authors:
    - {user_id: 7, nicename: jane}
  posts:
    - {post_id: 42, post_name: hello-world, terms: {category: [news, {slug: tech, name: Tech}]}}
requests:
  - name: single
    flags: [is_singular]
    queried_object: {post: 42}
    current_post_id: 42
    logged_in: true
  - name: author
    is_archive: true
    is_author: true
    queried_object: {author: 7}
  - name: single
    is_search: true
"""


class TestParseDocument:
    def test_site_and_requests(self, tmp_path: Path) -> None:
        path = tmp_path / "snapshots.yml"
        path.write_text(SITE_YAML, encoding="utf-8")

        snapshots = YAML_Adapter(path).read()

        assert [s.name for s in snapshots] == ["single", "author", "single-2"]
        single = snapshots[0].state
        assert single.is_singular is True
        assert single.logged_in is True
        assert isinstance(single.queried_object, Post)
        assert single.queried_object_id == 42
        assert single.site.is_multisite is True
        assert single.site.blog_id == 4
        assert single.site.posts[42].terms["category"][1] == Term("category", "tech", "Tech")
        assert list(single.site.sidebars) == ["primary", "footer"]

        author = snapshots[1].state
        assert author.queried_object == Author(user_id=7, nicename="jane")
        assert author.queried_object_id == 7

    def test_bare_list(self) -> None:
        snapshots = parse_document([{"flags": ["is_404"]}])
        assert snapshots[0].name == "request-0"
        assert snapshots[0].state.is_404 is True

    def test_term_queried_object(self) -> None:
        snapshots = parse_document(
            [{"is_archive": True, "is_tag": True, "queried_object": {"term": {"taxonomy": "post_tag", "slug": "x", "term_id": 3}}}]
        )
        assert snapshots[0].state.queried_object_id == 3

    def test_unknown_flag(self) -> None:
        with pytest.raises(SnapshotFormatError, match="unknown flag"):
            parse_document([{"name": "bad", "flags": ["is_weird"]}])

    def test_unknown_key(self) -> None:
        with pytest.raises(SnapshotFormatError, match="unknown keys"):
            parse_document([{"name": "bad", "colour": "blue"}])

    def test_bad_post_id(self) -> None:
        with pytest.raises(SnapshotFormatError, match="post_id"):
            parse_document({"site": {"posts": [{"post_id": "42"}]}, "requests": []})

    def test_bad_queried_object(self) -> None:
        with pytest.raises(SnapshotFormatError, match="queried object kind"):
            parse_document([{"queried_object": {"comment": 1}}])

    def test_error_attributes(self) -> None:
        with pytest.raises(SnapshotFormatError) as excinfo:
            parse_document([{"name": "bad", "query_vars": ["year"]}], "snap.json")
        assert excinfo.value.file_path == "snap.json"
        assert excinfo.value.entry == "bad"


class TestJSONAdapter:
    def test_read(self, tmp_path: Path) -> None:
        path = tmp_path / "snapshots.json"
        path.write_text(json.dumps({"requests": [{"name": "search", "is_search": True}]}), encoding="utf-8")

        adapter = JSON_Adapter(path)
        snapshots = adapter.read()

        assert adapter.validate(snapshots) is True
        assert snapshots[0].state.is_search is True

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="JSON file not found"):
            JSON_Adapter(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{invalid", encoding="utf-8")

        with pytest.raises(ValueError, match="Failed to read JSON"):
            JSON_Adapter(path).read()

    def test_validate_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.json"
        path.write_text("[]", encoding="utf-8")

        adapter = JSON_Adapter(path)
        assert adapter.validate(adapter.read()) is False


class TestYAMLAdapter:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="YAML file not found"):
            YAML_Adapter(tmp_path / "missing.yml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.yml"
        path.write_text("requests: [unclosed\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Failed to read YAML"):
            YAML_Adapter(path).read()


class TestCSVAdapter:
    def test_rows_with_site(self, tmp_path: Path) -> None:
        site_path = tmp_path / "site.yml"
        site_path.write_text(SITE_YAML, encoding="utf-8")
        csv_path = tmp_path / "requests.csv"
        csv_path.write_text(
            "name,flags,logged_in,queried_post,queried_term,var_year,var_monthnum\n"
            "post,is_singular,yes,42,,,\n"
            "month,is_archive is_date is_month,,,,2024,05\n"
            "cat,is_archive is_category,0,,category:news,,\n",
            encoding="utf-8",
        )

        snapshots = CSV_Adapter(csv_path, site_path=site_path).read()

        post, month, cat = (s.state for s in snapshots)
        assert post.logged_in is True
        assert post.queried_object_id == 42
        assert month.query_vars == {"year": "2024", "monthnum": "05"}
        assert month.is_month is True
        assert cat.logged_in is False
        assert cat.queried_object == Term("category", "news")

    def test_without_site(self, tmp_path: Path) -> None:
        csv_path = tmp_path / "requests.csv"
        csv_path.write_text("name,flags,current_post_id\nhome,is_home,abc\n", encoding="utf-8")

        snapshots = CSV_Adapter(csv_path).read()

        assert snapshots[0].state.is_home is True
        assert snapshots[0].state.current_post_id is None

    def test_missing_site_file(self, tmp_path: Path) -> None:
        csv_path = tmp_path / "requests.csv"
        csv_path.write_text("name\nx\n", encoding="utf-8")

        with pytest.raises(FileNotFoundError, match="Site file not found"):
            CSV_Adapter(csv_path, site_path=tmp_path / "nope.yml")
