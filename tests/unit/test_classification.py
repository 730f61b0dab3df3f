"""Unit tests for request classification."""

from wp_logic.core.classification import ArchiveKind, RequestKind, classify_archive, classify_request
from wp_logic.core.state import RequestState


class TestClassifyRequest:
    def test_blog_wins_over_everything(self) -> None:
        state = RequestState(is_home=True, is_archive=True, is_search=True)
        assert classify_request(state) is RequestKind.BLOG

    def test_priority_order(self) -> None:
        assert classify_request(RequestState(is_singular=True, is_search=True)) is RequestKind.SINGULAR
        assert classify_request(RequestState(is_search=True, is_404=True)) is RequestKind.SEARCH
        assert classify_request(RequestState(is_404=True, is_archive=True)) is RequestKind.NOT_FOUND
        assert classify_request(RequestState(is_archive=True)) is RequestKind.ARCHIVE

    def test_other(self) -> None:
        assert classify_request(RequestState()) is RequestKind.OTHER


class TestClassifyArchive:
    def test_taxonomy_variants(self) -> None:
        for flag in ("is_tag", "is_category", "is_tax"):
            state = RequestState(is_archive=True, **{flag: True})
            assert classify_archive(state, False) is ArchiveKind.TAXONOMY

    def test_priority_order(self) -> None:
        state = RequestState(is_archive=True, is_post_type_archive=True, is_author=True)
        assert classify_archive(state, "day") is ArchiveKind.POST_TYPE
        assert classify_archive(RequestState(is_archive=True, is_author=True), "day") is ArchiveKind.AUTHOR

    def test_date_requires_truthy_unit(self) -> None:
        state = RequestState(is_archive=True, is_date=True)
        assert classify_archive(state, True) is ArchiveKind.DATE
        assert classify_archive(state, False) is ArchiveKind.OTHER
