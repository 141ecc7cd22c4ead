"""Tests for splitting content into pages."""

import pytest

from tsuzuri.metrics import PageMetrics, metrics_for
from tsuzuri.paginator import Paginator, join_pages, paginate, replace_page
from tsuzuri.settings import DEFAULT_SETTINGS, EditorSettings, WritingMode


# 5 characters per line, 3 lines per page: 15 characters per page
SMALL = PageMetrics(5, 3)
LARGE = PageMetrics(100, 100)


def pages_for(content, metrics=SMALL):
    return Paginator(content, metrics).format_pages()


class TestEmptyContent:

    @pytest.mark.parametrize("settings", [
        DEFAULT_SETTINGS,
        DEFAULT_SETTINGS.updated(writing_mode=WritingMode.HORIZONTAL),
        DEFAULT_SETTINGS.updated(margin_left=500, margin_top=500),
        DEFAULT_SETTINGS.updated(font_size=200, line_height=4.0),
    ])
    def test_empty_content_is_one_empty_page(self, settings):
        assert paginate("", settings) == [""]

    def test_empty_content_page_count(self):
        p = Paginator("", SMALL)
        p.format_pages()
        assert p.get_page_count() == 1
        assert p.get_page(0) == ""


class TestSinglePage:

    def test_short_text(self):
        assert pages_for("abc") == ["abc"]

    def test_two_lines_fit_on_one_page(self):
        """Newline inside a page is kept and no split happens."""
        assert pages_for("line1\nline2", LARGE) == ["line1\nline2"]

    def test_exact_fill_does_not_open_empty_page(self):
        assert pages_for("a" * 15) == ["a" * 15]

    def test_lines_exactly_filling_page(self):
        assert pages_for("aaaaa\nbbbbb\nccccc") == ["aaaaa\nbbbbb\nccccc"]

    def test_trailing_newline_kept(self):
        assert pages_for("abc\n", LARGE) == ["abc\n"]


class TestOverflow:

    def test_one_character_over(self):
        assert pages_for("a" * 16) == ["a" * 15, "a"]

    def test_long_line_spans_several_pages(self):
        assert pages_for("a" * 31) == ["a" * 15, "a" * 15, "a"]

    def test_short_line_counts_full_row(self):
        """Each source line takes at least one whole row."""
        assert pages_for("a\nb\nc\nd") == ["a\nb\nc", "d"]

    def test_wrapped_line_uses_several_rows(self):
        # 7 chars take 2 rows, leaving 1 row (5 chars) for the next line
        assert pages_for("a" * 7 + "\n" + "b" * 10) == ["a" * 7 + "\nbbbbb", "bbbbb"]

    def test_continuation_chunk_has_no_leading_newline(self):
        pages = pages_for("x\n" + "a" * 20)
        assert pages == ["x\n" + "a" * 10, "a" * 10]
        assert not pages[1].startswith("\n")

    def test_empty_line_at_page_boundary_opens_no_empty_page(self):
        assert pages_for("abc\n\nd", PageMetrics(5, 1)) == ["abc", "d"]

    def test_page_rows_never_exceed_limit(self):
        content = "\n".join("x" * n for n in (1, 4, 6, 11, 0, 3, 15, 2))
        for page in pages_for(content):
            rows = sum(max(1, -(-len(line) // 5)) for line in page.split("\n"))
            assert rows <= 3


class TestLineBreaks:

    def test_blank_lines_collapse(self):
        assert pages_for("a\n\nb", LARGE) == ["a\nb"]
        assert pages_for("a\n\n\n\nb", LARGE) == ["a\nb"]

    def test_leading_blank_line_dropped(self):
        assert pages_for("\nabc", LARGE) == ["abc"]

    def test_only_newlines(self):
        # Nothing but row breaks leaves no text at all
        assert pages_for("\n\n", LARGE) == [""]

    @pytest.mark.parametrize("content", [
        "hello",
        "a\n\nb\n",
        "a" * 40 + "\n" + "b" * 3 + "\n\n" + "c" * 17,
        "\n\nleading\nand trailing\n\n",
        "縦書きの文章\n改行あり\n" * 5,
    ])
    @pytest.mark.parametrize("metrics", [SMALL, PageMetrics(1, 1), PageMetrics(3, 7), LARGE])
    def test_only_newlines_are_added_or_dropped(self, content, metrics):
        joined = join_pages(pages_for(content, metrics))
        assert joined.replace("\n", "") == content.replace("\n", "")


class TestRoundTrip:

    @pytest.mark.parametrize("content", [
        "ab\ncd\nef",
        "a" * 16,
        "a" * 7 + "\n" + "b" * 10,
        "aaaaa\nbbbbb\nccccc\nddddd",
    ])
    def test_join_and_repaginate_is_stable(self, content):
        first = pages_for(content)
        assert pages_for(join_pages(first)) == first

    def test_split_inside_line_rejoins_exactly(self):
        content = "a" * 7 + "\n" + "b" * 10
        assert join_pages(pages_for(content)) == content

    def test_newline_at_page_boundary_is_lost(self):
        """A source line break that coincides with a page split is not kept.

        Re-paginating the joined pages then packs differently. This is the
        accepted non-invertible case.
        """
        content = "a" * 14 + "\n" + "bb"
        first = pages_for(content)
        assert first == ["a" * 14, "bb"]

        joined = join_pages(first)
        assert joined == "a" * 14 + "bb"
        assert pages_for(joined) == ["a" * 14 + "b", "b"]

    def test_boundary_loss_can_keep_page_layout(self):
        content = "aaaaa\nbbbbb\nccccc\nddddd"
        first = pages_for(content)
        assert first == ["aaaaa\nbbbbb\nccccc", "ddddd"]
        assert join_pages(first) != content


class TestDeterminism:

    def test_repeated_calls_identical(self):
        content = "吾輩は猫である。\n名前はまだ無い。\n" * 40
        settings = EditorSettings(font_size=30)
        assert paginate(content, settings) == paginate(content, settings)

    def test_settings_change_repaginates(self):
        content = "あ" * 2000
        vertical = paginate(content, DEFAULT_SETTINGS)
        horizontal = paginate(content, DEFAULT_SETTINGS.updated(writing_mode="horizontal"))
        assert len(vertical) == 4  # 615 per page
        assert len(horizontal) == 3  # 34 * 21 = 714 per page


class TestEndToEnd:

    def test_full_page_then_one_more_character(self):
        metrics = metrics_for(DEFAULT_SETTINGS)
        n, m = metrics.characters_per_line, metrics.lines_per_page
        assert (n, m) == (41, 15)

        assert paginate("字" * (n * m), DEFAULT_SETTINGS) == ["字" * (n * m)]

        pages = paginate("字" * (n * m + 1), DEFAULT_SETTINGS)
        assert len(pages) == 2
        assert pages[1] == "字"


class TestPageEditing:

    def test_replace_page_rejoins_all_pages(self):
        assert replace_page(["ab", "cd", "ef"], 1, "XY") == "abXYef"

    def test_replace_page_keeps_display_newline(self):
        pages = pages_for("a" * 7 + "\n" + "b" * 10)
        assert replace_page(pages, 1, "zz") == "a" * 7 + "\nbbbbbzz"

    @pytest.mark.parametrize("index", [-1, 3])
    def test_replace_page_out_of_range(self, index):
        with pytest.raises(IndexError):
            replace_page(["a", "b", "c"], index, "x")

    def test_get_page_out_of_range_is_empty(self):
        p = Paginator("a" * 16, SMALL)
        p.format_pages()
        assert p.get_page_count() == 2
        assert p.get_page(1) == "a"
        assert p.get_page(2) == ""
        assert p.get_page(-1) == ""
