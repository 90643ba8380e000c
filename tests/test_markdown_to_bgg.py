import pytest

from bgg2md import MarkdownToBgg, markdown_to_bgg


@pytest.mark.parametrize("value", ["", None])
def test_empty_input_is_returned_unchanged(value):
    assert markdown_to_bgg(value) is value


def test_stage_order():
    assert MarkdownToBgg.STAGES == (
        'code', 'inline_code', 'quotes', 'headings', 'emphasis',
        'links', 'lists', 'line_breaks', 'underline',
    )


def test_bold_and_thing_link():
    source = "**Bold** and [link](https://boardgamegeek.com/thing/13)"
    assert markdown_to_bgg(source) == "[b]Bold[/b] and [thing=13]link[/thing]"


def test_sample_document():
    source = (
        "# Title\n\n"
        "**Bold** *italic* ~~strike~~ and [link](https://boardgamegeek.com/thing/13).\n\n"
        "- A\n- B\n"
    )
    assert markdown_to_bgg(source) == (
        "[size=24]Title[/size]\n\n"
        "[b]Bold[/b] [i]italic[/i] [s]strike[/s] and [thing=13]link[/thing].\n\n"
        "[list]\n[*] A\n[*] B\n[/list]\n"
    )


class TestCode:
    def test_fenced_block_content_is_untouched(self):
        assert markdown_to_bgg("```\n*italic-looking*\n```") == "[code]\n*italic-looking*\n[/code]"

    def test_language_annotation_is_dropped(self):
        assert markdown_to_bgg("```python\nx = a_b_c * 2\n```") == "[code]\nx = a_b_c * 2\n[/code]"

    def test_blank_edges_are_trimmed(self):
        assert markdown_to_bgg("```\n\n  indented\n\n```") == "[code]\n  indented\n[/code]"

    def test_text_around_fence_is_converted(self):
        source = "before *a*\n```\n*b* - c\n# d\n```\nafter *e*"
        assert markdown_to_bgg(source) == "before [i]a[/i]\n[code]\n*b* - c\n# d\n[/code]\nafter [i]e[/i]"

    def test_inline_code(self):
        assert markdown_to_bgg("run `a*b*c` now") == "run [tt]a*b*c[/tt] now"

    def test_inline_code_hides_underscores(self):
        assert markdown_to_bgg("`_x_` and _y_") == "[tt]_x_[/tt] and [i]y[/i]"

    def test_backticks_across_lines_are_not_code(self):
        assert markdown_to_bgg("`a\nb`") == "`a\nb`"


class TestQuotes:
    def test_contiguous_lines_form_one_quote(self):
        assert markdown_to_bgg("> one\n>two\nplain") == "[quote]\none\ntwo\n[/quote]\nplain"

    def test_separate_runs_stay_separate(self):
        assert markdown_to_bgg("> a\nmid\n> b") == "[quote]\na\n[/quote]\nmid\n[quote]\nb\n[/quote]"

    def test_nested_quote(self):
        assert markdown_to_bgg("> a\n> > b") == "[quote]\na\n[quote]\nb\n[/quote]\n[/quote]"

    def test_quote_depth_can_drop_back(self):
        assert markdown_to_bgg("> > a\n> b") == "[quote]\n[quote]\na\n[/quote]\nb\n[/quote]"

    def test_hundreds_of_markers_nest_without_error(self):
        result = markdown_to_bgg(">" * 1200 + " x")
        assert result == "\n".join(["[quote]"] * 1200 + ["x"] + ["[/quote]"] * 1200)


class TestHeadings:
    @pytest.mark.parametrize("hashes, size", [
        ("#", 24), ("##", 18), ("###", 16), ("####", 14), ("#####", 12), ("######", 10),
    ])
    def test_depth_to_size(self, hashes, size):
        assert markdown_to_bgg(f"{hashes} Title") == f"[size={size}]Title[/size]"

    def test_hash_without_space_is_not_a_heading(self):
        assert markdown_to_bgg("#hashtag") == "#hashtag"

    def test_seven_hashes_is_not_a_heading(self):
        assert markdown_to_bgg("####### x") == "####### x"


class TestEmphasis:
    @pytest.mark.parametrize("source, expected", [
        ("**b**", "[b]b[/b]"),
        ("__b__", "[b]b[/b]"),
        ("*i*", "[i]i[/i]"),
        ("_i_", "[i]i[/i]"),
        ("~~s~~", "[s]s[/s]"),
        ("<u>u</u>", "[u]u[/u]"),
    ])
    def test_markers(self, source, expected):
        assert markdown_to_bgg(source) == expected

    def test_spaced_asterisks_are_not_italic(self):
        assert markdown_to_bgg("2 * 3 * 4") == "2 * 3 * 4"

    def test_intraword_underscores_are_not_italic(self):
        assert markdown_to_bgg("snake_case_name") == "snake_case_name"

    @pytest.mark.parametrize("source, expected", [
        ("**Price**(USD)", "[b]Price[/b](USD)"),
        ("*foo*(bar)", "[i]foo[/i](bar)"),
        ("**x**(https://example.com)", "[b]x[/b](https://example.com)"),
    ])
    def test_parenthesis_after_emphasis_is_not_a_link(self, source, expected):
        assert markdown_to_bgg(source) == expected

    def test_emphasis_before_a_link(self):
        source = "*a* [site](https://example.com)"
        assert markdown_to_bgg(source) == "[i]a[/i] [url=https://example.com]site[/url]"


class TestLinks:
    def test_plain_link(self):
        assert markdown_to_bgg("[site](https://example.com)") == "[url=https://example.com]site[/url]"

    def test_link_title_is_dropped(self):
        assert markdown_to_bgg('[a](https://example.com "Home")') == "[url=https://example.com]a[/url]"

    def test_boardgame_path(self):
        source = "[Catan](https://boardgamegeek.com/boardgame/13/catan)"
        assert markdown_to_bgg(source) == "[thing=13]Catan[/thing]"

    def test_user_link_uses_placeholder_id(self):
        source = "[@alice](https://boardgamegeek.com/user/alice)"
        assert markdown_to_bgg(source) == "[user=0]alice[/user]"

    def test_image_drops_alt_text(self):
        assert markdown_to_bgg("![box](https://example.com/a.png)") == "[img]https://example.com/a.png[/img]"

    def test_bold_link_text(self):
        assert markdown_to_bgg("[**x**](https://example.com)") == "[url=https://example.com][b]x[/b][/url]"

    def test_site_relative_target(self):
        assert markdown_to_bgg("[rules](/wiki/page)") == "[url=/wiki/page]rules[/url]"

    def test_target_without_scheme_stays_text(self):
        assert markdown_to_bgg("[see](notes)") == "[see](notes)"


class TestThematicBreaks:
    def test_leading_rule_is_kept(self):
        assert markdown_to_bgg("---\nSome text\n---\nmore") == "---\nSome text\n---\nmore"


class TestLists:
    def test_unordered(self):
        assert markdown_to_bgg("- A\n- B") == "[list]\n[*] A\n[*] B\n[/list]"

    def test_mixed_bullets_share_a_list(self):
        assert markdown_to_bgg("* a\n+ b\n- c") == "[list]\n[*] a\n[*] b\n[*] c\n[/list]"

    def test_ordered(self):
        assert markdown_to_bgg("1. x\n2. y\n3. z") == "[olist]\n[*] x\n[*] y\n[*] z\n[/olist]"

    def test_indentation_change_starts_new_list(self):
        assert markdown_to_bgg("- a\n  - b") == "[list]\n[*] a\n[/list]\n[list]\n[*] b\n[/list]"

    def test_list_after_paragraph(self):
        assert markdown_to_bgg("Intro:\n- a\n- b\nOutro") == "Intro:\n[list]\n[*] a\n[*] b\n[/list]\nOutro"


class TestLineBreaks:
    def test_two_trailing_spaces(self):
        assert markdown_to_bgg("a  \nb") == "a[br]\nb"

    def test_more_trailing_spaces(self):
        assert markdown_to_bgg("a    \nb") == "a[br]\nb"

    def test_single_trailing_space_is_kept(self):
        assert markdown_to_bgg("a \nb") == "a \nb"
