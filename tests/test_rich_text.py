from CellRender.html_parser import parse_elements, sanitize, wrap_lines_in_html_list
from CellRender.markdown_parser import parse_markdown
from CellRender.model import (
    RichCodeBlock,
    RichHeading,
    RichListItem,
    RichParagraph,
    RichQuoteLine,
    StyledRun,
)
from CellRender.rich_text import render_html, render_markdown, render_plain


def _html(markup):
    return render_html(parse_elements(sanitize(markup)))


def test_markdown_blocks_to_rich_blocks():
    md_text = "# Notes\n\n- fix `login`\n  - add [test](https://t.io)\n> checked\n```\nraw *x*\n```"
    blocks = render_markdown(parse_markdown(md_text))
    assert blocks == [
        RichHeading(runs=(StyledRun("Notes"),), level=1),
        RichListItem(runs=(StyledRun("fix "), StyledRun("login", is_code=True)), ordered=False, indent=0),
        RichListItem(runs=(StyledRun("add "), StyledRun("test", link_url="https://t.io")), ordered=False, indent=1),
        RichQuoteLine(runs=(StyledRun("checked"),)),
        RichCodeBlock(text="raw *x*"),
    ]


def test_markdown_inline_styles_map_to_run_flags():
    (paragraph,) = render_markdown(parse_markdown("**b** *i* ~~s~~"))
    assert paragraph.runs == (
        StyledRun("b", bold=True),
        StyledRun(" "),
        StyledRun("i", italic=True),
        StyledRun(" "),
        StyledRun("s", strikethrough=True),
    )
    assert paragraph.text == "b i s"


def test_blank_line_markers_produce_no_blocks():
    blocks = render_markdown(parse_markdown("a\n\n\nb"))
    assert [block.text for block in blocks] == ["a", "b"]


def test_ordered_list_items():
    blocks = render_markdown(parse_markdown("1. one\n2. two"))
    assert all(isinstance(block, RichListItem) and block.ordered for block in blocks)


def test_plain_text_is_one_unstyled_paragraph():
    assert render_plain("just words") == [RichParagraph(runs=(StyledRun("just words"),))]
    assert render_plain("") == [RichParagraph(runs=(StyledRun(""),))]


def test_html_paragraph_with_inline_styles():
    assert _html("<p>Hello <b>bold</b> and <i>it</i> <u>u</u></p>") == [
        RichParagraph(
            runs=(
                StyledRun("Hello "),
                StyledRun("bold", bold=True),
                StyledRun(" and "),
                StyledRun("it", italic=True),
                StyledRun(" "),
                StyledRun("u", underline=True),
            )
        )
    ]


def test_html_nested_inline_styles_combine():
    (paragraph,) = _html("<b>x<i>y</i></b>z")
    assert paragraph.runs == (
        StyledRun("x", bold=True),
        StyledRun("y", bold=True, italic=True),
        StyledRun("z"),
    )


def test_html_inline_after_block_joins_its_paragraph():
    (paragraph,) = _html("<p>x</p><b>y</b>")
    assert paragraph.runs == (StyledRun("x"), StyledRun("y", bold=True))


def test_html_heading_after_content_gets_spacer():
    assert _html("<p>intro</p><h2>Title</h2>") == [
        RichParagraph(runs=(StyledRun("intro"),)),
        RichParagraph(runs=()),
        RichHeading(runs=(StyledRun("Title"),), level=2),
    ]
    assert _html("<h1>Top</h1>") == [RichHeading(runs=(StyledRun("Top"),), level=1)]


def test_html_lists_with_nesting():
    blocks = _html("<ul><li>a<ul><li><b>b</b></li></ul></li></ul><ol><li>c</li></ol>")
    assert blocks == [
        RichListItem(runs=(StyledRun("a"),), ordered=False, indent=0),
        RichListItem(runs=(StyledRun("b", bold=True),), ordered=False, indent=1),
        RichListItem(runs=(StyledRun("c"),), ordered=True, indent=0),
    ]


def test_html_list_from_wrapped_lines():
    blocks = _html(wrap_lines_in_html_list("Intro\n- a\n-- b\n- c"))
    assert blocks[0] == RichParagraph(runs=(StyledRun("Intro"),))
    assert [(block.text, block.indent) for block in blocks[1:]] == [("a", 0), ("b", 1), ("c", 0)]


def test_html_list_interrupts_paragraph():
    blocks = _html("before<ul><li>item</li></ul>after")
    assert [type(block) for block in blocks] == [RichParagraph, RichListItem, RichParagraph]


def test_html_br_only_inside_open_paragraph():
    (paragraph,) = _html("<p>a<br/>b</p>")
    assert paragraph.text == "a\nb"
    assert _html("<br/><h3>x</h3>") == [RichHeading(runs=(StyledRun("x"),), level=3)]


def test_html_layout_whitespace_is_ignored():
    blocks = _html("<ul>\n  <li>a</li>\n  <li>b</li>\n</ul>\n")
    assert [block.text for block in blocks] == ["a", "b"]


def test_html_empty_tree_renders_nothing():
    assert render_html(parse_elements("")) == []


def test_html_line_break_between_inline_tags_keeps_word_gap():
    first, second = _html("<p><b>Fixed</b>\n<i>today</i>\n</p>\n<p>next</p>")
    assert first.runs == (
        StyledRun("Fixed", bold=True),
        StyledRun(" "),
        StyledRun("today", italic=True),
    )
    assert second.text == "next"
