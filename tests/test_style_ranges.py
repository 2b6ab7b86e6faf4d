import pytest

from CellRender.config import StyleProfile
from CellRender.model import StyledRun, StyleRange
from CellRender.style_ranges import StyledBuffer, build_ranges, write_runs

CODE_BG = StyleProfile().code_background


def test_ranges_follow_run_lengths():
    builder = build_ranges([StyledRun("ab"), StyledRun("code", is_code=True), StyledRun("cd")])
    assert [(r.start, r.end) for r in builder.ranges] == [(0, 2), (2, 6), (6, 8)]
    assert builder.code_ranges == [StyleRange(start=2, end=6, code=True)]
    assert builder.cursor == 8


def test_ranges_can_start_after_a_prefix():
    builder = build_ranges([StyledRun("x", bold=True)], start=3)
    assert builder.ranges == [StyleRange(start=3, end=4, bold=True)]


def test_background_only_on_code_offsets():
    buffer = StyledBuffer()
    write_runs(buffer, [StyledRun("ab"), StyledRun("code", is_code=True), StyledRun("cd")])
    assert buffer.text == "abcodecd"
    backgrounds = [buffer.attributes_at(i).get("background") for i in range(len(buffer))]
    assert backgrounds == [None, None, CODE_BG, CODE_BG, CODE_BG, CODE_BG, None, None]


def test_text_after_code_does_not_keep_code_font():
    profile = StyleProfile()
    buffer = StyledBuffer()
    write_runs(buffer, [StyledRun("c", is_code=True), StyledRun("t")], profile)
    assert buffer.attributes_at(0)["font"] == profile.code_font
    assert buffer.attributes_at(1)["font"] == profile.body_font


def test_existing_background_is_cleared_outside_code():
    buffer = StyledBuffer("\t\t", background="#ff0000")
    write_runs(buffer, [StyledRun("x", is_code=True), StyledRun("y")], start=2)
    backgrounds = [buffer.attributes_at(i).get("background") for i in range(len(buffer))]
    assert backgrounds == [None, None, CODE_BG, None]


def test_adjacent_code_ranges_keep_background():
    buffer = StyledBuffer()
    write_runs(buffer, [StyledRun("a", is_code=True), StyledRun("b", is_code=True), StyledRun("c")])
    assert [buffer.attributes_at(i).get("background") for i in range(3)] == [CODE_BG, CODE_BG, None]


def test_styles_do_not_bleed_into_following_runs():
    buffer = StyledBuffer()
    write_runs(
        buffer,
        [StyledRun("a", bold=True), StyledRun("b"), StyledRun("c", link_url="https://x.io")],
    )
    assert buffer.attributes_at(0)["bold"] is True
    assert "bold" not in buffer.attributes_at(1)
    assert buffer.attributes_at(2)["link_url"] == "https://x.io"
    assert "link_url" not in buffer.attributes_at(1)


def test_segments_group_identical_attributes():
    buffer = StyledBuffer()
    write_runs(buffer, [StyledRun("ab"), StyledRun("cd"), StyledRun("ef", italic=True)])
    segments = buffer.segments()
    assert [text for text, _ in segments] == ["abcd", "ef"]
    assert segments[1][1]["italic"] is True


def test_empty_runs_are_skipped():
    buffer = StyledBuffer()
    builder = write_runs(buffer, [StyledRun(""), StyledRun("x", is_code=True)])
    assert builder.code_ranges == [StyleRange(start=0, end=1, code=True)]
    assert buffer.text == "x"


def test_insert_outside_buffer_raises():
    buffer = StyledBuffer("ab")
    with pytest.raises(IndexError):
        buffer.insert_text(5, "x")
