import pytest

from CellRender.config import StyleProfile, load_style_profile, parse_style_profile
from CellRender.errors import ConfigError


def test_defaults_match_report_styles():
    profile = StyleProfile()
    assert profile.body_font == "Calibri"
    assert profile.body_size_pt == 9.5
    assert profile.code_font == "Courier New"
    assert profile.code_background == "#efefef"
    assert profile.heading_size(1) == 10.5
    assert profile.heading_is_italic(6) and not profile.heading_is_bold(6)


def test_overrides_from_yaml():
    profile = parse_style_profile("body_font: Arial\nheading_sizes_pt: [20, 16]\n")
    assert profile.body_font == "Arial"
    assert profile.heading_sizes_pt == (20, 16)
    assert profile.heading_size(1) == 20
    assert profile.heading_size(5) == 16
    assert profile.code_font == "Courier New"


def test_empty_yaml_gives_defaults():
    assert parse_style_profile("") == StyleProfile()


def test_unknown_keys_rejected():
    with pytest.raises(ConfigError, match="colour"):
        parse_style_profile("colour: red\n")


def test_non_mapping_rejected():
    with pytest.raises(ConfigError):
        parse_style_profile("- a\n- b\n")


def test_list_fields_must_be_lists():
    with pytest.raises(ConfigError):
        parse_style_profile("heading_bold: yes\n")


def test_load_from_file(tmp_path):
    path = tmp_path / "style.yaml"
    path.write_text("code_background: '#dddddd'\n", encoding="utf-8")
    assert load_style_profile(path).code_background == "#dddddd"
    assert load_style_profile(None) == StyleProfile()


@pytest.mark.parametrize(
    "yaml_text",
    [
        "body_size_pt: big\n",
        "heading_sizes_pt: [a]\n",
        "heading_italic: [1, 0]\n",
        "body_font: 12\n",
        "code_size_pt: true\n",
    ],
)
def test_values_must_match_field_types(yaml_text):
    with pytest.raises(ConfigError):
        parse_style_profile(yaml_text)


def test_numeric_fields_accept_ints_and_floats():
    profile = parse_style_profile("body_size_pt: 11\nblockquote_indent_pt: 20.5\n")
    assert profile.body_size_pt == 11
    assert profile.blockquote_indent_pt == 20.5
