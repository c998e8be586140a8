"""Unit tests for configuration discovery and loading."""

import json

import pytest

from htmlremark.config import find_config_in_parents, load_config_file, options_from_mapping
from htmlremark.exceptions import ValidationError
from htmlremark.options import IgnoredHtmlElement, InWordEmphasis


@pytest.mark.unit
class TestLoadConfigFile:
    def test_toml(self, tmp_path):
        path = tmp_path / ".htmlremark.toml"
        path.write_text('preset = "github"\nhardwraps = false\n', encoding="utf-8")
        assert load_config_file(path) == {"preset": "github", "hardwraps": False}

    def test_yaml(self, tmp_path):
        path = tmp_path / ".htmlremark.yaml"
        path.write_text("inline_links: true\ntables: markdown_extra\n", encoding="utf-8")
        assert load_config_file(path) == {"inline_links": True, "tables": "markdown_extra"}

    def test_json(self, tmp_path):
        path = tmp_path / ".htmlremark.json"
        path.write_text(json.dumps({"autolinks": True}), encoding="utf-8")
        assert load_config_file(str(path)) == {"autolinks": True}

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config_file(path) == {}

    def test_pyproject_section(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.htmlremark]\nfootnotes = true\n', encoding="utf-8")
        assert load_config_file(path) == {"footnotes": True}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValidationError, match="does not exist"):
            load_config_file(tmp_path / "nope.toml")

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "config.ini"
        path.write_text("[x]\n", encoding="utf-8")
        with pytest.raises(ValidationError, match="Unsupported"):
            load_config_file(path)

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("this is = = not toml", encoding="utf-8")
        with pytest.raises(ValidationError) as exc_info:
            load_config_file(path)
        assert exc_info.value.original_error is not None

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValidationError, match="mapping"):
            load_config_file(path)


@pytest.mark.unit
class TestFindConfigInParents:
    def test_finds_file_in_parent(self, tmp_path):
        config = tmp_path / ".htmlremark.yaml"
        config.write_text("inline_links: true\n", encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_in_parents(nested) == config.resolve()

    def test_dedicated_file_wins_over_pyproject(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text("[tool.htmlremark]\nfootnotes = true\n", encoding="utf-8")
        dedicated = tmp_path / ".htmlremark.toml"
        dedicated.write_text("footnotes = false\n", encoding="utf-8")
        assert find_config_in_parents(tmp_path) == dedicated.resolve()

    def test_pyproject_without_section_is_skipped(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n', encoding="utf-8")
        nested = tmp_path / "pkg"
        nested.mkdir()
        found = find_config_in_parents(nested)
        assert found is None or not str(found).startswith(str(tmp_path.resolve()))


@pytest.mark.unit
class TestOptionsFromMapping:
    def test_preset_with_overrides(self):
        options = options_from_mapping({"preset": "github", "hardwraps": False})
        assert options.inline_links
        assert not options.hardwraps

    def test_default_preset(self):
        options = options_from_mapping({}, default_preset="markdown_extra")
        assert options.footnotes

    def test_unknown_keys(self):
        with pytest.raises(ValidationError, match="Unknown option"):
            options_from_mapping({"colour": "red"})

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("add_spaces", InWordEmphasis.ADD_SPACES),
            ("remove-emphasis", InWordEmphasis.REMOVE_EMPHASIS),
            ({"preserve": True, "add_spacing": True}, InWordEmphasis.ADD_SPACES),
        ],
    )
    def test_in_word_emphasis(self, value, expected):
        assert options_from_mapping({"in_word_emphasis": value}).in_word_emphasis == expected

    def test_invalid_in_word_emphasis(self):
        with pytest.raises(ValidationError):
            options_from_mapping({"in_word_emphasis": "sometimes"})

    def test_ignored_elements_from_list(self):
        options = options_from_mapping({"ignored_html_elements": ["SPAN", "sup"]})
        assert options.ignored_html_elements == (IgnoredHtmlElement("span"), IgnoredHtmlElement("sup"))

    def test_ignored_elements_from_mapping(self):
        options = options_from_mapping({"ignored_html_elements": {"span": "class", "div": ["id", "style"]}})
        assert options.ignored_html_elements == (
            IgnoredHtmlElement("span", ("class",)),
            IgnoredHtmlElement("div", ("id", "style")),
        )

    def test_invalid_ignored_elements(self):
        with pytest.raises(ValidationError):
            options_from_mapping({"ignored_html_elements": 5})

    def test_invalid_field_value(self):
        with pytest.raises(ValidationError):
            options_from_mapping({"tables": "grid"})
