"""Unit tests for the htmlremark command-line interface."""

import io
import json

import pytest

from htmlremark import cli
from htmlremark.cli import (
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_RENDERING_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    create_parser,
    get_exit_code_for_exception,
    main,
)
from htmlremark.config import PRESET_ENV_VAR
from htmlremark.exceptions import (
    FileNotFoundError,
    HtmlRemarkError,
    NetworkError,
    OutputWriteError,
    ValidationError,
)

LINK_HTML = '<h1>T</h1><p><a href="http://a.com">A</a></p>'


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(PRESET_ENV_VAR, raising=False)
    return tmp_path


@pytest.fixture
def page(tmp_path):
    path = tmp_path / "page.html"
    path.write_text(LINK_HTML, encoding="utf-8")
    return path


@pytest.mark.cli
@pytest.mark.unit
class TestParser:
    def test_defaults(self):
        args = create_parser().parse_args(["in.html"])
        assert args.input == "in.html"
        assert args.type is None
        assert args.timeout == 15
        assert args.log_level == "WARNING"

    def test_all_options(self):
        args = create_parser().parse_args(
            ["-t", "github", "-o", "out.md", "--timeout", "3", "--base-url", "http://h/", "--charset", "latin-1", "-"]
        )
        assert (args.type, args.output, args.timeout, args.base_url, args.charset, args.input) == (
            "github",
            "out.md",
            3,
            "http://h/",
            "latin-1",
            "-",
        )

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert "htmlremark" in capsys.readouterr().out


@pytest.mark.cli
@pytest.mark.unit
class TestExitCodes:
    @pytest.mark.parametrize(
        "error,code",
        [
            (ValidationError("bad"), EXIT_VALIDATION_ERROR),
            (FileNotFoundError("x.html"), EXIT_FILE_ERROR),
            (NetworkError("http://x"), EXIT_FILE_ERROR),
            (OutputWriteError("stdout"), EXIT_RENDERING_ERROR),
            (HtmlRemarkError("other"), EXIT_ERROR),
        ],
    )
    def test_mapping(self, error, code):
        assert get_exit_code_for_exception(error) == code


@pytest.mark.cli
@pytest.mark.unit
class TestMain:
    def test_converts_file_to_stdout(self, page, capsys):
        assert main([str(page)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "# T\n\n[A][a]\n\n[a]: http://a.com\n"

    def test_type_option(self, page, capsys):
        assert main(["-t", "github", str(page)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "# T\n\n[A](http://a.com)\n"

    def test_type_from_environment(self, page, capsys, monkeypatch):
        monkeypatch.setenv(PRESET_ENV_VAR, "github")
        assert main([str(page)]) == EXIT_SUCCESS
        assert "[A](http://a.com)" in capsys.readouterr().out

    def test_type_option_beats_environment(self, page, capsys, monkeypatch):
        monkeypatch.setenv(PRESET_ENV_VAR, "github")
        assert main(["-t", "markdown", str(page)]) == EXIT_SUCCESS
        assert "[A][a]" in capsys.readouterr().out

    def test_invalid_type(self, page, capsys):
        assert main(["-t", "wiki", str(page)]) == EXIT_VALIDATION_ERROR
        assert "Invalid type" in capsys.readouterr().err

    def test_missing_file(self, capsys):
        assert main(["missing.html"]) == EXIT_FILE_ERROR
        assert capsys.readouterr().err.startswith("Error:")

    def test_invalid_timeout(self, page):
        assert main(["--timeout", "0", str(page)]) == EXIT_VALIDATION_ERROR

    def test_invalid_charset(self, page):
        assert main(["--charset", "klingon", str(page)]) == EXIT_VALIDATION_ERROR

    def test_output_file(self, page, tmp_path, capsys):
        out = tmp_path / "out.md"
        assert main(["-o", str(out), str(page)]) == EXIT_SUCCESS
        assert out.read_text(encoding="utf-8") == "# T\n\n[A][a]\n\n[a]: http://a.com"
        assert capsys.readouterr().out == ""

    def test_unwritable_output(self, page, tmp_path):
        assert main(["-o", str(tmp_path / "no" / "such" / "dir.md"), str(page)]) == EXIT_FILE_ERROR

    def test_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("<p>from <em>stdin</em></p>"))
        assert main(["-"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "from *stdin*\n"

    def test_base_url(self, tmp_path, capsys):
        path = tmp_path / "rel.html"
        path.write_text('<p><a href="b.html">B</a></p>', encoding="utf-8")
        assert main(["--base-url", "http://h.com/a/", str(path)]) == EXIT_SUCCESS
        assert capsys.readouterr().out.endswith("[b]: http://h.com/a/b.html\n")

    def test_url_input(self, monkeypatch, capsys):
        def fake_fetch(url, timeout):
            assert timeout == 7
            return '<p><a href="/x">X</a></p>', "http://h.com/page"

        monkeypatch.setattr(cli, "fetch_url", fake_fetch)
        assert main(["--timeout", "7", "http://h.com/start"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "[X][x]\n\n[x]: http://h.com/x\n"

    def test_discovered_config(self, page, tmp_path, capsys):
        (tmp_path / ".htmlremark.json").write_text(
            json.dumps({"preset": "markdown", "inline_links": True}), encoding="utf-8"
        )
        assert main([str(page)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "# T\n\n[A](http://a.com)\n"

    def test_explicit_config(self, page, tmp_path, capsys):
        config = tmp_path / "opts.yaml"
        config.write_text("hash_headings: false\n", encoding="utf-8")
        assert main(["--config", str(config), str(page)]) == EXIT_SUCCESS
        assert capsys.readouterr().out.startswith("T\n=\n\n")

    def test_type_option_beats_config_preset(self, page, tmp_path, capsys):
        (tmp_path / ".htmlremark.toml").write_text('preset = "github"\n', encoding="utf-8")
        assert main(["-t", "markdown", str(page)]) == EXIT_SUCCESS
        assert "[A][a]" in capsys.readouterr().out

    def test_config_preset_beats_environment(self, page, tmp_path, capsys, monkeypatch):
        monkeypatch.setenv(PRESET_ENV_VAR, "github")
        (tmp_path / ".htmlremark.toml").write_text('preset = "markdown"\n', encoding="utf-8")
        assert main([str(page)]) == EXIT_SUCCESS
        assert "[A][a]" in capsys.readouterr().out

    def test_missing_config(self, page):
        assert main(["--config", "nope.toml", str(page)]) == EXIT_VALIDATION_ERROR

    def test_unknown_config_key(self, page, tmp_path):
        (tmp_path / ".htmlremark.toml").write_text("colour = 'red'\n", encoding="utf-8")
        assert main([str(page)]) == EXIT_VALIDATION_ERROR
