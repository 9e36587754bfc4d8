#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the command-line interface."""

import argparse
import io

import pytest

from adoc2html.cli import (
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_FORMAT_ERROR,
    EXIT_PARSING_ERROR,
    EXIT_RENDERING_ERROR,
    EXIT_SUCCESS,
    EXIT_UPSTREAM_ERROR,
    EXIT_VALIDATION_ERROR,
    create_parser,
    get_exit_code_for_exception,
    main,
    parse_attribute_argument,
)
from adoc2html.exceptions import (
    Adoc2HtmlError,
    ConfigError,
    FormatError,
    ParsingError,
    RenderingError,
    UpstreamError,
    ValidationError,
)


@pytest.fixture
def topic(tmp_path):
    path = tmp_path / "intro.adoc"
    path.write_text("== Intro\n\nHello {product}\n\ninclude::./sub.adoc[]\n", encoding="utf-8")
    return path


@pytest.mark.unit
class TestExitCodes:
    """Tests for exception to exit code mapping."""

    @pytest.mark.parametrize(
        "exception,code",
        [
            (ValidationError("bad"), EXIT_VALIDATION_ERROR),
            (FileNotFoundError("missing"), EXIT_FILE_ERROR),
            (FormatError(format_type="docbook"), EXIT_FORMAT_ERROR),
            (ParsingError("bad input"), EXIT_PARSING_ERROR),
            (RenderingError("no parser"), EXIT_RENDERING_ERROR),
            (UpstreamError("unreachable"), EXIT_UPSTREAM_ERROR),
            (ConfigError("incomplete"), EXIT_UPSTREAM_ERROR),
            (Adoc2HtmlError("other"), EXIT_ERROR),
            (RuntimeError("boom"), EXIT_ERROR),
        ],
    )
    def test_mapping(self, exception, code):
        """Test each exception type."""
        assert get_exit_code_for_exception(exception) == code


@pytest.mark.unit
class TestArguments:
    """Tests for argument parsing."""

    def test_attribute_argument(self):
        """Test NAME=VALUE and bare NAME attributes."""
        assert parse_attribute_argument("product=Franklin") == ("product", "Franklin")
        assert parse_attribute_argument("icons") == ("icons", "")
        assert parse_attribute_argument("expr=a=b") == ("expr", "a=b")

    def test_attribute_argument_without_name(self):
        """Test that an empty name is rejected."""
        with pytest.raises(argparse.ArgumentTypeError):
            parse_attribute_argument("=value")

    def test_convert_defaults(self):
        """Test the defaults of the convert command."""
        parsed = create_parser().parse_args(["convert", "intro.adoc"])

        assert parsed.command == "convert"
        assert parsed.backend == "franklin"
        assert parsed.attributes == []
        assert not parsed.plain
        assert parsed.html_parser == "html.parser"
        assert parsed.log_level == "WARNING"

    def test_repeated_attributes(self):
        """Test that --attr accumulates."""
        parsed = create_parser().parse_args(["convert", "a.adoc", "--attr", "a=1", "--attr", "b"])
        assert parsed.attributes == [("a", "1"), ("b", "")]

    def test_serve_defaults(self):
        """Test the defaults of the serve command."""
        parsed = create_parser().parse_args(["serve"])
        assert parsed.host == "127.0.0.1"
        assert parsed.port == 8000
        assert parsed.config is None

    def test_command_required(self):
        """Test that a command must be given."""
        with pytest.raises(SystemExit):
            create_parser().parse_args([])

    def test_version(self, capsys):
        """Test the version flag."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "adoc2html" in capsys.readouterr().out


@pytest.mark.unit
class TestConvertCommand:
    """Tests for the convert command."""

    def test_convert_to_stdout(self, topic, capsys):
        """Test writing the fragment to stdout."""
        code = main(["convert", str(topic), "--plain", "--attr", "product=Franklin"])

        out = capsys.readouterr().out
        assert code == EXIT_SUCCESS
        assert out.startswith("<div><h2>Intro</h2>\n<p>Hello Franklin</p>")
        assert 'href="/sub"' in out
        assert out.endswith("\n")

    def test_convert_to_file(self, topic, tmp_path, capsys):
        """Test writing a full page to a file."""
        out_path = tmp_path / "intro.html"

        code = main(["convert", str(topic), "-o", str(out_path), "--book-url", "https://docs.example.com"])

        assert code == EXIT_SUCCESS
        html = out_path.read_text(encoding="utf-8")
        assert html.startswith("<!DOCTYPE html>")
        assert 'href="https://docs.example.com/sub"' in html
        assert "Wrote" in capsys.readouterr().err

    def test_topic_path_option(self, topic, capsys):
        """Test that --topic-path sets the include base."""
        main(["convert", str(topic), "--plain", "--topic-path", "guide/intro.adoc"])
        assert 'href="/guide/sub"' in capsys.readouterr().out

    def test_stdin_requires_topic_path(self, monkeypatch, capsys):
        """Test that stdin input needs an explicit topic path."""
        monkeypatch.setattr("sys.stdin", io.StringIO("Hello"))

        assert main(["convert", "-"]) == EXIT_VALIDATION_ERROR
        assert "--topic-path is required" in capsys.readouterr().err

    def test_stdin(self, monkeypatch, capsys):
        """Test converting from stdin."""
        monkeypatch.setattr("sys.stdin", io.StringIO("Hello"))

        assert main(["convert", "-", "--topic-path", "a.adoc", "--plain"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "<p>Hello</p>\n"

    def test_html5_backend(self, topic, capsys):
        """Test selecting the HTML5 backend."""
        main(["convert", str(topic), "--plain", "--backend", "html5"])
        assert '<div class="sect1">' in capsys.readouterr().out

    def test_unknown_backend(self, topic, capsys):
        """Test that an unknown backend exits with the format error code."""
        assert main(["convert", str(topic), "--backend", "docbook"]) == EXIT_FORMAT_ERROR
        assert "Unknown backend" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        """Test that a missing input exits with the file error code."""
        assert main(["convert", str(tmp_path / "missing.adoc")]) == EXIT_FILE_ERROR
        assert "Error:" in capsys.readouterr().err


@pytest.mark.unit
class TestServeCommand:
    """Tests for the serve command."""

    def test_incomplete_settings(self, tmp_path, monkeypatch, capsys):
        """Test that the server refuses to start without an upstream."""
        for name in ("DOC_UPSTREAM", "DOC_REPO_OWNER", "DOC_REPO_NAME"):
            monkeypatch.delenv(name, raising=False)
        config = tmp_path / ".adoc2html.toml"
        config.write_text('repo_owner = "acme"\n', encoding="utf-8")

        code = main(["serve", "--config", str(config), "--port", "0"])

        assert code == EXIT_UPSTREAM_ERROR
        assert "Missing docs service settings" in capsys.readouterr().err

    def test_invalid_config(self, tmp_path, capsys):
        """Test that a malformed settings file is reported."""
        config = tmp_path / ".adoc2html.toml"
        config.write_text("repo_owner = ", encoding="utf-8")

        assert main(["serve", "--config", str(config)]) == EXIT_UPSTREAM_ERROR
