"""Tests for the podrender command-line interface."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from podrender.cli import app

runner = CliRunner()


@pytest.fixture
def source(tmp_path: Path) -> Path:
    path = tmp_path / "doc.rakudoc"
    path.write_text("= Title\n\nSome text.\n", encoding="utf-8")
    return path


class TestRender:
    def test_text_default(self, source: Path, tmp_path: Path) -> None:
        out = tmp_path / "doc.txt"
        result = runner.invoke(app, ["render", str(source), str(out)])
        assert result.exit_code == 0, result.output
        assert out.read_text(encoding="utf-8") == "Title\n=====\n\nSome text.\n"

    @pytest.mark.parametrize(
        "fmt,expected",
        [
            ("html", '<h1 id="title">Title</h1>\n<p>Some text.</p>\n'),
            ("HTML", '<h1 id="title">Title</h1>\n<p>Some text.</p>\n'),
            ("pod", "=head1 Title\n\nSome text.\n"),
        ],
    )
    def test_formats(self, source: Path, tmp_path: Path, fmt: str, expected: str) -> None:
        out = tmp_path / "doc.out"
        result = runner.invoke(app, ["render", str(source), str(out), "--format", fmt])
        assert result.exit_code == 0, result.output
        assert out.read_text(encoding="utf-8") == expected

    def test_unknown_format_is_usage_error(self, source: Path, tmp_path: Path) -> None:
        result = runner.invoke(app, ["render", str(source), str(tmp_path / "o"), "--format=pdf"])
        assert result.exit_code == 2
        assert not (tmp_path / "o").exists()

    def test_empty_input(self, tmp_path: Path) -> None:
        src = tmp_path / "empty.rakudoc"
        src.write_text("", encoding="utf-8")
        out = tmp_path / "empty.txt"
        result = runner.invoke(app, ["render", str(src), str(out)])
        assert result.exit_code == 0
        assert out.read_text(encoding="utf-8") == ""

    def test_unresolved_reference_warns_but_succeeds(self, tmp_path: Path) -> None:
        src = tmp_path / "refs.rakudoc"
        src.write_text("See L<Missing>.\n", encoding="utf-8")
        out = tmp_path / "refs.txt"
        result = runner.invoke(app, ["render", str(src), str(out)])
        assert result.exit_code == 0
        assert out.read_text(encoding="utf-8") == "See Missing.\n"
        assert "unresolved reference 'Missing'" in result.output

    def test_refs_file(self, tmp_path: Path) -> None:
        src = tmp_path / "refs.rakudoc"
        src.write_text("L<IO::Path>\n", encoding="utf-8")
        refs = tmp_path / "refs.json"
        refs.write_text(json.dumps({"IO::Path": "/type/IO::Path"}), encoding="utf-8")
        out = tmp_path / "refs.html"
        result = runner.invoke(
            app, ["render", str(src), str(out), "--format", "html", "--refs", str(refs)]
        )
        assert result.exit_code == 0, result.output
        assert 'href="/type/IO::Path"' in out.read_text(encoding="utf-8")
        assert "unresolved" not in result.output

    def test_config_file_with_overrides(self, source: Path, tmp_path: Path) -> None:
        config = tmp_path / "podrender.toml"
        config.write_text('[render]\nformat = "pod"\n', encoding="utf-8")
        out = tmp_path / "doc.html"
        result = runner.invoke(
            app,
            ["render", str(source), str(out), "--config", str(config), "-f", "html", "--standalone"],
        )
        assert result.exit_code == 0, result.output
        html = out.read_text(encoding="utf-8")
        assert html.startswith("<!DOCTYPE html>")
        assert "<title>Title</title>" in html

    def test_width(self, tmp_path: Path) -> None:
        src = tmp_path / "w.rakudoc"
        src.write_text("one two three four\n", encoding="utf-8")
        out = tmp_path / "w.txt"
        result = runner.invoke(app, ["render", str(src), str(out), "--width", "9"])
        assert result.exit_code == 0
        assert out.read_text(encoding="utf-8") == "one two\nthree\nfour\n"

    def test_verbose_summary(self, source: Path, tmp_path: Path) -> None:
        out = tmp_path / "doc.txt"
        result = runner.invoke(app, ["render", str(source), str(out), "--verbose"])
        assert result.exit_code == 0
        assert "2 blocks, 0 warnings" in result.output


class TestRenderFailures:
    def test_parse_error_exit_1(self, tmp_path: Path) -> None:
        src = tmp_path / "bad.rakudoc"
        src.write_text("=begin pod\ntext\n", encoding="utf-8")
        out = tmp_path / "bad.txt"
        result = runner.invoke(app, ["render", str(src), str(out)])
        assert result.exit_code == 1
        assert "unterminated '=begin pod' block" in result.output
        assert not out.exists()

    def test_strict_unknown_directive(self, tmp_path: Path) -> None:
        src = tmp_path / "strict.rakudoc"
        src.write_text("=frobnicate x\n", encoding="utf-8")
        out = tmp_path / "strict.txt"
        assert runner.invoke(app, ["render", str(src), str(out)]).exit_code == 0
        result = runner.invoke(app, ["render", str(src), str(out), "--strict"])
        assert result.exit_code == 1
        assert "unknown directive" in result.output

    def test_missing_input_exit_2(self, tmp_path: Path) -> None:
        out = tmp_path / "x.txt"
        result = runner.invoke(app, ["render", str(tmp_path / "missing.rakudoc"), str(out)])
        assert result.exit_code == 2
        assert "cannot read" in result.output
        assert not out.exists()

    def test_unwritable_output_exit_2(self, source: Path, tmp_path: Path) -> None:
        result = runner.invoke(app, ["render", str(source), str(tmp_path)])
        assert result.exit_code == 2
        assert "cannot write" in result.output

    def test_bad_config_exit_2(self, source: Path, tmp_path: Path) -> None:
        config = tmp_path / "bad.toml"
        config.write_text("[render]\nformat = 'pdf'\n", encoding="utf-8")
        result = runner.invoke(
            app, ["render", str(source), str(tmp_path / "o.txt"), "--config", str(config)]
        )
        assert result.exit_code == 2
        assert "Configuration error" in result.output

    @pytest.mark.parametrize(
        "content",
        ['[render]\ntext_width = "wide"\n', "parse = 1\n", '[parse]\ndefault_language = 3\n'],
    )
    def test_wrongly_typed_config_exit_2(self, source: Path, tmp_path: Path, content: str) -> None:
        config = tmp_path / "typed.toml"
        config.write_text(content, encoding="utf-8")
        out = tmp_path / "o.txt"
        result = runner.invoke(app, ["render", str(source), str(out), "--config", str(config)])
        assert result.exit_code == 2
        assert "Configuration error" in result.output
        assert not out.exists()

    def test_missing_refs_exit_2(self, source: Path, tmp_path: Path) -> None:
        result = runner.invoke(
            app,
            ["render", str(source), str(tmp_path / "o.txt"), "--refs", str(tmp_path / "no.json")],
        )
        assert result.exit_code == 2


class TestDump:
    def test_dump_json(self, source: Path) -> None:
        result = runner.invoke(app, ["dump", str(source)])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["_type"] == "Document"
        assert [c["_type"] for c in data["children"]] == ["Heading", "Paragraph"]
        assert data["children"][0]["text"] == "Title"

    def test_dump_parse_error(self, tmp_path: Path) -> None:
        src = tmp_path / "bad.rakudoc"
        src.write_text("=end pod\n", encoding="utf-8")
        result = runner.invoke(app, ["dump", str(src)])
        assert result.exit_code == 1

    def test_dump_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["dump", str(tmp_path / "missing.rakudoc")])
        assert result.exit_code == 2


def test_no_args_shows_help() -> None:
    result = runner.invoke(app, [])
    assert "render" in result.output
    assert "dump" in result.output
