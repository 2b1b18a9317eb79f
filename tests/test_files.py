"""Tests for source reading and output writing."""

from pathlib import Path

import pytest

from podrender.files import read_source, write_output


class TestReadSource:
    def test_reads_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.rakudoc"
        path.write_bytes("=head1 Café «x»\n".encode())
        assert read_source(path) == "=head1 Café «x»\n"

    def test_accepts_str_path(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.rakudoc"
        path.write_text("x", encoding="utf-8")
        assert read_source(str(path)) == "x"

    def test_strips_byte_order_mark(self, tmp_path: Path) -> None:
        path = tmp_path / "bom.rakudoc"
        path.write_bytes(b"\xef\xbb\xbf=head1 Title\n")
        assert read_source(path) == "=head1 Title\n"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            read_source(tmp_path / "missing.rakudoc")

    def test_invalid_utf8_is_os_error(self, tmp_path: Path) -> None:
        path = tmp_path / "latin1.rakudoc"
        path.write_bytes(b"caf\xe9")
        with pytest.raises(OSError, match="not valid UTF-8"):
            read_source(path)


class TestWriteOutput:
    def test_writes_and_creates_parents(self, tmp_path: Path) -> None:
        path = tmp_path / "out" / "nested" / "doc.html"
        write_output(path, "<p>é</p>\n")
        assert path.read_bytes() == "<p>é</p>\n".encode()

    def test_overwrites(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.txt"
        write_output(path, "first")
        write_output(path, "second")
        assert path.read_text(encoding="utf-8") == "second"

    def test_directory_target_fails(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            write_output(tmp_path, "x")
