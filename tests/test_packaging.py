"""Tests for zipping app source."""

from __future__ import annotations

import io
import zipfile

import pytest

from cfclient import read_bits, zip_directory
from cfclient.packaging import load_cfignore


def _names(data: bytes) -> list[str]:
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        return zf.namelist()


@pytest.fixture
def project(tmp_path):
    """A small app directory with files that should and should not ship."""
    (tmp_path / "app.py").write_text("print('hi')\n")
    (tmp_path / "requirements.txt").write_text("flask\n")
    (tmp_path / "lib").mkdir()
    (tmp_path / "lib" / "util.py").write_text("x = 1\n")
    (tmp_path / "__pycache__").mkdir()
    (tmp_path / "__pycache__" / "app.cpython-312.pyc").write_bytes(b"\x00")
    (tmp_path / ".git").mkdir()
    (tmp_path / ".git" / "HEAD").write_text("ref: refs/heads/main\n")
    (tmp_path / ".env").write_text("SECRET=1\n")
    (tmp_path / "app.egg-info").mkdir()
    (tmp_path / "app.egg-info" / "PKG-INFO").write_text("Name: app\n")
    return tmp_path


class TestZipDirectory:
    def test_default_excludes(self, project):
        assert _names(zip_directory(project)) == ["app.py", "lib/util.py", "requirements.txt"]

    def test_cfignore(self, project):
        (project / ".cfignore").write_text("# local only\n\nlib/\n*.txt\n")

        assert _names(zip_directory(project)) == ["app.py"]

    def test_extra_ignores(self, project):
        assert _names(zip_directory(project, ignores={"lib"})) == ["app.py", "requirements.txt"]

    def test_file_contents(self, project):
        with zipfile.ZipFile(io.BytesIO(zip_directory(project))) as zf:
            assert zf.read("app.py") == b"print('hi')\n"

    def test_not_a_directory(self, tmp_path):
        with pytest.raises(ValueError, match="Not a directory"):
            zip_directory(tmp_path / "missing")


class TestLoadCfignore:
    def test_missing_file(self, tmp_path):
        assert load_cfignore(tmp_path) == set()

    def test_strips_slashes_and_comments(self, tmp_path):
        (tmp_path / ".cfignore").write_text("/tmp/\n# comment\n  logs  \n")

        assert load_cfignore(tmp_path) == {"tmp", "logs"}


class TestReadBits:
    """Tests for normalizing push input to zip bytes."""

    def test_bytes(self):
        assert read_bits(b"PK\x03\x04") == b"PK\x03\x04"
        assert read_bits(bytearray(b"abc")) == b"abc"

    def test_file_object(self):
        assert read_bits(io.BytesIO(b"zipbytes")) == b"zipbytes"

    def test_directory(self, project):
        assert _names(read_bits(project)) == ["app.py", "lib/util.py", "requirements.txt"]

    def test_zip_file(self, tmp_path):
        archive = tmp_path / "app.zip"
        with zipfile.ZipFile(archive, "w") as zf:
            zf.writestr("app.py", "print('hi')\n")

        assert _names(read_bits(str(archive))) == ["app.py"]

    def test_not_a_zip(self, tmp_path):
        path = tmp_path / "app.tar"
        path.write_bytes(b"not a zip")

        with pytest.raises(ValueError, match="Not a zip archive"):
            read_bits(path)

    def test_missing_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_bits(tmp_path / "nope")
