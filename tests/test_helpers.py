from __future__ import annotations

from pathlib import Path

import pytest

from rainbow_tags.exceptions import ScanFileError
from rainbow_tags.filesystem import (
    contains_symlink,
    enforce_file_size,
    get_max_file_size,
    language_for_path,
    normalize_filepath,
    read_source,
)


def test_get_max_file_size_defaults_without_env(monkeypatch):
    monkeypatch.delenv("RAINBOW_TAGS_MAX_FILE_SIZE", raising=False)

    assert get_max_file_size(default=123) == 123


def test_get_max_file_size_reads_env(monkeypatch):
    monkeypatch.setenv("RAINBOW_TAGS_MAX_FILE_SIZE", "2048")

    assert get_max_file_size() == 2048


@pytest.mark.parametrize("value", ["invalid", "0", "-3"])
def test_get_max_file_size_rejects_bad_values(monkeypatch, value):
    monkeypatch.setenv("RAINBOW_TAGS_MAX_FILE_SIZE", value)

    with pytest.raises(ValueError):
        get_max_file_size()


@pytest.mark.parametrize(
    ("name", "language"),
    [
        ("index.html", "html"),
        ("page.HTM", "html"),
        ("App.jsx", "javascriptreact"),
        ("App.tsx", "typescriptreact"),
        ("main.ts", None),
        ("README", None),
    ],
)
def test_language_for_path(name, language):
    assert language_for_path(Path(name)) == language


def test_normalize_filepath_missing_file(tmp_path: Path):
    with pytest.raises(ValueError, match="does not exist"):
        normalize_filepath(str(tmp_path / "missing.html"))


def test_normalize_filepath_rejects_directories(tmp_path: Path):
    directory = tmp_path / "dir.html"
    directory.mkdir()

    with pytest.raises(ValueError, match="not a regular file"):
        normalize_filepath(str(directory))


def test_normalize_filepath_rejects_unsupported_extension(tmp_path: Path):
    target = tmp_path / "notes.txt"
    target.write_text("<a></a>", encoding="utf-8")

    with pytest.raises(ValueError, match="not a supported markup file"):
        normalize_filepath(str(target))


def test_normalize_filepath_rejects_symlinks(tmp_path: Path):
    target = tmp_path / "real.html"
    target.write_text("<a></a>", encoding="utf-8")
    link = tmp_path / "link.html"
    link.symlink_to(target)

    assert contains_symlink(link) is True
    with pytest.raises(ValueError, match="Symlinks are not supported"):
        normalize_filepath(str(link))


def test_normalize_filepath_resolves_relative_paths(tmp_path: Path, monkeypatch):
    target = tmp_path / "App.tsx"
    target.write_text("<App />", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert normalize_filepath("App.tsx") == target.resolve()


def test_enforce_file_size_reports_missing_files(tmp_path: Path):
    with pytest.raises(IOError, match="Error accessing"):
        enforce_file_size(tmp_path / "gone.html", 100)


def test_enforce_file_size(tmp_path: Path):
    target = tmp_path / "big.html"
    target.write_text("<a></a>", encoding="utf-8")
    enforce_file_size(target, 100)
    with pytest.raises(IOError, match="exceeds the maximum allowed size"):
        enforce_file_size(target, 3)


def test_read_source_preserves_line_endings(tmp_path: Path):
    target = tmp_path / "crlf.html"
    target.write_bytes(b"<a>\r\n</a>")

    assert read_source(target) == "<a>\r\n</a>"


def test_read_source_rejects_invalid_utf8(tmp_path: Path):
    target = tmp_path / "bad.html"
    target.write_bytes(b"<a>\xff</a>")

    with pytest.raises(ScanFileError, match="invalid UTF-8"):
        read_source(target)


def test_read_source_missing_file(tmp_path: Path):
    with pytest.raises(ScanFileError):
        read_source(tmp_path / "gone.html")
