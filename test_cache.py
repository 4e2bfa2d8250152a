"""Tests for cached model discovery."""

import os

import pytest

from gguf_launcher.cache import scan_cached_models
from gguf_launcher.errors import DirectoryUnreadable


def test_only_matching_files_are_listed(tmp_path):
    (tmp_path / "a.gguf").write_bytes(b"model")
    (tmp_path / "b.GGUF").write_bytes(b"model")
    (tmp_path / "c.txt").write_text("notes")
    (tmp_path / "b").mkdir()

    assert scan_cached_models(str(tmp_path)) == ["a.gguf"]


def test_directories_with_model_suffix_are_skipped(tmp_path):
    (tmp_path / "folder.gguf").mkdir()
    (tmp_path / "real.gguf").write_bytes(b"model")

    assert scan_cached_models(str(tmp_path)) == ["real.gguf"]


def test_scan_is_not_recursive(tmp_path):
    nested = tmp_path / "nested"
    nested.mkdir()
    (nested / "deep.gguf").write_bytes(b"model")

    assert scan_cached_models(str(tmp_path)) == []


def test_multiple_models_are_all_found(tmp_path):
    names = {"llama-2-7b-chat.Q5_K_M.gguf", "gemma-2b-it.Q4_0.gguf", "phi-2.Q8_0.gguf"}
    for name in names:
        (tmp_path / name).write_bytes(b"model")

    found = scan_cached_models(str(tmp_path))
    assert sorted(found) == sorted(names), f"Unexpected scan result: {found}"


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
def test_symlinks_are_followed(tmp_path):
    target = tmp_path / "store.bin"
    target.write_bytes(b"model")
    os.symlink(target, tmp_path / "linked.gguf")
    os.symlink(tmp_path / "missing.bin", tmp_path / "dangling.gguf")

    assert scan_cached_models(str(tmp_path)) == ["linked.gguf"]


def test_missing_directory_is_unreadable(tmp_path):
    missing = tmp_path / "does-not-exist"

    with pytest.raises(DirectoryUnreadable) as excinfo:
        scan_cached_models(str(missing))
    assert excinfo.value.directory == str(missing)


def test_empty_directory(tmp_path):
    assert scan_cached_models(str(tmp_path)) == []


class FakeEntry:
    def __init__(self, name, error=None):
        self.name = name
        self.error = error

    def is_file(self):
        if self.error is not None:
            raise self.error
        return True


class FakeScandir:
    """Context-manager iterator mimicking os.scandir()."""

    def __init__(self, entries, error=None):
        self.entries = entries
        self.error = error

    def __iter__(self):
        yield from self.entries
        if self.error is not None:
            raise self.error

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


def test_unreadable_entry_does_not_abort_scan(monkeypatch):
    entries = [FakeEntry("locked.gguf", PermissionError("denied")), FakeEntry("a.gguf")]
    monkeypatch.setattr("gguf_launcher.cache.os.scandir", lambda directory: FakeScandir(entries))

    assert scan_cached_models("models") == ["a.gguf"]


def test_listing_error_mid_scan_is_unreadable(monkeypatch):
    listing = FakeScandir([FakeEntry("a.gguf")], error=OSError("I/O error"))
    monkeypatch.setattr("gguf_launcher.cache.os.scandir", lambda directory: listing)

    with pytest.raises(DirectoryUnreadable) as excinfo:
        scan_cached_models("models")
    assert isinstance(excinfo.value.cause, OSError)
