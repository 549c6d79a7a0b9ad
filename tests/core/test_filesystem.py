"""
Unit tests for filesystem helpers.
"""

import logging

import pytest

from provisionkit.core.filesystem import (
    FilesystemError,
    ensure_directory,
    remove_file,
    safe_rmtree,
    temporary_directory,
)


class TestEnsureDirectory:
    """Test ensure_directory."""

    def test_creates_nested(self, tmp_path):
        target = tmp_path / "a" / "b" / "c"
        result = ensure_directory(target)

        assert target.is_dir()
        assert result == target.resolve()

    def test_idempotent(self, tmp_path):
        ensure_directory(tmp_path / "x")
        ensure_directory(tmp_path / "x")
        assert (tmp_path / "x").is_dir()


class TestRemoveFile:
    """Test remove_file."""

    def test_removes_file(self, tmp_path):
        path = tmp_path / "f"
        path.write_text("data")

        remove_file(path)

        assert not path.exists()

    def test_missing_file_ignored(self, tmp_path):
        remove_file(tmp_path / "missing")

    def test_directory_fails(self, tmp_path):
        """Test removing a directory raises FilesystemError."""
        with pytest.raises(FilesystemError):
            remove_file(tmp_path)


class TestSafeRmtree:
    """Test safe_rmtree."""

    def test_removes_tree(self, tmp_path):
        tree = tmp_path / "tree"
        (tree / "sub").mkdir(parents=True)
        (tree / "sub" / "file").write_text("x")

        safe_rmtree(tree)

        assert not tree.exists()

    def test_missing_is_noop(self, tmp_path):
        safe_rmtree(tmp_path / "missing")

    def test_file_rejected(self, tmp_path):
        path = tmp_path / "file"
        path.write_text("x")
        with pytest.raises(FilesystemError, match="not a directory"):
            safe_rmtree(path)


class TestTemporaryDirectory:
    """Test temporary_directory."""

    def test_cleanup(self):
        with temporary_directory() as tmp:
            (tmp / "file").write_text("x")
            assert tmp.is_dir()
        assert not tmp.exists()

    def test_cleanup_on_exception(self):
        with pytest.raises(RuntimeError):
            with temporary_directory() as tmp:
                (tmp / "file").write_text("x")
                raise RuntimeError("boom")
        assert not tmp.exists()

    @pytest.fixture
    def failing_rmtree(self, monkeypatch):
        def fail(path):
            raise FilesystemError(f"Failed to remove directory '{path}': locked")

        monkeypatch.setattr("provisionkit.core.filesystem.safe_rmtree", fail)

    def test_cleanup_failure_keeps_original_exception(self, failing_rmtree, caplog):
        """Test a failed cleanup is logged and the body's error still propagates."""
        with caplog.at_level(logging.WARNING, logger="provisionkit.core.filesystem"):
            with pytest.raises(RuntimeError, match="boom"):
                with temporary_directory() as tmp:
                    raise RuntimeError("boom")

        assert "Could not remove temporary directory" in caplog.text
        tmp.rmdir()

    def test_cleanup_failure_after_success_is_logged(self, failing_rmtree, caplog):
        """Test a failed cleanup after a clean exit does not raise."""
        with caplog.at_level(logging.WARNING, logger="provisionkit.core.filesystem"):
            with temporary_directory() as tmp:
                pass

        assert "locked" in caplog.text
        tmp.rmdir()
