"""Tests for shared helpers."""

import io
import logging
import tarfile

import pytest

from archport.utils import (
    CommandExecutionError,
    ConfigError,
    ExtractionError,
    format_dependency_list,
    parse_log_level,
    run_command,
    safe_extract_tar,
    sanitize_package_name,
    sanitize_pkgver,
)

logger = logging.getLogger("archport.tests")


def _tar_with(*members):
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w") as tar:
        for name, linkname in members:
            info = tarfile.TarInfo(name)
            if linkname is None:
                info.size = 2
                tar.addfile(info, io.BytesIO(b"ok"))
            else:
                info.type = tarfile.SYMTYPE
                info.linkname = linkname
                tar.addfile(info)
    buffer.seek(0)
    return tarfile.open(fileobj=buffer, mode="r")


class TestSanitizers:
    """Name and version cleanup."""

    @pytest.mark.parametrize(
        "version, expected",
        [("1:2.0-1", "2.0.1"), ("1.0~rc1", "1.0.rc1"), ("", "0"), ("a b/c", "a.b.c")],
    )
    def test_sanitize_pkgver(self, version, expected):
        assert sanitize_pkgver(version) == expected

    def test_sanitize_package_name(self):
        assert sanitize_package_name("Foo Bar!") == "foo-bar"
        assert sanitize_package_name("!!!") == "unknown-package"

    def test_format_dependency_list(self):
        assert format_dependency_list(["b", "a", "b"]) == "a, b"
        assert format_dependency_list([]) == "none"

    def test_parse_log_level(self):
        assert parse_log_level("debug") == logging.DEBUG
        with pytest.raises(ConfigError):
            parse_log_level("chatty")


class TestSafeExtract:
    """Archive extraction guards."""

    def test_rejects_path_traversal(self, tmp_path):
        with pytest.raises(ExtractionError):
            safe_extract_tar(_tar_with(("../evil", None)), tmp_path / "dest", logger)

    def test_symlinks_skipped_by_default(self, tmp_path):
        dest = tmp_path / "dest"
        safe_extract_tar(_tar_with(("file", None), ("link", "file")), dest, logger)
        assert (dest / "file").read_bytes() == b"ok"
        assert not (dest / "link").is_symlink()

    def test_kept_symlinks(self, tmp_path):
        dest = tmp_path / "dest"
        tar = _tar_with(("usr/lib/libfoo.so.1", None), ("usr/lib/libfoo.so", "libfoo.so.1"), ("bin/sh", "/usr/bin/bash"))
        safe_extract_tar(tar, dest, logger, keep_symlinks=True)
        assert (dest / "usr/lib/libfoo.so").is_symlink()
        assert (dest / "bin/sh").is_symlink()

    def test_escaping_symlink_skipped(self, tmp_path):
        dest = tmp_path / "dest"
        safe_extract_tar(_tar_with(("usr/evil", "../../etc/passwd"),), dest, logger, keep_symlinks=True)
        assert not (dest / "usr/evil").is_symlink()


class TestRunCommand:
    """Subprocess execution."""

    def test_captures_output(self):
        rc, lines = run_command(["sh", "-c", "echo hello; echo world >&2"], logger)
        assert rc == 0
        assert lines == ["hello", "world"]

    def test_failure_raises(self):
        with pytest.raises(CommandExecutionError):
            run_command(["sh", "-c", "exit 3"], logger)

    def test_failure_without_check(self):
        rc, _ = run_command(["sh", "-c", "exit 3"], logger, check=False)
        assert rc == 3

    def test_missing_binary(self):
        with pytest.raises(CommandExecutionError):
            run_command(["archport-no-such-binary"], logger)

    def test_log_callback(self):
        seen = []
        run_command(["sh", "-c", "printf 'a\\n\\nb\\n'"], logger, log_callback=seen.append)
        assert seen == ["a", "b"]
