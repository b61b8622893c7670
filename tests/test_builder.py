"""Tests for Arch package assembly."""

import gzip
import hashlib
import os
import shutil
import tarfile
from pathlib import Path

import pytest

from archport.builder import PackageBuilder, package_filename, render_pkgbuild
from archport.models import Architecture, Dependency, DependencyClass, OutputFormat, PackageMetadata
from archport.utils import PackageBuildError

BUILDDATE = 1700000000
FOO_CONTENT = b"#!/bin/sh\necho foo\n"


def _metadata():
    metadata = PackageMetadata(
        name="foo",
        version="1.2",
        release="3",
        arch=Architecture.X86_64,
        description="Foo tool",
        maintainer="Jane Doe <jane@example.org>",
    )
    dep = Dependency.parse("libc6 (>= 2.17)")
    dep.set_arch_name("glibc", 1.0)
    metadata.add_dep(DependencyClass.DEPENDS, dep)
    return metadata


@pytest.fixture
def payload(tmp_path):
    data_dir = tmp_path / "data"
    (data_dir / "usr/bin").mkdir(parents=True)
    (data_dir / "usr/share/doc/foo").mkdir(parents=True)
    binary = data_dir / "usr/bin/foo"
    binary.write_bytes(FOO_CONTENT)
    binary.chmod(0o755)
    (data_dir / "usr/share/doc/foo/README").write_text("docs\n", encoding="utf-8")
    os.symlink("foo", data_dir / "usr/bin/foo-link")
    return data_dir


def _build(tmp_path, payload, fmt=OutputFormat.PKG_TAR_GZ, hook=lambda metadata: None):
    builder = PackageBuilder(_metadata(), payload, hook_generator=hook)
    return builder.build(tmp_path / "out", fmt, builddate=BUILDDATE)


def _read_member(archive, name):
    with tarfile.open(archive, "r:*") as tar:
        return tar.extractfile(name).read()


class TestFilename:
    """Deterministic output names."""

    def test_package_filename(self):
        metadata = PackageMetadata(name="foo", version="1.2", release="3", arch=Architecture.X86_64)
        assert package_filename(metadata, OutputFormat.PKG_TAR_ZST) == "foo-1.2-3.x86_64.pkg.tar.zst"

    def test_target_name_override(self):
        metadata = PackageMetadata(name="foo", version="1.2", arch_name="foo-bin")
        assert package_filename(metadata, OutputFormat.PKG_TAR_GZ) == "foo-bin-1.2-1.any.pkg.tar.gz"


class TestArchiveLayout:
    """Member order, ownership and manifests."""

    def test_member_order(self, tmp_path, payload):
        archive = _build(tmp_path, payload)
        with tarfile.open(archive, "r:gz") as tar:
            names = tar.getnames()
        assert names == [
            ".BUILDINFO",
            ".MTREE",
            ".PKGINFO",
            "usr",
            "usr/bin",
            "usr/bin/foo",
            "usr/bin/foo-link",
            "usr/share",
            "usr/share/doc",
            "usr/share/doc/foo",
            "usr/share/doc/foo/README",
        ]

    def test_install_script_follows_manifests(self, tmp_path, payload):
        archive = _build(tmp_path, payload, hook=lambda metadata: "post_install() {\n    :\n}\n")
        with tarfile.open(archive, "r:gz") as tar:
            names = tar.getnames()
        assert names[:4] == [".BUILDINFO", ".MTREE", ".PKGINFO", ".INSTALL"]
        assert _read_member(archive, ".INSTALL").startswith(b"post_install()")

    def test_root_ownership(self, tmp_path, payload):
        archive = _build(tmp_path, payload)
        with tarfile.open(archive, "r:gz") as tar:
            members = tar.getmembers()
        for member in members:
            assert (member.uid, member.gid, member.uname, member.gname) == (0, 0, "root", "root")

        by_name = {member.name: member for member in members}
        link = by_name["usr/bin/foo-link"]
        assert link.issym()
        assert link.linkname == "foo"
        assert link.mode == 0o777
        assert link.mtime == 0
        assert by_name["usr/bin/foo"].mode & 0o777 == 0o755

    def test_mtree_never_lists_itself(self, tmp_path, payload):
        archive = _build(tmp_path, payload, hook=lambda metadata: "post_install() {\n    :\n}\n")
        mtree = gzip.decompress(_read_member(archive, ".MTREE")).decode("utf-8")
        lines = mtree.splitlines()

        assert lines[0] == "#mtree"
        assert any(line.startswith("./.BUILDINFO ") for line in lines)
        assert any(line.startswith("./.PKGINFO ") for line in lines)
        assert any(line.startswith("./.INSTALL ") for line in lines)
        assert not any(line.startswith("./.MTREE") for line in lines)

        digest = hashlib.sha256(FOO_CONTENT).hexdigest()
        assert (
            f"./usr/bin/foo time=0 size={len(FOO_CONTENT)} mode=755 type=file sha256digest={digest}" in lines
        )
        assert "./usr/bin/foo-link time=0 mode=777 type=link link=foo" in lines

    def test_pkginfo_and_buildinfo(self, tmp_path, payload):
        archive = _build(tmp_path, payload)
        pkginfo = _read_member(archive, ".PKGINFO").decode("utf-8")
        buildinfo = _read_member(archive, ".BUILDINFO").decode("utf-8")

        assert "pkgname = foo\n" in pkginfo
        assert "pkgver = 1.2-3\n" in pkginfo
        assert f"builddate = {BUILDDATE}\n" in pkginfo
        assert "depend = glibc>=2.17\n" in pkginfo
        assert buildinfo.startswith("format = 2\npkgname = foo\n")
        assert "pkgarch = x86_64\n" in buildinfo

    def test_payload_cannot_shadow_metadata(self, tmp_path, payload):
        (payload / ".PKGINFO").write_text("pkgname = evil\n", encoding="utf-8")
        archive = _build(tmp_path, payload)
        assert b"pkgname = foo" in _read_member(archive, ".PKGINFO")
        with tarfile.open(archive, "r:gz") as tar:
            assert tar.getnames().count(".PKGINFO") == 1


class TestFormats:
    """Compression backends and output handling."""

    def test_xz(self, tmp_path, payload):
        archive = _build(tmp_path, payload, fmt=OutputFormat.PKG_TAR_XZ)
        assert archive.name == "foo-1.2-3.x86_64.pkg.tar.xz"
        with tarfile.open(archive, "r:xz") as tar:
            assert tar.getnames()[0] == ".BUILDINFO"

    @pytest.mark.skipif(shutil.which("zstd") is None, reason="zstd not installed")
    def test_zst(self, tmp_path, payload):
        archive = _build(tmp_path, payload, fmt=OutputFormat.PKG_TAR_ZST)
        assert archive.name == "foo-1.2-3.x86_64.pkg.tar.zst"
        assert archive.read_bytes()[:4] == b"\x28\xb5\x2f\xfd"

    def test_no_partial_files_left(self, tmp_path, payload):
        archive = _build(tmp_path, payload)
        assert [path.name for path in archive.parent.iterdir()] == [archive.name]

    def test_missing_payload_directory(self, tmp_path):
        with pytest.raises(PackageBuildError):
            PackageBuilder(_metadata(), tmp_path / "missing")


class TestPkgbuild:
    """PKGBUILD rendering."""

    def test_render(self):
        metadata = _metadata()
        metadata.conffiles = [Path("/etc/foo.conf")]
        unmapped = Dependency("zzz-unknown")
        metadata.add_dep(DependencyClass.DEPENDS, unmapped)

        pkgbuild = render_pkgbuild(metadata, "foo.install")

        assert "pkgname='foo'\n" in pkgbuild
        assert "pkgver='1.2'\n" in pkgbuild
        assert "pkgrel=3\n" in pkgbuild
        assert "arch=('x86_64')\n" in pkgbuild
        assert "depends=('glibc>=2.17')\n" in pkgbuild
        assert "backup=('etc/foo.conf')\n" in pkgbuild
        assert "install=foo.install\n" in pkgbuild
        assert "zzz-unknown" not in pkgbuild
