#!/usr/bin/env python3
"""Assemble Arch Linux binary packages (.pkg.tar.*) from converted metadata."""

from __future__ import annotations

import gzip
import hashlib
import logging
import os
import shutil
import stat
import tarfile
import time
from pathlib import Path
from typing import Callable, Iterator, Optional

from . import __version__
from .hooks import generate_install_script
from .models import PKGBUILD_ARRAYS, DependencyClass, OutputFormat, PackageMetadata
from .utils import (
    CommandExecutionError,
    LogCallback,
    PackageBuildError,
    cleanup_dir,
    command_exists,
    create_temp_dir,
    run_command,
)

BUILDINFO = ".BUILDINFO"
MTREE = ".MTREE"
PKGINFO = ".PKGINFO"
INSTALL = ".INSTALL"
# Archive order for the metadata members.
SPECIAL_FILES = (BUILDINFO, MTREE, PKGINFO, INSTALL)
# Members hashed into .MTREE; it cannot list itself.
MTREE_HASHED_FILES = (BUILDINFO, PKGINFO, INSTALL)

BUILD_DIR = "/tmp/archport"
BUILDENV_FLAGS = ("!distcc", "!ccache", "!check", "!sign")
OPTIONS_FLAGS = ("!strip", "!docs", "!libtool", "!staticlibs")
SYMLINK_MODE = 0o777

HookGenerator = Callable[[PackageMetadata], Optional[str]]


def package_filename(metadata: PackageMetadata, fmt: OutputFormat) -> str:
    return f"{metadata.effective_name()}-{metadata.version}-{metadata.release}.{metadata.arch}.{fmt.extension}"


def _sha256_file(path: Path) -> str:
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(65536), b""):
            digest.update(chunk)
    return digest.hexdigest()


def _mtree_escape(path: str) -> str:
    """Octal-escape characters mtree treats as separators."""
    escaped = []
    for char in path:
        if char in " \t\n#\\" or not char.isprintable():
            escaped.extend(f"\\{byte:03o}" for byte in char.encode("utf-8"))
        else:
            escaped.append(char)
    return "".join(escaped)


def render_pkgbuild(metadata: PackageMetadata, install_file: Optional[str] = None) -> str:
    """Create a PKGBUILD that repackages a prepared ``pkgroot`` directory."""

    def quoted(value: str) -> str:
        escaped = value.replace("'", "'\\''")
        return f"'{escaped}'"

    arrays: dict[str, list[str]] = {}
    for dep_class in DependencyClass:
        key = PKGBUILD_ARRAYS[dep_class.pkginfo_key]
        for dep in metadata.get_deps(dep_class):
            if dep.is_mapped():
                arrays.setdefault(key, []).append(dep.to_arch_string())

    pkgdesc = metadata.description or "Converted package"
    if len(pkgdesc) > 120:
        pkgdesc = pkgdesc[:117] + "..."

    lines = [f"# Maintainer: {metadata.maintainer or 'archport'}"]
    lines.append(f"pkgname={quoted(metadata.effective_name())}")
    lines.append(f"pkgver={quoted(metadata.version)}")
    lines.append(f"pkgrel={metadata.release}")
    if metadata.epoch:
        lines.append(f"epoch={metadata.epoch}")
    lines.append(f"pkgdesc={quoted(pkgdesc)}")
    lines.append(f"arch=({quoted(str(metadata.arch))})")
    if metadata.url:
        lines.append(f"url={quoted(metadata.url)}")
    lines.append(f"license=({quoted(str(metadata.license))})")
    for key in ("depends", "makedepends", "optdepends", "conflicts", "replaces", "provides"):
        if key in arrays:
            lines.append(f"{key}=({' '.join(quoted(entry) for entry in arrays[key])})")
    if metadata.conffiles:
        backup = " ".join(quoted(str(path).lstrip("/")) for path in metadata.conffiles)
        lines.append(f"backup=({backup})")
    if install_file:
        lines.append(f"install={install_file}")
    lines.append("options=('!strip' '!debug')")
    lines.append("source=()")
    lines.append("sha256sums=()")
    lines.append("")
    lines.append("package() {")
    lines.append('    cp -a "$startdir/pkgroot/." "$pkgdir/"')
    lines.append("}")
    return "\n".join(lines) + "\n"


class PackageBuilder:
    """Stage metadata and payload into a package root and archive it."""

    def __init__(
        self,
        metadata: PackageMetadata,
        data_dir: Path,
        hook_generator: Optional[HookGenerator] = None,
        logger: Optional[logging.Logger] = None,
        log_callback: LogCallback = None,
    ) -> None:
        if not data_dir.is_dir():
            raise PackageBuildError(f"Payload directory does not exist: {data_dir}")
        self.metadata = metadata
        self.data_dir = data_dir
        self.hook_generator = hook_generator or generate_install_script
        self.logger = logger or logging.getLogger("archport.builder")
        self.log_callback = log_callback

    def _log(self, message: str) -> None:
        self.logger.info(message)
        if self.log_callback:
            self.log_callback(message)

    def build(
        self,
        output_dir: Path,
        fmt: OutputFormat = OutputFormat.PKG_TAR_ZST,
        builddate: Optional[int] = None,
    ) -> Path:
        """Build the package archive and return its path inside ``output_dir``."""
        builddate = int(time.time()) if builddate is None else builddate
        output_path = output_dir / package_filename(self.metadata, fmt)

        pkg_root = create_temp_dir(prefix="archport-build-")
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            self._write_buildinfo(pkg_root, builddate)
            (pkg_root / PKGINFO).write_text(self.metadata.to_pkginfo(builddate), encoding="utf-8")
            self._write_install(pkg_root)
            self._copy_payload(pkg_root)
            self._write_mtree(pkg_root)
            self._write_archive(pkg_root, output_path, fmt)
        except OSError as exc:
            raise PackageBuildError(f"Failed to build {output_path.name}: {exc}") from exc
        except CommandExecutionError as exc:
            raise PackageBuildError(f"Compression failed for {output_path.name}: {exc}") from exc
        finally:
            cleanup_dir(pkg_root, self.logger)

        self._log(f"Built package: {output_path}")
        return output_path

    def render_buildinfo(self, builddate: int) -> str:
        name = self.metadata.effective_name()
        full_version = self.metadata.full_version()
        checksum = hashlib.sha256(f"{name}:{full_version}".encode("utf-8")).hexdigest()[:32]

        lines = [
            "format = 2",
            f"pkgname = {name}",
            f"pkgbase = {name}",
            f"pkgver = {full_version}",
            f"pkgarch = {self.metadata.arch}",
            f"pkgbuild_sha256sum = {checksum}",
            f"packager = {self.metadata.maintainer or 'Unknown'} (converted by archport)",
            f"builddate = {builddate}",
            f"builddir = {BUILD_DIR}",
            f"startdir = {BUILD_DIR}",
            "buildtool = archport",
            f"buildtoolver = {__version__}",
        ]
        lines.extend(f"buildenv = {flag}" for flag in BUILDENV_FLAGS)
        lines.extend(f"options = {flag}" for flag in OPTIONS_FLAGS)
        return "\n".join(lines) + "\n"

    def _write_buildinfo(self, pkg_root: Path, builddate: int) -> None:
        (pkg_root / BUILDINFO).write_text(self.render_buildinfo(builddate), encoding="utf-8")

    def _write_install(self, pkg_root: Path) -> None:
        content = self.hook_generator(self.metadata)
        if content:
            (pkg_root / INSTALL).write_text(content, encoding="utf-8")

    def _copy_payload(self, pkg_root: Path) -> None:
        def ignore_reserved(directory: str, names: list[str]) -> list[str]:
            if Path(directory) != self.data_dir:
                return []
            reserved = [name for name in names if name in SPECIAL_FILES]
            for name in reserved:
                self.logger.warning("Ignoring payload file that shadows package metadata: %s", name)
            return reserved

        shutil.copytree(
            self.data_dir,
            pkg_root,
            symlinks=True,
            ignore=ignore_reserved,
            dirs_exist_ok=True,
        )

    def _walk_payload(self, pkg_root: Path, current: Optional[Path] = None) -> Iterator[Path]:
        """Yield payload paths relative to ``pkg_root`` in sorted depth-first order."""
        directory = current or pkg_root
        for entry in sorted(directory.iterdir(), key=lambda path: path.name):
            if directory == pkg_root and entry.name in SPECIAL_FILES:
                continue
            yield entry.relative_to(pkg_root)
            if entry.is_dir() and not entry.is_symlink():
                yield from self._walk_payload(pkg_root, entry)

    def render_mtree(self, pkg_root: Path) -> str:
        lines = ["#mtree", "/set type=file uid=0 gid=0 mode=644"]

        for filename in MTREE_HASHED_FILES:
            path = pkg_root / filename
            if path.is_file():
                lines.append(
                    f"./{filename} time=0 size={path.stat().st_size} sha256digest={_sha256_file(path)}"
                )

        lines.append("/set mode=755")

        for relative in self._walk_payload(pkg_root):
            path = pkg_root / relative
            info = path.lstat()
            mode = stat.S_IMODE(info.st_mode)
            name = "./" + _mtree_escape(relative.as_posix())

            if stat.S_ISLNK(info.st_mode):
                lines.append(f"{name} time=0 mode={mode:o} type=link link={_mtree_escape(os.readlink(path))}")
            elif stat.S_ISDIR(info.st_mode):
                lines.append(f"{name} time=0 mode={mode:o} type=dir")
            elif stat.S_ISREG(info.st_mode):
                lines.append(
                    f"{name} time=0 size={info.st_size} mode={mode:o} type=file "
                    f"sha256digest={_sha256_file(path)}"
                )
            else:
                self.logger.warning("Skipping unsupported payload entry: %s", relative)

        return "\n".join(lines) + "\n"

    def _write_mtree(self, pkg_root: Path) -> None:
        content = self.render_mtree(pkg_root).encode("utf-8")
        with gzip.open(pkg_root / MTREE, "wb") as handle:
            handle.write(content)

    def _root_owned(self, tarinfo: tarfile.TarInfo) -> tarfile.TarInfo:
        tarinfo.uid = 0
        tarinfo.gid = 0
        tarinfo.uname = "root"
        tarinfo.gname = "root"
        if tarinfo.issym():
            tarinfo.mode = SYMLINK_MODE
            tarinfo.mtime = 0
        return tarinfo

    def _add_members(self, tar: tarfile.TarFile, pkg_root: Path) -> None:
        for filename in SPECIAL_FILES:
            path = pkg_root / filename
            if path.is_file():
                tar.add(path, arcname=filename, recursive=False, filter=self._root_owned)

        for relative in self._walk_payload(pkg_root):
            tar.add(pkg_root / relative, arcname=relative.as_posix(), recursive=False, filter=self._root_owned)

    def _open_archive(self, path: Path, fmt: OutputFormat) -> tarfile.TarFile:
        if fmt is OutputFormat.PKG_TAR_XZ:
            return tarfile.open(path, mode="w:xz", preset=fmt.level, format=tarfile.GNU_FORMAT)
        if fmt is OutputFormat.PKG_TAR_GZ:
            return tarfile.open(path, mode="w:gz", compresslevel=fmt.level, format=tarfile.GNU_FORMAT)
        return tarfile.open(path, mode="w", format=tarfile.GNU_FORMAT)

    def _write_archive(self, pkg_root: Path, output_path: Path, fmt: OutputFormat) -> None:
        if fmt is OutputFormat.PKG_TAR_ZST and not command_exists("zstd"):
            raise PackageBuildError("zstd is required to create .pkg.tar.zst packages")

        partial = output_path.with_name(f".{output_path.name}.part")
        plain_tar = output_path.with_name(f".{output_path.name}.tar")
        try:
            tar_target = plain_tar if fmt is OutputFormat.PKG_TAR_ZST else partial
            with self._open_archive(tar_target, fmt) as tar:
                self._add_members(tar, pkg_root)

            if fmt is OutputFormat.PKG_TAR_ZST:
                run_command(
                    ["zstd", f"-{fmt.level}", "-T0", "-q", "-f", str(plain_tar), "-o", str(partial)],
                    self.logger,
                    log_callback=self.log_callback,
                )

            os.replace(partial, output_path)
        finally:
            plain_tar.unlink(missing_ok=True)
            partial.unlink(missing_ok=True)
