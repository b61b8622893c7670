#!/usr/bin/env python3
"""Exceptions, logging, subprocess and archive helpers used across archport."""

from __future__ import annotations

import logging
import os
import posixpath
import re
import shutil
import subprocess
import tempfile
from pathlib import Path
from tarfile import TarFile, TarInfo
from typing import Callable, Iterable, Optional

LogCallback = Optional[Callable[[str], None]]
TERMINAL_ESCAPE_RE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~]|[\(\)][0-9A-Za-z])")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class ArchportError(Exception):
    """Base exception for all archport errors."""


class CommandExecutionError(ArchportError):
    """An external tool (ar, zstd, strip) failed or could not be started."""


class ConversionError(ArchportError):
    """A .deb could not be turned into an Arch package."""


class ExtractionError(ConversionError):
    """Raised when a source archive cannot be unpacked."""


class InvalidControlError(ConversionError):
    """Raised when Debian control metadata cannot be understood."""


class MissingFieldError(InvalidControlError):
    """Raised when a required control field is absent."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Missing required field in control file: {field}")
        self.field = field


class InvalidArchitectureError(ConversionError):
    """Raised for architecture names with no Arch Linux equivalent."""


class PackageBuildError(ConversionError):
    """Raised when the Arch package archive cannot be assembled."""


class DatabaseError(ArchportError):
    """Raised when the mapping database cannot be loaded or saved."""


class MappingRuleError(ArchportError):
    """Raised when a mapping rule pattern does not compile."""


class RemoteError(ArchportError):
    """Base class for remote repository failures.

    Remote failures are transient from the caller's point of view, so they
    are always flagged as retryable.
    """

    retryable = True


class NetworkError(RemoteError):
    """Raised for transport failures: timeouts, HTTP status, undecodable bodies."""


class AurApiError(RemoteError):
    """Raised when the AUR RPC answers with a service-level error string."""


class ConfigError(ArchportError):
    """Raised for unreadable configuration or invalid configuration values."""


def setup_logging(
    name: str = "archport",
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """Attach console (and optionally file) handlers to the ``name`` logger once."""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


def parse_log_level(level_name: str) -> int:
    """Translate a configured level name such as ``"debug"`` into a logging level."""
    level = logging.getLevelName(level_name.strip().upper())
    if isinstance(level, int):
        return level
    raise ConfigError(f"Unknown log level: {level_name}")


def create_temp_dir(prefix: str = "archport-") -> Path:
    return Path(tempfile.mkdtemp(prefix=prefix))


def cleanup_dir(path: Path, logger: Optional[logging.Logger] = None) -> None:
    """Remove a workspace; a missing directory is not an error."""
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        return
    except OSError as exc:  # pragma: no cover - best effort cleanup
        if logger:
            logger.warning("Could not remove %s: %s", path, exc)


def command_exists(binary: str) -> bool:
    return shutil.which(binary) is not None


def sanitize_package_name(name: str) -> str:
    """Lower-case ``name`` and replace characters pacman rejects in a pkgname."""
    token = re.sub(r"[^a-zA-Z0-9@._+-]", "-", name)
    token = token.strip("-._").lower()
    return token if token else "unknown-package"


def sanitize_pkgver(version: str) -> str:
    """Make ``version`` usable as an Arch pkgver.

    The epoch is dropped and every character outside ``[A-Za-z0-9.+_]``
    becomes a dot; runs of dots collapse into one.
    """
    if not version:
        return "0"

    upstream = version.partition(":")[2] if ":" in version else version
    upstream = re.sub(r"[^a-zA-Z0-9.+_]", ".", upstream.replace("~", ".").replace("-", "."))
    upstream = re.sub(r"\.{2,}", ".", upstream).strip(".")
    return upstream if upstream else "0"


def _member_path(destination: Path, member_name: str) -> Path:
    return (destination / member_name.lstrip("/")).resolve()


def _inside(destination: Path, member_name: str) -> bool:
    """True when the member lands in ``destination`` or below it."""
    root = destination.resolve()
    target = _member_path(destination, member_name)
    return target == root or root in target.parents


def _is_safe_link_target(member: TarInfo) -> bool:
    """Absolute targets stay inside the installed root; relative ones must not climb out."""
    if posixpath.isabs(member.linkname):
        return True
    parent = posixpath.dirname(member.name.lstrip("/").lstrip("./"))
    resolved = posixpath.normpath(posixpath.join(parent, member.linkname))
    return resolved != ".." and not resolved.startswith("../")


def _restore_mode(path: Path, member: TarInfo) -> None:
    mode = member.mode & 0o7777
    if mode:
        path.chmod(mode)


def _write_member(tar: TarFile, member: TarInfo, destination: Path) -> None:
    target = _member_path(destination, member.name)
    target.parent.mkdir(parents=True, exist_ok=True)

    source = tar.extractfile(member)
    if source is None:
        raise ExtractionError(f"Unable to read tar member: {member.name}")
    with source, target.open("wb") as sink:
        shutil.copyfileobj(source, sink)
    _restore_mode(target, member)


def _write_symlink(member: TarInfo, destination: Path) -> None:
    """Recreate a symlink member without following its target."""
    link_path = destination / member.name.lstrip("/").rstrip("/")
    link_path.parent.mkdir(parents=True, exist_ok=True)
    if link_path.is_symlink() or link_path.exists():
        link_path.unlink()
    os.symlink(member.linkname, link_path)


def safe_extract_tar(
    tar: TarFile,
    destination: Path,
    logger: Optional[logging.Logger] = None,
    keep_symlinks: bool = False,
) -> None:
    """Extract ``tar`` below ``destination``.

    Members escaping ``destination`` abort the extraction. Hardlinks,
    device nodes and FIFOs are skipped. Symlinks are skipped too unless
    ``keep_symlinks`` is set; kept links are recreated verbatim and never
    written through, and relative links pointing above the root are dropped.
    """
    destination.mkdir(parents=True, exist_ok=True)

    for member in tar.getmembers():
        if not _inside(destination, member.name):
            raise ExtractionError(f"Unsafe archive path detected: {member.name}")

        if member.issym():
            if keep_symlinks and _is_safe_link_target(member):
                _write_symlink(member, destination)
            elif logger:
                logger.warning("Skipping symlink %s -> %s", member.name, member.linkname)
        elif member.islnk() or member.isdev() or member.isfifo():
            if logger:
                logger.warning("Skipping special archive member: %s", member.name)
        elif member.isdir():
            target = _member_path(destination, member.name)
            target.mkdir(parents=True, exist_ok=True)
            _restore_mode(target, member)
        elif member.isfile():
            _write_member(tar, member, destination)
        elif logger:
            logger.warning("Skipping archive member of unknown type: %s", member.name)


def run_command(
    cmd: list[str],
    logger: logging.Logger,
    cwd: Optional[Path] = None,
    env: Optional[dict[str, str]] = None,
    log_callback: LogCallback = None,
    check: bool = True,
) -> tuple[int, list[str]]:
    """Run ``cmd`` with stderr folded into stdout.

    Output is relayed line by line to the debug log and ``log_callback``;
    the exit status and the cleaned lines are returned.
    """
    logger.debug("$ %s", " ".join(cmd))

    try:
        process = subprocess.Popen(
            cmd,
            cwd=str(cwd) if cwd else None,
            env={**os.environ, **(env or {})},
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            bufsize=1,
        )
    except FileNotFoundError as exc:
        raise CommandExecutionError(f"Command not found: {cmd[0]}") from exc

    lines: list[str] = []
    assert process.stdout is not None
    with process.stdout:
        for raw in process.stdout:
            line = TERMINAL_ESCAPE_RE.sub("", raw.rstrip("\n")).strip()
            lines.append(line)
            if not line:
                continue
            logger.debug(line)
            if log_callback:
                log_callback(line)
    returncode = process.wait()

    if check and returncode != 0:
        output = "\n".join(lines)
        raise CommandExecutionError(f"{cmd[0]} exited with status {returncode}: {' '.join(cmd)}\n{output}")
    return returncode, lines


def format_dependency_list(items: Iterable[str]) -> str:
    """Sorted, de-duplicated, comma-separated names; ``none`` when empty."""
    names = sorted(set(items))
    return ", ".join(names) if names else "none"
