#!/usr/bin/env python3
"""Read Debian binary packages (.deb) into PackageMetadata."""

from __future__ import annotations

import logging
import re
import tarfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .models import (
    Architecture,
    Dependency,
    DependencyClass,
    License,
    MaintainerScript,
    PackageMetadata,
)
from .utils import (
    ExtractionError,
    LogCallback,
    MissingFieldError,
    cleanup_dir,
    command_exists,
    create_temp_dir,
    run_command,
    safe_extract_tar,
)

AR_MAGIC = b"!<arch>\n"
REQUIRED_FIELDS = ("package", "version")
CONSUMED_FIELDS = {
    "package",
    "version",
    "architecture",
    "description",
    "maintainer",
    "homepage",
    "section",
    "priority",
    "installed-size",
}


def parse_control_fields(text: str) -> dict[str, str]:
    """Parse a control stanza into lower-cased field names.

    Continuation lines are joined with newlines; a lone ``.`` marks an
    empty line inside a multi-line value.
    """
    fields: dict[str, str] = {}
    current_key: Optional[str] = None

    for line in text.splitlines():
        if not line.strip():
            continue

        if line[0].isspace():
            if current_key:
                continuation = line.strip()
                if continuation == ".":
                    continuation = ""
                fields[current_key] = f"{fields[current_key]}\n{continuation}"
            continue

        if ":" not in line:
            continue

        key, value = line.split(":", 1)
        current_key = key.strip().lower()
        fields[current_key] = value.strip()

    return {key: value.strip() for key, value in fields.items()}


def metadata_from_control(fields: dict[str, str], logger: Optional[logging.Logger] = None) -> PackageMetadata:
    """Build metadata from parsed control fields; ``Package``/``Version`` are required."""
    for field_name in REQUIRED_FIELDS:
        if not fields.get(field_name):
            raise MissingFieldError(field_name.capitalize())

    metadata = PackageMetadata(name=fields["package"], version=fields["version"])

    if fields.get("architecture"):
        metadata.arch = Architecture.from_debian(fields["architecture"])

    description = fields.get("description", "")
    if description:
        short, _, long_text = description.partition("\n")
        metadata.description = short.strip()
        if long_text.strip():
            metadata.long_description = long_text.strip()

    metadata.maintainer = fields.get("maintainer") or None
    metadata.url = fields.get("homepage") or None
    metadata.section = fields.get("section") or None
    metadata.priority = fields.get("priority") or None

    size_text = fields.get("installed-size", "")
    if size_text:
        if size_text.isdigit():
            metadata.installed_size = int(size_text) * 1024
        elif logger:
            logger.warning("Ignoring invalid Installed-Size: %s", size_text)

    if metadata.section and "non-free" in metadata.section:
        metadata.license = License.custom("non-free")

    for dep_class in DependencyClass:
        raw = fields.get(dep_class.debian_field.lower(), "")
        for dep in Dependency.parse_list(raw):
            metadata.add_dep(dep_class, dep)

    known = CONSUMED_FIELDS | {dep_class.debian_field.lower() for dep_class in DependencyClass}
    metadata.extra = {key: value for key, value in fields.items() if key not in known}
    return metadata


def license_from_copyright(text: str) -> Optional[License]:
    """Pick the first ``License:`` field of a machine-readable copyright file."""
    match = re.search(r"^License:\s*(\S.*)$", text, re.MULTILINE)
    if match is None:
        return None
    return License.detect(match.group(1))


class DebParser:
    """Unpack a .deb into a private workspace and read its metadata.

    The parser owns its workspace; call :meth:`cleanup` (or use it as a
    context manager) once the extracted payload is no longer needed.
    """

    def __init__(
        self,
        path: Path,
        logger: Optional[logging.Logger] = None,
        log_callback: LogCallback = None,
    ) -> None:
        self.path = path.expanduser().resolve()
        self.logger = logger or logging.getLogger("archport.parser")
        self.log_callback = log_callback
        self.workspace: Optional[Path] = None
        self._validate()

    def __enter__(self) -> "DebParser":
        return self

    def __exit__(self, *exc_info) -> None:
        self.cleanup()

    @property
    def control_dir(self) -> Path:
        return self._require_workspace() / "control"

    @property
    def data_dir(self) -> Path:
        return self._require_workspace() / "data"

    def _require_workspace(self) -> Path:
        if self.workspace is None:
            self.extract()
        assert self.workspace is not None
        return self.workspace

    def _validate(self) -> None:
        if not self.path.is_file():
            raise ExtractionError(f"File does not exist: {self.path}")

        with self.path.open("rb") as deb_file:
            magic = deb_file.read(len(AR_MAGIC))
        if magic != AR_MAGIC:
            raise ExtractionError(f"Invalid .deb archive (missing ar header): {self.path}")

    def extract(self) -> None:
        """Extract the control and data archives into the workspace."""
        if self.workspace is not None:
            return

        workspace = create_temp_dir(prefix="archport-deb-")
        try:
            control_archive, data_archive = self._extract_members(workspace)
            with self._open_tar_archive(control_archive, workspace) as tar:
                safe_extract_tar(tar, workspace / "control", self.logger)
            with self._open_tar_archive(data_archive, workspace) as tar:
                safe_extract_tar(tar, workspace / "data", self.logger, keep_symlinks=True)
        except Exception:
            cleanup_dir(workspace, self.logger)
            raise

        self.workspace = workspace
        self.logger.debug("Extracted %s into %s", self.path.name, workspace)

    def cleanup(self) -> None:
        if self.workspace is not None:
            cleanup_dir(self.workspace, self.logger)
            self.workspace = None

    def _extract_members(self, workspace: Path) -> tuple[Path, Path]:
        """Extract control and data members using ar."""
        members_dir = workspace / "members"
        members_dir.mkdir()

        _, listing = run_command(["ar", "t", str(self.path)], self.logger, log_callback=self.log_callback)
        control_member = next((line.strip() for line in listing if line.startswith("control.tar")), None)
        data_member = next((line.strip() for line in listing if line.startswith("data.tar")), None)

        if not control_member or not data_member:
            raise ExtractionError(f"{self.path.name} is missing control.tar or data.tar archive")

        run_command(["ar", "x", str(self.path)], self.logger, cwd=members_dir, log_callback=self.log_callback)

        control_archive = members_dir / control_member
        data_archive = members_dir / data_member
        if not control_archive.exists() or not data_archive.exists():
            raise ExtractionError(f"Failed to extract .deb members from {self.path.name}")

        return control_archive, data_archive

    @contextmanager
    def _open_tar_archive(self, archive_path: Path, workspace: Path) -> Iterator[tarfile.TarFile]:
        """Open tar archives including .tar.zst by decompressing to the workspace when needed."""
        try:
            tar = tarfile.open(archive_path, mode="r:*")
        except tarfile.ReadError:
            tar = None

        if tar is not None:
            try:
                yield tar
            finally:
                tar.close()
            return

        if archive_path.suffix != ".zst":
            raise ExtractionError(f"Unsupported tar format: {archive_path.name}")
        if not command_exists("zstd"):
            raise ExtractionError("zstd is required to process .tar.zst archives")

        decompressed = workspace / f"{archive_path.name}.decompressed.tar"
        run_command(
            ["zstd", "-d", "-f", "-q", str(archive_path), "-o", str(decompressed)],
            self.logger,
        )

        tar = tarfile.open(decompressed, mode="r:")
        try:
            yield tar
        finally:
            tar.close()
            decompressed.unlink(missing_ok=True)

    def _read_control_text(self, filename: str) -> Optional[str]:
        path = self.control_dir / filename
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8", errors="replace")

    def parse(self) -> PackageMetadata:
        """Read control metadata, maintainer scripts, conffiles, md5sums and the file list."""
        control_text = self._read_control_text("control")
        if control_text is None:
            raise ExtractionError(f"Could not locate control metadata in {self.path.name}")

        metadata = metadata_from_control(parse_control_fields(control_text), self.logger)

        for script in MaintainerScript:
            body = self._read_control_text(script.debian_name)
            if body is not None:
                metadata.scripts[script] = body

        conffiles = self._read_control_text("conffiles") or ""
        metadata.conffiles = [Path(line.strip()) for line in conffiles.splitlines() if line.strip()]

        md5sums = self._read_control_text("md5sums") or ""
        for line in md5sums.splitlines():
            parts = line.split(None, 1)
            if len(parts) == 2:
                metadata.md5sums[Path(parts[1].strip())] = parts[0]

        metadata.files = sorted(
            Path("/") / path.relative_to(self.data_dir)
            for path in self.data_dir.rglob("*")
            if path.is_file() and not path.is_symlink()
        )

        if metadata.license.name == "unknown":
            copyright_file = self.data_dir / "usr/share/doc" / metadata.name / "copyright"
            if copyright_file.is_file() and not copyright_file.is_symlink():
                detected = license_from_copyright(copyright_file.read_text(encoding="utf-8", errors="replace"))
                if detected is not None:
                    metadata.license = detected

        self.logger.info(
            "Parsed %s %s (%s) with %d files",
            metadata.name,
            metadata.version,
            metadata.arch,
            len(metadata.files),
        )
        return metadata
