#!/usr/bin/env python3
"""Package and dependency data model shared by the resolver and the builder."""

from __future__ import annotations

import enum
import re
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .utils import InvalidArchitectureError, InvalidControlError, sanitize_pkgver

DEPENDENCY_RE = re.compile(
    r"^\s*([a-zA-Z0-9][a-zA-Z0-9+._-]*)(?::[a-z0-9-]+)?\s*"
    r"(?:\(\s*([<>=]+)\s*([^)]+?)\s*\))?\s*"
    r"(?:\[([^\]]+)\])?\s*(?:<[^>]*>\s*)*$"
)

DEBIAN_REVISION_MARKERS = ("ubuntu", "debian", "build", "deb")
DEBIAN_VERSION_SUFFIXES = ("+dfsg", "~dfsg", "+ds", "~ds", "+really", "~really")


class VersionOp(enum.Enum):
    """Version comparison operators, valued by their Arch spelling."""

    EQ = "="
    GE = ">="
    LE = "<="
    GT = ">"
    LT = "<"

    @classmethod
    def from_debian(cls, op: str) -> Optional["VersionOp"]:
        """Parse a Debian operator; unknown operators yield ``None``."""
        return _DEBIAN_OPERATORS.get(op.strip())

    def __str__(self) -> str:
        return self.value


_DEBIAN_OPERATORS = {
    "=": VersionOp.EQ,
    ">=": VersionOp.GE,
    "<=": VersionOp.LE,
    ">>": VersionOp.GT,
    "<<": VersionOp.LT,
    ">": VersionOp.GT,
    "<": VersionOp.LT,
}


def normalize_dependency_version(version: str) -> str:
    """Strip Debian-only decorations from a dependency version constraint."""
    value = version.strip()

    if ":" in value:
        value = value.split(":", 1)[1]

    if "-" in value:
        head, suffix = value.rsplit("-", 1)
        if suffix[:1].isdigit() or any(marker in suffix for marker in DEBIAN_REVISION_MARKERS):
            value = head

    for suffix in DEBIAN_VERSION_SUFFIXES:
        pos = value.find(suffix)
        if pos != -1:
            value = value[:pos]

    return value.replace("~", ".")


@dataclass
class Dependency:
    """A single declared dependency plus its OR-alternatives."""

    debian_name: str
    arch_name: Optional[str] = None
    version_op: Optional[VersionOp] = None
    version: Optional[str] = None
    alternatives: list["Dependency"] = field(default_factory=list)
    is_virtual: bool = False
    confidence: float = 0.0

    def set_arch_name(self, name: str, confidence: float) -> None:
        self.arch_name = name
        self.confidence = min(max(float(confidence), 0.0), 1.0)

    def effective_name(self) -> str:
        return self.arch_name if self.arch_name is not None else self.debian_name

    def is_mapped(self) -> bool:
        return self.arch_name is not None

    def to_arch_string(self) -> str:
        """Render as an Arch dependency token, e.g. ``glibc>=2.17``."""
        name = self.effective_name()
        if self.version_op is None or not self.version:
            return name

        normalized = normalize_dependency_version(self.version)
        if not normalized:
            return name
        return f"{name}{self.version_op}{normalized}"

    def __str__(self) -> str:
        rendered = self.to_arch_string()
        for alternative in self.alternatives:
            rendered += f" | {alternative}"
        return rendered

    @classmethod
    def _parse_single(cls, text: str) -> "Dependency":
        text = text.strip()
        if not text:
            raise InvalidControlError("Empty dependency")

        match = DEPENDENCY_RE.match(text)
        if match is None:
            # Unparseable: keep the leading token as a bare name.
            return cls(text.split()[0])

        name, op_text, version, _ = match.groups()
        version_op = VersionOp.from_debian(op_text) if op_text else None
        if version_op is None:
            version = None
        return cls(name, version_op=version_op, version=version)

    @classmethod
    def parse(cls, text: str) -> "Dependency":
        """Parse one Debian dependency, e.g. ``"libc6 (>= 2.17) | libc6.1"``."""
        parts = text.split("|")
        primary = cls._parse_single(parts[0])

        for alternative in parts[1:]:
            if alternative.strip():
                primary.alternatives.append(cls._parse_single(alternative))

        return primary

    @classmethod
    def parse_list(cls, text: str) -> list["Dependency"]:
        """Parse a comma-separated Debian relationship field."""
        return [cls.parse(part) for part in text.split(",") if part.strip()]


class DependencyClass(enum.Enum):
    """Closed set of Debian relationship fields, in resolution order."""

    DEPENDS = ("Depends", "depend")
    PRE_DEPENDS = ("Pre-Depends", "depend")
    RECOMMENDS = ("Recommends", "optdepend")
    SUGGESTS = ("Suggests", "optdepend")
    CONFLICTS = ("Conflicts", "conflict")
    REPLACES = ("Replaces", "replaces")
    PROVIDES = ("Provides", "provides")
    BREAKS = ("Breaks", "conflict")
    BUILD_DEPENDS = ("Build-Depends", "makedepend")

    def __init__(self, debian_field: str, pkginfo_key: str) -> None:
        self.debian_field = debian_field
        self.pkginfo_key = pkginfo_key


PKGBUILD_ARRAYS = {
    "depend": "depends",
    "optdepend": "optdepends",
    "conflict": "conflicts",
    "replaces": "replaces",
    "provides": "provides",
    "makedepend": "makedepends",
}


class Architecture(enum.Enum):
    """Target architectures, valued by their Arch Linux names."""

    X86_64 = "x86_64"
    I686 = "i686"
    AARCH64 = "aarch64"
    ARMV7H = "armv7h"
    ANY = "any"

    @classmethod
    def from_debian(cls, arch: str) -> "Architecture":
        key = arch.strip().lower()
        if key in _ARCH_ALIASES:
            return _ARCH_ALIASES[key]
        raise InvalidArchitectureError(f"Unknown Debian architecture: {arch}")

    @property
    def debian_name(self) -> str:
        return _DEBIAN_ARCH_NAMES[self]

    def __str__(self) -> str:
        return self.value


_ARCH_ALIASES = {
    "amd64": Architecture.X86_64,
    "x86_64": Architecture.X86_64,
    "i386": Architecture.I686,
    "i686": Architecture.I686,
    "arm64": Architecture.AARCH64,
    "aarch64": Architecture.AARCH64,
    "armhf": Architecture.ARMV7H,
    "armv7l": Architecture.ARMV7H,
    "armv7h": Architecture.ARMV7H,
    "all": Architecture.ANY,
    "any": Architecture.ANY,
}

_DEBIAN_ARCH_NAMES = {
    Architecture.X86_64: "amd64",
    Architecture.I686: "i386",
    Architecture.AARCH64: "arm64",
    Architecture.ARMV7H: "armhf",
    Architecture.ANY: "all",
}


@dataclass(frozen=True)
class License:
    """Detected license, rendered the way PKGBUILD expects it."""

    name: str

    @classmethod
    def detect(cls, text: str) -> "License":
        lowered = text.lower()
        if "lgpl" in lowered:
            return cls("LGPL")
        if any(marker in lowered for marker in ("gpl-3", "gplv3", "gpl3")):
            return cls("GPL3")
        if any(marker in lowered for marker in ("gpl-2", "gplv2", "gpl2")):
            return cls("GPL2")
        if re.search(r"\bmit\b|\bexpat\b", lowered):
            return cls("MIT")
        if "apache" in lowered:
            return cls("Apache")
        if "bsd" in lowered:
            return cls("BSD")
        if "mpl" in lowered or "mozilla" in lowered:
            return cls("MPL")
        if not text.strip():
            return UNKNOWN_LICENSE
        return cls.custom(text.strip())

    @classmethod
    def custom(cls, text: str) -> "License":
        return cls(f"custom:{text}")

    def __str__(self) -> str:
        return self.name


UNKNOWN_LICENSE = License("unknown")


class MaintainerScript(enum.Enum):
    """Debian maintainer scripts and the .INSTALL functions they feed."""

    PREINST = ("preinst", "pre_install", "pre_upgrade")
    POSTINST = ("postinst", "post_install", "post_upgrade")
    PRERM = ("prerm", "pre_remove", "pre_upgrade")
    POSTRM = ("postrm", "post_remove", "post_upgrade")
    CONFIG = ("config", "post_install", "post_upgrade")

    def __init__(self, debian_name: str, install_function: str, upgrade_function: str) -> None:
        self.debian_name = debian_name
        self.install_function = install_function
        self.upgrade_function = upgrade_function


class OutputFormat(enum.Enum):
    """Archive compression backends: (extension, compression level)."""

    PKG_TAR_ZST = ("pkg.tar.zst", 19)
    PKG_TAR_XZ = ("pkg.tar.xz", 6)
    PKG_TAR_GZ = ("pkg.tar.gz", 6)

    def __init__(self, extension: str, level: int) -> None:
        self.extension = extension
        self.level = level

    @classmethod
    def from_extension(cls, value: str) -> "OutputFormat":
        cleaned = value.strip().lstrip(".").lower()
        for member in cls:
            if member.extension == cleaned or member.extension.rsplit(".", 1)[-1] == cleaned:
                return member
        raise ValueError(f"Unsupported output format: {value}")


@dataclass
class PackageMetadata:
    """Everything known about one package during a single conversion."""

    name: str
    version: str
    arch_name: Optional[str] = None
    release: str = "1"
    epoch: Optional[int] = None
    arch: Architecture = Architecture.ANY
    description: str = ""
    long_description: Optional[str] = None
    url: Optional[str] = None
    license: License = UNKNOWN_LICENSE
    maintainer: Optional[str] = None
    installed_size: int = 0
    section: Optional[str] = None
    priority: Optional[str] = None
    dependencies: dict[DependencyClass, list[Dependency]] = field(default_factory=dict)
    scripts: dict[MaintainerScript, str] = field(default_factory=dict)
    conffiles: list[Path] = field(default_factory=list)
    files: list[Path] = field(default_factory=list)
    md5sums: dict[Path, str] = field(default_factory=dict)
    extra: dict[str, str] = field(default_factory=dict)

    def effective_name(self) -> str:
        return self.arch_name or self.name

    def full_version(self) -> str:
        if self.epoch:
            return f"{self.epoch}:{self.version}-{self.release}"
        return f"{self.version}-{self.release}"

    def get_deps(self, dep_class: DependencyClass) -> list[Dependency]:
        return self.dependencies.get(dep_class, [])

    def add_dep(self, dep_class: DependencyClass, dep: Dependency) -> None:
        self.dependencies.setdefault(dep_class, []).append(dep)

    def iter_dependencies(self):
        """Yield ``(class, dependency)`` pairs in declaration order."""
        for dep_class in DependencyClass:
            for dep in self.get_deps(dep_class):
                yield dep_class, dep

    def normalize_version(self) -> None:
        """Split a Debian version into Arch epoch, pkgver and pkgrel."""
        version = self.version.strip()

        if ":" in version:
            epoch_text, version = version.split(":", 1)
            if epoch_text.isdigit():
                self.epoch = int(epoch_text)

        if "-" in version:
            version, self.release = version.rsplit("-", 1)

        version = version.replace("~", ".").replace("+", ".")
        lowered = version.lower()
        for marker in ("ubuntu", "build", "deb", "dfsg"):
            pos = lowered.find(marker)
            if pos != -1:
                version = version[:pos].rstrip(".")
                lowered = version.lower()

        self.version = sanitize_pkgver(version)

        digits = re.match(r"\d*", self.release).group(0)
        self.release = digits or "1"

    def to_pkginfo(self, builddate: Optional[int] = None) -> str:
        """Render the `.PKGINFO` manifest; unmapped dependencies are omitted."""
        lines = [
            f"pkgname = {self.effective_name()}",
            f"pkgbase = {self.effective_name()}",
            f"pkgver = {self.full_version()}",
            f"pkgdesc = {self.description}",
        ]
        if self.url:
            lines.append(f"url = {self.url}")
        lines.append(f"builddate = {int(time.time()) if builddate is None else builddate}")
        if self.maintainer:
            lines.append(f"packager = {self.maintainer}")
        lines.append(f"size = {self.installed_size}")
        lines.append(f"arch = {self.arch}")
        lines.append(f"license = {self.license}")

        for dep_class in DependencyClass:
            if dep_class is DependencyClass.BUILD_DEPENDS:
                continue
            for dep in self.get_deps(dep_class):
                if dep.is_mapped():
                    lines.append(f"{dep_class.pkginfo_key} = {dep.to_arch_string()}")

        return "\n".join(lines) + "\n"
