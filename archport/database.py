#!/usr/bin/env python3
"""Debian -> Arch name mapping store backed by builtin tables and JSON caches."""

from __future__ import annotations

import enum
import json
import logging
import os
import tempfile
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from .builtin_mappings import BUILTIN_MAPPINGS, VIRTUAL_PACKAGES
from .config import default_data_dir
from .utils import DatabaseError

if TYPE_CHECKING:
    from .aur import AurPackage

MAPPINGS_FILE = "mappings.json"
ARCH_PACKAGES_FILE = "arch_packages.json"
AUR_PACKAGES_FILE = "aur_packages.json"
PROVIDES_CONFIDENCE = 0.9


class MappingSource(enum.Enum):
    BUILTIN = "builtin"
    ARCH_REPO = "arch-repo"
    AUR = "aur"
    USER = "user"
    AUTO = "auto"


@dataclass
class PackageMapping:
    debian_name: str
    arch_name: str
    confidence: float
    source: MappingSource = MappingSource.USER

    def to_dict(self) -> dict[str, Any]:
        return {
            "debian_name": self.debian_name,
            "arch_name": self.arch_name,
            "confidence": self.confidence,
            "source": self.source.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PackageMapping":
        return cls(
            debian_name=data["debian_name"],
            arch_name=data["arch_name"],
            confidence=float(data.get("confidence", 1.0)),
            source=MappingSource(data.get("source", MappingSource.USER.value)),
        )


@dataclass
class ArchPackageInfo:
    name: str
    version: str = ""
    description: str = ""
    provides: list[str] = field(default_factory=list)
    replaces: list[str] = field(default_factory=list)


@dataclass
class AurPackageInfo:
    name: str
    version: str = ""
    description: str = ""
    votes: int = 0
    popularity: float = 0.0
    out_of_date: Optional[int] = None

    @classmethod
    def from_aur(cls, package: "AurPackage") -> "AurPackageInfo":
        return cls(
            name=package.name,
            version=package.version,
            description=package.description or "",
            votes=package.num_votes,
            popularity=package.popularity,
            out_of_date=package.out_of_date,
        )


@dataclass
class SearchResult:
    name: str
    description: str
    version: str
    score: float
    source: str = "arch"


class PackageDatabase:
    """Known Debian -> Arch name mappings, Arch package metadata and virtual capabilities.

    The builtin tables are loaded first; JSON caches found in ``db_dir`` are
    merged over them so that cached entries win. Nothing is written back
    unless :meth:`save` is called explicitly.
    """

    def __init__(
        self,
        db_dir: Optional[Path] = None,
        load_cache: bool = True,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.db_dir = db_dir or default_data_dir() / "db"
        self.logger = logger or logging.getLogger("archport.database")
        self.mappings: dict[str, PackageMapping] = {}
        self.arch_packages: dict[str, ArchPackageInfo] = {}
        self.aur_packages: dict[str, AurPackageInfo] = {}
        self.virtual_packages: dict[str, list[str]] = {}

        self._load_builtin()
        if load_cache:
            self._load_cache()

    def _load_builtin(self) -> None:
        for debian_name, arch_name, confidence in BUILTIN_MAPPINGS:
            self.mappings[debian_name] = PackageMapping(
                debian_name, arch_name, confidence, MappingSource.BUILTIN
            )
        for capability, providers in VIRTUAL_PACKAGES.items():
            self.virtual_packages[capability] = list(providers)

    def _read_json(self, filename: str) -> Optional[dict[str, Any]]:
        path = self.db_dir / filename
        if not path.exists():
            return None

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise DatabaseError(f"Unable to load {path}: {exc}") from exc

        if not isinstance(data, dict):
            raise DatabaseError(f"Unable to load {path}: expected a JSON object")
        return data

    def _load_cache(self) -> None:
        try:
            mappings = self._read_json(MAPPINGS_FILE) or {}
            for debian_name, entry in mappings.items():
                self.mappings[debian_name] = PackageMapping.from_dict(entry)

            arch_packages = self._read_json(ARCH_PACKAGES_FILE) or {}
            for name, entry in arch_packages.items():
                self.arch_packages[name] = ArchPackageInfo(**entry)

            aur_packages = self._read_json(AUR_PACKAGES_FILE) or {}
            for name, entry in aur_packages.items():
                self.aur_packages[name] = AurPackageInfo(**entry)
        except (KeyError, TypeError, ValueError) as exc:
            raise DatabaseError(f"Malformed database cache in {self.db_dir}: {exc}") from exc

        self.logger.debug(
            "Loaded %d mappings, %d Arch packages, %d AUR packages",
            len(self.mappings),
            len(self.arch_packages),
            len(self.aur_packages),
        )

    def lookup(self, name: str) -> Optional[tuple[str, float]]:
        """Exact lookup: mapping table, then Arch package names, then provides."""
        mapping = self.mappings.get(name)
        if mapping is not None:
            return mapping.arch_name, mapping.confidence

        if name in self.arch_packages:
            return name, 1.0

        for package_name, info in self.arch_packages.items():
            if name in info.provides:
                return package_name, PROVIDES_CONFIDENCE

        return None

    def is_virtual(self, name: str) -> bool:
        return name in self.virtual_packages

    def providers_of(self, name: str) -> list[str]:
        return list(self.virtual_packages.get(name, []))

    def arch_package_names(self) -> list[str]:
        return list(self.arch_packages)

    def add_mapping(
        self,
        debian_name: str,
        arch_name: str,
        confidence: float,
        source: MappingSource = MappingSource.USER,
    ) -> None:
        self.mappings[debian_name] = PackageMapping(debian_name, arch_name, confidence, source)

    def add_arch_package(self, info: ArchPackageInfo) -> None:
        self.arch_packages[info.name] = info

    def add_aur_package(self, info: AurPackageInfo) -> None:
        self.aur_packages[info.name] = info

    def search(
        self,
        query: str,
        limit: int = 20,
        arch: bool = True,
        aur: bool = True,
    ) -> list[SearchResult]:
        """Substring search over cached package names and descriptions.

        An exact name scores 1.0, any other hit 0.8. Arch repository hits
        sort ahead of AUR hits with the same score.
        """
        needle = query.lower()
        candidates: list[tuple[str, str, str, str]] = []
        if arch:
            candidates.extend(
                (name, info.description, info.version, "arch") for name, info in self.arch_packages.items()
            )
        if aur:
            candidates.extend(
                (name, info.description, info.version, "aur") for name, info in self.aur_packages.items()
            )

        results = []
        for name, description, version, source in candidates:
            if needle in name.lower() or needle in description.lower():
                score = 1.0 if name.lower() == needle else 0.8
                results.append(SearchResult(name, description, version, score, source))

        results.sort(key=lambda result: result.score, reverse=True)
        return results[:limit]

    def _write_json(self, filename: str, payload: dict[str, Any]) -> None:
        target = self.db_dir / filename
        fd, tmp_name = tempfile.mkstemp(prefix=f".{filename}.", dir=self.db_dir)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(payload, handle, indent=2, sort_keys=True)
            os.replace(tmp_name, target)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise DatabaseError(f"Unable to write {target}: {exc}") from exc

    def save(self) -> None:
        """Persist user/learned mappings and both package caches."""
        try:
            self.db_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DatabaseError(f"Unable to create database directory {self.db_dir}: {exc}") from exc

        learned = {
            name: mapping.to_dict()
            for name, mapping in self.mappings.items()
            if mapping.source is not MappingSource.BUILTIN
        }
        self._write_json(MAPPINGS_FILE, learned)
        self._write_json(
            ARCH_PACKAGES_FILE,
            {name: asdict(info) for name, info in self.arch_packages.items()},
        )
        self._write_json(
            AUR_PACKAGES_FILE,
            {name: asdict(info) for name, info in self.aur_packages.items()},
        )
        self.logger.info("Saved %d mappings to %s", len(learned), self.db_dir)
