#!/usr/bin/env python3
"""Approximate Debian -> Arch package name matching."""

from __future__ import annotations

import re
from typing import Optional

from rapidfuzz import fuzz
from rapidfuzz.distance import DamerauLevenshtein, JaroWinkler, LCSseq

from .database import PackageDatabase

NAME_PREFIXES = ("lib", "python3-", "python-", "perl-", "ruby-", "node-", "golang-")
NAME_SUFFIXES = ("-dev", "-dbg", "-doc", "-common", "-data", "-bin", "-utils")

EQUAL_NORMALIZED_SCORE = 0.95
PATTERN_SCORE = 0.85
SUBSTRING_WEIGHT = 0.7

PATTERN_TRANSFORMS = (
    (re.compile(r"^lib(.+)\d+$"), r"lib\1"),
    (re.compile(r"^python3-(.+)$"), r"python-\1"),
    (re.compile(r"^(.+)-dev$"), r"\1-devel"),
)

COMMON_RENAMES = {
    "apt": "pacman",
    "dpkg": "pacman",
    "default-jre": "jre-openjdk",
    "default-jdk": "jdk-openjdk",
    "openjdk-11-jre": "jre11-openjdk",
    "openjdk-17-jre": "jre17-openjdk",
    "libreoffice-core": "libreoffice-fresh",
}


def _normalize_once(name: str) -> str:
    normalized = name.lower()

    for prefix in NAME_PREFIXES:
        if normalized.startswith(prefix):
            normalized = normalized[len(prefix):]
            break

    for suffix in NAME_SUFFIXES:
        if normalized.endswith(suffix):
            normalized = normalized[: -len(suffix)]
            break

    normalized = normalized.rstrip("0123456789")
    return normalized.replace("-", "").replace("_", "")


def normalize_name(name: str) -> str:
    """Reduce a package name to its comparable core, e.g. ``libfoo6`` -> ``foo``.

    Stripping one affix can expose another, so the reduction is repeated
    until the name stops changing; the result is therefore idempotent.
    """
    current = name
    while True:
        reduced = _normalize_once(current)
        if reduced == current:
            return reduced
        current = reduced


def _pattern_score(debian: str, arch: str) -> float:
    for pattern, replacement in PATTERN_TRANSFORMS:
        if pattern.match(debian) and pattern.sub(replacement, debian) == arch:
            return PATTERN_SCORE

    if debian and arch and (arch in debian or debian in arch):
        shorter, longer = sorted((len(debian), len(arch)))
        return shorter / longer * SUBSTRING_WEIGHT

    return 0.0


class FuzzyMatcher:
    """Scores candidate Arch names against a Debian name."""

    def __init__(self, min_score: float = 0.6) -> None:
        self.min_score = min_score

    def score(self, debian_name: str, arch_name: str) -> float:
        norm_debian = normalize_name(debian_name)
        norm_arch = normalize_name(arch_name)

        if norm_debian == norm_arch:
            return EQUAL_NORMALIZED_SCORE

        scores = []

        # Only counted when every character of the Debian name appears in order in the candidate.
        if LCSseq.similarity(norm_debian, norm_arch) == len(norm_debian):
            partial = min(fuzz.partial_ratio(norm_debian, norm_arch) / 100.0, 1.0)
            if partial > 0:
                scores.append(partial)

        scores.append(JaroWinkler.similarity(norm_debian, norm_arch))
        scores.append(DamerauLevenshtein.normalized_similarity(norm_debian, norm_arch))

        pattern = _pattern_score(norm_debian, norm_arch)
        if pattern > 0:
            scores.append(pattern)

        return sum(scores) / len(scores)

    def heuristic_match(self, debian_name: str) -> Optional[tuple[str, float]]:
        """Guess an Arch name from naming conventions alone."""
        name = debian_name.lower()

        if name.startswith("lib"):
            stripped = name.rstrip("0123456789")
            if stripped != name and len(stripped) > 3:
                return stripped, 0.7

        if name.startswith("python3-"):
            return "python-" + name[len("python3-"):], 0.8

        if name.startswith("lib") and name.endswith("-dev"):
            core = re.match(r"[^0-9]*", name[3:-4]).group(0)
            if core.endswith("-"):
                core = core[:-1]
            if core:
                return "lib" + core, 0.65

        if name.endswith("-dev"):
            return name[:-4], 0.6

        if name in COMMON_RENAMES:
            return COMMON_RENAMES[name], 0.9

        return None

    def find_matches(
        self,
        debian_name: str,
        db: PackageDatabase,
        limit: int = 10,
    ) -> list[tuple[str, float]]:
        """Rank every known Arch package scoring at least ``min_score``."""
        matches = []
        for candidate in db.arch_package_names():
            candidate_score = self.score(debian_name, candidate)
            if candidate_score >= self.min_score:
                matches.append((candidate, candidate_score))

        # sort() is stable, so ties keep candidate order.
        matches.sort(key=lambda match: match[1], reverse=True)
        return matches[:limit]

    def find_best_match(self, debian_name: str, db: PackageDatabase) -> Optional[tuple[str, float]]:
        candidates = db.arch_package_names()
        if not candidates:
            return self.heuristic_match(debian_name)

        best: Optional[tuple[str, float]] = None
        for candidate in candidates:
            candidate_score = self.score(debian_name, candidate)
            if candidate_score >= self.min_score and (best is None or candidate_score > best[1]):
                best = (candidate, candidate_score)

        heuristic = self.heuristic_match(debian_name)
        if heuristic is not None and (best is None or heuristic[1] > best[1]):
            best = heuristic

        return best
