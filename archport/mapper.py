#!/usr/bin/env python3
"""Regex rewrite rules for Debian -> Arch package names."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Pattern

from .models import Dependency
from .utils import MappingRuleError

DEFAULT_RULES = (
    ("lib-version", r"^lib(.+?)(\d+)$", r"lib\g<1>", 0.8),
    ("python3", r"^python3-(.+)$", r"python-\g<1>", 0.9),
    ("perl-lib", r"^lib(.+)-perl$", r"perl-\g<1>", 0.85),
    ("ruby", r"^ruby-(.+)$", r"ruby-\g<1>", 0.9),
    ("node", r"^node-(.+)$", r"nodejs-\g<1>", 0.85),
    ("dev-files", r"^lib(.+)-dev$", r"\g<1>", 0.6),
    ("debug", r"^(.+)-dbg$", r"\g<1>-debug", 0.7),
    ("docs", r"^(.+)-doc$", r"\g<1>-docs", 0.8),
    ("gtk-theme", r"^(.+)-theme-(.+)$", r"\g<1>-\g<2>-theme", 0.75),
    ("fonts", r"^fonts-(.+)$", r"ttf-\g<1>", 0.7),
    ("gstreamer", r"^gstreamer1\.0-(.+)$", r"gst-plugins-\g<1>", 0.85),
    ("typelib", r"^gir1\.2-(.+)-[\d.]+$", r"\g<1>", 0.6),
    ("qt5-lib", r"^libqt5(.+)\d+$", r"qt5-\g<1>", 0.7),
    ("qt6-lib", r"^libqt6(.+)\d+$", r"qt6-\g<1>", 0.7),
    ("boost", r"^libboost-(.+?)[\d.]+$", "boost-libs", 0.75),
    ("icu", r"^libicu(.+)\d+$", "icu", 0.8),
    ("llvm", r"^libllvm\d+$", "llvm-libs", 0.9),
    ("clang", r"^libclang\d+-\d+$", "clang", 0.9),
)


@dataclass(frozen=True)
class MappingRule:
    name: str
    pattern: Pattern[str]
    replacement: str
    confidence: float

    def apply(self, debian_name: str) -> Optional[str]:
        if not self.pattern.search(debian_name):
            return None
        return self.pattern.sub(self.replacement, debian_name, count=1)


class PackageMapper:
    """Ordered rewrite rules; the first matching rule wins.

    Results, including misses, are memoized per input name as
    ``(name, confidence)`` so a cache hit never re-scans the rules.
    """

    def __init__(self, load_defaults: bool = True) -> None:
        self.rules: list[MappingRule] = []
        self._cache: dict[str, Optional[tuple[str, float]]] = {}
        if load_defaults:
            for name, pattern, replacement, confidence in DEFAULT_RULES:
                self.add_rule(name, pattern, replacement, confidence)

    def add_rule(self, name: str, pattern: str, replacement: str, confidence: float) -> None:
        try:
            compiled = re.compile(pattern)
        except re.error as exc:
            raise MappingRuleError(f"Invalid pattern for rule '{name}': {exc}") from exc

        self.rules.append(MappingRule(name, compiled, replacement, confidence))
        self._cache.clear()

    def clear_cache(self) -> None:
        self._cache.clear()

    def apply_rules(self, debian_name: str) -> Optional[tuple[str, float]]:
        if debian_name in self._cache:
            return self._cache[debian_name]

        result = None
        for rule in self.rules:
            mapped = rule.apply(debian_name)
            if mapped is not None:
                result = (mapped, rule.confidence)
                break

        self._cache[debian_name] = result
        return result

    def suggest(self, dependency: Dependency) -> Optional[tuple[str, float]]:
        """Rule result, or a low-confidence guess derived from the name itself."""
        result = self.apply_rules(dependency.debian_name)
        if result is not None:
            return result
        return _simple_transform(dependency.debian_name)


def _simple_transform(name: str) -> Optional[tuple[str, float]]:
    lowered = name.lower()

    if "debian" not in lowered and "ubuntu" not in lowered and not lowered.startswith("lib"):
        return lowered, 0.5

    if lowered.startswith("lib"):
        base = lowered[3:].rstrip("0123456789")
        if base:
            return "lib" + base, 0.55

    return None
