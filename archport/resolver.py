#!/usr/bin/env python3
"""Translate every dependency of a package from Debian to Arch names."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from .aur import AurClient
from .config import Config, ConflictStrategy, JavaConfig
from .database import AurPackageInfo, PackageDatabase
from .fuzzy import FuzzyMatcher
from .mapper import PackageMapper
from .models import Dependency, DependencyClass, PackageMetadata
from .utils import RemoteError

JRE_PATTERNS = (
    "jre-openjdk",
    "jre8-openjdk",
    "jre11-openjdk",
    "jre17-openjdk",
    "jre21-openjdk",
    "jre-openjdk-headless",
    "jre8-openjdk-headless",
    "jre11-openjdk-headless",
    "jre17-openjdk-headless",
    "jre21-openjdk-headless",
)

JDK_PATTERNS = (
    "jdk-openjdk",
    "jdk8-openjdk",
    "jdk11-openjdk",
    "jdk17-openjdk",
    "jdk21-openjdk",
)

# Classes that request something be installed; conflict declarations are never scanned.
JAVA_SCAN_CLASSES = (
    DependencyClass.DEPENDS,
    DependencyClass.PRE_DEPENDS,
    DependencyClass.RECOMMENDS,
    DependencyClass.SUGGESTS,
)

# Build-Depends never reach the built package, so they stay in Debian terms.
RESOLVE_CLASSES = tuple(
    dep_class for dep_class in DependencyClass if dep_class is not DependencyClass.BUILD_DEPENDS
)

PROVIDER_CONFIDENCE = 0.8

PromptCallback = Callable[[list[str], list[str]], ConflictStrategy]


@dataclass
class ResolutionStats:
    total: int = 0
    mapped: int = 0
    virtual: int = 0
    unmapped: int = 0
    avg_confidence: float = 0.0
    unmapped_names: list[str] = field(default_factory=list)
    remote_failures: list[tuple[str, RemoteError]] = field(default_factory=list)

    def success_rate(self) -> float:
        if self.total == 0:
            return 1.0
        return (self.mapped + self.virtual) / self.total

    @property
    def retryable(self) -> bool:
        """True when a later run with a reachable AUR may map more names."""
        return any(exc.retryable for _, exc in self.remote_failures)

    def retryable_names(self) -> list[str]:
        return [name for name, exc in self.remote_failures if exc.retryable]


def _matches_family(name: str, patterns: tuple[str, ...]) -> bool:
    return any(pattern in name for pattern in patterns)


class DependencyResolver:
    """Runs each dependency through lookup, fuzzy match and AUR queries in turn."""

    def __init__(
        self,
        db: Optional[PackageDatabase] = None,
        fuzzy: Optional[FuzzyMatcher] = None,
        aur: Optional[AurClient] = None,
        mapper: Optional[PackageMapper] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.db = db if db is not None else PackageDatabase()
        self.fuzzy = fuzzy or FuzzyMatcher()
        self.aur = aur or AurClient()
        self.mapper = mapper or PackageMapper()
        self.logger = logger or logging.getLogger("archport.resolver")
        self.remote_failures: dict[str, RemoteError] = {}

    @classmethod
    def from_config(cls, config: Config, logger: Optional[logging.Logger] = None) -> "DependencyResolver":
        return cls(
            db=PackageDatabase(config.db_dir),
            fuzzy=FuzzyMatcher(min_score=config.conversion.min_match_confidence),
            aur=AurClient(
                base_url=config.network.aur_url,
                timeout=config.network.timeout,
                proxy=config.network.proxy,
            ),
            logger=logger,
        )

    def resolve(
        self,
        metadata: PackageMetadata,
        config: Optional[Config] = None,
        prompt_callback: Optional[PromptCallback] = None,
    ) -> None:
        """Resolve all dependencies in place, then apply the Java conflict policy.

        Never raises for names that cannot be translated; those stay unmapped.
        AUR failures are kept in :attr:`remote_failures` so that callers can
        report them as retryable. Build-time dependencies are left untouched.
        """
        self.remote_failures = {}
        config = config or Config()
        if config.conversion.skip_deps:
            self.logger.info("Dependency resolution skipped for %s", metadata.name)
            return

        offline = config.network.offline
        for dep_class, dep in list(metadata.iter_dependencies()):
            if dep_class not in RESOLVE_CLASSES:
                continue
            self._resolve_single(dep, offline)
            for alternative in dep.alternatives:
                self._resolve_single(alternative, offline)

        self.handle_java_conflicts(metadata, config.java, prompt_callback)

    def _resolve_single(self, dep: Dependency, offline: bool) -> None:
        if dep.is_mapped():
            return

        found = self.db.lookup(dep.debian_name)
        if found is not None:
            dep.set_arch_name(*found)
            self.logger.debug("%s -> %s (database, %.2f)", dep.debian_name, *found)
            return

        found = self.fuzzy.find_best_match(dep.debian_name, self.db)
        if found is not None:
            dep.set_arch_name(*found)
            self.logger.debug("%s -> %s (fuzzy, %.2f)", dep.debian_name, *found)
            return

        if not offline:
            try:
                packages = self.aur.info([dep.debian_name])
                if packages:
                    dep.set_arch_name(packages[0].name, 1.0)
                    self.db.add_aur_package(AurPackageInfo.from_aur(packages[0]))
                    self.logger.debug("%s -> %s (AUR info)", dep.debian_name, packages[0].name)
                    return
            except RemoteError as exc:
                self.remote_failures[dep.debian_name] = exc
                self.logger.warning("AUR info lookup failed for %s: %s", dep.debian_name, exc)

            try:
                providers = self.aur.find_providers(dep.debian_name)
                if providers:
                    provider = providers[0]
                    confidence = 1.0 if provider.name == dep.debian_name else PROVIDER_CONFIDENCE
                    dep.set_arch_name(provider.name, confidence)
                    self.logger.debug("%s -> %s (AUR provider)", dep.debian_name, provider.name)
                    return
            except RemoteError as exc:
                self.remote_failures[dep.debian_name] = exc
                self.logger.warning("AUR provider search failed for %s: %s", dep.debian_name, exc)

        if self.db.is_virtual(dep.debian_name):
            dep.is_virtual = True
            self.logger.debug("%s is a virtual package", dep.debian_name)
        else:
            self.logger.debug("%s could not be resolved", dep.debian_name)

    def handle_java_conflicts(
        self,
        metadata: PackageMetadata,
        java_config: JavaConfig,
        prompt_callback: Optional[PromptCallback] = None,
    ) -> None:
        """Settle packages that pull in both a JRE and a JDK.

        The losing family is dropped and its resolved names are declared as
        conflicts. Calling this twice leaves the metadata unchanged.
        """
        if not java_config.add_java_conflicts:
            return

        jre_deps: list[tuple[DependencyClass, Dependency]] = []
        jdk_deps: list[tuple[DependencyClass, Dependency]] = []
        # Relation-only classes (Conflicts, Replaces, Provides) are skipped so reruns stay no-ops.
        for dep_class in JAVA_SCAN_CLASSES:
            for dep in metadata.get_deps(dep_class):
                if dep.arch_name is None:
                    continue
                if _matches_family(dep.arch_name, JRE_PATTERNS):
                    jre_deps.append((dep_class, dep))
                if _matches_family(dep.arch_name, JDK_PATTERNS):
                    jdk_deps.append((dep_class, dep))

        if not jre_deps or not jdk_deps:
            return

        strategy = java_config.conflict_strategy
        if strategy is ConflictStrategy.PROMPT:
            strategy = self._prompt_strategy(jre_deps, jdk_deps, prompt_callback)

        if strategy in (ConflictStrategy.PREFER_JRE, ConflictStrategy.JRE):
            dropped = jdk_deps
        else:
            dropped = jre_deps

        for dep_class, dep in dropped:
            deps = metadata.dependencies.get(dep_class, [])
            metadata.dependencies[dep_class] = [
                kept for kept in deps if kept.debian_name != dep.debian_name
            ]
            self.logger.info("Dropped %s (%s) from %s", dep.debian_name, dep.arch_name, dep_class.debian_field)

        conflicts = metadata.dependencies.setdefault(DependencyClass.CONFLICTS, [])
        declared = {existing.effective_name() for existing in conflicts}
        for _, dep in dropped:
            name = dep.effective_name()
            if name in declared:
                continue
            conflict = Dependency(name)
            conflict.set_arch_name(name, 1.0)
            conflicts.append(conflict)
            declared.add(name)

    def _prompt_strategy(
        self,
        jre_deps: list[tuple[DependencyClass, Dependency]],
        jdk_deps: list[tuple[DependencyClass, Dependency]],
        prompt_callback: Optional[PromptCallback],
    ) -> ConflictStrategy:
        if prompt_callback is None:
            self.logger.warning("No interactive prompt available; using prefer-jdk for Java conflicts")
            return ConflictStrategy.PREFER_JDK

        choice = prompt_callback(
            [dep.effective_name() for _, dep in jre_deps],
            [dep.effective_name() for _, dep in jdk_deps],
        )
        if choice is ConflictStrategy.PROMPT:
            return ConflictStrategy.PREFER_JDK
        return choice

    def suggest(self, dep: Dependency) -> Optional[tuple[str, float]]:
        """Rule-based guess for a dependency the pipeline left unmapped."""
        return self.mapper.suggest(dep)

    def stats(self, metadata: PackageMetadata) -> ResolutionStats:
        stats = ResolutionStats()
        total_confidence = 0.0

        for dep_class, dep in metadata.iter_dependencies():
            if dep_class not in RESOLVE_CLASSES:
                continue
            stats.total += 1
            if dep.is_mapped():
                stats.mapped += 1
                total_confidence += dep.confidence
            elif dep.is_virtual:
                stats.virtual += 1
            else:
                stats.unmapped += 1
                stats.unmapped_names.append(dep.debian_name)
            failure = self.remote_failures.get(dep.debian_name)
            if failure is not None and not dep.is_mapped():
                stats.remote_failures.append((dep.debian_name, failure))

        if stats.mapped:
            stats.avg_confidence = total_confidence / stats.mapped
        return stats
