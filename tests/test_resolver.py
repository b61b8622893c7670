"""Tests for the dependency resolution pipeline."""

import logging
from unittest.mock import MagicMock

import pytest

from archport.aur import AurPackage
from archport.config import Config, ConflictStrategy
from archport.database import PackageDatabase
from archport.fuzzy import FuzzyMatcher
from archport.models import Dependency, DependencyClass, PackageMetadata
from archport.resolver import DependencyResolver
from archport.utils import AurApiError, NetworkError


@pytest.fixture
def aur():
    client = MagicMock()
    client.info.return_value = []
    client.find_providers.return_value = []
    return client


@pytest.fixture
def resolver(tmp_path, aur):
    return DependencyResolver(db=PackageDatabase(tmp_path), fuzzy=FuzzyMatcher(), aur=aur)


def _metadata(*names, dep_class=DependencyClass.DEPENDS):
    metadata = PackageMetadata(name="pkg", version="1.0")
    for name in names:
        metadata.add_dep(dep_class, Dependency.parse(name))
    return metadata


def _names(metadata, dep_class):
    return [dep.effective_name() for dep in metadata.get_deps(dep_class)]


class TestResolutionStages:
    """Each stage of the pipeline in order."""

    def test_database_stage(self, resolver, aur):
        metadata = _metadata("libc6 (>= 2.17)")
        resolver.resolve(metadata)
        dep = metadata.get_deps(DependencyClass.DEPENDS)[0]
        assert (dep.arch_name, dep.confidence) == ("glibc", 1.0)
        aur.info.assert_not_called()

    def test_fuzzy_stage(self, resolver, aur):
        metadata = _metadata("python3-zzzmodule")
        resolver.resolve(metadata)
        dep = metadata.get_deps(DependencyClass.DEPENDS)[0]
        assert (dep.arch_name, dep.confidence) == ("python-zzzmodule", 0.8)
        aur.info.assert_not_called()

    def test_aur_info_stage(self, resolver, aur):
        aur.info.return_value = [AurPackage(name="zzz-tool", version="1.0")]
        metadata = _metadata("zzz-tool")
        resolver.resolve(metadata)
        dep = metadata.get_deps(DependencyClass.DEPENDS)[0]
        assert (dep.arch_name, dep.confidence) == ("zzz-tool", 1.0)
        aur.info.assert_called_once_with(["zzz-tool"])
        aur.find_providers.assert_not_called()
        assert resolver.db.aur_packages["zzz-tool"].version == "1.0"

    def test_aur_provider_stage(self, resolver, aur):
        aur.find_providers.return_value = [AurPackage(name="zzz-impl", version="1.0", provides=["zzz-cap"])]
        metadata = _metadata("zzz-cap")
        resolver.resolve(metadata)
        dep = metadata.get_deps(DependencyClass.DEPENDS)[0]
        assert (dep.arch_name, dep.confidence) == ("zzz-impl", 0.8)

    def test_virtual_stage(self, resolver):
        metadata = _metadata("c-compiler")
        resolver.resolve(metadata)
        dep = metadata.get_deps(DependencyClass.DEPENDS)[0]
        assert dep.is_virtual
        assert not dep.is_mapped()

    def test_alternatives_are_resolved(self, resolver):
        metadata = _metadata("libc6 | libssl3")
        resolver.resolve(metadata)
        dep = metadata.get_deps(DependencyClass.DEPENDS)[0]
        assert dep.alternatives[0].arch_name == "openssl"

    def test_already_mapped_is_untouched(self, resolver):
        metadata = PackageMetadata(name="pkg", version="1.0")
        dep = Dependency("libc6")
        dep.set_arch_name("my-glibc", 0.5)
        metadata.add_dep(DependencyClass.DEPENDS, dep)
        resolver.resolve(metadata)
        assert dep.arch_name == "my-glibc"


class TestResolutionOptions:
    """Offline mode, skipping and remote failures."""

    def test_offline_never_queries_aur(self, resolver, aur):
        config = Config()
        config.network.offline = True
        metadata = _metadata("zzz-unknown")
        resolver.resolve(metadata, config)
        assert not metadata.get_deps(DependencyClass.DEPENDS)[0].is_mapped()
        aur.info.assert_not_called()
        aur.find_providers.assert_not_called()

    def test_skip_deps(self, resolver):
        config = Config()
        config.conversion.skip_deps = True
        metadata = _metadata("libc6")
        resolver.resolve(metadata, config)
        assert not metadata.get_deps(DependencyClass.DEPENDS)[0].is_mapped()

    def test_remote_errors_stay_per_dependency(self, resolver, aur, caplog):
        aur.info.side_effect = NetworkError("down")
        aur.find_providers.side_effect = AurApiError("rate limited")
        metadata = _metadata("zzz-unknown", "libc6")

        with caplog.at_level(logging.WARNING, logger="archport.resolver"):
            resolver.resolve(metadata)

        assert _names(metadata, DependencyClass.DEPENDS) == ["zzz-unknown", "glibc"]
        assert "AUR info lookup failed for zzz-unknown" in caplog.text

    def test_remote_failures_reported_as_retryable(self, resolver, aur):
        aur.info.side_effect = NetworkError("down")
        metadata = _metadata("zzz-unknown", "libc6")
        resolver.resolve(metadata)

        stats = resolver.stats(metadata)

        assert stats.retryable
        assert stats.retryable_names() == ["zzz-unknown"]
        assert [name for name, _ in stats.remote_failures] == ["zzz-unknown"]
        assert isinstance(stats.remote_failures[0][1], NetworkError)

    def test_failures_reset_between_runs(self, resolver, aur):
        aur.info.side_effect = NetworkError("down")
        resolver.resolve(_metadata("zzz-unknown"))
        aur.info.side_effect = None

        metadata = _metadata("zzz-unknown")
        resolver.resolve(metadata)

        assert not resolver.stats(metadata).retryable

    def test_build_depends_left_unresolved(self, resolver, aur):
        metadata = _metadata("libc6", dep_class=DependencyClass.BUILD_DEPENDS)
        metadata.add_dep(DependencyClass.DEPENDS, Dependency.parse("libssl3"))
        resolver.resolve(metadata)

        assert not metadata.get_deps(DependencyClass.BUILD_DEPENDS)[0].is_mapped()
        assert _names(metadata, DependencyClass.DEPENDS) == ["openssl"]
        assert resolver.stats(metadata).total == 1


class TestJavaConflicts:
    """Packages pulling in both a JRE and a JDK."""

    def _java_metadata(self, resolver, strategy, prompt_callback=None):
        config = Config()
        config.network.offline = True
        config.java.conflict_strategy = strategy
        metadata = _metadata("openjdk-17-jre", "openjdk-17-jdk")
        resolver.resolve(metadata, config, prompt_callback)
        return metadata, config

    def test_prefer_jdk_is_default(self, resolver):
        metadata, _ = self._java_metadata(resolver, ConflictStrategy.PREFER_JDK)
        assert _names(metadata, DependencyClass.DEPENDS) == ["jdk17-openjdk"]
        assert _names(metadata, DependencyClass.CONFLICTS) == ["jre17-openjdk"]
        assert "conflict = jre17-openjdk\n" in metadata.to_pkginfo(builddate=0)

    def test_conflict_handling_is_idempotent(self, resolver):
        metadata, config = self._java_metadata(resolver, ConflictStrategy.PREFER_JDK)
        resolver.handle_java_conflicts(metadata, config.java)
        resolver.resolve(metadata, config)
        assert _names(metadata, DependencyClass.DEPENDS) == ["jdk17-openjdk"]
        assert _names(metadata, DependencyClass.CONFLICTS) == ["jre17-openjdk"]

    def test_jre_strategy_drops_jdk(self, resolver):
        metadata, _ = self._java_metadata(resolver, ConflictStrategy.JRE)
        assert _names(metadata, DependencyClass.DEPENDS) == ["jre17-openjdk"]
        assert _names(metadata, DependencyClass.CONFLICTS) == ["jdk17-openjdk"]

    def test_prompt_uses_callback(self, resolver):
        callback = MagicMock(return_value=ConflictStrategy.JRE)
        metadata, _ = self._java_metadata(resolver, ConflictStrategy.PROMPT, callback)
        callback.assert_called_once_with(["jre17-openjdk"], ["jdk17-openjdk"])
        assert _names(metadata, DependencyClass.DEPENDS) == ["jre17-openjdk"]

    def test_prompt_without_callback_prefers_jdk(self, resolver):
        metadata, _ = self._java_metadata(resolver, ConflictStrategy.PROMPT)
        assert _names(metadata, DependencyClass.DEPENDS) == ["jdk17-openjdk"]

    def test_disabled(self, resolver):
        config = Config()
        config.network.offline = True
        config.java.add_java_conflicts = False
        metadata = _metadata("openjdk-17-jre", "openjdk-17-jdk")
        resolver.resolve(metadata, config)
        assert len(metadata.get_deps(DependencyClass.DEPENDS)) == 2
        assert metadata.get_deps(DependencyClass.CONFLICTS) == []

    def test_single_family_untouched(self, resolver):
        config = Config()
        config.network.offline = True
        metadata = _metadata("openjdk-17-jre")
        resolver.resolve(metadata, config)
        assert _names(metadata, DependencyClass.DEPENDS) == ["jre17-openjdk"]
        assert metadata.get_deps(DependencyClass.CONFLICTS) == []


class TestStats:
    """Resolution statistics."""

    def test_no_dependencies(self, resolver):
        stats = resolver.stats(PackageMetadata(name="pkg", version="1"))
        assert stats.total == 0
        assert stats.success_rate() == 1.0

    def test_mixed(self, resolver):
        config = Config()
        config.network.offline = True
        metadata = _metadata("libc6", "c-compiler", "zzz-unknown")
        resolver.resolve(metadata, config)

        stats = resolver.stats(metadata)

        assert (stats.total, stats.mapped, stats.virtual, stats.unmapped) == (3, 1, 1, 1)
        assert stats.unmapped_names == ["zzz-unknown"]
        assert stats.avg_confidence == 1.0
        assert stats.success_rate() == pytest.approx(2 / 3)

    def test_suggest_uses_rules(self, resolver):
        assert resolver.suggest(Dependency("fonts-zzz")) == ("ttf-zzz", 0.7)
