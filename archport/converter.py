#!/usr/bin/env python3
"""Conversion pipeline: .deb -> resolved metadata -> Arch package."""

from __future__ import annotations

import logging
import shutil
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Optional

from .builder import HookGenerator, PackageBuilder, package_filename, render_pkgbuild
from .config import Config
from .hooks import generate_install_script
from .models import PackageMetadata
from .parser import DebParser
from .resolver import RESOLVE_CLASSES, DependencyResolver, PromptCallback, ResolutionStats
from .utils import (
    CommandExecutionError,
    ConversionError,
    LogCallback,
    command_exists,
    format_dependency_list,
    run_command,
    sanitize_package_name,
)

ELF_MAGIC = b"\x7fELF"

ResolverFactory = Callable[[Config], DependencyResolver]


@dataclass
class ConversionOverrides:
    name: Optional[str] = None
    version: Optional[str] = None
    release: Optional[str] = None


@dataclass
class ConversionResult:
    """Result of one conversion: final metadata, produced file and resolution stats."""

    metadata: PackageMetadata
    package_path: Path
    stats: ResolutionStats


@dataclass
class BatchItem:
    input_path: Path
    result: Optional[ConversionResult] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class PackageConverter:
    """Convert Debian packages into Arch packages."""

    def __init__(
        self,
        config: Optional[Config] = None,
        resolver_factory: Optional[ResolverFactory] = None,
        hook_generator: Optional[HookGenerator] = None,
        prompt_callback: Optional[PromptCallback] = None,
        logger: Optional[logging.Logger] = None,
        log_callback: LogCallback = None,
    ) -> None:
        self.config = config or Config()
        self.logger = logger or logging.getLogger("archport.converter")
        self.resolver_factory = resolver_factory or (
            lambda config: DependencyResolver.from_config(config, logger=self.logger.getChild("resolver"))
        )
        self.hook_generator = hook_generator or generate_install_script
        self.prompt_callback = prompt_callback
        self.log_callback = log_callback

    def _log(self, message: str) -> None:
        self.logger.info(message)
        if self.log_callback:
            self.log_callback(message)

    def inspect(self, input_path: Path) -> PackageMetadata:
        """Extract metadata only, without resolving or building."""
        with DebParser(input_path, logger=self.logger, log_callback=self.log_callback) as parser:
            return parser.parse()

    def convert(
        self,
        input_path: Path,
        output_dir: Optional[Path] = None,
        overrides: Optional[ConversionOverrides] = None,
    ) -> ConversionResult:
        output_dir = output_dir or self.config.general.output_dir or Path.cwd()
        overrides = overrides or ConversionOverrides()

        parser = DebParser(input_path, logger=self.logger, log_callback=self.log_callback)
        try:
            metadata = parser.parse()
            self._apply_overrides(metadata, overrides)
            self._log(f"Converting {metadata.name} {metadata.full_version()} ({metadata.arch})")

            resolver = self.resolver_factory(self.config)
            resolver.resolve(metadata, self.config, self.prompt_callback)
            stats = resolver.stats(metadata)
            self._report(resolver, metadata, stats)

            if self.config.conversion.strip_binaries:
                self._strip_binaries(parser.data_dir)

            if self.config.conversion.generate_pkgbuild:
                package_path = self._write_pkgbuild(metadata, parser.data_dir, output_dir)
            else:
                builder = PackageBuilder(
                    metadata,
                    parser.data_dir,
                    hook_generator=self.hook_generator,
                    logger=self.logger.getChild("builder"),
                    log_callback=self.log_callback,
                )
                package_path = builder.build(output_dir, self.config.conversion.default_format)

            return ConversionResult(metadata=metadata, package_path=package_path, stats=stats)
        finally:
            if self.config.conversion.keep_temp and parser.workspace is not None:
                self._log(f"Keeping workspace: {parser.workspace}")
            else:
                parser.cleanup()

    def _apply_overrides(self, metadata: PackageMetadata, overrides: ConversionOverrides) -> None:
        if overrides.name:
            metadata.arch_name = sanitize_package_name(overrides.name)
        if overrides.version:
            metadata.version = overrides.version
        metadata.normalize_version()
        if overrides.release:
            metadata.release = overrides.release

    def _report(self, resolver: DependencyResolver, metadata: PackageMetadata, stats: ResolutionStats) -> None:
        self._log(
            f"Resolved {stats.mapped}/{stats.total} dependencies "
            f"({stats.virtual} virtual, average confidence {stats.avg_confidence:.2f})"
        )
        if stats.retryable:
            self.logger.warning(
                "AUR unreachable for %s; retry later to map them",
                format_dependency_list(stats.retryable_names()),
            )
        if not stats.unmapped_names:
            return

        self._log(f"Unmapped dependencies: {format_dependency_list(stats.unmapped_names)}")
        for dep_class, dep in metadata.iter_dependencies():
            if dep_class not in RESOLVE_CLASSES or dep.is_mapped() or dep.is_virtual:
                continue
            suggestion = resolver.suggest(dep)
            if suggestion is not None:
                self.logger.info("  %s: maybe %s (%.2f)", dep.debian_name, *suggestion)

    def _strip_binaries(self, data_dir: Path) -> None:
        if not command_exists("strip"):
            self.logger.warning("strip not found; leaving binaries untouched")
            return

        for path in sorted(data_dir.rglob("*")):
            if path.is_symlink() or not path.is_file():
                continue
            with path.open("rb") as handle:
                if handle.read(len(ELF_MAGIC)) != ELF_MAGIC:
                    continue
            try:
                run_command(["strip", "--strip-unneeded", str(path)], self.logger)
            except CommandExecutionError as exc:
                self.logger.warning("Failed to strip %s: %s", path, exc)

    def _write_pkgbuild(self, metadata: PackageMetadata, data_dir: Path, output_dir: Path) -> Path:
        """Write a PKGBUILD plus its pkgroot so makepkg can rebuild the package."""
        build_dir = output_dir / metadata.effective_name()
        pkgroot = build_dir / "pkgroot"
        if pkgroot.exists():
            raise ConversionError(f"PKGBUILD directory already populated: {build_dir}")

        shutil.copytree(data_dir, pkgroot, symlinks=True)

        install_file = None
        content = self.hook_generator(metadata)
        if content:
            install_file = f"{metadata.effective_name()}.install"
            (build_dir / install_file).write_text(content, encoding="utf-8")

        pkgbuild_path = build_dir / "PKGBUILD"
        pkgbuild_path.write_text(render_pkgbuild(metadata, install_file), encoding="utf-8")
        target = package_filename(metadata, self.config.conversion.default_format)
        self._log(f"Wrote {pkgbuild_path}; run makepkg there to build {target}")
        return pkgbuild_path


def convert_many(
    inputs: Iterable[Path],
    output_dir: Optional[Path] = None,
    config: Optional[Config] = None,
    jobs: Optional[int] = None,
    resolver_factory: Optional[ResolverFactory] = None,
    logger: Optional[logging.Logger] = None,
) -> list[BatchItem]:
    """Convert several packages concurrently; one failure never stops the rest."""
    config = config or Config()
    logger = logger or logging.getLogger("archport.converter")
    paths = list(inputs)

    def convert_one(path: Path) -> BatchItem:
        converter = PackageConverter(config, resolver_factory=resolver_factory, logger=logger)
        try:
            return BatchItem(path, result=converter.convert(path, output_dir))
        except Exception as exc:
            logger.error("Failed to convert %s: %s", path, exc)
            return BatchItem(path, error=exc)

    max_workers = max(1, min(jobs or config.general.jobs, len(paths) or 1))
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(convert_one, paths))
