#!/usr/bin/env python3
"""Entry point for archport."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .config import Config, ConflictStrategy
from .converter import ConversionOverrides, PackageConverter, convert_many
from .database import PackageDatabase
from .models import Dependency, DependencyClass, OutputFormat, PackageMetadata
from .resolver import DependencyResolver
from .utils import ArchportError, format_dependency_list, parse_log_level, setup_logging


def _print_metadata(metadata: PackageMetadata) -> None:
    print(f"Package: {metadata.name}")
    print(f"Version: {metadata.version}")
    print(f"Architecture: {metadata.arch.debian_name} ({metadata.arch})")
    print(f"Maintainer: {metadata.maintainer or 'Unknown'}")
    print(f"Description: {metadata.description}")
    if metadata.url:
        print(f"Homepage: {metadata.url}")
    print(f"Installed size: {metadata.installed_size} bytes")
    for dep_class, deps in metadata.dependencies.items():
        if deps:
            print(f"{dep_class.debian_field}: {', '.join(dep.debian_name for dep in deps)}")
    if metadata.scripts:
        print(f"Maintainer scripts: {', '.join(script.debian_name for script in metadata.scripts)}")
    print(f"Files: {len(metadata.files)}")


def _confirm(question: str) -> bool:
    answer = input(f"{question} [y/N]: ").strip().lower()
    return answer in {"y", "yes"}


def _prompt_java_strategy(jre_names: list[str], jdk_names: list[str]) -> ConflictStrategy:
    print("Package depends on both a Java runtime and a Java development kit:")
    print(f"  JRE: {format_dependency_list(jre_names)}")
    print(f"  JDK: {format_dependency_list(jdk_names)}")
    answer = input("Keep which one? [JDK/jre]: ").strip().lower()
    return ConflictStrategy.JRE if answer == "jre" else ConflictStrategy.JDK


def _load_config(args: argparse.Namespace) -> Config:
    config = Config.load(args.config)
    if args.verbose:
        config.logging.level = "debug"
    return config


def _setup_logger(config: Config) -> logging.Logger:
    return setup_logging("archport", parse_log_level(config.logging.level), config.logging.file)


def run_convert(args: argparse.Namespace) -> int:
    """Convert one or more packages."""
    config = _load_config(args)
    logger = _setup_logger(config)

    if args.format:
        config.conversion.default_format = OutputFormat.from_extension(args.format)
    if args.skip_deps:
        config.conversion.skip_deps = True
    if args.offline:
        config.network.offline = True
    if args.pkgbuild:
        config.conversion.generate_pkgbuild = True
    if args.keep_temp:
        config.conversion.keep_temp = True

    output_dir = Path(args.output).expanduser() if args.output else None
    inputs = [Path(item).expanduser() for item in args.inputs]
    interactive = sys.stdin.isatty() and not (args.yes or config.general.auto_yes)

    if len(inputs) > 1:
        items = convert_many(inputs, output_dir, config, jobs=args.jobs, logger=logger)
        for item in items:
            if item.ok:
                print(f"OK   {item.input_path} -> {item.result.package_path}")
            else:
                print(f"FAIL {item.input_path}: {item.error}")
        return 0 if all(item.ok for item in items) else 2

    converter = PackageConverter(
        config,
        prompt_callback=_prompt_java_strategy if interactive else None,
        logger=logger,
    )
    try:
        if interactive:
            _print_metadata(converter.inspect(inputs[0]))
            if not _confirm("Proceed with conversion?"):
                print("Cancelled.")
                return 1

        overrides = ConversionOverrides(name=args.name, version=args.pkgver, release=args.pkgrel)
        result = converter.convert(inputs[0], output_dir, overrides)
    except ArchportError as exc:
        logger.error("Operation failed: %s", exc)
        print(f"Error: {exc}")
        return 2

    print(f"Generated: {result.package_path}")
    print(f"Dependency success rate: {result.stats.success_rate():.0%}")
    if result.stats.unmapped_names:
        print(f"Unmapped dependencies: {format_dependency_list(result.stats.unmapped_names)}")
    if result.stats.retryable:
        print(f"AUR unreachable for: {format_dependency_list(result.stats.retryable_names())} (retry later)")
    return 0


def run_info(args: argparse.Namespace) -> int:
    config = _load_config(args)
    logger = _setup_logger(config)
    try:
        metadata = PackageConverter(config, logger=logger).inspect(Path(args.input))
    except ArchportError as exc:
        print(f"Error: {exc}")
        return 2
    _print_metadata(metadata)
    return 0


def run_resolve(args: argparse.Namespace) -> int:
    """Show how individual Debian names would be translated."""
    config = _load_config(args)
    logger = _setup_logger(config)
    if args.offline:
        config.network.offline = True

    try:
        resolver = DependencyResolver.from_config(config, logger=logger.getChild("resolver"))
    except ArchportError as exc:
        print(f"Error: {exc}")
        return 2

    known_aur = len(resolver.db.aur_packages)
    metadata = PackageMetadata(name="query", version="0")
    deps = [Dependency.parse(name) for name in args.names]
    for dep in deps:
        metadata.add_dep(DependencyClass.DEPENDS, dep)
    resolver.resolve(metadata, config)

    for dep in deps:
        if dep.is_mapped():
            print(f"{dep.debian_name} -> {dep.arch_name} ({dep.confidence:.2f})")
        elif dep.is_virtual:
            providers = resolver.db.providers_of(dep.debian_name)
            print(f"{dep.debian_name} -> virtual, provided by {format_dependency_list(providers)}")
        else:
            suggestion = resolver.suggest(dep)
            hint = f", maybe {suggestion[0]} ({suggestion[1]:.2f})" if suggestion else ""
            print(f"{dep.debian_name} -> unmapped{hint}")

    stats = resolver.stats(metadata)
    if stats.retryable:
        print(f"AUR unreachable for: {format_dependency_list(stats.retryable_names())} (retry later)")
    if len(resolver.db.aur_packages) > known_aur:
        try:
            resolver.db.save()
        except ArchportError as exc:
            logger.warning("Could not update the AUR cache: %s", exc)
    return 0


def run_search(args: argparse.Namespace) -> int:
    """Search the cached Arch and AUR package lists."""
    config = _load_config(args)
    logger = _setup_logger(config)
    # Neither flag means both sources.
    use_arch = args.arch or not args.aur
    use_aur = args.aur or not args.arch

    try:
        db = PackageDatabase(config.db_dir, logger=logger.getChild("database"))
    except ArchportError as exc:
        print(f"Error: {exc}")
        return 2

    results = db.search(args.query, limit=args.limit, arch=use_arch, aur=use_aur)
    if not results:
        print(f"No cached packages match '{args.query}'")
        return 1
    for result in results:
        print(f"{result.source}/{result.name} {result.version} ({result.score:.2f})")
        if result.description:
            print(f"    {result.description}")
    return 0


def run_config(args: argparse.Namespace) -> int:
    try:
        if args.config_action == "init":
            print(f"Wrote {Config.init(args.config, force=args.force)}")
            return 0

        config = Config.load(args.config)
        if args.config_action == "get":
            print(config.get(args.key))
        elif args.config_action == "set":
            config.set(args.key, args.value)
            print(f"Wrote {config.save(args.config)}")
        else:
            for section, values in config.to_dict().items():
                print(f"[{section}]")
                for key, value in values.items():
                    print(f"  {key} = {value}")
    except ArchportError as exc:
        print(f"Error: {exc}")
        return 2
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build command-line parser."""
    parser = argparse.ArgumentParser(
        prog="archport",
        description="Convert Debian packages into Arch Linux packages.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-c", "--config", type=Path, help="Path to config.yaml")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert = subparsers.add_parser("convert", help="Convert .deb files into Arch packages")
    convert.add_argument("inputs", nargs="+", help="Path(s) to .deb packages")
    convert.add_argument("-o", "--output", help="Output directory")
    convert.add_argument("-f", "--format", choices=[fmt.extension for fmt in OutputFormat], help="Package format")
    convert.add_argument("-j", "--jobs", type=int, help="Parallel conversions for multiple inputs")
    convert.add_argument("--name", help="Override the Arch package name")
    convert.add_argument("--pkgver", help="Override the package version")
    convert.add_argument("--pkgrel", help="Override the package release")
    convert.add_argument("--skip-deps", action="store_true", help="Do not translate dependencies")
    convert.add_argument("--offline", action="store_true", help="Do not query the AUR")
    convert.add_argument("--pkgbuild", action="store_true", help="Write a PKGBUILD instead of a package")
    convert.add_argument("--keep-temp", action="store_true", help="Keep the extraction workspace")
    convert.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    convert.set_defaults(handler=run_convert)

    info = subparsers.add_parser("info", help="Show metadata of a .deb file")
    info.add_argument("input", help="Path to a .deb package")
    info.set_defaults(handler=run_info)

    resolve = subparsers.add_parser("resolve", help="Translate Debian package names")
    resolve.add_argument("names", nargs="+", help="Debian package names")
    resolve.add_argument("--offline", action="store_true", help="Do not query the AUR")
    resolve.set_defaults(handler=run_resolve)

    search = subparsers.add_parser("search", help="Search cached Arch and AUR packages")
    search.add_argument("query", help="Substring of a package name or description")
    search.add_argument("--arch", action="store_true", help="Only search the Arch repository cache")
    search.add_argument("--aur", action="store_true", help="Only search the AUR cache")
    search.add_argument("-l", "--limit", type=int, default=20, help="Maximum number of results")
    search.set_defaults(handler=run_search)

    config = subparsers.add_parser("config", help="Show or edit configuration")
    config_actions = config.add_subparsers(dest="config_action")
    config_actions.add_parser("show", help="Print the effective configuration")
    get = config_actions.add_parser("get", help="Print one value")
    get.add_argument("key", help="Dotted key, e.g. network.timeout")
    set_ = config_actions.add_parser("set", help="Change one value")
    set_.add_argument("key", help="Dotted key, e.g. java.conflict_strategy")
    set_.add_argument("value")
    init = config_actions.add_parser("init", help="Write the default configuration")
    init.add_argument("--force", action="store_true", help="Overwrite an existing file")
    config.set_defaults(handler=run_config)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Program entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return args.handler(args)
    except ArchportError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
