#!/usr/bin/env python3
"""Translate Debian maintainer scripts into an Arch ``.INSTALL`` script."""

from __future__ import annotations

import logging
import re
from typing import Optional

from .models import MaintainerScript, PackageMetadata

DEBIAN_ONLY_RE = re.compile(
    r"^\s*(?:"
    r"dpkg-maintscript-helper|deb-systemd-helper|deb-systemd-invoke|"
    r"update-rc\.d|invoke-rc\.d|dpkg-trigger|update-alternatives|"
    r"db_[a-z_]+|\.\s+/usr/share/debconf/confmodule"
    r")\b"
)
SET_E_RE = re.compile(r"^\s*set\s+-e\s*$")

# Arch function -> (maintainer script, Debian "$1" argument) in execution order.
LIFECYCLE = (
    ("pre_install", ((MaintainerScript.PREINST, "install"),)),
    ("post_install", ((MaintainerScript.CONFIG, "configure"), (MaintainerScript.POSTINST, "configure"))),
    ("pre_upgrade", ((MaintainerScript.PRERM, "upgrade"), (MaintainerScript.PREINST, "upgrade"))),
    (
        "post_upgrade",
        (
            (MaintainerScript.POSTRM, "upgrade"),
            (MaintainerScript.CONFIG, "reconfigure"),
            (MaintainerScript.POSTINST, "configure"),
        ),
    ),
    ("pre_remove", ((MaintainerScript.PRERM, "remove"),)),
    ("post_remove", ((MaintainerScript.POSTRM, "purge"),)),
)

# pacman passes the new version first and the old version second on upgrade.
UPGRADE_FUNCTIONS = ("pre_upgrade", "post_upgrade")


def clean_script(body: str) -> str:
    """Drop the shebang and ``set -e``; neutralize Debian-only commands."""
    lines = body.splitlines()
    if lines and lines[0].startswith("#!"):
        lines = lines[1:]

    cleaned = []
    continuing = False
    for line in lines:
        if continuing:
            cleaned.append(f"# {line.strip()}")
            continuing = line.rstrip().endswith("\\")
            continue

        if SET_E_RE.match(line):
            continue

        if DEBIAN_ONLY_RE.match(line):
            indent = line[: len(line) - len(line.lstrip())]
            cleaned.append(f"{indent}: # {line.strip()}")
            continuing = line.rstrip().endswith("\\")
            continue

        cleaned.append(line)

    while cleaned and not cleaned[-1].strip():
        cleaned.pop()
    return "\n".join(cleaned)


def _helper_name(script: MaintainerScript) -> str:
    return f"_debian_{script.debian_name}"


class InstallScriptGenerator:
    """Builds ``.INSTALL`` content from a package's maintainer scripts."""

    def __init__(self, metadata: PackageMetadata, logger: Optional[logging.Logger] = None) -> None:
        self.metadata = metadata
        self.logger = logger or logging.getLogger("archport.hooks")

    def generate(self) -> Optional[str]:
        scripts = {
            script: body for script, body in self.metadata.scripts.items() if body and body.strip()
        }
        if not scripts:
            return None

        parts = [f"# Maintainer scripts translated from {self.metadata.name} {self.metadata.full_version()}"]

        for script in MaintainerScript:
            if script not in scripts:
                continue
            body = clean_script(scripts[script])
            if not any(line.strip() and not line.lstrip().startswith("#") for line in body.splitlines()):
                body = f"{body}\n:".lstrip("\n")
            # Subshell body: an `exit` in the Debian script ends only this helper.
            parts.append(f"{_helper_name(script)}() (\n{body}\n)")

        for function, steps in LIFECYCLE:
            calls = []
            for script, argument in steps:
                if script not in scripts:
                    continue
                if function in UPGRADE_FUNCTIONS:
                    calls.append(f'    {_helper_name(script)} {argument} "$2"')
                else:
                    calls.append(f"    {_helper_name(script)} {argument}")
            if calls:
                parts.append(f"{function}() {{\n" + "\n".join(calls) + "\n}")

        self.logger.debug("Generated .INSTALL from %s", ", ".join(s.debian_name for s in scripts))
        return "\n\n".join(parts) + "\n"


def generate_install_script(metadata: PackageMetadata) -> Optional[str]:
    return InstallScriptGenerator(metadata).generate()
