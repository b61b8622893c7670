"""Builders for small but real .deb archives."""

import io
import shutil
import tarfile
import time
from pathlib import Path

import pytest

CONTROL = """Package: foo
Version: 1.2.3-1
Architecture: amd64
Maintainer: Jane Doe <jane@example.org>
Installed-Size: 12
Section: utils
Priority: optional
Homepage: https://example.org/foo
Depends: libc6 (>= 2.17), zzz-unknown-dep
Source: foo-src
Description: Example tool
 A longer description
 .
 with a blank line.
"""

POSTINST = """#!/bin/sh
set -e
update-rc.d foo defaults
echo configured
"""

requires_ar = pytest.mark.skipif(shutil.which("ar") is None, reason="binutils ar not installed")


def _ar_member(name: str, data: bytes) -> bytes:
    header = (
        f"{name:<16}{int(time.time()):<12}{0:<6}{0:<6}{0o100644:<8o}{len(data):<10}`\n"
    ).encode("ascii")
    padding = b"\n" if len(data) % 2 else b""
    return header + data + padding


def _tar_bytes(mode: str, entries: list) -> bytes:
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode=mode) as tar:
        for name, content, file_mode, linkname in entries:
            info = tarfile.TarInfo(name)
            info.mtime = int(time.time())
            if linkname is not None:
                info.type = tarfile.SYMTYPE
                info.linkname = linkname
                tar.addfile(info)
            elif content is None:
                info.type = tarfile.DIRTYPE
                info.mode = 0o755
                tar.addfile(info)
            else:
                info.size = len(content)
                info.mode = file_mode
                tar.addfile(info, io.BytesIO(content))
    return buffer.getvalue()


def write_deb(path: Path, control: str = CONTROL, postinst: str = POSTINST) -> Path:
    control_entries = [
        ("./control", control.encode("utf-8"), 0o644, None),
        ("./conffiles", b"/etc/foo.conf\n", 0o644, None),
        ("./md5sums", b"d41d8cd98f00b204e9800998ecf8427e  usr/bin/foo\n", 0o644, None),
    ]
    if postinst:
        control_entries.append(("./postinst", postinst.encode("utf-8"), 0o755, None))

    data_entries = [
        ("./usr", None, 0o755, None),
        ("./usr/bin", None, 0o755, None),
        ("./usr/bin/foo", b"#!/bin/sh\necho foo\n", 0o755, None),
        ("./usr/bin/foo-link", None, 0o777, "foo"),
        ("./usr/share/doc/foo/copyright", b"Format: dep5\nLicense: GPL-2+\n", 0o644, None),
        ("./etc/foo.conf", b"key=value\n", 0o644, None),
    ]

    payload = b"!<arch>\n"
    payload += _ar_member("debian-binary", b"2.0\n")
    payload += _ar_member("control.tar.gz", _tar_bytes("w:gz", control_entries))
    payload += _ar_member("data.tar.xz", _tar_bytes("w:xz", data_entries))
    path.write_bytes(payload)
    return path


