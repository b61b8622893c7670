"""Shared fixtures."""

import pytest

from .helpers import write_deb


@pytest.fixture
def deb_file(tmp_path):
    return write_deb(tmp_path / "foo_1.2.3-1_amd64.deb")


@pytest.fixture
def bad_deb(tmp_path):
    path = tmp_path / "broken.deb"
    path.write_bytes(b"this is not an ar archive")
    return path
