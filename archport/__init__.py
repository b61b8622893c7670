"""Convert Debian packages into Arch Linux packages."""

__version__ = "0.3.0"
