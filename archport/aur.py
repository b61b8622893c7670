#!/usr/bin/env python3
"""Client for the AUR RPC interface (v5)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional
from urllib.parse import quote

import requests

from . import __version__
from .utils import AurApiError, NetworkError

AUR_RPC_URL = "https://aur.archlinux.org/rpc/v5"
DEFAULT_TIMEOUT = 30


@dataclass
class AurPackage:
    name: str
    version: str
    package_base: str = ""
    description: Optional[str] = None
    url: Optional[str] = None
    num_votes: int = 0
    popularity: float = 0.0
    out_of_date: Optional[int] = None
    maintainer: Optional[str] = None
    first_submitted: int = 0
    last_modified: int = 0
    provides: list[str] = field(default_factory=list)
    replaces: list[str] = field(default_factory=list)
    conflicts: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "AurPackage":
        return cls(
            name=data["Name"],
            version=data["Version"],
            package_base=data.get("PackageBase") or data["Name"],
            description=data.get("Description"),
            url=data.get("URL"),
            num_votes=int(data.get("NumVotes") or 0),
            popularity=float(data.get("Popularity") or 0.0),
            out_of_date=data.get("OutOfDate"),
            maintainer=data.get("Maintainer"),
            first_submitted=int(data.get("FirstSubmitted") or 0),
            last_modified=int(data.get("LastModified") or 0),
            provides=list(data.get("Provides") or []),
            replaces=list(data.get("Replaces") or []),
            conflicts=list(data.get("Conflicts") or []),
        )


class AurClient:
    """Thin wrapper over the AUR RPC search and info endpoints."""

    def __init__(
        self,
        base_url: str = AUR_RPC_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
        proxy: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.logger = logger or logging.getLogger("archport.aur")
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": f"archport/{__version__}"})
        if proxy:
            self.session.proxies.update({"http": proxy, "https": proxy})

    def _request(self, url: str, params: Optional[list[tuple[str, str]]] = None) -> list[AurPackage]:
        self.logger.debug("AUR request: %s %s", url, params or "")
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.Timeout as exc:
            raise NetworkError(f"AUR request timed out after {self.timeout} seconds") from exc
        except requests.RequestException as exc:
            raise NetworkError(f"AUR connection error: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise NetworkError(f"AUR API error: HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise NetworkError(f"Invalid AUR response: {exc}") from exc

        if not isinstance(payload, dict):
            raise NetworkError("Invalid AUR response: expected a JSON object")
        if payload.get("error"):
            raise AurApiError(str(payload["error"]))

        try:
            return [AurPackage.from_json(entry) for entry in payload.get("results") or []]
        except (KeyError, TypeError, ValueError) as exc:
            raise NetworkError(f"Invalid AUR package entry: {exc}") from exc

    def search(self, query: str) -> list[AurPackage]:
        return self._request(f"{self.base_url}/search/{quote(query, safe='')}")

    def info(self, names: Iterable[str]) -> list[AurPackage]:
        """Exact lookup of several packages in one request."""
        params = [("arg[]", name) for name in names]
        if not params:
            return []
        return self._request(f"{self.base_url}/info", params=params)

    def find_providers(self, capability: str) -> list[AurPackage]:
        """Search results that are or provide ``capability``, most popular first."""
        providers = [
            package
            for package in self.search(capability)
            if package.name == capability or capability in package.provides
        ]
        providers.sort(key=lambda package: package.popularity, reverse=True)
        return providers
