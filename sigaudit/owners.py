"""Recognise OWNERS file URLs hosted on GitHub."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

RAW_GITHUB_URL_PATTERN = (
    r"https://raw.githubusercontent.com/(?P<org>[^/]+)/(?P<repo>[^/]+)/(?P<branch>[^/]+)/(?P<path>.*)"
)
GITHUB_URL_PATTERN = (
    r"https://github.com/(?P<org>[^/]+)/(?P<repo>[^/]+)/(blob|tree)/(?P<branch>[^/]+)/(?P<path>.*)"
)

_RAW_GITHUB_URL = re.compile(RAW_GITHUB_URL_PATTERN)
_GITHUB_URL = re.compile(GITHUB_URL_PATTERN)

DEFAULT_PRIMARY_REPOSITORY = "kubernetes/kubernetes"


@dataclass(frozen=True)
class OwnerURL:
    """Components of a GitHub URL pointing at an OWNERS file."""

    url: str
    org: str
    repo: str
    branch: str
    path: str

    @property
    def repository(self) -> str:
        return f"{self.org}/{self.repo}"

    def is_repository(self, repository: str) -> bool:
        return self.repository.lower() == repository.strip("/").lower()


def match_owner_url(url: str) -> Optional[OwnerURL]:
    """Return the parsed URL, or ``None`` when it matches neither accepted shape."""
    for pattern in (_RAW_GITHUB_URL, _GITHUB_URL):
        match = pattern.search(url)
        if match is not None:
            return OwnerURL(
                url=url,
                org=match.group("org"),
                repo=match.group("repo"),
                branch=match.group("branch"),
                path=match.group("path"),
            )
    return None


__all__ = [
    "DEFAULT_PRIMARY_REPOSITORY",
    "GITHUB_URL_PATTERN",
    "OwnerURL",
    "RAW_GITHUB_URL_PATTERN",
    "match_owner_url",
]
