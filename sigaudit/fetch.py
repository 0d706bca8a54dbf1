"""Blocking HTTP GET used to verify charter links and fetch OWNERS files."""

from __future__ import annotations

from dataclasses import dataclass
from http.client import HTTPException
from typing import Callable, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from .logging import get_logger

_LOGGER = get_logger("fetch")

USER_AGENT = "sigaudit"


class FetchError(RuntimeError):
    """Raised when a request fails before an HTTP status is received."""


@dataclass
class HttpResponse:
    status: int
    body: bytes = b""

    @property
    def ok(self) -> bool:
        return self.status == 200


Fetcher = Callable[[str], HttpResponse]


def http_get(url: str, *, timeout: Optional[float] = None) -> HttpResponse:
    """GET ``url`` once, with no retries.

    HTTP error statuses are returned as responses. Anything else that stops a
    status from arriving, malformed URLs included, raises :class:`FetchError`.
    Without ``timeout`` the call blocks for as long as the remote end keeps the
    connection open.
    """
    _LOGGER.debug("GET %s", url)
    try:
        request = Request(url, headers={"User-Agent": USER_AGENT}, method="GET")
        if timeout is None:
            response = urlopen(request)  # type: ignore[arg-type]
        else:
            response = urlopen(request, timeout=timeout)  # type: ignore[arg-type]
        with response:
            return HttpResponse(status=response.status, body=response.read())
    except HTTPError as exc:
        _LOGGER.debug("GET %s returned %s", url, exc.code)
        return HttpResponse(status=exc.code)
    except URLError as exc:
        raise FetchError(str(exc.reason)) from exc
    except (OSError, ValueError, HTTPException) as exc:
        raise FetchError(str(exc)) from exc


def build_fetcher(timeout: Optional[float] = None) -> Fetcher:
    """Bind ``timeout`` into a single-argument fetcher for the auditor."""

    def _fetch(url: str) -> HttpResponse:
        return http_get(url, timeout=timeout)

    return _fetch


__all__ = ["FetchError", "Fetcher", "HttpResponse", "build_fetcher", "http_get"]
