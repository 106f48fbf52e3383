"""Opt-in HTTP(S) download of remote theme stylesheets."""

from __future__ import annotations

import os
import ssl
import urllib.error
import urllib.parse
import urllib.request

import certifi

from markpage_core.errors import ThemeIOError
from markpage_core.logging_setup import get_logger


logger = get_logger("themes")

_ALLOWED_SCHEMES = ("http", "https")


def _build_ssl_context() -> ssl.SSLContext:
    """Create TLS context for theme downloads with explicit CA handling."""
    ca_bundle = os.environ.get("MARKPAGE_CA_BUNDLE", "").strip()
    if ca_bundle:
        return ssl.create_default_context(cafile=ca_bundle)
    return ssl.create_default_context(cafile=certifi.where())


def _urlopen(url: str, timeout: int, accept: str = "text/css,*/*;q=0.1"):
    request = urllib.request.Request(
        url,
        headers={
            "User-Agent": "markpage/0.1",
            "Accept": accept,
        },
    )
    return urllib.request.urlopen(request, timeout=timeout, context=_build_ssl_context())


class UrlFetcher:
    """Blocking GET with a bounded timeout and body size."""

    def __init__(self, timeout_s: int = 10, max_bytes: int = 512 * 1024) -> None:
        self.timeout_s = timeout_s
        self.max_bytes = max_bytes

    def fetch(self, url: str) -> str:
        scheme = urllib.parse.urlparse(url).scheme.lower()
        if scheme not in _ALLOWED_SCHEMES:
            raise ThemeIOError(f"unsupported theme URL scheme: {url}")

        logger.info("fetching theme %s", url, extra={"event": "theme_fetch"})
        try:
            with _urlopen(url, timeout=self.timeout_s) as resp:
                data = resp.read(self.max_bytes + 1)
        except urllib.error.HTTPError as exc:
            raise ThemeIOError(f"failed to fetch theme {url}: HTTP {exc.code}") from exc
        except (urllib.error.URLError, OSError) as exc:
            raise ThemeIOError(f"failed to fetch theme {url}: {exc}") from exc

        if len(data) > self.max_bytes:
            raise ThemeIOError(f"theme {url} exceeds {self.max_bytes} bytes")

        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ThemeIOError(f"theme {url} is not valid UTF-8") from exc
