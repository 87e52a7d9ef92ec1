"""
Locale routing and message catalogs.

Every page lives under a locale prefix (`/en/...`, `/fr/...`). The
LocalePrefixMiddleware makes sure no route ever sees an un-prefixed path:
it either redirects the client to the default-locale path or rewrites the
request in place. Pages then read strings through a Translator bound to the
active locale.
"""
from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable

from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

SUPPORTED_LOCALES: tuple[str, ...] = ("en", "fr")
DEFAULT_LOCALE = "en"
MESSAGES_DIR = Path(__file__).resolve().parents[1] / "messages"
EXEMPT_PREFIXES = ("/static", "/favicon.ico", "/.well-known")


def split_locale(path: str, locales: Iterable[str] = SUPPORTED_LOCALES) -> tuple[str | None, str]:
    """Return (locale, rest) when the first non-empty segment is a supported locale, else (None, path)."""
    segments = [s for s in (path or "/").split("/") if s]
    if segments and segments[0] in set(locales):
        rest = "/" + "/".join(segments[1:])
        return segments[0], rest
    return None, path or "/"


def infer_locale(
    path: str,
    locales: Iterable[str] = SUPPORTED_LOCALES,
    default: str = DEFAULT_LOCALE,
) -> str:
    """Best-effort locale for a path, never redirecting."""
    locale, _ = split_locale(path, locales)
    return locale or default


def localized_path(locale: str, path: str = "/") -> str:
    path = path or "/"
    if not path.startswith("/"):
        path = "/" + path
    if path == "/":
        return f"/{locale}"
    return f"/{locale}{path}"


def _is_exempt(path: str) -> bool:
    return any(path == prefix or path.startswith(prefix + "/") for prefix in EXEMPT_PREFIXES)


class LocalePrefixMiddleware(BaseHTTPMiddleware):
    """Normalize un-prefixed paths to the default locale before routing."""

    def __init__(
        self,
        app,
        *,
        locales: Iterable[str] = SUPPORTED_LOCALES,
        default_locale: str = DEFAULT_LOCALE,
        redirect: bool = True,
    ) -> None:
        super().__init__(app)
        self._locales = tuple(locales)
        self._default = default_locale
        self._redirect = redirect

    async def dispatch(self, request, call_next):
        path = request.scope.get("path") or "/"
        if _is_exempt(path):
            return await call_next(request)
        locale, _ = split_locale(path, self._locales)
        if locale is not None:
            return await call_next(request)
        # Keep the client's encoding (a%2Fb must not become a/b)
        raw = request.scope.get("raw_path") or path.encode("utf-8")
        raw_target = localized_path(self._default, raw.split(b"?", 1)[0].decode("latin-1"))
        if self._redirect:
            query = request.url.query
            return RedirectResponse(f"{raw_target}?{query}" if query else raw_target, status_code=307)
        request.scope["path"] = localized_path(self._default, path)
        request.scope["raw_path"] = raw_target.encode("latin-1")
        return await call_next(request)


@lru_cache
def load_catalog(locale: str) -> dict[str, Any]:
    path = MESSAGES_DIR / f"{locale}.json"
    if not path.exists():
        logger.warning("no message catalog for locale %s", locale)
        return {}
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def _lookup(catalog: dict[str, Any], key: str) -> str | None:
    node: Any = catalog
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node if isinstance(node, str) else None


_reported_misses: set[tuple[str, str]] = set()


def _report_miss(locale: str, key: str) -> None:
    if (locale, key) in _reported_misses:
        return
    _reported_misses.add((locale, key))
    logger.warning("missing translation %s for locale %s", key, locale)


class Translator:
    """String lookup for one locale: `t("nav.favorites")` or `t("listings.count", n=3)`."""

    def __init__(self, locale: str, default_locale: str = DEFAULT_LOCALE) -> None:
        self.locale = locale
        self.default_locale = default_locale

    def get(self, catalog: str, key: str, **params: Any) -> str:
        return self(f"{catalog}.{key}", **params)

    def __call__(self, key: str, **params: Any) -> str:
        text = _lookup(load_catalog(self.locale), key)
        if text is None:
            _report_miss(self.locale, key)
            if self.locale != self.default_locale:
                text = _lookup(load_catalog(self.default_locale), key)
            if text is None:
                return key
        if params:
            try:
                return text.format(**params)
            except (KeyError, IndexError, ValueError):
                logger.warning("bad placeholders in translation %s for locale %s", key, self.locale)
        return text

    def scoped(self, catalog: str):
        """Return a callable bound to one catalog, e.g. `nav = t.scoped("nav"); nav("home")`."""
        return lambda key, **params: self.get(catalog, key, **params)
