"""Server-rendered web front-end (locale-prefixed pages)."""
from __future__ import annotations

import hashlib
import logging
import os
import pathlib
import re
import shutil

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import FileResponse, HTMLResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from drivepark.core.config import Settings, get_settings
from drivepark.core.i18n import SUPPORTED_LOCALES, LocalePrefixMiddleware, infer_locale
from drivepark.core.logging_setup import configure_logging
from drivepark.core.middleware import SecurityHeadersMiddleware, apply_security_headers
from drivepark.routers import listings as listings_router
from drivepark.routers import pages as pages_router
from drivepark.services.listing_fetcher import ListingFetcher
from drivepark.services.page_renderer import page_context
from drivepark.services.vertical_guard import NotFoundSignal

logger = logging.getLogger(__name__)

BASE = os.path.dirname(__file__)
WEB = os.path.join(BASE, "static")
TEMPLATES = os.path.join(BASE, "templates")
FINGERPRINTED = re.compile(r"\.[0-9a-f]{8}\.[A-Za-z0-9]+$")


class CachedStaticFiles(StaticFiles):
    def file_response(self, full_path, stat_result, scope, status_code=200):
        response = super().file_response(full_path, stat_result, scope, status_code)
        # Long cache only for content-hashed assets (site.<hash8>.css)
        if FINGERPRINTED.search(os.path.basename(full_path)):
            response.headers["Cache-Control"] = "public, max-age=31536000, immutable"
        return response


def _fingerprint_asset(rel_path: str) -> str:
    """
    Copy an asset under a short content hash: "site.css" -> "site.<hash8>.css".
    Returns the versioned file name (without /static).
    """
    src = pathlib.Path(WEB) / rel_path
    if not src.exists():
        return rel_path.replace("\\", "/")
    data = src.read_bytes()
    h = hashlib.sha1(data).hexdigest()[:8]
    dst = src.with_name(f"{src.stem}.{h}{src.suffix}")
    if not dst.exists():
        shutil.copy2(src, dst)
    return dst.name


def _render_not_found(request: Request) -> HTMLResponse:
    settings: Settings = request.app.state.settings
    locale = infer_locale(request.url.path, SUPPORTED_LOCALES, settings.default_locale)
    templates: Jinja2Templates = request.app.state.templates
    return templates.TemplateResponse(
        request, "not_found.html", page_context(request, locale), status_code=404
    )


async def not_found_signal_handler(request: Request, exc: NotFoundSignal):
    return _render_not_found(request)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return _render_not_found(request)
    return await http_exception_handler(request, exc)


async def error_boundary(request: Request, exc: Exception):
    """Last resort: log and replace the page with a retryable failure page."""
    logger.exception("unhandled error while rendering %s", request.url.path)
    settings: Settings = request.app.state.settings
    locale = infer_locale(request.url.path, SUPPORTED_LOCALES, settings.default_locale)
    templates: Jinja2Templates = request.app.state.templates
    retry_url = request.url.path + (f"?{request.url.query}" if request.url.query else "")
    context = page_context(request, locale, error_message=str(exc) or exc.__class__.__name__, retry_url=retry_url)
    response = templates.TemplateResponse(request, "error.html", context, status_code=500)
    # Runs outside SecurityHeadersMiddleware
    return apply_security_headers(response, enforce_hsts=settings.app_env == "prod", connect_src=settings.api_url)


def create_app(settings: Settings | None = None, *, fetcher: ListingFetcher | None = None) -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (`uvicorn drivepark.app:app --port 3000`)."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="DrivePark Web", docs_url=None, redoc_url=None, openapi_url=None)
    app.mount("/static", CachedStaticFiles(directory=WEB), name="static")

    try:
        css_fp = _fingerprint_asset("site.css")
    except OSError:
        css_fp = "site.css"
    app.state.css_href = f"/static/{css_fp}"
    app.state.templates = Jinja2Templates(directory=TEMPLATES)
    app.state.settings = settings
    app.state.listing_fetcher = fetcher or ListingFetcher(
        settings.api_url,
        revalidate_seconds=settings.listing_revalidate_seconds,
        timeout=settings.fetch_timeout_seconds,
    )

    app.add_middleware(
        LocalePrefixMiddleware,
        locales=SUPPORTED_LOCALES,
        default_locale=settings.default_locale,
        redirect=settings.locale_redirect,
    )
    app.add_middleware(
        SecurityHeadersMiddleware,
        enforce_hsts=settings.app_env == "prod",
        connect_src=settings.api_url,
    )

    app.add_exception_handler(NotFoundSignal, not_found_signal_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, error_boundary)

    @app.get("/favicon.ico")
    def favicon():
        ico_path = os.path.join(WEB, "favicon.ico")
        if os.path.exists(ico_path):
            return FileResponse(ico_path, media_type="image/x-icon")
        return Response(status_code=204)

    app.include_router(pages_router.router)
    app.include_router(listings_router.router)
    return app


app = create_app()
