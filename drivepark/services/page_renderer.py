"""
Compose fetch, vertical check and templates into complete pages.

Every listing page goes through render_vertical_page: fetch the listing,
check it belongs to the route's vertical, then render the detail or checkout
template. Anything that fails the check raises NotFoundSignal, which the app
turns into the standard not-found page, so no partial page is ever sent.
"""
from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import Request
from fastapi.responses import HTMLResponse

from drivepark.core.i18n import SUPPORTED_LOCALES, Translator, localized_path, split_locale
from drivepark.core.utils import app_service
from drivepark.domain.listings import ListingType, namespace_for
from drivepark.services.listing_fetcher import ListingFetcher
from drivepark.services.vertical_guard import assert_vertical


class PageMode(str, Enum):
    DETAIL = "detail"
    CHECKOUT = "checkout"


_TEMPLATES = {
    PageMode.DETAIL: "listing_detail.html",
    PageMode.CHECKOUT: "checkout.html",
}


def translator_for(request: Request, locale: str) -> Translator:
    settings = app_service(request, "settings")
    return Translator(locale, settings.default_locale)


def listing_url(locale: str, listing: dict, namespace: str | None = None, *, checkout: bool = False) -> str:
    """Public URL of a listing: vertical namespace + slug when known, else /listings/{id}."""
    namespace = namespace or namespace_for(listing.get("type"))
    if namespace and listing.get("slug"):
        path = f"/{namespace}/{listing['slug']}"
    else:
        path = f"/listings/{listing.get('id') or listing.get('slug')}"
    if checkout:
        path += "/checkout"
    return localized_path(locale, path)


def page_context(request: Request, locale: str, **extra: Any) -> dict[str, Any]:
    """Context shared by every page: locale, translator, language switch links and assets."""
    settings = app_service(request, "settings")
    _, rest = split_locale(request.url.path)
    alternates = {code: localized_path(code, rest) for code in SUPPORTED_LOCALES}
    context = {
        "locale": locale,
        "t": translator_for(request, locale),
        "alternates": alternates,
        "home_url": localized_path(locale, "/"),
        "css_href": getattr(request.app.state, "css_href", "/static/site.css"),
        "api_url": settings.api_url,
        "url_for_locale": lambda p: localized_path(locale, p),
    }
    context.update(extra)
    return context


async def load_vertical_listing(
    fetcher: ListingFetcher, key: str, expected: ListingType | None
) -> dict:
    """Fetch a listing and make sure it belongs to `expected` (any vertical when None)."""
    listing = await fetcher.fetch_listing(key)
    return assert_vertical(listing, expected)


async def render_vertical_page(
    request: Request,
    locale: str,
    key: str,
    expected: ListingType | None,
    mode: PageMode,
    *,
    namespace: str | None = None,
) -> HTMLResponse:
    fetcher: ListingFetcher = app_service(request, "listing_fetcher")
    listing = await load_vertical_listing(fetcher, key, expected)
    similar: list[dict] = []
    if mode is PageMode.DETAIL and expected is ListingType.CAR_RENTAL:
        similar = await fetcher.fetch_similar(expected, listing.get("city"), listing.get("id"))
    templates = app_service(request, "templates")
    context = page_context(
        request,
        locale,
        listing=listing,
        vertical=namespace,
        mode=mode.value,
        similar_listings=[(item, listing_url(locale, item)) for item in similar],
        detail_url=listing_url(locale, listing, namespace),
        checkout_url=listing_url(locale, listing, namespace, checkout=True),
    )
    return templates.TemplateResponse(request, _TEMPLATES[mode], context)


def render_grid_page(
    request: Request,
    locale: str,
    listing_type: ListingType,
    title_key: str,
) -> HTMLResponse:
    """Listing grid shell; the grid itself loads from the backend in the browser."""
    templates = app_service(request, "templates")
    context = page_context(
        request,
        locale,
        title_key=title_key,
        listing_type=listing_type.value,
    )
    return templates.TemplateResponse(request, "listings_grid.html", context)


def render_shell_page(
    request: Request,
    locale: str,
    title_key: str,
    *,
    body_key: str | None = None,
    template: str = "shell.html",
) -> HTMLResponse:
    templates = app_service(request, "templates")
    context = page_context(request, locale, title_key=title_key, body_key=body_key)
    return templates.TemplateResponse(request, template, context)
