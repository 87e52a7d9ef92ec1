"""
Server-rendered listing pages: grids, detail and checkout per vertical.

All detail and checkout routes share render_vertical_page; they differ only
in the vertical they accept (None accepts any listing type).
"""
from __future__ import annotations

from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from drivepark.core.i18n import SUPPORTED_LOCALES, localized_path
from drivepark.domain.listings import VERTICAL_ROUTES, ListingType
from drivepark.services.page_renderer import PageMode, render_grid_page, render_vertical_page
from drivepark.services.vertical_guard import NotFoundSignal

router = APIRouter(prefix="/{locale}", tags=["listings"])


def page_locale(locale: str) -> str:
    """Path locale of the page; unknown locales render the not-found page."""
    if locale not in SUPPORTED_LOCALES:
        raise NotFoundSignal(f"unsupported locale {locale}")
    return locale


GRID_ROUTES: list[tuple[str, ListingType, str]] = [
    ("/listings/location", ListingType.CAR_RENTAL, "listings.location"),
    ("/listings/chauffeur", ListingType.CHAUFFEUR, "listings.chauffeur"),
    ("/listings/experience", ListingType.MOTORIZED_EXPERIENCE, "listings.experience"),
    ("/location", ListingType.CAR_RENTAL, "listings.location"),
    ("/ride", ListingType.CHAUFFEUR, "listings.chauffeur"),
    ("/experience", ListingType.MOTORIZED_EXPERIENCE, "listings.experience"),
]


def _grid_endpoint(listing_type: ListingType, title_key: str):
    def grid_page(request: Request, active_locale: str = Depends(page_locale)):
        return render_grid_page(request, active_locale, listing_type, title_key)

    return grid_page


def _vertical_endpoint(namespace: str, vertical: ListingType, mode: PageMode):
    async def vertical_page(request: Request, slug: str, active_locale: str = Depends(page_locale)):
        return await render_vertical_page(request, active_locale, slug, vertical, mode, namespace=namespace)

    return vertical_page


for _path, _type, _title in GRID_ROUTES:
    router.add_api_route(
        _path,
        _grid_endpoint(_type, _title),
        methods=["GET"],
        response_class=HTMLResponse,
        name=f"grid:{_path.strip('/')}",
    )


@router.get("/listings")
def listings_index(
    active_locale: str = Depends(page_locale),
    city: Optional[str] = None,
    q: Optional[str] = None,
):
    """The listings index opens on the car-rental grid, keeping the city search (or `q`)."""
    target = localized_path(active_locale, "/listings/location")
    search = (city if city is not None else q or "").strip()
    if search:
        target += "?" + urlencode({"city": search})
    return RedirectResponse(target, status_code=307)


@router.get("/listings/{listing_id}", response_class=HTMLResponse)
async def listing_detail(request: Request, listing_id: str, active_locale: str = Depends(page_locale)):
    return await render_vertical_page(request, active_locale, listing_id, None, PageMode.DETAIL)


@router.get("/listings/{listing_id}/checkout", response_class=HTMLResponse)
async def listing_checkout(request: Request, listing_id: str, active_locale: str = Depends(page_locale)):
    return await render_vertical_page(request, active_locale, listing_id, None, PageMode.CHECKOUT)


for _namespace, _vertical in VERTICAL_ROUTES.items():
    router.add_api_route(
        f"/{_namespace}/{{slug}}",
        _vertical_endpoint(_namespace, _vertical, PageMode.DETAIL),
        methods=["GET"],
        response_class=HTMLResponse,
        name=f"{_namespace}:detail",
    )
    router.add_api_route(
        f"/{_namespace}/{{slug}}/checkout",
        _vertical_endpoint(_namespace, _vertical, PageMode.CHECKOUT),
        methods=["GET"],
        response_class=HTMLResponse,
        name=f"{_namespace}:checkout",
    )
