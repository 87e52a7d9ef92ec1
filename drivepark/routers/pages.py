"""Home page and auxiliary shells (host, KYC, favorites, messages, auth)."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse

from drivepark.routers.listings import page_locale
from drivepark.services.page_renderer import render_shell_page

router = APIRouter(prefix="", tags=["pages"])


@router.get("/{locale}", response_class=HTMLResponse)
def home(request: Request, active_locale: str = Depends(page_locale)):
    return render_shell_page(request, active_locale, "home.title", template="home.html")


@router.get("/{locale}/host/listings/new", response_class=HTMLResponse)
def host_new_listing(request: Request, active_locale: str = Depends(page_locale)):
    return render_shell_page(
        request,
        active_locale,
        "pages.hostNewListing",
        body_key="pages.hostNewListingIntro",
        template="host_listing_new.html",
    )


@router.get("/{locale}/profil/kyc", response_class=HTMLResponse)
def kyc(request: Request, active_locale: str = Depends(page_locale)):
    return render_shell_page(request, active_locale, "pages.kyc", body_key="pages.kycIntro", template="kyc.html")


@router.get("/{locale}/favoris", response_class=HTMLResponse)
def favorites(request: Request, active_locale: str = Depends(page_locale)):
    return render_shell_page(request, active_locale, "nav.favorites", body_key="pages.favoritesEmpty")


@router.get("/{locale}/messages", response_class=HTMLResponse)
def messages(request: Request, active_locale: str = Depends(page_locale)):
    return render_shell_page(request, active_locale, "nav.messages", body_key="pages.messagesEmpty")


@router.get("/{locale}/notifications", response_class=HTMLResponse)
def notifications(request: Request, active_locale: str = Depends(page_locale)):
    return render_shell_page(request, active_locale, "nav.notifications", body_key="pages.notificationsEmpty")


@router.get("/{locale}/signup", response_class=HTMLResponse)
def signup(request: Request, active_locale: str = Depends(page_locale)):
    return render_shell_page(request, active_locale, "pages.signup", template="signup.html")


@router.get("/{locale}/login", response_class=HTMLResponse)
def login(request: Request, active_locale: str = Depends(page_locale)):
    return render_shell_page(request, active_locale, "pages.login", template="login.html")


# Silence Chrome devtools probes (avoids noisy 404s in logs)
@router.get("/.well-known/appspecific/com.chrome.devtools.json")
def chrome_devtools_wellknown():
    return PlainTextResponse("", status_code=204)
