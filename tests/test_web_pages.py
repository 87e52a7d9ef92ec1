"""Server-rendered pages with the backend API mocked through respx."""
from __future__ import annotations

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from drivepark.app import create_app
from drivepark.domain.listings import VERTICAL_ROUTES, ListingType

from conftest import BACKEND_URL, make_listing, make_settings

NOT_FOUND_TEXT = "This page could not be found."


@pytest.fixture()
def backend():
    with respx.mock(base_url=BACKEND_URL, assert_all_called=False) as mock:
        yield mock


@pytest.fixture()
def app():
    return create_app(make_settings(api_url=BACKEND_URL, locale_redirect=True))


@pytest.fixture()
def client(app):
    return TestClient(app)


def _serve(backend, listing: dict) -> None:
    backend.get(f"/listings/{listing['slug']}").respond(200, json=listing)
    backend.get(f"/listings/{listing['id']}").respond(200, json=listing)


@pytest.mark.parametrize("namespace, vertical", list(VERTICAL_ROUTES.items()))
@pytest.mark.parametrize("suffix", ["", "/checkout"])
def test_vertical_route_renders_matching_listing(client, backend, namespace, vertical, suffix):
    listing = make_listing(f"{namespace}-match", vertical.value, title="Matching Listing")
    _serve(backend, listing)
    backend.get("/listings").respond(200, json={"items": [], "total": 0})

    res = client.get(f"/en/{namespace}/{listing['slug']}{suffix}")

    assert res.status_code == 200
    assert "Matching Listing" in res.text
    assert f'data-listing-id="{listing["id"]}"' in res.text
    assert NOT_FOUND_TEXT not in res.text


@pytest.mark.parametrize("namespace, vertical", list(VERTICAL_ROUTES.items()))
@pytest.mark.parametrize("suffix", ["", "/checkout"])
def test_vertical_route_hides_listing_of_other_vertical(client, backend, namespace, vertical, suffix):
    for other in ListingType:
        if other is vertical:
            continue
        listing = make_listing(f"other-{other.value.lower()}", other.value, title="Secret Listing")
        _serve(backend, listing)

        res = client.get(f"/en/{namespace}/{listing['slug']}{suffix}")

        assert res.status_code == 404
        assert NOT_FOUND_TEXT in res.text
        assert "Secret Listing" not in res.text


@pytest.mark.parametrize(
    "path",
    [
        "/en/listings/ghost",
        "/en/listings/ghost/checkout",
        "/en/location/ghost",
        "/en/location/ghost/checkout",
        "/en/ride/ghost",
        "/en/ride/ghost/checkout",
        "/en/experience/ghost",
        "/en/experience/ghost/checkout",
    ],
)
def test_absent_listing_renders_not_found_everywhere(client, backend, path):
    backend.get("/listings/ghost").respond(404, json={"message": "Listing not found"})

    res = client.get(path)

    assert res.status_code == 404
    assert NOT_FOUND_TEXT in res.text


def test_unreachable_backend_renders_not_found(client, backend):
    backend.get("/listings/trip-42").mock(side_effect=httpx.ConnectError("refused"))
    res = client.get("/en/ride/trip-42")
    assert res.status_code == 404


def test_trip_42_scenario(client, backend):
    _serve(backend, make_listing("trip-42", "CHAUFFEUR", title="Trip Forty Two"))

    ride = client.get("/en/ride/trip-42")
    experience = client.get("/en/experience/trip-42")

    assert ride.status_code == 200
    assert "Trip Forty Two" in ride.text
    assert experience.status_code == 404
    assert "Trip Forty Two" not in experience.text


@pytest.mark.parametrize("listing_type", list(ListingType))
def test_agnostic_detail_accepts_any_vertical(client, backend, listing_type):
    listing = make_listing("any-kind", listing_type.value, title="Any Kind")
    _serve(backend, listing)
    backend.get("/listings").respond(200, json={"items": [], "total": 0})

    res = client.get(f"/en/listings/{listing['id']}")

    assert res.status_code == 200
    assert "Any Kind" in res.text


def test_location_detail_lists_similar_listings(client, backend):
    listing = make_listing("citadine-paris-1", "CAR_RENTAL", id="car-1", city="Paris", title="Citadine")
    _serve(backend, listing)
    backend.get("/listings").respond(
        200,
        json={
            "items": [listing, make_listing("clio-paris", "CAR_RENTAL", id="car-2", title="Clio Paris")],
            "total": 2,
        },
    )

    res = client.get("/fr/location/citadine-paris-1")

    assert res.status_code == 200
    assert "Annonces similaires" in res.text
    assert 'href="/fr/location/clio-paris"' in res.text
    assert 'href="/fr/location/citadine-paris-1/checkout"' in res.text


def test_checkout_renders_form_shell(client, backend):
    _serve(backend, make_listing("trip-42", "CHAUFFEUR", title="Trip"))
    res = client.get("/fr/ride/trip-42/checkout")
    assert res.status_code == 200
    assert "checkout-form" in res.text
    assert "Date de début" in res.text
    assert 'href="/fr/ride/trip-42"' in res.text


@pytest.mark.parametrize(
    "path, listing_type",
    [
        ("/en/listings/location", "CAR_RENTAL"),
        ("/en/listings/chauffeur", "CHAUFFEUR"),
        ("/en/listings/experience", "MOTORIZED_EXPERIENCE"),
        ("/en/location", "CAR_RENTAL"),
        ("/en/ride", "CHAUFFEUR"),
        ("/en/experience", "MOTORIZED_EXPERIENCE"),
    ],
)
def test_grid_pages_do_not_fetch(client, backend, path, listing_type):
    res = client.get(path)
    assert res.status_code == 200
    assert f'data-listing-type="{listing_type}"' in res.text
    assert f'data-api-url="{BACKEND_URL}"' in res.text
    assert not backend.calls


def test_grid_headings_follow_locale(client):
    assert "<h1 data-testid=\"listings-title\">Expériences</h1>" in client.get("/fr/listings/experience").text
    assert "<h1 data-testid=\"listings-title\">Car rental</h1>" in client.get("/en/location").text


def test_unprefixed_path_matches_default_locale_page(client):
    redirected = client.get("/ride", follow_redirects=False)
    assert redirected.status_code == 307
    assert redirected.headers["location"] == "/en/ride"

    assert client.get("/ride").text == client.get("/en/ride").text


def test_rewrite_mode_serves_default_locale_without_redirect(backend):
    client = TestClient(create_app(make_settings(api_url=BACKEND_URL, locale_redirect=False)))
    res = client.get("/ride", follow_redirects=False)
    assert res.status_code == 200
    assert res.text == client.get("/en/ride").text


def test_home_pages(client):
    assert "Mobility Platform" in client.get("/en").text
    assert "Plateforme de mobilité" in client.get("/fr").text
    root = client.get("/", follow_redirects=False)
    assert root.headers["location"] == "/en"


@pytest.mark.parametrize(
    "path, text",
    [
        ("/en/host/listings/new", "New listing"),
        ("/fr/profil/kyc", "Téléversez une pièce"),
        ("/fr/favoris", "Favoris"),
        ("/en/messages", "Your conversations will appear here."),
        ("/fr/notifications", "Vos notifications apparaîtront ici."),
        ("/en/signup", "Create an account"),
        ("/en/login", 'data-testid="login-title"'),
    ],
)
def test_auxiliary_pages(client, path, text):
    res = client.get(path)
    assert res.status_code == 200
    assert text in res.text


def test_unknown_route_and_unsupported_locale_render_not_found(client):
    unknown = client.get("/fr/nowhere/at/all")
    assert unknown.status_code == 404
    assert "Cette page est introuvable." in unknown.text

    # /de/listings is normalized to /en/de/listings, which does not exist
    german = client.get("/de/listings")
    assert german.status_code == 404
    assert NOT_FOUND_TEXT in german.text


def test_error_boundary_replaces_the_page(app, monkeypatch):
    async def explode(key):
        raise RuntimeError("backend exploded")

    monkeypatch.setattr(app.state.listing_fetcher, "fetch_listing", explode)
    client = TestClient(app, raise_server_exceptions=False)

    res = client.get("/en/ride/trip-42")

    assert res.status_code == 500
    assert "Something went wrong" in res.text
    assert "backend exploded" in res.text
    assert 'class="button" href="/en/ride/trip-42"' in res.text
    assert res.headers["x-frame-options"] == "DENY"
    assert BACKEND_URL in res.headers["content-security-policy"]
    assert "listing-detail" not in res.text


def test_pages_carry_security_headers_and_alternates(client):
    res = client.get("/en/listings/location")
    assert res.headers["x-content-type-options"] == "nosniff"
    assert BACKEND_URL in res.headers["content-security-policy"]
    assert 'hreflang="fr" href="/fr/listings/location"' in res.text


@pytest.mark.parametrize(
    "query, location",
    [
        ("", "/fr/listings/location"),
        ("?city=Lyon", "/fr/listings/location?city=Lyon"),
        ("?q=Nice", "/fr/listings/location?city=Nice"),
        ("?city=Lyon&q=Nice", "/fr/listings/location?city=Lyon"),
        ("?city=%20", "/fr/listings/location"),
    ],
)
def test_listings_index_opens_car_rental_grid(client, backend, query, location):
    res = client.get(f"/fr/listings{query}", follow_redirects=False)
    assert res.status_code == 307
    assert res.headers["location"] == location
    assert not backend.calls


@pytest.mark.parametrize("key", ["%2E", "%2E%2E"])
@pytest.mark.parametrize("suffix", ["", "/checkout"])
def test_dot_segment_keys_render_not_found(client, backend, key, suffix):
    backend.get("/listings").respond(200, json={"items": [], "total": 0})
    backend.get("/").respond(200, json={"status": "ok"})

    res = client.get(f"/en/listings/{key}{suffix}")

    assert res.status_code == 404
    assert NOT_FOUND_TEXT in res.text
    assert "listing-detail" not in res.text


def test_non_listing_body_renders_not_found(client, backend):
    backend.get("/listings/weird").respond(200, json={"items": [], "total": 0})
    res = client.get("/en/listings/weird")
    assert res.status_code == 404
    assert NOT_FOUND_TEXT in res.text


def test_error_page_ignores_host_header(app, monkeypatch):
    async def explode(key):
        raise RuntimeError("boom")

    monkeypatch.setattr(app.state.listing_fetcher, "fetch_listing", explode)
    client = TestClient(app, raise_server_exceptions=False)

    res = client.get("/en/ride/t?x=1", headers={"host": "evil.example"})

    assert res.status_code == 500
    assert "evil.example" not in res.text
    assert 'class="button" href="/en/ride/t?x=1"' in res.text


def test_only_fingerprinted_assets_are_cached_long(app, client):
    css = client.get(app.state.css_href)
    assert css.status_code == 200
    assert css.headers["cache-control"] == "public, max-age=31536000, immutable"

    script = client.get("/static/grid.js")
    assert script.status_code == 200
    assert "immutable" not in script.headers.get("cache-control", "")
