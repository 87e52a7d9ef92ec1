from __future__ import annotations

import httpx
import pytest
import respx

from drivepark.domain.listings import ListingType
from drivepark.services.listing_fetcher import ListingFetcher

from conftest import BACKEND_URL, make_listing


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def fetcher(clock):
    return ListingFetcher(BACKEND_URL, revalidate_seconds=60, clock=clock)


@pytest.mark.asyncio
async def test_fetch_listing_returns_decoded_body(fetcher):
    payload = make_listing("trip-42", "CHAUFFEUR")
    with respx.mock(base_url=BACKEND_URL) as backend:
        backend.get("/listings/trip-42").respond(200, json=payload)
        assert await fetcher.fetch_listing("trip-42") == payload


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [404, 500, 503])
async def test_non_success_status_means_absent(fetcher, status):
    with respx.mock(base_url=BACKEND_URL) as backend:
        backend.get("/listings/trip-42").respond(status, json={"message": "nope"})
        assert await fetcher.fetch_listing("trip-42") is None


@pytest.mark.asyncio
async def test_transport_error_and_bad_body_mean_absent(fetcher):
    with respx.mock(base_url=BACKEND_URL) as backend:
        backend.get("/listings/down").mock(side_effect=httpx.ConnectError("refused"))
        backend.get("/listings/garbled").respond(200, content=b"<html>oops</html>")
        backend.get("/listings/array").respond(200, json=[1, 2])
        assert await fetcher.fetch_listing("down") is None
        assert await fetcher.fetch_listing("garbled") is None
        assert await fetcher.fetch_listing("array") is None
        assert await fetcher.fetch_listing("") is None


@pytest.mark.asyncio
async def test_key_is_percent_encoded(fetcher):
    with respx.mock() as backend:
        route = backend.get(url__startswith=f"{BACKEND_URL}/listings/").respond(
            200, json=make_listing("a", "CAR_RENTAL")
        )
        assert await fetcher.fetch_listing("a/b") is not None
        assert route.calls.last.request.url.raw_path == b"/listings/a%2Fb"


@pytest.mark.asyncio
async def test_success_is_reused_inside_revalidate_window(fetcher, clock):
    with respx.mock(base_url=BACKEND_URL) as backend:
        route = backend.get("/listings/trip-42")
        route.side_effect = [
            httpx.Response(200, json=make_listing("trip-42", "CHAUFFEUR", title="v1")),
            httpx.Response(200, json=make_listing("trip-42", "CHAUFFEUR", title="v2")),
        ]

        first = await fetcher.fetch_listing("trip-42")
        clock.now += 59
        second = await fetcher.fetch_listing("trip-42")
        assert first["title"] == second["title"] == "v1"
        assert route.call_count == 1

        clock.now += 1
        third = await fetcher.fetch_listing("trip-42")
        assert third["title"] == "v2"
        assert route.call_count == 2


@pytest.mark.asyncio
async def test_absence_is_not_remembered(fetcher):
    with respx.mock(base_url=BACKEND_URL) as backend:
        route = backend.get("/listings/soon")
        route.side_effect = [
            httpx.Response(404),
            httpx.Response(200, json=make_listing("soon", "CAR_RENTAL")),
        ]
        assert await fetcher.fetch_listing("soon") is None
        assert await fetcher.fetch_listing("soon") is not None


@pytest.mark.asyncio
async def test_fetch_similar_filters_out_current_listing(fetcher):
    items = [make_listing("a", "CAR_RENTAL", id="1"), make_listing("b", "CAR_RENTAL", id="2")]
    with respx.mock(base_url=BACKEND_URL) as backend:
        route = backend.get("/listings", params={"type": "CAR_RENTAL", "city": "Paris", "limit": "4"}).respond(
            200, json={"items": items, "total": 2}
        )
        similar = await fetcher.fetch_similar(ListingType.CAR_RENTAL, "Paris", "1")
        assert [s["slug"] for s in similar] == ["b"]
        assert route.called


@pytest.mark.asyncio
async def test_fetch_similar_is_empty_without_city_or_on_failure(fetcher):
    with respx.mock(base_url=BACKEND_URL) as backend:
        backend.get("/listings").respond(500)
        assert await fetcher.fetch_similar(ListingType.CAR_RENTAL, None, "1") == []
        assert await fetcher.fetch_similar(ListingType.CAR_RENTAL, "Paris", "1") == []


@pytest.mark.asyncio
@pytest.mark.parametrize("key", [".", ".."])
async def test_dot_segment_keys_never_leave_the_listing_path(fetcher, key):
    with respx.mock(base_url=BACKEND_URL, assert_all_called=False) as backend:
        backend.get("/listings").respond(200, json={"items": [], "total": 0})
        backend.get("/").respond(200, json={"status": "ok"})
        assert await fetcher.fetch_listing(key) is None
        assert not backend.calls


@pytest.mark.asyncio
async def test_body_without_listing_shape_means_absent(fetcher):
    with respx.mock(base_url=BACKEND_URL) as backend:
        backend.get("/listings/search-like").respond(200, json={"items": [], "total": 0})
        backend.get("/listings/untyped").respond(200, json={"id": "1", "slug": "untyped"})
        backend.get("/listings/anonymous").respond(200, json={"type": "CHAUFFEUR"})
        assert await fetcher.fetch_listing("search-like") is None
        assert await fetcher.fetch_listing("untyped") is None
        assert await fetcher.fetch_listing("anonymous") is None


@pytest.mark.asyncio
async def test_stale_entry_is_dropped(fetcher, clock):
    with respx.mock(base_url=BACKEND_URL) as backend:
        route = backend.get("/listings/trip-42")
        route.side_effect = [
            httpx.Response(200, json=make_listing("trip-42", "CHAUFFEUR")),
            httpx.Response(404),
        ]
        assert await fetcher.fetch_listing("trip-42") is not None
        assert len(fetcher._fresh) == 1

        clock.now += 60
        assert await fetcher.fetch_listing("trip-42") is None
        assert fetcher._fresh == {}
