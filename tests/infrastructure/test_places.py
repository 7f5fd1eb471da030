"""Provider directory tests: static samples and Places text search over httpx.MockTransport.

Tests cover:
    - Static directory matches service keywords and stamps the location
    - Places results mapped to name/rating/reviewCount/address and capped
    - ZERO_RESULTS is empty; any other non-OK status raises
"""

import httpx
import pytest

from homecalc.infrastructure.places import PlacesProviderDirectory, StaticProviderDirectory


async def test_static_directory_matches_keyword():
    providers = await StaticProviderDirectory().find("emergency plumber", "Austin, TX")
    assert providers[0]["name"] == "Pipe Masters Plumbing"
    assert all(p["address"].endswith(", Austin, TX") for p in providers)


async def test_static_directory_unknown_service():
    assert await StaticProviderDirectory().find("roofer", "Austin, TX") == []


def _places_client(payload, seen=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(200, json=payload)
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


async def test_places_results_are_mapped():
    seen = []
    payload = {"status": "OK", "results": [
        {"name": f"Pro {i}", "rating": 4.5, "user_ratings_total": 10 + i,
         "formatted_address": f"{i} Elm St, Denver, CO"}
        for i in range(7)
    ]}
    async with _places_client(payload, seen) as http:
        directory = PlacesProviderDirectory("key-123", http_client=http)
        providers = await directory.find("electrician", "Denver, CO")

    assert len(providers) == 5
    assert providers[0] == {
        "name": "Pro 0", "rating": 4.5, "reviewCount": 10,
        "address": "0 Elm St, Denver, CO",
    }
    assert seen[0].url.params["query"] == "electrician in Denver, CO"
    assert seen[0].url.params["key"] == "key-123"


async def test_places_zero_results():
    async with _places_client({"status": "ZERO_RESULTS", "results": []}) as http:
        assert await PlacesProviderDirectory("k", http_client=http).find("x", "y") == []


async def test_places_denied_status_raises():
    async with _places_client({"status": "REQUEST_DENIED"}) as http:
        with pytest.raises(RuntimeError, match="REQUEST_DENIED"):
            await PlacesProviderDirectory("k", http_client=http).find("x", "y")


async def test_places_skips_unnamed_and_unrated_results():
    payload = {"status": "OK", "results": [
        {"rating": 4.9, "user_ratings_total": 3, "formatted_address": "1 Nameless Rd"},
        {"name": "  ", "rating": 4.0, "formatted_address": "2 Blank Ave"},
        {"name": "New Shop", "user_ratings_total": 0, "formatted_address": "3 Fresh St"},
        {"name": "Ace Painting", "rating": 4.4, "vicinity": "4 Brush Ln"},
    ]}
    async with _places_client(payload) as http:
        providers = await PlacesProviderDirectory("k", http_client=http).find("painter", "Reno, NV")
    assert providers == [
        {"name": "Ace Painting", "rating": 4.4, "reviewCount": 0, "address": "4 Brush Ln"},
    ]
