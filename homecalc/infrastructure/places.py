"""Local Service Provider Directories: backends for the provider lookup tool.

Invariants:
    - find(service, location) returns plain dicts shaped like ServiceProvider
      (name, rating, reviewCount, address); the dispatcher validates them
    - Directories raise on transport failure; they never return partial junk

Design Decisions:
    - StaticProviderDirectory serves a fixed sample for offline/dev use and tests
    - PlacesProviderDirectory calls the Google Places text-search endpoint over
      httpx; selected when GOOGLE_PLACES_API_KEY is configured
"""

from typing import Protocol

import httpx


class ProviderDirectory(Protocol):
    async def find(self, service: str, location: str) -> list[dict]: ...


_SAMPLE_PROVIDERS: dict[str, list[dict]] = {
    "plumber": [
        {"name": "Pipe Masters Plumbing", "rating": 4.8, "reviewCount": 152,
         "address": "123 Main St"},
        {"name": "Reliable Rooter", "rating": 4.6, "reviewCount": 210,
         "address": "456 Oak Ave"},
        {"name": "The Tidy Toilet", "rating": 4.9, "reviewCount": 88,
         "address": "789 Pine Ln"},
    ],
    "painter": [
        {"name": "Precision Painting Co.", "rating": 4.9, "reviewCount": 301,
         "address": "321 Canvas Rd"},
        {"name": "Fresh Coat Painters", "rating": 4.7, "reviewCount": 189,
         "address": "654 Brush Blvd"},
    ],
    "electrician": [
        {"name": "Sparky & Sons Electric", "rating": 4.8, "reviewCount": 450,
         "address": "111 Volt Ct"},
        {"name": "Watt's Up Electricians", "rating": 4.5, "reviewCount": 123,
         "address": "222 Amp Way"},
    ],
}


class StaticProviderDirectory:
    """Fixed sample directory keyed by service keyword."""

    async def find(self, service: str, location: str) -> list[dict]:
        needle = service.lower()
        for keyword, providers in _SAMPLE_PROVIDERS.items():
            if keyword in needle:
                return [
                    {**p, "address": f"{p['address']}, {location}"}
                    for p in providers
                ]
        return []


class PlacesProviderDirectory:
    """Google Places text search ("<service> in <location>")."""

    SEARCH_URL = "https://maps.googleapis.com/maps/api/place/textsearch/json"

    def __init__(
        self, api_key: str, timeout_seconds: float = 10.0,
        max_results: int = 5, http_client: httpx.AsyncClient | None = None,
    ):
        self._api_key = api_key
        self._timeout = timeout_seconds
        self._max_results = max_results
        self._http = http_client

    async def find(self, service: str, location: str) -> list[dict]:
        params = {"query": f"{service} in {location}", "key": self._api_key}
        if self._http is not None:
            response = await self._http.get(self.SEARCH_URL, params=params)
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(self.SEARCH_URL, params=params)
        response.raise_for_status()
        payload = response.json()

        status = payload.get("status")
        if status not in ("OK", "ZERO_RESULTS"):
            raise RuntimeError(f"Places API status {status}")
        # unnamed or unrated places are not reported as providers
        rated = [
            r for r in payload.get("results", [])
            if (r.get("name") or "").strip() and r.get("rating") is not None
        ]
        return [
            {
                "name": r["name"].strip(),
                "rating": r["rating"],
                "reviewCount": r.get("user_ratings_total", 0),
                "address": r.get("formatted_address") or r.get("vicinity", ""),
            }
            for r in rated[: self._max_results]
        ]
