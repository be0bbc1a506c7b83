from __future__ import annotations

from typing import Any

import pytest
import requests


class FakeResponse:
    def __init__(self, payload: Any = None, status_code: int = 200) -> None:
        self.payload = payload
        self.status_code = status_code
        self.text = str(payload)

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)  # type: ignore[arg-type]

    def json(self) -> Any:
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeSession:
    """Routes requests by URL suffix to queued responses and records every call."""

    def __init__(self) -> None:
        self.routes: dict[str, list[Any]] = {}
        self.calls: list[dict[str, Any]] = []

    def add(self, suffix: str, response: Any) -> None:
        self.routes.setdefault(suffix, []).append(response)

    def calls_to(self, suffix: str) -> list[dict[str, Any]]:
        return [c for c in self.calls if c["url"].endswith(suffix)]

    def _dispatch(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        for suffix, queue in self.routes.items():
            if url.endswith(suffix) and queue:
                response = queue.pop(0) if len(queue) > 1 else queue[0]
                if isinstance(response, Exception):
                    raise response
                return response
        raise AssertionError(f"unexpected request {method} {url}")

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._dispatch("POST", url, **kwargs)

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._dispatch("GET", url, **kwargs)


class FakeClock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def token_response(value: str = "tok-1", expires_in: int = 1800) -> FakeResponse:
    return FakeResponse({"access_token": value, "expires_in": expires_in, "token_type": "bearer"})


def location_candidate(
    location_id: str = "01400376",
    lat: float = 39.7817,
    lon: float = -89.6501,
    chain: str = "Kroger",
) -> dict[str, Any]:
    return {
        "locationId": location_id,
        "chain": chain,
        "address": {
            "addressLine1": "100 Main St",
            "city": "Springfield",
            "state": "IL",
            "zipCode": "62701",
        },
        "geolocation": {"latitude": lat, "longitude": lon},
    }


def product_record(
    description: str = "Kroger 2% Milk",
    size: str | None = "1 GAL",
    price: Any = 3.49,
    images: Any = None,
) -> dict[str, Any]:
    offer: dict[str, Any] = {"itemId": "0001111041700"}
    if size is not None:
        offer["size"] = size
    if price is not None:
        offer["price"] = {"regular": price, "promo": 0}
    record: dict[str, Any] = {"productId": "0001111041700", "description": description, "items": [offer]}
    if images is not None:
        record["images"] = images
    return record
