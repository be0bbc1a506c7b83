from __future__ import annotations

import logging
import os
import time
from typing import Any, Callable

import requests

from grocerycheck.adapters.base import GroceryStoreService
from grocerycheck.auth import TokenCache
from grocerycheck.errors import LocationLookupError, SearchError
from grocerycheck.geo import GeoLocation
from grocerycheck.models import Item, Store
from grocerycheck.normalize import normalize_products

LOG = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api-ce.kroger.com/v1"


def _format_miles(radius_miles: float) -> str:
    """Whole-mile radii go out as integers, e.g. ``10`` rather than ``10.0``."""
    if float(radius_miles).is_integer():
        return str(int(radius_miles))
    return str(radius_miles)


class KrogerAdapter(GroceryStoreService):
    """Kroger public API adapter bound to at most one resolved store."""

    default_name = "Kroger"

    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 12.0,
        session: requests.Session | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        client_id = client_id or os.getenv("KROGER_CLIENT_ID")
        client_secret = client_secret or os.getenv("KROGER_CLIENT_SECRET")
        if not client_id or not client_secret:
            raise ValueError("KROGER_CLIENT_ID and KROGER_CLIENT_SECRET are required for Kroger adapter")

        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()
        self.tokens = TokenCache(
            client_id=client_id,
            client_secret=client_secret,
            token_url=f"{self.base_url}/connect/oauth2/token",
            session=self.session,
            timeout_seconds=timeout_seconds,
            clock=clock,
        )
        self.store: Store | None = None

    @property
    def name(self) -> str:
        if self.store is not None:
            return self.store.chain
        return self.default_name

    def get_address(self) -> str:
        return self.store.address if self.store is not None else ""

    def initialize_location(self, point: GeoLocation, radius_miles: float) -> GeoLocation:
        return self.get_closest_location(point, radius_miles)

    def get_closest_location(self, point: GeoLocation, radius_miles: float) -> GeoLocation:
        token = self.tokens.get_valid_token()
        params = {
            "filter.latLong.near": f"{point.latitude},{point.longitude}",
            "filter.radiusInMiles": _format_miles(radius_miles),
        }
        payload = self._get("/locations", params, token, LocationLookupError)

        candidates = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(candidates, list) or not candidates:
            LOG.error("no kroger locations within radius=%s of %s", radius_miles, point)
            raise LocationLookupError(f"no Kroger locations within {radius_miles} miles")

        # Results come back ordered by proximity; the first one is taken as closest.
        store = self._store_from_candidate(candidates[0], point)
        self.store = store
        LOG.info(
            "resolved kroger store=%s chain=%s distance=%.2f",
            store.store_id,
            store.chain,
            store.distance_miles,
        )
        return store.location

    def is_in_range(self, radius: float) -> bool:
        return self.store is not None and self.store.distance_miles < radius

    def search_for_item(self, term: str) -> list[Item]:
        if self.store is None:
            return []

        token = self.tokens.get_valid_token()
        params = {"filter.term": term, "filter.locationId": self.store.store_id}
        payload = self._get("/products", params, token, SearchError)

        records = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(records, list):
            LOG.error("product search response missing data term=%r", term)
            raise SearchError("product search response missing data")

        items = normalize_products(records, self.name, self.store.distance_miles)
        LOG.info(
            "kroger search term=%r store=%s results=%s kept=%s",
            term,
            self.store.store_id,
            len(records),
            len(items),
        )
        return items

    def _get(
        self,
        path: str,
        params: dict[str, Any],
        token: str,
        error_cls: type[Exception],
    ) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(
                url,
                params=params,
                headers={"Accept": "application/json", "Authorization": f"Bearer {token}"},
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            return response.json()
        except requests.RequestException as exc:
            LOG.exception("kroger request failed url=%s", url)
            raise error_cls(f"request to {path} failed: {exc}") from exc
        except ValueError as exc:
            LOG.exception("kroger response was not json url=%s", url)
            raise error_cls(f"response from {path} was not json") from exc

    def _store_from_candidate(self, candidate: Any, point: GeoLocation) -> Store:
        try:
            store_id = str(candidate["locationId"])
            geolocation = candidate["geolocation"]
            location = GeoLocation(float(geolocation["latitude"]), float(geolocation["longitude"]))
        except (KeyError, TypeError, ValueError) as exc:
            LOG.error("malformed kroger location candidate: %s", candidate)
            raise LocationLookupError("malformed location candidate") from exc

        address = candidate.get("address")
        if not isinstance(address, dict):
            address = {}
        chain = candidate.get("chain")
        return Store(
            store_id=store_id,
            location=location,
            address=(
                f"{address.get('addressLine1') or ''}, {address.get('city') or ''}, "
                f"{address.get('state') or ''} {address.get('zipCode') or ''}"
            ),
            chain=chain if isinstance(chain, str) and chain else self.default_name,
            distance_miles=point.distance_to(location),
        )
