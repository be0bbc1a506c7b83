from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from grocerycheck.adapters import GroceryStoreService, KrogerAdapter
from grocerycheck.config import load_config
from grocerycheck.errors import GroceryServiceError
from grocerycheck.geo import GeoLocation, ZipGeocoder
from grocerycheck.models import AppConfig, Item

LOG = logging.getLogger(__name__)

AdapterFactory = Callable[[], GroceryStoreService]


@dataclass(slots=True)
class StoreRecord:
    chain: str
    address: str
    location: GeoLocation
    in_range: bool


@dataclass(slots=True)
class SearchResult:
    items: list[Item]
    errors: list[str]


class GrocerySearchService:
    def __init__(self, config: AppConfig, geocoder: ZipGeocoder | None = None) -> None:
        self.config = config
        self.geocoder = geocoder or ZipGeocoder()
        self._adapters: dict[str, GroceryStoreService] | None = None
        self.init_errors: list[str] = []

    def _resolve_point(self) -> GeoLocation:
        lat, lon = self.config.resolved_lat_lon()
        if lat is not None and lon is not None:
            return GeoLocation(lat, lon)

        if self.config.location.zip:
            return self.geocoder.geocode_zip(self.config.location.zip)

        raise ValueError("location must include zip or lat/lon")

    def _adapter_factories(self) -> dict[str, AdapterFactory]:
        kroger = self.config.kroger
        return {
            "kroger": lambda: KrogerAdapter(
                client_id=kroger.client_id,
                client_secret=kroger.client_secret,
                base_url=kroger.base_url,
                timeout_seconds=kroger.timeout_seconds,
            ),
        }

    def initialize(self) -> list[StoreRecord]:
        """Bind every configured chain to its nearest store, once."""
        point = self._resolve_point()
        radius = self.config.radius_miles
        adapters: dict[str, GroceryStoreService] = {}
        errors: list[str] = []
        records: list[StoreRecord] = []

        for chain, factory in self._adapter_factories().items():
            try:
                adapter = factory()
                location = adapter.initialize_location(point, radius)
            except (ValueError, GroceryServiceError) as exc:
                LOG.warning("store init failed chain=%s error=%s", chain, exc)
                errors.append(f"{chain}: {exc}")
                continue

            adapters[chain] = adapter
            records.append(
                StoreRecord(
                    chain=adapter.get_name(),
                    address=adapter.get_address(),
                    location=location,
                    in_range=adapter.is_in_range(radius),
                )
            )

        self._adapters = adapters
        self.init_errors = errors
        return records

    def search(self, term: str) -> SearchResult:
        cleaned = term.strip()
        if not cleaned:
            return SearchResult(items=[], errors=[])

        if self._adapters is None:
            self.initialize()
        adapters = self._adapters or {}

        items: list[Item] = []
        errors = list(self.init_errors)
        for chain, adapter in adapters.items():
            if not adapter.is_in_range(self.config.radius_miles):
                errors.append(f"{chain}: nearest store is outside {self.config.radius_miles} miles")
                continue
            try:
                items.extend(adapter.search_for_item(cleaned))
            except GroceryServiceError as exc:
                LOG.warning("search failed chain=%s term=%r error=%s", chain, cleaned, exc)
                errors.append(f"{chain}: {exc}")

        return SearchResult(items=items, errors=errors)


def build_service(config_path: str) -> GrocerySearchService:
    config = load_config(config_path)
    return GrocerySearchService(config=config)
