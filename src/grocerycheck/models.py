from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, Field

from grocerycheck.geo import GeoLocation


@dataclass(frozen=True, slots=True)
class AccessToken:
    value: str
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at


@dataclass(frozen=True, slots=True)
class Store:
    store_id: str
    location: GeoLocation
    address: str
    chain: str
    distance_miles: float


class Item(BaseModel):
    """A product offer normalized across chains."""

    name: str
    description: str | None = None
    image_url: str | None = None
    chain: str
    distance: float = -1
    price: float | None = None
    quantity: float | None = None
    unit_of_measure: str = ""


class LocationConfig(BaseModel):
    zip: str | None = None
    lat: float | None = None
    lon: float | None = None


class KrogerConfig(BaseModel):
    client_id: str | None = None
    client_secret: str | None = None
    base_url: str = "https://api-ce.kroger.com/v1"
    timeout_seconds: float = Field(default=12.0, gt=0)


class AppConfig(BaseModel):
    location: LocationConfig
    radius_miles: float = Field(default=10.0, gt=0)
    kroger: KrogerConfig = Field(default_factory=KrogerConfig)

    def resolved_lat_lon(self) -> tuple[float | None, float | None]:
        return self.location.lat, self.location.lon
