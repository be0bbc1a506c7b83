from __future__ import annotations

from abc import ABC, abstractmethod

from grocerycheck.geo import GeoLocation
from grocerycheck.models import Item


class GroceryStoreService(ABC):
    name: str

    def get_name(self) -> str:
        return self.name

    @abstractmethod
    def get_address(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def initialize_location(self, point: GeoLocation, radius_miles: float) -> GeoLocation:
        raise NotImplementedError

    @abstractmethod
    def is_in_range(self, radius: float) -> bool:
        raise NotImplementedError

    @abstractmethod
    def search_for_item(self, term: str) -> list[Item]:
        raise NotImplementedError
