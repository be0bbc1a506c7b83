from __future__ import annotations


class GroceryServiceError(RuntimeError):
    pass


class AuthError(GroceryServiceError):
    """Client-credentials exchange failed or returned an unusable token."""


class LocationLookupError(GroceryServiceError, LookupError):
    """Store search failed or found no store within the radius."""


class SearchError(GroceryServiceError):
    """Product search failed in transport or returned an unreadable body."""
