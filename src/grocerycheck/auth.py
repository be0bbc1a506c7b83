from __future__ import annotations

import logging
import math
import time
from typing import Callable

import requests

from grocerycheck.errors import AuthError
from grocerycheck.models import AccessToken

LOG = logging.getLogger(__name__)

PRODUCT_SCOPE = "product.compact"


class TokenCache:
    """Holds one client-credentials bearer token and refreshes it on expiry.

    A cached token is handed out unchanged while ``clock() < expires_at``.
    Otherwise the token endpoint is called once and the cached token is
    replaced as a whole. There is no lock, so overlapping callers may both
    refresh.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        token_url: str,
        session: requests.Session | None = None,
        timeout_seconds: float = 12.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.token_url = token_url
        self.session = session or requests.Session()
        self.timeout_seconds = timeout_seconds
        self.clock = clock
        self._token: AccessToken | None = None

    @property
    def token(self) -> AccessToken | None:
        return self._token

    def get_valid_token(self) -> str:
        if self._token is not None and self._token.is_valid(self.clock()):
            return self._token.value

        self._token = self._fetch_token()
        LOG.info("obtained access token expires_at=%s", self._token.expires_at)
        return self._token.value

    def _fetch_token(self) -> AccessToken:
        issued_at = self.clock()
        try:
            response = self.session.post(
                self.token_url,
                data={"grant_type": "client_credentials", "scope": PRODUCT_SCOPE},
                auth=(self.client_id, self.client_secret),
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            LOG.exception("token exchange failed url=%s", self.token_url)
            raise AuthError(f"token exchange failed: {exc}") from exc
        except ValueError as exc:
            LOG.exception("token response was not json url=%s", self.token_url)
            raise AuthError("token response was not json") from exc

        try:
            value = payload["access_token"]
            expires_in = payload["expires_in"]
            ttl = float(expires_in)
        except (KeyError, TypeError, ValueError) as exc:
            keys = sorted(payload) if isinstance(payload, dict) else None
            LOG.error("malformed token response keys=%s", keys)
            raise AuthError("malformed token response") from exc
        if isinstance(expires_in, bool) or not math.isfinite(ttl) or ttl <= 0:
            LOG.error("malformed token response expires_in=%r", expires_in)
            raise AuthError("malformed token response: unusable expires_in")
        if not isinstance(value, str) or not value:
            LOG.error("malformed token response: empty access_token")
            raise AuthError("malformed token response: empty access_token")

        return AccessToken(value=value, expires_at=issued_at + ttl)
