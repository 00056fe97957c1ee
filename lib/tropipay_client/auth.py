"""Client-credentials token lifecycle.

A :class:`TokenManager` owns one set of credentials and the token obtained
with them. Callers ask for :meth:`TokenManager.get_valid_token`; the manager
hands out the cached token while it is fresh and refreshes it otherwise.
"""
from __future__ import annotations

import json
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable

import httpx

from .config_types import Credentials
from .errors import AuthError, DecodeError, NetworkError

log = logging.getLogger(__name__)

TOKEN_PATH = "/access/token"
EXPIRY_BUFFER_S = 10.0


@dataclass(frozen=True)
class TokenResponse:
    access_token: str
    token_type: str
    refresh_token: str
    expires_in: int
    scope: str

    @classmethod
    def from_dict(cls, payload: Any) -> "TokenResponse":
        if not isinstance(payload, dict):
            raise TypeError("token response is not a JSON object")
        return cls(
            access_token=str(payload.get("access_token") or ""),
            token_type=str(payload.get("token_type") or ""),
            refresh_token=str(payload.get("refresh_token") or ""),
            expires_in=int(payload.get("expires_in") or 0),
            scope=str(payload.get("scope") or ""),
        )


@dataclass(frozen=True)
class CachedToken:
    access_token: str
    expires_at: float


class TokenManager:
    def __init__(
            self,
            credentials: Credentials,
            base_url: str,
            http: httpx.Client,
            *,
            clock: Callable[[], float] = time.time,
            buffer_s: float = EXPIRY_BUFFER_S,
    ):
        self._credentials = credentials
        self._base_url = base_url
        self._http = http
        self._clock = clock
        self._buffer_s = buffer_s
        self._lock = threading.Lock()
        self._token: CachedToken | None = None

    @property
    def cached_token(self) -> CachedToken | None:
        return self._token

    def invalidate(self) -> None:
        with self._lock:
            self._token = None

    def get_valid_token(self, *, timeout: float | None = None) -> str:
        """Return an access token valid for at least the safety buffer.

        The lock is held across the refresh call so concurrent callers wait
        for one refresh instead of each issuing their own.
        """
        with self._lock:
            token = self._token
            if token is not None and self._clock() + self._buffer_s < token.expires_at:
                log.debug("token cache hit, expires_at=%s", token.expires_at)
                return token.access_token
            return self._refresh(timeout)

    def _refresh(self, timeout: float | None) -> str:
        body = {
            "grant_type": "client_credentials",
            "client_id": self._credentials.client_id,
            "client_secret": self._credentials.client_secret,
        }
        url = self._base_url + TOKEN_PATH
        log.debug("refreshing access token at %s", url)

        kwargs: dict[str, Any] = {}
        if timeout is not None:
            kwargs["timeout"] = timeout
        try:
            r = self._http.post(
                url,
                content=json.dumps(body),
                headers={"Content-Type": "application/json"},
                **kwargs,
            )
        except httpx.RequestError as e:
            # Cached token is left untouched.
            raise NetworkError(f"token request to {url} failed: {e}") from e

        if not 200 <= r.status_code < 300:
            raise AuthError(r.status_code, r.text)

        try:
            resp = TokenResponse.from_dict(r.json())
        except (ValueError, TypeError) as e:
            raise DecodeError(f"failed to decode token response: {e}", r.text) from e
        if not resp.access_token:
            raise AuthError(r.status_code, "token endpoint returned no access_token")

        self._token = CachedToken(
            access_token=resp.access_token,
            expires_at=self._clock() + resp.expires_in,
        )
        log.debug("access token refreshed, expires_in=%ss", resp.expires_in)
        return resp.access_token
