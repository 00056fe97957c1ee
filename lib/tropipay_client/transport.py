from __future__ import annotations

import json
import logging
from typing import Any, Callable, TypeVar

import httpx

from .auth import TokenManager
from .config_types import ClientConfig
from .errors import ApiError, DecodeError, NetworkError, SerializationError

log = logging.getLogger(__name__)

T = TypeVar("T")


def raw_json(payload: Any) -> Any:
    """Result converter that keeps the decoded JSON as-is."""
    return payload


def _encode_body(body: Any) -> bytes:
    if hasattr(body, "to_dict"):
        body = body.to_dict()
    try:
        return json.dumps(body, ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"failed to marshal request body: {e}") from e


class Transport:
    """Authenticated request dispatcher.

    Every call obtains a token from the :class:`TokenManager`, sends exactly one
    HTTP request and either decodes the body or raises a classified error.
    Nothing is retried here.
    """

    def __init__(self, cfg: ClientConfig, *, tokens: TokenManager | None = None):
        self._cfg = cfg
        self._base_url = cfg.base_url
        client_kwargs: dict[str, Any] = {
            "timeout": cfg.timeout_s,
            "headers": {"User-Agent": cfg.user_agent},
        }
        if cfg.transport is not None:
            client_kwargs["transport"] = cfg.transport
        self._client = httpx.Client(**client_kwargs)
        self.tokens = tokens or TokenManager(cfg.credentials, self._base_url, self._client)

    @property
    def base_url(self) -> str:
        return self._base_url

    def close(self) -> None:
        self._client.close()

    def request(
            self,
            method: str,
            path: str,
            *,
            json_body: Any | None = None,
            result: Callable[[Any], T] | None = None,
            timeout: float | None = None,
    ) -> T | None:
        token = self.tokens.get_valid_token(timeout=timeout)

        content = _encode_body(json_body) if json_body is not None else None
        # Plain concatenation; paths are expected to start with "/".
        url = self._base_url + path
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
        }
        kwargs: dict[str, Any] = {}
        if timeout is not None:
            kwargs["timeout"] = timeout

        log.debug("%s %s", method, url)
        try:
            r = self._client.request(method, url, content=content, headers=headers, **kwargs)
        except httpx.RequestError as e:
            raise NetworkError(f"{method} {url} failed: {e}") from e

        if r.status_code >= 400:
            raise ApiError(url, r.status_code, r.text)

        if result is None:
            return None
        try:
            payload = r.json()
        except ValueError as e:
            raise DecodeError(f"failed to decode response: {e}", r.text) from e
        try:
            return result(payload)
        except (KeyError, TypeError, ValueError) as e:
            raise DecodeError(f"failed to decode response: {e}", r.text) from e
