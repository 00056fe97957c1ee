from __future__ import annotations


class TropipayClientError(Exception):
    """Base client error."""


class SerializationError(TropipayClientError):
    """Request body could not be encoded as JSON."""


class NetworkError(TropipayClientError):
    """Transport/network layer error."""


class DecodeError(TropipayClientError):
    def __init__(self, message: str, body: str | None = None):
        super().__init__(message)
        self.body = body


class AuthError(TropipayClientError):
    """Token endpoint rejected the client credentials."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"authentication failed: status {status_code}, body: {body}")
        self.status_code = status_code
        self.body = body


class ApiError(TropipayClientError):
    def __init__(self, url: str, status_code: int, body: str):
        super().__init__(f"API error: {url} (status: {status_code}) - {body}")
        self.url = url
        self.status_code = status_code
        self.body = body


class GraphQLError(TropipayClientError):
    def __init__(self, errors: list[dict]):
        first = errors[0] if errors else {}
        message = first.get("message") if isinstance(first, dict) else str(first)
        super().__init__(f"graphql error: {message}")
        self.errors = errors
