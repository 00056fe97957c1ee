from .client import TropipayClient
from .config_types import ClientConfig, Environment
from .errors import (
    ApiError,
    AuthError,
    DecodeError,
    GraphQLError,
    NetworkError,
    SerializationError,
    TropipayClientError,
)

__all__ = [
    "TropipayClient",
    "ClientConfig",
    "Environment",
    "ApiError",
    "AuthError",
    "DecodeError",
    "GraphQLError",
    "NetworkError",
    "SerializationError",
    "TropipayClientError",
]
