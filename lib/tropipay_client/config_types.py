from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import httpx


class Environment(str, Enum):
    PRODUCTION = "https://www.tropipay.com/api/v3"
    SANDBOX = "https://sandbox.tropipay.me/api/v3"


@dataclass(frozen=True)
class Credentials:
    client_id: str
    client_secret: str = field(repr=False)


@dataclass(frozen=True)
class ClientConfig:
    client_id: str
    client_secret: str = field(repr=False)
    base_url: str = Environment.PRODUCTION.value
    timeout_s: float = 30.0
    transport: httpx.BaseTransport | None = field(default=None, repr=False, compare=False)
    user_agent: str = "tropipay-client/0.1.0"

    def __post_init__(self) -> None:
        if isinstance(self.base_url, Environment):
            object.__setattr__(self, "base_url", self.base_url.value)

    @property
    def credentials(self) -> Credentials:
        return Credentials(client_id=self.client_id, client_secret=self.client_secret)
