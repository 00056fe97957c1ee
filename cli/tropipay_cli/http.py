from __future__ import annotations

from tropipay_client import TropipayClient
from tropipay_client.config_types import ClientConfig

from .config import (
    ENV_CLIENT_ID,
    ENV_CLIENT_SECRET,
    AppConfig,
    ConfigError,
    normalize_base_url,
    normalize_environment,
    resolve_base_url,
)


def make_client(
    cfg: AppConfig,
    *,
    environment_override: str | None = None,
    base_url_override: str | None = None,
) -> TropipayClient:
    if not cfg.auth.client_id or not cfg.auth.client_secret:
        raise ConfigError(
            f"Client credentials are not set. Run 'tropipay settings init' or export {ENV_CLIENT_ID} and {ENV_CLIENT_SECRET}."
        )
    if environment_override:
        cfg.environment = normalize_environment(environment_override)
    if base_url_override:
        base_url = normalize_base_url(base_url_override, warn=True)
    else:
        base_url = resolve_base_url(cfg)
    return TropipayClient(
        ClientConfig(
            client_id=cfg.auth.client_id,
            client_secret=cfg.auth.client_secret,
            base_url=base_url,
            timeout_s=cfg.timeout_s,
        )
    )
