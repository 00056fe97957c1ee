from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import urlsplit

import tomli_w
from dotenv import find_dotenv, load_dotenv
from platformdirs import user_config_dir

from tropipay_client.config_types import Environment

from . import console

APP_NAME = "tropipay"
CONFIG_FILENAME = "config.toml"

ENV_CLIENT_ID = "TROPIPAY_CLIENT_ID"
ENV_CLIENT_SECRET = "TROPIPAY_CLIENT_SECRET"
ENV_ENVIRONMENT = "TROPIPAY_ENVIRONMENT"
ENV_BASE_URL = "TROPIPAY_BASE_URL"

ENVIRONMENTS = {
    "production": Environment.PRODUCTION.value,
    "sandbox": Environment.SANDBOX.value,
}
CUSTOM_ENVIRONMENT = "custom"
DEFAULT_TIMEOUT_S = 30.0

LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1", "0.0.0.0"})

_warned_urls: set[str] = set()


class ConfigError(ValueError):
    """Raised when the stored or supplied settings are unusable."""


@dataclass
class AuthConfig:
    client_id: str = ""
    client_secret: str = ""


@dataclass
class AppConfig:
    environment: str
    auth: AuthConfig
    base_url: str = ""
    timeout_s: float = DEFAULT_TIMEOUT_S


def config_path() -> str:
    return os.path.join(user_config_dir(APP_NAME), CONFIG_FILENAME)


def default_config() -> AppConfig:
    return AppConfig(
        environment="production",
        auth=AuthConfig(client_id="", client_secret=""),
        base_url="",
        timeout_s=DEFAULT_TIMEOUT_S,
    )


def normalize_base_url(raw: str | None, *, warn: bool = False) -> str:
    """Turn input like ``sandbox.tropipay.me/api/v3/`` into a usable base URL.

    A missing scheme becomes ``https://``, or ``http://`` for local hosts.
    """
    value = (raw or "").strip().rstrip("/")
    if not value:
        return ""
    if urlsplit(value).scheme.lower() in ("http", "https"):
        return value

    host = (urlsplit(f"//{value}").hostname or "").lower()
    scheme = "http" if host in LOCAL_HOSTS else "https"
    normalized = f"{scheme}://{value}"
    if warn and normalized not in _warned_urls:
        _warned_urls.add(normalized)
        console.warn(f"base_url has no scheme, using {normalized}")
    return normalized


def normalize_environment(raw: str | None) -> str:
    value = (raw or "").strip().lower()
    if not value:
        return "production"
    if value in ENVIRONMENTS or value == CUSTOM_ENVIRONMENT:
        return value
    choices = ", ".join([*ENVIRONMENTS, CUSTOM_ENVIRONMENT])
    raise ConfigError(f"Unknown environment '{raw}'. Expected one of: {choices}.")


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    data: dict[str, Any] = {
        "environment": cfg.environment,
        "timeout_s": float(cfg.timeout_s),
        "auth": {
            "client_id": cfg.auth.client_id,
            "client_secret": cfg.auth.client_secret,
        },
    }
    if cfg.base_url:
        data["base_url"] = cfg.base_url
    return data


def from_toml(data: dict[str, Any]) -> AppConfig:
    cfg = default_config()
    try:
        cfg.environment = normalize_environment(str(data.get("environment") or ""))
    except ConfigError as e:
        console.warn(f"{e} Falling back to production.")
    cfg.base_url = normalize_base_url(str(data.get("base_url") or ""), warn=True)
    timeout_raw = data.get("timeout_s")
    if timeout_raw is not None:
        try:
            cfg.timeout_s = float(timeout_raw)
        except (TypeError, ValueError):
            cfg.timeout_s = DEFAULT_TIMEOUT_S
    auth_raw = data.get("auth") or {}
    if isinstance(auth_raw, dict):
        cfg.auth.client_id = str(auth_raw.get("client_id") or "")
        cfg.auth.client_secret = str(auth_raw.get("client_secret") or "")
    return cfg


def load_file_config() -> AppConfig:
    """Read only the config file. Commands that write settings back start from this."""
    try:
        with open(config_path(), "rb") as f:
            return from_toml(tomllib.load(f))
    except FileNotFoundError:
        return default_config()


def load_dotenv_file() -> str:
    """Export TROPIPAY_* values from a ``.env`` in the working directory or its parents.

    Variables already present in the process environment are kept.
    """
    path = find_dotenv(usecwd=True)
    if path:
        load_dotenv(path, override=False)
    return path


def load_config() -> AppConfig:
    """Effective settings: the config file, overridden by TROPIPAY_* variables (``.env`` included)."""
    cfg = load_file_config()
    load_dotenv_file()
    return apply_env(cfg)


def apply_env(cfg: AppConfig, environ: Mapping[str, str] | None = None) -> AppConfig:
    env = os.environ if environ is None else environ
    client_id = env.get(ENV_CLIENT_ID, "").strip()
    client_secret = env.get(ENV_CLIENT_SECRET, "").strip()
    environment = env.get(ENV_ENVIRONMENT, "").strip()
    base_url = env.get(ENV_BASE_URL, "").strip()
    if client_id:
        cfg.auth.client_id = client_id
    if client_secret:
        cfg.auth.client_secret = client_secret
    if environment:
        try:
            cfg.environment = normalize_environment(environment)
        except ConfigError as e:
            console.warn(f"{ENV_ENVIRONMENT}: {e}")
            environment = ""
    if base_url:
        cfg.base_url = normalize_base_url(base_url, warn=True)
        if not environment:
            cfg.environment = CUSTOM_ENVIRONMENT
    return cfg


def resolve_base_url(cfg: AppConfig) -> str:
    if cfg.environment == CUSTOM_ENVIRONMENT:
        if not cfg.base_url:
            raise ConfigError("Environment 'custom' requires base_url.")
        return cfg.base_url
    return ENVIRONMENTS.get(cfg.environment, Environment.PRODUCTION.value)


def save_config(cfg: AppConfig) -> str:
    """Write ``cfg`` to the config file, readable by the owner only."""
    path = config_path()
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(to_toml(cfg)).encode("utf-8"))
    os.chmod(path, 0o600)
    return path
