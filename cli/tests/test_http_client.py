from __future__ import annotations

import pytest

from tropipay_cli import config
from tropipay_cli.http import make_client


def _cfg() -> config.AppConfig:
    cfg = config.default_config()
    cfg.auth.client_id = "cid"
    cfg.auth.client_secret = "secret"
    return cfg


def _capture(monkeypatch) -> dict:
    captured = {}

    class _FakeClient:
        def __init__(self, client_cfg):
            captured["cfg"] = client_cfg

    monkeypatch.setattr("tropipay_cli.http.TropipayClient", _FakeClient)
    return captured


def test_make_client_uses_environment_url(monkeypatch) -> None:
    captured = _capture(monkeypatch)

    make_client(_cfg(), environment_override="sandbox")

    assert captured["cfg"].base_url == "https://sandbox.tropipay.me/api/v3"
    assert captured["cfg"].client_id == "cid"
    assert captured["cfg"].client_secret == "secret"


def test_make_client_normalizes_base_url_override(monkeypatch) -> None:
    captured = _capture(monkeypatch)

    make_client(_cfg(), base_url_override="example.com/api/v3/")

    assert captured["cfg"].base_url == "https://example.com/api/v3"


def test_make_client_requires_credentials(monkeypatch) -> None:
    _capture(monkeypatch)

    with pytest.raises(config.ConfigError):
        make_client(config.default_config())
