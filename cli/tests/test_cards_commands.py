from __future__ import annotations

import pytest
import typer
from typer.testing import CliRunner

from tropipay_cli import main
from tropipay_cli.commands import cards_cmd, common
from tropipay_cli.config import AppConfig, AuthConfig, ConfigError
from tropipay_client import ApiError
from tropipay_client.models import PaymentCard


class _FakeClient:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.deleted: list[str] = []
        self.created = None
        self.closed = False

    def list_payment_cards(self) -> list[PaymentCard]:
        if self.error:
            raise self.error
        return [PaymentCard(id="c1", concept="Coffee", amount=250, currency="EUR")]

    def create_payment_card(self, req) -> PaymentCard:
        self.created = req
        return PaymentCard(id="new", concept="Card")

    def delete_payment_card(self, card_id: str) -> None:
        self.deleted.append(card_id)

    def close(self) -> None:
        self.closed = True


def _make_cfg() -> AppConfig:
    return AppConfig(environment="sandbox", auth=AuthConfig(client_id="cid", client_secret="secret"))


def _patch(monkeypatch, client: _FakeClient) -> None:
    monkeypatch.setattr(common, "load_config", _make_cfg)
    monkeypatch.setattr(common, "make_client", lambda *_args, **_kwargs: client)


def test_delete_requires_confirmation(monkeypatch) -> None:
    client = _FakeClient()
    _patch(monkeypatch, client)
    monkeypatch.setattr(typer, "confirm", lambda *_args, **_kwargs: False)

    with pytest.raises(typer.Exit) as exc:
        cards_cmd.delete_card(card_id="c1", yes=False, environment=None, base_url=None)

    assert exc.value.exit_code == 0
    assert client.deleted == []


def test_delete_skips_prompt_with_yes(monkeypatch) -> None:
    client = _FakeClient()
    _patch(monkeypatch, client)
    monkeypatch.setattr(typer, "confirm", lambda *_args, **_kwargs: (_ for _ in ()).throw(RuntimeError("prompted")))

    cards_cmd.delete_card(card_id="c9", yes=True, environment=None, base_url=None)

    assert client.deleted == ["c9"]
    assert client.closed is True


def test_list_json_output(monkeypatch) -> None:
    _patch(monkeypatch, _FakeClient())

    result = CliRunner().invoke(main.app, ["cards", "list", "--json"])

    assert result.exit_code == 0
    assert '"id": "c1"' in result.output
    assert '"amount": 250' in result.output


def test_list_api_error_exits_with_code_2(monkeypatch) -> None:
    client = _FakeClient(error=ApiError("https://api.test/paymentcards", 500, '{"message": "boom"}'))
    _patch(monkeypatch, client)

    result = CliRunner().invoke(main.app, ["cards", "list"])

    assert result.exit_code == 2
    assert "boom" in result.output
    assert client.closed is True


def test_create_strips_spaces_from_number(monkeypatch) -> None:
    client = _FakeClient()
    _patch(monkeypatch, client)

    result = CliRunner().invoke(
        main.app,
        ["cards", "create", "--number", "4111 1111", "--cvc", "123", "--holder", "Ana", "--month", "2", "--year", "2030"],
    )

    assert result.exit_code == 0
    assert client.created.number == "41111111"
    assert client.created.expiry_month == 2


def test_missing_credentials_exit_with_code_2(monkeypatch) -> None:
    def _raise(*_args, **_kwargs):
        raise ConfigError("Client credentials are not set.")

    monkeypatch.setattr(common, "load_config", _make_cfg)
    monkeypatch.setattr(common, "make_client", _raise)

    result = CliRunner().invoke(main.app, ["cards", "list"])

    assert result.exit_code == 2
    assert "credentials" in result.output
