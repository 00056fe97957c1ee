from __future__ import annotations

import pytest

from tropipay_client.errors_utils import error_message, parse_error_body
from tropipay_client.models import (
    Movement,
    MovementFilter,
    MovementState,
    NumericId,
    PaymentCard,
    StringId,
    list_of,
    parse_movement_id,
)


def test_parse_movement_id_variants() -> None:
    assert parse_movement_id(7) == NumericId(7)
    assert parse_movement_id("7") == StringId("7")
    assert parse_movement_id(None) is None
    assert str(NumericId(7)) == str(StringId("7")) == "7"


def test_parse_movement_id_rejects_other_types() -> None:
    with pytest.raises(ValueError):
        parse_movement_id(True)
    with pytest.raises(ValueError):
        parse_movement_id({"id": 1})


def test_movement_from_rest_payload() -> None:
    mv = Movement.from_dict(
        {
            "id": 11,
            "amount": 300,
            "balanceBefore": 1000,
            "balanceAfter": 700,
            "recipient": {"name": "Bob"},
        }
    )
    assert mv.id == NumericId(11)
    assert mv.balance_after == 700
    assert mv.recipient.name == "Bob"
    assert mv.sender is None


def test_movement_filter_omits_empty_fields() -> None:
    f = MovementFilter(state=[MovementState.PENDING, "failed"], amount_gte=100)
    assert f.to_dict() == {"state": ["pending", "failed"], "amountGte": 100}
    assert MovementFilter().to_dict() == {}


def test_payment_card_tolerates_nulls() -> None:
    card = PaymentCard.from_dict({"id": "c1", "qrImage": None, "credentialId": 5, "force3ds": True})
    assert card.qr_image == ""
    assert card.credential_id == 5
    assert card.force_3ds is True


def test_list_of_rejects_objects() -> None:
    with pytest.raises(TypeError):
        list_of(PaymentCard.from_dict)({"items": []})
    assert list_of(PaymentCard.from_dict)(None) == []


def test_error_message_helpers() -> None:
    assert parse_error_body("not json") is None
    assert error_message('{"error": {"message": "Card not found"}}') == "Card not found"
    assert error_message('{"message": "Bad request"}') == "Bad request"
    assert error_message("plain text ") == "plain text"
    assert error_message(None) is None
