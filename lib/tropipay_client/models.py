from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, TypeVar, Union

T = TypeVar("T")


def _require_mapping(payload: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise TypeError(f"{what}: expected JSON object, got {type(payload).__name__}")
    return payload


def as_str(value: Any) -> str:
    return "" if value is None else str(value)


def as_int(value: Any) -> int:
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise ValueError("boolean is not a valid integer field")
    return int(value)


def list_of(converter: Callable[[Any], T]) -> Callable[[Any], list[T]]:
    """Turn an item converter into a converter for a JSON array of items."""

    def _convert(payload: Any) -> list[T]:
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise TypeError(f"expected JSON array, got {type(payload).__name__}")
        return [converter(item) for item in payload]

    return _convert


# --- identifiers ---


@dataclass(frozen=True)
class NumericId:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class StringId:
    value: str

    def __str__(self) -> str:
        return self.value


MovementId = Union[NumericId, StringId]


def parse_movement_id(raw: Any) -> MovementId | None:
    # REST listings return integers, the GraphQL endpoint returns strings.
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ValueError("boolean is not a valid movement id")
    if isinstance(raw, int):
        return NumericId(raw)
    if isinstance(raw, float) and raw.is_integer():
        return NumericId(int(raw))
    if isinstance(raw, str):
        return StringId(raw)
    raise ValueError(f"unsupported movement id: {raw!r}")


# --- users ---


@dataclass
class User:
    id: str = ""
    name: str = ""
    surname: str = ""
    email: str = ""
    phone: str = ""

    @classmethod
    def from_dict(cls, payload: Any) -> "User":
        data = _require_mapping(payload, "user")
        return cls(
            id=as_str(data.get("id")),
            name=as_str(data.get("name")),
            surname=as_str(data.get("surname")),
            email=as_str(data.get("email")),
            phone=as_str(data.get("phone")),
        )

    @property
    def display_name(self) -> str:
        return " ".join(part for part in (self.name, self.surname) if part)


# --- payment cards ---

_CARD_FIELDS: dict[str, tuple[str, Callable[[Any], Any]]] = {
    "id": ("id", as_str),
    "reference": ("reference", as_str),
    "concept": ("concept", as_str),
    "description": ("description", as_str),
    "amount": ("amount", as_int),
    "currency": ("currency", as_str),
    "single_use": ("singleUse", bool),
    "reason_id": ("reasonId", as_int),
    "reason_des": ("reasonDes", as_str),
    "user_id": ("userId", as_str),
    "qr_image": ("qrImage", as_str),
    "short_url": ("shortUrl", as_str),
    "state": ("state", as_int),
    "expiration_days": ("expirationDays", as_int),
    "lang": ("lang", as_str),
    "url_success": ("urlSuccess", as_str),
    "url_failed": ("urlFailed", as_str),
    "url_notification": ("urlNotification", as_str),
    "account_id": ("accountId", as_int),
    "expiration_date": ("expirationDate", as_str),
    "service_date": ("serviceDate", as_str),
    "has_client": ("hasClient", bool),
    "payment_url": ("paymentUrl", as_str),
    "favorite": ("favorite", bool),
    "save_token": ("saveToken", bool),
    "payment_card_type": ("paymentcardType", as_int),
    "image_base": ("imageBase", as_str),
    "force_3ds": ("force3ds", bool),
    "origin": ("origin", as_int),
    "strict_postal_code_check": ("strictPostalCodeCheck", bool),
    "strict_address_check": ("strictAddressCheck", bool),
    "destination_currency": ("destinationCurrency", as_str),
    "payment_3ds": ("payment3DS", as_int),
    "created_at": ("createdAt", as_str),
    "updated_at": ("updatedAt", as_str),
}


@dataclass
class PaymentCard:
    """A payment link / card payment order.

    ``amount`` is expressed in the currency's smallest unit (cents).
    """

    id: str = ""
    credential_id: Any = None
    reference: str = ""
    concept: str = ""
    description: str = ""
    amount: int = 0
    currency: str = ""
    single_use: bool = False
    reason_id: int = 0
    reason_des: str = ""
    user_id: str = ""
    qr_image: str = ""
    short_url: str = ""
    state: int = 0
    expiration_days: int = 0
    lang: str = ""
    url_success: str = ""
    url_failed: str = ""
    url_notification: str = ""
    account_id: int = 0
    expiration_date: str = ""
    service_date: str = ""
    has_client: bool = False
    payment_url: str = ""
    favorite: bool = False
    save_token: bool = False
    payment_card_type: int = 0
    image_base: str = ""
    force_3ds: bool = False
    origin: int = 0
    strict_postal_code_check: bool = False
    strict_address_check: bool = False
    destination_currency: str = ""
    payment_3ds: int = 0
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_dict(cls, payload: Any) -> "PaymentCard":
        data = _require_mapping(payload, "payment card")
        kwargs: dict[str, Any] = {"credential_id": data.get("credentialId")}
        for attr, (key, convert) in _CARD_FIELDS.items():
            value = data.get(key)
            if value is not None:
                kwargs[attr] = convert(value)
        return cls(**kwargs)


@dataclass
class CreatePaymentCardRequest:
    number: str
    cvc: str
    holder_name: str
    expiry_month: int
    expiry_year: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "number": self.number,
            "cvc": self.cvc,
            "holderName": self.holder_name,
            "expiryMonth": int(self.expiry_month),
            "expiryYear": int(self.expiry_year),
        }


# --- movements ---


class MovementState(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class Movement:
    id: MovementId | None = None
    amount: int = 0
    currency: str = ""
    # Kept as free text: the API is not consistent about casing.
    state: str = ""
    reference: str = ""
    created_at: str = ""
    completed_at: str = ""
    balance_before: int = 0
    balance_after: int = 0
    recipient: User | None = None
    sender: User | None = None
    account: Any = None

    @classmethod
    def from_dict(cls, payload: Any) -> "Movement":
        data = _require_mapping(payload, "movement")
        recipient = data.get("recipient")
        sender = data.get("sender")
        return cls(
            id=parse_movement_id(data.get("id")),
            amount=as_int(data.get("amount")),
            currency=as_str(data.get("currency")),
            state=as_str(data.get("state")),
            reference=as_str(data.get("reference")),
            created_at=as_str(data.get("createdAt")),
            completed_at=as_str(data.get("completedAt")),
            balance_before=as_int(data.get("balanceBefore")),
            balance_after=as_int(data.get("balanceAfter")),
            recipient=User.from_dict(recipient) if isinstance(recipient, Mapping) else None,
            sender=User.from_dict(sender) if isinstance(sender, Mapping) else None,
            account=data.get("account"),
        )


@dataclass
class MovementFilter:
    state: list[str] = field(default_factory=list)
    currency: str = ""
    amount_gte: int = 0
    amount_lte: int = 0
    created_at_from: str = ""
    created_at_to: str = ""
    reference: str = ""
    account_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Wire form; empty criteria are left out."""
        raw = {
            "state": [s.value if isinstance(s, MovementState) else s for s in self.state],
            "currency": self.currency,
            "amountGte": self.amount_gte,
            "amountLte": self.amount_lte,
            "createdAtFrom": self.created_at_from,
            "createdAtTo": self.created_at_to,
            "reference": self.reference,
            "accountId": self.account_id,
        }
        return {k: v for k, v in raw.items() if v}


@dataclass
class MovementList:
    items: list[Movement] = field(default_factory=list)
    total_count: int = 0
    has_more: bool = False

    @classmethod
    def from_dict(cls, payload: Any) -> "MovementList":
        data = _require_mapping(payload, "movement list")
        return cls(
            items=list_of(Movement.from_dict)(data.get("items")),
            total_count=as_int(data.get("totalCount")),
            has_more=bool(data.get("hasMore")),
        )
