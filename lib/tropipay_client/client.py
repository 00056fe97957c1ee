from __future__ import annotations

from typing import Any, Callable, TypeVar
from urllib.parse import quote

from .config_types import ClientConfig
from .errors import DecodeError
from .models import (
    CreatePaymentCardRequest,
    MovementFilter,
    MovementList,
    PaymentCard,
    User,
    list_of,
)
from .movements import (
    BUSINESS_MOVEMENTS_PATH,
    movement_list_from_graphql,
    movements_path,
    search_request,
)
from .transport import Transport, raw_json

T = TypeVar("T")


def _segment(value: str | int) -> str:
    return quote(str(value), safe="")


class TropipayClient:
    def __init__(self, cfg: ClientConfig):
        self._t = Transport(cfg)

    def __enter__(self) -> "TropipayClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._t.close()

    @property
    def base_url(self) -> str:
        return self._t.base_url

    def request(
            self,
            method: str,
            path: str,
            *,
            json_body: Any | None = None,
            result: Callable[[Any], T] | None = None,
            timeout: float | None = None,
    ) -> T | None:
        """Authenticated call shared by every resource method below."""
        return self._t.request(method, path, json_body=json_body, result=result, timeout=timeout)

    # --- payment cards ---
    def list_payment_cards(self, *, timeout: float | None = None) -> list[PaymentCard]:
        return self.request("GET", "/paymentcards", result=list_of(PaymentCard.from_dict), timeout=timeout)

    def get_payment_card(self, card_id: str, *, timeout: float | None = None) -> PaymentCard:
        return self.request("GET", f"/paymentcards/{_segment(card_id)}", result=PaymentCard.from_dict, timeout=timeout)

    def create_payment_card(self, req: CreatePaymentCardRequest, *, timeout: float | None = None) -> PaymentCard:
        return self.request("POST", "/paymentcards", json_body=req, result=PaymentCard.from_dict, timeout=timeout)

    def delete_payment_card(self, card_id: str, *, timeout: float | None = None) -> None:
        self.request("DELETE", f"/paymentcards/{_segment(card_id)}", timeout=timeout)

    # --- movements ---
    def list_movements(
            self,
            *,
            limit: int = 0,
            offset: int = 0,
            movement_filter: MovementFilter | None = None,
            timeout: float | None = None,
    ) -> MovementList:
        path = movements_path("/movements/", limit=limit, offset=offset, movement_filter=movement_filter)
        return self.request("GET", path, result=MovementList.from_dict, timeout=timeout)

    def list_account_movements(
            self,
            account_id: str,
            *,
            limit: int = 0,
            offset: int = 0,
            movement_filter: MovementFilter | None = None,
            timeout: float | None = None,
    ) -> MovementList:
        path = movements_path(
            f"/accounts/{_segment(account_id)}/movements",
            limit=limit,
            offset=offset,
            movement_filter=movement_filter,
        )
        return self.request("GET", path, result=MovementList.from_dict, timeout=timeout)

    def search_movements(
            self,
            *,
            movement_filter: MovementFilter | None = None,
            limit: int = 0,
            offset: int = 0,
            timeout: float | None = None,
    ) -> MovementList:
        body = search_request(movement_filter, limit, offset)
        envelope = self.request("POST", BUSINESS_MOVEMENTS_PATH, json_body=body, result=raw_json, timeout=timeout)
        try:
            return movement_list_from_graphql(envelope)
        except (KeyError, TypeError, ValueError) as e:
            raise DecodeError(f"failed to decode movements search response: {e}") from e

    # --- profile ---
    def get_user_profile(self, *, timeout: float | None = None) -> User:
        return self.request("GET", "/users/profile", result=User.from_dict, timeout=timeout)
