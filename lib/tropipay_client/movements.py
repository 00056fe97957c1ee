from __future__ import annotations

import json
from typing import Any
from urllib.parse import urlencode

from .errors import GraphQLError
from .models import Movement, MovementFilter, MovementList, User, as_int, as_str, parse_movement_id

BUSINESS_MOVEMENTS_PATH = "/movements/business"

SEARCH_MOVEMENTS_QUERY = """query GetMovements($filter: MovementFilter, $pagination: PaginationInput) {
  movements(filter: $filter, pagination: $pagination) {
    items {
      id
      reference
      concept
      state
      createdAt
      completedAt
      amount {
        value
        currency
      }
      sender
      recipient
      movementDetail {
        senderData {
          name
          email
        }
        recipientData {
          name
          account
        }
      }
    }
    totalCount
  }
}"""


def movements_path(path: str, *, limit: int = 0, offset: int = 0, movement_filter: MovementFilter | None = None) -> str:
    params: dict[str, Any] = {}
    if limit > 0:
        params["limit"] = int(limit)
    if offset > 0:
        params["offset"] = int(offset)
    if movement_filter is not None:
        params["query"] = json.dumps(movement_filter.to_dict(), separators=(",", ":"))
    query = urlencode(sorted(params.items())) if params else ""
    return path + (f"?{query}" if query else "")


def search_request(movement_filter: MovementFilter | None, limit: int, offset: int) -> dict[str, Any]:
    return {
        "query": SEARCH_MOVEMENTS_QUERY,
        "variables": {
            "filter": movement_filter.to_dict() if movement_filter is not None else None,
            "pagination": {"limit": int(limit), "offset": int(offset)},
        },
    }


def _sub(data: Any, key: str) -> dict:
    value = data.get(key) if isinstance(data, dict) else None
    return value if isinstance(value, dict) else {}


def _movement_from_graphql(item: Any) -> Movement:
    if not isinstance(item, dict):
        raise TypeError("movement item is not a JSON object")
    amount = _sub(item, "amount")
    detail = _sub(item, "movementDetail")
    sender_data = _sub(detail, "senderData")
    recipient_data = _sub(detail, "recipientData")

    sender = User(name=as_str(item.get("sender")))
    if sender_data.get("name"):
        sender.name = as_str(sender_data.get("name"))
        sender.email = as_str(sender_data.get("email"))

    recipient = User(name=as_str(item.get("recipient")))
    if recipient_data.get("name"):
        recipient.name = as_str(recipient_data.get("name"))

    # Balances are not part of the GraphQL item.
    return Movement(
        id=parse_movement_id(item.get("id")),
        amount=as_int(amount.get("value")),
        currency=as_str(amount.get("currency")),
        state=as_str(item.get("state")),
        reference=as_str(item.get("reference")),
        created_at=as_str(item.get("createdAt")),
        completed_at=as_str(item.get("completedAt")),
        sender=sender,
        recipient=recipient,
    )


def movement_list_from_graphql(envelope: Any) -> MovementList:
    """Unwrap a ``{data, errors}`` envelope into a :class:`MovementList`.

    A non-empty ``errors`` array wins over any partial data.
    """
    if not isinstance(envelope, dict):
        raise TypeError("GraphQL response is not a JSON object")
    errors = envelope.get("errors")
    if errors:
        raise GraphQLError(list(errors))

    movements = _sub(_sub(envelope, "data"), "movements")
    raw_items = movements.get("items") or []
    if not isinstance(raw_items, list):
        raise TypeError("movements.items is not a JSON array")
    items = [_movement_from_graphql(item) for item in raw_items]
    total = as_int(movements.get("totalCount"))
    return MovementList(items=items, total_count=total, has_more=len(items) < total)
