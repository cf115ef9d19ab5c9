from __future__ import annotations

from typing import Any

from disc_admin.orders.clock import Clock, SystemClock
from disc_admin.schemas.types import TERMINAL_STATUSES, Order, TransitionRequest, TransitionResult

# action -> (required current status, new status)
TRANSITIONS: dict[str, tuple[str, str]] = {
    "start_processing": ("paid", "processing"),
    "mark_printed": ("processing", "printed"),
    "mark_shipped": ("printed", "shipped"),
    "mark_delivered": ("shipped", "delivered"),
}

_STAMPED_FIELDS: dict[str, str] = {
    "printed": "printed_at",
    "shipped": "shipped_at",
}


def available_actions(status: str) -> tuple[str, ...]:
    return tuple(action for action, (source, _) in TRANSITIONS.items() if source == status)


def _rejected(order: Order, action: str) -> TransitionResult:
    return TransitionResult(
        success=False,
        error_reason="invalid_transition",
        message=f"Action '{action}' is not allowed for an order in status '{order.status}'.",
    )


def request_transition(order: Order, request: TransitionRequest, *, clock: Clock | None = None) -> TransitionResult:
    """Validate ``request`` against the order snapshot and compute the update.

    Pure over the snapshot: the order is never mutated and the clock is
    read only when a transition succeeds and stamps a timestamp.
    """
    rule = TRANSITIONS.get(request.action)
    if rule is None or order.status in TERMINAL_STATUSES:
        return _rejected(order, request.action)

    source, target = rule
    if order.status != source:
        return _rejected(order, request.action)

    fields: dict[str, Any] = {"status": target}
    stamp_field = _STAMPED_FIELDS.get(target)
    if stamp_field is not None:
        fields[stamp_field] = (clock or SystemClock()).now()

    if request.action == "mark_shipped":
        tracking = (request.tracking_number or "").strip()
        if tracking:
            fields["tracking_number"] = tracking

    return TransitionResult(success=True, updated_fields=fields, message=f"Order status updated to {target}")
