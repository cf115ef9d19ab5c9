from __future__ import annotations

import logging

from disc_admin.logging_utils import sanitize_for_log
from disc_admin.orders.clock import Clock
from disc_admin.orders.state_machine import request_transition
from disc_admin.schemas.types import Order, TransitionRequest, TransitionResult
from disc_admin.store.base import OrderStore
from disc_admin.store.errors import ConflictError, PersistenceError

logger = logging.getLogger(__name__)

CONFLICT_MESSAGE = "Order was updated by someone else. Refresh and try again."
FAILURE_MESSAGE = "Failed to update order status"


def apply_transition(
    store: OrderStore,
    order: Order,
    request: TransitionRequest,
    *,
    clock: Clock | None = None,
) -> TransitionResult:
    """Validate a transition against ``order`` and write it at most once.

    The write is conditioned on the snapshot's status, so a concurrent
    writer that got there first produces a ``conflict`` result instead of
    a lost update. Failed writes leave ``updated_fields`` empty.
    """
    result = request_transition(order, request, clock=clock)
    if not result.success:
        logger.info(
            "Transition rejected",
            extra={
                "order_id": sanitize_for_log(order.id),
                "status": sanitize_for_log(order.status),
                "action": sanitize_for_log(request.action),
            },
        )
        return result

    try:
        store.apply_order_update(order.id, order.status, result.updated_fields)
    except ConflictError as exc:
        logger.warning(
            "Transition conflict",
            extra={"order_id": sanitize_for_log(order.id), "actual_status": exc.actual_status},
        )
        return TransitionResult(success=False, error_reason="conflict", message=CONFLICT_MESSAGE)
    except PersistenceError as exc:
        logger.warning(
            "Transition write failed",
            extra={"order_id": sanitize_for_log(order.id), "error": sanitize_for_log(exc)},
        )
        return TransitionResult(success=False, error_reason="persistence_failure", message=FAILURE_MESSAGE)

    return result


def advance_order(
    store: OrderStore,
    order_id: str,
    request: TransitionRequest,
    *,
    clock: Clock | None = None,
) -> TransitionResult:
    try:
        order = store.read_order(order_id)
    except PersistenceError as exc:
        logger.warning(
            "Order read failed",
            extra={"order_id": sanitize_for_log(order_id), "error": sanitize_for_log(exc)},
        )
        return TransitionResult(success=False, error_reason="persistence_failure", message=FAILURE_MESSAGE)
    return apply_transition(store, order, request, clock=clock)


def shell_policy_violation(request: TransitionRequest, *, require_tracking: bool) -> str | None:
    """UI-shell rule layered on top of the machine, which accepts untracked shipments."""
    if require_tracking and request.action == "mark_shipped" and not (request.tracking_number or "").strip():
        return "Please enter a tracking number"
    return None
