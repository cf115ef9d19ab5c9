from __future__ import annotations

from dataclasses import dataclass, replace

from disc_admin.orders.service import CONFLICT_MESSAGE
from disc_admin.schemas.types import ErrorReason, Order, TransitionResult


@dataclass(frozen=True)
class OrderViewState:
    """What an order detail page shows while the user acts on it."""

    status: str
    tracking_number: str | None = None
    pending_action: str | None = None
    notice: str | None = None
    error: ErrorReason | None = None

    @classmethod
    def from_order(cls, order: Order) -> OrderViewState:
        return cls(status=order.status, tracking_number=order.tracking_number)

    @property
    def busy(self) -> bool:
        return self.pending_action is not None


@dataclass(frozen=True)
class Submitted:
    action: str


@dataclass(frozen=True)
class Completed:
    result: TransitionResult


def reduce(state: OrderViewState, event: Submitted | Completed) -> OrderViewState:
    if isinstance(event, Submitted):
        # controls stay disabled until the pending write resolves
        if state.busy:
            return state
        return replace(state, pending_action=event.action, notice=None, error=None)

    result = event.result
    if result.success:
        fields = result.updated_fields
        return replace(
            state,
            status=fields.get("status", state.status),
            tracking_number=fields.get("tracking_number", state.tracking_number),
            pending_action=None,
            notice=result.message or None,
            error=None,
        )

    notice = CONFLICT_MESSAGE if result.error_reason == "conflict" else (result.message or None)
    return replace(state, pending_action=None, notice=notice, error=result.error_reason)
