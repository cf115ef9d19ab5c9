from __future__ import annotations

from disc_admin.schemas.types import FULFILLMENT_FLOW, Order, OrderTimeline, TimelineStep

NO_TRACKING_NOTICE = "Shipped without tracking. Delivery status cannot be tracked."

_LABELS: dict[str, str] = {
    "paid": "Payment Received",
    "processing": "Processing Started",
    "printed": "Printed",
    "shipped": "Shipped",
    "delivered": "Delivered",
}


def status_index(status: str) -> int:
    """Position of ``status`` in the fulfillment flow, -1 when outside it."""
    try:
        return FULFILLMENT_FLOW.index(status)
    except ValueError:
        return -1


def build_timeline(order: Order) -> OrderTimeline:
    if order.status == "cancelled":
        return OrderTimeline(state="cancelled")
    if order.status == "pending_payment":
        return OrderTimeline(state="awaiting_payment")

    current = status_index(order.status)
    # processing start and delivery are not tracked separately
    stamps = {
        "paid": order.created_at,
        "processing": order.created_at,
        "printed": order.printed_at,
        "shipped": order.shipped_at,
        "delivered": None,
    }

    steps: list[TimelineStep] = []
    for index, status in enumerate(FULFILLMENT_FLOW):
        completed = current >= index
        steps.append(
            TimelineStep(
                status=status,
                label=_LABELS[status],
                completed=completed,
                at=stamps[status] if completed else None,
            )
        )

    notice = None
    if order.status == "shipped" and not order.tracking_number:
        notice = NO_TRACKING_NOTICE

    return OrderTimeline(state="active", steps=steps, tracking_number=order.tracking_number, notice=notice)
