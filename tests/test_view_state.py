from __future__ import annotations

from disc_admin.orders.service import CONFLICT_MESSAGE
from disc_admin.orders.view_state import Completed, OrderViewState, Submitted, reduce
from disc_admin.schemas.types import Order, TransitionResult


def test_submit_marks_pending_and_ignores_double_submit() -> None:
    state = OrderViewState.from_order(Order(id="o1", status="processing"))

    state = reduce(state, Submitted("mark_printed"))
    assert state.busy
    assert state.pending_action == "mark_printed"

    again = reduce(state, Submitted("mark_printed"))
    assert again is state


def test_success_advances_displayed_status() -> None:
    state = reduce(OrderViewState(status="printed"), Submitted("mark_shipped"))
    result = TransitionResult(
        success=True,
        updated_fields={"status": "shipped", "tracking_number": "T1"},
        message="Order status updated to shipped",
    )

    state = reduce(state, Completed(result))

    assert state.status == "shipped"
    assert state.tracking_number == "T1"
    assert not state.busy
    assert state.notice == "Order status updated to shipped"


def test_failure_keeps_prior_status() -> None:
    state = reduce(OrderViewState(status="paid"), Submitted("start_processing"))
    result = TransitionResult(success=False, error_reason="persistence_failure", message="Failed to update order status")

    state = reduce(state, Completed(result))

    assert state.status == "paid"
    assert state.error == "persistence_failure"
    assert state.notice == "Failed to update order status"
    assert not state.busy


def test_conflict_prompts_refresh() -> None:
    state = reduce(OrderViewState(status="paid"), Submitted("start_processing"))

    state = reduce(state, Completed(TransitionResult(success=False, error_reason="conflict")))

    assert state.status == "paid"
    assert state.error == "conflict"
    assert state.notice == CONFLICT_MESSAGE
