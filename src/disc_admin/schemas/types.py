from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Literal
import json

Role = Literal["admin", "printer"]
RouteClass = Literal["public", "printer_allowed", "admin_only"]
MatchMode = Literal["segment", "prefix"]
Decision = Literal["allow", "redirect_login", "redirect_unauthorized", "redirect_orders", "redirect_home"]

OrderStatus = Literal["pending_payment", "paid", "processing", "printed", "shipped", "delivered", "cancelled"]
ActionName = Literal["start_processing", "mark_printed", "mark_shipped", "mark_delivered"]
ErrorReason = Literal["invalid_transition", "persistence_failure", "conflict"]

PlasticStatus = Literal["pending", "approved", "official", "rejected"]
ReviewAction = Literal["approve", "reject"]

TimelineState = Literal["active", "cancelled", "awaiting_payment"]

VALID_ROLES: frozenset[str] = frozenset({"admin", "printer"})
ORDER_STATUSES: tuple[str, ...] = (
    "pending_payment",
    "paid",
    "processing",
    "printed",
    "shipped",
    "delivered",
    "cancelled",
)
FULFILLMENT_FLOW: tuple[str, ...] = ("paid", "processing", "printed", "shipped", "delivered")
TERMINAL_STATUSES: frozenset[str] = frozenset({"delivered", "cancelled"})
ACTION_NAMES: tuple[str, ...] = ("start_processing", "mark_printed", "mark_shipped", "mark_delivered")
PLASTIC_STATUSES: tuple[str, ...] = ("pending", "approved", "official", "rejected")
REVIEW_ACTIONS: tuple[str, ...] = ("approve", "reject")

REDIRECT_TARGETS: dict[str, str] = {
    "redirect_login": "/login",
    "redirect_unauthorized": "/unauthorized",
    "redirect_orders": "/orders",
    "redirect_home": "/",
}


@dataclass
class Order:
    id: str
    status: str
    tracking_number: str | None = None
    printed_at: datetime | None = None
    shipped_at: datetime | None = None
    created_at: datetime | None = None


@dataclass
class TransitionRequest:
    action: str
    tracking_number: str | None = None


@dataclass
class TransitionResult:
    success: bool
    updated_fields: dict[str, Any] = field(default_factory=dict)
    error_reason: ErrorReason | None = None
    message: str = ""


@dataclass
class PlasticType:
    id: str
    name: str
    manufacturer: str = ""
    status: str = "pending"


@dataclass
class ReviewResult:
    success: bool
    updated_fields: dict[str, Any] = field(default_factory=dict)
    error_reason: ErrorReason | None = None
    message: str = ""


@dataclass
class TimelineStep:
    status: str
    label: str
    completed: bool
    at: datetime | None = None


@dataclass
class OrderTimeline:
    state: TimelineState
    steps: list[TimelineStep] = field(default_factory=list)
    tracking_number: str | None = None
    notice: str | None = None


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {value.__class__.__name__} is not JSON serializable")


def dumps(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2, default=_json_default)


def to_dict(instance: Any) -> Any:
    return asdict(instance)
