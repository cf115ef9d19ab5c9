from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from disc_admin.schemas.types import ActionName, Decision, ErrorReason, ReviewAction, RouteClass


class EvaluateRequest(BaseModel):
    role: str | None = None
    path: str = "/"

    model_config = ConfigDict(extra="forbid")


class EvaluateResponse(BaseModel):
    decision: Decision
    redirect_to: str | None
    route_class: RouteClass


class OrderResponse(BaseModel):
    id: str
    status: str
    tracking_number: str | None = None
    printed_at: datetime | None = None
    shipped_at: datetime | None = None
    created_at: datetime | None = None
    available_actions: list[str] = Field(default_factory=list)


class TransitionBody(BaseModel):
    action: ActionName
    tracking_number: str | None = None

    model_config = ConfigDict(extra="forbid")


class TransitionResponse(BaseModel):
    success: bool
    updated_fields: dict[str, Any]
    error_reason: ErrorReason | None = None
    message: str = ""


class TimelineStepResponse(BaseModel):
    status: str
    label: str
    completed: bool
    at: datetime | None = None


class TimelineResponse(BaseModel):
    state: Literal["active", "cancelled", "awaiting_payment"]
    steps: list[TimelineStepResponse]
    tracking_number: str | None = None
    notice: str | None = None


class ReviewBody(BaseModel):
    action: ReviewAction

    model_config = ConfigDict(extra="forbid")


class HealthResponse(BaseModel):
    status: Literal["ok"]
    version: str
