from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from disc_admin import __version__
from disc_admin.access.guards import require_admin, require_admin_or_printer
from disc_admin.access.identity import StaticIdentity
from disc_admin.access.policy import classify_route, evaluate, redirect_target
from disc_admin.config import Settings
from disc_admin.logging_utils import configure_logging, sanitize_for_log
from disc_admin.orders.clock import Clock, SystemClock
from disc_admin.orders.service import apply_transition, shell_policy_violation
from disc_admin.orders.state_machine import available_actions
from disc_admin.orders.timeline import build_timeline
from disc_admin.plastics.review import apply_review
from disc_admin.schemas.types import Decision, Order, TransitionRequest, to_dict
from disc_admin.store.errors import NotFoundError, PersistenceError
from disc_admin.store.memory import InMemoryStore

_API_INSTALL_HINT = "Install API dependencies with: pip install -e '.[api]'."
_API_IMPORT_ERROR: Exception | None = None

ROLE_HEADER = "X-Dashboard-Role"

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from fastapi import FastAPI as FastAPIApp

try:
    from fastapi import FastAPI, Header, HTTPException
    from disc_admin.api.models import (
        EvaluateRequest,
        EvaluateResponse,
        HealthResponse,
        OrderResponse,
        ReviewBody,
        TimelineResponse,
        TransitionBody,
        TransitionResponse,
    )
except Exception as exc:  # pragma: no cover - exercised in minimal installs without API extras.
    FastAPI = None  # type: ignore[assignment]
    Header = None  # type: ignore[assignment]
    HTTPException = None  # type: ignore[assignment]
    _API_IMPORT_ERROR = exc

_ERROR_STATUS_CODES = {
    "invalid_transition": 409,
    "conflict": 409,
    "persistence_failure": 503,
}


class ApiDependencyError(RuntimeError):
    """Raised when optional API dependencies are unavailable."""


def _missing_dependency_error(exc: Exception) -> ApiDependencyError:
    return ApiDependencyError(f"API adapter is unavailable ({exc.__class__.__name__}: {exc}). {_API_INSTALL_HINT}")


def _load_api_dependencies() -> tuple[Any, Any, Any]:
    if _API_IMPORT_ERROR is not None:
        raise _missing_dependency_error(_API_IMPORT_ERROR) from _API_IMPORT_ERROR
    return FastAPI, Header, HTTPException


def _order_response(order: Order) -> OrderResponse:
    return OrderResponse(**to_dict(order), available_actions=list(available_actions(order.status)))


def create_app(
    store: InMemoryStore | None = None,
    clock: Clock | None = None,
    settings: Settings | None = None,
) -> FastAPIApp:
    FastAPI, Header, HTTPException = _load_api_dependencies()
    store = store if store is not None else InMemoryStore()
    clock = clock if clock is not None else SystemClock()
    settings = settings if settings is not None else Settings.from_env()
    for note in settings.notes:
        logger.warning(note)

    app = FastAPI(title="Disc Admin API", version=__version__)
    app.state.store = store

    def _guard(header_role: str | None, page_path: str, page_guard: Callable[[str | None], Decision]) -> None:
        role = StaticIdentity(role=header_role).current_role()
        decision = evaluate(role, page_path, match_mode=settings.route_match)
        if decision == "allow":
            decision = page_guard(role)
        if decision == "allow":
            return
        logger.info(
            "Access denied",
            extra={"role": sanitize_for_log(role), "path": sanitize_for_log(page_path), "decision": decision},
        )
        status_code = 401 if decision == "redirect_login" else 403
        raise HTTPException(
            status_code=status_code,
            detail={"decision": decision, "redirect_to": redirect_target(decision)},
        )

    def _store_failure(exc: PersistenceError) -> HTTPException:
        if isinstance(exc, NotFoundError):
            return HTTPException(status_code=404, detail=str(exc))
        logger.warning("Store access failed", extra={"error": sanitize_for_log(exc)})
        return HTTPException(
            status_code=503,
            detail={"error_reason": "persistence_failure", "message": "Data store is unavailable"},
        )

    def _load_order(order_id: str) -> Order:
        try:
            return store.read_order(order_id)
        except PersistenceError as exc:
            raise _store_failure(exc) from exc

    @app.get("/healthz", response_model=HealthResponse)
    def healthz() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__)

    @app.post("/v1/access/evaluate", response_model=EvaluateResponse)
    def access_evaluate(request: EvaluateRequest) -> EvaluateResponse:
        decision = evaluate(request.role, request.path, match_mode=settings.route_match)
        return EvaluateResponse(
            decision=decision,
            redirect_to=redirect_target(decision),
            route_class=classify_route(request.path, match_mode=settings.route_match),
        )

    @app.get("/v1/orders/{order_id}", response_model=OrderResponse)
    def get_order(order_id: str, x_dashboard_role: str | None = Header(default=None)) -> OrderResponse:
        _guard(x_dashboard_role, f"/orders/{order_id}", require_admin_or_printer)
        return _order_response(_load_order(order_id))

    @app.get("/v1/orders/{order_id}/timeline", response_model=TimelineResponse)
    def get_timeline(order_id: str, x_dashboard_role: str | None = Header(default=None)) -> TimelineResponse:
        _guard(x_dashboard_role, f"/orders/{order_id}", require_admin_or_printer)
        timeline = build_timeline(_load_order(order_id))
        return TimelineResponse(**to_dict(timeline))

    @app.post("/v1/orders/{order_id}/transitions", response_model=TransitionResponse)
    def post_transition(
        order_id: str,
        body: TransitionBody,
        x_dashboard_role: str | None = Header(default=None),
    ) -> TransitionResponse:
        _guard(x_dashboard_role, f"/orders/{order_id}", require_admin_or_printer)
        order = _load_order(order_id)
        request = TransitionRequest(action=body.action, tracking_number=body.tracking_number)

        violation = shell_policy_violation(request, require_tracking=settings.require_tracking)
        if violation is not None:
            raise HTTPException(status_code=422, detail=violation)

        result = apply_transition(store, order, request, clock=clock)
        if not result.success:
            raise HTTPException(
                status_code=_ERROR_STATUS_CODES[result.error_reason or "persistence_failure"],
                detail={"error_reason": result.error_reason, "message": result.message},
            )
        return TransitionResponse(**to_dict(result))

    @app.post("/v1/plastics/{plastic_id}/review", response_model=TransitionResponse)
    def post_review(
        plastic_id: str,
        body: ReviewBody,
        x_dashboard_role: str | None = Header(default=None),
    ) -> TransitionResponse:
        _guard(x_dashboard_role, "/plastics", require_admin)
        try:
            plastic = store.read_plastic(plastic_id)
        except PersistenceError as exc:
            raise _store_failure(exc) from exc

        result = apply_review(store, plastic, body.action)
        if not result.success:
            raise HTTPException(
                status_code=_ERROR_STATUS_CODES[result.error_reason or "persistence_failure"],
                detail={"error_reason": result.error_reason, "message": result.message},
            )
        return TransitionResponse(**to_dict(result))

    @app.delete("/v1/plastics/{plastic_id}", status_code=204)
    def delete_plastic(plastic_id: str, x_dashboard_role: str | None = Header(default=None)) -> None:
        _guard(x_dashboard_role, "/plastics", require_admin)
        try:
            store.delete_plastic(plastic_id)
        except PersistenceError as exc:
            raise _store_failure(exc) from exc

    return app


try:
    app = create_app()
except ApiDependencyError:
    app = None


def app_entry() -> None:
    try:
        import uvicorn
    except Exception as exc:
        raise SystemExit(str(_missing_dependency_error(exc))) from exc

    settings = Settings.from_env()
    configure_logging(settings.log_level)
    try:
        api_app = create_app(settings=settings)
    except ApiDependencyError as exc:
        raise SystemExit(str(exc)) from exc

    uvicorn.run(api_app, host=settings.api_host, port=settings.api_port)
