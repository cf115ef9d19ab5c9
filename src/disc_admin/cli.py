from __future__ import annotations

import argparse
from datetime import datetime
import logging

from disc_admin.access.policy import classify_route, evaluate, redirect_target
from disc_admin.config import Settings
from disc_admin.logging_utils import configure_logging
from disc_admin.orders.clock import Clock, FixedClock, SystemClock
from disc_admin.orders.service import shell_policy_violation
from disc_admin.orders.state_machine import available_actions, request_transition
from disc_admin.orders.timeline import build_timeline
from disc_admin.plastics.review import review_plastic
from disc_admin.schemas.types import (
    ACTION_NAMES,
    ORDER_STATUSES,
    PLASTIC_STATUSES,
    REVIEW_ACTIONS,
    Order,
    PlasticType,
    TransitionRequest,
    dumps,
    to_dict,
)

logger = logging.getLogger(__name__)


def _timestamp(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid ISO-8601 timestamp: {value}") from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="discadmin", description="Disc admin decision CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    access = subparsers.add_parser("access", help="Evaluate route access for a role.")
    access.add_argument("path", help="Requested route path")
    access.add_argument("--role", default=None, help="Caller role; omit for an unauthenticated caller")
    access.add_argument(
        "--match",
        choices=["segment", "prefix"],
        default=None,
        help="Route prefix matching mode (defaults to DISCADMIN_ROUTE_MATCH)",
    )

    actions = subparsers.add_parser("actions", help="List actions available from an order status.")
    actions.add_argument("status", choices=ORDER_STATUSES)

    transition = subparsers.add_parser("transition", help="Validate an order transition.")
    transition.add_argument("status", choices=ORDER_STATUSES, help="Current order status")
    transition.add_argument("action", choices=ACTION_NAMES)
    transition.add_argument("--tracking", default=None, help="Tracking number for mark_shipped")
    transition.add_argument("--now", type=_timestamp, default=None, help="Fixed ISO-8601 time for timestamps")
    transition.add_argument("--order-id", default="cli", help="Order id to report")
    transition.add_argument(
        "--require-tracking",
        action="store_true",
        help="Refuse mark_shipped without a tracking number",
    )

    timeline = subparsers.add_parser("timeline", help="Show the fulfillment timeline of an order.")
    timeline.add_argument("status", choices=ORDER_STATUSES)
    timeline.add_argument("--tracking", default=None)
    timeline.add_argument("--created-at", type=_timestamp, default=None)
    timeline.add_argument("--printed-at", type=_timestamp, default=None)
    timeline.add_argument("--shipped-at", type=_timestamp, default=None)

    review = subparsers.add_parser("review", help="Validate a plastic type review.")
    review.add_argument("status", choices=PLASTIC_STATUSES, help="Current plastic type status")
    review.add_argument("action", choices=REVIEW_ACTIONS)

    return parser


def _run_access(args: argparse.Namespace, settings: Settings) -> int:
    match_mode = args.match or settings.route_match
    decision = evaluate(args.role, args.path, match_mode=match_mode)
    payload = {
        "decision": decision,
        "redirect_to": redirect_target(decision),
        "route_class": classify_route(args.path, match_mode=match_mode),
    }
    print(dumps(payload))
    return 0


def _run_transition(args: argparse.Namespace, settings: Settings) -> int:
    request = TransitionRequest(action=args.action, tracking_number=args.tracking)
    violation = shell_policy_violation(request, require_tracking=args.require_tracking or settings.require_tracking)
    if violation is not None:
        print(violation)
        return 1

    clock: Clock = FixedClock(args.now) if args.now is not None else SystemClock()
    result = request_transition(Order(id=args.order_id, status=args.status), request, clock=clock)
    print(dumps(to_dict(result)))
    return 0 if result.success else 1


def _run_timeline(args: argparse.Namespace) -> int:
    order = Order(
        id="cli",
        status=args.status,
        tracking_number=args.tracking,
        created_at=args.created_at,
        printed_at=args.printed_at,
        shipped_at=args.shipped_at,
    )
    print(dumps(to_dict(build_timeline(order))))
    return 0


def _run_review(args: argparse.Namespace) -> int:
    result = review_plastic(PlasticType(id="cli", name="cli", status=args.status), args.action)
    print(dumps(to_dict(result)))
    return 0 if result.success else 1


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    configure_logging(settings.log_level)
    for note in settings.notes:
        logger.warning(note)

    if args.command == "access":
        return _run_access(args, settings)
    if args.command == "actions":
        print(dumps({"status": args.status, "actions": list(available_actions(args.status))}))
        return 0
    if args.command == "transition":
        return _run_transition(args, settings)
    if args.command == "timeline":
        return _run_timeline(args)
    if args.command == "review":
        return _run_review(args)

    parser.print_help()
    return 2


def app() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    app()
