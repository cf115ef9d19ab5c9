from __future__ import annotations

from disc_admin.schemas.types import REDIRECT_TARGETS, VALID_ROLES, Decision, MatchMode, RouteClass

LOGIN_PATH = "/login"
UNAUTHORIZED_PATH = "/unauthorized"
HOME_PATH = "/"
ORDERS_PREFIX = "/orders"

PUBLIC_PATHS: frozenset[str] = frozenset({LOGIN_PATH, UNAUTHORIZED_PATH})


def normalize_path(path: str) -> str:
    path = (path or "").strip()
    if not path:
        return HOME_PATH
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/") or HOME_PATH
    return path


def path_matches_prefix(path: str, prefix: str, *, match_mode: MatchMode = "segment") -> bool:
    if match_mode == "prefix":
        return path.startswith(prefix)
    return path == prefix or path.startswith(prefix + "/")


def classify_route(path: str, *, match_mode: MatchMode = "segment") -> RouteClass:
    path = normalize_path(path)
    if path in PUBLIC_PATHS:
        return "public"
    if path == HOME_PATH or path_matches_prefix(path, ORDERS_PREFIX, match_mode=match_mode):
        return "printer_allowed"
    return "admin_only"


def is_valid_role(role: str | None) -> bool:
    return role is not None and role in VALID_ROLES


def evaluate(role: str | None, path: str, *, match_mode: MatchMode = "segment") -> Decision:
    """Decide what the UI shell does with a request for ``path``.

    ``role`` is ``None`` for an unauthenticated caller. Any string outside
    the known roles is an authenticated caller without access. The
    unauthorized page is always reachable so such a caller can sign out.
    """
    path = normalize_path(path)

    if path == LOGIN_PATH:
        return "redirect_home" if is_valid_role(role) else "allow"

    if path == UNAUTHORIZED_PATH:
        return "allow"

    if role is None:
        return "redirect_login"

    if not is_valid_role(role):
        return "redirect_unauthorized"

    if role == "printer" and classify_route(path, match_mode=match_mode) != "printer_allowed":
        return "redirect_orders"

    return "allow"


def redirect_target(decision: Decision) -> str | None:
    return REDIRECT_TARGETS.get(decision)
