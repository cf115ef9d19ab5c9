from __future__ import annotations

import pytest

from disc_admin.access.policy import classify_route, evaluate, normalize_path, path_matches_prefix, redirect_target

PROTECTED_PATHS = ["/", "/orders", "/orders/123", "/users", "/payments", "/system", "/plastics", "/orders-export"]


@pytest.mark.parametrize("role", ["", "viewer", "ADMIN", "superuser"])
@pytest.mark.parametrize("path", PROTECTED_PATHS)
def test_unrecognized_role_is_sent_to_unauthorized(role: str, path: str) -> None:
    assert evaluate(role, path) == "redirect_unauthorized"


@pytest.mark.parametrize("role", [None, "", "viewer", "admin", "printer"])
def test_unauthorized_page_is_always_reachable(role: str | None) -> None:
    assert evaluate(role, "/unauthorized") == "allow"


@pytest.mark.parametrize("path", PROTECTED_PATHS)
def test_unauthenticated_caller_is_sent_to_login(path: str) -> None:
    assert evaluate(None, path) == "redirect_login"


def test_login_page_renders_for_unauthenticated_caller() -> None:
    assert evaluate(None, "/login") == "allow"


@pytest.mark.parametrize("role", ["admin", "printer"])
def test_signed_in_user_is_redirected_away_from_login(role: str) -> None:
    decision = evaluate(role, "/login")
    assert decision != "allow"
    assert decision == "redirect_home"
    assert redirect_target(decision) == "/"


def test_login_page_renders_for_role_without_access() -> None:
    assert evaluate("viewer", "/login") == "allow"


def test_printer_access() -> None:
    assert evaluate("printer", "/users") == "redirect_orders"
    assert evaluate("printer", "/payments") == "redirect_orders"
    assert evaluate("printer", "/system") == "redirect_orders"
    assert evaluate("printer", "/orders") == "allow"
    assert evaluate("printer", "/orders/123") == "allow"
    assert evaluate("printer", "/") == "allow"


@pytest.mark.parametrize("path", PROTECTED_PATHS)
def test_admin_is_allowed_everywhere(path: str) -> None:
    assert evaluate("admin", path) == "allow"


def test_orders_prefix_matches_on_segment_boundary() -> None:
    assert evaluate("printer", "/orders-export") == "redirect_orders"
    assert evaluate("printer", "/orders-archive/1") == "redirect_orders"
    assert classify_route("/orders-export") == "admin_only"


def test_prefix_mode_keeps_raw_startswith_behaviour() -> None:
    assert evaluate("printer", "/orders-export", match_mode="prefix") == "allow"
    assert classify_route("/orders-export", match_mode="prefix") == "printer_allowed"


def test_path_matches_prefix() -> None:
    assert path_matches_prefix("/orders", "/orders")
    assert path_matches_prefix("/orders/abc/edit", "/orders")
    assert not path_matches_prefix("/ordersx", "/orders")
    assert path_matches_prefix("/ordersx", "/orders", match_mode="prefix")


def test_normalize_path() -> None:
    assert normalize_path("") == "/"
    assert normalize_path("orders") == "/orders"
    assert normalize_path("/orders/") == "/orders"
    assert normalize_path("/") == "/"


def test_trailing_slash_does_not_change_decision() -> None:
    assert evaluate("printer", "/orders/") == "allow"
    assert evaluate("viewer", "/unauthorized/") == "allow"
    assert evaluate("admin", "/login/") == "redirect_home"


def test_classify_route() -> None:
    assert classify_route("/login") == "public"
    assert classify_route("/unauthorized") == "public"
    assert classify_route("/") == "printer_allowed"
    assert classify_route("/orders/9") == "printer_allowed"
    assert classify_route("/recoveries") == "admin_only"


def test_redirect_targets() -> None:
    assert redirect_target("redirect_login") == "/login"
    assert redirect_target("redirect_unauthorized") == "/unauthorized"
    assert redirect_target("redirect_orders") == "/orders"
    assert redirect_target("allow") is None
