from __future__ import annotations

from disc_admin.access.guards import require_admin, require_admin_or_printer
from disc_admin.access.identity import StaticIdentity, role_from_user
from disc_admin.access.policy import evaluate


def test_require_admin() -> None:
    assert require_admin(None) == "redirect_unauthorized"
    assert require_admin("viewer") == "redirect_unauthorized"
    assert require_admin("printer") == "redirect_orders"
    assert require_admin("admin") == "allow"


def test_require_admin_or_printer() -> None:
    assert require_admin_or_printer(None) == "redirect_unauthorized"
    assert require_admin_or_printer("") == "redirect_unauthorized"
    assert require_admin_or_printer("printer") == "allow"
    assert require_admin_or_printer("admin") == "allow"


def test_role_from_user_reads_app_metadata() -> None:
    assert role_from_user(None) is None
    assert role_from_user({"id": "u1", "app_metadata": {"role": "admin"}}) == "admin"
    assert role_from_user({"id": "u1", "app_metadata": {"role": "printer"}}) == "printer"


def test_role_from_user_without_usable_claim_is_authenticated_but_unrecognized() -> None:
    assert role_from_user({"id": "u1"}) == ""
    assert role_from_user({"id": "u1", "app_metadata": None}) == ""
    assert role_from_user({"id": "u1", "app_metadata": {}}) == ""
    assert role_from_user({"id": "u1", "app_metadata": {"role": 7}}) == ""


def test_identity_feeds_the_evaluator() -> None:
    signed_out = StaticIdentity.from_user(None)
    no_role = StaticIdentity.from_user({"id": "u1", "app_metadata": None})
    printer = StaticIdentity.from_user({"id": "u2", "app_metadata": {"role": "printer"}})

    assert evaluate(signed_out.current_role(), "/users") == "redirect_login"
    assert evaluate(no_role.current_role(), "/users") == "redirect_unauthorized"
    assert evaluate(printer.current_role(), "/users") == "redirect_orders"
