from __future__ import annotations

from disc_admin.access.policy import is_valid_role
from disc_admin.schemas.types import Decision


def require_admin(role: str | None) -> Decision:
    """Page-level check for admin-only pages.

    Printers are sent to the orders list, everyone else without a valid
    role to the unauthorized page.
    """
    if not is_valid_role(role):
        return "redirect_unauthorized"
    if role != "admin":
        return "redirect_orders"
    return "allow"


def require_admin_or_printer(role: str | None) -> Decision:
    if not is_valid_role(role):
        return "redirect_unauthorized"
    return "allow"
