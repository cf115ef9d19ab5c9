from __future__ import annotations

import logging

from disc_admin.logging_utils import sanitize_for_log
from disc_admin.schemas.types import PlasticType, ReviewResult
from disc_admin.store.base import PlasticStore
from disc_admin.store.errors import ConflictError, PersistenceError

logger = logging.getLogger(__name__)

REVIEWABLE_STATUS = "pending"
REVIEW_OUTCOMES: dict[str, str] = {
    "approve": "approved",
    "reject": "rejected",
}


def review_plastic(plastic: PlasticType, action: str) -> ReviewResult:
    """Approve or reject a user-submitted plastic type.

    Official and already reviewed rows are not reviewable; the only thing
    left to do with them is delete them, which is a plain store call.
    """
    target = REVIEW_OUTCOMES.get(action)
    if target is None or plastic.status != REVIEWABLE_STATUS:
        return ReviewResult(
            success=False,
            error_reason="invalid_transition",
            message=f"Cannot {action} a plastic type in status '{plastic.status}'.",
        )
    return ReviewResult(success=True, updated_fields={"status": target}, message=f"Plastic type {target}")


def apply_review(store: PlasticStore, plastic: PlasticType, action: str) -> ReviewResult:
    result = review_plastic(plastic, action)
    if not result.success:
        return result

    try:
        store.apply_plastic_update(plastic.id, plastic.status, result.updated_fields)
    except ConflictError:
        logger.warning("Plastic review conflict", extra={"plastic_id": sanitize_for_log(plastic.id)})
        return ReviewResult(
            success=False,
            error_reason="conflict",
            message="Plastic type was already reviewed. Refresh and try again.",
        )
    except PersistenceError as exc:
        logger.warning(
            "Plastic review write failed",
            extra={"plastic_id": sanitize_for_log(plastic.id), "error": sanitize_for_log(exc)},
        )
        return ReviewResult(success=False, error_reason="persistence_failure", message=f"Failed to {action} plastic type")

    return result
