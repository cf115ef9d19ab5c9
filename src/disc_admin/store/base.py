from __future__ import annotations

from typing import Any, Protocol

from disc_admin.schemas.types import Order, PlasticType


class OrderStore(Protocol):
    def read_order(self, order_id: str) -> Order:
        ...

    def apply_order_update(self, order_id: str, expected_status: str, fields: dict[str, Any]) -> None:
        """Apply ``fields`` only if the stored status still equals ``expected_status``.

        Raises ``ConflictError`` when it does not, and ``PersistenceError``
        for any other failure. Must not retry.
        """
        ...


class PlasticStore(Protocol):
    def read_plastic(self, plastic_id: str) -> PlasticType:
        ...

    def apply_plastic_update(self, plastic_id: str, expected_status: str, fields: dict[str, Any]) -> None:
        ...
