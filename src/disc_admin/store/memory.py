from __future__ import annotations

from dataclasses import fields as dataclass_fields
from dataclasses import replace
import logging
import threading
from typing import Any

from disc_admin.schemas.types import Order, PlasticType
from disc_admin.store.errors import ConflictError, NotFoundError, PersistenceError

logger = logging.getLogger(__name__)

_ORDER_FIELDS = frozenset(f.name for f in dataclass_fields(Order)) - {"id"}
_PLASTIC_FIELDS = frozenset(f.name for f in dataclass_fields(PlasticType)) - {"id"}


class InMemoryStore:
    """Process-local store for orders and plastic types.

    A single lock serializes writers, so the status check and the write of
    a conditional update happen atomically. Reads return copies; callers
    never hold a reference to stored rows.
    """

    def __init__(self, orders: list[Order] | None = None, plastics: list[PlasticType] | None = None) -> None:
        self._lock = threading.Lock()
        self._orders: dict[str, Order] = {}
        self._plastics: dict[str, PlasticType] = {}
        for order in orders or []:
            self.add_order(order)
        for plastic in plastics or []:
            self.add_plastic(plastic)

    def add_order(self, order: Order) -> None:
        with self._lock:
            self._orders[order.id] = replace(order)

    def read_order(self, order_id: str) -> Order:
        with self._lock:
            order = self._orders.get(order_id)
            if order is None:
                raise NotFoundError(f"Order not found: {order_id}")
            return replace(order)

    def list_orders(self, status: str | None = None) -> list[Order]:
        with self._lock:
            rows = [replace(order) for order in self._orders.values()]
        if status is not None:
            rows = [order for order in rows if order.status == status]
        return rows

    def apply_order_update(self, order_id: str, expected_status: str, fields: dict[str, Any]) -> None:
        unknown = set(fields) - _ORDER_FIELDS
        if unknown:
            raise PersistenceError(f"Unknown order field(s): {', '.join(sorted(unknown))}")

        with self._lock:
            order = self._orders.get(order_id)
            if order is None:
                raise NotFoundError(f"Order not found: {order_id}")
            if order.status != expected_status:
                raise ConflictError(order_id, expected_status, order.status)
            self._orders[order_id] = replace(order, **fields)

        logger.debug("Order updated", extra={"order_id": order_id, "fields": sorted(fields)})

    def add_plastic(self, plastic: PlasticType) -> None:
        with self._lock:
            self._plastics[plastic.id] = replace(plastic)

    def read_plastic(self, plastic_id: str) -> PlasticType:
        with self._lock:
            plastic = self._plastics.get(plastic_id)
            if plastic is None:
                raise NotFoundError(f"Plastic type not found: {plastic_id}")
            return replace(plastic)

    def list_plastics(self, status: str | None = None) -> list[PlasticType]:
        with self._lock:
            rows = [replace(plastic) for plastic in self._plastics.values()]
        if status is not None:
            rows = [plastic for plastic in rows if plastic.status == status]
        return rows

    def apply_plastic_update(self, plastic_id: str, expected_status: str, fields: dict[str, Any]) -> None:
        unknown = set(fields) - _PLASTIC_FIELDS
        if unknown:
            raise PersistenceError(f"Unknown plastic field(s): {', '.join(sorted(unknown))}")

        with self._lock:
            plastic = self._plastics.get(plastic_id)
            if plastic is None:
                raise NotFoundError(f"Plastic type not found: {plastic_id}")
            if plastic.status != expected_status:
                raise ConflictError(plastic_id, expected_status, plastic.status)
            self._plastics[plastic_id] = replace(plastic, **fields)

    def delete_plastic(self, plastic_id: str) -> None:
        with self._lock:
            if self._plastics.pop(plastic_id, None) is None:
                raise NotFoundError(f"Plastic type not found: {plastic_id}")
