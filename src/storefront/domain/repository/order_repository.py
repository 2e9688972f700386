"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from storefront.domain.model.courier import CourierStatus
from storefront.domain.model.order import CourierFields, Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order with its items by ID, or None if not found."""

    @abstractmethod
    def get_by_order_number(self, order_number: str) -> Order | None:
        """Return an order by its customer-facing number, or None."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, newest first."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new order (with its items) or update an existing one."""

    @abstractmethod
    def update_courier(self, order_id: str, courier: CourierFields) -> None:
        """Write only the order's courier fields."""

    @abstractmethod
    def update_courier_status(
        self,
        order_id: str,
        courier_status: CourierStatus,
        updated_at: datetime,
        status: OrderStatus | None = None,
    ) -> None:
        """Write the courier status and, when given, the order status."""
