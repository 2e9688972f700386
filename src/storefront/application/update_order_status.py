"""Application service: Update Order Status use case (admin)."""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str, status: str) -> None:
        try:
            new_status = OrderStatus(status)
        except ValueError as exc:
            raise ValidationError(f"Unknown order status: {status!r}") from exc

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order '{order_id}' not found")

        previous = order.status
        order.change_status(new_status)
        self._order_repo.save(order)
        logger.info(
            "Order status updated",
            order_number=order.order_number,
            previous=previous.value,
            status=new_status.value,
        )
