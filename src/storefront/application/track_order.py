"""Application service: Track Order use case (query).

Customers look an order up by its number and prove ownership with the
phone number used at checkout.
"""

from __future__ import annotations

from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import EntityNotFoundError, PhoneMismatchError, ValidationError
from storefront.domain.repository.order_repository import OrderRepository

MIN_ORDER_NUMBER_LENGTH = 4
MIN_PHONE_LENGTH = 4


class TrackOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_number: str, phone: str) -> OrderDTO:
        order_number = (order_number or "").strip()
        phone = (phone or "").strip()
        if len(order_number) < MIN_ORDER_NUMBER_LENGTH or len(phone) < MIN_PHONE_LENGTH:
            raise ValidationError("Enter your order number and phone number")

        order = self._order_repo.get_by_order_number(order_number)
        if order is None:
            raise EntityNotFoundError("Order not found")

        if not order.phone_matches(phone):
            raise PhoneMismatchError("Phone number does not match this order")

        return OrderDTO.from_order(order)
