"""Supabase-backed implementation of OrderRepository.

Orders live in ``orders``; their line items in ``order_items`` and are
written once, when the order is first saved.
"""

from __future__ import annotations

from datetime import datetime

from supabase import Client

from storefront.domain.model.courier import CourierStatus
from storefront.domain.model.order import (
    CourierFields,
    CustomerDetails,
    Order,
    OrderLineItem,
    OrderStatus,
)
from storefront.domain.model.payment import PaymentStatus
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.supabase_rows import (
    execute,
    first_row,
    iso,
    to_datetime,
    to_decimal,
    to_money,
)

ORDERS = "orders"
ORDER_ITEMS = "order_items"
WITH_ITEMS = "*, order_items(*)"


class SupabaseOrderRepository(OrderRepository):

    def __init__(self, client: Client, currency: str) -> None:
        self._client = client
        self._currency = currency

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        res = execute(
            self._client.table(ORDERS).select(WITH_ITEMS).eq("id", order_id).limit(1),
            "load order",
        )
        row = first_row(res)
        return self._to_domain(row) if row else None

    def get_by_order_number(self, order_number: str) -> Order | None:
        res = execute(
            self._client.table(ORDERS)
            .select(WITH_ITEMS)
            .eq("order_number", order_number)
            .limit(1),
            "look up order",
        )
        row = first_row(res)
        return self._to_domain(row) if row else None

    def list_all(self) -> list[Order]:
        res = execute(
            self._client.table(ORDERS).select(WITH_ITEMS).order("created_at", desc=True),
            "list orders",
        )
        return [self._to_domain(row) for row in res.data or []]

    def save(self, order: Order) -> None:
        row = self._to_row(order)
        if order.id is not None:
            execute(self._client.table(ORDERS).update(row).eq("id", order.id), "update order")
            return

        res = execute(self._client.table(ORDERS).insert(row), "create order")
        order.id = first_row(res)["id"]
        items = [self._item_row(order.id, item) for item in order.items]
        execute(self._client.table(ORDER_ITEMS).insert(items), "create order items")

    def update_courier(self, order_id: str, courier: CourierFields) -> None:
        execute(
            self._client.table(ORDERS).update(self._courier_row(courier)).eq("id", order_id),
            "update order courier",
        )

    def update_courier_status(
        self,
        order_id: str,
        courier_status: CourierStatus,
        updated_at: datetime,
        status: OrderStatus | None = None,
    ) -> None:
        row = {"courier_status": courier_status.value, "courier_updated_at": iso(updated_at)}
        if status is not None:
            row["status"] = status.value
        execute(
            self._client.table(ORDERS).update(row).eq("id", order_id), "update courier status"
        )

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_row(order: Order) -> dict:
        return {
            "order_number": order.order_number,
            "customer_name": order.customer.name,
            "customer_phone": order.customer.phone,
            "customer_email": order.customer.email,
            "shipping_address": order.customer.address,
            "shipping_city": order.customer.city,
            "subtotal": float(order.subtotal.amount),
            "shipping_cost": float(order.shipping_cost.amount),
            "total": float(order.total),
            "shipping_method": order.shipping_method,
            "payment_method": order.payment_method,
            "payment_method_id": order.payment_method_id,
            "payment_method_name": order.payment_method_name,
            "payment_status": order.payment_status.value,
            "paid_amount": float(order.paid_amount),
            "due_amount": float(order.due_amount),
            "transaction_id": order.transaction_id,
            "partial_rule_snapshot": order.partial_rule_snapshot,
            "notes": order.notes,
            "user_id": order.user_id,
            "status": order.status.value,
            **SupabaseOrderRepository._courier_row(order.courier),
        }

    @staticmethod
    def _courier_row(courier: CourierFields) -> dict:
        return {
            "courier_provider": courier.provider,
            "courier_status": courier.status.value if courier.status else None,
            "courier_tracking_id": courier.tracking_id,
            "courier_consignment_id": courier.consignment_id,
            "courier_reference": courier.reference,
            "courier_created_at": iso(courier.created_at),
            "courier_updated_at": iso(courier.updated_at),
        }

    @staticmethod
    def _item_row(order_id: str, item: OrderLineItem) -> dict:
        return {
            "order_id": order_id,
            "product_id": item.product_id,
            "product_name": item.product_name,
            "product_image": item.product_image,
            "quantity": item.quantity.value,
            "price": float(item.unit_price.amount),
            "line_total": float(item.line_total.amount),
            "variant_id": item.variant_id,
            "variant_info": item.variant_info,
        }

    def _to_domain(self, row: dict) -> Order:
        currency = self._currency
        subtotal = to_money(row.get("subtotal"), currency)
        shipping_cost = to_money(row.get("shipping_cost"), currency)
        total = to_decimal(row.get("total"))
        # The discount is not stored; it is whatever closes the gap.
        discount = max(subtotal.amount + shipping_cost.amount - total, to_decimal(0))

        items = [
            OrderLineItem(
                product_id=i.get("product_id"),
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=to_money(i["price"], currency),
                product_image=i.get("product_image"),
                variant_id=i.get("variant_id"),
                variant_info=i.get("variant_info"),
            )
            for i in row.get(ORDER_ITEMS) or []
        ]
        courier_status = row.get("courier_status")
        return Order(
            id=row["id"],
            order_number=row["order_number"],
            customer=CustomerDetails(
                name=row["customer_name"],
                phone=row["customer_phone"],
                address=row["shipping_address"],
                city=row["shipping_city"],
                email=row.get("customer_email"),
            ),
            items=items,
            subtotal=subtotal,
            discount=to_money(discount, currency),
            shipping_cost=shipping_cost,
            total=total,
            shipping_method=row.get("shipping_method") or "Standard",
            payment_method=row.get("payment_method") or "cod",
            payment_method_id=row.get("payment_method_id"),
            payment_method_name=row.get("payment_method_name") or "Cash on Delivery",
            payment_status=PaymentStatus(row.get("payment_status") or "unpaid"),
            paid_amount=to_decimal(row.get("paid_amount")),
            due_amount=to_decimal(row.get("due_amount")),
            transaction_id=row.get("transaction_id"),
            partial_rule_snapshot=row.get("partial_rule_snapshot"),
            notes=row.get("notes"),
            user_id=row.get("user_id"),
            status=OrderStatus(row["status"]),
            courier=CourierFields(
                provider=row.get("courier_provider"),
                status=CourierStatus(courier_status) if courier_status else None,
                tracking_id=row.get("courier_tracking_id"),
                consignment_id=row.get("courier_consignment_id"),
                reference=row.get("courier_reference"),
                created_at=to_datetime(row.get("courier_created_at")),
                updated_at=to_datetime(row.get("courier_updated_at")),
            ),
            created_at=to_datetime(row["created_at"]),
        )
