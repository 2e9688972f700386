"""Supabase-backed catalog repositories: variants, shipping, payment
methods, reviews and wishlists."""

from __future__ import annotations

from supabase import Client

from storefront.domain.model.catalog import (
    ProductVariant,
    Review,
    ShippingMethod,
    ShippingZone,
    WishlistItem,
    WishlistOwner,
)
from storefront.domain.model.payment import PartialType, PaymentMethod
from storefront.domain.repository.catalog_repository import (
    PaymentMethodRepository,
    ProductVariantRepository,
    ReviewRepository,
    ShippingMethodRepository,
    ShippingZoneRepository,
    WishlistRepository,
)
from storefront.infrastructure.persistence.supabase_rows import (
    execute,
    first_row,
    to_datetime,
    to_decimal,
    to_money,
)


class SupabaseProductVariantRepository(ProductVariantRepository):

    def __init__(self, client: Client) -> None:
        self._client = client

    def list_for_product(self, product_id: str) -> list[ProductVariant]:
        res = execute(
            self._client.table("product_variants")
            .select("*")
            .eq("product_id", product_id)
            .order("created_at"),
            "list variants",
        )
        return [
            ProductVariant(
                id=row["id"],
                product_id=row["product_id"],
                sku=row["sku"],
                size=row.get("size"),
                color=row.get("color"),
                price_adjustment=to_decimal(row.get("price_adjustment")),
                stock=row.get("stock") or 0,
                is_active=row.get("is_active") is not False,
            )
            for row in res.data or []
        ]


class SupabaseShippingMethodRepository(ShippingMethodRepository):

    def __init__(self, client: Client, currency: str) -> None:
        self._client = client
        self._currency = currency

    def get_by_id(self, method_id: str) -> ShippingMethod | None:
        res = execute(
            self._client.table("shipping_methods").select("*").eq("id", method_id).limit(1),
            "load shipping method",
        )
        row = first_row(res)
        return self._to_domain(row) if row else None

    def list_active(self) -> list[ShippingMethod]:
        res = execute(
            self._client.table("shipping_methods")
            .select("*")
            .eq("is_active", True)
            .order("sort_order"),
            "list shipping methods",
        )
        return [self._to_domain(row) for row in res.data or []]

    def _to_domain(self, row: dict) -> ShippingMethod:
        return ShippingMethod(
            id=row["id"],
            name=row["name"],
            base_rate=to_money(row.get("base_rate"), self._currency),
            is_active=bool(row.get("is_active")),
            estimated_days=row.get("estimated_days"),
            sort_order=row.get("sort_order") or 0,
        )


class SupabaseShippingZoneRepository(ShippingZoneRepository):

    def __init__(self, client: Client, currency: str) -> None:
        self._client = client
        self._currency = currency

    def list_active(self) -> list[ShippingZone]:
        res = execute(
            self._client.table("shipping_zones")
            .select("*")
            .eq("is_active", True)
            .order("sort_order"),
            "list shipping zones",
        )
        return [
            ShippingZone(
                id=row["id"],
                name=row["name"],
                cities=list(row.get("cities") or []),
                rate=to_money(row.get("rate"), self._currency),
                delivery_days=row.get("delivery_days"),
                is_active=bool(row.get("is_active")),
                sort_order=row.get("sort_order") or 0,
            )
            for row in res.data or []
        ]


class SupabasePaymentMethodRepository(PaymentMethodRepository):

    def __init__(self, client: Client) -> None:
        self._client = client

    def get_by_id(self, method_id: str) -> PaymentMethod | None:
        res = execute(
            self._client.table("payment_methods").select("*").eq("id", method_id).limit(1),
            "load payment method",
        )
        row = first_row(res)
        return self._to_domain(row) if row else None

    def list_enabled(self) -> list[PaymentMethod]:
        res = execute(
            self._client.table("payment_methods")
            .select("*")
            .eq("is_enabled", True)
            .order("sort_order"),
            "list payment methods",
        )
        return [self._to_domain(row) for row in res.data or []]

    @staticmethod
    def _to_domain(row: dict) -> PaymentMethod:
        partial_type = row.get("partial_type")
        fixed = row.get("fixed_partial_amount")
        return PaymentMethod(
            id=row["id"],
            name=row["name"],
            code=row["code"],
            is_enabled=bool(row.get("is_enabled")),
            sort_order=row.get("sort_order") or 0,
            allow_partial_delivery_payment=bool(row.get("allow_partial_delivery_payment")),
            partial_type=PartialType(partial_type) if partial_type else None,
            fixed_partial_amount=to_decimal(fixed) if fixed is not None else None,
            require_transaction_id=bool(row.get("require_transaction_id")),
            instructions=row.get("instructions"),
        )


class SupabaseReviewRepository(ReviewRepository):

    def __init__(self, client: Client) -> None:
        self._client = client

    def get_by_id(self, review_id: str) -> Review | None:
        res = execute(
            self._client.table("reviews").select("*").eq("id", review_id).limit(1),
            "load review",
        )
        row = first_row(res)
        return self._to_domain(row) if row else None

    def list_for_product(self, product_id: str, approved_only: bool) -> list[Review]:
        query = (
            self._client.table("reviews")
            .select("*")
            .eq("product_id", product_id)
            .order("created_at", desc=True)
        )
        if approved_only:
            query = query.eq("is_approved", True)
        res = execute(query, "list reviews")
        return [self._to_domain(row) for row in res.data or []]

    def save(self, review: Review) -> None:
        row = {
            "product_id": review.product_id,
            "name": review.name,
            "rating": review.rating,
            "text": review.text,
            "is_approved": review.is_approved,
            "verified_purchase": review.verified_purchase,
            "user_id": review.user_id,
            "order_id": review.order_id,
        }
        if review.id is None:
            res = execute(self._client.table("reviews").insert(row), "create review")
            review.id = first_row(res)["id"]
        else:
            execute(
                self._client.table("reviews").update(row).eq("id", review.id),
                "update review",
            )

    @staticmethod
    def _to_domain(row: dict) -> Review:
        return Review(
            id=row["id"],
            product_id=row.get("product_id"),
            name=row["name"],
            rating=row["rating"],
            text=row["text"],
            is_approved=bool(row.get("is_approved")),
            verified_purchase=bool(row.get("verified_purchase")),
            user_id=row.get("user_id"),
            order_id=row.get("order_id"),
            created_at=to_datetime(row["created_at"]),
        )


class SupabaseWishlistRepository(WishlistRepository):

    def __init__(self, client: Client) -> None:
        self._client = client

    def list_for_owner(self, owner: WishlistOwner) -> list[WishlistItem]:
        query = self._owned(self._client.table("wishlists").select("*"), owner)
        res = execute(query, "load wishlist")
        return [
            WishlistItem(id=row["id"], product_id=row["product_id"], owner=owner)
            for row in res.data or []
        ]

    def add(self, owner: WishlistOwner, product_id: str) -> WishlistItem:
        row = {"product_id": product_id}
        if owner.user_id:
            row["user_id"] = owner.user_id
        else:
            row["session_id"] = owner.session_id
        res = execute(self._client.table("wishlists").insert(row), "add to wishlist")
        return WishlistItem(id=first_row(res)["id"], product_id=product_id, owner=owner)

    def remove(self, owner: WishlistOwner, product_id: str) -> None:
        query = self._owned(
            self._client.table("wishlists").delete().eq("product_id", product_id), owner
        )
        execute(query, "remove from wishlist")

    @staticmethod
    def _owned(query, owner: WishlistOwner):
        if owner.user_id:
            return query.eq("user_id", owner.user_id)
        return query.eq("session_id", owner.session_id)
