"""Supabase-backed implementation of CouponRepository."""

from __future__ import annotations

from supabase import Client

from storefront.domain.model.coupon import Coupon, DiscountType, normalize_code
from storefront.domain.repository.coupon_repository import CouponRepository
from storefront.infrastructure.persistence.supabase_rows import (
    execute,
    first_row,
    iso,
    to_datetime,
    to_decimal,
    to_money,
)

TABLE = "coupons"


class SupabaseCouponRepository(CouponRepository):

    def __init__(self, client: Client, currency: str) -> None:
        self._client = client
        self._currency = currency

    # --- CouponRepository interface -------------------------------------------

    def get_by_id(self, coupon_id: str) -> Coupon | None:
        res = execute(
            self._client.table(TABLE).select("*").eq("id", coupon_id).limit(1),
            "load coupon",
        )
        row = first_row(res)
        return self._to_domain(row) if row else None

    def get_active_by_code(self, code: str) -> Coupon | None:
        res = execute(
            self._client.table(TABLE)
            .select("*")
            .eq("code", normalize_code(code))
            .eq("is_active", True)
            .limit(1),
            "look up coupon",
        )
        row = first_row(res)
        return self._to_domain(row) if row else None

    def list_all(self) -> list[Coupon]:
        res = execute(
            self._client.table(TABLE).select("*").order("created_at", desc=True),
            "list coupons",
        )
        return [self._to_domain(row) for row in res.data or []]

    def save(self, coupon: Coupon) -> None:
        row = self._to_row(coupon)
        if coupon.id is None:
            res = execute(self._client.table(TABLE).insert(row), "create coupon")
            coupon.id = first_row(res)["id"]
        else:
            execute(self._client.table(TABLE).update(row).eq("id", coupon.id), "update coupon")

    def delete(self, coupon_id: str) -> None:
        execute(self._client.table(TABLE).delete().eq("id", coupon_id), "delete coupon")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_row(coupon: Coupon) -> dict:
        return {
            "code": coupon.code,
            "description": coupon.description,
            "discount_type": coupon.discount_type.value,
            "discount_value": float(coupon.discount_value),
            "min_order_amount": float(coupon.min_order_amount.amount),
            "max_uses": coupon.max_uses,
            "used_count": coupon.used_count,
            "starts_at": iso(coupon.starts_at),
            "expires_at": iso(coupon.expires_at),
            "is_active": coupon.is_active,
        }

    def _to_domain(self, row: dict) -> Coupon:
        return Coupon(
            id=row["id"],
            code=row["code"],
            discount_type=DiscountType(row["discount_type"]),
            discount_value=to_decimal(row["discount_value"]),
            min_order_amount=to_money(row.get("min_order_amount"), self._currency),
            starts_at=to_datetime(row["starts_at"]),
            max_uses=row.get("max_uses"),
            used_count=row.get("used_count") or 0,
            expires_at=to_datetime(row.get("expires_at")),
            is_active=bool(row.get("is_active")),
            description=row.get("description"),
            created_at=to_datetime(row["created_at"]),
        )
