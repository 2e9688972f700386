"""In-memory fake repositories and gateways for testing.

These implement the same abstract interfaces as the Supabase repositories
and the HTTP gateways but keep everything in memory. No network, no side
effects.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import datetime

from storefront.domain.exceptions import UpstreamError
from storefront.domain.gateway.auth_gateway import SessionGateway, SessionListener, TokenVerifier
from storefront.domain.gateway.conversions_gateway import ConversionsGateway
from storefront.domain.gateway.courier_gateway import CourierGateway
from storefront.domain.model.catalog import (
    ProductVariant,
    Review,
    ShippingMethod,
    ShippingZone,
    WishlistItem,
    WishlistOwner,
)
from storefront.domain.model.conversions import ConversionSettings
from storefront.domain.model.coupon import Coupon
from storefront.domain.model.courier import (
    CarrierResponse,
    CourierLogEntry,
    CourierSettings,
    CourierStatus,
    ParcelRequest,
)
from storefront.domain.model.identity import AppRole, AuthSession
from storefront.domain.model.order import CourierFields, Order, OrderStatus
from storefront.domain.model.payment import PaymentMethod
from storefront.domain.repository.catalog_repository import (
    PaymentMethodRepository,
    ProductVariantRepository,
    ReviewRepository,
    ShippingMethodRepository,
    ShippingZoneRepository,
    WishlistRepository,
)
from storefront.domain.repository.conversions_repository import ConversionSettingsRepository
from storefront.domain.repository.coupon_repository import CouponRepository
from storefront.domain.repository.courier_repository import (
    CourierLogRepository,
    CourierSettingsRepository,
)
from storefront.domain.repository.identity_repository import (
    ProfileRepository,
    UserRoleRepository,
)
from storefront.domain.repository.order_repository import OrderRepository

# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------


class FakeCouponRepository(CouponRepository):

    def __init__(self, coupons: list[Coupon] | None = None) -> None:
        self._store: dict[str, Coupon] = {}
        self._next_id = 1
        for c in coupons or []:
            self.save(c)

    def get_by_id(self, coupon_id: str) -> Coupon | None:
        return self._store.get(coupon_id)

    def get_active_by_code(self, code: str) -> Coupon | None:
        for c in self._store.values():
            if c.code == code.upper() and c.is_active:
                return c
        return None

    def list_all(self) -> list[Coupon]:
        return list(self._store.values())

    def save(self, coupon: Coupon) -> None:
        if coupon.id is None:
            coupon.id = f"coupon-{self._next_id}"
            self._next_id += 1
        self._store[coupon.id] = coupon

    def delete(self, coupon_id: str) -> None:
        self._store.pop(coupon_id, None)


class FakeOrderRepository(OrderRepository):

    def __init__(self, orders: list[Order] | None = None) -> None:
        self._store: dict[str, Order] = {}
        self._next_id = 1
        for o in orders or []:
            self.save(o)

    def get_by_id(self, order_id: str) -> Order | None:
        return self._store.get(order_id)

    def get_by_order_number(self, order_number: str) -> Order | None:
        for o in self._store.values():
            if o.order_number == order_number:
                return o
        return None

    def list_all(self) -> list[Order]:
        return list(self._store.values())

    def save(self, order: Order) -> None:
        if order.id is None:
            order.id = f"order-{self._next_id}"
            self._next_id += 1
        self._store[order.id] = order

    def update_courier(self, order_id: str, courier: CourierFields) -> None:
        self._store[order_id].courier = courier

    def update_courier_status(
        self,
        order_id: str,
        courier_status: CourierStatus,
        updated_at: datetime,
        status: OrderStatus | None = None,
    ) -> None:
        order = self._store[order_id]
        order.courier.status = courier_status
        order.courier.updated_at = updated_at
        if status is not None:
            order.status = status


class FakeProductVariantRepository(ProductVariantRepository):

    def __init__(self, variants: list[ProductVariant] | None = None) -> None:
        self._variants = list(variants or [])

    def list_for_product(self, product_id: str) -> list[ProductVariant]:
        return [v for v in self._variants if v.product_id == product_id]


class FakeShippingMethodRepository(ShippingMethodRepository):

    def __init__(self, methods: list[ShippingMethod] | None = None) -> None:
        self._store = {m.id: m for m in methods or []}

    def get_by_id(self, method_id: str) -> ShippingMethod | None:
        return self._store.get(method_id)

    def list_active(self) -> list[ShippingMethod]:
        return [m for m in self._store.values() if m.is_active]


class FakeShippingZoneRepository(ShippingZoneRepository):

    def __init__(self, zones: list[ShippingZone] | None = None) -> None:
        self._zones = list(zones or [])

    def list_active(self) -> list[ShippingZone]:
        return [z for z in self._zones if z.is_active]


class FakePaymentMethodRepository(PaymentMethodRepository):

    def __init__(self, methods: list[PaymentMethod] | None = None) -> None:
        self._store = {m.id: m for m in methods or []}

    def get_by_id(self, method_id: str) -> PaymentMethod | None:
        return self._store.get(method_id)

    def list_enabled(self) -> list[PaymentMethod]:
        return [m for m in self._store.values() if m.is_enabled]


class FakeReviewRepository(ReviewRepository):

    def __init__(self) -> None:
        self._store: dict[str, Review] = {}
        self._next_id = 1

    def get_by_id(self, review_id: str) -> Review | None:
        return self._store.get(review_id)

    def list_for_product(self, product_id: str, approved_only: bool) -> list[Review]:
        reviews = [r for r in self._store.values() if r.product_id == product_id]
        if approved_only:
            reviews = [r for r in reviews if r.is_approved]
        return sorted(reviews, key=lambda r: r.created_at, reverse=True)

    def save(self, review: Review) -> None:
        if review.id is None:
            review.id = f"review-{self._next_id}"
            self._next_id += 1
        self._store[review.id] = review


class FakeWishlistRepository(WishlistRepository):

    def __init__(self) -> None:
        self._items: list[WishlistItem] = []
        self._next_id = 1

    def list_for_owner(self, owner: WishlistOwner) -> list[WishlistItem]:
        return [i for i in self._items if i.owner == owner]

    def add(self, owner: WishlistOwner, product_id: str) -> WishlistItem:
        item = WishlistItem(id=f"wish-{self._next_id}", product_id=product_id, owner=owner)
        self._next_id += 1
        self._items.append(item)
        return item

    def remove(self, owner: WishlistOwner, product_id: str) -> None:
        self._items = [
            i for i in self._items if not (i.owner == owner and i.product_id == product_id)
        ]


class FakeProfileRepository(ProfileRepository):

    def __init__(self, active: dict[str, bool] | None = None, error: Exception | None = None) -> None:
        self._active = dict(active or {})
        self._error = error
        self.calls: list[str] = []

    def is_active(self, user_id: str) -> bool | None:
        self.calls.append(user_id)
        if self._error is not None:
            raise self._error
        return self._active.get(user_id)


class FakeUserRoleRepository(UserRoleRepository):

    def __init__(
        self,
        roles: dict[str, AppRole] | None = None,
        error: Exception | None = None,
    ) -> None:
        self._roles = dict(roles or {})
        self._error = error
        self.calls: list[str] = []

    def get_role(self, user_id: str) -> AppRole | None:
        self.calls.append(user_id)
        if self._error is not None:
            raise self._error
        return self._roles.get(user_id)

    def is_admin(self, user_id: str) -> bool:
        return self._roles.get(user_id) is AppRole.ADMIN


class FakeCourierSettingsRepository(CourierSettingsRepository):

    def __init__(self, settings: CourierSettings | None = None) -> None:
        self._settings = settings

    def get_for_provider(self, provider: str) -> CourierSettings | None:
        if self._settings is None or self._settings.provider != provider:
            return None
        return self._settings


class FakeCourierLogRepository(CourierLogRepository):

    def __init__(self) -> None:
        self.entries: list[CourierLogEntry] = []

    def add(self, entry: CourierLogEntry) -> None:
        self.entries.append(entry)


class FakeConversionSettingsRepository(ConversionSettingsRepository):

    def __init__(
        self,
        settings: ConversionSettings | None = None,
        access_token: str | None = None,
        error: Exception | None = None,
    ) -> None:
        self._settings = settings
        self._access_token = access_token
        self._error = error

    def get_settings(self) -> ConversionSettings | None:
        if self._error is not None:
            raise self._error
        return self._settings

    def get_access_token(self) -> str | None:
        return self._access_token


# ---------------------------------------------------------------------------
# Gateways
# ---------------------------------------------------------------------------


class FakeCourierGateway(CourierGateway):
    """Replays canned carrier responses and records every call."""

    def __init__(
        self,
        balance: CarrierResponse | None = None,
        create: CarrierResponse | None = None,
        status: CarrierResponse | None = None,
        error: UpstreamError | None = None,
    ) -> None:
        self._balance = balance
        self._create = create
        self._status = status
        self._error = error
        self.calls: list[tuple] = []

    def get_balance(self, settings: CourierSettings) -> CarrierResponse:
        self.calls.append(("get_balance",))
        return self._reply(self._balance)

    def create_order(self, settings: CourierSettings, parcel: ParcelRequest) -> CarrierResponse:
        self.calls.append(("create_order", parcel))
        return self._reply(self._create)

    def status_by_consignment(
        self, settings: CourierSettings, consignment_id: str
    ) -> CarrierResponse:
        self.calls.append(("status_by_consignment", consignment_id))
        return self._reply(self._status)

    def _reply(self, response: CarrierResponse | None) -> CarrierResponse:
        if self._error is not None:
            raise self._error
        return response or CarrierResponse(http_ok=True, data={"status": 200})


class FakeConversionsGateway(ConversionsGateway):

    def __init__(
        self,
        http_ok: bool = True,
        data: dict | None = None,
        error: UpstreamError | None = None,
    ) -> None:
        self._http_ok = http_ok
        self._data = data if data is not None else {"events_received": 1}
        self._error = error
        self.sent: list[tuple[ConversionSettings, str, dict]] = []

    def send_events(
        self, settings: ConversionSettings, access_token: str, body: dict
    ) -> tuple[bool, dict]:
        self.sent.append((settings, access_token, body))
        if self._error is not None:
            raise self._error
        return self._http_ok, self._data


class FakeTokenVerifier(TokenVerifier):

    def __init__(self, tokens: dict[str, str] | None = None) -> None:
        self._tokens = dict(tokens or {})

    def user_id_for_token(self, token: str) -> str | None:
        return self._tokens.get(token)


class FakeSessionGateway(SessionGateway):
    """Session source the test drives by hand.

    ``restore_delay`` holds back ``current_session()`` so tests can race
    it against the bootstrap timeout. ``accounts`` maps (email, password)
    to the session a sign-in yields.
    """

    def __init__(
        self,
        session: AuthSession | None = None,
        restore_delay: float = 0.0,
        restore_error: UpstreamError | None = None,
        accounts: dict[tuple[str, str], AuthSession] | None = None,
    ) -> None:
        self._session = session
        self._restore_delay = restore_delay
        self._restore_error = restore_error
        self._accounts = dict(accounts or {})
        self._listeners: list[SessionListener] = []
        self.sign_out_calls = 0

    async def current_session(self) -> AuthSession | None:
        if self._restore_delay:
            await asyncio.sleep(self._restore_delay)
        if self._restore_error is not None:
            raise self._restore_error
        return self._session

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession | None:
        session = self._accounts.get((email, password))
        if session is None:
            raise UpstreamError("Sign-in failed: Invalid login credentials")
        self._session = session
        self.emit(session)
        return session

    async def sign_out(self) -> None:
        self.sign_out_calls += 1
        self._session = None
        self.emit(None)

    def emit(self, session: AuthSession | None) -> None:
        for listener in list(self._listeners):
            listener(session)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)
