"""Composition root. Wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from storefront.infrastructure.config import settings
from storefront.infrastructure.gateways.meta_conversions_gateway import MetaConversionsGateway
from storefront.infrastructure.gateways.steadfast_gateway import SteadfastGateway
from storefront.infrastructure.gateways.supabase_auth_gateway import (
    SupabaseSessionGateway,
    SupabaseTokenVerifier,
)
from storefront.infrastructure.persistence.supabase_catalog_repository import (
    SupabasePaymentMethodRepository,
    SupabaseProductVariantRepository,
    SupabaseReviewRepository,
    SupabaseShippingMethodRepository,
    SupabaseShippingZoneRepository,
    SupabaseWishlistRepository,
)
from storefront.infrastructure.persistence.supabase_conversions_repository import (
    SupabaseConversionSettingsRepository,
)
from storefront.infrastructure.persistence.supabase_coupon_repository import (
    SupabaseCouponRepository,
)
from storefront.infrastructure.persistence.supabase_courier_repository import (
    SupabaseCourierLogRepository,
    SupabaseCourierSettingsRepository,
)
from storefront.infrastructure.persistence.supabase_identity_repository import (
    SupabaseProfileRepository,
    SupabaseUserRoleRepository,
)
from storefront.infrastructure.persistence.supabase_order_repository import (
    SupabaseOrderRepository,
)
from storefront.infrastructure.supabase_client import get_client, get_service_client

# --- Storefront (public key, row-level security applies) ---------------------


def coupon_repository() -> SupabaseCouponRepository:
    return SupabaseCouponRepository(get_client(), settings.STORE_CURRENCY)


def order_repository() -> SupabaseOrderRepository:
    return SupabaseOrderRepository(get_client(), settings.STORE_CURRENCY)


def variant_repository() -> SupabaseProductVariantRepository:
    return SupabaseProductVariantRepository(get_client())


def shipping_method_repository() -> SupabaseShippingMethodRepository:
    return SupabaseShippingMethodRepository(get_client(), settings.STORE_CURRENCY)


def shipping_zone_repository() -> SupabaseShippingZoneRepository:
    return SupabaseShippingZoneRepository(get_client(), settings.STORE_CURRENCY)


def payment_method_repository() -> SupabasePaymentMethodRepository:
    return SupabasePaymentMethodRepository(get_client())


def review_repository() -> SupabaseReviewRepository:
    return SupabaseReviewRepository(get_client())


def wishlist_repository() -> SupabaseWishlistRepository:
    return SupabaseWishlistRepository(get_client())


def profile_repository() -> SupabaseProfileRepository:
    return SupabaseProfileRepository(get_client())


def role_repository() -> SupabaseUserRoleRepository:
    """Role lookups under the signed-in user's own session."""
    return SupabaseUserRoleRepository(get_client())


def session_gateway() -> SupabaseSessionGateway:
    return SupabaseSessionGateway(get_client())


# --- Relays (service role) ----------------------------------------------------


def relay_order_repository() -> SupabaseOrderRepository:
    return SupabaseOrderRepository(get_service_client(), settings.STORE_CURRENCY)


def user_role_repository() -> SupabaseUserRoleRepository:
    return SupabaseUserRoleRepository(get_service_client())


def token_verifier() -> SupabaseTokenVerifier:
    return SupabaseTokenVerifier(get_service_client())


def courier_settings_repository() -> SupabaseCourierSettingsRepository:
    return SupabaseCourierSettingsRepository(get_service_client())


def courier_log_repository() -> SupabaseCourierLogRepository:
    return SupabaseCourierLogRepository(get_service_client())


def conversion_settings_repository() -> SupabaseConversionSettingsRepository:
    return SupabaseConversionSettingsRepository(get_service_client())


def courier_gateway() -> SteadfastGateway:
    return SteadfastGateway(timeout=settings.HTTP_TIMEOUT_SECONDS)


def conversions_gateway() -> MetaConversionsGateway:
    return MetaConversionsGateway(timeout=settings.HTTP_TIMEOUT_SECONDS)
