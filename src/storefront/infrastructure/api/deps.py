"""FastAPI dependencies: use-case factories and the admin guard.

Routes receive their handlers through ``Depends`` so tests can swap in
handlers built on in-memory fakes via ``app.dependency_overrides``.
"""

from __future__ import annotations

from collections.abc import Callable

from fastapi import Depends, Header

from storefront.application.authorize_admin import AuthorizeAdminHandler
from storefront.application.courier_actions import (
    CourierConnectionCheckHandler,
    CreateParcelHandler,
    GetCourierSettingsHandler,
    TrackParcelHandler,
)
from storefront.application.relay_conversion import RelayConversionHandler
from storefront.infrastructure import bootstrap
from storefront.infrastructure.config import settings


def authorize_admin_handler() -> AuthorizeAdminHandler:
    return AuthorizeAdminHandler(bootstrap.token_verifier(), bootstrap.user_role_repository())


def require_admin(
    authorization: str | None = Header(default=None),
    handler: AuthorizeAdminHandler = Depends(authorize_admin_handler),
) -> str:
    """Resolve the caller to an admin user id; errors map to 401/403."""
    return handler.handle(authorization)


def relay_conversion_handler() -> RelayConversionHandler:
    return RelayConversionHandler(
        settings_repo=bootstrap.conversion_settings_repository(),
        gateway=bootstrap.conversions_gateway(),
        fallback_access_token=settings.FB_CAPI_ACCESS_TOKEN,
    )


def relay_conversion_handler_builder() -> Callable[[], RelayConversionHandler]:
    """Return the relay handler factory; the route calls it inside its error guard."""
    return relay_conversion_handler


def courier_connection_check_handler() -> CourierConnectionCheckHandler:
    return CourierConnectionCheckHandler(
        bootstrap.courier_settings_repository(), bootstrap.courier_gateway()
    )


def courier_settings_handler() -> GetCourierSettingsHandler:
    return GetCourierSettingsHandler(
        bootstrap.courier_settings_repository(), bootstrap.courier_gateway()
    )


def create_parcel_handler() -> CreateParcelHandler:
    return CreateParcelHandler(
        settings_repo=bootstrap.courier_settings_repository(),
        gateway=bootstrap.courier_gateway(),
        order_repo=bootstrap.relay_order_repository(),
        log_repo=bootstrap.courier_log_repository(),
    )


def track_parcel_handler() -> TrackParcelHandler:
    return TrackParcelHandler(
        settings_repo=bootstrap.courier_settings_repository(),
        gateway=bootstrap.courier_gateway(),
        order_repo=bootstrap.relay_order_repository(),
        log_repo=bootstrap.courier_log_repository(),
    )
