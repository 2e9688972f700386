"""Conversions API relay.

Answers 200 for everything except a malformed request: the storefront
fires these events without waiting on the outcome.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from storefront.application.relay_conversion import (
    RelayConversionHandler,
    require_event_identity,
)
from storefront.domain.exceptions import ValidationError
from storefront.infrastructure.api import deps
from storefront.infrastructure.api.schemas import ConversionEventRequest

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/functions", tags=["conversions"])


@router.post("/meta-capi")
def relay_conversion_event(
    body: ConversionEventRequest,
    build_handler: Callable[[], RelayConversionHandler] = Depends(
        deps.relay_conversion_handler_builder
    ),
) -> JSONResponse:
    try:
        require_event_identity(body.event_name, body.event_id)
        handler = build_handler()
        result = handler.handle(
            event_name=body.event_name,
            event_id=body.event_id,
            user_data=body.user_data,
            custom_data=body.custom_data,
            test_mode=body.test_mode,
            event_source_url=body.event_source_url,
        )
    except ValidationError as exc:
        return JSONResponse(status_code=400, content={"error": str(exc)})
    except Exception:
        logger.exception("Conversion relay failed", event_name=body.event_name)
        return JSONResponse(
            status_code=200, content={"success": False, "error": "Internal server error"}
        )
    return JSONResponse(status_code=200, content=result.to_dict())
