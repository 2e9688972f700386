"""Courier relay: admin-only actions against the carrier API.

Every route, including unknown actions, passes the admin guard first so
no carrier call is made for an unauthorized caller.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from storefront.application.courier_actions import (
    CourierActionResult,
    CourierConnectionCheckHandler,
    CreateParcelHandler,
    GetCourierSettingsHandler,
    TrackParcelHandler,
)
from storefront.domain.model.courier import ParcelRequest
from storefront.infrastructure.api import deps
from storefront.infrastructure.api.schemas import CreateParcelRequest, TrackStatusRequest

router = APIRouter(
    prefix="/functions/steadfast-courier",
    tags=["courier"],
    dependencies=[Depends(deps.require_admin)],
)


def _respond(result: CourierActionResult) -> JSONResponse:
    return JSONResponse(status_code=200 if result.success else 400, content=result.to_dict())


@router.post("/test-connection")
def check_connection(
    handler: CourierConnectionCheckHandler = Depends(deps.courier_connection_check_handler),
) -> JSONResponse:
    return _respond(handler.handle())


@router.post("/get-settings")
def get_settings(
    handler: GetCourierSettingsHandler = Depends(deps.courier_settings_handler),
) -> JSONResponse:
    return _respond(handler.handle())


@router.post("/create-parcel")
def create_parcel(
    body: CreateParcelRequest,
    handler: CreateParcelHandler = Depends(deps.create_parcel_handler),
) -> JSONResponse:
    parcel = ParcelRequest(
        invoice=body.invoice,
        recipient_name=body.recipient_name,
        recipient_phone=body.recipient_phone,
        recipient_address=body.recipient_address,
        cod_amount=body.cod_amount,
        note=body.note,
    )
    return _respond(handler.handle(body.order_id, parcel))


@router.post("/track-status")
def track_status(
    body: TrackStatusRequest,
    handler: TrackParcelHandler = Depends(deps.track_parcel_handler),
) -> JSONResponse:
    consignment_id = str(body.consignment_id) if body.consignment_id is not None else None
    return _respond(handler.handle(consignment_id, body.order_id))


@router.post("/{action}")
def unknown_action(action: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"success": False, "error": "Unknown action"})
