import logging
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.exceptions import HTTPException

from app.container import get_telemetry_service
from app.models.notify.dto import DeliveryReceipt, DeliveryStatuses, NotifyReference
from app.services.querying.exceptions import QueryFailedException
from app.services.telemetry.contact_registration import TelemetryService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/notify", tags=["Notify delivery receipts"])

SUCCESSFUL_STATUSES = (
    DeliveryStatuses.DELIVERED,
    DeliveryStatuses.RECEIVED,
)

FINAL_STATUSES = SUCCESSFUL_STATUSES + (
    DeliveryStatuses.PERMANENT_FAILURE,
    DeliveryStatuses.TEMPORARY_FAILURE,
    DeliveryStatuses.TECHNICAL_FAILURE,
    DeliveryStatuses.VIRUS_SCAN_FAILED,
    DeliveryStatuses.VALIDATION_FAILED,
    DeliveryStatuses.CANCELLED,
    DeliveryStatuses.RETURNED_LETTER,
)


@router.post("/confirm", summary="Receive a delivery receipt from NotifyNL")
def confirm(
    receipt: DeliveryReceipt,
    telemetry: TelemetryService = Depends(get_telemetry_service),
) -> dict[str, Any]:
    if receipt.status not in FINAL_STATUSES:
        logger.info(f"Notification {receipt.id} is still {receipt.status.value}")
        return {"status": "pending"}

    if receipt.reference is None:
        raise HTTPException(status_code=400, detail="The delivery receipt does not have a reference")

    try:
        reference = NotifyReference.decode(receipt.reference)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    successful = receipt.status in SUCCESSFUL_STATUSES
    try:
        registration_id = telemetry.report_completion(
            reference=reference,
            method=receipt.notification_type,
            recipient=receipt.to,
            messages=[f"Notificatie {receipt.status.value}"],
            successful=successful,
        )
    except QueryFailedException as e:
        logger.error(f"Registering notification {receipt.id} failed: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return {"status": "registered", "registration_id": registration_id}
