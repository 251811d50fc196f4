import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.container import get_notify_processor
from app.models.notification.dto import NotificationEvent
from app.services.processing.notify_processor import NotifyProcessor

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/events", tags=["Notification events"])


@router.post("/listen", summary="Receive a notification event")
def listen(
    event: NotificationEvent,
    processor: NotifyProcessor = Depends(get_notify_processor),
) -> JSONResponse:
    logger.info(f"Received notification event for {event.main_object_uri}")
    result = processor.process(event)
    return JSONResponse(
        status_code=result.status.http_status_code(),
        content=result.model_dump(mode="json"),
    )
