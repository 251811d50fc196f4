import logging
from typing import Any

from fastapi import APIRouter, Depends

from app.container import get_whitelists
from app.services.settings.whitelist import Whitelists

logger = logging.getLogger(__name__)
router = APIRouter()


def ok_or_error(value: bool) -> str:
    return "ok" if value else "error"


@router.get("/health")
def health(whitelists: Whitelists = Depends(get_whitelists)) -> dict[str, Any]:
    logger.info("Checking health")
    components = {
        "task_object_type": ok_or_error(whitelists.task_object_type_uuid != ""),
        "message_object_type": ok_or_error(whitelists.message_object_type_uuid != ""),
    }
    return {"status": "ok", "components": components}
