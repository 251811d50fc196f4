import logging
from typing import Any

from fastapi import APIRouter

from app.config import get_config

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/")
def index() -> dict[str, Any]:
    return {"name": "notification events handler", "version": get_config().app.version}


@router.get("/version")
def version() -> dict[str, Any]:
    return {"version": get_config().app.version}
