from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class ProcessingStatuses(str, Enum):
    PROCESSED = "processed"
    SKIPPED = "skipped"
    FAILURE = "failure"
    NOT_IMPLEMENTED = "not_implemented"
    INVALID = "invalid"

    def http_status_code(self) -> int:
        return {
            ProcessingStatuses.PROCESSED: 200,
            ProcessingStatuses.SKIPPED: 206,
            ProcessingStatuses.FAILURE: 422,
            ProcessingStatuses.NOT_IMPLEMENTED: 501,
            ProcessingStatuses.INVALID: 400,
        }[self]


class ProcessingResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: ProcessingStatuses
    message: str
    details: Dict[str, Any] = Field(default={})
