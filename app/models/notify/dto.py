import base64
import json
from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

from app.models.notification.dto import NotificationEvent


class NotifyMethods(str, Enum):
    EMAIL = "email"
    SMS = "sms"
    LETTER = "letter"


class NotifyReference(BaseModel):
    """
    Reference sent along with every notification to the NotifyNL API. It is
    returned in the delivery receipt and links the receipt back to the event.
    """
    model_config = ConfigDict(frozen=True)

    notification: NotificationEvent
    case_uri: str | None = None
    party_uri: str | None = None

    def encode(self) -> str:
        payload = json.dumps(self.model_dump(mode="json", by_alias=True))
        return base64.urlsafe_b64encode(payload.encode("utf-8")).decode("ascii")

    @classmethod
    def decode(cls, value: str) -> "NotifyReference":
        try:
            payload = base64.urlsafe_b64decode(value.encode("ascii")).decode("utf-8")
        except (ValueError, UnicodeDecodeError) as e:
            raise ValueError(f"Invalid notify reference: {e}")
        return cls.model_validate(json.loads(payload))


class NotifyData(BaseModel):
    """
    A single notification ready to be dispatched over one channel.
    """
    model_config = ConfigDict(frozen=True)

    notification_method: NotifyMethods
    contact_details: str
    template_id: str
    personalization: Dict[str, Any] = Field(default={})
    reference: NotifyReference | None = None


class DeliveryStatuses(str, Enum):
    CREATED = "created"
    SENDING = "sending"
    PENDING = "pending"
    DELIVERED = "delivered"
    PERMANENT_FAILURE = "permanent-failure"
    TEMPORARY_FAILURE = "temporary-failure"
    TECHNICAL_FAILURE = "technical-failure"
    # Letters only
    ACCEPTED = "accepted"
    RECEIVED = "received"
    PENDING_VIRUS_CHECK = "pending-virus-check"
    VIRUS_SCAN_FAILED = "virus-scan-failed"
    VALIDATION_FAILED = "validation-failed"
    CANCELLED = "cancelled"
    RETURNED_LETTER = "returned-letter"


class DeliveryReceipt(BaseModel):
    """
    Callback sent by the NotifyNL API when a notification changed its delivery state.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str
    reference: str | None = None
    to: str = ""
    status: DeliveryStatuses
    notification_type: NotifyMethods
    template_id: str = ""


class TemplatePreview(BaseModel):
    """
    A template rendered by the NotifyNL API with the given personalisation.
    """
    id: str = ""
    type: str = ""
    subject: str | None = None
    body: str
