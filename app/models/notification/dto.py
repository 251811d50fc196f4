from datetime import datetime
from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class Actions(str, Enum):
    UNKNOWN = "-"
    CREATE = "create"
    UPDATE = "update"
    PARTIAL_UPDATE = "partial_update"
    DESTROY = "destroy"

    @classmethod
    def _missing_(cls, value: object) -> "Actions":
        return cls.UNKNOWN


class Channels(str, Enum):
    UNKNOWN = "-"
    CASES = "zaken"
    OBJECTS = "objecten"
    DECISIONS = "besluiten"

    @classmethod
    def _missing_(cls, value: object) -> "Channels":
        return cls.UNKNOWN


class Resources(str, Enum):
    UNKNOWN = "-"
    CASE = "zaak"
    STATUS = "status"
    OBJECT = "object"
    DECISION = "besluit"

    @classmethod
    def _missing_(cls, value: object) -> "Resources":
        return cls.UNKNOWN


class PrivacyNotices(str, Enum):
    UNKNOWN = "-"
    NON_CONFIDENTIAL = "openbaar"
    LIMITED_PUBLIC = "beperkt_openbaar"
    INTERNAL = "intern"
    CASE_CONFIDENTIAL = "zaakvertrouwelijk"
    CONFIDENTIAL = "vertrouwelijk"
    CONFIDENTIEEL = "confidentieel"
    SECRET = "geheim"
    TOP_SECRET = "zeer_geheim"

    @classmethod
    def _missing_(cls, value: object) -> "PrivacyNotices":
        return cls.UNKNOWN


class EventAttributes(BaseModel):
    """
    Channel specific attributes ("kenmerken") of a notification event. Only the
    fields belonging to the channel of the event are filled in.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="allow")

    # Cases
    case_type_uri: str | None = Field(default=None, alias="zaaktype")
    source_organization: str | None = Field(default=None, alias="bronorganisatie")
    confidentiality_notice: PrivacyNotices | None = Field(
        default=None, alias="vertrouwelijkheidaanduiding"
    )
    # Objects
    object_type_uri: str | None = Field(default=None, alias="objectType")
    # Decisions
    decision_type_uri: str | None = Field(default=None, alias="besluittype")
    responsible_organization: str | None = Field(
        default=None, alias="verantwoordelijkeOrganisatie"
    )

    @property
    def orphans(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})

    def is_invalid_case(self) -> bool:
        return (
            self.case_type_uri is None
            or self.source_organization is None
            or self.confidentiality_notice is None
        )

    def is_invalid_object(self) -> bool:
        return self.object_type_uri is None

    def is_invalid_decision(self) -> bool:
        return self.decision_type_uri is None or self.responsible_organization is None


class NotificationEvent(BaseModel):
    """
    Webhook notification sent by the "Notificaties" API when something happened
    to a case, an object or a decision.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="allow")

    action: Actions = Field(default=Actions.UNKNOWN, alias="actie")
    channel: Channels = Field(default=Channels.UNKNOWN, alias="kanaal")
    resource: Resources = Field(default=Resources.UNKNOWN, alias="resource")
    attributes: EventAttributes = Field(default_factory=EventAttributes, alias="kenmerken")
    main_object_uri: str = Field(default="", alias="hoofdObject")
    resource_uri: str = Field(default="", alias="resourceUrl")
    create_date: datetime | None = Field(default=None, alias="aanmaakdatum")

    @property
    def orphans(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})

    def get_invalid_properties(self) -> list[str]:
        """
        Returns the names of the required properties which are missing or unrecognized.
        """
        checks = {
            "actie": self.action == Actions.UNKNOWN,
            "kanaal": self.channel == Channels.UNKNOWN,
            "resource": self.resource == Resources.UNKNOWN,
            "hoofdObject": self.main_object_uri == "",
            "resourceUrl": self.resource_uri == "",
        }
        return [name for name, is_invalid in checks.items() if is_invalid]

    def get_organization_id(self) -> str:
        return (
            self.attributes.source_organization
            or self.attributes.responsible_organization
            or ""
        )
