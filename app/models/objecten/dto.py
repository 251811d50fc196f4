from datetime import datetime
from enum import Enum
from typing import Any, Dict

from pydantic import Field

from app.models.zaak.dto import ZgwModel


class TaskStatuses(str, Enum):
    UNKNOWN = "-"
    OPEN = "open"
    CLOSED = "gesloten"

    @classmethod
    def _missing_(cls, value: object) -> "TaskStatuses":
        return cls.UNKNOWN


class IdTypes(str, Enum):
    UNKNOWN = "-"
    BSN = "bsn"
    KVK = "kvk"

    @classmethod
    def _missing_(cls, value: object) -> "IdTypes":
        return cls.UNKNOWN


class Identification(ZgwModel):
    type: IdTypes = Field(default=IdTypes.UNKNOWN)
    value: str = Field(default="")


class TaskData(ZgwModel):
    case_uri: str = Field(alias="zaak")
    title: str = Field(default="", alias="title")
    status: TaskStatuses = Field(default=TaskStatuses.UNKNOWN)
    expiration_date: datetime | None = Field(default=None, alias="verloopdatum")
    identification: Identification = Field(
        default_factory=Identification, alias="identificatie"
    )


class MessageData(ZgwModel):
    subject: str = Field(default="", alias="onderwerp")
    body: str = Field(default="", alias="berichtTekst")
    actions_perspective: str = Field(default="", alias="handelingsperspectief")
    identification: Identification = Field(
        default_factory=Identification, alias="identificatie"
    )


class TaskRecord(ZgwModel):
    data: TaskData


class MessageRecord(ZgwModel):
    data: MessageData


class TaskObject(ZgwModel):
    uri: str = Field(default="", alias="url")
    type_uri: str = Field(default="", alias="type")
    record: TaskRecord


class MessageObject(ZgwModel):
    uri: str = Field(default="", alias="url")
    type_uri: str = Field(default="", alias="type")
    record: MessageRecord


class CommonTaskData(ZgwModel):
    """
    Task data normalized over the supported task object layouts.
    """
    uri: str = ""
    case_uri: str = ""
    title: str = ""
    status: TaskStatuses = TaskStatuses.UNKNOWN
    expiration_date: datetime | None = None
    identification: Identification = Field(default_factory=Identification)

    @classmethod
    def from_task_object(cls, task: TaskObject) -> "CommonTaskData":
        data = task.record.data
        return cls(
            uri=task.uri,
            case_uri=data.case_uri,
            title=data.title,
            status=data.status,
            expiration_date=data.expiration_date,
            identification=data.identification,
        )


class GenericRecord(ZgwModel):
    data: Dict[str, Any] = Field(default={})


class GenericObject(ZgwModel):
    """
    Any object from the Objecten API, with its record data left untyped.
    """
    uri: str = Field(default="", alias="url")
    type_uri: str = Field(default="", alias="type")
    record: GenericRecord = Field(default_factory=GenericRecord)
