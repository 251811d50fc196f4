from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Dict

from app.models.notification.dto import NotificationEvent
from app.models.objecten.dto import CommonTaskData, GenericObject, MessageObject, TaskObject
from app.services.api.client_types import ClientTypes
from app.services.querying.exceptions import QueryContextException
from app.services.querying.query_base import QueryBase
from app.services.querying.uri_utils import ensure_uri, extract_guid, is_object_uri


class QueryObjecten(ABC):
    """
    Queries for objects (tasks and messages) stored in the Objecten API.
    """

    @abstractmethod
    def get_task(self) -> CommonTaskData: ...

    @abstractmethod
    def get_message(self) -> MessageObject: ...

    @abstractmethod
    def create_message_object(self, data: Dict[str, Any]) -> GenericObject:
        """
        Creates a new object of the configured message object type with the given record data.
        """
        ...


class QueryObjectenV2(QueryObjecten):
    """
    Objecten API v2
    """

    def __init__(
        self,
        query_base: QueryBase,
        event: NotificationEvent,
        base_url: str = "",
        object_types_url: str = "",
        message_object_type_uuid: str | None = None,
        message_object_type_version: int = 1,
    ) -> None:
        self.__query_base = query_base
        self.__event = event
        self.__base_url = base_url
        self.__object_types_url = object_types_url
        self.__message_object_type_uuid = extract_guid(message_object_type_uuid)
        self.__message_object_type_version = message_object_type_version

    def get_task(self) -> CommonTaskData:
        task = self.__query_base.get(ClientTypes.OBJECTEN, self.__object_uri(), TaskObject)
        return CommonTaskData.from_task_object(task)

    def get_message(self) -> MessageObject:
        return self.__query_base.get(ClientTypes.OBJECTEN, self.__object_uri(), MessageObject)

    def create_message_object(self, data: Dict[str, Any]) -> GenericObject:
        if not self.__message_object_type_uuid:
            raise QueryContextException(
                "No message object type configured, please set whitelist.message_object_type_uuid"
            )

        return self.__query_base.post(
            ClientTypes.OBJECTEN,
            f"{self.__base_url}/objects",
            {
                "type": f"{self.__object_types_url}/objecttypes/{self.__message_object_type_uuid}",
                "record": {
                    "typeVersion": self.__message_object_type_version,
                    "data": data,
                    "startAt": date.today().isoformat(),
                },
            },
            GenericObject,
        )

    def __object_uri(self) -> str:
        return ensure_uri(
            self.__event.resource_uri or self.__event.main_object_uri, is_object_uri, "object"
        )
