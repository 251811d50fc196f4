from abc import ABC, abstractmethod
import logging

from app.models.notification.dto import NotificationEvent
from app.models.zaak.dto import Case, CaseRole, CaseRoles, CaseStatuses, CaseType
from app.services.api.client_types import ClientTypes
from app.services.querying.exceptions import QueryFailedException
from app.services.querying.query_base import QueryBase
from app.services.querying.uri_utils import (
    ensure_uri,
    is_case_uri,
    is_status_type_uri,
)

logger = logging.getLogger(__name__)


class QueryZaak(ABC):
    """
    Queries for cases and their statuses, types and roles.
    """

    @abstractmethod
    def get_case(self, case_uri: str | None = None) -> Case: ...

    @abstractmethod
    def get_case_statuses(self, case_uri: str | None = None) -> CaseStatuses: ...

    @abstractmethod
    def get_last_case_type(self, case_statuses: CaseStatuses) -> CaseType: ...

    @abstractmethod
    def get_case_role(self, case_uri: str) -> CaseRole: ...

    @abstractmethod
    def get_bsn_number(self, case_uri: str) -> str: ...


class QueryZaakV1(QueryZaak):
    """
    OpenZaak "Zaken" API v1
    """

    def __init__(
        self,
        query_base: QueryBase,
        event: NotificationEvent,
        base_url: str,
        initiator_role: str,
        subject_type: str,
    ) -> None:
        self.__query_base = query_base
        self.__event = event
        self.__base_url = base_url
        self.__initiator_role = initiator_role
        self.__subject_type = subject_type

    def get_case(self, case_uri: str | None = None) -> Case:
        uri = ensure_uri(case_uri or self.__event.main_object_uri, is_case_uri, "case")
        return self.__query_base.get(ClientTypes.OPENZAAK, uri, Case)

    def get_case_statuses(self, case_uri: str | None = None) -> CaseStatuses:
        uri = ensure_uri(case_uri or self.__event.main_object_uri, is_case_uri, "case")
        return self.__query_base.get(
            ClientTypes.OPENZAAK,
            f"{self.__base_url}/statussen",
            CaseStatuses,
            params={"zaak": uri},
        )

    def get_last_case_type(self, case_statuses: CaseStatuses) -> CaseType:
        try:
            last_status = case_statuses.last_status()
        except ValueError as e:
            raise QueryFailedException(url="", body="", message=str(e))

        uri = ensure_uri(last_status.type_uri, is_status_type_uri, "case status type")
        return self.__query_base.get(ClientTypes.OPENZAAK, uri, CaseType)

    def get_case_role(self, case_uri: str) -> CaseRole:
        uri = ensure_uri(case_uri, is_case_uri, "case")
        roles = self.__query_base.get(
            ClientTypes.OPENZAAK,
            f"{self.__base_url}/rollen",
            CaseRoles,
            params={
                "zaak": uri,
                "omschrijvingGeneriek": self.__initiator_role,
                "betrokkeneType": self.__subject_type,
            },
        )
        try:
            return roles.initiator(self.__initiator_role)
        except ValueError as e:
            raise QueryFailedException(url=uri, body="", message=str(e))

    def get_bsn_number(self, case_uri: str) -> str:
        role = self.get_case_role(case_uri)
        if role.party is None:
            return ""
        return role.party.bsn_number
