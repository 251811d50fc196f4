from abc import ABC, abstractmethod

from app.models.besluit.dto import (
    Decision,
    DecisionResource,
    DecisionResources,
    DecisionType,
    InfoObject,
)
from app.models.notification.dto import NotificationEvent
from app.services.api.client_types import ClientTypes
from app.services.querying.exceptions import QueryFailedException
from app.services.querying.query_base import QueryBase
from app.services.querying.uri_utils import (
    ensure_uri,
    is_decision_resource_uri,
    is_decision_type_uri,
    is_decision_uri,
    is_info_object_uri,
)


class QueryBesluiten(ABC):
    """
    Queries for decisions, their types and the information objects they publish.
    """

    @abstractmethod
    def get_decision_resource(self) -> DecisionResource: ...

    @abstractmethod
    def get_info_object(self, info_object_uri: str) -> InfoObject: ...

    @abstractmethod
    def get_decision(self, decision_resource: DecisionResource | None = None) -> Decision: ...

    @abstractmethod
    def get_decision_type(self, decision: Decision) -> DecisionType: ...

    @abstractmethod
    def get_documents(self, decision_uri: str | None = None) -> DecisionResources: ...


class QueryBesluitenV1(QueryBesluiten):
    """
    OpenZaak "Besluiten" API v1
    """

    def __init__(self, query_base: QueryBase, event: NotificationEvent, base_url: str) -> None:
        self.__query_base = query_base
        self.__event = event
        self.__base_url = base_url

    def get_decision_resource(self) -> DecisionResource:
        if is_decision_resource_uri(self.__event.resource_uri):
            return self.__query_base.get(
                ClientTypes.BESLUITEN, self.__event.resource_uri, DecisionResource
            )

        # The event refers to the decision itself, use its first linked information object
        documents = self.get_documents()
        if not documents.results:
            raise QueryFailedException(
                url=self.__event.main_object_uri,
                body="",
                message="The decision does not have any information objects",
            )
        return documents.results[0]

    def get_info_object(self, info_object_uri: str) -> InfoObject:
        uri = ensure_uri(info_object_uri, is_info_object_uri, "information object")
        return self.__query_base.get(ClientTypes.BESLUITEN, uri, InfoObject)

    def get_decision(self, decision_resource: DecisionResource | None = None) -> Decision:
        uri = (
            decision_resource.decision_uri
            if decision_resource is not None
            else self.__event.main_object_uri
        )
        uri = ensure_uri(uri, is_decision_uri, "decision")
        return self.__query_base.get(ClientTypes.BESLUITEN, uri, Decision)

    def get_decision_type(self, decision: Decision) -> DecisionType:
        uri = ensure_uri(decision.type_uri, is_decision_type_uri, "decision type")
        return self.__query_base.get(ClientTypes.BESLUITEN, uri, DecisionType)

    def get_documents(self, decision_uri: str | None = None) -> DecisionResources:
        uri = ensure_uri(decision_uri or self.__event.main_object_uri, is_decision_uri, "decision")
        return self.__query_base.get(
            ClientTypes.BESLUITEN,
            f"{self.__base_url}/besluitinformatieobjecten",
            DecisionResources,
            params={"besluit": uri},
        )
