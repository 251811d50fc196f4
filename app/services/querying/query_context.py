import logging
from typing import Any, Dict

from app.config import ConfigVariables, ConfigWhitelist, ConfigZgw
from app.models.besluit.dto import (
    Decision,
    DecisionResource,
    DecisionResources,
    DecisionType,
    InfoObject,
)
from app.models.klant.dto import CommonPartyData
from app.models.notification.dto import NotificationEvent
from app.models.objecten.dto import CommonTaskData, GenericObject, IdTypes, MessageObject
from app.models.zaak.dto import Case, CaseStatuses, CaseType
from app.services.contact.channel_resolver import ContactChannelResolver
from app.services.querying.query_base import QueryBase
from app.services.querying.strategies.besluiten import QueryBesluiten, QueryBesluitenV1
from app.services.querying.strategies.klant import QueryKlant, QueryKlantV1, QueryKlantV2
from app.services.querying.strategies.objecten import QueryObjecten, QueryObjectenV2
from app.services.querying.strategies.zaak import QueryZaak, QueryZaakV1

logger = logging.getLogger(__name__)


class QueryContext:
    """
    Single entry point to all queries needed while processing one notification
    event. Accessors accept an already known parent (URI or object) and
    otherwise derive it from the event.
    """

    def __init__(
        self,
        event: NotificationEvent,
        zaak: QueryZaak,
        besluiten: QueryBesluiten,
        klant: QueryKlant,
        objecten: QueryObjecten,
    ) -> None:
        self.event = event
        self.__zaak = zaak
        self.__besluiten = besluiten
        self.__klant = klant
        self.__objecten = objecten

    # Cases
    def get_case(self, case_uri: str | None = None) -> Case:
        return self.__zaak.get_case(case_uri)

    def get_case_statuses(self, case_uri: str | None = None) -> CaseStatuses:
        return self.__zaak.get_case_statuses(case_uri)

    def get_last_case_type(self, case_statuses: CaseStatuses | None = None) -> CaseType:
        if case_statuses is None:
            case_statuses = self.get_case_statuses()
        return self.__zaak.get_last_case_type(case_statuses)

    def get_bsn_number(self, case_uri: str | None = None) -> str:
        return self.__zaak.get_bsn_number(case_uri or self.event.main_object_uri)

    # Decisions
    def get_decision_resource(self) -> DecisionResource:
        return self.__besluiten.get_decision_resource()

    def get_info_object(self, source: DecisionResource | str) -> InfoObject:
        uri = source.info_object_uri if isinstance(source, DecisionResource) else source
        return self.__besluiten.get_info_object(uri)

    def get_decision(self, decision_resource: DecisionResource | None = None) -> Decision:
        return self.__besluiten.get_decision(decision_resource)

    def get_decision_type(self, decision: Decision) -> DecisionType:
        return self.__besluiten.get_decision_type(decision)

    def get_documents(self, decision: Decision | None = None) -> DecisionResources:
        return self.__besluiten.get_documents(decision.uri if decision else None)

    # Parties
    def get_party_data(
        self,
        identification: str,
        id_type: IdTypes = IdTypes.BSN,
        case_identifier: str | None = None,
    ) -> CommonPartyData:
        return self.__klant.get_party_data(identification, id_type, case_identifier)

    # Objects
    def get_task(self) -> CommonTaskData:
        return self.__objecten.get_task()

    def get_message(self) -> MessageObject:
        return self.__objecten.get_message()

    def create_message_object(self, data: Dict[str, Any]) -> GenericObject:
        return self.__objecten.create_message_object(data)


class DataQueryService:
    """
    Creates query contexts bound to a single notification event.
    """

    def __init__(
        self,
        query_base: QueryBase,
        zgw_config: ConfigZgw,
        variables: ConfigVariables,
        whitelist: ConfigWhitelist | None = None,
    ) -> None:
        self.query_base = query_base
        self.__zgw_config = zgw_config
        self.__variables = variables
        self.__message_object_type_uuid = whitelist.message_object_type_uuid if whitelist else None
        self.__resolver = ContactChannelResolver(
            email_label=variables.email_generic_description,
            phone_label=variables.phone_generic_description,
        )

    def from_event(self, event: NotificationEvent) -> QueryContext:
        return QueryContext(
            event=event,
            zaak=QueryZaakV1(
                query_base=self.query_base,
                event=event,
                base_url=self.__zgw_config.openzaak_url,
                initiator_role=self.__variables.initiator_role,
                subject_type=self.__variables.subject_type,
            ),
            besluiten=QueryBesluitenV1(
                query_base=self.query_base,
                event=event,
                base_url=self.__zgw_config.besluiten_url,
            ),
            klant=self.__create_klant(),
            objecten=QueryObjectenV2(
                query_base=self.query_base,
                event=event,
                base_url=self.__zgw_config.objecten_url,
                object_types_url=self.__zgw_config.objecttypen_url,
                message_object_type_uuid=self.__message_object_type_uuid,
                message_object_type_version=self.__variables.message_object_type_version,
            ),
        )

    def __create_klant(self) -> QueryKlant:
        match self.__zgw_config.openklant_version:
            case 1:
                return QueryKlantV1(
                    query_base=self.query_base,
                    base_url=self.__zgw_config.openklant_url,
                )
            case 2:
                return QueryKlantV2(
                    query_base=self.query_base,
                    base_url=self.__zgw_config.openklant_url,
                    resolver=self.__resolver,
                    party_identifier=self.__variables.party_identifier,
                )
            case _:
                raise ValueError(
                    f"Unsupported OpenKlant version {self.__zgw_config.openklant_version}, please fix in app.conf"
                )
