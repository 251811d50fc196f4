from datetime import date
import logging
import re
from typing import Any, Dict, List

from app.config import ConfigTemplates
from app.models.besluit.dto import Decision, DecisionResource, DecisionType, MessageStatus
from app.models.klant.dto import CommonPartyData
from app.models.notification.dto import NotificationEvent, PrivacyNotices
from app.models.notify.dto import NotifyData, NotifyMethods
from app.models.objecten.dto import IdTypes
from app.models.zaak.dto import Case, CaseType
from app.services.querying.exceptions import QueryContextException, QueryFailedException
from app.services.querying.query_context import QueryContext
from app.services.querying.uri_utils import extract_guid
from app.services.scenarios.base_scenario import BaseScenario, PreparedData, party_personalization
from app.services.scenarios.exceptions import AbortedNotifyingException, ProcessingFailedException
from app.services.scenarios.scenario_types import ScenarioTypes
from app.services.sending.notify_client import NotifyClient
from app.services.settings.whitelist import Whitelists

logger = logging.getLogger(__name__)


_NEWLINES = re.compile(r"\\r\\n|\r\n|(?:\\n|\n){2}|\\n|\n|\\r|\r")


def _iso(value: date | None) -> str:
    return value.isoformat() if value else ""


def replace_whitespaces(text: str) -> str:
    """
    Normalizes every newline in the text to CRLF, as expected by the message
    box of the citizen. Escaped newlines ("\\n") are replaced as well and an empty
    line between two paragraphs is collapsed into a single line break.
    """
    return _NEWLINES.sub("\r\n", text)


class DecisionMadeScenario(BaseScenario):
    """
    A decision ("besluit") was made on a case and published with an
    information object. Only definitive, public information objects of a
    whitelisted type are announced.
    """

    scenario_type = ScenarioTypes.DECISION_MADE

    def __init__(
        self,
        query_context: QueryContext,
        whitelists: Whitelists,
        templates: ConfigTemplates,
    ) -> None:
        super().__init__(query_context, whitelists, templates)
        self.decision: Decision | None = None
        self.decision_type: DecisionType | None = None
        self.case: Case | None = None
        self.case_type: CaseType | None = None
        self.decision_resource: DecisionResource | None = None
        self.bsn = ""

    def prepare_data(self, event: NotificationEvent) -> PreparedData:
        decision_resource = self.query_context.get_decision_resource()
        self.decision_resource = decision_resource
        info_object = self.query_context.get_info_object(decision_resource)

        info_object_type_id = extract_guid(info_object.type_uri)
        if info_object_type_id not in self.whitelists.decision_infoobject_type_uuids:
            raise AbortedNotifyingException(
                f"The information object type '{info_object_type_id}' is not whitelisted in "
                "whitelist.decision_infoobject_type_uuids"
            )

        if info_object.status != MessageStatus.DEFINITIVE:
            raise AbortedNotifyingException(
                f"The information object of the decision is not definitive (status: {info_object.status.value})"
            )

        if info_object.confidentiality != PrivacyNotices.NON_CONFIDENTIAL:
            raise AbortedNotifyingException(
                f"The information object of the decision is not public (confidentiality: {info_object.confidentiality.value})"
            )

        self.decision = self.query_context.get_decision(decision_resource)
        self.case_type = self.query_context.get_last_case_type(
            self.query_context.get_case_statuses(self.decision.case_uri)
        )

        self.validate_whitelist(self.whitelists.decision_made, self.case_type.identification)
        self.validate_notify_permit(self.case_type.is_notification_expected)

        bsn = self.__get_bsn_number(self.decision.case_uri)
        if not bsn:
            raise AbortedNotifyingException(
                f"The case {self.decision.case_uri} of the decision does not have a citizen to notify"
            )

        self.decision_type = self.query_context.get_decision_type(self.decision)
        self.case = self.query_context.get_case(self.decision.case_uri)
        party = self.query_context.get_party_data(bsn, IdTypes.BSN, self.case.identification)
        self.bsn = bsn

        return PreparedData(party=party, case_uri=self.case.uri)

    def __get_bsn_number(self, case_uri: str) -> str:
        # Organizations do not have a BSN number
        try:
            return self.query_context.get_bsn_number(case_uri)
        except (QueryFailedException, QueryContextException) as e:
            logger.info(f"No BSN number found for case {case_uri}: {e}")
            return ""

    def get_template_id(self, method: NotifyMethods) -> str | None:
        return self.templates.decision_made

    def get_personalization(self, party: CommonPartyData) -> Dict[str, Any]:
        if self.decision is None or self.decision_type is None or self.case is None or self.case_type is None:
            raise ValueError("The decision has not been prepared")

        decision = self.decision
        decision_type = self.decision_type
        return {
            **party_personalization(party),
            "besluit.identificatie": decision.identification,
            "besluit.datum": _iso(decision.decision_date),
            "besluit.toelichting": decision.explanation,
            "besluit.bestuursorgaan": decision.governing_body,
            "besluit.ingangsdatum": _iso(decision.effective_date),
            "besluit.vervaldatum": _iso(decision.expiration_date),
            "besluit.vervalreden": decision.expiration_reason,
            "besluit.publicatiedatum": _iso(decision.publication_date),
            "besluit.verzenddatum": _iso(decision.shipping_date),
            "besluit.uiterlijkereactiedatum": _iso(decision.response_date),
            "besluittype.omschrijving": decision_type.name,
            "besluittype.omschrijvingGeneriek": decision_type.description,
            "besluittype.besluitcategorie": decision_type.category,
            "besluittype.publicatieindicatie": decision_type.publication_indicator,
            "besluittype.publicatietekst": decision_type.publication_text,
            "besluittype.toelichting": decision_type.explanation,
            "zaak.identificatie": self.case.identification,
            "zaak.omschrijving": self.case.name,
            "zaak.registratiedatum": _iso(self.case.registration_date),
            "zaaktype.omschrijving": self.case_type.name,
            "zaaktype.omschrijvingGeneriek": self.case_type.description,
        }

    def process_data(
        self,
        event: NotificationEvent,
        notify_data: List[NotifyData],
        notify_client: NotifyClient,
        sent: List[str],
    ) -> None:
        """
        Publishes the decision as a message object in the Objecten API instead
        of dispatching it. The message text is the rendered template of the
        first notification, the publishable information objects of the decision
        are attached.
        """
        if self.decision is None or self.decision_resource is None:
            raise ValueError("The decision has not been prepared")
        if not notify_data:
            raise ProcessingFailedException("There is no notification data to create a message from")

        preview = notify_client.generate_template_preview(notify_data[0])

        attachments = self.get_publishable_info_object_uris(self.decision)
        if not attachments:
            raise ProcessingFailedException(
                f"The decision {self.decision.uri} does not have any publishable information objects"
            )

        message = self.query_context.create_message_object(
            {
                "onderwerp": preview.subject or "",
                "berichtTekst": replace_whitespaces(preview.body),
                "publicatiedatum": _iso(self.decision.publication_date),
                "referentie": self.decision_resource.decision_uri,
                "handelingsperspectief": "informatie verstrekken",
                "geopend": False,
                "berichtType": "notificatie",
                "identificatie": {"type": IdTypes.BSN.value, "value": self.bsn},
                "bijlages": attachments,
            }
        )
        logger.info(f"Created message object {message.uri} for decision {self.decision.uri}")
        sent.append("message_object")

    def get_publishable_info_object_uris(self, decision: Decision) -> List[str]:
        uris = []
        for document in self.query_context.get_documents(decision).results:
            if self.query_context.get_info_object(document).is_publishable():
                uris.append(document.info_object_uri)
        return uris
