from abc import ABC, abstractmethod
import logging
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict

from app.config import ConfigTemplates
from app.models.klant.dto import CommonPartyData, DistributionChannels
from app.models.notification.dto import NotificationEvent
from app.models.notify.dto import NotifyData, NotifyMethods, NotifyReference
from app.services.querying.query_context import QueryContext
from app.services.scenarios.exceptions import AbortedNotifyingException
from app.services.scenarios.scenario_types import ScenarioTypes
from app.services.sending.notify_client import NotifyClient
from app.services.settings.whitelist import Whitelists, WhitelistIds

logger = logging.getLogger(__name__)


class PreparedData(BaseModel):
    model_config = ConfigDict(frozen=True)

    party: CommonPartyData
    case_uri: str | None = None


class BaseScenario(ABC):
    """
    Base class of all notification scenarios.

    A scenario gathers the data it needs through the query context, checks
    whether a notification may be sent at all and builds one NotifyData item
    per distribution channel of the party.
    """

    scenario_type: ScenarioTypes

    def __init__(
        self,
        query_context: QueryContext,
        whitelists: Whitelists,
        templates: ConfigTemplates,
    ) -> None:
        self.query_context = query_context
        self.whitelists = whitelists
        self.templates = templates

    def try_get_data(self, event: NotificationEvent) -> List[NotifyData]:
        prepared = self.prepare_data(event)
        return self.build_notify_data(event, prepared)

    @abstractmethod
    def prepare_data(self, event: NotificationEvent) -> PreparedData:
        """
        Queries and validates everything needed to notify the party. Raises an
        AbortedNotifyingException when the party must not be notified.
        """
        ...

    def process_data(
        self,
        event: NotificationEvent,
        notify_data: List[NotifyData],
        notify_client: NotifyClient,
        sent: List[str],
    ) -> None:
        """
        Dispatches the gathered notifications. The method of every notification
        sent is appended to `sent`, also when a later one fails.
        """
        for data in notify_data:
            notify_client.send(data)
            sent.append(data.notification_method.value)

    @abstractmethod
    def get_template_id(self, method: NotifyMethods) -> str | None: ...

    @abstractmethod
    def get_personalization(self, party: CommonPartyData) -> Dict[str, Any]: ...

    def build_notify_data(
        self, event: NotificationEvent, prepared: PreparedData
    ) -> List[NotifyData]:
        party = prepared.party
        reference = NotifyReference(
            notification=event, case_uri=prepared.case_uri, party_uri=party.uri or None
        )

        contacts: List[tuple[NotifyMethods, str]] = []
        channel = party.distribution_channel
        if channel in (DistributionChannels.EMAIL, DistributionChannels.BOTH):
            contacts.append((NotifyMethods.EMAIL, party.email_address))
        if channel in (DistributionChannels.SMS, DistributionChannels.BOTH):
            contacts.append((NotifyMethods.SMS, party.telephone_number))
        if channel == DistributionChannels.LETTER:
            contacts.append((NotifyMethods.LETTER, format_letter_address(party)))

        result = []
        for method, contact_details in contacts:
            template_id = self.get_template_id(method)
            if not template_id:
                logger.warning(
                    f"No {method.value} template configured for {self.scenario_type.value}, skipping this channel"
                )
                continue

            personalization = self.get_personalization(party)
            if method == NotifyMethods.LETTER:
                personalization.update(letter_personalization(party))

            result.append(
                NotifyData(
                    notification_method=method,
                    contact_details=contact_details,
                    template_id=template_id,
                    personalization=personalization,
                    reference=reference,
                )
            )

        return result

    @staticmethod
    def validate_whitelist(whitelist: WhitelistIds, case_type_id: str) -> None:
        if not whitelist.is_allowed(case_type_id):
            raise AbortedNotifyingException(
                f"The case type identifier '{case_type_id}' is not whitelisted in {whitelist}"
            )

    @staticmethod
    def validate_notify_permit(is_notification_expected: bool) -> None:
        if not is_notification_expected:
            raise AbortedNotifyingException(
                "The case type does not expect the party to be informed ('informeren' is false)"
            )


def party_personalization(party: CommonPartyData) -> Dict[str, Any]:
    return {
        "klant.voornaam": party.name or "",
        "klant.voorvoegselAchternaam": party.surname_prefix or "",
        "klant.achternaam": party.surname or "",
    }


def letter_personalization(party: CommonPartyData) -> Dict[str, Any]:
    address = party.letter_address
    if address is None:
        return {}
    return {
        "klant.street": address.street or "",
        "klant.number": address.number or "",
        "klant.zip": address.zip or "",
        "klant.city": address.city or "",
        "klant.country": address.country or "",
    }


def format_letter_address(party: CommonPartyData) -> str:
    """
    Formats the postal address as newline separated lines, starting with the name of the party.
    """
    address = party.letter_address
    if address is None:
        raise AbortedNotifyingException(f"Party {party.uri} does not have a postal address")

    name = " ".join(part for part in (party.name, party.surname_prefix, party.surname) if part)
    lines = [
        name,
        " ".join(part for part in (address.street, address.number) if part),
        " ".join(part for part in (address.zip, address.city) if part),
        address.country or "",
    ]
    return "\n".join(line for line in lines if line)
