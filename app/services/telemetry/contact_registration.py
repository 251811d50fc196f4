from abc import ABC, abstractmethod
from datetime import datetime, timezone
import logging
from typing import List

from app.models.klant.dto import ContactMoment
from app.models.notify.dto import NotifyMethods, NotifyReference
from app.services.api.client_types import ClientTypes
from app.services.querying.query_base import QueryBase
from app.services.querying.uri_utils import extract_guid, is_party_uri

logger = logging.getLogger(__name__)


class TelemetryService(ABC):
    @abstractmethod
    def report_completion(
        self,
        reference: NotifyReference,
        method: NotifyMethods,
        recipient: str,
        messages: List[str],
        successful: bool = True,
    ) -> str:
        """
        Registers the outcome of a notification with the source systems and
        returns the identifier of the registration.
        """
        ...


class ContactRegistration(TelemetryService):
    """
    Registers notifications as "klantcontacten" in OpenKlant 2.x, linked to
    the case and the party they were about.
    """

    def __init__(self, query_base: QueryBase, base_url: str) -> None:
        self.__query_base = query_base
        self.__base_url = base_url

    def report_completion(
        self,
        reference: NotifyReference,
        method: NotifyMethods,
        recipient: str,
        messages: List[str],
        successful: bool = True,
    ) -> str:
        contact_moment = self.__query_base.post(
            ClientTypes.CONTACTMOMENTEN,
            f"{self.__base_url}/klantcontacten",
            {
                "kanaal": method.value,
                "onderwerp": "notificatie",
                "inhoud": "; ".join([f"Verzonden aan {recipient}", *messages]),
                "indicatieContactGelukt": successful,
                "taal": "nld",
                "vertrouwelijk": False,
                "plaatsgevondenOp": datetime.now(timezone.utc).isoformat(),
            },
            ContactMoment,
        )

        if reference.case_uri:
            self.__query_base.post(
                ClientTypes.CONTACTMOMENTEN,
                f"{self.__base_url}/onderwerpobjecten",
                {
                    "klantcontact": {"uuid": contact_moment.id},
                    "wasKlantcontact": None,
                    "onderwerpobjectidentificator": {
                        "objectId": extract_guid(reference.case_uri),
                        "codeObjecttype": "zgw-Zaak",
                        "codeRegister": "openzaak",
                        "codeSoortObjectId": "uuid",
                    },
                },
                ContactMoment,
            )

        # Only OpenKlant 2.x parties can be linked to a klantcontact
        if is_party_uri(reference.party_uri):
            self.__query_base.post(
                ClientTypes.CONTACTMOMENTEN,
                f"{self.__base_url}/betrokkenen",
                {
                    "wasPartij": {"uuid": extract_guid(reference.party_uri)},
                    "hadKlantcontact": {"uuid": contact_moment.id},
                    "rol": "klant",
                    "initiator": False,
                },
                ContactMoment,
            )

        logger.info(f"Registered contact moment {contact_moment.id} for {method.value} notification")
        return contact_moment.id
