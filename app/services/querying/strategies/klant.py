from abc import ABC, abstractmethod
import logging

from app.models.klant.dto import (
    Citizen,
    CitizenResults,
    CommonPartyData,
    DistributionChannels,
    PartyResults,
)
from app.models.objecten.dto import IdTypes
from app.services.api.client_types import ClientTypes
from app.services.contact.channel_resolver import ContactChannelResolver, NoDigitalAddressException
from app.services.querying.exceptions import QueryContextException, QueryFailedException
from app.services.querying.query_base import QueryBase

logger = logging.getLogger(__name__)

KVK_IDENTIFIER = "kvk_nummer"


class QueryKlant(ABC):
    """
    Queries for the party (citizen or organization) to notify and its contact details.
    """

    @abstractmethod
    def get_party_data(
        self,
        identification: str,
        id_type: IdTypes = IdTypes.BSN,
        case_identifier: str | None = None,
    ) -> CommonPartyData:
        """
        Looks up the party by its BSN or KVK number and determines over which
        channel it should be notified. When a case identifier is given, contact
        details registered for that specific case take precedence.
        """
        ...


def _ensure_identification(identification: str, id_type: IdTypes) -> None:
    if not identification:
        raise QueryContextException("The party identification could not be determined")
    if id_type not in (IdTypes.BSN, IdTypes.KVK):
        raise QueryContextException(f"Unsupported party identification type: {id_type.value}")


class QueryKlantV1(QueryKlant):
    """
    OpenKlant 1.x, "klanten" with a single email address, phone number and address
    """

    def __init__(self, query_base: QueryBase, base_url: str) -> None:
        self.__query_base = query_base
        self.__base_url = base_url

    def get_party_data(
        self,
        identification: str,
        id_type: IdTypes = IdTypes.BSN,
        case_identifier: str | None = None,
    ) -> CommonPartyData:
        _ensure_identification(identification, id_type)

        param = (
            "subjectNatuurlijkPersoon__inpBsn"
            if id_type == IdTypes.BSN
            else "subjectNietNatuurlijkPersoon__innNnpId"
        )
        url = f"{self.__base_url}/klanten"
        citizens = self.__query_base.get(
            ClientTypes.OPENKLANT, url, CitizenResults, params={param: identification}
        )
        if not citizens.results:
            raise QueryFailedException(url=url, body="", message="No party was found for the given identification")

        citizen = citizens.results[0]
        return CommonPartyData(
            uri=citizen.uri,
            name=citizen.name,
            surname_prefix=citizen.surname_prefix,
            surname=citizen.surname,
            distribution_channel=self.determine_channel(citizen),
            email_address=citizen.email_address,
            telephone_number=citizen.telephone_number,
            letter_address=citizen.address,
        )

    @staticmethod
    def determine_channel(citizen: Citizen) -> DistributionChannels:
        if citizen.email_address and citizen.telephone_number:
            return DistributionChannels.BOTH
        if citizen.email_address:
            return DistributionChannels.EMAIL
        if citizen.telephone_number:
            return DistributionChannels.SMS
        if citizen.address is not None:
            return DistributionChannels.LETTER
        raise NoDigitalAddressException(f"Party {citizen.uri} does not have any contact details")


class QueryKlantV2(QueryKlant):
    """
    OpenKlant 2.x, "partijen" with any number of digital addresses
    """

    def __init__(
        self,
        query_base: QueryBase,
        base_url: str,
        resolver: ContactChannelResolver,
        party_identifier: str,
    ) -> None:
        self.__query_base = query_base
        self.__base_url = base_url
        self.__resolver = resolver
        self.__party_identifier = party_identifier

    def get_party_data(
        self,
        identification: str,
        id_type: IdTypes = IdTypes.BSN,
        case_identifier: str | None = None,
    ) -> CommonPartyData:
        _ensure_identification(identification, id_type)

        code = self.__party_identifier if id_type == IdTypes.BSN else KVK_IDENTIFIER
        parties = self.__query_base.get(
            ClientTypes.OPENKLANT,
            f"{self.__base_url}/partijen",
            PartyResults,
            params={
                "partijIdentificator__codeSoortObjectId": code,
                "partijIdentificator__objectId": identification,
                "expand": "digitaleAdressen",
            },
        )

        contact = self.__resolver.resolve_parties(parties, case_identifier)
        details = contact.party.identification.details
        logger.debug(f"Resolved party {contact.party.uri} to channel {contact.channel.value}")

        return CommonPartyData(
            uri=contact.party.uri,
            name=details.name,
            surname_prefix=details.surname_prefix,
            surname=details.surname,
            distribution_channel=contact.channel,
            email_address=contact.email_address,
            telephone_number=contact.telephone_number,
            letter_address=contact.party.letter_address,
        )
