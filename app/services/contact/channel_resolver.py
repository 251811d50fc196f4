import logging

from pydantic import BaseModel, ConfigDict

from app.models.klant.dto import (
    DigitalAddressLong,
    DistributionChannels,
    PartyResult,
    PartyResults,
)

logger = logging.getLogger(__name__)


class NoDigitalAddressException(Exception):
    """Raised when a party has no digital address a notification can be sent to"""

    pass


class ResolvedContact(BaseModel):
    model_config = ConfigDict(frozen=True)

    party: PartyResult
    channel: DistributionChannels
    email_address: str = ""
    telephone_number: str = ""


class _Candidate:
    """
    Running state of a single scan over digital addresses.
    """

    def __init__(self) -> None:
        self.selected: ResolvedContact | None = None
        self.fallback_email: ResolvedContact | None = None
        self.fallback_phone: ResolvedContact | None = None

    def fallback(self) -> ResolvedContact | None:
        return self.fallback_email or self.fallback_phone


class ContactChannelResolver:
    """
    Picks the digital address a party should be notified on.

    In order of priority: an address whose reference equals the case
    identifier, the party's preferred address, the first email address and
    finally the first phone number.
    """

    def __init__(self, email_label: str, phone_label: str) -> None:
        self.__email_label = email_label.lower()
        self.__phone_label = phone_label.lower()

    def determine_channel(self, address: DigitalAddressLong) -> DistributionChannels:
        address_type = address.type.lower()
        if address_type == self.__email_label:
            return DistributionChannels.EMAIL
        # The label of phone numbers differs between OpenKlant releases
        if self.__phone_label in address_type:
            return DistributionChannels.SMS
        return DistributionChannels.UNKNOWN

    def resolve(self, party: PartyResult, case_identifier: str | None = None) -> ResolvedContact:
        if not party.expansion.digital_addresses:
            raise NoDigitalAddressException(f"Party {party.uri} does not have any digital addresses")

        candidate = _Candidate()
        if self.__scan(party, candidate, case_identifier):
            return candidate.selected  # type: ignore

        return self.__pick_fallback(candidate)

    def resolve_parties(
        self, parties: PartyResults, case_identifier: str | None = None
    ) -> ResolvedContact:
        """
        Resolves the contact over several party results. The first party with a
        case matching or preferred address wins, otherwise the first email and
        then the first phone number over all parties is used.
        """
        if not parties.results:
            raise NoDigitalAddressException("No parties were found")

        candidate = _Candidate()
        for party in parties.results:
            if not party.expansion.digital_addresses:
                continue

            if self.__scan(party, candidate, case_identifier):
                return candidate.selected  # type: ignore

        return self.__pick_fallback(candidate)

    def __scan(
        self, party: PartyResult, candidate: _Candidate, case_identifier: str | None
    ) -> bool:
        preferred_id = (
            party.preferred_digital_address.id if party.preferred_digital_address else ""
        )
        candidate.selected = None
        preferred_found = False

        for address in party.expansion.digital_addresses:
            channel = self.determine_channel(address)
            if channel == DistributionChannels.UNKNOWN or not address.value:
                continue

            contact = self.__to_contact(party, channel, address.value)

            if case_identifier is not None and address.reference == case_identifier:
                logger.debug(f"Using digital address {address.id} linked to case {case_identifier}")
                candidate.selected = contact
                return True

            if preferred_found:
                continue

            if preferred_id and address.id == preferred_id:
                candidate.selected = contact
                preferred_found = True
            elif channel == DistributionChannels.EMAIL and candidate.fallback_email is None:
                candidate.fallback_email = contact
            elif channel == DistributionChannels.SMS and candidate.fallback_phone is None:
                candidate.fallback_phone = contact

        return preferred_found

    @staticmethod
    def __pick_fallback(candidate: _Candidate) -> ResolvedContact:
        fallback = candidate.fallback()
        if fallback is None:
            raise NoDigitalAddressException("No usable digital address was found")
        return fallback

    @staticmethod
    def __to_contact(
        party: PartyResult, channel: DistributionChannels, value: str
    ) -> ResolvedContact:
        if channel == DistributionChannels.EMAIL:
            return ResolvedContact(party=party, channel=channel, email_address=value)
        return ResolvedContact(party=party, channel=channel, telephone_number=value)
