from enum import Enum
from typing import List

from pydantic import Field

from app.models.zaak.dto import ZgwModel


class DistributionChannels(str, Enum):
    UNKNOWN = "unknown"
    NONE = "none"
    SMS = "sms"
    EMAIL = "email"
    BOTH = "both"
    LETTER = "letter"


class LetterAddress(ZgwModel):
    street: str | None = Field(default=None, alias="straatnaam")
    number: str | None = Field(default=None, alias="huisnummer")
    zip: str | None = Field(default=None, alias="postcode")
    city: str | None = Field(default=None, alias="woonplaatsnaam")
    country: str | None = Field(default=None, alias="land")


class CommonPartyData(ZgwModel):
    """
    Party (citizen or organization) data normalized over the OpenKlant versions.
    """
    uri: str = ""
    name: str | None = None
    surname_prefix: str | None = None
    surname: str | None = None
    distribution_channel: DistributionChannels = DistributionChannels.UNKNOWN
    email_address: str = ""
    telephone_number: str = ""
    letter_address: LetterAddress | None = None


# OpenKlant v1
class Citizen(ZgwModel):
    uri: str = Field(default="", alias="url")
    name: str | None = Field(default=None, alias="voornaam")
    surname_prefix: str | None = Field(default=None, alias="voorvoegselAchternaam")
    surname: str | None = Field(default=None, alias="achternaam")
    telephone_number: str = Field(default="", alias="telefoonnummer")
    email_address: str = Field(default="", alias="emailadres")
    address: LetterAddress | None = Field(default=None, alias="adres")


class CitizenResults(ZgwModel):
    count: int
    results: List[Citizen] = Field(default=[])


# OpenKlant v2
class DigitalAddressShort(ZgwModel):
    id: str = Field(default="", alias="uuid")
    uri: str = Field(default="", alias="url")


class DigitalAddressLong(ZgwModel):
    id: str = Field(default="", alias="uuid")
    uri: str = Field(default="", alias="url")
    value: str = Field(default="", alias="adres")
    type: str = Field(default="", alias="soortDigitaalAdres")
    reference: str | None = Field(default=None, alias="referentie")


class PartyDetails(ZgwModel):
    name: str | None = Field(default=None, alias="voornaam")
    surname_prefix: str | None = Field(default=None, alias="voorvoegselAchternaam")
    surname: str | None = Field(default=None, alias="achternaam")


class PartyIdentification(ZgwModel):
    details: PartyDetails = Field(default_factory=PartyDetails, alias="contactnaam")


class Expansion(ZgwModel):
    digital_addresses: List[DigitalAddressLong] = Field(default=[], alias="digitaleAdressen")


class PartyResult(ZgwModel):
    uri: str = Field(default="", alias="url")
    preferred_digital_address: DigitalAddressShort | None = Field(
        default=None, alias="voorkeursDigitaalAdres"
    )
    identification: PartyIdentification = Field(
        default_factory=PartyIdentification, alias="partijIdentificatie"
    )
    expansion: Expansion = Field(default_factory=Expansion, alias="_expand")
    letter_address: LetterAddress | None = Field(default=None, alias="bezoekadres")


class PartyResults(ZgwModel):
    count: int
    results: List[PartyResult] = Field(default=[])


class ContactMoment(ZgwModel):
    uri: str = Field(default="", alias="url")
    id: str = Field(default="", alias="uuid")
