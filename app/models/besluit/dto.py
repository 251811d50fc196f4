from datetime import date
from enum import Enum
from typing import List

from pydantic import Field, RootModel

from app.models.notification.dto import PrivacyNotices
from app.models.zaak.dto import ZgwModel


class MessageStatus(str, Enum):
    UNKNOWN = "-"
    IN_PROGRESS = "in_bewerking"
    TO_BE_DETERMINED = "ter_vaststelling"
    DEFINITIVE = "definitief"
    ARCHIVED = "gearchiveerd"

    @classmethod
    def _missing_(cls, value: object) -> "MessageStatus":
        return cls.UNKNOWN


class DecisionResource(ZgwModel):
    """
    The link between a decision and one of its information objects.
    """
    uri: str = Field(default="", alias="url")
    info_object_uri: str = Field(alias="informatieobject")
    decision_uri: str = Field(alias="besluit")


class Decision(ZgwModel):
    uri: str = Field(default="", alias="url")
    identification: str = Field(alias="identificatie")
    type_uri: str = Field(alias="besluittype")
    case_uri: str = Field(alias="zaak")
    decision_date: date | None = Field(default=None, alias="datum")
    explanation: str = Field(default="", alias="toelichting")
    governing_body: str = Field(default="", alias="bestuursorgaan")
    effective_date: date | None = Field(default=None, alias="ingangsdatum")
    expiration_date: date | None = Field(default=None, alias="vervaldatum")
    expiration_reason: str = Field(default="", alias="vervalreden")
    publication_date: date | None = Field(default=None, alias="publicatiedatum")
    shipping_date: date | None = Field(default=None, alias="verzenddatum")
    response_date: date | None = Field(default=None, alias="uiterlijkeReactiedatum")


class DecisionType(ZgwModel):
    name: str = Field(default="", alias="omschrijving")
    description: str = Field(default="", alias="omschrijvingGeneriek")
    category: str = Field(default="", alias="besluitcategorie")
    publication_indicator: bool = Field(default=False, alias="publicatieIndicatie")
    publication_text: str = Field(default="", alias="publicatietekst")
    explanation: str = Field(default="", alias="toelichting")


class InfoObject(ZgwModel):
    uri: str = Field(default="", alias="url")
    type_uri: str = Field(alias="informatieobjecttype")
    status: MessageStatus = Field(default=MessageStatus.UNKNOWN)
    confidentiality: PrivacyNotices = Field(
        default=PrivacyNotices.UNKNOWN, alias="vertrouwelijkheidaanduiding"
    )

    def is_publishable(self) -> bool:
        return (
            self.status == MessageStatus.DEFINITIVE
            and self.confidentiality == PrivacyNotices.NON_CONFIDENTIAL
        )


class DecisionResources(RootModel[List[DecisionResource]]):
    """
    All information objects linked to a decision. The Besluiten API returns
    this list without pagination.
    """

    @property
    def results(self) -> List[DecisionResource]:
        return self.root
