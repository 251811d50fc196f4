from datetime import date, datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class ZgwModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


class Case(ZgwModel):
    uri: str = Field(alias="url")
    identification: str = Field(alias="identificatie")
    name: str = Field(default="", alias="omschrijving")
    case_type_uri: str = Field(alias="zaaktype")
    registration_date: date | None = Field(default=None, alias="registratiedatum")


class CaseType(ZgwModel):
    """
    The type of a case status ("statustype") as returned by the catalogue. It
    tells whether the status is the final one and whether the citizen expects
    to be informed about it.
    """
    uri: str = Field(default="", alias="url")
    name: str = Field(default="", alias="omschrijving")
    description: str = Field(default="", alias="omschrijvingGeneriek")
    identification: str = Field(default="", alias="zaaktypeIdentificatie")
    serial_number: int = Field(default=1, alias="volgnummer")
    is_final_status: bool = Field(default=False, alias="isEindstatus")
    is_notification_expected: bool = Field(default=False, alias="informeren")


class CaseStatus(ZgwModel):
    uri: str = Field(default="", alias="url")
    type_uri: str = Field(alias="statustype")
    created: datetime = Field(alias="datumStatusGezet")


class CaseStatuses(ZgwModel):
    count: int
    results: List[CaseStatus] = Field(default=[])

    def were_never_updated(self) -> bool:
        return self.count <= 1

    def last_status(self) -> CaseStatus:
        """
        Returns the most recently set status. When several statuses share the
        same timestamp the one listed last by the upstream service wins.
        """
        if not self.results:
            raise ValueError("The case does not have any statuses")

        last = self.results[0]
        for status in self.results[1:]:
            if status.created >= last.created:
                last = status
        return last


class CaseRoleParty(ZgwModel):
    bsn_number: str = Field(default="", alias="inpBsn")


class CaseRole(ZgwModel):
    role_type: str = Field(default="", alias="omschrijvingGeneriek")
    subject_type: str = Field(default="", alias="betrokkeneType")
    involved_party_uri: str = Field(default="", alias="betrokkene")
    party: CaseRoleParty | None = Field(default=None, alias="betrokkeneIdentificatie")


class CaseRoles(ZgwModel):
    count: int
    results: List[CaseRole] = Field(default=[])

    def initiator(self, initiator_role: str) -> CaseRole:
        """
        Returns the role identifying the citizen or organization who started the case.
        """
        if not self.results:
            raise ValueError("The case does not have any roles")

        initiator = None
        for role in self.results:
            if role.role_type == initiator_role:
                if initiator is not None:
                    raise ValueError(
                        f"The case has more than one role of type '{initiator_role}'"
                    )
                initiator = role

        if initiator is None:
            raise ValueError(f"The case does not have a role of type '{initiator_role}'")
        return initiator
