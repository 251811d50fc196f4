from abc import abstractmethod
from typing import Any, Dict

from app.config import ConfigTemplates
from app.models.klant.dto import CommonPartyData
from app.models.notification.dto import NotificationEvent
from app.models.notify.dto import NotifyMethods
from app.models.objecten.dto import IdTypes
from app.models.zaak.dto import Case, CaseStatuses, CaseType
from app.services.querying.query_context import QueryContext
from app.services.scenarios.base_scenario import BaseScenario, PreparedData, party_personalization
from app.services.scenarios.exceptions import AbortedNotifyingException
from app.services.scenarios.scenario_types import ScenarioTypes
from app.services.settings.whitelist import Whitelists, WhitelistIds


class BaseCaseScenario(BaseScenario):
    """
    Shared logic of the scenarios triggered by a new status of a case. The
    statuses and the type of the last status may already be known from
    resolving the scenario, in which case they are not queried again.
    """

    template_name: str

    def __init__(
        self,
        query_context: QueryContext,
        whitelists: Whitelists,
        templates: ConfigTemplates,
        case_statuses: CaseStatuses | None = None,
        case_type: CaseType | None = None,
    ) -> None:
        super().__init__(query_context, whitelists, templates)
        self.case_statuses = case_statuses
        self.case_type = case_type
        self.case: Case | None = None

    @abstractmethod
    def get_whitelist(self) -> WhitelistIds: ...

    def prepare_data(self, event: NotificationEvent) -> PreparedData:
        if self.case_statuses is None:
            self.case_statuses = self.query_context.get_case_statuses()
        if self.case_type is None:
            self.case_type = self.query_context.get_last_case_type(self.case_statuses)

        self.validate_whitelist(self.get_whitelist(), self.case_type.identification)
        self.validate_notify_permit(self.case_type.is_notification_expected)

        self.case = self.query_context.get_case()
        bsn = self.query_context.get_bsn_number(self.case.uri)
        if not bsn:
            raise AbortedNotifyingException(
                f"The initiator of case {self.case.uri} is not identified by a BSN number"
            )
        party = self.query_context.get_party_data(bsn, IdTypes.BSN, self.case.identification)

        return PreparedData(party=party, case_uri=self.case.uri)

    def get_template_id(self, method: NotifyMethods) -> str | None:
        return getattr(self.templates, f"{method.value}_{self.template_name}", None)

    def get_personalization(self, party: CommonPartyData) -> Dict[str, Any]:
        if self.case is None:
            raise ValueError("The case has not been prepared")

        return {
            "zaak.omschrijving": self.case.name,
            "zaak.identificatie": self.case.identification,
            **party_personalization(party),
        }


class CaseCreatedScenario(BaseCaseScenario):
    scenario_type = ScenarioTypes.CASE_CREATED
    template_name = "zaak_create"

    def get_whitelist(self) -> WhitelistIds:
        return self.whitelists.zaak_create


class CaseStatusUpdatedScenario(BaseCaseScenario):
    scenario_type = ScenarioTypes.CASE_STATUS_UPDATED
    template_name = "zaak_update"

    def get_whitelist(self) -> WhitelistIds:
        return self.whitelists.zaak_update

    def get_personalization(self, party: CommonPartyData) -> Dict[str, Any]:
        personalization = super().get_personalization(party)
        personalization["status.omschrijving"] = self.case_type.name if self.case_type else ""
        return personalization


class CaseClosedScenario(CaseStatusUpdatedScenario):
    scenario_type = ScenarioTypes.CASE_CLOSED
    template_name = "zaak_close"

    def get_whitelist(self) -> WhitelistIds:
        return self.whitelists.zaak_close
