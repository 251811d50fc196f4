from datetime import timezone
from typing import Any, Dict
from zoneinfo import ZoneInfo

from app.config import ConfigTemplates
from app.models.klant.dto import CommonPartyData
from app.models.notification.dto import NotificationEvent
from app.models.notify.dto import NotifyMethods
from app.models.objecten.dto import CommonTaskData, IdTypes, TaskStatuses
from app.models.zaak.dto import Case
from app.services.querying.query_context import QueryContext
from app.services.scenarios.base_scenario import BaseScenario, PreparedData, party_personalization
from app.services.scenarios.exceptions import AbortedNotifyingException
from app.services.scenarios.scenario_types import ScenarioTypes
from app.services.settings.whitelist import Whitelists

LOCAL_TIMEZONE = ZoneInfo("Europe/Amsterdam")
NO_EXPIRATION = "-"


class TaskAssignedScenario(BaseScenario):
    """
    A task linked to a case was assigned to a citizen or an organization.
    """

    scenario_type = ScenarioTypes.TASK_ASSIGNED

    def __init__(
        self,
        query_context: QueryContext,
        whitelists: Whitelists,
        templates: ConfigTemplates,
    ) -> None:
        super().__init__(query_context, whitelists, templates)
        self.task: CommonTaskData | None = None
        self.case: Case | None = None

    def prepare_data(self, event: NotificationEvent) -> PreparedData:
        self.task = self.query_context.get_task()

        if self.task.status != TaskStatuses.OPEN:
            raise AbortedNotifyingException(
                f"The task {self.task.uri} is not open (status: {self.task.status.value})"
            )

        id_type = self.task.identification.type
        if id_type not in (IdTypes.BSN, IdTypes.KVK):
            raise AbortedNotifyingException(
                f"The task {self.task.uri} is not assigned to a person or an organization"
            )

        case_type = self.query_context.get_last_case_type(
            self.query_context.get_case_statuses(self.task.case_uri)
        )
        self.validate_whitelist(self.whitelists.task_assigned, case_type.identification)
        self.validate_notify_permit(case_type.is_notification_expected)

        self.case = self.query_context.get_case(self.task.case_uri)
        party = self.query_context.get_party_data(
            self.task.identification.value, id_type, self.case.identification
        )

        return PreparedData(party=party, case_uri=self.case.uri)

    def get_template_id(self, method: NotifyMethods) -> str | None:
        return getattr(self.templates, f"{method.value}_task_assigned", None)

    def get_personalization(self, party: CommonPartyData) -> Dict[str, Any]:
        if self.task is None or self.case is None:
            raise ValueError("The task has not been prepared")

        return {
            "taak.verloopdatum": format_expiration_date(self.task),
            "taak.heeft_verloopdatum": "yes" if self.task.expiration_date else "no",
            "taak.record.data.title": self.task.title,
            "zaak.identificatie": self.case.identification,
            "zaak.omschrijving": self.case.name,
            **party_personalization(party),
        }


def format_expiration_date(task: CommonTaskData) -> str:
    """
    Returns the expiration date as dd-mm-yyyy in Dutch local time, or "-" when the task does not expire.
    """
    if task.expiration_date is None:
        return NO_EXPIRATION

    expiration = task.expiration_date
    if expiration.tzinfo is None:
        expiration = expiration.replace(tzinfo=timezone.utc)
    return expiration.astimezone(LOCAL_TIMEZONE).strftime("%d-%m-%Y")
