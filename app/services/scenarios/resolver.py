import logging
from typing import Any, Callable, Dict

from app.config import ConfigTemplates
from app.models.notification.dto import Actions, Channels, NotificationEvent, Resources
from app.services.querying.query_context import DataQueryService, QueryContext
from app.services.querying.uri_utils import extract_guid
from app.services.scenarios.base_scenario import BaseScenario
from app.services.scenarios.case_scenarios import (
    CaseClosedScenario,
    CaseCreatedScenario,
    CaseStatusUpdatedScenario,
)
from app.services.scenarios.decision_made import DecisionMadeScenario
from app.services.scenarios.exceptions import AbortedNotifyingException
from app.services.scenarios.message_received import MessageReceivedScenario
from app.services.scenarios.not_implemented import NotImplementedScenario
from app.services.scenarios.scenario_types import ScenarioTypes
from app.services.scenarios.task_assigned import TaskAssignedScenario
from app.services.settings.whitelist import Whitelists

logger = logging.getLogger(__name__)


def is_case_event(event: NotificationEvent) -> bool:
    return (
        event.action == Actions.CREATE
        and event.channel == Channels.CASES
        and event.resource == Resources.STATUS
    )


def is_object_event(event: NotificationEvent) -> bool:
    return (
        event.action == Actions.CREATE
        and event.channel == Channels.OBJECTS
        and event.resource == Resources.OBJECT
    )


def is_decision_event(event: NotificationEvent) -> bool:
    return (
        event.action == Actions.CREATE
        and event.channel == Channels.DECISIONS
        and event.resource == Resources.DECISION
    )


class ScenariosResolver:
    """
    Determines which scenario applies to a notification event. A new scenario
    instance is created for every event.
    """

    def __init__(
        self,
        data_query: DataQueryService,
        whitelists: Whitelists,
        templates: ConfigTemplates,
    ) -> None:
        self.__data_query = data_query
        self.__whitelists = whitelists
        self.__templates = templates
        self.__constructors: Dict[ScenarioTypes, Callable[..., BaseScenario]] = {
            ScenarioTypes.CASE_CREATED: CaseCreatedScenario,
            ScenarioTypes.CASE_STATUS_UPDATED: CaseStatusUpdatedScenario,
            ScenarioTypes.CASE_CLOSED: CaseClosedScenario,
            ScenarioTypes.DECISION_MADE: DecisionMadeScenario,
            ScenarioTypes.TASK_ASSIGNED: TaskAssignedScenario,
            ScenarioTypes.MESSAGE_RECEIVED: MessageReceivedScenario,
            ScenarioTypes.NOT_IMPLEMENTED: NotImplementedScenario,
        }

    def determine_scenario(self, event: NotificationEvent) -> BaseScenario:
        query_context = self.__data_query.from_event(event)

        if is_case_event(event):
            case_statuses = query_context.get_case_statuses()
            if case_statuses.were_never_updated():
                return self.__create(
                    ScenarioTypes.CASE_CREATED, query_context, case_statuses=case_statuses
                )

            case_type = query_context.get_last_case_type(case_statuses)
            scenario_type = (
                ScenarioTypes.CASE_CLOSED
                if case_type.is_final_status
                else ScenarioTypes.CASE_STATUS_UPDATED
            )
            return self.__create(
                scenario_type, query_context, case_statuses=case_statuses, case_type=case_type
            )

        if is_object_event(event):
            object_type_id = extract_guid(event.attributes.object_type_uri)

            if object_type_id and object_type_id == self.__whitelists.task_object_type_uuid:
                return self.__create(ScenarioTypes.TASK_ASSIGNED, query_context)

            if object_type_id and object_type_id == self.__whitelists.message_object_type_uuid:
                return self.__create(ScenarioTypes.MESSAGE_RECEIVED, query_context)

            raise AbortedNotifyingException(
                f"The object type '{object_type_id}' is not supported, it matches neither "
                "whitelist.task_object_type_uuid nor whitelist.message_object_type_uuid"
            )

        if is_decision_event(event):
            return self.__create(ScenarioTypes.DECISION_MADE, query_context)

        logger.warning(
            f"No scenario for event ({event.action.value}, {event.channel.value}, {event.resource.value})"
        )
        return self.__create(ScenarioTypes.NOT_IMPLEMENTED, query_context)

    def __create(
        self, scenario_type: ScenarioTypes, query_context: QueryContext, **known: Any
    ) -> BaseScenario:
        logger.info(f"Resolved scenario {scenario_type.value}")
        return self.__constructors[scenario_type](
            query_context, self.__whitelists, self.__templates, **known
        )
