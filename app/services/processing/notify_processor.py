import logging
from typing import Any, Dict, List

from app.models.notification.dto import Channels, NotificationEvent
from app.models.processing.dto import ProcessingResult, ProcessingStatuses
from app.services.contact.channel_resolver import NoDigitalAddressException
from app.services.querying.exceptions import QueryContextException, QueryFailedException
from app.services.scenarios.exceptions import (
    AbortedNotifyingException,
    ProcessingFailedException,
    ScenarioNotImplementedException,
)
from app.services.scenarios.resolver import ScenariosResolver
from app.services.sending.notify_client import NotifyClient, NotifyFailedException
from app.stats import Stats

logger = logging.getLogger(__name__)


class NotifyProcessor:
    """
    Processes a single notification event: picks the scenario, gathers the
    data and hands the resulting notifications to the notify client.
    """

    def __init__(
        self,
        resolver: ScenariosResolver,
        notify_client: NotifyClient,
        stats: Stats,
    ) -> None:
        self.__resolver = resolver
        self.__notify_client = notify_client
        self.__stats = stats

    def process(self, event: NotificationEvent) -> ProcessingResult:
        invalid_properties = self.validate(event)
        if invalid_properties:
            return self.__result(
                "invalid",
                ProcessingStatuses.INVALID,
                "The notification event is missing required properties",
                {"invalid_properties": invalid_properties},
            )

        if event.orphans or event.attributes.orphans:
            logger.warning(
                f"Notification event has unexpected properties: {list(event.orphans) + list(event.attributes.orphans)}"
            )

        scenario_name = "unknown"
        sent: List[str] = []
        try:
            scenario = self.__resolver.determine_scenario(event)
            scenario_name = scenario.scenario_type.value

            notify_data = scenario.try_get_data(event)
            scenario.process_data(event, notify_data, self.__notify_client, sent)
        except AbortedNotifyingException as e:
            logger.info(f"Not sending a notification for {scenario_name}: {e}")
            return self.__result(scenario_name, ProcessingStatuses.SKIPPED, str(e))
        except ScenarioNotImplementedException as e:
            return self.__result(scenario_name, ProcessingStatuses.NOT_IMPLEMENTED, str(e))
        except (
            QueryFailedException,
            NoDigitalAddressException,
            NotifyFailedException,
            ProcessingFailedException,
        ) as e:
            logger.error(f"Processing {scenario_name} failed: {e}")
            return self.__result(
                scenario_name, ProcessingStatuses.FAILURE, str(e), {"sent": sent}
            )
        except QueryContextException:
            logger.exception(f"Processing {scenario_name} failed due to missing context")
            raise

        return self.__result(
            scenario_name,
            ProcessingStatuses.PROCESSED,
            f"Sent {len(sent)} notification(s)",
            {"sent": sent},
        )

    @staticmethod
    def validate(event: NotificationEvent) -> List[str]:
        invalid = event.get_invalid_properties()

        attributes = event.attributes
        if event.channel == Channels.CASES and attributes.is_invalid_case():
            invalid.append("kenmerken")
        elif event.channel == Channels.OBJECTS and attributes.is_invalid_object():
            invalid.append("kenmerken")
        elif event.channel == Channels.DECISIONS and attributes.is_invalid_decision():
            invalid.append("kenmerken")

        return invalid

    def __result(
        self,
        scenario_name: str,
        status: ProcessingStatuses,
        message: str,
        details: Dict[str, Any] | None = None,
    ) -> ProcessingResult:
        self.__stats.inc(f"events.{scenario_name}.{status.value}")
        return ProcessingResult(status=status, message=message, details=details or {})
