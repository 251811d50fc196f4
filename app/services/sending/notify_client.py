from abc import ABC, abstractmethod
import logging
from typing import Any, Dict

from pydantic import ValidationError
from requests import Response
from requests.exceptions import ConnectionError

from app.models.notify.dto import NotifyData, NotifyMethods, TemplatePreview
from app.services.api.api_service import HttpService

logger = logging.getLogger(__name__)


class NotifyFailedException(Exception):
    def __init__(self, method: NotifyMethods, message: str) -> None:
        super().__init__(f"Sending the {method.value} notification failed: {message}")
        self.method = method


class NotifyClient(ABC):
    @abstractmethod
    def send(self, notify_data: NotifyData) -> str:
        """
        Sends the notification and returns the identifier assigned to it by the dispatcher.
        """
        ...

    @abstractmethod
    def generate_template_preview(self, notify_data: NotifyData) -> TemplatePreview:
        """
        Renders the template of the notification without sending it.
        """
        ...


class NotifyNLClient(NotifyClient):
    """
    Client for the NotifyNL API (a GOV.UK Notify fork)
    """

    def __init__(self, http_service: HttpService) -> None:
        self.__http_service = http_service

    def send(self, notify_data: NotifyData) -> str:
        method = notify_data.notification_method
        response = self.__post(method, f"v2/notifications/{method.value}", self.make_body(notify_data))

        try:
            notification_id = str(response.json()["id"])
        except (ValueError, KeyError, TypeError) as e:
            raise NotifyFailedException(method, f"unexpected response: {e}")

        logger.info(f"Sent {method.value} notification {notification_id}")
        return notification_id

    def generate_template_preview(self, notify_data: NotifyData) -> TemplatePreview:
        method = notify_data.notification_method
        personalisation = self.make_body(notify_data)["personalisation"]
        response = self.__post(
            method,
            f"v2/template/{notify_data.template_id}/preview",
            {"personalisation": personalisation},
        )

        try:
            return TemplatePreview.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise NotifyFailedException(method, f"unexpected template preview: {e}")

    def __post(self, method: NotifyMethods, sub_route: str, body: Dict[str, Any]) -> Response:
        try:
            response = self.__http_service.do_request("POST", sub_route=sub_route, json=body)
        except ConnectionError as e:
            raise NotifyFailedException(method, str(e))

        if response.status_code >= 400:
            logger.error(f"NotifyNL rejected the request to {sub_route}: {response.text}")
            raise NotifyFailedException(method, f"status {response.status_code}: {response.text}")

        return response

    @staticmethod
    def make_body(notify_data: NotifyData) -> Dict[str, Any]:
        personalisation = dict(notify_data.personalization)
        body: Dict[str, Any] = {
            "template_id": notify_data.template_id,
            "personalisation": personalisation,
        }
        if notify_data.reference is not None:
            body["reference"] = notify_data.reference.encode()

        match notify_data.notification_method:
            case NotifyMethods.EMAIL:
                body["email_address"] = notify_data.contact_details
            case NotifyMethods.SMS:
                body["phone_number"] = notify_data.contact_details
            case NotifyMethods.LETTER:
                lines = notify_data.contact_details.split("\n")
                for index, line in enumerate(lines[:7], start=1):
                    personalisation[f"address_line_{index}"] = line

        return body
