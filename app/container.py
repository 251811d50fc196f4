import inject

from app.config import Config, get_config
from app.services.api.api_service import HttpService
from app.services.api.authenticators.factory import AuthenticatorFactory
from app.services.api.client_types import ClientTypes
from app.services.processing.notify_processor import NotifyProcessor
from app.services.querying.query_base import QueryBase
from app.services.querying.query_context import DataQueryService
from app.services.scenarios.resolver import ScenariosResolver
from app.services.sending.notify_client import NotifyClient, NotifyNLClient
from app.services.settings.whitelist import Whitelists
from app.services.telemetry.contact_registration import ContactRegistration, TelemetryService
from app.stats import get_stats


def create_http_clients(config: Config) -> dict[ClientTypes, HttpService]:
    auth_factory = AuthenticatorFactory(config=config)
    zgw = config.zgw

    base_urls = {
        ClientTypes.OPENZAAK: zgw.openzaak_url,
        ClientTypes.BESLUITEN: zgw.besluiten_url,
        ClientTypes.OPENKLANT: zgw.openklant_url,
        ClientTypes.CONTACTMOMENTEN: zgw.contactmomenten_url or zgw.openklant_url,
        ClientTypes.OBJECTEN: zgw.objecten_url,
        ClientTypes.NOTIFY: config.notify.base_url,
    }

    return {
        client_type: HttpService(
            base_url=base_url,
            timeout=config.http_client.timeout,
            retries=config.http_client.retries,
            backoff=config.http_client.backoff,
            authenticator=auth_factory.create_authenticator(client_type),
        )
        for client_type, base_url in base_urls.items()
    }


def container_config(binder: inject.Binder) -> None:
    config = get_config()

    clients = create_http_clients(config)
    query_base = QueryBase(clients)
    binder.bind(QueryBase, query_base)

    data_query = DataQueryService(
        query_base=query_base,
        zgw_config=config.zgw,
        variables=config.variables,
        whitelist=config.whitelist,
    )
    binder.bind(DataQueryService, data_query)

    whitelists = Whitelists(config.whitelist)
    binder.bind(Whitelists, whitelists)

    resolver = ScenariosResolver(
        data_query=data_query,
        whitelists=whitelists,
        templates=config.templates,
    )
    binder.bind(ScenariosResolver, resolver)

    notify_client = NotifyNLClient(http_service=clients[ClientTypes.NOTIFY])
    binder.bind(NotifyClient, notify_client)

    telemetry = ContactRegistration(
        query_base=query_base,
        base_url=config.zgw.contactmomenten_url or config.zgw.openklant_url,
    )
    binder.bind(TelemetryService, telemetry)

    processor = NotifyProcessor(
        resolver=resolver,
        notify_client=notify_client,
        stats=get_stats(),
    )
    binder.bind(NotifyProcessor, processor)


def get_notify_processor() -> NotifyProcessor:
    return inject.instance(NotifyProcessor)


def get_telemetry_service() -> TelemetryService:
    return inject.instance(TelemetryService)  # type: ignore


def get_whitelists() -> Whitelists:
    return inject.instance(Whitelists)


def setup_container() -> None:
    inject.configure(container_config, once=True)
