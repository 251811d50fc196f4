from enum import Enum
import configparser
from os import environ
from os.path import exists
from typing import Any, Optional
import logging

from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

_PATH = "app{suffix}.conf"
_CONFIG = None


def _to_bool(v: Any, default: bool) -> bool:
    if v in (None, "", " "):
        return default
    if isinstance(v, str):
        return v.lower() in ("yes", "true", "t", "1")
    return bool(v)


def _to_list(v: Any) -> list[str]:
    if v in (None, "", " "):
        return []
    if isinstance(v, str):
        return [item.strip() for item in v.split(",") if item.strip()]
    return list(v)


class LogLevel(str, Enum):
    debug = "debug"
    info = "info"
    warning = "warning"
    error = "error"
    critical = "critical"


class ConfigApp(BaseModel):
    loglevel: LogLevel = Field(default=LogLevel.info)
    version: str = Field(default="1.0.0")


class ConfigUvicorn(BaseModel):
    swagger_enabled: bool = Field(default=False)
    docs_url: str = Field(default="/docs")
    redoc_url: str = Field(default="/redoc")
    host: str = Field(default="127.0.0.1")
    port: Optional[int] = Field(default=8000, gt=0, lt=65535)
    reload: bool = Field(default=True)
    reload_delay: float = Field(default=1)
    reload_dirs: list[str] = Field(default=["app"])
    use_ssl: bool = Field(default=False)
    ssl_base_dir: str | None = Field(default=None)
    ssl_cert_file: str | None = Field(default=None)
    ssl_key_file: str | None = Field(default=None)

    @field_validator("host", mode="before")
    def validate_host(cls, v: Any) -> str:
        if v in (None, "", " "):
            return "127.0.0.1"
        return str(v)

    @field_validator("port", mode="before")
    def validate_port(cls, v: Any) -> int:
        if v in (None, "", " "):
            return 8000
        return int(v)

    @field_validator("reload", mode="before")
    def validate_reload(cls, v: Any) -> bool:
        return _to_bool(v, True)

    @field_validator("reload_dirs", mode="before")
    def validate_reload_dirs(cls, v: Any) -> list[str]:
        return _to_list(v) or ["app"]

    @field_validator("swagger_enabled", "use_ssl", mode="before")
    def validate_flags(cls, v: Any) -> bool:
        return _to_bool(v, False)


class ConfigStats(BaseModel):
    enabled: bool = Field(default=False)
    host: str | None = Field(default=None)
    port: int | None = Field(default=None)
    module_name: str | None = Field(default=None)

    @field_validator("enabled", mode="before")
    def validate_enabled(cls, v: Any) -> bool:
        return _to_bool(v, False)

    @field_validator("port", mode="before")
    def validate_port(cls, v: Any) -> int | None:
        if v in (None, "", " "):
            return None
        return int(v)


class ConfigHttpClient(BaseModel):
    timeout: int = Field(default=10)
    retries: int = Field(default=3, ge=1)
    backoff: float = Field(default=0.5)

    @field_validator("timeout", mode="before")
    def validate_timeout(cls, v: Any) -> int:
        if v in (None, "", " "):
            return 10
        return int(v)

    @field_validator("retries", mode="before")
    def validate_retries(cls, v: Any) -> int:
        if v in (None, "", " "):
            return 3
        return int(v)

    @field_validator("backoff", mode="before")
    def validate_backoff(cls, v: Any) -> float:
        if v in (None, "", " "):
            return 0.5
        return float(v)


class ConfigZgw(BaseModel):
    """
    Base URLs of the upstream "Zaakgericht werken" API services.
    """
    openzaak_url: str
    openklant_url: str
    besluiten_url: str
    objecten_url: str
    objecttypen_url: str
    contactmomenten_url: str | None = Field(default=None)
    openklant_version: int = Field(default=2)

    @field_validator("openklant_version", mode="before")
    def validate_openklant_version(cls, v: Any) -> int:
        if v in (None, "", " "):
            return 2
        version = int(v)
        if version not in (1, 2):
            raise ValueError("openklant_version must be either 1 or 2")
        return version

    @field_validator(
        "openzaak_url", "openklant_url", "besluiten_url", "objecten_url", "objecttypen_url"
    )
    def validate_url(cls, v: str) -> str:
        return v.rstrip("/")


class ConfigAuthentication(BaseModel):
    openzaak_token: str | None = Field(default=None)
    openklant_token: str | None = Field(default=None)
    objecten_token: str | None = Field(default=None)


class ConfigNotify(BaseModel):
    base_url: str
    api_key: str | None = Field(default=None)


class ConfigTemplates(BaseModel):
    email_zaak_create: str | None = Field(default=None)
    email_zaak_update: str | None = Field(default=None)
    email_zaak_close: str | None = Field(default=None)
    email_task_assigned: str | None = Field(default=None)
    email_message_received: str | None = Field(default=None)
    sms_zaak_create: str | None = Field(default=None)
    sms_zaak_update: str | None = Field(default=None)
    sms_zaak_close: str | None = Field(default=None)
    sms_task_assigned: str | None = Field(default=None)
    sms_message_received: str | None = Field(default=None)
    letter_zaak_create: str | None = Field(default=None)
    letter_zaak_update: str | None = Field(default=None)
    letter_zaak_close: str | None = Field(default=None)
    letter_task_assigned: str | None = Field(default=None)
    letter_message_received: str | None = Field(default=None)
    decision_made: str | None = Field(default=None)


class ConfigWhitelist(BaseModel):
    zaak_create_ids: list[str] = Field(default=[])
    zaak_update_ids: list[str] = Field(default=[])
    zaak_close_ids: list[str] = Field(default=[])
    task_assigned_ids: list[str] = Field(default=[])
    decision_made_ids: list[str] = Field(default=[])
    message_allowed: bool = Field(default=False)
    task_object_type_uuid: str | None = Field(default=None)
    message_object_type_uuid: str | None = Field(default=None)
    decision_infoobject_type_uuids: list[str] = Field(default=[])

    @field_validator(
        "zaak_create_ids",
        "zaak_update_ids",
        "zaak_close_ids",
        "task_assigned_ids",
        "decision_made_ids",
        "decision_infoobject_type_uuids",
        mode="before",
    )
    def validate_ids(cls, v: Any) -> list[str]:
        return _to_list(v)

    @field_validator("message_allowed", mode="before")
    def validate_message_allowed(cls, v: Any) -> bool:
        return _to_bool(v, False)


class ConfigVariables(BaseModel):
    email_generic_description: str = Field(default="email")
    phone_generic_description: str = Field(default="telefoon")
    party_identifier: str = Field(default="bsn")
    subject_type: str = Field(default="natuurlijk_persoon")
    initiator_role: str = Field(default="initiator")
    message_object_type_version: int = Field(default=1)

    @field_validator("message_object_type_version", mode="before")
    def validate_message_object_type_version(cls, v: Any) -> int:
        if v in (None, "", " "):
            return 1
        return int(v)


class Config(BaseModel):
    app: ConfigApp
    uvicorn: ConfigUvicorn
    stats: ConfigStats
    http_client: ConfigHttpClient
    zgw: ConfigZgw
    authentication: ConfigAuthentication
    notify: ConfigNotify
    templates: ConfigTemplates
    whitelist: ConfigWhitelist
    variables: ConfigVariables


def read_ini_file(path: str) -> Any:
    ini_data = configparser.ConfigParser()
    ini_data.read(path)

    ret = {}
    for section in ini_data.sections():
        ret[section] = dict(ini_data[section])

    return ret


def reset_config() -> None:
    global _CONFIG
    _CONFIG = None


def set_config(config: Config) -> None:
    global _CONFIG
    _CONFIG = config


def get_config(path: str | None = None) -> Config:
    global _CONFIG
    global _PATH

    if _CONFIG is not None:
        return _CONFIG

    if path is None:
        suffix = environ.get("APP_ENV", "")
        if suffix:
            suffix = f".{suffix}"
        path = _PATH.replace("{suffix}", suffix)
        logger.info(f"Reading configuration using file: {path}")

    if not exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    ini_data = read_ini_file(path)

    # Optional sections may be missing from the INI file altogether
    for section in ("app", "uvicorn", "stats", "http_client", "authentication", "templates", "whitelist", "variables"):
        ini_data.setdefault(section, {})

    try:
        _CONFIG = Config(**ini_data)
    except ValidationError as e:
        logger.error(f"Configuration validation error: {e}")
        raise e

    return _CONFIG
