import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .constants import (
    DEFAULT_CHECK_INTERVAL,
    DEFAULT_CHECK_RETRIES,
    DEFAULT_CHECK_TIMEOUT,
    DEFAULT_CHECK_URL,
    DEFAULT_HTTP_TIMEOUT,
    USER_AGENT,
)
from .errors import ConfigError, ValidationError
from .models import Credentials, validate_secret, validate_username

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class CheckConfig:
    url: str = DEFAULT_CHECK_URL
    timeout_seconds: float = DEFAULT_CHECK_TIMEOUT
    retries: int = DEFAULT_CHECK_RETRIES


@dataclass(frozen=True)
class HttpConfig:
    timeout_seconds: float = DEFAULT_HTTP_TIMEOUT
    user_agent: str = USER_AGENT


@dataclass(frozen=True)
class SmtpConfig:
    server: str
    port: int
    sender: str
    password: str = field(repr=False)
    receiver: str


@dataclass(frozen=True)
class AppConfig:
    credentials: Credentials
    interval: int = DEFAULT_CHECK_INTERVAL
    log_level: str = "INFO"
    check: CheckConfig = field(default_factory=CheckConfig)
    http: HttpConfig = field(default_factory=HttpConfig)
    notify_on_every_login: bool = False
    smtp: Optional[SmtpConfig] = None

    @property
    def username(self) -> str:
        return self.credentials.username


def _require_string(section: dict, key: str, label: str) -> str:
    value = section.get(key)
    if value is None:
        raise ValidationError(label, "missing")
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(label, "must be a non-empty string")
    return value


def _require_email(section: dict, key: str, label: str) -> str:
    value = _require_string(section, key, label)
    if not EMAIL_RE.match(value):
        raise ValidationError(label, f"invalid email address: {value}")
    return value


def _positive_number(value, label: str, integer: bool = False):
    # bool is an int subclass; reject it explicitly.
    allowed = (int,) if integer else (int, float)
    if isinstance(value, bool) or not isinstance(value, allowed) or value <= 0:
        kind = "integer" if integer else "number"
        raise ValidationError(label, f"must be a positive {kind}")
    return value


def _section(raw: dict, key: str) -> dict:
    value = raw.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValidationError(key, "must be an object")
    return value


def _flag(raw: dict, key: str) -> bool:
    value = raw.get(key, False)
    if not isinstance(value, bool):
        raise ValidationError(key, "must be true or false")
    return value


def validate_smtp_config(raw: Optional[dict]) -> SmtpConfig:
    if raw is None:
        raise ConfigError("smtp_enabled is true but no smtp section is configured")
    if not isinstance(raw, dict):
        raise ValidationError("smtp", "must be an object")

    port = raw.get("port")
    if port is None:
        raise ValidationError("smtp.port", "missing")
    if isinstance(port, bool) or not isinstance(port, int) or not 0 < port < 65536:
        raise ValidationError("smtp.port", f"invalid port: {port}")

    return SmtpConfig(
        server=_require_string(raw, "server", "smtp.server"),
        port=port,
        sender=_require_email(raw, "sender", "smtp.sender"),
        password=_require_string(raw, "password", "smtp.password"),
        receiver=_require_email(raw, "receiver", "smtp.receiver"),
    )


def validate_config(raw: dict) -> AppConfig:
    if not isinstance(raw, dict):
        raise ConfigError("configuration root must be a JSON object")

    username = validate_username(raw.get("username"))
    secret = validate_secret(raw.get("password"))

    check_raw = _section(raw, "check")
    check = CheckConfig(
        url=check_raw.get("url") or DEFAULT_CHECK_URL,
        timeout_seconds=_positive_number(
            check_raw.get("timeout_seconds", DEFAULT_CHECK_TIMEOUT), "check.timeout_seconds"
        ),
        retries=_positive_number(check_raw.get("retries", DEFAULT_CHECK_RETRIES), "check.retries", integer=True),
    )

    http_raw = _section(raw, "http")
    http = HttpConfig(
        timeout_seconds=_positive_number(
            http_raw.get("timeout_seconds", DEFAULT_HTTP_TIMEOUT), "http.timeout_seconds"
        ),
        user_agent=http_raw.get("user_agent") or USER_AGENT,
    )

    smtp = None
    if _flag(raw, "smtp_enabled"):
        logger.info("SMTP enabled, validating smtp section")
        smtp = validate_smtp_config(raw.get("smtp"))
    else:
        logger.info("SMTP disabled, notifications will not be sent")

    return AppConfig(
        credentials=Credentials(username=username, secret=secret),
        interval=_positive_number(raw.get("interval", DEFAULT_CHECK_INTERVAL), "interval", integer=True),
        log_level=str(raw.get("log_level", "INFO")).upper(),
        check=check,
        http=http,
        notify_on_every_login=_flag(raw, "notify_on_every_login"),
        smtp=smtp,
    )


def load_raw_config(path: Path) -> dict:
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as exc:
        raise ConfigError(f"config file not found: {path}") from exc
    except OSError as exc:
        raise ConfigError(f"failed to read config file {path}: {exc}") from exc
    except ValueError as exc:
        raise ConfigError(f"failed to parse config file {path}: {exc}") from exc


def load_config(path: Path) -> AppConfig:
    return validate_config(load_raw_config(path))
