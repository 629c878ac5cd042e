import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .constants import REQUIRED_USERNAME_LENGTH
from .errors import ConnectivityError, NonSuccessStatus, ValidationError


def validate_username(username: str) -> str:
    if not isinstance(username, str) or len(username) != REQUIRED_USERNAME_LENGTH:
        raise ValidationError(
            "username",
            f"must be exactly {REQUIRED_USERNAME_LENGTH} digits",
        )
    # str.isdigit() also accepts non-ASCII digits such as "١".
    if not (username.isascii() and username.isdigit()):
        raise ValidationError("username", "must contain digits only")
    return username


def validate_secret(secret: str) -> str:
    if not isinstance(secret, str) or not secret:
        raise ValidationError("password", "must not be empty")
    return secret


@dataclass(frozen=True)
class Credentials:
    username: str
    secret: str = field(repr=False)

    def __post_init__(self) -> None:
        validate_username(self.username)
        validate_secret(self.secret)


@dataclass(frozen=True)
class SessionParameters:
    query_string: str
    mac: str


@dataclass(frozen=True)
class AuthenticationOutcome:
    status: int
    body: str
    message: str = ""

    @property
    def success(self) -> bool:
        return 200 <= self.status < 300

    def raise_for_status(self) -> None:
        if not self.success:
            raise NonSuccessStatus(self.status, self.body)


class ConnectionStatus(enum.Enum):
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


@dataclass(frozen=True)
class ConnectivityState:
    status: ConnectionStatus
    error: Optional[ConnectivityError] = None

    @property
    def connected(self) -> bool:
        return self.status is ConnectionStatus.CONNECTED


@dataclass(frozen=True)
class NotificationEvent:
    username: str
    address: str
    changed: bool
    timestamp: datetime


@dataclass(frozen=True)
class NotificationMessage:
    recipient: str
    subject: str
    body: str
