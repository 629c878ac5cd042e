from typing import Optional


class NetKeeperError(Exception):
    """Base class for every error raised by shu_net_keeper."""


class ConfigError(NetKeeperError):
    pass


class ValidationError(ConfigError):
    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


class ConnectivityError(NetKeeperError):
    pass


class ProbeTimeout(ConnectivityError):
    pass


class Unreachable(ConnectivityError):
    def __init__(self, message: str, last_error: Optional[ConnectivityError] = None) -> None:
        super().__init__(message)
        self.last_error = last_error


class BadStatus(ConnectivityError):
    def __init__(self, code: int) -> None:
        super().__init__(f"unexpected status {code}")
        self.code = code


class MalformedResponse(ConnectivityError):
    pass


class ExtractionError(NetKeeperError):
    pass


class PortalUnreachable(ExtractionError):
    pass


class PatternNotFound(ExtractionError):
    pass


class AlreadyAuthenticated(ExtractionError):
    """The portal answered with its success page; nothing to log in to."""


class NoQueryParameters(ExtractionError):
    pass


class MissingMacField(ExtractionError):
    pass


class CipherError(NetKeeperError):
    pass


class ConstructionFailed(CipherError):
    pass


class AuthError(NetKeeperError):
    pass


class RequestFailed(AuthError):
    pass


class NonSuccessStatus(AuthError):
    def __init__(self, code: int, body: str) -> None:
        super().__init__(f"login rejected with status {code}")
        self.code = code
        self.body = body


class NotificationError(NetKeeperError):
    pass
