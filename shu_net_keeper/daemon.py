"""Polling loop that keeps the host logged in to the campus gateway.

One cycle: probe connectivity, and if that fails, scrape the portal for
session parameters, log in, read back the address the gateway assigned and
decide whether to send a notification. Errors abort the cycle only; the next
attempt happens after the regular interval.
"""
import enum
import logging
import time
from datetime import datetime
from typing import Callable, Optional

import requests

from .constants import CAMPUS_GATEWAY, ONLINE_INFO_URL, UNKNOWN_ADDRESS
from .errors import AlreadyAuthenticated, ConnectivityError, NetKeeperError, NotificationError
from .login import login, mask_value
from .models import NotificationEvent
from .portal import extract_session
from .probe import check_connectivity, query_session_info
from .settings import AppConfig

logger = logging.getLogger(__name__)


class CycleOutcome(enum.Enum):
    CONNECTED = "connected"
    ALREADY_AUTHENTICATED = "already_authenticated"
    AUTH_FAILED = "auth_failed"
    AUTH_SUCCEEDED = "auth_succeeded"


class ReAuthCoordinator:
    def __init__(
        self,
        config: AppConfig,
        sink=None,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ) -> None:
        self.config = config
        self.sink = sink
        self.session_factory = session_factory
        # None until the first successful login of this process.
        self.last_known_address: Optional[str] = None

    def run_forever(self) -> None:
        while True:
            logger.info("Checking network connectivity...")
            try:
                self.run_cycle()
            except Exception:
                logger.exception("Unexpected error during check cycle")
            logger.info("Next check in %s seconds", self.config.interval)
            time.sleep(self.config.interval)

    def run_cycle(self) -> CycleOutcome:
        check = self.config.check
        with self.session_factory() as session:
            state = check_connectivity(session, check.url, check.timeout_seconds, check.retries)
        if state.connected:
            logger.info("Network is connected")
            return CycleOutcome.CONNECTED

        logger.warning("Network is disconnected, trying to log in...")
        try:
            self._authenticate()
        except AlreadyAuthenticated as exc:
            logger.info("No login needed: %s", exc)
            return CycleOutcome.ALREADY_AUTHENTICATED
        except NetKeeperError as exc:
            logger.error("Login failed (%s): %s", type(exc).__name__, exc)
            return CycleOutcome.AUTH_FAILED

        logger.info("Login succeeded")
        self._record_login(self._current_address())
        return CycleOutcome.AUTH_SUCCEEDED

    def _authenticate(self) -> None:
        timeout = self.config.http.timeout_seconds
        # One session for both requests so gateway cookies carry over.
        with self.session_factory() as session:
            params = extract_session(session, CAMPUS_GATEWAY, timeout)
            outcome = login(
                session,
                self.config.credentials,
                params,
                timeout,
                user_agent=self.config.http.user_agent,
            )
        outcome.raise_for_status()

    def _current_address(self) -> str:
        try:
            with self.session_factory() as session:
                address = query_session_info(session, ONLINE_INFO_URL, self.config.http.timeout_seconds)
        except ConnectivityError as exc:
            logger.warning("Failed to read assigned address: %s", exc)
            return UNKNOWN_ADDRESS
        if address is None:
            logger.warning("Gateway returned no address after login")
            return UNKNOWN_ADDRESS
        logger.info("Assigned address: %s", address)
        return address

    def _record_login(self, address: str) -> None:
        previous = self.last_known_address
        changed = previous is not None and previous != address
        if changed:
            logger.warning("Address changed: %s -> %s", previous, address)
        self.last_known_address = address

        if changed or self.config.notify_on_every_login:
            self._notify(address, changed)

    def _notify(self, address: str, changed: bool) -> None:
        if self.sink is None:
            logger.debug("No notification sink configured")
            return
        event = NotificationEvent(
            username=self.config.username,
            address=address,
            changed=changed,
            timestamp=datetime.now(),
        )
        try:
            self.sink.notify(event)
        except NotificationError as exc:
            logger.error("Notification for user=%s failed: %s", mask_value(event.username), exc)
