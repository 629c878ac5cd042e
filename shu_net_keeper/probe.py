import logging
import time
from typing import Optional

import requests

from .errors import BadStatus, ConnectivityError, MalformedResponse, ProbeTimeout, Unreachable
from .models import ConnectionStatus, ConnectivityState

logger = logging.getLogger(__name__)


def _get(session: requests.Session, url: str, timeout: float) -> requests.Response:
    try:
        response = session.get(url, timeout=timeout)
    except requests.Timeout as exc:
        raise ProbeTimeout(f"{url} timed out after {timeout}s") from exc
    except requests.RequestException as exc:
        raise Unreachable(f"{url} unreachable: {exc}") from exc

    if not 200 <= response.status_code < 300:
        raise BadStatus(response.status_code)
    return response


def probe(session: requests.Session, url: str, timeout: float, retries: int) -> None:
    """Raise ``Unreachable`` unless ``url`` answers 2xx within ``retries`` attempts.

    Failed attempts are followed by a pause as long as the per-attempt
    timeout. The last attempt's error is kept on ``Unreachable.last_error``.
    """
    last_error: Optional[ConnectivityError] = None
    for attempt in range(1, retries + 1):
        try:
            _get(session, url, timeout)
            return
        except ConnectivityError as exc:
            last_error = exc
            logger.debug("Probe attempt %d/%d failed: %s", attempt, retries, exc)

        if attempt < retries:
            time.sleep(timeout)

    raise Unreachable(f"{url} not reachable after {retries} attempt(s)", last_error=last_error)


def check_connectivity(
    session: requests.Session,
    url: str,
    timeout: float,
    retries: int,
) -> ConnectivityState:
    try:
        probe(session, url, timeout, retries)
    except ConnectivityError as exc:
        logger.info("Connectivity check failed: %s", exc.last_error if isinstance(exc, Unreachable) else exc)
        return ConnectivityState(ConnectionStatus.DISCONNECTED, error=exc)
    return ConnectivityState(ConnectionStatus.CONNECTED)


def query_session_info(session: requests.Session, url: str, timeout: float) -> Optional[str]:
    """Return the address the gateway has on record for this host.

    ``None`` means the host holds no authenticated session.
    """
    response = _get(session, url, timeout)
    try:
        info = response.json()
    except ValueError as exc:
        raise MalformedResponse(f"session info is not JSON: {exc}") from exc
    if not isinstance(info, dict):
        raise MalformedResponse("session info is not a JSON object")

    address = info.get("userIp")
    if address:
        logger.debug("Gateway reports address %s", address)
        return str(address)
    logger.debug("Gateway reports no authenticated session")
    return None
