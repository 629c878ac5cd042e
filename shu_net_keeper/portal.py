import logging
import re

import requests

from .errors import (
    AlreadyAuthenticated,
    MissingMacField,
    NoQueryParameters,
    PatternNotFound,
    PortalUnreachable,
)
from .models import SessionParameters

logger = logging.getLogger(__name__)

REDIRECT_RE = re.compile(r"location\.href='([^']+)'")
# "成功" also covers the "已成功" banner of the logged-in page.
SUCCESS_TOKENS = ("success", "成功")


def find_login_page_url(html: str) -> str:
    # A redirect wins even when the page also mentions success.
    match = REDIRECT_RE.search(html or "")
    if match:
        return match.group(1)

    if any(token in (html or "") for token in SUCCESS_TOKENS):
        raise AlreadyAuthenticated("portal page reports an active session")

    raise PatternNotFound("no login page redirect found in portal page")


def extract_query_string(url: str) -> str:
    _, sep, query_string = url.partition("?")
    if not sep:
        raise NoQueryParameters(f"login page URL has no query string: {url}")
    return query_string


def extract_mac(query_string: str) -> str:
    for pair in query_string.split("&"):
        key, sep, value = pair.partition("=")
        if sep and key == "mac":
            return value
    raise MissingMacField("query string has no mac field")


def parse_session(html: str) -> SessionParameters:
    login_url = find_login_page_url(html)
    logger.debug("Login page URL: %s", login_url)
    query_string = extract_query_string(login_url)
    mac = extract_mac(query_string)
    return SessionParameters(query_string=query_string, mac=mac)


def extract_session(session: requests.Session, gateway_url: str, timeout: float) -> SessionParameters:
    """Fetch the gateway root and pull the session parameters out of its redirect script."""
    try:
        response = session.get(gateway_url, allow_redirects=True, timeout=timeout)
    except requests.RequestException as exc:
        raise PortalUnreachable(f"failed to load {gateway_url}: {exc}") from exc

    chain = [resp.url for resp in response.history] + [response.url]
    logger.debug("Portal redirect chain: %s", " -> ".join(str(url) for url in chain))

    # Without a charset requests falls back to ISO-8859-1, which garbles the
    # UTF-8 success banner.
    if "charset" not in response.headers.get("Content-Type", "").lower():
        response.encoding = "utf-8"
    params = parse_session(response.text)
    logger.debug("Session query string length=%d", len(params.query_string))
    return params
