import logging
from typing import Dict, Optional
from urllib.parse import quote

import requests

from .cipher import PasswordCipher
from .constants import GATEWAY_HOST, LOGIN_INDEX, LOGIN_URL, USER_AGENT
from .errors import RequestFailed
from .models import AuthenticationOutcome, Credentials, SessionParameters

logger = logging.getLogger(__name__)


def mask_value(value: str, keep: int = 2) -> str:
    if not value:
        return ""
    if len(value) <= keep * 2:
        return "*" * len(value)
    return f"{value[:keep]}***{value[-keep:]}"


def build_login_form(credentials: Credentials, params: SessionParameters, cipher: PasswordCipher) -> Dict[str, str]:
    encrypted = cipher.encrypt(f"{credentials.secret}>{params.mac}")
    return {
        "userId": credentials.username,
        "password": encrypted,
        "service": "shu",
        "passwordEncrypt": "true",
        "operatorPwd": "",
        "operatorUserId": "",
        "validcode": "",
        # The gateway expects the query string already escaped once; requests
        # escapes it again when it encodes the form body.
        "queryString": quote(params.query_string, safe=""),
    }


def build_login_headers(params: SessionParameters, user_agent: str = USER_AGENT) -> Dict[str, str]:
    return {
        "User-Agent": user_agent or USER_AGENT,
        "Accept": "*/*",
        "Accept-Encoding": "gzip, deflate",
        "Accept-Language": "zh-CN,zh;q=0.9,en;q=0.8",
        "Host": GATEWAY_HOST,
        "Referer": f"{LOGIN_INDEX}?{params.query_string}",
    }


def extract_result_message(response: requests.Response) -> str:
    """Best-effort read of the ``message`` field of the gateway's JSON reply."""
    try:
        data = response.json()
    except ValueError:
        return ""
    if not isinstance(data, dict):
        return ""
    return str(data.get("message") or "")


def login(
    session: requests.Session,
    credentials: Credentials,
    params: SessionParameters,
    timeout: float,
    user_agent: str = USER_AGENT,
    cipher: Optional[PasswordCipher] = None,
) -> AuthenticationOutcome:
    cipher = cipher or PasswordCipher()
    data = build_login_form(credentials, params, cipher)
    headers = build_login_headers(params, user_agent)

    logger.info("Submitting login for user=%s", mask_value(credentials.username))
    logger.debug("Login form fields: %s", ",".join(sorted(data.keys())))
    try:
        response = session.post(LOGIN_URL, data=data, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        raise RequestFailed(f"login request failed: {exc}") from exc

    outcome = AuthenticationOutcome(
        status=response.status_code,
        body=response.text,
        message=extract_result_message(response),
    )
    if outcome.success:
        logger.info("Login accepted status=%s message=%s", outcome.status, outcome.message or "none")
    else:
        logger.warning("Login rejected status=%s body=%s", outcome.status, outcome.body)
    return outcome
