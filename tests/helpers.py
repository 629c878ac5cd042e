from unittest.mock import MagicMock

import requests
from requests.utils import get_encoding_from_headers


def make_response(status_code=200, text="", json_data=None, url="http://10.10.9.9/", history=None, headers=None):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.url = url
    response.history = history or []
    response.headers = headers or {}
    if json_data is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = json_data
    return response


def make_raw_response(body: bytes, content_type: str, url="http://10.10.9.9/"):
    """Build a real Response whose encoding is picked the way the HTTP adapter picks it."""
    response = requests.Response()
    response.status_code = 200
    response.url = url
    response.headers["Content-Type"] = content_type
    response._content = body
    response.encoding = get_encoding_from_headers(response.headers)
    return response
