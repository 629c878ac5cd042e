"""Shared fixtures for shu_net_keeper tests."""

import pytest

from shu_net_keeper.settings import validate_config


@pytest.fixture
def raw_config():
    return {
        "username": "12345678",
        "password": "secret",
        "interval": 60,
        "check": {"url": "http://check.invalid/", "timeout_seconds": 1, "retries": 3},
    }


@pytest.fixture
def app_config(raw_config):
    return validate_config(raw_config)
