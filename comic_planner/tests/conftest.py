"""
Pytest configuration and fixtures for comic planner tests.

This module provides:
- Network blocking fixture to prevent accidental API calls in CI
- Settings and scripted client fixtures
"""

import socket
from unittest.mock import patch

import pytest

from comic_planner.config import PipelineSettings
from comic_planner.tests.fakes import ScriptedLLMClient


class NetworkBlockedError(Exception):
    """Raised when a test attempts to make a network connection."""
    pass


def _block_socket_connect(*args, **kwargs):
    """Block all socket connections to prevent accidental API calls."""
    raise NetworkBlockedError(
        "Network access is blocked in unit tests. "
        "If you need to test network functionality, use mocks. "
        "This prevents accidental OpenRouter/OpenAI/Anthropic API calls that cost money."
    )


@pytest.fixture(autouse=True)
def block_network():
    """
    Automatically block all network connections in tests.

    If a test needs to make real network calls (integration tests),
    it should be marked with @pytest.mark.integration and run separately.
    """
    with patch.object(socket.socket, 'connect', _block_socket_connect):
        with patch.object(socket, 'create_connection', _block_socket_connect):
            yield


@pytest.fixture
def settings():
    """Pipeline settings without retry delays."""
    return PipelineSettings(retry_delay_seconds=0.0)


@pytest.fixture
def scripted_client():
    return ScriptedLLMClient()
