# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared pytest fixtures and configuration for Dataverse service client tests.

This module provides common test fixtures, mock objects, and configuration
that can be used across all test modules.
"""

import uuid

import pytest

from dataverse_service_client import DataverseClient, DataverseConfig

from tests.fixtures.test_data import FakeDataverse, RecordingSession, StaticAuth


@pytest.fixture
def sample_base_url():
    """Standard test base URL."""
    return "https://org.example.com"


@pytest.fixture
def sample_guid():
    """Sample GUID for testing."""
    return uuid.UUID("11111111-2222-3333-4444-555555555555")


@pytest.fixture
def test_config():
    """Test configuration with short timeouts."""
    return DataverseConfig(http_timeout=5, http_connect_timeout=5)


@pytest.fixture
def dummy_auth():
    """Authenticator handing out a fixed token."""
    return StaticAuth("test_token_12345")


@pytest.fixture
def recording_session():
    """Session double that replays queued responses and records every request."""
    return RecordingSession()


@pytest.fixture
def client(sample_base_url, dummy_auth, test_config, recording_session):
    """Client wired to the recording session."""
    return DataverseClient(sample_base_url, dummy_auth, test_config, session=recording_session)


@pytest.fixture
def fake_dataverse(sample_base_url):
    """In-memory Dataverse environment serving two records per page."""
    return FakeDataverse(sample_base_url, page_size=2)


@pytest.fixture
def fake_client(sample_base_url, dummy_auth, test_config, fake_dataverse):
    """Client wired to the in-memory environment."""
    return DataverseClient(sample_base_url, dummy_auth, test_config, session=fake_dataverse)
