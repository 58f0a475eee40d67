# Copyright 2026 Dell Inc. or its subsidiaries. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Shared pytest fixtures for event store tests.

All fixtures run against in-memory doubles; no Elasticsearch or Consul
instance is needed.
"""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add project root to Python path for imports
PROJECT_ROOT = Path(__file__).parent.parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from event_store.api.events import StoreSession  # noqa: E402
from event_store.config import EventStoreConfig  # noqa: E402
from event_store.tests.mocks.mock_directory_client import MockDirectoryClient  # noqa: E402
from event_store.tests.mocks.mock_index_client import MockIndexClient  # noqa: E402

TEST_ENDPOINTS = {
    "test": "http://es-test.example.invalid:9200",
    "dev": "http://es-dev.example.invalid:9200",
    "real": "http://es-real.example.invalid:9200",
}

TEST_TOPOLOGY = {
    "red": {"r01": ["laptop", "desktop"], "r02": ["tablet"]},
    "blue": {"r01": ["cellphone"]},
    "ppr2": {"r07": ["node-0701.ppr2"]},
}


class FakeClock:
    """Clock that advances one millisecond per reading."""

    START = datetime(2026, 1, 27, tzinfo=timezone.utc)

    def __init__(self, start: datetime = START) -> None:
        """Initialize the fake clock."""
        self._current = start

    def now(self) -> datetime:
        """Return the current fake time and advance it."""
        value = self._current
        self._current += timedelta(milliseconds=1)
        return value


@pytest.fixture
def clock():
    """Provide a deterministic, strictly increasing clock."""
    return FakeClock()


@pytest.fixture
def config():
    """Provide a configuration with endpoints for every environment."""
    return EventStoreConfig(endpoints=TEST_ENDPOINTS, directory_retry_backoff=0.0)


@pytest.fixture
def index_client():
    """Provide an in-memory index client with no index yet."""
    return MockIndexClient()


@pytest.fixture
def directory():
    """Provide an in-memory topology directory."""
    return MockDirectoryClient.from_topology(TEST_TOPOLOGY)


@pytest.fixture
def session(index_client, config, clock):  # noqa: W0621
    """Provide a ready session on an empty index.

    Args:
        index_client: Mock index client fixture.
        config: Configuration fixture.
        clock: Fake clock fixture.

    Returns:
        StoreSession with the index created.
    """
    store = StoreSession(index_client, config, clock)
    store.ensure_ready()
    return store
