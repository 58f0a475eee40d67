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

"""Unit tests for IndexLifecycleManager."""

import pytest

from event_store.core.events.exceptions import (
    BackendConnectionError,
    IndexCreationFailedError,
    IndexDeletionFailedError,
)
from event_store.core.events.mapping import index_mapping
from event_store.orchestrator.events.use_cases import IndexLifecycleManager


class TestEnsureReady:
    """Tests for ensure_ready."""

    def test_creates_missing_index(self, index_client):
        """An absent index is created with the canonical mapping."""
        manager = IndexLifecycleManager(index_client)

        manager.ensure_ready()

        assert manager.exists()
        assert index_client.mapping == index_mapping()

    def test_idempotent(self, index_client):
        """Calling twice creates exactly one index."""
        manager = IndexLifecycleManager(index_client)

        manager.ensure_ready()
        manager.ensure_ready()

        assert index_client.create_calls == 1
        assert manager.exists()

    def test_not_acknowledged(self, index_client):
        """Unacknowledged creation raises IndexCreationFailedError."""
        index_client.acknowledge_create = False

        with pytest.raises(IndexCreationFailedError) as excinfo:
            IndexLifecycleManager(index_client).ensure_ready()

        assert excinfo.value.index == "events"

    def test_creation_error(self, index_client):
        """Backend creation errors propagate."""
        index_client.failing.add("create")

        with pytest.raises(IndexCreationFailedError):
            IndexLifecycleManager(index_client).ensure_ready()

    def test_existence_check_error(self, index_client):
        """Failing existence checks surface as connection errors."""
        index_client.failing.add("exists")

        with pytest.raises(BackendConnectionError):
            IndexLifecycleManager(index_client).ensure_ready()
        assert index_client.create_calls == 0


class TestReset:
    """Tests for reset."""

    def test_reset_discards_documents(self, index_client):
        """Reset leaves an empty index with the canonical mapping."""
        manager = IndexLifecycleManager(index_client)
        manager.ensure_ready()
        index_client.write({"Cluster": "red"})
        index_client.flush()

        manager.reset()

        assert manager.exists()
        assert index_client.documents == []
        assert index_client.mapping == index_mapping()

    def test_deletion_failure(self, index_client):
        """Deletion failures stop the reset before recreating."""
        manager = IndexLifecycleManager(index_client)
        manager.ensure_ready()
        index_client.failing.add("delete")

        with pytest.raises(IndexDeletionFailedError):
            manager.reset()
        assert index_client.create_calls == 1

    def test_recreation_failure_leaves_index_absent(self, index_client):
        """Reset is not atomic: a failed recreate leaves no index."""
        manager = IndexLifecycleManager(index_client)
        manager.ensure_ready()
        index_client.acknowledge_create = False

        with pytest.raises(IndexCreationFailedError):
            manager.reset()
        assert not manager.exists()

        index_client.acknowledge_create = True
        manager.ensure_ready()
        assert manager.exists()
