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

"""Index lifecycle use case implementation."""

import logging

from event_store.core.events.exceptions import IndexCreationFailedError
from event_store.core.events.mapping import index_mapping
from event_store.core.events.repositories import IndexClient

logger = logging.getLogger(__name__)


class IndexLifecycleManager:
    """Keeps the event index present with the canonical mapping.

    ``reset`` deletes then recreates and is not atomic: if recreation
    fails the index stays absent until ``reset`` or ``ensure_ready`` is
    called again.
    """

    def __init__(self, index_client: IndexClient) -> None:
        self._index_client = index_client

    def exists(self) -> bool:
        """Check whether the index exists.

        Raises:
            BackendConnectionError: If the backend cannot be queried.
        """
        return self._index_client.index_exists()

    def ensure_ready(self) -> None:
        """Create the index if it is absent. Safe to call repeatedly.

        Raises:
            BackendConnectionError: If existence cannot be checked.
            IndexCreationFailedError: If creation fails or is not acknowledged.
        """
        if self.exists():
            logger.debug("Index %s already exists", self._index_client.index)
            return
        self._create()

    def reset(self) -> None:
        """Delete and recreate the index, discarding every event.

        Raises:
            IndexDeletionFailedError: If deletion fails.
            IndexCreationFailedError: If recreation fails.
        """
        self._index_client.delete_index()
        logger.info("Deleted index %s", self._index_client.index)
        self._create()

    def _create(self) -> None:
        index = self._index_client.index
        acknowledged = self._index_client.create_index(index_mapping())
        if not acknowledged:
            logger.error("Creation of index %s not acknowledged", index)
            raise IndexCreationFailedError(index, "creation not acknowledged")
        logger.info("Created index %s", index)
