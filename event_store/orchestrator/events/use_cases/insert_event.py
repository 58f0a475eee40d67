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

"""InsertEvent use case implementation."""

import logging

from event_store.core.events.entities import Event
from event_store.core.events.exceptions import WriteFailedError
from event_store.core.events.repositories import Clock, IndexClient

from ..commands import InsertEventCommand

logger = logging.getLogger(__name__)


class InsertEventUseCase:
    """Use case for writing a tagged event.

    This use case stamps and persists an event with the following guarantees:
    - Version: always the configured schema version, never caller supplied
    - Timestamp: ``Created`` is taken from the clock at insertion time
    - Visibility: the index is flushed so the event is searchable on return

    Attributes:
        index_client: Index client port.
        clock: Timestamp source.
        schema_version: Version stamped on every event.
    """

    def __init__(
        self,
        index_client: IndexClient,
        clock: Clock,
        schema_version: str,
    ) -> None:
        """Initialize use case with its dependencies.

        Args:
            index_client: Index client implementation.
            clock: Clock implementation.
            schema_version: Current schema version.
        """
        self._index_client = index_client
        self._clock = clock
        self._schema_version = schema_version

    def execute(self, command: InsertEventCommand) -> Event:
        """Stamp, write and flush an event.

        Args:
            command: InsertEvent command with location, identity and payload.

        Returns:
            The event as it was written.

        Raises:
            WriteFailedError: If the write or the flush fails.
        """
        event = self._build_event(command)
        self._write(event)
        self._flush()
        return event

    def _build_event(self, command: InsertEventCommand) -> Event:
        """Build the Event from the command and the stamped fields."""
        return Event(
            version=self._schema_version,
            location=command.location,
            identity=command.identity,
            msg=command.payload,
            created=self._clock.now(),
        )

    def _write(self, event: Event) -> None:
        try:
            self._index_client.write(event.to_document())
        except WriteFailedError:
            logger.error("Failed to write event for %s", event.location)
            raise
        logger.debug("Wrote %s event for %s", event.type.value, event.location)

    def _flush(self) -> None:
        try:
            self._index_client.flush()
        except WriteFailedError:
            logger.error("Failed to flush index %s", self._index_client.index)
            raise
