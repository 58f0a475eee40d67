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

"""Domain exceptions for the event store."""

from typing import Optional


class EventStoreError(Exception):
    """Base exception for all event store errors."""

    def __init__(self, message: str) -> None:
        """Initialize event store error.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
        self.message = message


class ConfigurationError(EventStoreError):
    """Environment or endpoint configuration is missing or invalid."""

    def __init__(self, message: str, environment: Optional[str] = None) -> None:
        """Initialize configuration error.

        Args:
            message: Human-readable error description.
            environment: The environment tag involved, if any.
        """
        super().__init__(message)
        self.environment = environment


class BackendConnectionError(EventStoreError):
    """The search backend client could not be constructed or reached."""

    def __init__(self, address: str, reason: str) -> None:
        """Initialize backend connection error.

        Args:
            address: Backend endpoint that was being used.
            reason: Underlying failure description.
        """
        super().__init__(f"Could not connect to backend {address}: {reason}")
        self.address = address
        self.reason = reason


class IndexCreationFailedError(EventStoreError):
    """Index creation errored or was not acknowledged."""

    def __init__(self, index: str, reason: str) -> None:
        """Initialize index creation error.

        Args:
            index: Name of the index being created.
            reason: Underlying failure description.
        """
        super().__init__(f"Failed to create index {index}: {reason}")
        self.index = index
        self.reason = reason


class IndexDeletionFailedError(EventStoreError):
    """Index deletion errored."""

    def __init__(self, index: str, reason: str) -> None:
        """Initialize index deletion error.

        Args:
            index: Name of the index being deleted.
            reason: Underlying failure description.
        """
        super().__init__(f"Failed to delete index {index}: {reason}")
        self.index = index
        self.reason = reason


class WriteFailedError(EventStoreError):
    """Writing or flushing an event failed.

    ``stage`` is ``"write"`` or ``"flush"``. Both surface as the same error
    type since an unflushed document is not visible to searches.
    """

    WRITE = "write"
    FLUSH = "flush"

    def __init__(self, stage: str, reason: str) -> None:
        """Initialize write failure.

        Args:
            stage: Pipeline step that failed (write or flush).
            reason: Underlying failure description.
        """
        super().__init__(f"Event {stage} failed: {reason}")
        self.stage = stage
        self.reason = reason


class QueryError(EventStoreError):
    """A search failed or a query was malformed."""


class InvalidFieldError(QueryError):
    """A query map named a field outside the canonical event fields."""

    def __init__(self, field: str) -> None:
        """Initialize invalid field error.

        Args:
            field: The rejected field name.
        """
        super().__init__(f"Unknown event field: {field}")
        self.field = field


class HostNotFoundError(EventStoreError):
    """No directory entry matched the hostname."""

    def __init__(self, hostname: str) -> None:
        """Initialize host not found error.

        Args:
            hostname: The hostname that was searched for.
        """
        super().__init__(f"Could not find host: {hostname}")
        self.hostname = hostname


class DirectoryUnavailableError(EventStoreError):
    """The topology directory could not be listed."""

    def __init__(self, prefix: str, reason: str) -> None:
        """Initialize directory error.

        Args:
            prefix: Key prefix that was being listed.
            reason: Underlying failure description.
        """
        super().__init__(f"Could not list directory keys under {prefix}: {reason}")
        self.prefix = prefix
        self.reason = reason


class InvalidPayloadError(EventStoreError, ValueError):
    """A payload could not be represented as a JSON object."""

    def __init__(self, reason: str) -> None:
        """Initialize invalid payload error.

        Args:
            reason: Why the payload was rejected.
        """
        super().__init__(f"Invalid event payload: {reason}")
        self.reason = reason
