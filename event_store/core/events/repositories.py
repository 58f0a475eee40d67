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

"""Port interfaces (Protocols) for the event store.

These define the contracts that infrastructure implementations must satisfy.
Using Protocol instead of ABC allows for structural subtyping (duck typing).
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Protocol


@dataclass(frozen=True)
class RawSearchResponse:
    """Backend search response before decoding.

    Attributes:
        documents: ``_source`` bodies of the returned hits, in sort order.
        took_ms: Backend-reported query time in milliseconds.
        total_hits: Total number of matching documents.
    """

    documents: List[Dict[str, Any]] = field(default_factory=list)
    took_ms: int = 0
    total_hits: int = 0


class IndexClient(Protocol):
    """Port for the search backend, bound to a single index."""

    @property
    def index(self) -> str:
        """Name of the index this client operates on."""
        ...

    def index_exists(self) -> bool:
        """Check whether the index exists.

        Raises:
            BackendConnectionError: If the backend cannot be queried.
        """
        ...

    def create_index(self, mapping: Mapping[str, Any]) -> bool:
        """Create the index with the given mapping.

        Args:
            mapping: Mapping body (``{"properties": {...}}``).

        Returns:
            True if the backend acknowledged creation.

        Raises:
            IndexCreationFailedError: If the backend rejects the request.
        """
        ...

    def delete_index(self) -> None:
        """Delete the index.

        Raises:
            IndexDeletionFailedError: If the backend rejects the request.
        """
        ...

    def write(self, document: Mapping[str, Any]) -> None:
        """Write a single document.

        Raises:
            WriteFailedError: If the backend rejects the document.
        """
        ...

    def flush(self) -> None:
        """Make previously written documents visible to searches.

        Raises:
            WriteFailedError: If the flush fails.
        """
        ...

    def search(
        self,
        query: Mapping[str, Any],
        from_: int,
        size: int,
        sort_field: str,
        ascending: bool,
    ) -> RawSearchResponse:
        """Run a query and return the raw page of hits.

        Raises:
            QueryError: If the backend rejects or fails the search.
        """
        ...


class DirectoryClient(Protocol):
    """Port for the hierarchical key-value directory holding the topology."""

    def list_keys(self, prefix: str, delimiter: str = "/") -> List[str]:
        """List keys directly under a prefix.

        Args:
            prefix: Key prefix to list.
            delimiter: Separator at which listing stops descending.

        Returns:
            Full key paths; an empty list when nothing is stored there.

        Raises:
            DirectoryUnavailableError: If the directory cannot be listed.
        """
        ...


class Clock(Protocol):
    """Source of insertion timestamps."""

    def now(self) -> datetime:
        """Return the current time as an aware UTC datetime."""
        ...
