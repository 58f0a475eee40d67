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

"""Search result DTO."""

from dataclasses import dataclass, field
from typing import Iterator, List

from event_store.core.events.entities import Event
from event_store.core.events.repositories import RawSearchResponse


@dataclass(frozen=True)
class SearchResult:
    """One page of decoded events.

    Attributes:
        events: Events ordered by ``Created`` ascending; empty when nothing matched.
        took_ms: Backend-reported query time in milliseconds.
        total_hits: Total number of matching documents, beyond this page too.
    """

    events: List[Event] = field(default_factory=list)
    took_ms: int = 0
    total_hits: int = 0

    def __iter__(self) -> Iterator[Event]:
        return iter(self.events)

    def __len__(self) -> int:
        return len(self.events)

    @staticmethod
    def from_response(response: RawSearchResponse, events: List[Event]) -> "SearchResult":
        """Create a result from a raw response and its decoded events.

        Args:
            response: Raw backend response the events were decoded from.
            events: Decoded events, in response order.

        Returns:
            SearchResult carrying the response's timing and hit count.
        """
        return SearchResult(
            events=events,
            took_ms=response.took_ms,
            total_hits=response.total_hits,
        )
