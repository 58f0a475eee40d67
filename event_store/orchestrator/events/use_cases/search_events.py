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

"""SearchEvents use case implementation."""

import logging
from typing import Any, List, Mapping

from event_store.core.events.entities import Event
from event_store.core.events.exceptions import QueryError
from event_store.core.events.repositories import IndexClient, RawSearchResponse
from event_store.core.events.value_objects import FieldName

from ..dtos import SearchResult

logger = logging.getLogger(__name__)


class SearchEventsUseCase:
    """Shared search primitive behind every event query.

    Pages with ``from``/``size``, sorts ascending by ``Created`` and decodes
    each hit into an Event.
    """

    SORT_FIELD = FieldName.CREATED.value

    def __init__(self, index_client: IndexClient) -> None:
        self._index_client = index_client

    def execute(self, query: Mapping[str, Any], from_: int, size: int) -> SearchResult:
        """Run a query and decode the page of hits.

        Args:
            query: Backend-native query body.
            from_: Offset of the first hit.
            size: Maximum number of hits.

        Returns:
            SearchResult; its event list is empty when nothing matched.

        Raises:
            QueryError: If paging is invalid, the search fails, or a hit
                cannot be decoded.
        """
        if from_ < 0 or size < 0:
            raise QueryError(f"Invalid page: from={from_}, size={size}")

        response = self._index_client.search(
            query,
            from_=from_,
            size=size,
            sort_field=self.SORT_FIELD,
            ascending=True,
        )
        logger.debug("Query took %d milliseconds", response.took_ms)
        logger.debug("Query result hits: %d", response.total_hits)

        return SearchResult.from_response(response, self._decode(response))

    def _decode(self, response: RawSearchResponse) -> List[Event]:
        events = []
        for document in response.documents:
            try:
                events.append(Event.from_document(document))
            except (ValueError, TypeError) as exc:
                logger.error("Could not decode search hit: %s", exc)
                raise QueryError(f"Could not decode search hit: {exc}") from exc
        return events
