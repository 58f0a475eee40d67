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

"""Elasticsearch implementation of the IndexClient port.

Library exceptions never leave this module; each call translates them
into the matching event store error.
"""

import logging
from typing import Any, Mapping, Optional

from elasticsearch import ApiError, Elasticsearch, TransportError

from event_store.core.events.exceptions import (
    BackendConnectionError,
    IndexCreationFailedError,
    IndexDeletionFailedError,
    QueryError,
    WriteFailedError,
)
from event_store.core.events.repositories import IndexClient, RawSearchResponse

logger = logging.getLogger(__name__)

_BACKEND_ERRORS = (ApiError, TransportError)


class ElasticsearchIndexClient(IndexClient):
    """IndexClient bound to one index of an Elasticsearch cluster.

    The underlying ``Elasticsearch`` client is thread safe and may be
    shared by any number of sessions.
    """

    def __init__(self, client: Elasticsearch, index: str, address: str = "") -> None:
        """Initialize the adapter.

        Args:
            client: Elasticsearch client to issue requests with.
            index: Index name every call operates on.
            address: Endpoint the client points at, for error messages.
        """
        self._client = client
        self._index = index
        self._address = address

    @classmethod
    def connect(
        cls,
        address: str,
        index: str,
        client: Optional[Elasticsearch] = None,
    ) -> "ElasticsearchIndexClient":
        """Build an adapter for an endpoint URL.

        Args:
            address: Backend endpoint URL.
            index: Index name.
            client: Existing client to reuse instead of creating one.

        Raises:
            BackendConnectionError: If the client cannot be constructed.
        """
        if client is None:
            try:
                client = Elasticsearch(address)
            except (ValueError, TypeError) as exc:
                logger.error("Failed to create Elasticsearch client for %s", address)
                raise BackendConnectionError(address, str(exc)) from exc
        return cls(client, index, address)

    @property
    def index(self) -> str:
        return self._index

    @property
    def client(self) -> Elasticsearch:
        """The wrapped Elasticsearch client."""
        return self._client

    def index_exists(self) -> bool:
        try:
            return bool(self._client.indices.exists(index=self._index))
        except _BACKEND_ERRORS as exc:
            logger.error("Index existence check failed for %s: %s", self._index, exc)
            raise BackendConnectionError(self._address, str(exc)) from exc

    def create_index(self, mapping: Mapping[str, Any]) -> bool:
        try:
            response = self._client.indices.create(
                index=self._index,
                mappings=dict(mapping),
            )
        except _BACKEND_ERRORS as exc:
            logger.error("Index creation failed for %s: %s", self._index, exc)
            raise IndexCreationFailedError(self._index, str(exc)) from exc
        return bool(response.get("acknowledged", False))

    def delete_index(self) -> None:
        try:
            response = self._client.indices.delete(index=self._index)
        except _BACKEND_ERRORS as exc:
            logger.error("Index deletion failed for %s: %s", self._index, exc)
            raise IndexDeletionFailedError(self._index, str(exc)) from exc
        logger.debug("Delete index %s: %s", self._index, response)

    def write(self, document: Mapping[str, Any]) -> None:
        try:
            response = self._client.index(index=self._index, document=dict(document))
        except _BACKEND_ERRORS as exc:
            raise WriteFailedError(WriteFailedError.WRITE, str(exc)) from exc
        logger.debug("Indexed document %s", response.get("_id"))

    def flush(self) -> None:
        """Refresh the bound index; written documents are not searchable before."""
        try:
            self._client.indices.refresh(index=self._index)
        except _BACKEND_ERRORS as exc:
            raise WriteFailedError(WriteFailedError.FLUSH, str(exc)) from exc

    def search(
        self,
        query: Mapping[str, Any],
        from_: int,
        size: int,
        sort_field: str,
        ascending: bool,
    ) -> RawSearchResponse:
        order = "asc" if ascending else "desc"
        try:
            response = self._client.search(
                index=self._index,
                query=dict(query),
                from_=from_,
                size=size,
                sort=[{sort_field: {"order": order}}],
            )
        except _BACKEND_ERRORS as exc:
            logger.error("Search on %s failed: %s", self._index, exc)
            raise QueryError(f"Search on {self._index} failed: {exc}") from exc

        hits = response.get("hits", {})
        total = hits.get("total", 0)
        if isinstance(total, Mapping):
            total = total.get("value", 0)
        return RawSearchResponse(
            documents=[hit.get("_source", {}) for hit in hits.get("hits", [])],
            took_ms=int(response.get("took", 0)),
            total_hits=int(total),
        )
