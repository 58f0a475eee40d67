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

"""Store session: the caller-facing façade of the event store."""

import logging
import socket
from typing import Any, Callable, Mapping, Optional, Tuple, Union

from event_store.config import EventStoreConfig
from event_store.core.events.entities import Event
from event_store.core.events.exceptions import ConfigurationError
from event_store.core.events.query import QueryBuilder, parse_raw_query
from event_store.core.events.repositories import Clock, DirectoryClient, IndexClient
from event_store.core.events.services import TopologyLocator
from event_store.core.events.value_objects import EventType, Identity, Location, Payload
from event_store.infra.clock import UTCClock
from event_store.infra.consul_directory import ConsulDirectoryClient
from event_store.infra.elasticsearch_client import ElasticsearchIndexClient
from event_store.orchestrator.events.commands import InsertEventCommand
from event_store.orchestrator.events.dtos import SearchResult
from event_store.orchestrator.events.use_cases import (
    IndexLifecycleManager,
    InsertEventUseCase,
    SearchEventsUseCase,
)

logger = logging.getLogger(__name__)


class StoreSession:
    """Location context plus a backend handle.

    The location context is mutable and not synchronized. Concurrent
    inserts with different contexts need separate sessions; ``fork``
    creates one that shares the same index client.
    """

    def __init__(
        self,
        index_client: IndexClient,
        config: Optional[EventStoreConfig] = None,
        clock: Optional[Clock] = None,
        location: Optional[Location] = None,
    ) -> None:
        """Initialize the session.

        Args:
            index_client: Index client, possibly shared with other sessions.
            config: Store configuration; defaults are used when omitted.
            clock: Timestamp source; UTC wall clock when omitted.
            location: Initial location context; unscoped when omitted.
        """
        self._index_client = index_client
        self._config = config or EventStoreConfig()
        self._clock = clock or UTCClock()
        self._location = location or Location()

        self._lifecycle = IndexLifecycleManager(index_client)
        self._inserter = InsertEventUseCase(
            index_client, self._clock, self._config.schema_version
        )
        self._searcher = SearchEventsUseCase(index_client)

    @property
    def location(self) -> Location:
        """Current location context stamped on inserts."""
        return self._location

    @property
    def config(self) -> EventStoreConfig:
        return self._config

    @property
    def index_client(self) -> IndexClient:
        return self._index_client

    def update_location(
        self,
        cluster: str = "",
        rack: str = "",
        host: str = "",
        component: str = "",
    ) -> None:
        """Replace the location context for subsequent inserts."""
        self._location = Location(cluster, rack, host, component)

    def fork(self) -> "StoreSession":
        """Return an independent session sharing this session's backend."""
        return StoreSession(self._index_client, self._config, self._clock, self._location)

    # Index lifecycle

    def exists(self) -> bool:
        return self._lifecycle.exists()

    def ensure_ready(self) -> None:
        self._lifecycle.ensure_ready()

    def reset(self) -> None:
        self._lifecycle.reset()

    # Insertion

    def insert(self, payload: Any) -> Event:
        """Insert a payload not tied to any workload."""
        return self.insert_with_identity(payload, Identity.none())

    def insert_with_service(self, payload: Any, id: str = "", name: str = "") -> Event:  # pylint: disable=redefined-builtin
        """Insert a payload tagged with a service identity."""
        return self.insert_with_identity(payload, Identity.service(id, name))

    def insert_with_task(
        self,
        payload: Any,
        id: str = "",  # pylint: disable=redefined-builtin
        name: str = "",
        ref: str = "",
    ) -> Event:
        """Insert a payload tagged with a task identity and its owning service."""
        return self.insert_with_identity(payload, Identity.task(id, name, ref))

    def insert_with_identity(self, payload: Any, identity: Identity) -> Event:
        """Insert a payload with an explicit identity.

        Raises:
            InvalidPayloadError: If the payload is not a JSON object.
            WriteFailedError: If the write or flush fails.
        """
        command = InsertEventCommand(
            location=self._location,
            payload=Payload(payload),
            identity=identity,
        )
        return self._inserter.execute(command)

    # Search

    def search_by_query(
        self,
        query: Mapping[str, Any],
        from_: int = 0,
        size: Optional[int] = None,
    ) -> SearchResult:
        """Run a backend-native query through the shared search primitive."""
        page_size = self._config.page_size if size is None else size
        return self._searcher.execute(query, from_, page_size)

    def search_by_raw(
        self,
        query: Union[str, bytes, Mapping[str, Any]],
        from_: int = 0,
        size: Optional[int] = None,
    ) -> SearchResult:
        """Run a raw query body verbatim.

        Raises:
            QueryError: If the query text is malformed or the search fails.
        """
        return self.search_by_query(parse_raw_query(query), from_, size)

    def search_by_map(
        self,
        term: Optional[Mapping[str, Any]] = None,
        match: Optional[Mapping[str, Any]] = None,
        from_: int = 0,
        size: Optional[int] = None,
    ) -> SearchResult:
        """Search by exact-match and full-text field maps, all conjunctive.

        Raises:
            InvalidFieldError: If a map names a non-canonical field.
        """
        query = QueryBuilder().terms(term).matches(match).build()
        return self.search_by_query(query, from_, size)

    def search_location(
        self,
        location: Location,
        from_: int = 0,
        size: Optional[int] = None,
    ) -> SearchResult:
        """Search by any prefix (or subset) of the location hierarchy."""
        return self.search_by_query(QueryBuilder().location(location).build(), from_, size)

    def search_cluster(self, cluster: str) -> SearchResult:
        return self.search_location(Location(cluster=cluster))

    def search_rack(self, rack: str, cluster: str = "") -> SearchResult:
        return self.search_location(Location(cluster=cluster, rack=rack))

    def search_host(self, host: str, cluster: str = "", rack: str = "") -> SearchResult:
        return self.search_location(Location(cluster=cluster, rack=rack, host=host))

    def search_component(
        self,
        component: str,
        cluster: str = "",
        rack: str = "",
        host: str = "",
    ) -> SearchResult:
        return self.search_location(Location(cluster, rack, host, component))

    def search_identity(
        self,
        event_type: EventType,
        id: str = "",  # pylint: disable=redefined-builtin
        name: str = "",
        location: Optional[Location] = None,
        from_: int = 0,
        size: Optional[int] = None,
    ) -> SearchResult:
        """Search by workload identity, optionally narrowed by location."""
        query = (
            QueryBuilder()
            .location(location or Location())
            .identity(event_type, id, name)
            .build()
        )
        return self.search_by_query(query, from_, size)

    def search_service(self, id: str = "", name: str = "", cluster: str = "") -> SearchResult:  # pylint: disable=redefined-builtin
        return self.search_identity(EventType.SERVICE, id, name, Location(cluster=cluster))

    def search_task(self, id: str = "", name: str = "", cluster: str = "") -> SearchResult:  # pylint: disable=redefined-builtin
        return self.search_identity(EventType.TASK, id, name, Location(cluster=cluster))


def open_session_by_env(
    env: str,
    config: EventStoreConfig,
    index_client: Optional[IndexClient] = None,
) -> StoreSession:
    """Open an unscoped session against an environment's backend.

    The index is created if it does not exist yet.

    Raises:
        ConfigurationError: If the environment has no usable endpoint.
        BackendConnectionError: If the backend cannot be reached.
        IndexCreationFailedError: If the index cannot be created.
    """
    if index_client is None:
        try:
            address = config.endpoint_for(env)
        except ConfigurationError as exc:
            logger.error("open session: %s", exc)
            raise
        index_client = ElasticsearchIndexClient.connect(address, config.index_name)

    session = StoreSession(index_client, config)
    session.ensure_ready()
    return session


def open_session(
    config: EventStoreConfig,
    cluster: str = "",
    rack: str = "",
    host: str = "",
    component: str = "",
    env: str = "",
    directory: Optional[DirectoryClient] = None,
    index_client: Optional[IndexClient] = None,
    hostname: Callable[[], str] = socket.gethostname,
) -> StoreSession:
    """Open a session scoped to a location, discovering what is missing.

    The host defaults to the local hostname. When cluster or rack is
    missing both are looked up in the topology directory. When env is
    missing it is resolved from the cluster name.

    Raises:
        ConfigurationError: If the resolved environment has no usable endpoint.
        HostNotFoundError: If the host is absent from the directory.
        DirectoryUnavailableError: If the directory cannot be listed.
        BackendConnectionError: If the backend cannot be reached.
        IndexCreationFailedError: If the index cannot be created.
    """
    if not host:
        host = hostname()

    if not cluster or not rack:
        if directory is None:
            with ConsulDirectoryClient(config.directory_address) as consul:
                cluster, rack = _locate(config, consul, host)
        else:
            cluster, rack = _locate(config, directory, host)

    if not env:
        env = config.resolver().resolve(cluster)
        logger.debug("Cluster '%s' resolved to environment '%s'", cluster, env)

    session = open_session_by_env(env, config, index_client)
    session.update_location(cluster, rack, host, component)
    return session


def _locate(config: EventStoreConfig, directory: DirectoryClient, host: str) -> Tuple[str, str]:
    locator = TopologyLocator(
        directory,
        root=config.directory_root,
        retry_backoff=config.directory_retry_backoff,
    )
    return locator.locate(host)
