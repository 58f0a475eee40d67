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

"""Event domain module for the event store."""

from .entities import Event
from .exceptions import (
    EventStoreError,
    ConfigurationError,
    BackendConnectionError,
    IndexCreationFailedError,
    IndexDeletionFailedError,
    WriteFailedError,
    QueryError,
    InvalidFieldError,
    HostNotFoundError,
    DirectoryUnavailableError,
    InvalidPayloadError,
)
from .mapping import INDEX_NAME, SCHEMA_VERSION, index_mapping
from .query import QueryBuilder, parse_raw_query
from .repositories import Clock, DirectoryClient, IndexClient, RawSearchResponse
from .services import (
    DEFAULT_CLUSTER_ENVIRONMENTS,
    ENV_DEFAULT,
    ENV_DEV,
    ENV_EXTERNAL,
    ENV_REAL,
    ENV_TEST,
    EnvironmentResolver,
    TopologyLocator,
)
from .value_objects import EventType, FieldName, Identity, Location, Payload

__all__ = [
    "Event",
    "EventStoreError",
    "ConfigurationError",
    "BackendConnectionError",
    "IndexCreationFailedError",
    "IndexDeletionFailedError",
    "WriteFailedError",
    "QueryError",
    "InvalidFieldError",
    "HostNotFoundError",
    "DirectoryUnavailableError",
    "InvalidPayloadError",
    "INDEX_NAME",
    "SCHEMA_VERSION",
    "index_mapping",
    "QueryBuilder",
    "parse_raw_query",
    "Clock",
    "DirectoryClient",
    "IndexClient",
    "RawSearchResponse",
    "DEFAULT_CLUSTER_ENVIRONMENTS",
    "ENV_DEFAULT",
    "ENV_DEV",
    "ENV_EXTERNAL",
    "ENV_REAL",
    "ENV_TEST",
    "EnvironmentResolver",
    "TopologyLocator",
    "EventType",
    "FieldName",
    "Identity",
    "Location",
    "Payload",
]
