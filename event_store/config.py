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

"""Immutable event store configuration.

Endpoints are never defaulted: every environment that sessions may bind
to has to be configured explicitly, either in code, in a YAML file, or
through ``EVENT_STORE_ENDPOINT_<ENV>`` variables.
"""

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from event_store.core.events.exceptions import ConfigurationError
from event_store.core.events.mapping import INDEX_NAME, SCHEMA_VERSION
from event_store.core.events.services import (
    DEFAULT_CLUSTER_ENVIRONMENTS,
    DEFAULT_DIRECTORY_ROOT,
    ENV_DEFAULT,
    EnvironmentResolver,
)

logger = logging.getLogger(__name__)

ENDPOINT_ENV_PREFIX = "EVENT_STORE_ENDPOINT_"
CONFIG_PATH_ENV = "EVENT_STORE_CONFIG"
DIRECTORY_ADDRESS_ENV = "EVENT_STORE_DIRECTORY_ADDRESS"
INDEX_ENV = "EVENT_STORE_INDEX"

DEFAULT_DIRECTORY_ADDRESS = "http://127.0.0.1:8500"
DEFAULT_PAGE_SIZE = 100


@dataclass(frozen=True)
class EventStoreConfig:
    """Configuration shared by every session built from it.

    Attributes:
        endpoints: Environment tag to backend URL.
        cluster_environments: Cluster name to environment tag overrides.
        default_environment: Environment for clusters matching no rule.
        index_name: Name of the single logical index.
        schema_version: Version stamped on every inserted event.
        page_size: Default number of hits per search.
        directory_address: Base URL of the topology directory.
        directory_root: Key prefix holding cluster entries.
        directory_retry_backoff: Seconds before retrying a rack listing.
    """

    endpoints: Mapping[str, str] = field(default_factory=dict)
    cluster_environments: Mapping[str, str] = field(
        default_factory=lambda: dict(DEFAULT_CLUSTER_ENVIRONMENTS)
    )
    default_environment: str = ENV_DEFAULT
    index_name: str = INDEX_NAME
    schema_version: str = SCHEMA_VERSION
    page_size: int = DEFAULT_PAGE_SIZE
    directory_address: str = DEFAULT_DIRECTORY_ADDRESS
    directory_root: str = DEFAULT_DIRECTORY_ROOT
    directory_retry_backoff: float = 1.0

    def __post_init__(self) -> None:
        """Freeze the tables and validate scalar settings."""
        object.__setattr__(self, "endpoints", MappingProxyType(dict(self.endpoints)))
        object.__setattr__(
            self,
            "cluster_environments",
            MappingProxyType(dict(self.cluster_environments)),
        )
        if not self.index_name:
            raise ConfigurationError("index_name cannot be empty")
        if self.page_size <= 0:
            raise ConfigurationError(
                f"page_size must be positive, got {self.page_size}"
            )
        if self.directory_retry_backoff < 0:
            raise ConfigurationError(
                "directory_retry_backoff cannot be negative, "
                f"got {self.directory_retry_backoff}"
            )

    def resolver(self) -> EnvironmentResolver:
        """Build the environment resolver for this configuration."""
        return EnvironmentResolver(self.cluster_environments, self.default_environment)

    def endpoint_for(self, environment: str) -> str:
        """Return the backend URL of an environment.

        Raises:
            ConfigurationError: If the environment is empty, unknown, or
                mapped to an empty URL.
        """
        if not environment:
            raise ConfigurationError("Environment should not be empty")
        if environment not in self.endpoints:
            raise ConfigurationError(
                f"Could not recognize environment: {environment}",
                environment=environment,
            )
        address = self.endpoints[environment]
        if not address:
            raise ConfigurationError(
                f"Empty endpoint configured for environment: {environment}",
                environment=environment,
            )
        return address

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "EventStoreConfig":
        """Build a configuration from a plain mapping.

        Unknown keys are rejected so typos do not silently fall back to
        defaults.

        Raises:
            ConfigurationError: If keys or values are invalid.
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Configuration must be a mapping, got {type(data).__name__}"
            )
        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {unknown}")

        kwargs: Dict[str, Any] = dict(data)
        for table in ("endpoints", "cluster_environments"):
            if table in kwargs and not isinstance(kwargs[table], Mapping):
                raise ConfigurationError(f"{table} must be a mapping")
            if table in kwargs:
                kwargs[table] = {str(k): str(v) for k, v in kwargs[table].items()}
        try:
            return cls(**kwargs)
        except TypeError as exc:
            raise ConfigurationError(f"Invalid configuration: {exc}") from exc

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "EventStoreConfig":
        """Load a configuration from a YAML file.

        Raises:
            ConfigurationError: If the file is unreadable or malformed.
        """
        try:
            with open(path, "r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle)
        except OSError as exc:
            logger.error("Failed to read config file %s", path)
            raise ConfigurationError(f"Could not read config file {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            logger.error("Failed to parse config file %s", path)
            raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc
        return cls.from_mapping(data or {})

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EventStoreConfig":
        """Build a configuration from environment variables.

        ``EVENT_STORE_CONFIG`` names an optional YAML base file; endpoint,
        directory and index variables override it.
        """
        environ = os.environ if environ is None else environ

        config_path = environ.get(CONFIG_PATH_ENV)
        config = cls.from_yaml(config_path) if config_path else cls()

        endpoints = dict(config.endpoints)
        for key, value in environ.items():
            if key.startswith(ENDPOINT_ENV_PREFIX) and len(key) > len(ENDPOINT_ENV_PREFIX):
                endpoints[key[len(ENDPOINT_ENV_PREFIX):].lower()] = value

        overrides: Dict[str, Any] = {"endpoints": endpoints}
        if environ.get(DIRECTORY_ADDRESS_ENV):
            overrides["directory_address"] = environ[DIRECTORY_ADDRESS_ENV]
        if environ.get(INDEX_ENV):
            overrides["index_name"] = environ[INDEX_ENV]
        return replace(config, **overrides)
