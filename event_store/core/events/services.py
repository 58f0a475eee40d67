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

"""Domain services: environment resolution and topology lookup."""

import logging
import re
import time
from types import MappingProxyType
from typing import Callable, List, Mapping, Optional, Tuple

from .exceptions import DirectoryUnavailableError, HostNotFoundError
from .repositories import DirectoryClient

logger = logging.getLogger(__name__)

ENV_TEST = "test"
ENV_DEV = "dev"
ENV_REAL = "real"
ENV_EXTERNAL = ENV_REAL
ENV_DEFAULT = ENV_TEST

DEFAULT_CLUSTER_ENVIRONMENTS: Mapping[str, str] = MappingProxyType({
    "build": ENV_DEV,
    "dpd1": ENV_TEST,
    "dpd2": ENV_TEST,
    "edu": ENV_TEST,
    "exp": ENV_TEST,
    "ksd1": ENV_TEST,
    "pcd1": ENV_DEV,
    "pcr1": ENV_REAL,
    "play": ENV_TEST,
    "ppr1": ENV_REAL,
    "ppr2": ENV_REAL,
    "ppr3": ENV_REAL,
    "test": ENV_DEV,
    "pxr1": ENV_EXTERNAL,
    "pxr2": ENV_EXTERNAL,
})

DEFAULT_DIRECTORY_ROOT = "shipdock/clusters/"


class EnvironmentResolver:
    """Maps a cluster name to the environment tag of its backend.

    An explicit table entry always wins. Otherwise names shaped like
    three lowercase letters and a digit are classified by their third
    letter (``r`` real, ``d`` dev, anything else test); every other name
    resolves to the default environment.
    """

    CLUSTER_PATTERN = re.compile(r"^[a-z]{3}[0-9]$")

    def __init__(
        self,
        cluster_environments: Optional[Mapping[str, str]] = None,
        default_environment: str = ENV_DEFAULT,
    ) -> None:
        if cluster_environments is None:
            cluster_environments = DEFAULT_CLUSTER_ENVIRONMENTS
        self._table = MappingProxyType(dict(cluster_environments))
        self._default = default_environment

    def resolve(self, cluster: str) -> str:
        """Return the environment tag for a cluster name. Never fails."""
        env = self._table.get(cluster)
        if env:
            return env

        if not self.CLUSTER_PATTERN.match(cluster or ""):
            return self._default

        if cluster[2] == "r":
            return ENV_REAL
        if cluster[2] == "d":
            return ENV_DEV
        return ENV_TEST


class TopologyLocator:
    """Finds the cluster and rack that own a host in the directory.

    The directory is laid out as
    ``<root><cluster>/racks/<rack>/hosts/<host>``. Lookup is a full scan,
    which is fine for the directory's size and the once-per-session call.
    """

    def __init__(
        self,
        directory: DirectoryClient,
        root: str = DEFAULT_DIRECTORY_ROOT,
        retry_backoff: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the locator.

        Args:
            directory: Directory port to list keys from.
            root: Prefix under which cluster keys live.
            retry_backoff: Seconds to wait before retrying a rack listing.
            sleep: Sleep function, injectable for tests.
        """
        self._directory = directory
        self._root = root if root.endswith("/") else root + "/"
        self._retry_backoff = retry_backoff
        self._sleep = sleep

    def locate(self, hostname: str) -> Tuple[str, str]:
        """Return the ``(cluster, rack)`` owning a host.

        A host key matches when it contains ``hostname`` as a substring.

        Raises:
            DirectoryUnavailableError: If the cluster keys cannot be listed.
            HostNotFoundError: If no rack lists a matching host.
        """
        clusters = self._directory.list_keys(self._root, "/")

        for cluster_key in clusters:
            racks = self._list_racks(cluster_key)
            for rack_key in racks:
                if self._rack_has_host(rack_key, hostname):
                    cluster, rack = _last_segment(cluster_key), _last_segment(rack_key)
                    logger.debug("Found host '%s' in %s/%s", hostname, cluster, rack)
                    return cluster, rack

        logger.error("Could not find host '%s' under %s", hostname, self._root)
        raise HostNotFoundError(hostname)

    def describe(self, hostname: str) -> str:
        """Locate a host and log where it lives.

        Returns:
            ``"<cluster>/<rack>"`` for the host.
        """
        cluster, rack = self.locate(hostname)
        logger.info("Host '%s': '%s' cluster, '%s' rack", hostname, cluster, rack)
        return f"{cluster}/{rack}"

    def _list_racks(self, cluster_key: str) -> List[str]:
        prefix = f"{cluster_key}racks/"
        try:
            return self._directory.list_keys(prefix, "/")
        except DirectoryUnavailableError as exc:
            logger.error("Listing %s failed, retrying: %s", prefix, exc)
        self._sleep(self._retry_backoff)
        try:
            return self._directory.list_keys(prefix, "/")
        except DirectoryUnavailableError as exc:
            logger.error("Listing %s failed again, skipping: %s", prefix, exc)
            return []

    def _rack_has_host(self, rack_key: str, hostname: str) -> bool:
        prefix = f"{rack_key}hosts/"
        try:
            hosts = self._directory.list_keys(prefix, "/")
        except DirectoryUnavailableError as exc:
            logger.error("Listing %s failed, skipping rack: %s", prefix, exc)
            return False
        return any(hostname in key for key in hosts)


def _last_segment(key: str) -> str:
    return key.rstrip("/").rsplit("/", 1)[-1]
