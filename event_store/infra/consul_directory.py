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

"""Consul KV implementation of the DirectoryClient port."""

import logging
from typing import List, Optional

import httpx

from event_store.core.events.exceptions import DirectoryUnavailableError
from event_store.core.events.repositories import DirectoryClient

logger = logging.getLogger(__name__)


class ConsulDirectoryClient(DirectoryClient):
    """Lists keys through the Consul HTTP API (``GET /v1/kv/<prefix>?keys``)."""

    KV_PATH = "/v1/kv/"
    TOKEN_HEADER = "X-Consul-Token"

    def __init__(
        self,
        address: str = "http://127.0.0.1:8500",
        token: Optional[str] = None,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        """Initialize the directory client.

        Args:
            address: Base URL of the Consul agent.
            token: Optional ACL token.
            timeout: Request timeout in seconds.
            client: Preconfigured httpx client, mainly for tests.
        """
        headers = {self.TOKEN_HEADER: token} if token else {}
        self._client = client or httpx.Client(
            base_url=address, timeout=timeout, headers=headers
        )

    def list_keys(self, prefix: str, delimiter: str = "/") -> List[str]:
        """List the keys under a prefix, stopping at the delimiter.

        Raises:
            DirectoryUnavailableError: On transport errors or unexpected
                status codes.
        """
        try:
            response = self._client.get(
                f"{self.KV_PATH}{prefix}",
                params={"keys": "", "separator": delimiter},
            )
        except httpx.HTTPError as exc:
            logger.error("kv list '%s' failed: %s", prefix, exc)
            raise DirectoryUnavailableError(prefix, str(exc)) from exc

        # Consul answers 404 when nothing is stored under the prefix.
        if response.status_code == httpx.codes.NOT_FOUND:
            return []
        if response.status_code != httpx.codes.OK:
            logger.error("kv list '%s' returned %d", prefix, response.status_code)
            raise DirectoryUnavailableError(
                prefix, f"unexpected status {response.status_code}"
            )

        try:
            keys = response.json()
        except ValueError as exc:
            raise DirectoryUnavailableError(prefix, f"invalid response body: {exc}") from exc
        if not isinstance(keys, list):
            raise DirectoryUnavailableError(prefix, "response body is not a key list")
        return [str(key) for key in keys]

    def close(self) -> None:
        """Release the underlying HTTP connections."""
        self._client.close()

    def __enter__(self) -> "ConsulDirectoryClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
