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

"""Unit tests for EnvironmentResolver and TopologyLocator."""

import pytest

from event_store.core.events.exceptions import DirectoryUnavailableError, HostNotFoundError
from event_store.core.events.services import (
    DEFAULT_CLUSTER_ENVIRONMENTS,
    ENV_DEFAULT,
    ENV_DEV,
    ENV_REAL,
    ENV_TEST,
    EnvironmentResolver,
    TopologyLocator,
)
from event_store.tests.mocks.mock_directory_client import MockDirectoryClient

ROOT = "shipdock/clusters/"


class TestEnvironmentResolver:
    """Tests for EnvironmentResolver."""

    def test_table_hit(self):
        """Explicit table entries are returned."""
        assert EnvironmentResolver().resolve("ppr2") == ENV_REAL
        assert EnvironmentResolver().resolve("build") == ENV_DEV

    def test_table_overrides_pattern(self):
        """Table entries win over naming-convention inference."""
        # pcr1 would infer real from its third letter; the table says dev.
        resolver = EnvironmentResolver({"pcr1": ENV_DEV})
        assert resolver.resolve("pcr1") == ENV_DEV

    @pytest.mark.parametrize(
        "cluster,expected",
        [
            ("zzr1", ENV_REAL),
            ("zzd1", ENV_DEV),
            ("xyz9", ENV_TEST),
            ("abc1", ENV_TEST),
        ],
    )
    def test_pattern_inference(self, cluster, expected):
        """Third letter decides the environment for pattern-shaped names."""
        assert EnvironmentResolver({}).resolve(cluster) == expected

    @pytest.mark.parametrize("cluster", ["zzz", "abcd1", "ABr1", "ab1r", "", "red"])
    def test_non_matching_falls_back_to_default(self, cluster):
        """Names not shaped like three letters plus a digit use the default."""
        assert EnvironmentResolver({}).resolve(cluster) == ENV_DEFAULT

    def test_custom_default(self):
        """The default environment is configurable."""
        assert EnvironmentResolver({}, default_environment=ENV_DEV).resolve("red") == ENV_DEV

    def test_default_table_contents(self):
        """The shipped table covers the known clusters."""
        assert DEFAULT_CLUSTER_ENVIRONMENTS["pxr1"] == ENV_REAL
        assert DEFAULT_CLUSTER_ENVIRONMENTS["test"] == ENV_DEV
        assert len(DEFAULT_CLUSTER_ENVIRONMENTS) == 15

    def test_table_is_copied(self):
        """Later changes to the source table do not leak into the resolver."""
        table = {"red": ENV_REAL}
        resolver = EnvironmentResolver(table)
        table["red"] = ENV_DEV
        assert resolver.resolve("red") == ENV_REAL


class TestTopologyLocator:
    """Tests for TopologyLocator."""

    @pytest.fixture
    def sleeps(self):
        """Record requested backoff sleeps."""
        return []

    def _locator(self, directory, sleeps):
        return TopologyLocator(directory, root=ROOT, retry_backoff=1.0, sleep=sleeps.append)

    def test_locate(self, directory, sleeps):
        """Hosts resolve to their cluster and rack."""
        locator = self._locator(directory, sleeps)
        assert locator.locate("tablet") == ("red", "r02")
        assert locator.locate("cellphone") == ("blue", "r01")
        assert sleeps == []

    def test_substring_match(self, directory, sleeps):
        """Host keys match when they contain the hostname."""
        assert self._locator(directory, sleeps).locate("node-0701") == ("ppr2", "r07")

    def test_not_found(self, directory, sleeps):
        """Exhausting every rack raises HostNotFoundError."""
        with pytest.raises(HostNotFoundError) as excinfo:
            self._locator(directory, sleeps).locate("mainframe")
        assert excinfo.value.hostname == "mainframe"

    def test_root_listing_failure_propagates(self, directory, sleeps):
        """Failure to list clusters aborts the lookup."""
        directory.fail(ROOT)
        with pytest.raises(DirectoryUnavailableError):
            self._locator(directory, sleeps).locate("tablet")

    def test_rack_listing_retried_after_backoff(self, directory, sleeps):
        """A transient rack listing failure is retried once after a backoff."""
        directory.fail(f"{ROOT}blue/racks/", times=1)
        assert self._locator(directory, sleeps).locate("cellphone") == ("blue", "r01")
        assert sleeps == [1.0]

    def test_rack_listing_skipped_after_retry(self, directory, sleeps):
        """A persistent rack listing failure skips that cluster."""
        directory.fail(f"{ROOT}blue/racks/")
        with pytest.raises(HostNotFoundError):
            self._locator(directory, sleeps).locate("cellphone")
        assert directory.calls.count(f"{ROOT}blue/racks/") == 2

    def test_host_listing_failure_abandons_rack(self, sleeps):
        """A host listing failure skips the rack without retrying."""
        directory = MockDirectoryClient.from_topology(
            {"red": {"r01": ["laptop"], "r02": ["laptop-2"]}}
        )
        directory.fail(f"{ROOT}red/racks/r01/hosts/")
        assert self._locator(directory, sleeps).locate("laptop") == ("red", "r02")
        assert directory.calls.count(f"{ROOT}red/racks/r01/hosts/") == 1
        assert sleeps == []

    def test_root_without_trailing_slash(self, directory, sleeps):
        """The root prefix is normalized to end with a slash."""
        locator = TopologyLocator(directory, root="shipdock/clusters", sleep=sleeps.append)
        assert locator.locate("desktop") == ("red", "r01")

    def test_describe(self, directory, sleeps):
        """describe returns a cluster/rack summary."""
        assert self._locator(directory, sleeps).describe("laptop") == "red/r01"
