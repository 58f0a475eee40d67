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

"""InsertEvent command DTO."""

from dataclasses import dataclass, field

from event_store.core.events.value_objects import Identity, Location, Payload


@dataclass(frozen=True)
class InsertEventCommand:
    """Command to record a single event.

    The schema version and creation timestamp are not part of the
    command; the use case stamps them.

    Attributes:
        location: Location context of the inserting session.
        payload: Opaque event message.
        identity: Workload identity the event is tagged with.
    """

    location: Location
    payload: Payload
    identity: Identity = field(default_factory=Identity.none)
