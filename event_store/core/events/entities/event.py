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

"""Event entity."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Mapping

from ..value_objects import EventType, FieldName, Identity, Location, Payload


@dataclass(frozen=True)
class Event:
    """Immutable event record as stored in the index.

    Attributes:
        version: Schema version the event was written with.
        location: Cluster, rack, host and component the event belongs to.
        identity: Workload type, id, name and ref.
        msg: Opaque payload.
        created: Insertion timestamp, the canonical sort key.
    """

    version: str
    location: Location
    identity: Identity
    msg: Payload
    created: datetime

    @property
    def cluster(self) -> str:
        return self.location.cluster

    @property
    def rack(self) -> str:
        return self.location.rack

    @property
    def host(self) -> str:
        return self.location.host

    @property
    def component(self) -> str:
        return self.location.component

    @property
    def type(self) -> EventType:
        return self.identity.type

    @property
    def id(self) -> str:
        return self.identity.id

    @property
    def name(self) -> str:
        return self.identity.name

    @property
    def ref(self) -> str:
        return self.identity.ref

    def to_document(self) -> Dict[str, Any]:
        """Encode the event as an index document keyed by canonical fields."""
        return {
            FieldName.VERSION.value: self.version,
            FieldName.CLUSTER.value: self.location.cluster,
            FieldName.RACK.value: self.location.rack,
            FieldName.HOST.value: self.location.host,
            FieldName.COMPONENT.value: self.location.component,
            FieldName.TYPE.value: self.identity.type.value,
            FieldName.ID.value: self.identity.id,
            FieldName.NAME.value: self.identity.name,
            FieldName.REF.value: self.identity.ref,
            FieldName.MSG.value: self.msg.to_dict(),
            FieldName.CREATED.value: self.created.isoformat(),
        }

    @classmethod
    def from_document(cls, source: Mapping[str, Any]) -> "Event":
        """Decode an index document into an Event.

        Missing string fields decode to empty strings and a missing
        payload decodes to an empty object.

        Args:
            source: The ``_source`` of a search hit.

        Returns:
            The decoded Event.

        Raises:
            ValueError: If ``Type``, ``Msg`` or ``Created`` cannot be decoded.
        """
        def text(field: FieldName) -> str:
            value = source.get(field.value)
            return "" if value is None else str(value)

        location = Location(
            cluster=text(FieldName.CLUSTER),
            rack=text(FieldName.RACK),
            host=text(FieldName.HOST),
            component=text(FieldName.COMPONENT),
        )
        identity = Identity(
            type=EventType(source.get(FieldName.TYPE.value) or EventType.ETC.value),
            id=text(FieldName.ID),
            name=text(FieldName.NAME),
            ref=text(FieldName.REF),
        )
        msg = source.get(FieldName.MSG.value)
        return cls(
            version=text(FieldName.VERSION),
            location=location,
            identity=identity,
            msg=Payload({} if msg is None else msg),
            created=_parse_timestamp(source.get(FieldName.CREATED.value)),
        )


def _parse_timestamp(value: Any) -> datetime:
    """Parse a stored ``Created`` value into an aware UTC datetime."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)):
        parsed = datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
    elif isinstance(value, str) and value:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    else:
        raise ValueError(f"Invalid Created timestamp: {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
