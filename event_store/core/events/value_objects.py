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

"""Value objects for the event domain.

All value objects are immutable and defined by their values, not identity.
"""

import dataclasses
import json
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Mapping

from .exceptions import InvalidPayloadError


class FieldName(str, Enum):
    """Canonical event field names.

    Used identically as document keys and as query predicate keys.
    """

    VERSION = "Version"
    CLUSTER = "Cluster"
    RACK = "Rack"
    HOST = "Host"
    COMPONENT = "Component"
    TYPE = "Type"
    ID = "Id"
    NAME = "Name"
    REF = "Ref"
    MSG = "Msg"
    CREATED = "Created"

    @classmethod
    def is_canonical(cls, field: str) -> bool:
        """Check whether a query field refers to an event field.

        Sub-fields of the payload (``Msg.<path>``) are accepted.

        Args:
            field: Field name to check.

        Returns:
            True if the field is canonical.
        """
        if field in cls._value2member_map_:
            return True
        head, sep, tail = field.partition(".")
        return head == cls.MSG.value and bool(sep) and bool(tail)


class EventType(str, Enum):
    """Workload kinds an event can be tagged with."""

    SERVICE = "Service"
    TASK = "Task"
    VOLUME = "Volume"
    NETWORK = "Network"
    ETC = "Etc"


@dataclass(frozen=True)
class Location:
    """Position in the cluster, rack, host, component hierarchy.

    Empty levels mean "unscoped".
    """

    cluster: str = ""
    rack: str = ""
    host: str = ""
    component: str = ""

    def levels(self) -> tuple:
        """Return (field, value) pairs ordered outer to inner."""
        return (
            (FieldName.CLUSTER, self.cluster),
            (FieldName.RACK, self.rack),
            (FieldName.HOST, self.host),
            (FieldName.COMPONENT, self.component),
        )

    def __str__(self) -> str:
        """Return slash-separated representation."""
        return "/".join(value for _, value in self.levels())


@dataclass(frozen=True)
class Identity:
    """Workload identity attached to an event.

    Attributes:
        type: Kind of workload.
        id: Workload instance identifier, may be empty.
        name: Workload logical name, may be empty.
        ref: Owning service of a task; empty for any other type.

    Raises:
        ValueError: If ``ref`` is set on a non-task identity.
    """

    type: EventType = EventType.ETC
    id: str = ""
    name: str = ""
    ref: str = ""

    def __post_init__(self) -> None:
        """Validate the type and ref combination."""
        if not isinstance(self.type, EventType):
            object.__setattr__(self, "type", EventType(self.type))
        if self.ref and self.type is not EventType.TASK:
            raise ValueError(
                f"Only Task identities may carry a ref, got {self.type.value}"
            )

    @classmethod
    def none(cls) -> "Identity":
        """Identity for events that are not tied to a workload."""
        return cls()

    @classmethod
    def service(cls, id: str = "", name: str = "") -> "Identity":  # pylint: disable=redefined-builtin
        """Identity of a service."""
        return cls(type=EventType.SERVICE, id=id, name=name)

    @classmethod
    def task(cls, id: str = "", name: str = "", ref: str = "") -> "Identity":  # pylint: disable=redefined-builtin
        """Identity of a task, optionally referencing its owning service."""
        return cls(type=EventType.TASK, id=id, name=name, ref=ref)


@dataclass(frozen=True)
class Payload:
    """Opaque event message.

    The index maps ``Msg`` as an object, so the payload must be a JSON
    object. Mappings are stored as-is, JSON text holding an object is
    decoded, and dataclass instances are converted with ``asdict``.

    Attributes:
        value: Read-only view of the payload object.

    Raises:
        InvalidPayloadError: If the value cannot be represented as a JSON
            object. Arrays are rejected even when they hold objects.
    """

    value: Mapping[str, Any]

    ENCODING: ClassVar[str] = "utf-8"

    def __post_init__(self) -> None:
        """Normalize the payload into a read-only mapping."""
        object.__setattr__(self, "value", MappingProxyType(self._coerce(self.value)))

    @classmethod
    def _coerce(cls, value: Any) -> dict:
        if isinstance(value, Payload):
            return dict(value.value)
        if isinstance(value, Mapping):
            return dict(value)
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            return dataclasses.asdict(value)
        if isinstance(value, (bytes, bytearray)):
            try:
                value = value.decode(cls.ENCODING)
            except UnicodeDecodeError as exc:
                raise InvalidPayloadError(f"bytes are not {cls.ENCODING}: {exc}") from exc
        if isinstance(value, str):
            try:
                decoded = json.loads(value)
            except json.JSONDecodeError as exc:
                raise InvalidPayloadError(f"text is not valid JSON: {exc}") from exc
            if not isinstance(decoded, dict):
                raise InvalidPayloadError(
                    f"JSON must be an object, got {type(decoded).__name__}"
                )
            return decoded
        raise InvalidPayloadError(f"unsupported type {type(value).__name__}")

    def to_dict(self) -> dict:
        """Return a mutable copy suitable for serialization."""
        return dict(self.value)
