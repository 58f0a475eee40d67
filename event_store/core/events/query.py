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

"""Query construction for event searches.

Every predicate group is combined with ``bool.must``; groups are never
OR'd together.
"""

import json
from typing import Any, Dict, List, Mapping, Optional, Union

from .exceptions import InvalidFieldError, QueryError
from .value_objects import EventType, FieldName, Location

MATCH_ALL: Dict[str, Any] = {"match_all": {}}


def term_clause(field: str, value: Any) -> Dict[str, Any]:
    """Exact-match clause on a field."""
    return {"term": {field: value}}


def match_clause(field: str, value: Any) -> Dict[str, Any]:
    """Full-text clause on a field."""
    return {"match": {field: value}}


class QueryBuilder:
    """Accumulates conjunctive clauses for an event search.

    Methods return the builder so calls can be chained::

        query = (
            QueryBuilder()
            .location(Location(cluster="red", rack="r01"))
            .identity(EventType.SERVICE, name="blog")
            .build()
        )
    """

    def __init__(self) -> None:
        self._clauses: List[Dict[str, Any]] = []

    @property
    def clauses(self) -> List[Dict[str, Any]]:
        """Copy of the accumulated clauses, in insertion order."""
        return list(self._clauses)

    def location(self, location: Location) -> "QueryBuilder":
        """Add term clauses for each non-empty level, outer to inner."""
        for field, value in location.levels():
            if value:
                self._clauses.append(term_clause(field.value, value))
        return self

    def identity(
        self,
        event_type: Optional[EventType] = None,
        id: str = "",  # pylint: disable=redefined-builtin
        name: str = "",
    ) -> "QueryBuilder":
        """Add term clauses for the workload type, id and name.

        Raises:
            QueryError: If the type is not a known event type.
        """
        if event_type is not None:
            try:
                kind = EventType(event_type)
            except ValueError as exc:
                raise QueryError(f"Unknown event type: {event_type}") from exc
            self._clauses.append(term_clause(FieldName.TYPE.value, kind.value))
        if id:
            self._clauses.append(term_clause(FieldName.ID.value, id))
        if name:
            self._clauses.append(term_clause(FieldName.NAME.value, name))
        return self

    def terms(self, fields: Optional[Mapping[str, Any]]) -> "QueryBuilder":
        """Add an exact-match clause per (field, value) pair.

        Raises:
            InvalidFieldError: If a field is not a canonical event field.
        """
        for field, value in _validated(fields):
            self._clauses.append(term_clause(field, value))
        return self

    def matches(self, fields: Optional[Mapping[str, Any]]) -> "QueryBuilder":
        """Add a full-text clause per (field, value) pair.

        Raises:
            InvalidFieldError: If a field is not a canonical event field.
        """
        for field, value in _validated(fields):
            self._clauses.append(match_clause(field, value))
        return self

    def build(self) -> Dict[str, Any]:
        """Return the query body; ``match_all`` when no clause was added."""
        if not self._clauses:
            return dict(MATCH_ALL)
        return {"bool": {"must": self.clauses}}


def _validated(fields: Optional[Mapping[str, Any]]) -> List[tuple]:
    if not fields:
        return []
    pairs = []
    for field, value in fields.items():
        name = field.value if isinstance(field, FieldName) else str(field)
        if not FieldName.is_canonical(name):
            raise InvalidFieldError(name)
        pairs.append((name, value))
    return pairs


def parse_raw_query(query: Union[str, bytes, Mapping[str, Any]]) -> Dict[str, Any]:
    """Accept a backend-native query body verbatim.

    Args:
        query: JSON text or an already-decoded query object.

    Returns:
        The query as a dict.

    Raises:
        QueryError: If the text is not JSON or does not hold an object.
    """
    if isinstance(query, Mapping):
        return dict(query)
    try:
        decoded = json.loads(query)
    except (TypeError, ValueError) as exc:
        raise QueryError(f"Malformed raw query: {exc}") from exc
    if not isinstance(decoded, dict) or not decoded:
        raise QueryError("Raw query must be a non-empty JSON object")
    return decoded
