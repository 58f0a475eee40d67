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

"""Index name, schema version and the fixed index mapping.

Changing the mapping means changing ``INDEX_NAME`` and treating the
result as a new index; there is no migration path.
"""

import copy
from typing import Any, Dict

from .value_objects import FieldName

INDEX_NAME = "events"
SCHEMA_VERSION = "0.7"

_KEYWORD = {"type": "keyword"}

_PROPERTIES: Dict[str, Dict[str, Any]] = {
    FieldName.CLUSTER.value: _KEYWORD,
    FieldName.RACK.value: _KEYWORD,
    FieldName.HOST.value: _KEYWORD,
    FieldName.COMPONENT.value: _KEYWORD,
    FieldName.VERSION.value: _KEYWORD,
    FieldName.TYPE.value: _KEYWORD,
    FieldName.ID.value: _KEYWORD,
    FieldName.NAME.value: _KEYWORD,
    FieldName.REF.value: _KEYWORD,
    FieldName.MSG.value: {"type": "object"},
    FieldName.CREATED.value: {"type": "date"},
}


def index_mapping() -> Dict[str, Any]:
    """Return a fresh copy of the index mapping body."""
    return {"properties": copy.deepcopy(_PROPERTIES)}
