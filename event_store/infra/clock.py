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

"""Infrastructure clock for event timestamps."""

import threading
from datetime import datetime, timezone
from typing import Callable, Optional

from event_store.core.events.repositories import Clock


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class UTCClock(Clock):
    """Clock returning the current wall-clock time in UTC.

    Readings never go backwards: if the system clock is stepped back, the
    previous reading is returned until wall-clock time catches up.
    """

    def __init__(self, source: Callable[[], datetime] = _utc_now) -> None:
        """Initialize the clock.

        Args:
            source: Callable returning aware UTC datetimes.
        """
        self._source = source
        self._last: Optional[datetime] = None
        self._lock = threading.Lock()

    def now(self) -> datetime:
        """Return the current time.

        Returns:
            datetime: Aware datetime in UTC, never earlier than the
                previous reading.
        """
        with self._lock:
            current = self._source()
            if self._last is not None and current < self._last:
                current = self._last
            self._last = current
            return current
