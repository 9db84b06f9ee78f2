# Copyright 2026 Firefly Software Solutions Inc.
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
"""Logging port for the negotiator.

``negotiator serve`` and host applications set up log output through this
protocol.  The settings live under ``negotiator.logging``:

* ``level.root``: global level, ``INFO`` unless configured.
* ``level.<logger>``: level for one logger such as ``negotiator.catalog``
  (scans and invalidations) or ``negotiator.watch`` (directory watches).
* ``format``: ``console`` or ``json``.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from negotiator.config.properties.logging import LoggingProperties
from negotiator.core.config import Config


@runtime_checkable
class LoggingPort(Protocol):
    def configure(self, config: Config) -> None:
        """Bind the ``negotiator.logging`` section of *config* and apply it."""
        ...

    def apply(self, properties: LoggingProperties) -> None:
        """Install levels and the renderer from already bound properties."""
        ...

    def get_logger(self, name: str) -> Any: ...

    def set_level(self, name: str, level: str) -> None:
        """Override one logger's level, e.g. ``negotiator.catalog`` to ``DEBUG``."""
        ...
