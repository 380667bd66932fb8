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
"""SynthScope Logging — structlog-backed logging behind a small port."""

from __future__ import annotations

from synthscope.core.config import Config
from synthscope.logging.port import LoggingPort
from synthscope.logging.properties import LoggingProperties
from synthscope.logging.structlog_adapter import StructlogAdapter


def configure_logging(config: Config | None = None) -> StructlogAdapter:
    """Configure structlog from *config* (packaged defaults when omitted)."""
    adapter = StructlogAdapter()
    adapter.configure(config if config is not None else Config.defaults())
    return adapter


__all__ = ["LoggingPort", "LoggingProperties", "StructlogAdapter", "configure_logging"]
