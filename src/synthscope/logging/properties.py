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
"""Bindable logging settings."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from synthscope.core.config import config_properties


@config_properties(prefix="synthscope.logging")
class LoggingProperties(BaseModel):
    """Settings under ``synthscope.logging``.

    ``level`` maps logger names to level names; the ``root`` entry sets the
    root logger level and every other entry overrides a single module.
    """

    format: Literal["console", "json"] = "console"
    level: dict[str, str] = Field(default_factory=lambda: {"root": "INFO"})

    @field_validator("format", mode="before")
    @classmethod
    def _lower_format(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value

    @field_validator("level", mode="before")
    @classmethod
    def _upper_levels(cls, value: object) -> object:
        if isinstance(value, dict):
            return {str(k): str(v).upper() for k, v in value.items()}
        return value

    @property
    def root_level(self) -> str:
        return self.level.get("root", "INFO")

    @property
    def module_levels(self) -> dict[str, str]:
        return {k: v for k, v in self.level.items() if k != "root"}
