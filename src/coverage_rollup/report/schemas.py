# Copyright 2026 Pennyworth Technologies, Inc.
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

"""Pydantic schemas for analysis report files."""

from pydantic import BaseModel
from typing import Dict, List, Optional

from coverage_rollup.component.model import ComponentType


class ComponentSchema(BaseModel):
    key: str
    name: Optional[str] = None
    type: ComponentType = ComponentType.FILE
    unit_test: Optional[bool] = None
    language: Optional[str] = None
    measures: Dict[str, int] = {}
    children: List["ComponentSchema"] = []


class ReportSchema(BaseModel):
    root: ComponentSchema
    analysis_date: Optional[str] = None


ComponentSchema.model_rebuild()
